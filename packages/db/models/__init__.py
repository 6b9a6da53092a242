"""ORM model exports."""

from packages.db.models.children import Child
from packages.db.models.parents import Parent

__all__ = [
    "Child",
    "Parent",
]
