"""FastAPI dependencies for sort query parameters."""

from typing import Annotated

from fastapi import Query

from packages.core.sort_ast.models import SortParameter


def get_sort_param(
    sort: Annotated[
        str | None,
        Query(
            description="Sort field with optional direction and case flag",
            examples=["field_1.asc", "name.desc.ci"],
        ),
    ] = None,
    sort_assoc: Annotated[
        list[str] | None,
        Query(description="Associations to join before sorting, outermost first"),
    ] = None,
) -> SortParameter | None:
    """
    Dependency building a raw sort parameter from the query string.

        ?sort=field_1.asc.ci&sort_assoc=parent&sort_assoc=parent

    becomes ``(("parent", "parent"), "field_1.asc.ci")``. Decoding is left
    to the sort hook so that custom hooks see the raw parameter.
    """
    if not sort:
        return None
    return tuple(sort_assoc or ()), sort
