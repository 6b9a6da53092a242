"""Child model belonging to a Parent."""

from __future__ import annotations

from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from packages.db.base import Base


class Child(Base):
    """Represents a record owned by a single Parent."""

    __tablename__ = "children"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    parent_id: Mapped[int] = mapped_column(ForeignKey("parents.id"), nullable=False)

    parent = relationship("Parent", back_populates="children")
