"""Parent model: a self-referencing entity used by list views and tests."""

from __future__ import annotations

from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from packages.db.base import Base


class Parent(Base):
    """A record that may point at another Parent."""

    __tablename__ = "parents"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    field_1: Mapped[str | None] = mapped_column(String(100))
    field_2: Mapped[int | None] = mapped_column(Integer)
    parent_id: Mapped[int | None] = mapped_column(ForeignKey("parents.id"))

    parent = relationship("Parent", remote_side=[id], back_populates="subparents")
    subparents = relationship("Parent", back_populates="parent")
    children = relationship("Child", back_populates="parent")
