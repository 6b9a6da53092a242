"""
Sort models for SortQL.

A raw sort parameter arrives as a pair of association names and an
encoded string (``"field_1.asc.ci"``). The decoder turns it into a
SortDirective, which is the ONLY structure the query transformer reads.
"""

from collections.abc import Sequence
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


# -----------------------------
# Enums
# -----------------------------


class SortDirection(str, Enum):
    """Sort direction for ORDER BY clauses."""

    ASC = "asc"
    DESC = "desc"


# Raw input: ``(["parent", "parent"], "field_1.asc")`` or just ``"field_1.asc"``
SortParameter = tuple[Sequence[str], str] | list | str


# -----------------------------
# Directive
# -----------------------------


class SortDirective(BaseModel):
    """
    Decoded form of a raw sort parameter.

    Examples:
        ([], "field_1.asc")              -> field_1 ASC
        (["parent"], "name.desc.ci")     -> lower(parent.name) DESC
        (["parent"], "name")             -> JOIN parent, no ORDER BY
    """

    model_config = ConfigDict(frozen=True)

    associations: tuple[str, ...] = Field(
        default=(),
        description="Relationship names from the base entity, outermost first",
    )
    field: str = Field(..., min_length=1)
    direction: SortDirection | None = Field(
        default=None,
        description="None when no asc/desc token was recognized",
    )
    case_insensitive: bool = False

    @field_validator("associations")
    @classmethod
    def no_empty_hops(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        if any(not name for name in v):
            raise ValueError("Association names must be non-empty")
        return v

    @property
    def has_ordering(self) -> bool:
        """Whether an ORDER BY should be emitted."""
        return self.direction is not None
