"""
SQLAlchemy Sort Transformer for SortQL.

Applies a SortDirective to a SQLAlchemy Select: one inner join per
association hop, then a single ORDER BY on the last joined entity.
"""

import logging
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.orm import aliased
from sqlalchemy.sql import Select
from sqlalchemy.sql.elements import ColumnElement

from packages.core.sort_ast.models import SortDirection, SortDirective

logger = logging.getLogger(__name__)


# -----------------------------
# Errors
# -----------------------------


class SortTransformError(Exception):
    """Raised when a query has no ORM entity to sort from."""

    pass


# -----------------------------
# Transformer
# -----------------------------


class SortTransformer:
    """
    Transforms a query according to a SortDirective.

    Association and field names are resolved as attributes of the ORM
    entities; unknown names fail inside SQLAlchemy and are not caught here.
    """

    def transform(self, query: Any, directive: SortDirective | None) -> Any:
        """
        Apply joins and ordering to a query.

        Args:
            query: A SQLAlchemy Select, or a mapped class which is promoted
                to ``select(cls)`` when a directive is given.
            directive: The decoded sort, or None for no sort.

        Returns:
            The transformed Select, or ``query`` itself if directive is None.

        Raises:
            SortTransformError: If the Select has no ORM entity.
        """
        if directive is None:
            return query

        if not isinstance(query, Select):
            query = select(query)

        # 1. Walk the association chain, one inner join per hop
        current = self._base_entity(query)
        for name in directive.associations:
            query, current = self._join_association(query, current, name)

        # 2. ORDER BY on the final entity
        if not directive.has_ordering:
            logger.debug("No sort direction for %r; skipping ORDER BY", directive.field)
            return query

        return query.order_by(self._resolve_order_by(current, directive))

    # -------------------------
    # Join Handling
    # -------------------------

    @staticmethod
    def _base_entity(query: Select) -> Any:
        """Return the first ORM entity selected by the query."""
        for description in query.column_descriptions:
            entity = description.get("entity")
            if entity is not None:
                return entity

        raise SortTransformError(
            "Cannot sort a query without an ORM entity; "
            "use select(Model) rather than select(table)"
        )

    @staticmethod
    def _join_association(query: Select, current: Any, name: str) -> tuple[Select, Any]:
        """Inner join ``current.<name>`` and return the joined alias."""
        relationship = getattr(current, name)
        target = aliased(relationship.property.mapper.class_)

        logger.debug("Joining %s.%s", current, name)
        return query.join(relationship.of_type(target)), target

    # -------------------------
    # Order By Resolution
    # -------------------------

    @staticmethod
    def _resolve_order_by(entity: Any, directive: SortDirective) -> ColumnElement:
        """Build the ORDER BY term for the directive's field on ``entity``."""
        column = getattr(entity, directive.field)
        if directive.case_insensitive:
            column = func.lower(column)

        if directive.direction == SortDirection.DESC:
            return column.desc()
        return column.asc()


_default_transformer = SortTransformer()


def apply_sort(query: Any, directive: SortDirective | None) -> Any:
    """Apply a directive with the shared transformer."""
    return _default_transformer.transform(query, directive)
