"""
Sort parameter decoder for SortQL.

Turns a raw sort parameter into a SortDirective.

Encoded strings have the form ``field[.asc|.desc][.ci]``:

    "field_1.asc"      -> field_1, ASC
    "field_1.desc.ci"  -> field_1, DESC, case-insensitive
    "field_1"          -> field_1, no ordering (joins still apply)
"""

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from packages.core.sort_ast.models import SortDirection, SortDirective

logger = logging.getLogger(__name__)

_SEPARATOR = "."
_CASE_INSENSITIVE_TOKEN = "ci"
_DIRECTION_TOKENS: dict[str, SortDirection] = {
    direction.value: direction for direction in SortDirection
}


# -----------------------------
# Errors
# -----------------------------


class SortSpecError(Exception):
    """Raised when a raw sort parameter has the wrong shape."""

    pass


# -----------------------------
# Decoder
# -----------------------------


class SortSpecDecoder:
    """
    Decodes raw sort parameters.

    Unrecognized direction tokens never raise: the directive is built
    without a direction and the transformer skips the ORDER BY step.
    """

    def decode(self, raw: Any) -> SortDirective | None:
        """
        Decode a raw sort parameter.

        Args:
            raw: ``(associations, encoded)`` pair, a bare encoded string,
                or an absent marker (None, "", empty tuple/list/mapping).

        Returns:
            A SortDirective, or None when no sort was requested.

        Raises:
            SortSpecError: If the parameter is not a pair of
                (sequence of str, str) or a string.
        """
        if self._is_absent(raw):
            return None

        associations, encoded = self._split_pair(raw)
        if not encoded:
            return None

        tokens = encoded.split(_SEPARATOR)

        case_insensitive = False
        if len(tokens) > 1 and tokens[-1] == _CASE_INSENSITIVE_TOKEN:
            case_insensitive = True
            tokens = tokens[:-1]

        field, direction = self._split_direction(tokens)
        if not field:
            logger.debug("Sort parameter %r has no field name; ignoring", encoded)
            return None

        if direction is None:
            logger.debug(
                "No asc/desc token in sort parameter %r; ORDER BY will be skipped",
                encoded,
            )

        directive = SortDirective(
            associations=associations,
            field=field,
            direction=direction,
            case_insensitive=case_insensitive,
        )
        logger.debug("Decoded sort parameter %r into %r", raw, directive)
        return directive

    # -------------------------
    # Helpers
    # -------------------------

    @staticmethod
    def _is_absent(raw: Any) -> bool:
        """None, empty strings and empty containers all mean 'no sort'."""
        if raw is None:
            return True
        if isinstance(raw, (str, tuple, list, Mapping)):
            return len(raw) == 0
        return False

    @staticmethod
    def _split_pair(raw: Any) -> tuple[tuple[str, ...], str]:
        """Normalize the raw parameter to (associations, encoded)."""
        if isinstance(raw, str):
            return (), raw

        if not isinstance(raw, (tuple, list)) or len(raw) != 2:
            raise SortSpecError(
                f"Sort parameter must be a string or an (associations, field) "
                f"pair, got {raw!r}"
            )

        associations, encoded = raw

        if associations is None:
            associations = ()
        if isinstance(associations, str) or not isinstance(associations, Sequence):
            raise SortSpecError(
                f"Sort associations must be a sequence of names, got {associations!r}"
            )
        if not all(isinstance(name, str) and name for name in associations):
            raise SortSpecError(
                f"Sort associations must be non-empty strings, got {associations!r}"
            )
        if not isinstance(encoded, str):
            raise SortSpecError(f"Encoded sort field must be a string, got {encoded!r}")

        return tuple(associations), encoded

    @staticmethod
    def _split_direction(tokens: list[str]) -> tuple[str, SortDirection | None]:
        """Split trailing asc/desc off the tokens, if present."""
        if len(tokens) > 1 and tokens[-1] in _DIRECTION_TOKENS:
            return _SEPARATOR.join(tokens[:-1]), _DIRECTION_TOKENS[tokens[-1]]
        return _SEPARATOR.join(tokens), None


_default_decoder = SortSpecDecoder()


def decode_sort_param(raw: Any) -> SortDirective | None:
    """Decode a raw sort parameter with the shared decoder."""
    return _default_decoder.decode(raw)
