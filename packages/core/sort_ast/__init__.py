"""Sort parameter decoding and query transformation for SortQL."""

from .decoder import SortSpecDecoder, SortSpecError, decode_sort_param
from .models import SortDirection, SortDirective, SortParameter
from .transformer import SortTransformError, SortTransformer, apply_sort

__all__ = [
    "SortDirection",
    "SortDirective",
    "SortParameter",
    "SortSpecDecoder",
    "SortSpecError",
    "SortTransformError",
    "SortTransformer",
    "apply_sort",
    "decode_sort_param",
]
