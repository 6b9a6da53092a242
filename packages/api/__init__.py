"""HTTP helpers for SortQL."""

from .dependencies import get_sort_param

__all__ = ["get_sort_param"]
