"""Pluggable sort hooks for SortQL."""

from .base import CallableSortHook, SortFunction, SortHook
from .registry import SortHookError, SortHookRegistry, get_sort_hook, run_sort
from .sort import DefaultSortHook

__all__ = [
    "CallableSortHook",
    "DefaultSortHook",
    "SortFunction",
    "SortHook",
    "SortHookError",
    "SortHookRegistry",
    "get_sort_hook",
    "run_sort",
]
