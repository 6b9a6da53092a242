"""Base class for sort hooks."""

from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping
from typing import Any

from packages.core.config import get_settings

# Custom sort implementations: (query, raw sort parameter) -> query
SortFunction = Callable[[Any, Any], Any]


class SortHook(ABC):
    """
    Abstract base class for sort hooks.

    A hook receives the query and the full params mapping, picks the
    sort parameter out of it and returns a (possibly) transformed query.
    """

    name: str = ""

    def __init__(self, param_key: str | None = None):
        """
        Initialize the hook.

        Args:
            param_key: Key of the sort parameter in the params mapping.
                Uses the configured ``sort_param_key`` if not provided.
        """
        self.param_key = param_key or get_settings().sort_param_key

    def sort_param(self, params: Mapping[str, Any]) -> Any:
        """Extract the raw sort parameter from ``params``."""
        return params.get(self.param_key)

    @abstractmethod
    def run(self, query: Any, params: Mapping[str, Any]) -> Any:
        """Return ``query`` sorted according to ``params``."""
        pass


class CallableSortHook(SortHook):
    """Adapts a plain ``(query, sort_param) -> query`` function to a SortHook."""

    def __init__(self, func: SortFunction, param_key: str | None = None):
        super().__init__(param_key)
        self._func = func
        self.name = getattr(func, "__name__", repr(func))

    def run(self, query: Any, params: Mapping[str, Any]) -> Any:
        return self._func(query, self.sort_param(params))
