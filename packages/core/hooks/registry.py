"""Sort hook registry and configured-hook resolution."""

import importlib
import logging
from collections.abc import Mapping
from typing import Any

from packages.core.config import get_settings
from packages.core.hooks.base import CallableSortHook, SortHook

logger = logging.getLogger(__name__)


# -----------------------------
# Errors
# -----------------------------


class SortHookError(Exception):
    """Raised when a configured sort hook cannot be resolved."""

    pass


# -----------------------------
# Registry
# -----------------------------


class SortHookRegistry:
    """
    Registry for sort hooks.

    Hooks are looked up by their ``name``. Names containing a colon are
    treated as ``module:attribute`` import paths instead.
    """

    _hooks: dict[str, type[SortHook]] = {}

    @classmethod
    def register(cls, hook_class: type[SortHook]) -> type[SortHook]:
        """
        Register a hook class.

        Can be used as a decorator:
            @SortHookRegistry.register
            class MySortHook(SortHook):
                name = "mine"
                ...

        Args:
            hook_class: The hook class to register.

        Returns:
            The same hook class (for decorator usage).
        """
        if not hook_class.name:
            raise SortHookError(f"{hook_class.__name__} must define a name")
        cls._hooks[hook_class.name] = hook_class
        return hook_class

    @classmethod
    def get(cls, name: str) -> SortHook:
        """
        Get a hook instance by registered name or import path.

        Args:
            name: Registered name (e.g. "default") or "module:attribute".

        Returns:
            A SortHook instance.

        Raises:
            SortHookError: If the hook cannot be found or is not usable.
        """
        if name in cls._hooks:
            return cls._hooks[name]()

        if ":" in name:
            return cls._coerce(cls._import(name), name)

        available = ", ".join(cls.list_names()) or "none"
        raise SortHookError(f"Unknown sort hook: {name}. Available: {available}")

    @classmethod
    def list_names(cls) -> list[str]:
        """List all registered hook names."""
        return sorted(cls._hooks.keys())

    @classmethod
    def clear(cls) -> None:
        """Clear all registered hooks. Useful for testing."""
        cls._hooks.clear()

    @staticmethod
    def _import(path: str) -> Any:
        """Import ``module:attribute``."""
        module_name, _, attribute = path.partition(":")
        try:
            module = importlib.import_module(module_name)
        except ImportError as e:
            raise SortHookError(f"Cannot import sort hook module '{module_name}'") from e

        try:
            return getattr(module, attribute)
        except AttributeError as e:
            raise SortHookError(
                f"Module '{module_name}' has no attribute '{attribute}'"
            ) from e

    @staticmethod
    def _coerce(obj: Any, path: str) -> SortHook:
        """Turn an imported object into a SortHook instance."""
        if isinstance(obj, SortHook):
            return obj
        if isinstance(obj, type):
            if issubclass(obj, SortHook):
                return obj()
            raise SortHookError(f"'{path}' is a class but not a SortHook")
        if callable(obj):
            return CallableSortHook(obj)
        raise SortHookError(f"'{path}' is not a sort hook or callable")


# -----------------------------
# Configured hook
# -----------------------------


def get_sort_hook(name: str | None = None) -> SortHook:
    """
    Resolve a sort hook.

    Args:
        name: Hook name or import path. Uses the ``sort_hook`` setting
            if not provided.
    """
    name = name or get_settings().sort_hook
    hook = SortHookRegistry.get(name)
    logger.debug("Resolved sort hook %r to %s", name, type(hook).__name__)
    return hook


def run_sort(query: Any, params: Mapping[str, Any]) -> Any:
    """Sort ``query`` from ``params`` with the configured hook."""
    return get_sort_hook().run(query, params)
