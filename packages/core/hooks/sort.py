"""
Default sort hook.

    run(select(Parent), {"sort": (["parent", "parent"], "field_1.asc.ci")})

joins parent twice and orders by lower(field_1) of the last parent.
"""

from collections.abc import Mapping
from typing import Any

from packages.core.hooks.base import SortHook
from packages.core.hooks.registry import SortHookRegistry
from packages.core.sort_ast.decoder import SortSpecDecoder
from packages.core.sort_ast.transformer import SortTransformer


@SortHookRegistry.register
class DefaultSortHook(SortHook):
    """Decodes the sort parameter and applies it with SortTransformer."""

    name = "default"

    def __init__(
        self,
        param_key: str | None = None,
        decoder: SortSpecDecoder | None = None,
        transformer: SortTransformer | None = None,
    ):
        super().__init__(param_key)
        self._decoder = decoder or SortSpecDecoder()
        self._transformer = transformer or SortTransformer()

    def run(self, query: Any, params: Mapping[str, Any]) -> Any:
        directive = self._decoder.decode(self.sort_param(params))
        return self._transformer.transform(query, directive)
