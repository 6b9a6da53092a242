"""
Tests for sort hooks.

Tests the default hook, custom hook resolution and configuration.
"""

import logging
import sys
import types

import pytest
from sqlalchemy import select

from packages.core.config import SortSettings, get_settings
from packages.core.hooks import (
    CallableSortHook,
    DefaultSortHook,
    SortHook,
    SortHookError,
    SortHookRegistry,
    get_sort_hook,
    run_sort,
)
from packages.db.models import Parent


# -----------------------------
# Fixtures
# -----------------------------


@pytest.fixture(autouse=True)
def fresh_settings():
    """Re-read settings for every test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def isolated_registry(monkeypatch: pytest.MonkeyPatch):
    """Let a test register hooks without leaking them."""
    monkeypatch.setattr(SortHookRegistry, "_hooks", dict(SortHookRegistry._hooks))


@pytest.fixture
def custom_module(monkeypatch: pytest.MonkeyPatch) -> types.ModuleType:
    """An importable module holding custom sort implementations."""
    module = types.ModuleType("custom_sorts")

    def by_name_desc(query, sort_param):
        return query.order_by(Parent.name.desc())

    class NamedHook(SortHook):
        name = "named"

        def run(self, query, params):
            return query.order_by(Parent.name)

    module.by_name_desc = by_name_desc
    module.NamedHook = NamedHook
    module.instance = DefaultSortHook()
    module.not_a_hook = 42
    module.SomeClass = dict

    monkeypatch.setitem(sys.modules, "custom_sorts", module)
    return module


def to_sql(stmt) -> str:
    """Compile a statement to a single-line SQL string."""
    sql = str(stmt.compile(compile_kwargs={"literal_binds": True}))
    return " ".join(sql.split())


# -----------------------------
# Default Hook Tests
# -----------------------------


class TestDefaultSortHook:
    """Tests for the built-in hook."""

    def test_missing_key_is_identity(self) -> None:
        """Params without a sort key return the query itself."""
        query = select(Parent)

        assert DefaultSortHook().run(query, {}) is query

    def test_entity_without_sort_is_identity(self) -> None:
        """A bare entity comes back as-is when nothing is sorted."""
        assert DefaultSortHook().run(Parent, {"sort": None}) is Parent

    @pytest.mark.parametrize("raw", ["", (), {}])
    def test_empty_markers_are_identity(self, raw) -> None:
        """Empty sort values leave the query unchanged."""
        query = select(Parent)

        assert DefaultSortHook().run(query, {"sort": raw}) is query

    def test_plain_sort(self) -> None:
        """An empty association list orders the base entity."""
        stmt = DefaultSortHook().run(select(Parent), {"sort": ([], "field_1.asc")})

        assert to_sql(stmt).endswith("FROM parents ORDER BY parents.field_1 ASC")

    def test_nested_case_insensitive_sort(self) -> None:
        """Associations are joined and the final field is case-folded."""
        params = {"sort": (["parent", "parent"], "field_1.asc.ci")}
        sql = to_sql(DefaultSortHook().run(select(Parent), params))

        assert sql.count(" JOIN ") == 2
        assert sql.endswith("ORDER BY lower(parents_2.field_1) ASC")

    def test_custom_param_key(self) -> None:
        """The params key can be changed per hook."""
        hook = DefaultSortHook(param_key="order")
        sql = to_sql(hook.run(select(Parent), {"order": "name.desc", "sort": "x.asc"}))

        assert sql.endswith("ORDER BY parents.name DESC")

    def test_other_params_are_ignored(self) -> None:
        """Only the sort key is read."""
        params = {"search": {"name": "x"}, "paginate": {"page": 2}}
        query = select(Parent)

        assert DefaultSortHook().run(query, params) is query


# -----------------------------
# Callable Hook Tests
# -----------------------------


class TestCallableSortHook:
    """Tests for function-based hooks."""

    def test_receives_raw_parameter(self) -> None:
        """The wrapped function gets the query and the raw sort value."""
        calls = []

        def spy(query, sort_param):
            calls.append(sort_param)
            return query

        hook = CallableSortHook(spy)
        query = select(Parent)

        assert hook.run(query, {"sort": (["parent"], "name.asc")}) is query
        assert calls == [(["parent"], "name.asc")]
        assert hook.name == "spy"

    def test_absent_parameter_is_passed_as_none(self) -> None:
        """Missing sort values reach the function as None."""
        calls = []
        hook = CallableSortHook(lambda query, sort_param: calls.append(sort_param))

        hook.run(select(Parent), {})

        assert calls == [None]


# -----------------------------
# Registry Tests
# -----------------------------


class TestSortHookRegistry:
    """Tests for hook lookup."""

    def test_default_is_registered(self) -> None:
        """The built-in hook is available as 'default'."""
        assert "default" in SortHookRegistry.list_names()
        assert isinstance(SortHookRegistry.get("default"), DefaultSortHook)

    def test_unknown_name(self) -> None:
        """Unknown names raise SortHookError listing what is available."""
        with pytest.raises(SortHookError) as exc_info:
            SortHookRegistry.get("nope")
        assert "Available: default" in str(exc_info.value)

    def test_register_decorator(self, isolated_registry) -> None:
        """Hooks can register themselves by name."""

        @SortHookRegistry.register
        class ReverseHook(SortHook):
            name = "reverse"

            def run(self, query, params):
                return query

        assert isinstance(SortHookRegistry.get("reverse"), ReverseHook)

    def test_register_requires_name(self, isolated_registry) -> None:
        """Unnamed hooks cannot be registered."""

        class Unnamed(SortHook):
            def run(self, query, params):
                return query

        with pytest.raises(SortHookError):
            SortHookRegistry.register(Unnamed)

    def test_clear(self, isolated_registry) -> None:
        """clear() empties the registry."""
        SortHookRegistry.clear()

        assert SortHookRegistry.list_names() == []

    def test_import_function(self, custom_module) -> None:
        """A function path is wrapped in CallableSortHook."""
        hook = SortHookRegistry.get("custom_sorts:by_name_desc")

        assert isinstance(hook, CallableSortHook)
        assert to_sql(hook.run(select(Parent), {})).endswith("ORDER BY parents.name DESC")

    def test_import_class(self, custom_module) -> None:
        """A SortHook subclass path is instantiated."""
        hook = SortHookRegistry.get("custom_sorts:NamedHook")

        assert isinstance(hook, custom_module.NamedHook)

    def test_import_instance(self, custom_module) -> None:
        """A SortHook instance path is used directly."""
        assert SortHookRegistry.get("custom_sorts:instance") is custom_module.instance

    @pytest.mark.parametrize(
        "path",
        [
            "custom_sorts:missing",
            "custom_sorts:not_a_hook",
            "custom_sorts:SomeClass",
            "no_such_module_for_sorting:thing",
        ],
    )
    def test_bad_import_paths(self, custom_module, path: str) -> None:
        """Unusable import paths raise SortHookError."""
        with pytest.raises(SortHookError):
            SortHookRegistry.get(path)


# -----------------------------
# Configuration Tests
# -----------------------------


class TestConfiguredHook:
    """Tests for settings-driven hook selection."""

    def test_defaults(self) -> None:
        """Out of the box the default hook reads the 'sort' key."""
        settings = SortSettings()

        assert settings.sort_hook == "default"
        assert settings.sort_param_key == "sort"

    def test_get_sort_hook_uses_settings(
        self, monkeypatch: pytest.MonkeyPatch, custom_module
    ) -> None:
        """SORTQL_SORT_HOOK selects the hook."""
        monkeypatch.setenv("SORTQL_SORT_HOOK", "custom_sorts:by_name_desc")
        get_settings.cache_clear()

        hook = get_sort_hook()

        assert isinstance(hook, CallableSortHook)

    def test_explicit_name_wins(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """An explicit name overrides configuration."""
        monkeypatch.setenv("SORTQL_SORT_HOOK", "nope")

        assert isinstance(get_sort_hook("default"), DefaultSortHook)

    def test_param_key_from_settings(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """SORTQL_SORT_PARAM_KEY changes the key hooks read."""
        monkeypatch.setenv("SORTQL_SORT_PARAM_KEY", "order")

        stmt = run_sort(select(Parent), {"order": ([], "field_2.desc")})

        assert to_sql(stmt).endswith("ORDER BY parents.field_2 DESC")

    def test_run_sort_with_default_hook(self) -> None:
        """run_sort applies the configured hook."""
        stmt = run_sort(select(Parent), {"sort": (["parent"], "name.asc.ci")})

        assert to_sql(stmt).endswith("ORDER BY lower(parents_1.name) ASC")

    def test_repeated_run_sort_logs_nothing_at_info(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Hook resolution on each call is logged at DEBUG only."""
        caplog.set_level(logging.DEBUG, logger="packages.core.hooks.registry")

        for _ in range(3):
            run_sort(select(Parent), {"sort": ([], "field_1.asc")})

        registry_records = [
            record for record in caplog.records
            if record.name == "packages.core.hooks.registry"
        ]
        assert len(registry_records) == 3
        assert all(record.levelno == logging.DEBUG for record in registry_records)
