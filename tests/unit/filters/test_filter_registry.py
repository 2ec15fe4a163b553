#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Unit tests for filter metadata and the filter registry."""

from unittest.mock import MagicMock, patch

import pytest

from docweave.exceptions import FilterError
from docweave.filters import (
    FilterMetadata,
    FilterRegistry,
    IncludeFilter,
    PlantUmlFilter,
    PythonExecFilter,
    SqliteExecFilter,
)
from docweave.filters.base import FunctionFilter


def _noop_factory(**kwargs):
    return FunctionFilter(lambda n: False, lambda n: n, name="noop")


@pytest.mark.unit
class TestFilterMetadata:
    """Tests for FilterMetadata."""

    def test_empty_name_rejected(self):
        """A filter needs a name."""
        with pytest.raises(ValueError):
            FilterMetadata(name="", description="x", filter_class=_noop_factory)

    def test_non_callable_rejected(self):
        """filter_class must be callable."""
        with pytest.raises(ValueError):
            FilterMetadata(name="x", description="x", filter_class="not callable")

    def test_create_instance_passes_known_options(self):
        """Declared options reach the constructor."""
        metadata = FilterMetadata(
            name="include", description="x", filter_class=IncludeFilter, options={"max_depth": "limit"}
        )
        instance = metadata.create_instance(max_depth=3)
        assert instance.max_depth == 3

    def test_create_instance_drops_unknown_options(self, caplog):
        """Undeclared options are ignored with a warning."""
        metadata = FilterMetadata(name="py", description="x", filter_class=PythonExecFilter)
        assert isinstance(metadata.create_instance(colour="red"), PythonExecFilter)
        assert "colour" in caplog.text

    def test_constructor_errors_become_filter_errors(self):
        """Bad option values surface as FilterError."""
        metadata = FilterMetadata(
            name="include", description="x", filter_class=IncludeFilter, options={"max_depth": "limit"}
        )
        with pytest.raises(FilterError, match="Cannot create filter 'include'"):
            metadata.create_instance(max_depth=-5)


@pytest.mark.unit
class TestFilterRegistry:
    """Tests for FilterRegistry."""

    def test_singleton(self):
        """Every construction returns the same registry."""
        assert FilterRegistry() is FilterRegistry()

    def test_builtins_registered(self, clean_registry):
        """Built-in filters are available on first access."""
        assert clean_registry.list_filters() == ["include", "plantuml", "python-exec", "sqlite-exec"]

    @pytest.mark.parametrize(
        "name,expected",
        [
            ("include", IncludeFilter),
            ("python-exec", PythonExecFilter),
            ("py-exec", PythonExecFilter),
            ("sqlite-exec", SqliteExecFilter),
            ("sqlite", SqliteExecFilter),
            ("plantuml", PlantUmlFilter),
            ("uml", PlantUmlFilter),
        ],
    )
    def test_get_filter_by_name_or_alias(self, clean_registry, name, expected):
        """Names and aliases resolve to the right filter class."""
        assert isinstance(clean_registry.get_filter(name), expected)

    def test_get_filter_with_options(self, clean_registry):
        """Options are passed to the filter."""
        flt = clean_registry.get_filter("sqlite", db="data.db")
        assert flt.db == "data.db"

    def test_unknown_filter(self, clean_registry):
        """Unknown names raise FilterError listing what is available."""
        with pytest.raises(FilterError, match="Unknown filter 'nope'") as exc_info:
            clean_registry.get_filter("nope")
        assert "include" in str(exc_info.value)
        assert exc_info.value.filter_name == "nope"

    def test_has_filter(self, clean_registry):
        """has_filter accepts aliases."""
        assert clean_registry.has_filter("uml")
        assert not clean_registry.has_filter("nope")

    def test_register_and_unregister(self, clean_registry):
        """Custom filters can be added and removed with their aliases."""
        clean_registry.register(
            FilterMetadata(name="noop", description="Does nothing", filter_class=_noop_factory, aliases=["nothing"])
        )
        assert clean_registry.get_filter("nothing").name == "noop"

        assert clean_registry.unregister("nothing")
        assert not clean_registry.has_filter("noop")
        assert not clean_registry.has_filter("nothing")
        assert not clean_registry.unregister("noop")

    def test_list_by_tag(self, clean_registry):
        """Filters can be listed by tag."""
        assert clean_registry.list_filters(tags=["execution"]) == ["python-exec", "sqlite-exec"]

    def test_discover_plugins(self, clean_registry):
        """Entry points returning FilterMetadata are registered; others are skipped."""
        good = MagicMock()
        good.name = "noop"
        good.load.return_value = FilterMetadata(name="noop", description="x", filter_class=_noop_factory)
        bad = MagicMock()
        bad.name = "bad"
        bad.load.return_value = object()
        broken = MagicMock()
        broken.name = "broken"
        broken.load.side_effect = ImportError("missing")

        entry_points = MagicMock()
        entry_points.select.return_value = [good, bad, broken]
        with patch("docweave.filters.registry.importlib.metadata.entry_points", return_value=entry_points):
            clean_registry.list_filters()
            count = clean_registry.discover_plugins()

        assert clean_registry.has_filter("noop")
        assert not clean_registry.has_filter("bad")
        assert count == 0
        entry_points.select.assert_called_with(group="docweave.filters")
