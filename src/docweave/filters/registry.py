#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/docweave/filters/registry.py
"""Filter registry for name-based filter lookup.

The registry maps filter names (and aliases) to ``FilterMetadata``. Built-in
filters are registered on first access; third-party filters are discovered
through the ``docweave.filters`` entry point group, each entry point pointing
at a ``FilterMetadata`` object.

Examples
--------
Get a filter:

    >>> from docweave.filters import filter_registry
    >>> include = filter_registry.get_filter("include", max_depth=3)

List all filters:

    >>> for name in filter_registry.list_filters():
    ...     print(name, filter_registry.get_metadata(name).description)

"""

from __future__ import annotations

import importlib.metadata
import logging
from typing import Any, Optional

from docweave.exceptions import FilterError
from docweave.filters.metadata import FilterMetadata

logger = logging.getLogger(__name__)

ENTRY_POINT_GROUP = "docweave.filters"


class FilterRegistry:
    """Registry for managing filters.

    This singleton class keeps every known filter and resolves aliases. Built-in
    filters and entry point plugins are loaded on first access.

    """

    _instance: Optional[FilterRegistry] = None
    _filters: dict[str, FilterMetadata]
    _aliases: dict[str, str]
    _initialized: bool

    def __new__(cls) -> FilterRegistry:
        """Create or return singleton instance."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._filters = {}
            cls._instance._aliases = {}
            cls._instance._initialized = False
        return cls._instance

    def _ensure_initialized(self) -> None:
        """Register built-ins and run plugin discovery once."""
        if not self._initialized:
            self._initialized = True
            from docweave.filters._builtin_metadata import BUILTIN_FILTERS

            for metadata in BUILTIN_FILTERS:
                if metadata.name not in self._filters:
                    self.register(metadata)
            self.discover_plugins()

    def register(self, metadata: FilterMetadata) -> None:
        """Register a filter with its metadata.

        If a filter with the same name is already registered, it is
        overwritten and a warning is logged.

        """
        if metadata.name in self._filters:
            logger.warning(f"Filter '{metadata.name}' already registered, overwriting")

        self._filters[metadata.name] = metadata
        for alias in metadata.aliases:
            self._aliases[alias] = metadata.name
        logger.debug(f"Registered filter: {metadata.name}")

    def unregister(self, name: str) -> bool:
        """Unregister a filter and its aliases.

        Returns
        -------
        bool
            True if the filter was unregistered, False if not found

        """
        canonical = self._aliases.get(name, name)
        metadata = self._filters.pop(canonical, None)
        if metadata is None:
            return False
        for alias in metadata.aliases:
            self._aliases.pop(alias, None)
        logger.debug(f"Unregistered filter: {canonical}")
        return True

    def resolve_name(self, name: str) -> str:
        """Return the canonical name for ``name`` (which may be an alias)."""
        self._ensure_initialized()
        return self._aliases.get(name, name)

    def has_filter(self, name: str) -> bool:
        """Return True if ``name`` or an alias of that name is registered."""
        return self.resolve_name(name) in self._filters

    def get_metadata(self, name: str) -> FilterMetadata:
        """Get metadata for a filter.

        Raises
        ------
        FilterError
            If no filter of that name is registered

        """
        canonical = self.resolve_name(name)
        if canonical not in self._filters:
            available = ", ".join(self.list_filters())
            raise FilterError(f"Unknown filter '{name}'. Available filters: {available}", filter_name=name)
        return self._filters[canonical]

    def get_filter(self, name: str, **kwargs: Any) -> Any:
        """Get a filter instance by name.

        Parameters
        ----------
        name : str
            Filter name or alias
        **kwargs
            Options passed to the filter constructor

        Raises
        ------
        FilterError
            If the filter is unknown or cannot be constructed

        """
        return self.get_metadata(name).create_instance(**kwargs)

    def list_filters(self, tags: Optional[list[str]] = None) -> list[str]:
        """List registered filter names, sorted alphabetically.

        Parameters
        ----------
        tags : list[str], optional
            Only return filters carrying at least one of these tags

        """
        self._ensure_initialized()
        if tags is None:
            return sorted(self._filters)
        return sorted(name for name, metadata in self._filters.items() if any(tag in metadata.tags for tag in tags))

    def discover_plugins(self) -> int:
        """Discover and register filters from entry points.

        Returns
        -------
        int
            Number of filters discovered and registered

        """
        discovered_count = 0
        try:
            filter_eps = importlib.metadata.entry_points().select(group=ENTRY_POINT_GROUP)
        except Exception as e:
            logger.warning(f"Failed to discover filter plugins: {e}")
            return 0

        for ep in filter_eps:
            try:
                metadata = ep.load()
            except Exception as e:
                logger.warning(f"Failed to load filter entry point '{ep.name}': {e}")
                continue

            if not isinstance(metadata, FilterMetadata):
                logger.warning(f"Entry point '{ep.name}' did not return FilterMetadata, skipping")
                continue

            if metadata.name in self._filters and self._filters[metadata.name] is metadata:
                continue

            self.register(metadata)
            discovered_count += 1
            logger.debug(f"Discovered filter from entry point: {ep.name}")

        logger.debug(f"Discovered {discovered_count} filter(s) from entry points")
        return discovered_count

    def clear(self) -> None:
        """Clear all registered filters.

        This is primarily useful for testing; built-ins are registered again
        on the next access.

        """
        self._filters.clear()
        self._aliases.clear()
        self._initialized = False
        logger.debug("Cleared filter registry")


# Global registry instance (preferred access pattern)
filter_registry = FilterRegistry()

__all__ = [
    "ENTRY_POINT_GROUP",
    "FilterRegistry",
    "filter_registry",
]
