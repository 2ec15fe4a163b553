#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/docweave/filters/metadata.py
"""Metadata describing a registered filter.

Filters are registered by name so that the CLI and configuration files can
refer to them. ``FilterMetadata`` holds what the registry needs to list a
filter and build an instance of it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable

from docweave.exceptions import FilterError

logger = logging.getLogger(__name__)


@dataclass
class FilterMetadata:
    """Metadata for a filter.

    Parameters
    ----------
    name : str
        Unique identifier used on the command line (e.g. "include")
    description : str
        Human-readable description of what the filter does
    filter_class : callable
        Class (or factory) producing the filter; called with the filter's options
    options : dict[str, str], default = empty dict
        Constructor options and their help text
    aliases : list[str], default = empty list
        Alternative names accepted for this filter
    tags : list[str], default = empty list
        Tags for categorization (e.g. ["execution"])
    version : str, default = "1.0.0"
        Filter version

    Examples
    --------
    >>> metadata = FilterMetadata(
    ...     name="include",
    ...     description="Splice external files into the document",
    ...     filter_class=IncludeFilter,
    ...     options={"max_depth": "Maximum include nesting"},
    ... )

    """

    name: str
    description: str
    filter_class: Callable[..., Any]
    options: dict[str, str] = field(default_factory=dict)
    aliases: list[str] = field(default_factory=list)
    tags: list[str] = field(default_factory=list)
    version: str = "1.0.0"

    def __post_init__(self) -> None:
        """Validate metadata after initialization."""
        if not self.name:
            raise ValueError("Filter name cannot be empty")
        if not callable(self.filter_class):
            raise ValueError(f"filter_class for '{self.name}' must be callable")

    def create_instance(self, **kwargs: Any) -> Any:
        """Create a filter instance, keeping only the options it understands.

        Raises
        ------
        FilterError
            If the filter cannot be constructed with the given options

        """
        unknown = sorted(set(kwargs) - set(self.options))
        if unknown:
            logger.warning(f"Ignoring unknown option(s) for filter '{self.name}': {', '.join(unknown)}")
        accepted = {key: value for key, value in kwargs.items() if key in self.options}
        try:
            return self.filter_class(**accepted)
        except (TypeError, ValueError) as e:
            raise FilterError(f"Cannot create filter '{self.name}': {e}", filter_name=self.name, original_error=e) from e
