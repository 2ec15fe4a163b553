#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Configuration file discovery and loading for the docweave CLI.

A configuration file names the default filter chain and the constructor
options of each filter::

    filters = ["include", "python-exec"]

    [filter.include]
    max_depth = 5
    base_dir = "docs"

    [filter.sqlite-exec]
    db = "data.db"

The same shape is accepted from YAML, JSON, or the ``[tool.docweave]`` table
of ``pyproject.toml``. Problems are reported as ``argparse.ArgumentTypeError``
so the CLI can treat them like bad arguments.
"""

import argparse
import json
import sys
from pathlib import Path

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[import-not-found,unused-ignore]
from typing import Any, Dict, Optional

import yaml

CONFIG_ENV_VAR = "DOCWEAVE_CONFIG"

DEDICATED_CONFIG_FILENAMES = [".docweave.toml", ".docweave.yaml", ".docweave.yml", ".docweave.json"]

FILTERS_KEY = "filters"
FILTER_OPTIONS_KEY = "filter"


def _load_pyproject_section(pyproject_path: Path) -> Dict[str, Any]:
    """Return the ``[tool.docweave]`` table of a pyproject.toml, or an empty dict.

    Raises
    ------
    argparse.ArgumentTypeError
        If the file is not valid TOML or the section is not a table

    """
    try:
        with open(pyproject_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise argparse.ArgumentTypeError(f"Invalid TOML in pyproject.toml {pyproject_path}: {e}") from e
    except OSError as e:
        raise argparse.ArgumentTypeError(f"Error reading pyproject.toml {pyproject_path}: {e}") from e

    config = data.get("tool", {}).get("docweave")
    if config is None:
        return {}
    if not isinstance(config, dict):
        raise argparse.ArgumentTypeError(
            f"[tool.docweave] section in {pyproject_path} must be a table, got {type(config).__name__}"
        )
    return config


def find_config_in_parents(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Find a configuration file by searching from ``start_dir`` up to the root.

    In each directory the dedicated files are checked first (``.docweave.toml``,
    ``.docweave.yaml``, ``.docweave.yml``, ``.docweave.json``), then a
    ``pyproject.toml`` that has a ``[tool.docweave]`` section.

    Parameters
    ----------
    start_dir : Path, optional
        Starting directory, defaults to the current working directory

    Returns
    -------
    Path or None
        First configuration file found

    """
    current = (start_dir or Path.cwd()).resolve()

    while True:
        for filename in DEDICATED_CONFIG_FILENAMES:
            config_path = current / filename
            if config_path.is_file():
                return config_path

        pyproject_path = current / "pyproject.toml"
        if pyproject_path.is_file():
            try:
                if _load_pyproject_section(pyproject_path):
                    return pyproject_path
            except argparse.ArgumentTypeError:
                # A broken pyproject.toml is not ours to report during discovery
                pass

        parent = current.parent
        if parent == current:
            return None
        current = parent


def discover_config_file() -> Optional[Path]:
    """Discover a configuration file in the standard locations.

    Parent directories of the cwd are searched first, then the user's home
    directory (dedicated files only).

    Returns
    -------
    Path or None
        Path to the discovered config file

    """
    config_in_parents = find_config_in_parents()
    if config_in_parents:
        return config_in_parents

    home = Path.home()
    for filename in DEDICATED_CONFIG_FILENAMES:
        config_path = home / filename
        if config_path.is_file():
            return config_path

    return None


def _load_mapping(config_path: Path, loader: Any, kind: str, mode: str) -> Dict[str, Any]:
    open_kwargs: Dict[str, Any] = {} if mode == "rb" else {"encoding": "utf-8"}
    with open(config_path, mode, **open_kwargs) as f:
        config = loader(f)
    if config is None:
        return {}
    if not isinstance(config, dict):
        raise argparse.ArgumentTypeError(
            f"{kind} config file {config_path} must contain a mapping at root level, got {type(config).__name__}"
        )
    return config


def load_config_file(config_path: Path | str) -> Dict[str, Any]:
    """Load configuration from a TOML, YAML, JSON or pyproject.toml file.

    The format is chosen from the file name and extension.

    Parameters
    ----------
    config_path : Path or str
        Path to the configuration file

    Returns
    -------
    dict
        Configuration dictionary

    Raises
    ------
    argparse.ArgumentTypeError
        If the file cannot be read, parsed, or has an unsupported format

    Examples
    --------
    >>> config = load_config_file(".docweave.toml")
    >>> config.get("filters")
    ['include', 'python-exec']

    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise argparse.ArgumentTypeError(f"Configuration file does not exist: {config_path}")
    if not config_path.is_file():
        raise argparse.ArgumentTypeError(f"Configuration path is not a file: {config_path}")

    filename = config_path.name.lower()
    ext = config_path.suffix.lower()

    try:
        if filename == "pyproject.toml":
            return _load_pyproject_section(config_path)
        if ext == ".toml":
            return _load_mapping(config_path, tomllib.load, "TOML", "rb")
        if ext in (".yaml", ".yml"):
            return _load_mapping(config_path, yaml.safe_load, "YAML", "r")
        if ext == ".json":
            return _load_mapping(config_path, json.load, "JSON", "r")
    except argparse.ArgumentTypeError:
        raise
    except tomllib.TOMLDecodeError as e:
        raise argparse.ArgumentTypeError(f"Invalid TOML in config file {config_path}: {e}") from e
    except yaml.YAMLError as e:
        raise argparse.ArgumentTypeError(f"Invalid YAML in config file {config_path}: {e}") from e
    except json.JSONDecodeError as e:
        raise argparse.ArgumentTypeError(f"Invalid JSON in config file {config_path}: {e}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise argparse.ArgumentTypeError(f"Error reading config file {config_path}: {e}") from e

    raise argparse.ArgumentTypeError(f"Unsupported config file format: {ext}. Use .toml, .yaml or .json")


def merge_configs(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Merge two configuration dictionaries, ``override`` winning.

    Nested dictionaries are merged recursively instead of replaced.

    Examples
    --------
    >>> merge_configs({"include": {"max_depth": 5, "base_dir": "docs"}}, {"include": {"max_depth": 2}})
    {'include': {'max_depth': 2, 'base_dir': 'docs'}}

    """
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = merge_configs(result[key], value)
        else:
            result[key] = value
    return result


def load_config_with_priority(
    explicit_path: Optional[str] = None, env_var_path: Optional[str] = None
) -> Dict[str, Any]:
    """Load configuration with priority handling.

    Priority order (highest to lowest):

    1. Explicit config file path (``--config``)
    2. ``DOCWEAVE_CONFIG`` environment variable
    3. Auto-discovered config file

    Returns
    -------
    dict
        Loaded configuration (empty dict if no config was found)

    Raises
    ------
    argparse.ArgumentTypeError
        If a config file is named but cannot be loaded

    """
    if explicit_path:
        return load_config_file(explicit_path)

    if env_var_path:
        return load_config_file(env_var_path)

    discovered_path = discover_config_file()
    if discovered_path:
        return load_config_file(discovered_path)

    return {}


def get_default_filters(config: Dict[str, Any]) -> list[str]:
    """Return the default filter chain named by ``config``.

    Raises
    ------
    argparse.ArgumentTypeError
        If ``filters`` is not a list of strings

    """
    filters = config.get(FILTERS_KEY, [])
    if isinstance(filters, str):
        filters = [filters]
    if not isinstance(filters, list) or not all(isinstance(name, str) for name in filters):
        raise argparse.ArgumentTypeError(f"'{FILTERS_KEY}' in config must be a list of filter names")
    return list(filters)


def get_filter_options(config: Dict[str, Any]) -> Dict[str, Dict[str, Any]]:
    """Return per-filter constructor options from the ``filter`` table of ``config``.

    Raises
    ------
    argparse.ArgumentTypeError
        If the table or one of its entries is not a mapping

    """
    section = config.get(FILTER_OPTIONS_KEY, {})
    if not isinstance(section, dict):
        raise argparse.ArgumentTypeError(f"'{FILTER_OPTIONS_KEY}' in config must be a table of filter options")

    options: Dict[str, Dict[str, Any]] = {}
    for name, values in section.items():
        if not isinstance(values, dict):
            raise argparse.ArgumentTypeError(
                f"Options for filter '{name}' must be a table, got {type(values).__name__}"
            )
        options[name] = dict(values)
    return options
