#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Configuration file discovery and loading.

Diff options can be stored in ``.segdiff.toml``, ``.segdiff.yaml``,
``.segdiff.yml``, ``.segdiff.json`` or a ``[tool.segdiff]`` table of
``pyproject.toml``. Files are searched from the working directory up to the
filesystem root and then in the home directory.
"""

from __future__ import annotations

import json
import logging
import os
import sys
from pathlib import Path

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[import-not-found,unused-ignore]
from typing import Any, Dict, Optional

import yaml

from segdiff.constants import CONFIG_FILENAMES, PYPROJECT_SECTION
from segdiff.exceptions import ConfigError
from segdiff.options import DiffOptions

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "SEGDIFF_CONFIG"


def _load_pyproject_section(pyproject_path: Path) -> Dict[str, Any]:
    """Load the ``[tool.segdiff]`` table from a pyproject.toml file.

    Returns
    -------
    dict
        The table, or an empty dict if the file has none

    Raises
    ------
    ConfigError
        If the file cannot be parsed or the section is not a table

    """
    try:
        with open(pyproject_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {pyproject_path}: {e}", str(pyproject_path), e) from e
    except OSError as e:
        raise ConfigError(f"Error reading {pyproject_path}: {e}", str(pyproject_path), e) from e

    section = data.get("tool", {}).get(PYPROJECT_SECTION)
    if section is None:
        return {}
    if not isinstance(section, dict):
        raise ConfigError(
            f"[tool.{PYPROJECT_SECTION}] section in {pyproject_path} must be a table, got {type(section).__name__}",
            str(pyproject_path),
        )
    return section


def find_config_in_parents(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Find a configuration file in ``start_dir`` or any of its parents.

    Dedicated config files take priority over ``pyproject.toml`` within the
    same directory; a ``pyproject.toml`` only counts when it has a
    ``[tool.segdiff]`` table.

    Parameters
    ----------
    start_dir : Path, optional
        Starting directory, defaults to the current working directory

    Returns
    -------
    Path or None
        First config file found

    """
    if start_dir is None:
        start_dir = Path.cwd()

    current = start_dir.resolve()

    while True:
        for filename in CONFIG_FILENAMES:
            config_path = current / filename
            if config_path.is_file():
                return config_path

        pyproject_path = current / "pyproject.toml"
        if pyproject_path.is_file():
            try:
                if _load_pyproject_section(pyproject_path):
                    return pyproject_path
            except ConfigError as e:
                logger.debug(f"Skipping unreadable {pyproject_path}: {e.message}")

        parent = current.parent
        if parent == current:
            break
        current = parent

    return None


def discover_config_file(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Discover a configuration file in the standard locations.

    Parameters
    ----------
    start_dir : Path, optional
        Directory where the parent search starts

    Returns
    -------
    Path or None
        Path to the discovered file

    """
    found = find_config_in_parents(start_dir)
    if found:
        return found

    home = Path.home()
    for filename in CONFIG_FILENAMES:
        config_path = home / filename
        if config_path.is_file():
            return config_path

    return None


def load_config_file(config_path: Path | str) -> Dict[str, Any]:
    """Load configuration from a JSON, TOML, YAML or pyproject.toml file.

    Parameters
    ----------
    config_path : Path or str
        Path to the configuration file

    Returns
    -------
    dict
        Configuration mapping

    Raises
    ------
    ConfigError
        If the file is missing, unreadable or not a mapping

    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise ConfigError(f"Configuration file does not exist: {config_path}", str(config_path))
    if not config_path.is_file():
        raise ConfigError(f"Configuration path is not a file: {config_path}", str(config_path))

    filename = config_path.name.lower()
    ext = config_path.suffix.lower()

    if filename == "pyproject.toml":
        return _load_pyproject_section(config_path)

    try:
        if ext == ".toml":
            with open(config_path, "rb") as f:
                config = tomllib.load(f)
        elif ext in (".yaml", ".yml"):
            with open(config_path, "r", encoding="utf-8") as f:
                config = yaml.safe_load(f)
        elif ext == ".json":
            with open(config_path, "r", encoding="utf-8") as f:
                config = json.load(f)
        else:
            raise ConfigError(f"Unsupported config file format: {ext}. Use .json, .toml, or .yaml", str(config_path))
    except (tomllib.TOMLDecodeError, yaml.YAMLError, json.JSONDecodeError) as e:
        raise ConfigError(f"Invalid config file {config_path}: {e}", str(config_path), e) from e
    except OSError as e:
        raise ConfigError(f"Error reading config file {config_path}: {e}", str(config_path), e) from e

    if config is None:
        return {}
    if not isinstance(config, dict):
        raise ConfigError(
            f"Config file {config_path} must contain a mapping, got {type(config).__name__}",
            str(config_path),
        )
    return config


def load_config_with_priority(explicit_path: Optional[str] = None) -> Dict[str, Any]:
    """Load configuration from the highest-priority source available.

    Priority order (highest to lowest):
    1. Explicit config file path (``--config``)
    2. ``SEGDIFF_CONFIG`` environment variable
    3. Auto-discovered config file

    Parameters
    ----------
    explicit_path : str, optional
        Config file path given on the command line

    Returns
    -------
    dict
        Loaded configuration (empty if none was found)

    """
    if explicit_path:
        return load_config_file(explicit_path)

    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return load_config_file(env_path)

    discovered = discover_config_file()
    if discovered:
        logger.debug(f"Using configuration from {discovered}")
        return load_config_file(discovered)

    return {}


def options_from_config(config: Dict[str, Any], base: DiffOptions | None = None) -> DiffOptions:
    """Build :class:`DiffOptions` from a configuration mapping.

    Parameters
    ----------
    config : dict
        Mapping of option names to values
    base : DiffOptions, optional
        Options the config values are applied on top of

    Returns
    -------
    DiffOptions
        Options with the configured values

    Raises
    ------
    ConfigError
        If the mapping has unknown keys or invalid values

    """
    base = base or DiffOptions()
    known = set(DiffOptions.field_names())
    unknown = sorted(set(config) - known)
    if unknown:
        raise ConfigError(f"Unknown configuration key(s): {', '.join(unknown)}")

    try:
        return base.create_updated(**config)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid configuration value: {e}", original_error=e) from e
