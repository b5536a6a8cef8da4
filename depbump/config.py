"""Configuration file loader for depbump.

Handles discovery, loading, parsing, and validation of configuration files.
Supports two formats:

- ``depbump.toml``: settings under a ``[depbump]`` table
- ``pyproject.toml``: settings under a ``[tool.depbump]`` table

Discovery order:

1. Explicit path from ``--config`` or ``DEPBUMP_CONFIG``
2. ``depbump.toml`` in current directory
3. ``pyproject.toml`` with ``[tool.depbump]`` section

Configuration precedence: defaults < config file < CLI args.

Typical usage::

    config = load_config()  # Auto-discover
    config = load_config(Path("custom.toml"))  # Explicit path

Example (``depbump.toml``)::

    [depbump]
    target = "latest"
    dep = ["prod", "dev"]
    remove_range = false
    registry = "registry.json"
    reject = ["typescript"]
"""

from __future__ import annotations

import tomli as tomllib
from pathlib import Path
from typing import Any, Dict, List, Optional
from dataclasses import dataclass, field

from depbump.exceptions import ConfigError
from depbump.utils.logger import get_logger
from depbump.constants import (
    CONFIG_FILE_NAME,
    DEFAULT_REMOVE_RANGE,
    DEFAULT_TARGET,
)

logger = get_logger("config")

_TOOL_SECTION = "depbump"


@dataclass
class DepBumpConfig:
    """Parsed and validated depbump configuration.

    All fields have defaults, so empty config files are valid.

    Attributes:
        target: Default target policy literal (``latest``, ``@next``, ...).
        dep: Sections to upgrade, as aliases or section names. ``None``
            means the default selection.
        remove_range: Replace ranges with bare versions.
        registry: Path or URL of the static registry.
        filter: Package names or patterns to include.
        reject: Package names or patterns to exclude.
        source_path: Path to loaded config file, or ``None`` if using defaults.
    """

    target: str = DEFAULT_TARGET
    dep: Optional[List[str]] = None
    remove_range: bool = DEFAULT_REMOVE_RANGE
    registry: Optional[str] = None
    filter: List[str] = field(default_factory=list)
    reject: List[str] = field(default_factory=list)

    # Metadata (not a user-facing option)
    source_path: Optional[Path] = field(default=None, repr=False)

    def to_log_dict(self) -> Dict[str, Any]:
        """Return configuration as dictionary for debug logging."""
        return {
            "target": self.target,
            "dep": self.dep,
            "remove_range": self.remove_range,
            "registry": self.registry,
            "filter": self.filter,
            "reject": self.reject,
        }


def discover_config_file(explicit_path: Optional[Path] = None) -> Optional[Path]:
    """Find the configuration file to load.

    Args:
        explicit_path: Explicit config path. If provided, must exist.

    Returns:
        Resolved path to config file, or ``None`` if not found.

    Raises:
        ConfigError: Explicit path provided but does not exist.
    """
    if explicit_path is not None:
        resolved = explicit_path.resolve()
        if not resolved.is_file():
            raise ConfigError(
                f"Configuration file not found: {explicit_path}",
                config_path=str(explicit_path),
            )
        logger.debug("Using explicit config: %s", resolved)
        return resolved

    cwd = Path.cwd()

    depbump_toml = cwd / CONFIG_FILE_NAME
    if depbump_toml.is_file():
        logger.debug("Found %s: %s", CONFIG_FILE_NAME, depbump_toml)
        return depbump_toml

    pyproject_toml = cwd / "pyproject.toml"
    if pyproject_toml.is_file() and _pyproject_has_depbump_section(pyproject_toml):
        logger.debug("Found [tool.depbump] in pyproject.toml: %s", pyproject_toml)
        return pyproject_toml

    logger.debug("No configuration file found")
    return None


def _pyproject_has_depbump_section(path: Path) -> bool:
    """Check if pyproject.toml contains a [tool.depbump] section.

    An unreadable pyproject.toml is treated as having no section.
    """
    try:
        raw = _read_toml(path)
    except ConfigError as exc:
        logger.debug("Ignoring unreadable %s: %s", path, exc)
        return False
    return _TOOL_SECTION in raw.get("tool", {})


def load_config(config_path: Optional[Path] = None) -> DepBumpConfig:
    """Load and validate depbump configuration.

    Args:
        config_path: Explicit path to config file. If ``None``, uses
            auto-discovery (see :func:`discover_config_file`).

    Returns:
        Validated :class:`DepBumpConfig` with values from file or defaults.

    Raises:
        ConfigError: File cannot be parsed, has unknown keys, or invalid values.
    """
    resolved = discover_config_file(config_path)

    if resolved is None:
        logger.debug("No config file found, using defaults")
        return DepBumpConfig()

    logger.info("Loading configuration from %s", resolved)
    raw = _read_toml(resolved)

    if resolved.name == "pyproject.toml":
        section = raw.get("tool", {}).get(_TOOL_SECTION, {})
    else:
        section = raw.get(_TOOL_SECTION, {})

    if not section:
        logger.debug("Config file found but no depbump section, using defaults")
        return DepBumpConfig(source_path=resolved)

    config = _parse_section(section, config_path=str(resolved))
    config.source_path = resolved

    logger.debug("Loaded configuration: %s", config.to_log_dict())
    return config


def _read_toml(path: Path) -> Dict[str, Any]:
    """Read and parse a TOML file.

    Raises:
        ConfigError: File cannot be read or is not valid TOML.
    """
    try:
        with open(path, "rb") as fh:
            return tomllib.load(fh)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(
            f"Invalid TOML in {path.name}: {exc}",
            config_path=str(path),
        ) from exc
    except OSError as exc:
        raise ConfigError(
            f"Cannot read configuration file {path}: {exc}",
            config_path=str(path),
        ) from exc


def _string_list(value: Any, option: str, config_path: str) -> List[str]:
    """Accept a list of strings or a single comma separated string."""
    if isinstance(value, str):
        return [item.strip() for item in value.split(",") if item.strip()]
    if isinstance(value, list) and all(isinstance(item, str) for item in value):
        return list(value)
    raise ConfigError(
        f"{option} must be a string or a list of strings, got {type(value).__name__}",
        config_path=config_path,
        option=option,
    )


def _parse_section(
    section: Dict[str, Any],
    *,
    config_path: str,
) -> DepBumpConfig:
    """Parse and validate the ``[depbump]`` or ``[tool.depbump]`` table.

    Raises:
        ConfigError: Unknown keys or incorrect types.
    """
    config = DepBumpConfig()

    known_top = {"target", "dep", "remove_range", "registry", "filter", "reject"}

    unknown_top = set(section.keys()) - known_top
    if unknown_top:
        raise ConfigError(
            f"Unknown configuration keys: {', '.join(sorted(unknown_top))}",
            config_path=config_path,
        )

    if "target" in section:
        val = section["target"]
        if not isinstance(val, str) or not val:
            raise ConfigError(
                f"target must be a non-empty string, got {val!r}",
                config_path=config_path,
                option="target",
            )
        config.target = val

    if "dep" in section:
        config.dep = _string_list(section["dep"], "dep", config_path)

    if "remove_range" in section:
        val = section["remove_range"]
        if not isinstance(val, bool):
            raise ConfigError(
                f"remove_range must be a boolean, got {type(val).__name__}",
                config_path=config_path,
                option="remove_range",
            )
        config.remove_range = val

    if "registry" in section:
        val = section["registry"]
        if not isinstance(val, str):
            raise ConfigError(
                f"registry must be a string, got {type(val).__name__}",
                config_path=config_path,
                option="registry",
            )
        config.registry = val

    if "filter" in section:
        config.filter = _string_list(section["filter"], "filter", config_path)

    if "reject" in section:
        config.reject = _string_list(section["reject"], "reject", config_path)

    return config
