"""
Centralized constants for depbump.

This module defines immutable configuration values used across depbump,
including network settings, manifest section names, version notation
markers, and logging formats. All values are intended to be treated as
read-only.
"""

from typing import Final, Mapping, Sequence

# ---------------------------------------------------------------------------
# Project metadata
# ---------------------------------------------------------------------------

#: HTTP User-Agent template used for outbound requests.
USER_AGENT_TEMPLATE: Final[str] = "depbump/{version}"

# ---------------------------------------------------------------------------
# HTTP configuration
# ---------------------------------------------------------------------------

#: Default network timeout in seconds.
DEFAULT_TIMEOUT: Final[int] = 30

#: Maximum number of retries for failed HTTP requests.
DEFAULT_MAX_RETRIES: Final[int] = 3

# ---------------------------------------------------------------------------
# Manifest sections
# ---------------------------------------------------------------------------

#: Default manifest file name.
DEFAULT_MANIFEST: Final[str] = "package.json"

#: Flat ``"<name>@<version>"`` field naming the package manager.
PACKAGE_MANAGER_FIELD: Final[str] = "packageManager"

#: Section that is patched regardless of the requested sections.
OVERRIDES_SECTION: Final[str] = "overrides"

#: Short section aliases accepted by ``--dep``.
DEP_ALIASES: Final[Mapping[str, str]] = {
    "dev": "devDependencies",
    "peer": "peerDependencies",
    "prod": "dependencies",
    "optional": "optionalDependencies",
}

#: Sections used when ``--dep`` is not given.
DEFAULT_DEP: Final[Sequence[str]] = ("prod", "dev", "optional", "packageManager")

# ---------------------------------------------------------------------------
# Version notation
# ---------------------------------------------------------------------------

#: Default upgrade target policy.
DEFAULT_TARGET: Final[str] = "latest"

#: Leading character marking a policy literal as an explicit dist-tag.
TAG_MARKER: Final[str] = "@"

#: Prefix marking an npm alias (``npm:<name>@<range>``).
NPM_ALIAS_PREFIX: Final[str] = "npm:"

#: Prefix allowed inside a git URL fragment before a semver range.
SEMVER_TAG_PREFIX: Final[str] = "semver:"

#: Characters that stand for "any value" in a version part.
WILDCARD_CHARS: Final[Sequence[str]] = ("*", "x", "X")

# ---------------------------------------------------------------------------
# Configuration defaults
# ---------------------------------------------------------------------------

#: Default for ``remove_range``.
DEFAULT_REMOVE_RANGE: Final[bool] = False

#: Config file name searched in the current directory.
CONFIG_FILE_NAME: Final[str] = "depbump.toml"

# ---------------------------------------------------------------------------
# Security constraints
# ---------------------------------------------------------------------------

#: Maximum allowed file size (in bytes) when reading manifests or registries.
MAX_FILE_SIZE: Final[int] = 10 * 1024 * 1024  # 10 MB

# ---------------------------------------------------------------------------
# Logging configuration
# ---------------------------------------------------------------------------

#: Timestamp format for verbose logging.
LOG_DATE_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S"

#: Default log format (non-verbose).
LOG_DEFAULT_FORMAT: Final[str] = "%(levelname)s: %(message)s"

#: Verbose log format including timestamp and logger name.
LOG_VERBOSE_FORMAT: Final[str] = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
