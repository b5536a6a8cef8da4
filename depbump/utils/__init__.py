"""
Utility helpers for depbump.

This package provides reusable utilities used across depbump, including:

- Console output helpers (Rich-based)
- Logging configuration and retrieval
- Byte-faithful filesystem helpers
- Async HTTP client for remote registries
- npm version algebra helpers

Only symbols listed in ``__all__`` are considered part of the public API.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Logging utilities
# ---------------------------------------------------------------------------

from depbump.utils.logger import (
    disable_logging,
    get_logger,
    is_logging_configured,
    level_from_verbosity,
    setup_logging,
)

# ---------------------------------------------------------------------------
# Filesystem utilities
# ---------------------------------------------------------------------------

from depbump.utils.filesystem import (
    create_timestamped_backup,
    restore_backup,
    safe_read_file,
    safe_write_file,
)

# ---------------------------------------------------------------------------
# Console utilities
# ---------------------------------------------------------------------------

from depbump.utils.console import (
    HighlightedKeywords,
    colorize_update_type,
    confirm,
    get_raw_console,
    print_error,
    print_json,
    print_success,
    print_table,
    print_warning,
    reconfigure_console,
)

# ---------------------------------------------------------------------------
# HTTP utilities
# ---------------------------------------------------------------------------

from depbump.utils.http import HTTPClient

# ---------------------------------------------------------------------------
# Version utilities
# ---------------------------------------------------------------------------

from depbump.utils.version_utils import (
    SemverToken,
    get_update_type,
    is_pre,
    is_valid_range,
    is_wildcard,
    parse_range,
    parse_version,
    satisfies,
)

# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

__all__ = [
    # Console
    "confirm",
    "print_error",
    "print_json",
    "print_table",
    "print_success",
    "print_warning",
    "get_raw_console",
    "reconfigure_console",
    "colorize_update_type",
    "HighlightedKeywords",
    # Logging
    "get_logger",
    "setup_logging",
    "disable_logging",
    "is_logging_configured",
    "level_from_verbosity",
    # Filesystem
    "safe_read_file",
    "safe_write_file",
    "restore_backup",
    "create_timestamped_backup",
    # HTTP
    "HTTPClient",
    # Version utilities
    "SemverToken",
    "get_update_type",
    "is_pre",
    "is_valid_range",
    "is_wildcard",
    "parse_range",
    "parse_version",
    "satisfies",
]
