"""
depbump version information.

The version reported by ``depbump --version`` and sent in the HTTP
User-Agent. Keep in sync with ``pyproject.toml``.
"""

from __future__ import annotations

__version__ = "0.3.0"
