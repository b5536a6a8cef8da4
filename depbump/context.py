"""
Shared context object for depbump CLI commands.

This module defines the global Click context used to share configuration
and runtime options across CLI subcommands.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import click

from depbump.config import DepBumpConfig
from depbump.utils.console import HighlightedKeywords


class DepBumpContext:
    """Global context object for depbump CLI commands.

    An instance of this class is created once per CLI invocation and
    passed to commands using Click's context mechanism.

    Attributes:
        config_path: Path to the depbump configuration file, if provided.
        verbose: Verbosity level (0=WARNING, 1=INFO, 2+=DEBUG).
        color: Whether colored terminal output is enabled.
        config: Loaded configuration, set by the CLI root.
        keywords: Highlight palette for help snippets, built on first use.
    """

    __slots__ = ("config_path", "verbose", "color", "config", "keywords")

    def __init__(self) -> None:
        self.config_path: Optional[Path] = None
        self.verbose: int = 0
        self.color: bool = True
        self.config: DepBumpConfig = DepBumpConfig()
        self.keywords: HighlightedKeywords = HighlightedKeywords()


#: Click decorator for injecting :class:`DepBumpContext` into commands.
pass_context = click.make_pass_decorator(DepBumpContext, ensure=True)
