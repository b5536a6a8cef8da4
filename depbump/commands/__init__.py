"""CLI subcommands for depbump."""

from __future__ import annotations

from depbump.commands.check import check
from depbump.commands.upgrade import upgrade
from depbump.commands.help_target import help_target

__all__ = ["check", "upgrade", "help_target"]
