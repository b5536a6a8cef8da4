"""
Terminal output for depbump commands.

Everything the user is meant to read goes through the rich console held
here: status lines, the upgrade table, JSON output and the confirmation
prompt. Diagnostics belong to :mod:`depbump.utils.logger` instead.
"""

from __future__ import annotations

import os
import sys
import threading
from typing import Any, Callable, Dict, List, Optional

from rich.table import Table
from rich.theme import Theme
from rich.console import Console

DEPBUMP_THEME = Theme(
    {
        "success": "bold green",
        "error": "bold red",
        "warning": "bold yellow",
        "info": "bold cyan",
        "dim": "dim",
        "highlight": "bold magenta",
    }
)

_UPDATE_COLORS = {
    "major": "red",
    "minor": "yellow",
    "patch": "green",
    "new": "cyan",
    "downgrade": "red",
    "update": "yellow",
}

_YES = frozenset({"y", "yes"})
_NO = frozenset({"n", "no"})

_console: Optional[Console] = None
_console_lock = threading.Lock()


def _should_use_color() -> bool:
    """Color only on an interactive stdout, and never under NO_COLOR or CI."""
    if os.environ.get("NO_COLOR") or os.environ.get("CI"):
        return False
    try:
        return sys.stdout.isatty()
    except (AttributeError, OSError):
        return False


def _get_console() -> Console:
    global _console

    if _console is None:
        with _console_lock:
            if _console is None:
                color = _should_use_color()
                _console = Console(theme=DEPBUMP_THEME, no_color=not color, highlight=color)
    return _console


def reconfigure_console() -> None:
    """Drop the shared console so the next write picks up the current
    environment (``--no-color`` sets ``NO_COLOR`` after startup)."""
    global _console
    with _console_lock:
        _console = None


def get_raw_console() -> Console:
    return _get_console()


def print_success(message: str, *, prefix: str = "[OK]") -> None:
    _get_console().print(f"{prefix} {message}", style="success")


def print_error(message: str, *, prefix: str = "[ERROR]") -> None:
    _get_console().print(f"{prefix} {message}", style="error")


def print_warning(message: str, *, prefix: str = "[WARNING]") -> None:
    _get_console().print(f"{prefix} {message}", style="warning")


def print_table(
    data: List[Dict[str, Any]],
    *,
    headers: Optional[List[str]] = None,
    title: Optional[str] = None,
    column_styles: Optional[Dict[str, Dict[str, Any]]] = None,
) -> None:
    """Print ``data`` rows as a table; nothing is printed for no rows.

    ``headers`` fixes the column order (the first row's keys otherwise)
    and ``column_styles`` maps a header to ``style``/``justify``/
    ``no_wrap``/``overflow`` settings for that column. Cells a row lacks
    are left blank.
    """
    if not data:
        return

    columns = headers or list(data[0])
    styles = column_styles or {}

    table = Table(title=title, show_header=True, header_style="bold")
    for column in columns:
        settings = styles.get(column, {})
        table.add_column(
            column,
            style=settings.get("style"),
            justify=settings.get("justify", "default"),
            no_wrap=settings.get("no_wrap", False),
            overflow=settings.get("overflow", "fold"),
        )

    for row in data:
        table.add_row(*(str(row.get(column, "")) for column in columns))

    _get_console().print(table)


def print_json(data: Any) -> None:
    _get_console().print_json(data=data)


def confirm(message: str, *, default: bool = False) -> bool:
    """Ask a yes/no question on the terminal.

    Anything other than y/yes/n/no (including a bare Enter) answers
    ``default``. An interrupted or closed stdin answers no.
    """
    console = _get_console()
    hint = "[Y/n]" if default else "[y/N]"
    console.print(f"{message} {hint}: ", end="", style="info")

    try:
        answer = input().strip().lower()
    except (KeyboardInterrupt, EOFError):
        console.print()
        return False

    if answer in _YES:
        return True
    if answer in _NO:
        return False
    return default


def colorize_update_type(update_type: str) -> str:
    """Wrap an update type such as ``major`` in its rich color markup."""
    color = _UPDATE_COLORS.get(update_type.lower())
    return f"[{color}]{update_type}[/{color}]" if color else update_type


class HighlightedKeywords:
    """Lazily built map of Rich-markup keywords for code snippets in help.

    One instance is created by the CLI root and handed to whatever renders
    highlighted snippets, so separate invocations (and tests) never share
    a half-initialised map.

    Args:
        factory: Callable producing the keyword map; defaults to the
            Python keyword palette used by ``depbump help-target``.

    Example:
        >>> keywords = HighlightedKeywords()
        >>> keywords.get()["keyReturn"]
        '[red]return[/red]'
    """

    def __init__(
        self,
        factory: Optional[Callable[[], Dict[str, str]]] = None,
    ) -> None:
        self._factory = factory or _default_keywords
        self._keywords: Optional[Dict[str, str]] = None
        self._lock = threading.Lock()

    @property
    def loaded(self) -> bool:
        return self._keywords is not None

    def get(self) -> Dict[str, str]:
        """Return the keyword map, building it on first use."""
        if self._keywords is None:
            with self._lock:
                if self._keywords is None:
                    self._keywords = dict(self._factory())
        return self._keywords

    def format(self, template: str) -> str:
        """Substitute ``{keyName}`` placeholders in ``template``."""
        return template.format(**self.get())

    def reset(self) -> None:
        with self._lock:
            self._keywords = None


def _default_keywords() -> Dict[str, str]:
    def paint(color: str, text: str) -> str:
        return f"[{color}]{text}[/{color}]"

    return {
        "keyDef": paint("cyan", "def"),
        "keyIf": paint("red", "if"),
        "keyReturn": paint("red", "return"),
        "keyTrue": paint("cyan", "True"),
        "keyFalse": paint("cyan", "False"),
        "keyAssign": paint("red", "="),
        "keyEq": paint("red", "=="),
        "keyAnd": paint("red", "and"),
        "keyLess": paint("red", "<"),
        "keyGreater": paint("red", ">"),
        "keyIn": paint("red", "in"),
        "keyNone": paint("cyan", "None"),
    }
