"""Manifest reader for ``package.json`` files.

The parsed JSON is only used to *read* the declared dependencies. Writing
back always goes through :class:`~depbump.core.patcher.ManifestPatcher`
on the original text, so :class:`Manifest` keeps both.

Typical usage::

    from depbump.core.manifest import ManifestParser

    manifest = ManifestParser().parse_file("package.json")
    current = manifest.dependencies(["dependencies", "devDependencies"])
"""

from __future__ import annotations

import re
import json
from pathlib import Path
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Sequence, Union

from depbump.constants import OVERRIDES_SECTION, PACKAGE_MANAGER_FIELD
from depbump.core.patcher import resolve_dep_sections
from depbump.exceptions import ParseError
from depbump.utils.filesystem import safe_read_file
from depbump.utils.logger import get_logger

logger = get_logger("core.manifest")

_PACKAGE_MANAGER_VALUE_RE = re.compile(r"^((?:@[^@/]+/)?[^@]+)@(.+)$")


@dataclass
class Manifest:
    """A loaded manifest.

    Attributes:
        text: Raw manifest text, exactly as read.
        data: Decoded JSON object.
        path: Source file, when loaded from disk.
    """

    text: str
    data: Dict[str, Any] = field(default_factory=dict)
    path: Optional[Path] = None

    @property
    def name(self) -> Optional[str]:
        value = self.data.get("name")
        return value if isinstance(value, str) else None

    def dependencies(
        self,
        dep: Union[str, Sequence[str], None] = None,
    ) -> Dict[str, str]:
        """Merge the requested sections into one ``{name: spec}`` map.

        Sections are read in the requested order and the first declaration
        of a name wins. Override entries of the form ``{".": "1.0.0"}``
        contribute their ``"."`` value. ``packageManager`` contributes
        ``{name: version}`` from its ``"<name>@<version>"`` value.
        """
        merged: Dict[str, str] = {}

        for section in resolve_dep_sections(dep):
            if section == PACKAGE_MANAGER_FIELD:
                self._merge_package_manager(merged)
                continue

            entries = self.data.get(section)
            if not isinstance(entries, dict):
                continue

            for name, spec in entries.items():
                if section == OVERRIDES_SECTION and isinstance(spec, dict):
                    spec = spec.get(".")
                if isinstance(spec, str) and name not in merged:
                    merged[name] = spec

        return merged

    def _merge_package_manager(self, merged: Dict[str, str]) -> None:
        value = self.data.get(PACKAGE_MANAGER_FIELD)
        if not isinstance(value, str):
            return
        match = _PACKAGE_MANAGER_VALUE_RE.match(value)
        if match is None:
            logger.debug("Ignoring malformed packageManager value %r", value)
            return
        merged.setdefault(match.group(1), match.group(2))


class ManifestParser:
    """Reads ``package.json`` manifests."""

    def parse_file(self, file_path: Union[str, Path]) -> Manifest:
        """Read and decode a manifest from disk.

        Raises:
            FileOperationError: The file does not exist or cannot be read.
            ParseError: The file is not a JSON object.
        """
        path = Path(file_path)
        text = safe_read_file(path)
        manifest = self.parse_string(text, source_file_path=str(path))
        manifest.path = path
        return manifest

    def parse_string(
        self,
        text: str,
        source_file_path: Optional[str] = None,
    ) -> Manifest:
        """Decode manifest text.

        Raises:
            ParseError: ``text`` is not valid JSON or not an object.
        """
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ParseError(
                f"Invalid JSON: {exc.msg}",
                file_path=source_file_path,
                line_number=exc.lineno,
            ) from exc

        if not isinstance(data, dict):
            raise ParseError(
                "Manifest must be a JSON object",
                file_path=source_file_path,
            )

        logger.debug(
            "Parsed manifest%s",
            f" {source_file_path}" if source_file_path else "",
        )
        return Manifest(text=text, data=data)
