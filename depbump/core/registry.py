"""Static registry of latest versions.

A static registry is a JSON object mapping package names to their latest
version, read from a local file or downloaded from a URL::

    {"lodash": "4.17.21", "react": "18.2.0"}

It is loaded at most once per :class:`StaticRegistry` instance. Failing to
load it is fatal: there is nothing to upgrade against.

Typical usage::

    registry = StaticRegistry("registry.json")
    latest = await registry.latest_versions(["lodash", "react"])
"""

from __future__ import annotations

import json
import asyncio
from typing import Dict, Iterable, Optional

from depbump.exceptions import FileOperationError, NetworkError, RegistryError
from depbump.utils.filesystem import safe_read_file
from depbump.utils.http import HTTPClient
from depbump.utils.logger import get_logger

logger = get_logger("core.registry")

__all__ = ["StaticRegistry", "is_registry_url"]


def is_registry_url(source: str) -> bool:
    return source.startswith(("http://", "https://"))


class StaticRegistry:
    """Latest-version lookups backed by a static JSON document.

    Args:
        source: Local path or ``http(s)://`` URL of the registry.
        http_client: Client used for URL sources. A short-lived
            :class:`HTTPClient` is created when omitted.
    """

    def __init__(self, source: str, http_client: Optional[HTTPClient] = None) -> None:
        self.source = source
        self._http = http_client
        self._versions: Optional[Dict[str, str]] = None
        self._lock = asyncio.Lock()

    async def load(self) -> Dict[str, str]:
        """Return the registry contents, reading them on first call.

        Raises:
            RegistryError: The registry cannot be read or is not a JSON
                object.
        """
        if self._versions is not None:
            return self._versions

        async with self._lock:
            if self._versions is None:
                if is_registry_url(self.source):
                    data = await self._fetch()
                else:
                    data = self._read()
                self._versions = self._validate(data)
                logger.debug(
                    "Loaded %d version(s) from static registry %s",
                    len(self._versions),
                    self.source,
                )

        return self._versions

    async def latest(self, name: str) -> Optional[str]:
        """Return the latest version of ``name``, or ``None`` if unknown."""
        versions = await self.load()
        return versions.get(name)

    async def latest_versions(self, names: Iterable[str]) -> Dict[str, str]:
        """Return ``{name: latest}`` for every name the registry knows."""
        versions = await self.load()
        return {name: versions[name] for name in names if name in versions}

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    async def _fetch(self) -> object:
        try:
            if self._http is not None:
                return await self._http.get_json(self.source)
            async with HTTPClient() as http:
                return await http.get_json(self.source)
        except NetworkError as exc:
            raise RegistryError(
                f"Unable to download static registry: {self.source}",
                source=self.source,
                original_error=exc,
            ) from exc

    def _read(self) -> object:
        try:
            text = safe_read_file(self.source)
        except FileOperationError as exc:
            raise RegistryError(
                f"The specified static registry file does not exist: {self.source}",
                source=self.source,
                original_error=exc,
            ) from exc

        try:
            return json.loads(text)
        except json.JSONDecodeError as exc:
            raise RegistryError(
                f"Static registry is not valid JSON: {self.source}",
                source=self.source,
                original_error=exc,
            ) from exc

    def _validate(self, data: object) -> Dict[str, str]:
        if not isinstance(data, dict):
            raise RegistryError(
                f"Static registry must be a JSON object: {self.source}",
                source=self.source,
            )

        versions: Dict[str, str] = {}
        for name, version in data.items():
            if isinstance(version, str):
                versions[name] = version
            else:
                logger.warning("Ignoring non-string version for %s in static registry", name)
        return versions
