"""
Version spec data model for depbump.

A *version spec* is the string a manifest declares for a dependency.
These types describe what the classifier extracted from a spec and what
the upgrader decided to do with it.
"""

from __future__ import annotations

from enum import Enum
from dataclasses import dataclass
from typing import Optional

from depbump.utils.version_utils import get_update_type


class SpecKind(str, Enum):
    """Structural kind of a version spec."""

    PLAIN = "plain"
    ALIAS = "alias"
    SOURCE_URL = "source_url"


class WildcardStyle(str, Enum):
    """Range-operator family used when a new constraint has no notation
    of its own to follow."""

    CARET = "^"
    TILDE = "~"
    PARTIAL = ".x"
    EXACT = ""

    def render(self, version: str) -> str:
        """Express a concrete version in this style.

        Examples:
            >>> WildcardStyle.TILDE.render("1.2.3")
            '~1.2.3'
            >>> WildcardStyle.PARTIAL.render("1.2.3")
            '1.x'
        """
        if self is WildcardStyle.PARTIAL:
            return f"{version.split('.', 1)[0]}.x"
        return f"{self.value}{version}"


class DependencySection(str, Enum):
    """Manifest sections that declare dependencies."""

    DEPENDENCIES = "dependencies"
    DEV_DEPENDENCIES = "devDependencies"
    PEER_DEPENDENCIES = "peerDependencies"
    OPTIONAL_DEPENDENCIES = "optionalDependencies"
    OVERRIDES = "overrides"
    PACKAGE_MANAGER = "packageManager"


@dataclass(frozen=True)
class ParsedSpec:
    """A classified version spec.

    Attributes:
        raw: The spec exactly as declared.
        kind: Structural kind.
        comparable: The semver range inside any wrapper, or ``None`` when
            the spec carries no comparable range (e.g. a git branch).
        alias_name: Real package name of an npm alias.
        url_prefix: Everything of a source URL up to and including ``#``
            (or the whole URL when there is no fragment).
        tag_prefix: Fragment text preceding the range (``semver:``, ``v``).
        tag_encoded: Whether the fragment was percent-encoded.
        raw_tag_prefix: ``tag_prefix`` as written, escapes included.
        raw_tag: The range part of the fragment as written.
    """

    raw: str
    kind: SpecKind = SpecKind.PLAIN
    comparable: Optional[str] = None
    alias_name: Optional[str] = None
    url_prefix: Optional[str] = None
    tag_prefix: str = ""
    tag_encoded: bool = False
    raw_tag_prefix: str = ""
    raw_tag: str = ""

    @property
    def is_plain(self) -> bool:
        return self.kind is SpecKind.PLAIN


@dataclass
class UpgradeDecision:
    """The upgrader's verdict for one package.

    Attributes:
        package_name: Declared dependency name.
        current: Declared version spec.
        latest: Latest known version (possibly wrapped).
        eligible: Whether the spec should be replaced.
        new_spec: Replacement spec when ``eligible``.
        policy: Target policy literal resolved for this package.
    """

    package_name: str
    current: str
    latest: str
    eligible: bool = False
    new_spec: Optional[str] = None
    policy: Optional[str] = None

    @property
    def update_type(self) -> str:
        return get_update_type(self.current, self.new_spec or self.latest)
