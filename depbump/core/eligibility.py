"""Upgrade eligibility rules.

Both arguments to :func:`is_upgradeable` are *comparable* ranges: alias
and URL wrappers have already been stripped by the classifier.
"""

from __future__ import annotations

from typing import Optional

from depbump.constants import TAG_MARKER
from depbump.utils.logger import get_logger
from depbump.utils.version_utils import (
    BASE_PARTS,
    is_pre,
    is_valid_range,
    is_wildcard,
    parse_range,
    parse_version,
    satisfies,
)

logger = get_logger("core.eligibility")


def allows_downgrade(current: Optional[str], policy: str) -> bool:
    """Return True if ``current`` may move to an older version.

    Only a prerelease current under a policy literal that starts with
    the tag marker (``@next``, ``@beta``) qualifies. Any policy string
    beginning with ``@`` counts as a tag.
    """
    return bool(policy) and policy[0] == TAG_MARKER and is_pre(current)


def is_upgradeable(
    current: Optional[str],
    latest: Optional[str],
    *,
    downgrade: bool = False,
) -> bool:
    """Decide whether ``current`` should be replaced to admit ``latest``.

    The declared range is first reduced to the version it names
    (``^1.0.1`` -> ``1.0.1``) so that an out-of-date range still upgrades
    even though ``latest`` satisfies it. Then:

    - a ``latest`` equal to that version (or inside its x-range, for
      partial specs such as ``1.2``) is not an upgrade, so a prerelease
      such as ``2.0.0-beta.1`` still moves to ``2.0.0``;
    - a ``latest`` below it is only accepted in ``downgrade`` mode;
    - a ``<`` bound is judged as a whole: ``<2.0.0`` upgrades once
      ``latest`` reaches ``2.0.0``;
    - wildcards, non-semver currents (dist-tags, branches) and
      unparseable ``latest`` values are never upgradeable.

    Examples:
        >>> is_upgradeable("^4.17.0", "4.17.21")
        True
        >>> is_upgradeable("^4.17.21", "4.17.21")
        False
        >>> is_upgradeable("2.0.0-beta.1", "1.9.0")
        False
        >>> is_upgradeable("2.0.0-beta.1", "1.9.0", downgrade=True)
        True
        >>> is_upgradeable("<2.0.0", "2.0.0")
        True
    """
    if not current or not latest:
        return False

    if is_wildcard(current) or not is_valid_range(current):
        return False

    latest_version = parse_version(latest)
    if latest_version is None:
        logger.debug("Latest version %r is not a semver version", latest)
        return False

    tokens = parse_range(current)
    if not tokens:
        return False

    declared = tokens[0]
    floor = declared.to_version()
    if floor is None or not is_valid_range(declared.version):
        return False

    # An upper bound excludes its own version
    if declared.operator == "<":
        return not satisfies(latest, str(declared))

    if declared.precision == len(BASE_PARTS) and declared.wildcard is None:
        # NpmSpec lets "2.0.0-beta.1" match its own release
        matched = latest_version == floor
    else:
        matched = satisfies(latest, declared.version)

    if matched:
        return downgrade and latest_version != floor

    if latest_version < floor:
        return downgrade

    return True
