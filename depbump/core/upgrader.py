"""Dependency set upgrades.

Turns a ``{name: current spec}`` map and a ``{name: latest version}`` map
into the ``{name: new spec}`` map of packages that should change. Every
package goes through the same stages:

1. **Filter**: empty specs are dropped. The remaining set decides the
   inferred :class:`~depbump.models.spec.WildcardStyle`, so it is computed
   before packages without a known latest version are discarded. The
   style is handed to the synthesizer but only shapes a range that has
   no comparator of its own. Such specs (wildcards, dist-tags) fail the
   eligibility check, so in this pipeline the style never changes the
   result; it matters to direct
   :func:`~depbump.core.synthesizer.upgrade_dependency_declaration` calls.
2. **Unpack**: aliases and source URLs are reduced to their comparable
   range (:func:`~depbump.core.classifier.classify_spec`).
3. **Decide**: the target policy is resolved for the package, which may
   enable downgrades, then :func:`~depbump.core.eligibility.is_upgradeable`
   is consulted.
4. **Synthesize**: the new range is built in the declared notation and
   put back into its alias or URL wrapper.

Typical usage::

    from depbump.core.upgrader import DependencySetUpgrader
    from depbump.models.options import UpgradeOptions

    upgrader = DependencySetUpgrader(UpgradeOptions(target="@next"))
    upgraded = upgrader.upgrade(
        {"react": "^17.0.2", "next": "14.0.0-canary.1"},
        {"react": "18.2.0", "next": "13.5.6"},
    )
"""

from __future__ import annotations

from typing import Dict, List, Mapping, Optional

from depbump.core.classifier import classify_spec
from depbump.core.eligibility import allows_downgrade, is_upgradeable
from depbump.core.synthesizer import rewrap_spec, upgrade_dependency_declaration
from depbump.core.wildcard import infer_wildcard_style
from depbump.models.options import UpgradeOptions
from depbump.models.spec import UpgradeDecision, WildcardStyle
from depbump.utils.logger import get_logger
from depbump.utils.version_utils import parse_range

logger = get_logger("core.upgrader")

DependencyMap = Mapping[str, Optional[str]]


class DependencySetUpgrader:
    """Computes notation-preserving upgrades for a set of dependencies.

    The upgrader holds no state between calls beyond its options, so one
    instance can be reused for several manifests.

    Args:
        options: Upgrade options. Defaults to ``UpgradeOptions()``.

    Example::

        >>> upgrader = DependencySetUpgrader()
        >>> upgrader.upgrade({"lodash": "^4.17.0"}, {"lodash": "4.17.21"})
        {'lodash': '^4.17.21'}
    """

    def __init__(self, options: Optional[UpgradeOptions] = None) -> None:
        self.options: UpgradeOptions = options or UpgradeOptions()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def plan(
        self,
        current: DependencyMap,
        latest: DependencyMap,
    ) -> List[UpgradeDecision]:
        """Return one decision per package known to both maps.

        Decisions keep the order of ``current``. Ineligible packages are
        included with ``eligible=False`` so callers can report them.
        """
        declared = {name: spec for name, spec in current.items() if spec}
        wildcard = self.options.wildcard or infer_wildcard_style(declared)
        logger.debug("Using wildcard style %r", wildcard.value)

        decisions: List[UpgradeDecision] = []
        for name, spec in declared.items():
            latest_spec = latest.get(name)
            if not latest_spec:
                logger.debug("No latest version known for %s", name)
                continue
            decisions.append(self._decide(name, spec, latest_spec, wildcard))  # type: ignore[arg-type]
        return decisions

    def upgrade(
        self,
        current: DependencyMap,
        latest: DependencyMap,
    ) -> Dict[str, str]:
        """Return ``{name: new spec}`` for every package that should change."""
        return {
            decision.package_name: decision.new_spec
            for decision in self.plan(current, latest)
            if decision.eligible and decision.new_spec is not None
        }

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _decide(
        self,
        name: str,
        current: str,
        latest: str,
        wildcard: WildcardStyle,
    ) -> UpgradeDecision:
        current_parsed = classify_spec(current)
        latest_parsed = classify_spec(latest)
        current_range = current_parsed.comparable
        latest_version = latest_parsed.comparable or latest

        policy = self.options.target.resolve(name, parse_range(current))
        downgrade = allows_downgrade(current_range, policy)

        decision = UpgradeDecision(
            package_name=name,
            current=current,
            latest=latest,
            policy=policy,
        )

        if not is_upgradeable(current_range, latest_version, downgrade=downgrade):
            logger.debug("%s: %s is not upgradeable to %s", name, current, latest)
            return decision

        new_range = upgrade_dependency_declaration(
            current_range,  # type: ignore[arg-type]
            latest_version,
            wildcard=wildcard,
            remove_range=self.options.remove_range,
        )
        new_spec = rewrap_spec(current_parsed, new_range)

        if new_spec == current:
            return decision

        logger.debug("%s: %s -> %s (policy %s)", name, current, new_spec, policy)
        decision.eligible = True
        decision.new_spec = new_spec
        return decision


def upgrade_dependencies(
    current: DependencyMap,
    latest: DependencyMap,
    options: Optional[UpgradeOptions] = None,
) -> Dict[str, str]:
    """Shortcut for ``DependencySetUpgrader(options).upgrade(current, latest)``.

    Example::

        >>> upgrade_dependencies({"foo": "npm:bar@^1.0.0"}, {"foo": "2.0.0"})
        {'foo': 'npm:bar@^2.0.0'}
    """
    return DependencySetUpgrader(options).upgrade(current, latest)
