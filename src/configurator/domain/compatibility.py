"""Compatibility resolution between catalog components."""

import logging
from collections import defaultdict
from typing import Iterable, Sequence

from configurator.domain.entities import CompatibilityRule, Component, ComponentCategory

logger = logging.getLogger(__name__)


class CompatibilityMatrix:
    """Read-only index of compatibility rules grouped by anchor component.

    A rule anchored at component A for category C lists the components of C
    allowed alongside A. Absence of a rule is never a prohibition: an anchor
    without a rule for a category is compatible with that whole category.
    """

    def __init__(self, rules: Iterable[CompatibilityRule]):
        """Build the index.

        Args:
            rules: All compatibility rules from the catalog
        """
        grouped: dict[str, list[CompatibilityRule]] = defaultdict(list)
        for rule in rules:
            grouped[rule.required_component_id].append(rule)
        self._rules = {anchor: tuple(anchor_rules) for anchor, anchor_rules in grouped.items()}

    @property
    def anchors(self) -> frozenset[str]:
        return frozenset(self._rules)

    def rules_for(self, anchor_id: str) -> tuple[CompatibilityRule, ...]:
        """Return all rules anchored at a component (empty if none)."""
        return self._rules.get(anchor_id, ())

    def compatible_components(
        self,
        anchor_id: str,
        category: ComponentCategory,
        components: Sequence[Component],
    ) -> list[Component]:
        """Components of a category that may be combined with the anchor.

        Args:
            anchor_id: Component the rules are keyed on
            category: Category being constrained
            components: Full catalog

        Returns:
            Matching components in catalog order
        """
        category_rules = [rule for rule in self.rules_for(anchor_id) if rule.category == category]
        if not category_rules:
            return [c for c in components if c.category == category]

        allowed = set()
        for rule in category_rules:
            allowed.update(rule.compatible_component_ids)
        return [c for c in components if c.id in allowed]

    def mutually_compatible(self, component_ids: Sequence[str]) -> bool:
        """Check that every ruled component has an ally among the others.

        For each id that has rules, every rule with a non-empty allow-list
        must list at least one of the other ids. When there are no other ids
        the rule holds vacuously.

        This is not a full pairwise check: two components that are not
        anchors themselves are never checked against each other.
        """
        for component_id in component_ids:
            others = [other for other in component_ids if other != component_id]
            if not others:
                continue
            for rule in self.rules_for(component_id):
                if not rule.compatible_component_ids:
                    continue
                allowed = set(rule.compatible_component_ids)
                if not any(other in allowed for other in others):
                    logger.debug(
                        "Rule %s of %s rejects %s", rule.id, component_id, ", ".join(others)
                    )
                    return False
        return True
