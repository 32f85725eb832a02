"""Catalog domain service."""

import logging
from typing import Optional

from configurator.database.base import CatalogProvider
from configurator.domain.compatibility import CompatibilityMatrix
from configurator.domain.entities import Component, ComponentCategory, PricingRule
from configurator.domain.errors import (
    UnknownCategoryError,
    UnknownComponentError,
    category_not_found,
    component_not_found,
)

logger = logging.getLogger(__name__)


def parse_category(value: ComponentCategory | str) -> ComponentCategory:
    """Resolve a category from an enum member, display name or member name.

    Matching is case-insensitive; "mounting bracket", "Mounting Bracket",
    "MOUNTING" and "mounting_bracket" are all accepted.

    Raises:
        UnknownCategoryError: If the value names no category
    """
    if isinstance(value, ComponentCategory):
        return value

    normalized = value.strip().lower().replace("_", " ").replace("-", " ")
    for category in ComponentCategory:
        if normalized in (category.value.lower(), category.name.lower().replace("_", " ")):
            return category

    raise UnknownCategoryError(
        category_not_found(value, [category.value for category in ComponentCategory])
    )


class CatalogService:
    """Read-only view over a catalog provider.

    Components and rules are loaded once at construction; reloading the
    catalog means constructing a new service.
    """

    def __init__(self, provider: CatalogProvider):
        """Initialize catalog service.

        Args:
            provider: Catalog provider (database or in-memory catalog)
        """
        self.provider = provider
        self._components = tuple(provider.all_components())
        self._by_id = {component.id: component for component in self._components}
        self._pricing_rules = tuple(provider.pricing_rules())
        self.matrix = CompatibilityMatrix(provider.rules())
        logger.debug(
            "Loaded catalog: %d components, %d anchors, %d pricing rules",
            len(self._components), len(self.matrix.anchors), len(self._pricing_rules),
        )

    @property
    def components(self) -> tuple[Component, ...]:
        return self._components

    @property
    def pricing_rules(self) -> tuple[PricingRule, ...]:
        return self._pricing_rules

    def get_component(self, component_id: str) -> Component:
        """Get component by id.

        Raises:
            UnknownComponentError: If the id is not in the catalog
        """
        component = self._by_id.get(component_id)
        if component is None:
            raise UnknownComponentError(component_not_found(component_id))
        return component

    def find_component(self, component_id: str) -> Optional[Component]:
        return self._by_id.get(component_id)

    def list_components(
        self, category: Optional[ComponentCategory | str] = None
    ) -> list[Component]:
        """List components, optionally filtered by category.

        Raises:
            UnknownCategoryError: If category is given and unknown
        """
        if category is None:
            return list(self._components)
        resolved = parse_category(category)
        return [c for c in self._components if c.category == resolved]

    def base_components(self) -> list[Component]:
        return self.list_components(ComponentCategory.BASE_UNIT)
