"""Configuration session: the step-by-step selection workflow.

The session owns the in-progress Configuration and, after every selection
change, recomputes which catalog components may still be picked in each
category. The recomputation always starts from scratch because removing a
part can loosen constraints on unrelated categories.
"""

import logging
from enum import IntEnum
from typing import Optional

from configurator.domain.catalog import CatalogService, parse_category
from configurator.domain.entities import (
    BillOfMaterials,
    Component,
    ComponentCategory,
    Configuration,
    Quote,
)
from configurator.domain.errors import (
    IncompatibleComponentError,
    InvalidSelectionError,
    ValidationError,
    component_not_available,
)
from configurator.domain.pricing import PricingEngine
from configurator.domain.quote import QuoteLedger

logger = logging.getLogger(__name__)

AvailabilityMap = dict[ComponentCategory, list[Component]]


class SessionStep(IntEnum):
    """Workflow steps, in order."""

    SELECTING_BASE = 0
    SELECTING_PARTS = 1
    PREVIEWING = 2
    REVIEWING = 3


class ConfigurationSession:
    """Stateful selection workflow for one user.

    Calls into a session must be serialized by the caller.
    """

    def __init__(self, catalog: CatalogService, pricing_engine: Optional[PricingEngine] = None):
        """Initialize configuration session.

        Args:
            catalog: Catalog service supplying components and rules
            pricing_engine: Pricing engine (defaults to standard rates)
        """
        self.catalog = catalog
        self.pricing_engine = pricing_engine or PricingEngine()
        self.step = SessionStep.SELECTING_BASE
        self.configuration = Configuration()
        self.bill_of_materials: Optional[BillOfMaterials] = None
        self.available: AvailabilityMap = {}
        self._recompute()

    # Step navigation

    def can_proceed(self) -> bool:
        """Whether the entry guard of the next step is satisfied."""
        if self.step == SessionStep.SELECTING_BASE:
            return self.configuration.base_component is not None
        if self.step == SessionStep.SELECTING_PARTS:
            return True
        if self.step == SessionStep.PREVIEWING:
            return self.configuration.is_valid
        return False

    def next_step(self) -> SessionStep:
        """Advance one step.

        Moving from previewing to reviewing computes the bill of materials.

        Raises:
            InvalidSelectionError: If the next step's guard is not satisfied
        """
        if self.step == SessionStep.REVIEWING:
            raise InvalidSelectionError("Already at the final step")
        if self.step == SessionStep.SELECTING_BASE and self.configuration.base_component is None:
            raise InvalidSelectionError("Select a base component before adding parts")
        if self.step == SessionStep.PREVIEWING:
            self.bill_of_materials = self.finalize()

        self.step = SessionStep(self.step + 1)
        logger.debug("Advanced to %s", self.step.name)
        return self.step

    def previous_step(self) -> SessionStep:
        """Go back one step. Selections and the computed bill are kept."""
        if self.step > SessionStep.SELECTING_BASE:
            self.step = SessionStep(self.step - 1)
        return self.step

    def finalize(self) -> BillOfMaterials:
        """Price the current configuration.

        Raises:
            InvalidSelectionError: If no base component is selected
        """
        if self.configuration.base_component is None:
            raise InvalidSelectionError("Cannot finalize a configuration without a base component")
        return self.pricing_engine.price(self.configuration, self.catalog.pricing_rules)

    # Selection

    def select_base(self, component_id: str) -> AvailabilityMap:
        """Select the base component, discarding all other selections.

        Returns:
            Recomputed availability map

        Raises:
            UnknownComponentError: If the id is not in the catalog
            ValidationError: If the component is not a base unit
        """
        component = self.catalog.get_component(component_id)
        if component.category != ComponentCategory.BASE_UNIT:
            raise ValidationError(
                f"Component '{component_id}' is a {component.category.value}, not a base unit"
            )
        self.configuration.set_base_component(component)
        return self._changed()

    def select_component(self, component_id: str) -> AvailabilityMap:
        """Select a part, replacing any selection in its category.

        Returns:
            Recomputed availability map

        Raises:
            InvalidSelectionError: If no base component is selected
            UnknownComponentError: If the id is not in the catalog
            ValidationError: If the component is a base unit
            IncompatibleComponentError: If the part is not currently available
        """
        component = self.catalog.get_component(component_id)
        if component.category == ComponentCategory.BASE_UNIT:
            raise ValidationError("Use select_base to choose a base unit")
        if self.configuration.base_component is None:
            raise InvalidSelectionError("Select a base component before adding parts")
        if component not in self.available.get(component.category, []):
            raise IncompatibleComponentError(
                component_not_available(component_id, component.category.value)
            )
        self.configuration.add_component(component)
        return self._changed()

    def deselect(self, category: ComponentCategory | str) -> AvailabilityMap:
        """Remove the selection in a category.

        Removing the base unit category clears the base as well.

        Raises:
            UnknownCategoryError: If category is not a known category
        """
        resolved = parse_category(category)
        self.configuration.remove_component(resolved)
        if resolved == ComponentCategory.BASE_UNIT:
            self.configuration.base_component = None
        return self._changed()

    def is_selected(self, component_id: str) -> bool:
        return component_id in self.configuration.component_ids()

    def available_components(self, category: ComponentCategory | str) -> list[Component]:
        return list(self.available.get(parse_category(category), []))

    # Quotes

    def generate_quote(self, ledger: QuoteLedger, notes: Optional[str] = None) -> Quote:
        """Turn the reviewed configuration into a draft quote (not saved).

        Raises:
            InvalidSelectionError: If no bill of materials has been computed
        """
        if self.bill_of_materials is None:
            raise InvalidSelectionError("Review the configuration before generating a quote")
        return ledger.generate_quote(self.configuration, self.bill_of_materials, notes=notes)

    def reset(self) -> AvailabilityMap:
        """Start over with an empty configuration."""
        self.step = SessionStep.SELECTING_BASE
        self.configuration = Configuration()
        self.bill_of_materials = None
        return self._recompute()

    # Availability

    def _changed(self) -> AvailabilityMap:
        # A previously computed bill no longer describes the configuration.
        self.bill_of_materials = None
        return self._recompute()

    def _recompute(self) -> AvailabilityMap:
        base = self.configuration.base_component
        available: AvailabilityMap = {
            category: [] for category in ComponentCategory
        }
        available[ComponentCategory.BASE_UNIT] = self.catalog.base_components()

        if base is not None:
            matrix = self.catalog.matrix
            components = self.catalog.components
            selected_ids = self.configuration.component_ids()
            for category in ComponentCategory:
                if category == ComponentCategory.BASE_UNIT:
                    continue
                candidates = matrix.compatible_components(base.id, category, components)
                available[category] = [
                    candidate
                    for candidate in candidates
                    if matrix.mutually_compatible(selected_ids + [candidate.id])
                ]

        self.available = available
        logger.debug(
            "Recomputed availability: %s",
            ", ".join(f"{c.value}={len(parts)}" for c, parts in available.items()),
        )
        return {category: list(parts) for category, parts in available.items()}
