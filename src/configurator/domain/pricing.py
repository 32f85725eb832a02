"""Pricing engine: turns a configuration into a bill of materials.

Resolution order:
1. One line item per selected component at quantity 1
2. Bundle discounts on exactly the bundled components
3. Customization fee for complex configurations (6+ components)
4. Fixed assembly and testing fee
5. Flat-rate tax on the adjusted subtotal

All arithmetic is Decimal; only the bundle discount and the tax are rounded.
"""

import logging
from datetime import datetime, UTC
from decimal import Decimal
from typing import Iterable, Optional

from configurator.domain.entities import (
    BillOfMaterials,
    BOMItem,
    Component,
    Configuration,
    PricingAdjustment,
    PricingRule,
    PricingRuleType,
)
from configurator.domain.errors import InvalidSelectionError
from configurator.utils.money import round_currency

logger = logging.getLogger(__name__)

TAX_RATE = Decimal("0.085")
ASSEMBLY_FEE = Decimal("99.99")
ASSEMBLY_FEE_ID = "ASSEMBLY-FEE"
ASSEMBLY_FEE_DESCRIPTION = "Professional assembly and testing"
CUSTOMIZATION_THRESHOLD = 6


class PricingEngine:
    """Stateless evaluator of pricing rules."""

    def __init__(self, tax_rate: Decimal = TAX_RATE, assembly_fee: Decimal = ASSEMBLY_FEE):
        """Initialize pricing engine.

        Args:
            tax_rate: Flat tax rate applied to the adjusted subtotal
            assembly_fee: Surcharge added to every bill
        """
        self.tax_rate = tax_rate
        self.assembly_fee = assembly_fee

    def price(
        self, configuration: Configuration, rules: Iterable[PricingRule]
    ) -> BillOfMaterials:
        """Compute the bill of materials for a configuration.

        Args:
            configuration: Configuration to price
            rules: Pricing rules to evaluate

        Returns:
            Immutable bill of materials

        Raises:
            InvalidSelectionError: If the configuration has no components
        """
        components = configuration.all_components()
        if not components:
            raise InvalidSelectionError("Cannot price a configuration with no components")

        items = tuple(BOMItem.for_component(component) for component in components)
        subtotal = sum((item.line_total for item in items), Decimal("0"))

        discounts, charges = self._apply_rules(components, list(rules))

        total_discounts = sum((d.amount for d in discounts), Decimal("0"))
        total_charges = sum((c.amount for c in charges), Decimal("0"))
        taxable = subtotal - total_discounts + total_charges
        tax = round_currency(taxable * self.tax_rate)
        total = subtotal - total_discounts + total_charges + tax

        logger.debug(
            "Priced %d components: subtotal=%s discounts=%s charges=%s tax=%s total=%s",
            len(items), subtotal, total_discounts, total_charges, tax, total,
        )

        return BillOfMaterials(
            items=items,
            subtotal=subtotal,
            discounts=tuple(discounts),
            additional_charges=tuple(charges),
            tax=tax,
            total=total,
            generated_date=datetime.now(UTC),
        )

    def _apply_rules(
        self, components: list[Component], rules: list[PricingRule]
    ) -> tuple[list[PricingAdjustment], list[PricingAdjustment]]:
        """Evaluate rules into (discounts, surcharges)."""
        discounts: list[PricingAdjustment] = []
        charges: list[PricingAdjustment] = []
        selected_ids = {component.id for component in components}

        for rule in rules:
            if rule.rule_type == PricingRuleType.BUNDLE_DISCOUNT:
                discount = self._bundle_discount(rule, components, selected_ids)
                if discount is not None:
                    discounts.append(discount)

            elif rule.rule_type == PricingRuleType.CUSTOMIZATION:
                if len(components) >= CUSTOMIZATION_THRESHOLD and rule.additional_charge is not None:
                    charges.append(
                        PricingAdjustment(
                            id=rule.id, description=rule.description, amount=rule.additional_charge
                        )
                    )

            # Compatibility charges and volume discounts carry no policy yet.

        charges.append(
            PricingAdjustment(
                id=ASSEMBLY_FEE_ID, description=ASSEMBLY_FEE_DESCRIPTION, amount=self.assembly_fee
            )
        )
        return discounts, charges

    def _bundle_discount(
        self, rule: PricingRule, components: list[Component], selected_ids: set[str]
    ) -> Optional[PricingAdjustment]:
        bundle_ids = set(rule.component_ids)
        if not bundle_ids or not bundle_ids <= selected_ids:
            return None
        if rule.discount_percentage is None:
            return None

        bundle_total = sum(
            (c.base_price for c in components if c.id in bundle_ids), Decimal("0")
        )
        amount = round_currency(bundle_total * rule.discount_percentage / 100)
        logger.debug("Bundle %s matched: %s%% of %s = %s", rule.id, rule.discount_percentage, bundle_total, amount)
        return PricingAdjustment(id=rule.id, description=rule.description, amount=amount)
