"""Domain model entities for the configurator.

These are pure data classes representing catalog and quoting concepts,
independent of the database schema. Catalog entities are immutable once
loaded; only Configuration is mutated, and only through the session.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from configurator.utils.money import format_currency


class ComponentCategory(Enum):
    """Catalog categories in canonical display order."""

    BASE_UNIT = "Base Unit"
    MOTOR = "Motor"
    GEARBOX = "Gearbox"
    CONTROLLER = "Controller"
    SENSOR = "Sensor"
    HOUSING = "Housing"
    CONNECTOR = "Connector"
    MOUNTING = "Mounting Bracket"


class PricingRuleType(Enum):
    """Kinds of pricing rules understood by the pricing engine."""

    BUNDLE_DISCOUNT = "Bundle Discount"
    COMPATIBILITY_CHARGE = "Compatibility Charge"
    VOLUME_DISCOUNT = "Volume Discount"
    CUSTOMIZATION = "Customization Fee"


class QuoteStatus(Enum):
    """Quote lifecycle status."""

    DRAFT = "Draft"
    SUBMITTED = "Submitted"
    APPROVED = "Approved"
    REJECTED = "Rejected"


@dataclass(frozen=True)
class Component:
    """Catalog component domain entity."""

    id: str
    name: str
    category: ComponentCategory
    description: str
    part_number: str
    base_price: Decimal
    specifications: dict[str, str] = field(default_factory=dict, hash=False)
    compatibility_tags: frozenset[str] = frozenset()
    image_url: Optional[str] = None
    model_file_name: Optional[str] = None

    @property
    def price_formatted(self) -> str:
        return format_currency(self.base_price)


@dataclass(frozen=True)
class CompatibilityRule:
    """Allow-list of components in one category for an anchor component."""

    id: str
    required_component_id: str
    compatible_component_ids: tuple[str, ...]
    category: ComponentCategory
    # Reserved; not consulted when matching.
    conditions: Optional[dict[str, str]] = field(default=None, hash=False)


@dataclass
class Configuration:
    """In-progress assembly: one base plus at most one component per category."""

    base_component: Optional[Component] = None
    selected_components: dict[ComponentCategory, Component] = field(default_factory=dict)

    def set_base_component(self, component: Component) -> None:
        """Select a base, discarding every previously chosen part."""
        self.base_component = component
        self.selected_components = {component.category: component}

    def add_component(self, component: Component) -> None:
        """Select a component, replacing any selection in its category."""
        self.selected_components[component.category] = component

    def remove_component(self, category: ComponentCategory) -> None:
        self.selected_components.pop(category, None)

    def all_components(self) -> list[Component]:
        return list(self.selected_components.values())

    def component_ids(self) -> list[str]:
        return [component.id for component in self.selected_components.values()]

    @property
    def is_valid(self) -> bool:
        return self.base_component is not None and bool(self.selected_components)


@dataclass(frozen=True)
class PricingRule:
    """Pricing rule domain entity."""

    id: str
    rule_type: PricingRuleType
    component_ids: tuple[str, ...] = ()
    discount_percentage: Optional[Decimal] = None
    additional_charge: Optional[Decimal] = None
    description: str = ""


@dataclass(frozen=True)
class PricingAdjustment:
    """A discount or surcharge line on a bill of materials.

    Discounts are stored as positive magnitudes and subtracted by the
    bill totals.
    """

    id: str
    description: str
    amount: Decimal

    @property
    def amount_formatted(self) -> str:
        formatted = format_currency(abs(self.amount))
        return formatted if self.amount >= 0 else f"-{formatted}"


@dataclass(frozen=True)
class BOMItem:
    """Bill of materials line for a single component."""

    id: str
    component: Component
    quantity: int
    unit_price: Decimal
    line_total: Decimal

    @classmethod
    def for_component(cls, component: Component, quantity: int = 1) -> "BOMItem":
        return cls(
            id=component.id,
            component=component,
            quantity=quantity,
            unit_price=component.base_price,
            line_total=component.base_price * quantity,
        )

    @property
    def line_total_formatted(self) -> str:
        return format_currency(self.line_total)


@dataclass(frozen=True)
class BillOfMaterials:
    """Itemized, priced snapshot of a configuration."""

    items: tuple[BOMItem, ...]
    subtotal: Decimal
    discounts: tuple[PricingAdjustment, ...]
    additional_charges: tuple[PricingAdjustment, ...]
    tax: Decimal
    total: Decimal
    generated_date: datetime

    @property
    def total_discounts(self) -> Decimal:
        return sum((d.amount for d in self.discounts), Decimal("0"))

    @property
    def total_charges(self) -> Decimal:
        return sum((c.amount for c in self.additional_charges), Decimal("0"))

    @property
    def total_formatted(self) -> str:
        return format_currency(self.total)


@dataclass(frozen=True)
class Quote:
    """Persisted, status-tracked snapshot of a configuration and its bill."""

    id: str
    quote_number: str
    configuration: Configuration = field(hash=False)
    bill_of_materials: BillOfMaterials
    created_date: datetime
    status: QuoteStatus = QuoteStatus.DRAFT
    notes: Optional[str] = None

    @property
    def created_date_formatted(self) -> str:
        return self.created_date.strftime("%Y-%m-%d %H:%M")
