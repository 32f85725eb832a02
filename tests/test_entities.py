"""Tests for domain entities."""

import dataclasses
from datetime import datetime, UTC
from decimal import Decimal

import pytest

from configurator.domain.entities import (
    BillOfMaterials,
    BOMItem,
    ComponentCategory,
    Configuration,
    PricingAdjustment,
    Quote,
    QuoteStatus,
)


def test_component_is_immutable(component_factory):
    component = component_factory("MOTOR-001", ComponentCategory.MOTOR, "649.99")

    with pytest.raises(dataclasses.FrozenInstanceError):
        component.base_price = Decimal("1")


def test_component_is_hashable(component_factory):
    component = component_factory(
        "MOTOR-001",
        ComponentCategory.MOTOR,
        "649.99",
        specifications={"Power": "1.5 kW"},
        compatibility_tags=frozenset({"servo"}),
    )

    assert component in {component}
    assert component.price_formatted == "$649.99"


def test_category_order_is_canonical():
    assert [c.value for c in ComponentCategory] == [
        "Base Unit",
        "Motor",
        "Gearbox",
        "Controller",
        "Sensor",
        "Housing",
        "Connector",
        "Mounting Bracket",
    ]


class TestConfiguration:
    def test_empty_configuration_is_invalid(self):
        assert not Configuration().is_valid

    def test_base_only_is_valid(self, component_factory):
        config = Configuration()
        config.set_base_component(component_factory("BASE-001", ComponentCategory.BASE_UNIT, "1"))

        assert config.is_valid
        assert config.component_ids() == ["BASE-001"]

    def test_one_component_per_category(self, component_factory):
        config = Configuration()
        config.set_base_component(component_factory("BASE-001", ComponentCategory.BASE_UNIT, "1"))
        config.add_component(component_factory("MOTOR-001", ComponentCategory.MOTOR, "1"))
        config.add_component(component_factory("MOTOR-002", ComponentCategory.MOTOR, "1"))

        assert config.component_ids() == ["BASE-001", "MOTOR-002"]

    def test_new_base_discards_parts(self, component_factory):
        config = Configuration()
        config.set_base_component(component_factory("BASE-001", ComponentCategory.BASE_UNIT, "1"))
        config.add_component(component_factory("MOTOR-001", ComponentCategory.MOTOR, "1"))

        config.set_base_component(component_factory("BASE-002", ComponentCategory.BASE_UNIT, "1"))

        assert [c.id for c in config.all_components()] == ["BASE-002"]

    def test_remove_missing_category_is_a_no_op(self):
        config = Configuration()
        config.remove_component(ComponentCategory.SENSOR)
        assert config.selected_components == {}


def test_bom_item_for_component(component_factory):
    item = BOMItem.for_component(component_factory("MOTOR-001", ComponentCategory.MOTOR, "649.99"))

    assert item.id == "MOTOR-001"
    assert item.quantity == 1
    assert item.line_total == Decimal("649.99")
    assert item.line_total_formatted == "$649.99"


def test_bill_totals_and_formatting():
    bill = BillOfMaterials(
        items=(),
        subtotal=Decimal("5699.97"),
        discounts=(
            PricingAdjustment("PRICE-001", "Bundle", Decimal("320.00")),
            PricingAdjustment("PRICE-002", "Loyalty", Decimal("10.00")),
        ),
        additional_charges=(PricingAdjustment("ASSEMBLY-FEE", "Assembly", Decimal("99.99")),),
        tax=Decimal("465.80"),
        total=Decimal("5935.76"),
        generated_date=datetime(2026, 10, 19, tzinfo=UTC),
    )

    assert bill.total_discounts == Decimal("330.00")
    assert bill.total_charges == Decimal("99.99")
    assert bill.total_formatted == "$5,935.76"
    assert PricingAdjustment("X", "", Decimal("-5")).amount_formatted == "-$5.00"


def test_quote_defaults_to_draft():
    bill = BillOfMaterials((), Decimal("0"), (), (), Decimal("0"), Decimal("0"), datetime.now(UTC))
    quote = Quote(
        id="q1",
        quote_number="QT-20261019-0001",
        configuration=Configuration(),
        bill_of_materials=bill,
        created_date=datetime(2026, 10, 19, 9, 30, tzinfo=UTC),
    )

    assert quote.status == QuoteStatus.DRAFT
    assert quote.notes is None
    assert quote.created_date_formatted == "2026-10-19 09:30"
