"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, so catalog tables can evolve
without touching the domain entities.
"""

from decimal import Decimal
from typing import Optional

from configurator.domain import entities as domain
from configurator.database.models import (
    Component as ORMComponent,
    CompatibilityRule as ORMCompatibilityRule,
    PricingRule as ORMPricingRule,
)


def _decimal(value) -> Optional[Decimal]:
    if value is None:
        return None
    return value if isinstance(value, Decimal) else Decimal(str(value))


def component_to_domain(orm_component: ORMComponent) -> domain.Component:
    """Convert SQLAlchemy Component model to domain Component entity."""
    return domain.Component(
        id=orm_component.component_id,
        name=orm_component.name,
        category=domain.ComponentCategory(orm_component.category),
        description=orm_component.description or "",
        part_number=orm_component.part_number,
        base_price=_decimal(orm_component.base_price),
        specifications=dict(orm_component.specifications or {}),
        compatibility_tags=frozenset(orm_component.compatibility_tags or ()),
        image_url=orm_component.image_url,
        model_file_name=orm_component.model_file_name,
    )


def component_to_orm(component: domain.Component) -> ORMComponent:
    """Convert domain Component entity to a new SQLAlchemy Component model."""
    return ORMComponent(
        component_id=component.id,
        name=component.name,
        category=component.category.value,
        description=component.description,
        part_number=component.part_number,
        base_price=component.base_price,
        specifications=dict(component.specifications),
        compatibility_tags=sorted(component.compatibility_tags),
        image_url=component.image_url,
        model_file_name=component.model_file_name,
    )


def compatibility_rule_to_domain(orm_rule: ORMCompatibilityRule) -> domain.CompatibilityRule:
    """Convert SQLAlchemy CompatibilityRule model to domain CompatibilityRule entity."""
    return domain.CompatibilityRule(
        id=orm_rule.rule_id,
        required_component_id=orm_rule.required_component_id,
        compatible_component_ids=tuple(orm_rule.compatible_component_ids or ()),
        category=domain.ComponentCategory(orm_rule.category),
        conditions=dict(orm_rule.conditions) if orm_rule.conditions else None,
    )


def compatibility_rule_to_orm(rule: domain.CompatibilityRule) -> ORMCompatibilityRule:
    """Convert domain CompatibilityRule entity to a new SQLAlchemy model."""
    return ORMCompatibilityRule(
        rule_id=rule.id,
        required_component_id=rule.required_component_id,
        category=rule.category.value,
        compatible_component_ids=list(rule.compatible_component_ids),
        conditions=dict(rule.conditions) if rule.conditions else None,
    )


def pricing_rule_to_domain(orm_rule: ORMPricingRule) -> domain.PricingRule:
    """Convert SQLAlchemy PricingRule model to domain PricingRule entity."""
    return domain.PricingRule(
        id=orm_rule.rule_id,
        rule_type=domain.PricingRuleType(orm_rule.rule_type),
        component_ids=tuple(orm_rule.component_ids or ()),
        discount_percentage=_decimal(orm_rule.discount_percentage),
        additional_charge=_decimal(orm_rule.additional_charge),
        description=orm_rule.description or "",
    )


def pricing_rule_to_orm(rule: domain.PricingRule) -> ORMPricingRule:
    """Convert domain PricingRule entity to a new SQLAlchemy model."""
    return ORMPricingRule(
        rule_id=rule.id,
        rule_type=rule.rule_type.value,
        component_ids=list(rule.component_ids),
        discount_percentage=rule.discount_percentage,
        additional_charge=rule.additional_charge,
        description=rule.description,
    )
