"""JSON documents for quotes.

`quote_to_dict` is also the export format handed to document generators:
it is fully resolved (components, adjustments and totals inline) so a
renderer never has to re-derive pricing. Amounts are written as strings to
keep them exact.
"""

import json
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from dateutil import parser as date_parser

from configurator.domain.entities import (
    BillOfMaterials,
    BOMItem,
    Component,
    ComponentCategory,
    Configuration,
    PricingAdjustment,
    Quote,
    QuoteStatus,
)
from configurator.domain.errors import PersistenceDecodeError

SCHEMA_VERSION = 1


def component_to_dict(component: Component) -> dict[str, Any]:
    return {
        "id": component.id,
        "name": component.name,
        "category": component.category.value,
        "description": component.description,
        "part_number": component.part_number,
        "base_price": str(component.base_price),
        "specifications": dict(component.specifications),
        "compatibility_tags": sorted(component.compatibility_tags),
        "image_url": component.image_url,
        "model_file_name": component.model_file_name,
    }


def component_from_dict(data: dict[str, Any]) -> Component:
    return Component(
        id=data["id"],
        name=data["name"],
        category=ComponentCategory(data["category"]),
        description=data.get("description", ""),
        part_number=data["part_number"],
        base_price=Decimal(data["base_price"]),
        specifications=dict(data.get("specifications") or {}),
        compatibility_tags=frozenset(data.get("compatibility_tags") or ()),
        image_url=data.get("image_url"),
        model_file_name=data.get("model_file_name"),
    )


def _adjustment_to_dict(adjustment: PricingAdjustment) -> dict[str, Any]:
    return {
        "id": adjustment.id,
        "description": adjustment.description,
        "amount": str(adjustment.amount),
    }


def _adjustment_from_dict(data: dict[str, Any]) -> PricingAdjustment:
    return PricingAdjustment(
        id=data["id"], description=data["description"], amount=Decimal(data["amount"])
    )


def configuration_to_dict(configuration: Configuration) -> dict[str, Any]:
    base = configuration.base_component
    return {
        "base_component": component_to_dict(base) if base is not None else None,
        "selected_components": {
            category.value: component_to_dict(component)
            for category, component in configuration.selected_components.items()
        },
    }


def configuration_from_dict(data: dict[str, Any]) -> Configuration:
    base = data.get("base_component")
    return Configuration(
        base_component=component_from_dict(base) if base is not None else None,
        selected_components={
            ComponentCategory(category): component_from_dict(component)
            for category, component in data["selected_components"].items()
        },
    )


def bill_to_dict(bill: BillOfMaterials) -> dict[str, Any]:
    return {
        "items": [
            {
                "id": item.id,
                "component": component_to_dict(item.component),
                "quantity": item.quantity,
                "unit_price": str(item.unit_price),
                "line_total": str(item.line_total),
            }
            for item in bill.items
        ],
        "subtotal": str(bill.subtotal),
        "discounts": [_adjustment_to_dict(d) for d in bill.discounts],
        "additional_charges": [_adjustment_to_dict(c) for c in bill.additional_charges],
        "tax": str(bill.tax),
        "total": str(bill.total),
        "generated_date": bill.generated_date.isoformat(),
    }


def bill_from_dict(data: dict[str, Any]) -> BillOfMaterials:
    return BillOfMaterials(
        items=tuple(
            BOMItem(
                id=item["id"],
                component=component_from_dict(item["component"]),
                quantity=int(item["quantity"]),
                unit_price=Decimal(item["unit_price"]),
                line_total=Decimal(item["line_total"]),
            )
            for item in data["items"]
        ),
        subtotal=Decimal(data["subtotal"]),
        discounts=tuple(_adjustment_from_dict(d) for d in data["discounts"]),
        additional_charges=tuple(_adjustment_from_dict(c) for c in data["additional_charges"]),
        tax=Decimal(data["tax"]),
        total=Decimal(data["total"]),
        generated_date=_parse_datetime(data["generated_date"]),
    )


def quote_to_dict(quote: Quote) -> dict[str, Any]:
    """Convert a quote to a JSON-ready document."""
    return {
        "id": quote.id,
        "quote_number": quote.quote_number,
        "status": quote.status.value,
        "created_date": quote.created_date.isoformat(),
        "notes": quote.notes,
        "configuration": configuration_to_dict(quote.configuration),
        "bill_of_materials": bill_to_dict(quote.bill_of_materials),
    }


def quote_from_dict(data: dict[str, Any]) -> Quote:
    return Quote(
        id=data["id"],
        quote_number=data["quote_number"],
        configuration=configuration_from_dict(data["configuration"]),
        bill_of_materials=bill_from_dict(data["bill_of_materials"]),
        created_date=_parse_datetime(data["created_date"]),
        status=QuoteStatus(data["status"]),
        notes=data.get("notes"),
    )


def quotes_to_blob(quotes: list[Quote]) -> str:
    """Serialize the whole quote list as one document."""
    return json.dumps(
        {"version": SCHEMA_VERSION, "quotes": [quote_to_dict(q) for q in quotes]},
        sort_keys=True,
    )


def quotes_from_blob(blob: Optional[str]) -> list[Quote]:
    """Deserialize a quote list document.

    Returns an empty list for a missing blob.

    Raises:
        PersistenceDecodeError: If the document is corrupt or has an
            unexpected schema
    """
    if blob is None:
        return []
    try:
        document = json.loads(blob)
        if not isinstance(document, dict) or document.get("version") != SCHEMA_VERSION:
            raise PersistenceDecodeError("Unsupported saved quotes document")
        return [quote_from_dict(item) for item in document["quotes"]]
    except PersistenceDecodeError:
        raise
    except (ValueError, KeyError, TypeError, AttributeError, InvalidOperation) as e:
        raise PersistenceDecodeError(f"Could not decode saved quotes: {e}") from e


def _parse_datetime(value: str) -> datetime:
    return date_parser.isoparse(value)
