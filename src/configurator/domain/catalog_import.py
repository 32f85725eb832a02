"""Catalog import domain service.

A catalog directory holds up to three CSV files:

- components.csv: id, name, category, description, part_number, base_price,
  specifications, compatibility_tags
- compatibility_rules.csv: id, required_component_id, category,
  compatible_component_ids
- pricing_rules.csv: id, rule_type, component_ids, discount_percentage,
  additional_charge, description

List columns are separated by ";" and specifications are "label=value" pairs.
Only components.csv is required.
"""

import csv
import logging
from decimal import Decimal
from pathlib import Path
from typing import Any, Callable, Optional

from configurator.database.base import Database
from configurator.domain.catalog import parse_category
from configurator.domain.entities import (
    CompatibilityRule,
    Component,
    PricingRule,
    PricingRuleType,
)
from configurator.domain.errors import DomainError, ValidationError
from configurator.utils.amount_parser import parse_amount

logger = logging.getLogger(__name__)

COMPONENTS_FILE = "components.csv"
COMPATIBILITY_FILE = "compatibility_rules.csv"
PRICING_FILE = "pricing_rules.csv"

COMPONENT_COLUMNS = {"id", "name", "category", "part_number", "base_price"}
COMPATIBILITY_COLUMNS = {"id", "required_component_id", "category", "compatible_component_ids"}
PRICING_COLUMNS = {"id", "rule_type", "component_ids"}


def split_list(value: Optional[str]) -> tuple[str, ...]:
    """Split a ";"-separated cell into stripped, non-empty items."""
    if not value:
        return ()
    return tuple(item.strip() for item in value.split(";") if item.strip())


def parse_specifications(value: Optional[str]) -> dict[str, str]:
    """Parse "label=value;label=value" into a mapping."""
    specifications = {}
    for item in split_list(value):
        label, sep, spec_value = item.partition("=")
        if not sep or not label.strip():
            raise ValueError(f"Invalid specification '{item}' (expected label=value)")
        specifications[label.strip()] = spec_value.strip()
    return specifications


def parse_catalog_amount(value: str) -> Decimal:
    """Parse a non-negative amount stored with at most two decimal places.

    Raises:
        ValueError: If the amount is unparseable, negative or finer than a cent
    """
    amount = parse_amount(value, allow_negative=False)
    if amount.as_tuple().exponent < -2:
        raise ValueError(f"Amount must have at most 2 decimal places: {value}")
    return amount


def parse_rule_type(value: str) -> PricingRuleType:
    normalized = value.strip().lower().replace("_", " ")
    for rule_type in PricingRuleType:
        if normalized in (rule_type.value.lower(), rule_type.name.lower().replace("_", " ")):
            return rule_type
    raise ValueError(f"Unknown pricing rule type '{value}'")


class CatalogImportService:
    """Service for importing a catalog from CSV files."""

    def __init__(self, db: Database):
        """Initialize catalog import service.

        Args:
            db: Database instance
        """
        self.db = db

    def import_catalog(self, directory: str, replace: bool = False) -> dict[str, Any]:
        """Import components and rules from a catalog directory.

        Args:
            directory: Directory containing the catalog CSV files
            replace: If True, the existing catalog is removed first

        Returns:
            Dict with import statistics:
            - components: number of components imported
            - compatibility_rules: number of compatibility rules imported
            - pricing_rules: number of pricing rules imported
            - skipped: number of rows skipped (duplicate ids)
            - errors: list of error messages

        Raises:
            ValidationError: If a file is missing required columns
            FileNotFoundError: If the directory or components.csv doesn't exist
        """
        catalog_dir = Path(directory)
        components_path = catalog_dir / COMPONENTS_FILE
        if not components_path.exists():
            raise FileNotFoundError(f"Catalog file not found: {components_path}")

        sources = [
            ("components", COMPONENTS_FILE, COMPONENT_COLUMNS, self._import_component),
            ("compatibility_rules", COMPATIBILITY_FILE, COMPATIBILITY_COLUMNS,
             self._import_compatibility_rule),
            ("pricing_rules", PRICING_FILE, PRICING_COLUMNS, self._import_pricing_rule),
        ]

        # Every file is read and its header checked before the catalog changes.
        loaded = []
        for key, file_name, required_columns, import_row in sources:
            path = catalog_dir / file_name
            if path.exists():
                loaded.append((key, path, self._read_rows(path, required_columns), import_row))

        if replace:
            self.db.clear_catalog()

        result: dict[str, Any] = {
            "components": 0,
            "compatibility_rules": 0,
            "pricing_rules": 0,
            "skipped": 0,
            "errors": [],
        }

        for key, path, rows, import_row in loaded:
            result[key] = self._import_rows(path, rows, import_row, result)

        logger.info(
            "Imported catalog from %s: %d components, %d compatibility rules, %d pricing rules",
            catalog_dir, result["components"], result["compatibility_rules"], result["pricing_rules"],
        )
        return result

    def _read_rows(self, path: Path, required_columns: set[str]) -> list[tuple[int, dict[str, str]]]:
        """Read a CSV file into (row number, stripped values) pairs.

        Raises:
            ValidationError: If the file has no header or lacks required columns
        """
        with open(path, "r", encoding="utf-8-sig", newline="") as f:
            reader = csv.DictReader(f)
            columns = reader.fieldnames
            if columns is None:
                raise ValidationError(f"{path.name} has no columns")

            missing = required_columns - set(columns)
            if missing:
                raise ValidationError(
                    f"{path.name} missing required columns: {', '.join(sorted(missing))}"
                )

            return [
                (row_num, {key: (value or "").strip() for key, value in row.items() if key})
                for row_num, row in enumerate(reader, start=2)  # Header is row 1
            ]

    def _import_rows(
        self,
        path: Path,
        rows: list[tuple[int, dict[str, str]]],
        import_row: Callable[[dict[str, str]], bool],
        result: dict[str, Any],
    ) -> int:
        """Run import_row over every row; returns the number imported."""
        imported = 0
        for row_num, values in rows:
            try:
                if import_row(values):
                    imported += 1
                else:
                    result["skipped"] += 1
            except (ValueError, DomainError) as e:
                result["errors"].append(f"{path.name} row {row_num}: {e}")

        return imported

    def _import_component(self, values: dict[str, str]) -> bool:
        component_id = values.get("id")
        if not component_id:
            raise ValueError("Missing id")
        if self.db.component_exists(component_id):
            return False

        component = Component(
            id=component_id,
            name=values.get("name") or component_id,
            category=parse_category(values.get("category", "")),
            description=values.get("description", ""),
            part_number=values.get("part_number") or component_id,
            base_price=parse_catalog_amount(values.get("base_price", "")),
            specifications=parse_specifications(values.get("specifications")),
            compatibility_tags=frozenset(split_list(values.get("compatibility_tags"))),
            image_url=values.get("image_url") or None,
            model_file_name=values.get("model_file_name") or None,
        )
        self.db.add_component(component)
        return True

    def _import_compatibility_rule(self, values: dict[str, str]) -> bool:
        rule_id = values.get("id")
        if not rule_id:
            raise ValueError("Missing id")
        anchor = values.get("required_component_id")
        if not anchor:
            raise ValueError("Missing required_component_id")

        rule = CompatibilityRule(
            id=rule_id,
            required_component_id=anchor,
            compatible_component_ids=split_list(values.get("compatible_component_ids")),
            category=parse_category(values.get("category", "")),
        )
        self.db.add_compatibility_rule(rule)
        return True

    def _import_pricing_rule(self, values: dict[str, str]) -> bool:
        rule_id = values.get("id")
        if not rule_id:
            raise ValueError("Missing id")

        discount = values.get("discount_percentage")
        charge = values.get("additional_charge")
        rule = PricingRule(
            id=rule_id,
            rule_type=parse_rule_type(values.get("rule_type", "")),
            component_ids=split_list(values.get("component_ids")),
            discount_percentage=parse_catalog_amount(discount) if discount else None,
            additional_charge=parse_catalog_amount(charge) if charge else None,
            description=values.get("description", ""),
        )
        if rule.discount_percentage is not None and rule.discount_percentage > 100:
            raise ValueError(f"Discount percentage must be between 0 and 100: {discount}")
        self.db.add_pricing_rule(rule)
        return True
