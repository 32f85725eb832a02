"""Domain tests for catalog import service."""

from decimal import Decimal

import pytest

from configurator.domain.catalog_import import (
    CatalogImportService,
    parse_rule_type,
    parse_specifications,
    split_list,
)
from configurator.domain.entities import PricingRuleType
from configurator.domain.errors import ValidationError


def _write_catalog(directory, components, compatibility=None, pricing=None):
    directory.mkdir(exist_ok=True)
    (directory / "components.csv").write_text(components, encoding="utf-8")
    if compatibility is not None:
        (directory / "compatibility_rules.csv").write_text(compatibility, encoding="utf-8")
    if pricing is not None:
        (directory / "pricing_rules.csv").write_text(pricing, encoding="utf-8")
    return str(directory)


COMPONENT_HEADER = "id,name,category,description,part_number,base_price\n"


def test_import_result_contract(temp_db, fixtures_dir):
    """Import returns a structured result contract."""
    result = CatalogImportService(temp_db).import_catalog(str(fixtures_dir / "catalog"))

    assert result == {
        "components": 7,
        "compatibility_rules": 2,
        "pricing_rules": 2,
        "skipped": 0,
        "errors": [],
    }


def test_imported_values(seeded_db):
    components = {c.id: c for c in seeded_db.all_components()}
    assert components["BASE-001"].base_price == Decimal("1299.99")
    assert components["CTRL-002"].specifications == {}

    (rule, _) = seeded_db.rules()
    assert rule.compatible_component_ids == ("MOTOR-001", "MOTOR-003")

    bundle, fee = seeded_db.pricing_rules()
    assert bundle.rule_type == PricingRuleType.BUNDLE_DISCOUNT
    assert bundle.discount_percentage == Decimal("10")
    assert bundle.additional_charge is None
    assert fee.rule_type == PricingRuleType.CUSTOMIZATION
    assert fee.component_ids == ()
    assert fee.additional_charge == Decimal("150")


def test_reimport_skips_existing_components(seeded_db, fixtures_dir):
    result = CatalogImportService(seeded_db).import_catalog(str(fixtures_dir / "catalog"))

    assert result["components"] == 0
    assert result["skipped"] == 7
    # Rule ids already exist
    assert len(result["errors"]) == 4
    assert all("already exists" in error for error in result["errors"])


def test_replace_clears_catalog_first(seeded_db, fixtures_dir, tmp_path):
    directory = _write_catalog(
        tmp_path / "catalog",
        COMPONENT_HEADER + "BASE-900,Gantry Base,Base Unit,,GB-900,4200\n",
    )

    result = CatalogImportService(seeded_db).import_catalog(directory, replace=True)

    assert result["components"] == 1
    assert [c.id for c in seeded_db.all_components()] == ["BASE-900"]
    assert seeded_db.rules() == []
    assert seeded_db.pricing_rules() == []


def test_replace_keeps_saved_documents(seeded_db, fixtures_dir):
    seeded_db.save("saved_quotes", "{}")

    CatalogImportService(seeded_db).import_catalog(str(fixtures_dir / "catalog"), replace=True)

    assert seeded_db.load("saved_quotes") == "{}"


def test_missing_components_file(temp_db, tmp_path):
    with pytest.raises(FileNotFoundError):
        CatalogImportService(temp_db).import_catalog(str(tmp_path))


def test_missing_columns_raises(temp_db, tmp_path):
    directory = _write_catalog(tmp_path / "catalog", "id,name,category\nBASE-1,Base,Base Unit\n")

    with pytest.raises(ValidationError) as excinfo:
        CatalogImportService(temp_db).import_catalog(directory)

    assert "missing required columns" in str(excinfo.value).lower()
    assert "base_price" in str(excinfo.value)


def test_row_errors_are_collected(temp_db, tmp_path):
    """Row-level parsing errors are collected in result errors."""
    directory = _write_catalog(
        tmp_path / "catalog",
        COMPONENT_HEADER
        + "BASE-1,Base,Base Unit,,PN-1,100\n"
        + "BAD-1,Thing,Flux Capacitor,,PN-2,100\n"
        + "BAD-2,Thing,Motor,,PN-3,lots\n"
        + "BAD-3,Thing,Motor,,PN-4,-5\n",
        pricing="id,rule_type,component_ids,discount_percentage\n"
        + "P-1,Mystery Rule,BASE-1,5\n"
        + "P-2,Bundle Discount,BASE-1,150\n",
    )

    result = CatalogImportService(temp_db).import_catalog(directory)

    assert result["components"] == 1
    assert result["pricing_rules"] == 0
    errors = result["errors"]
    assert len(errors) == 5
    assert errors[0].startswith("components.csv row 3:")
    assert "Unknown category" in errors[0]
    assert "pricing_rules.csv row 2:" in errors[3]
    assert "between 0 and 100" in errors[4]


def test_optional_files_may_be_absent(temp_db, tmp_path):
    directory = _write_catalog(tmp_path / "catalog", COMPONENT_HEADER + "BASE-1,Base,Base Unit,,PN-1,100\n")

    result = CatalogImportService(temp_db).import_catalog(directory)

    assert result["compatibility_rules"] == 0
    assert result["pricing_rules"] == 0


def test_split_list():
    assert split_list(" A ; B;;C ") == ("A", "B", "C")
    assert split_list("") == ()
    assert split_list(None) == ()


def test_parse_specifications():
    assert parse_specifications("Power=5 HP; RPM = 1750") == {"Power": "5 HP", "RPM": "1750"}
    with pytest.raises(ValueError):
        parse_specifications("Power")


@pytest.mark.parametrize(
    "value,expected",
    [
        ("Bundle Discount", PricingRuleType.BUNDLE_DISCOUNT),
        ("bundle_discount", PricingRuleType.BUNDLE_DISCOUNT),
        ("Customization Fee", PricingRuleType.CUSTOMIZATION),
        ("customization", PricingRuleType.CUSTOMIZATION),
        ("VOLUME_DISCOUNT", PricingRuleType.VOLUME_DISCOUNT),
    ],
)
def test_parse_rule_type(value, expected):
    assert parse_rule_type(value) == expected


def test_amounts_finer_than_a_cent_are_row_errors(temp_db, tmp_path):
    """Prices and percentages must survive storage unchanged."""
    directory = _write_catalog(
        tmp_path / "catalog",
        COMPONENT_HEADER
        + "BASE-1,Base,Base Unit,,PN-1,10.005\n"
        + "BASE-2,Base,Base Unit,,PN-2,10.50\n",
        pricing="id,rule_type,component_ids,discount_percentage,additional_charge\n"
        + "P-1,Bundle Discount,BASE-2,12.345,\n"
        + "P-2,Customization Fee,,,150.001\n",
    )

    result = CatalogImportService(temp_db).import_catalog(directory)

    assert result["components"] == 1
    assert result["pricing_rules"] == 0
    assert len(result["errors"]) == 3
    assert all("at most 2 decimal places" in error for error in result["errors"])
    assert [c.base_price for c in temp_db.all_components()] == [Decimal("10.50")]


def test_failed_replace_keeps_existing_catalog(seeded_db, tmp_path):
    directory = _write_catalog(tmp_path / "catalog", "id,name\nBASE-900,Gantry Base\n")

    with pytest.raises(ValidationError):
        CatalogImportService(seeded_db).import_catalog(directory, replace=True)

    assert len(seeded_db.all_components()) == 7
    assert len(seeded_db.rules()) == 2
    assert len(seeded_db.pricing_rules()) == 2


def test_bad_optional_file_header_keeps_existing_catalog(seeded_db, tmp_path):
    directory = _write_catalog(
        tmp_path / "catalog",
        COMPONENT_HEADER + "BASE-900,Gantry Base,Base Unit,,GB-900,4200\n",
        pricing="id,description\nP-1,Missing columns\n",
    )

    with pytest.raises(ValidationError):
        CatalogImportService(seeded_db).import_catalog(directory, replace=True)

    assert "BASE-900" not in [c.id for c in seeded_db.all_components()]
    assert len(seeded_db.all_components()) == 7


def test_failed_writes_are_row_errors(seeded_db, fixtures_dir, monkeypatch):
    """A rejected commit is reported and later rows still import."""
    monkeypatch.setattr(seeded_db, "component_exists", lambda component_id: False)

    result = CatalogImportService(seeded_db).import_catalog(str(fixtures_dir / "catalog"))

    assert result["components"] == 0
    assert sum("Could not write component" in error for error in result["errors"]) == 7
    assert len(seeded_db.all_components()) == 7
