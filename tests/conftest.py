"""Shared pytest fixtures for configurator tests."""

import tempfile
import os
from datetime import datetime, UTC
from decimal import Decimal
from pathlib import Path
import pytest

from configurator.database.factories import create_sqlite_database
from configurator.database.memory import InMemoryCatalog, InMemoryStore
from configurator.domain.catalog import CatalogService
from configurator.domain.entities import (
    CompatibilityRule,
    Component,
    ComponentCategory,
    PricingRule,
    PricingRuleType,
)
from configurator.domain.pricing import PricingEngine
from configurator.domain.quote import QuoteLedger


def make_component(component_id, category, price, name=None, **kwargs):
    """Build a catalog component with sensible defaults."""
    return Component(
        id=component_id,
        name=name or component_id,
        category=category,
        description=kwargs.pop("description", f"{component_id} description"),
        part_number=kwargs.pop("part_number", f"{component_id}-PN"),
        base_price=Decimal(price),
        **kwargs,
    )


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    # Create database
    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def sample_components():
    """A small catalog: two bases, three motors, a controller, a sensor."""
    return [
        make_component("BASE-001", ComponentCategory.BASE_UNIT, "1299.99", name="Base Alpha"),
        make_component("BASE-002", ComponentCategory.BASE_UNIT, "899.99", name="Base Beta"),
        make_component("MOTOR-001", ComponentCategory.MOTOR, "649.99"),
        make_component("MOTOR-002", ComponentCategory.MOTOR, "549.99"),
        make_component("MOTOR-003", ComponentCategory.MOTOR, "1899.99"),
        make_component("CTRL-002", ComponentCategory.CONTROLLER, "1299.99"),
        make_component("SENSOR-001", ComponentCategory.SENSOR, "299.99"),
    ]


@pytest.fixture
def sample_rules():
    """BASE-001 allows MOTOR-001/MOTOR-003, BASE-002 allows MOTOR-002."""
    return [
        CompatibilityRule(
            id="RULE-001",
            required_component_id="BASE-001",
            compatible_component_ids=("MOTOR-001", "MOTOR-003"),
            category=ComponentCategory.MOTOR,
        ),
        CompatibilityRule(
            id="RULE-002",
            required_component_id="BASE-002",
            compatible_component_ids=("MOTOR-002",),
            category=ComponentCategory.MOTOR,
        ),
    ]


@pytest.fixture
def sample_pricing_rules():
    """A bundle discount and a customization fee."""
    return [
        PricingRule(
            id="PRICE-001",
            rule_type=PricingRuleType.BUNDLE_DISCOUNT,
            component_ids=("MOTOR-003", "CTRL-002"),
            discount_percentage=Decimal("10"),
            description="Premium servo bundle discount",
        ),
        PricingRule(
            id="PRICE-003",
            rule_type=PricingRuleType.CUSTOMIZATION,
            additional_charge=Decimal("150"),
            description="Complex configuration assembly fee",
        ),
    ]


@pytest.fixture
def catalog_service(sample_components, sample_rules, sample_pricing_rules):
    """Create a CatalogService over an in-memory catalog."""
    return CatalogService(
        InMemoryCatalog(sample_components, sample_rules, sample_pricing_rules)
    )


@pytest.fixture
def pricing_engine():
    return PricingEngine()


@pytest.fixture
def memory_store():
    return InMemoryStore()


@pytest.fixture
def fixed_clock():
    """Clock pinned to 2026-10-19 09:30 UTC."""
    return lambda: datetime(2026, 10, 19, 9, 30, tzinfo=UTC)


@pytest.fixture
def ledger(memory_store, fixed_clock):
    """Create a QuoteLedger over an in-memory store."""
    return QuoteLedger(memory_store, clock=fixed_clock)


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


@pytest.fixture
def fixtures_dir():
    """Return the path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def seeded_db(temp_db, fixtures_dir):
    """Temporary database with the fixture catalog imported."""
    from configurator.domain.catalog_import import CatalogImportService

    result = CatalogImportService(temp_db).import_catalog(str(fixtures_dir / "catalog"))
    assert result["errors"] == []
    return temp_db


@pytest.fixture
def component_factory():
    """Return the component builder used by the sample catalog."""
    return make_component
