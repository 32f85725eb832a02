"""SQLAlchemy models for the configurator database."""

from datetime import datetime, UTC
from sqlalchemy import (
    JSON,
    Column,
    DateTime,
    Integer,
    Numeric,
    String,
    Text,
    create_engine,
)
from sqlalchemy.orm import declarative_base, sessionmaker, Session

Base = declarative_base()


class Component(Base):
    """Catalog component model."""

    __tablename__ = "components"

    id = Column(Integer, primary_key=True)
    component_id = Column(String, unique=True, nullable=False)
    name = Column(String, nullable=False)
    category = Column(String, nullable=False)
    description = Column(String, nullable=False, default="")
    part_number = Column(String, nullable=False)
    base_price = Column(Numeric(12, 2), nullable=False)
    specifications = Column(JSON, nullable=False, default=dict)
    compatibility_tags = Column(JSON, nullable=False, default=list)
    image_url = Column(String, nullable=True)
    model_file_name = Column(String, nullable=True)


class CompatibilityRule(Base):
    """Compatibility rule model: allowed ids in one category for an anchor."""

    __tablename__ = "compatibility_rules"

    id = Column(Integer, primary_key=True)
    rule_id = Column(String, unique=True, nullable=False)
    required_component_id = Column(String, nullable=False, index=True)
    category = Column(String, nullable=False)
    compatible_component_ids = Column(JSON, nullable=False, default=list)
    conditions = Column(JSON, nullable=True)


class PricingRule(Base):
    """Pricing rule model."""

    __tablename__ = "pricing_rules"

    id = Column(Integer, primary_key=True)
    rule_id = Column(String, unique=True, nullable=False)
    rule_type = Column(String, nullable=False)
    component_ids = Column(JSON, nullable=False, default=list)
    discount_percentage = Column(Numeric(5, 2), nullable=True)
    additional_charge = Column(Numeric(12, 2), nullable=True)
    description = Column(String, nullable=False, default="")


class StoredDocument(Base):
    """Serialized document stored under a key (e.g. the saved quote list)."""

    __tablename__ = "documents"

    key = Column(String, primary_key=True)
    blob = Column(Text, nullable=False)
    updated_at = Column(
        DateTime,
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
        nullable=False,
    )


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
