"""Abstract catalog and persistence interfaces."""

from abc import ABC, abstractmethod
from typing import Optional

# Import entities directly to avoid circular import through domain/__init__.py
from configurator.domain.entities import (
    Component,
    CompatibilityRule,
    PricingRule,
)


class CatalogProvider(ABC):
    """Read-only source of components and rules."""

    @abstractmethod
    def all_components(self) -> list[Component]:
        """List every catalog component."""
        pass

    @abstractmethod
    def rules(self) -> list[CompatibilityRule]:
        """List every compatibility rule."""
        pass

    @abstractmethod
    def pricing_rules(self) -> list[PricingRule]:
        """List every pricing rule."""
        pass


class PersistenceStore(ABC):
    """Coarse-grained key/blob document store."""

    @abstractmethod
    def load(self, key: str) -> Optional[str]:
        """Return the blob stored under key, or None if absent.

        Raises:
            PersistenceReadError: If the store cannot be read
        """
        pass

    @abstractmethod
    def save(self, key: str, blob: str) -> None:
        """Store blob under key, replacing any previous value.

        Raises:
            PersistenceWriteError: If the blob was not stored
        """
        pass


class Database(CatalogProvider, PersistenceStore):
    """Abstract database interface backing the catalog and saved quotes."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Catalog write operations
    @abstractmethod
    def add_component(self, component: Component) -> None:
        """Add a component to the catalog."""
        pass

    @abstractmethod
    def component_exists(self, component_id: str) -> bool:
        """Check if a component with given id exists."""
        pass

    @abstractmethod
    def add_compatibility_rule(self, rule: CompatibilityRule) -> None:
        """Add a compatibility rule."""
        pass

    @abstractmethod
    def add_pricing_rule(self, rule: PricingRule) -> None:
        """Add a pricing rule."""
        pass

    @abstractmethod
    def clear_catalog(self) -> None:
        """Remove all components and rules. Stored documents are kept."""
        pass
