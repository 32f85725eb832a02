"""In-memory catalog and store implementations.

Useful for embedding the engine with a fabricated catalog and for tests.
"""

from typing import Iterable, Optional

from configurator.database.base import CatalogProvider, PersistenceStore
from configurator.domain.entities import Component, CompatibilityRule, PricingRule


class InMemoryCatalog(CatalogProvider):
    """Catalog provider backed by plain lists."""

    def __init__(
        self,
        components: Iterable[Component],
        rules: Iterable[CompatibilityRule] = (),
        pricing_rules: Iterable[PricingRule] = (),
    ):
        self._components = list(components)
        self._rules = list(rules)
        self._pricing_rules = list(pricing_rules)

    def all_components(self) -> list[Component]:
        return list(self._components)

    def rules(self) -> list[CompatibilityRule]:
        return list(self._rules)

    def pricing_rules(self) -> list[PricingRule]:
        return list(self._pricing_rules)


class InMemoryStore(PersistenceStore):
    """Persistence store backed by a dict."""

    def __init__(self, documents: Optional[dict[str, str]] = None):
        self.documents = dict(documents or {})

    def load(self, key: str) -> Optional[str]:
        return self.documents.get(key)

    def save(self, key: str, blob: str) -> None:
        self.documents[key] = blob
