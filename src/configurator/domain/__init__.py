"""Domain layer for the configurator.

Services are imported lazily so that the database layer can import
``configurator.domain.entities`` without pulling in the services that
depend on it.
"""

_EXPORTS = {
    "CatalogService": "configurator.domain.catalog",
    "CatalogImportService": "configurator.domain.catalog_import",
    "CompatibilityMatrix": "configurator.domain.compatibility",
    "PricingEngine": "configurator.domain.pricing",
    "QuoteLedger": "configurator.domain.quote",
    "ConfigurationSession": "configurator.domain.session",
    "SessionStep": "configurator.domain.session",
}

__all__ = list(_EXPORTS)


def __getattr__(name):
    if name in _EXPORTS:
        import importlib

        return getattr(importlib.import_module(_EXPORTS[name]), name)
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
