"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class InvalidSelectionError(ValidationError):
    """Configuration cannot be finalized or priced in its current state."""


class IncompatibleComponentError(ValidationError):
    """Component is not available alongside the current selection."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class UnknownCategoryError(NotFoundError):
    """Category name is not one of the catalog categories."""


class UnknownComponentError(NotFoundError):
    """Component id is absent from the catalog."""


class PersistenceError(DomainError):
    """Failure talking to the persistence store."""


class PersistenceDecodeError(PersistenceError):
    """Stored quote data is corrupt or has an unexpected schema."""


class PersistenceReadError(PersistenceError):
    """Stored data could not be read."""


class PersistenceWriteError(PersistenceError):
    """Data could not be written; the mutation is not durable."""


def component_not_found(component_id: str) -> str:
    """Return message for a component id missing from the catalog."""
    return f"Component '{component_id}' not found in catalog"


def category_not_found(category: str, choices: list[str]) -> str:
    """Return message for an unknown category name."""
    return f"Unknown category '{category}'. Expected one of: {', '.join(choices)}"


def quote_not_found(reference: str) -> str:
    """Return message for a missing quote."""
    return f"Quote '{reference}' not found"


def component_not_available(component_id: str, category: str) -> str:
    """Return message for a component excluded by compatibility rules."""
    return (
        f"Component '{component_id}' is not compatible with the current "
        f"selection in category '{category}'"
    )
