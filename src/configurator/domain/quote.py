"""Quote ledger domain service."""

import copy
import dataclasses
import logging
import uuid
from datetime import datetime, UTC
from typing import Callable, Optional

from configurator.database.base import PersistenceStore
from configurator.domain.entities import BillOfMaterials, Configuration, Quote, QuoteStatus
from configurator.domain.errors import (
    NotFoundError,
    PersistenceError,
    ValidationError,
    quote_not_found,
)
from configurator.domain.serialization import quotes_from_blob, quotes_to_blob

logger = logging.getLogger(__name__)

QUOTES_KEY = "saved_quotes"
QUOTE_NUMBER_PREFIX = "QT"


def parse_status(value: QuoteStatus | str) -> QuoteStatus:
    """Resolve a quote status from an enum member or a (case-insensitive) name.

    Raises:
        ValidationError: If the value names no status
    """
    if isinstance(value, QuoteStatus):
        return value
    normalized = value.strip().lower()
    for status in QuoteStatus:
        if normalized in (status.value.lower(), status.name.lower()):
            return status
    choices = ", ".join(status.value for status in QuoteStatus)
    raise ValidationError(f"Unknown quote status '{value}'. Expected one of: {choices}")


class QuoteLedger:
    """Service for numbering, storing and tracking quotes.

    The whole quote list is persisted as a single document after every
    mutation. Mutations are applied to a copy of the list and only become
    visible once the store accepted the write.
    """

    def __init__(
        self,
        store: PersistenceStore,
        prefix: str = QUOTE_NUMBER_PREFIX,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """Initialize the ledger and load saved quotes.

        Args:
            store: Persistence store holding the quote document
            prefix: Quote number prefix
            clock: Returns the current time (defaults to UTC now)
        """
        self.store = store
        self.prefix = prefix
        self.clock = clock or (lambda: datetime.now(UTC))
        self._quotes: list[Quote] = self._load()

    def _load(self) -> list[Quote]:
        """Hydrate from the store; unreadable data means no saved quotes."""
        try:
            quotes = quotes_from_blob(self.store.load(QUOTES_KEY))
        except PersistenceError as e:
            logger.warning("Ignoring saved quotes that could not be loaded: %s", e)
            return []
        logger.debug("Loaded %d saved quotes", len(quotes))
        return quotes

    def _persist(self, quotes: list[Quote]) -> None:
        """Write the list, then adopt it. Write errors propagate."""
        self.store.save(QUOTES_KEY, quotes_to_blob(quotes))
        self._quotes = quotes

    @property
    def quotes(self) -> tuple[Quote, ...]:
        return tuple(self._quotes)

    def list_quotes(self, status: Optional[QuoteStatus | str] = None) -> list[Quote]:
        """List saved quotes in creation order, optionally filtered by status."""
        if status is None:
            return list(self._quotes)
        resolved = parse_status(status)
        return [q for q in self._quotes if q.status == resolved]

    def get_quote(self, quote_id: str) -> Optional[Quote]:
        for quote in self._quotes:
            if quote.id == quote_id:
                return quote
        return None

    def find_by_number(self, quote_number: str) -> Optional[Quote]:
        for quote in self._quotes:
            if quote.quote_number == quote_number:
                return quote
        return None

    def next_quote_number(self) -> str:
        """Number for the next quote: prefix, date and saved count + 1.

        The sequence is not unique after deletions or across concurrent
        ledgers sharing a store.
        """
        date_part = self.clock().strftime("%Y%m%d")
        sequence = len(self._quotes) + 1
        return f"{self.prefix}-{date_part}-{sequence:04d}"

    def generate_quote(
        self,
        configuration: Configuration,
        bill_of_materials: BillOfMaterials,
        notes: Optional[str] = None,
    ) -> Quote:
        """Create a draft quote. The quote is not saved.

        Args:
            configuration: Configuration being quoted (copied)
            bill_of_materials: Bill computed for the configuration
            notes: Optional free-form notes

        Returns:
            New draft quote
        """
        quote = Quote(
            id=str(uuid.uuid4()),
            quote_number=self.next_quote_number(),
            configuration=copy.deepcopy(configuration),
            bill_of_materials=bill_of_materials,
            created_date=self.clock(),
            status=QuoteStatus.DRAFT,
            notes=notes,
        )
        logger.debug("Generated quote %s", quote.quote_number)
        return quote

    def save(self, quote: Quote) -> Quote:
        """Insert or replace a quote by id and persist.

        Raises:
            PersistenceWriteError: If the store rejected the write
        """
        quotes = list(self._quotes)
        for index, existing in enumerate(quotes):
            if existing.id == quote.id:
                quotes[index] = quote
                break
        else:
            quotes.append(quote)

        self._persist(quotes)
        logger.info("Saved quote %s (%s)", quote.quote_number, quote.status.value)
        return quote

    def delete(self, quote: Quote) -> bool:
        """Remove a quote by id and persist.

        Returns:
            True if a quote was removed

        Raises:
            PersistenceWriteError: If the store rejected the write
        """
        quotes = [q for q in self._quotes if q.id != quote.id]
        if len(quotes) == len(self._quotes):
            return False

        self._persist(quotes)
        logger.info("Deleted quote %s", quote.quote_number)
        return True

    def update_status(self, quote: Quote, status: QuoteStatus | str) -> Quote:
        """Set a new status on a saved quote and persist.

        The passed quote, with the new status, replaces the saved quote with
        the same id. Any status may follow any other.

        Returns:
            The updated quote

        Raises:
            NotFoundError: If the quote has not been saved
            ValidationError: If status is not a known status
            PersistenceWriteError: If the store rejected the write
        """
        resolved = parse_status(status)
        updated = dataclasses.replace(quote, status=resolved)
        quotes = list(self._quotes)
        for index, existing in enumerate(quotes):
            if existing.id == quote.id:
                quotes[index] = updated
                break
        else:
            raise NotFoundError(quote_not_found(quote.quote_number))

        self._persist(quotes)
        logger.info("Quote %s is now %s", updated.quote_number, resolved.value)
        return updated
