"""Utility functions for the configurator."""

from configurator.utils.amount_parser import parse_amount
from configurator.utils.date_parser import parse_date
from configurator.utils.money import format_currency, round_currency

__all__ = ["parse_amount", "parse_date", "format_currency", "round_currency"]
