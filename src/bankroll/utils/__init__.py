"""Utility functions for bankroll."""

from bankroll.utils.date_parser import parse_date, parse_datetime, parse_platform_timestamp
from bankroll.utils.amount_parser import parse_amount

__all__ = ["parse_date", "parse_datetime", "parse_platform_timestamp", "parse_amount"]
