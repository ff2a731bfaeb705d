"""Display helpers shared by CLI commands."""

from datetime import datetime
from decimal import Decimal
from typing import Optional


def format_money(amount: Optional[Decimal | float]) -> str:
    """Format an amount as dollars, e.g. -$1,250.00."""
    if amount is None:
        return "-"
    sign = "-" if amount < 0 else ""
    return f"{sign}${abs(amount):,.2f}"


def format_timestamp(value: Optional[datetime]) -> str:
    if value is None:
        return "-"
    return value.strftime("%Y-%m-%d %H:%M")


def format_duration(minutes: Optional[int]) -> str:
    if minutes is None:
        return "-"
    hours, mins = divmod(minutes, 60)
    return f"{hours}h {mins:02d}m"
