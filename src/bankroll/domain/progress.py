"""Profit aggregation across live sessions and imported transactions."""

import logging
from collections import defaultdict
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from enum import Enum
from typing import Callable, Iterable, Optional

from bankroll.database.base import Database
from bankroll.domain.classifier import PURCHASE_TYPE, real_money_delta
from bankroll.domain.entities import (
    Granularity,
    LedgerEntry,
    ProgressFilter,
    ProgressPoint,
    Totals,
    WeeklyRange,
)
from bankroll.domain.errors import ValidationError, invalid_choice
from bankroll.utils.date_parser import range_start

logger = logging.getLogger(__name__)

MIN_YEAR = 1900
MAX_YEAR = 2100

# (timestamp, signed profit) pairs fed into bucketing
Contribution = tuple[datetime, Decimal]


def _parse_choice(enum_cls: type[Enum], value, field: str):
    try:
        return enum_cls(value)
    except ValueError:
        raise ValidationError(invalid_choice(field, value, [m.value for m in enum_cls]))


def bucket_for(timestamp: datetime, granularity: Granularity) -> tuple[tuple, str]:
    """Return (sort key, label) of the bucket containing ``timestamp``.

    Weeks are grouped by calendar year and Monday-based week number (%W) and
    labelled with the date of the Monday that opens the week. Days before a
    year's first Monday are week 00 and carry the previous December's Monday
    as their label.
    """
    day = timestamp.date()
    if granularity == Granularity.DAILY:
        return (day.toordinal(),), day.isoformat()
    if granularity == Granularity.WEEKLY:
        monday = day - timedelta(days=day.weekday())
        return (day.year, int(day.strftime("%W"))), monday.isoformat()
    if granularity == Granularity.QUARTERLY:
        quarter = (day.month - 1) // 3 + 1
        return (day.year, quarter), f"{day.year}-Q{quarter}"
    return (day.year,), str(day.year)


def build_series(
    contributions: Iterable[Contribution], granularity: Granularity
) -> list[ProgressPoint]:
    """Group contributions into buckets and add a running total.

    Only buckets that received at least one contribution appear. The
    cumulative column restarts from zero on every call.
    """
    totals: dict[tuple, Decimal] = defaultdict(lambda: Decimal("0"))
    labels: dict[tuple, str] = {}
    for timestamp, amount in contributions:
        key, label = bucket_for(timestamp, granularity)
        totals[key] += amount
        labels[key] = min(label, labels.get(key, label))

    series = []
    cumulative = Decimal("0")
    for key in sorted(totals):
        cumulative += totals[key]
        series.append(
            ProgressPoint(
                bucket=labels[key],
                period_profit=totals[key],
                cumulative_profit=cumulative,
            )
        )
    return series


class ProgressService:
    """Service for totals and time-bucketed profit series.

    Live profit comes from completed sessions. Online profit comes from
    external transactions using the classifier's real-money delta, so
    purchases count as losses and redemptions as gains.
    """

    def __init__(self, db: Database, today: Callable[[], date] = date.today):
        """Initialize progress service.

        Args:
            db: Database instance
            today: Returns the current date, used by relative ranges
        """
        self.db = db
        self.today = today

    def live_contributions(
        self, start: Optional[datetime] = None, end: Optional[datetime] = None
    ) -> list[Contribution]:
        """Profit of completed sessions keyed by session start."""
        sessions = self.db.list_sessions(is_active=False, start=start, end=end)
        return [(s.start_time, s.profit) for s in sessions if s.profit is not None]

    def online_contributions(
        self, start: Optional[datetime] = None, end: Optional[datetime] = None
    ) -> list[Contribution]:
        """Real-money delta of external transactions keyed by transaction time."""
        transactions = self.db.list_transactions(external_only=True, start=start, end=end)
        return [
            (txn.transaction_date, real_money_delta(txn.type, txn.amount))
            for txn in transactions
        ]

    def totals(self) -> Totals:
        """Total profit for all, live and online."""
        live = sum((amount for _, amount in self.live_contributions()), Decimal("0"))
        online = sum((amount for _, amount in self.online_contributions()), Decimal("0"))
        return Totals(all=live + online, live=live, online=online)

    def time_series(
        self,
        granularity: Granularity | str,
        progress_filter: ProgressFilter | str = ProgressFilter.ALL,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[ProgressPoint]:
        """Build a profit series.

        Args:
            granularity: daily, weekly, quarterly or yearly
            progress_filter: all, live or online
            start_date: Optional first day to include
            end_date: Optional last day to include

        Returns:
            Points in ascending bucket order with period and cumulative profit

        Raises:
            ValidationError: If granularity, filter or date range is invalid
        """
        granularity = _parse_choice(Granularity, granularity, "granularity")
        progress_filter = _parse_choice(ProgressFilter, progress_filter, "filter")
        if start_date is not None and end_date is not None and end_date < start_date:
            raise ValidationError("End date must not be before start date")

        start = datetime.combine(start_date, time.min) if start_date is not None else None
        end = datetime.combine(end_date, time.max) if end_date is not None else None

        contributions: list[Contribution] = []
        if progress_filter in (ProgressFilter.ALL, ProgressFilter.LIVE):
            contributions.extend(self.live_contributions(start, end))
        if progress_filter in (ProgressFilter.ALL, ProgressFilter.ONLINE):
            contributions.extend(self.online_contributions(start, end))

        series = build_series(contributions, granularity)
        logger.debug(
            "Built %s %s series with %d buckets", progress_filter.value, granularity.value, len(series)
        )
        return series

    def year_progress(
        self, year: int, progress_filter: ProgressFilter | str = ProgressFilter.ALL
    ) -> list[ProgressPoint]:
        """Daily series for one calendar year.

        Raises:
            ValidationError: If year is outside 1900..2100 or filter is invalid
        """
        if isinstance(year, bool) or not isinstance(year, int) or not MIN_YEAR <= year <= MAX_YEAR:
            raise ValidationError(f"Invalid year '{year}'. Must be between {MIN_YEAR} and {MAX_YEAR}")
        return self.time_series(
            Granularity.DAILY, progress_filter, date(year, 1, 1), date(year, 12, 31)
        )

    def progress(
        self, period: Granularity | str, progress_filter: ProgressFilter | str = ProgressFilter.ALL
    ) -> list[ProgressPoint]:
        """Quarterly or yearly series over all history.

        Raises:
            ValidationError: If period is not quarterly or yearly
        """
        allowed = (Granularity.QUARTERLY.value, Granularity.YEARLY.value)
        value = period.value if isinstance(period, Granularity) else period
        if value not in allowed:
            raise ValidationError(invalid_choice("period", period, allowed))
        return self.time_series(value, progress_filter)

    def weekly_progress(
        self,
        weekly_range: WeeklyRange | str = WeeklyRange.ONE_MONTH,
        progress_filter: ProgressFilter | str = ProgressFilter.ALL,
    ) -> list[ProgressPoint]:
        """Weekly series over a look-back window ending today.

        Raises:
            ValidationError: If range or filter is invalid
        """
        weekly_range = _parse_choice(WeeklyRange, weekly_range, "range")
        today = self.today()
        return self.time_series(
            Granularity.WEEKLY,
            progress_filter,
            start_date=range_start(weekly_range.value, today),
            end_date=today,
        )

    def available_years(self) -> list[int]:
        """Years with live or online activity, newest first.

        Falls back to the current year when there is no data.
        """
        years = {s.start_time.year for s in self.db.list_sessions()}
        years.update(
            txn.transaction_date.year
            for txn in self.db.list_transactions(external_only=True)
        )
        if not years:
            return [self.today().year]
        return sorted(years, reverse=True)

    def ledger_entries(self, include_imports: bool = True) -> list[LedgerEntry]:
        """Sessions and, optionally, external transactions as one list, newest first."""
        entries = [
            LedgerEntry(
                source="live",
                source_id=s.id,
                timestamp=s.start_time,
                kind=s.game_type,
                amount=s.buy_in,
                profit=s.profit,
                label=s.location,
                is_active=s.is_active,
            )
            for s in self.db.list_sessions()
        ]

        if include_imports:
            account_names = {acc.id: acc.name for acc in self.db.list_accounts()}
            entries.extend(
                LedgerEntry(
                    source="online",
                    source_id=txn.id,
                    timestamp=txn.transaction_date,
                    kind="deposit" if txn.type == PURCHASE_TYPE else "withdrawal",
                    amount=abs(txn.amount),
                    profit=real_money_delta(txn.type, txn.amount),
                    label=account_names.get(txn.account_id),
                )
                for txn in self.db.list_transactions(external_only=True)
            )

        return sorted(entries, key=lambda e: e.timestamp, reverse=True)
