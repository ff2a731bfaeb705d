"""Parser for the platform transaction history CSV export."""

import csv
import logging
from pathlib import Path
from typing import Iterator, Optional

from bankroll.domain.entities import ParsedTransaction
from bankroll.utils.amount_parser import parse_amount
from bankroll.utils.date_parser import parse_platform_timestamp

logger = logging.getLogger(__name__)

CSV_COLUMNS = ("Date", "Type", "Amount", "Balance")

SAMPLE_CSV = (
    '"Date","Type","Amount","Balance"\n'
    '"06/13/25, 4:58 PM CDT","Tournament Registration",-33,12.25\n'
    '"06/13/25, 4:58 PM CDT","Purchase - Credit Card",20,45.25\n'
    '"06/13/25, 4:57 PM CDT","Daily Bonus",0.25,25.25\n'
)


class PlatformCSVParser:
    """Streaming parser for the fixed Date,Type,Amount,Balance export.

    Each call to :meth:`parse` is a single pass over the file. Rows that
    cannot be read are logged and remembered in ``rejected`` instead of
    stopping the parse.
    """

    def __init__(self):
        self.rejected: list[str] = []

    def parse(self, csv_file_path: str | Path) -> Iterator[ParsedTransaction]:
        """Yield normalized transactions in file order.

        Raises:
            FileNotFoundError: If the file does not exist
        """
        csv_path = Path(csv_file_path)
        if not csv_path.exists():
            raise FileNotFoundError(f"CSV file not found: {csv_file_path}")

        self.rejected = []
        with open(csv_path, "r", encoding="utf-8-sig", newline="") as f:
            reader = csv.reader(f, delimiter=",", quotechar='"')
            for row_num, row in enumerate(reader, start=1):
                row = [field.strip().strip('"').strip() for field in row]
                if not any(row):
                    continue

                if row[0] == "Date":
                    logger.debug("Skipping header row")
                    continue

                if len(row) < 4:
                    self._reject(row_num, f"expected 4 columns, got {len(row)}")
                    continue

                record = self._parse_row(row_num, row)
                if record is not None:
                    yield record

    def _parse_row(self, row_num: int, row: list[str]) -> Optional[ParsedTransaction]:
        date_str, txn_type, amount_str, balance_str = row[:4]
        try:
            txn_date = parse_platform_timestamp(date_str)
            amount = parse_amount(amount_str)
            balance = parse_amount(balance_str)
        except ValueError as e:
            self._reject(row_num, str(e))
            return None

        if not txn_type:
            self._reject(row_num, "missing transaction type")
            return None

        return ParsedTransaction(
            date=txn_date,
            type=txn_type,
            amount=amount,
            balance=balance,
            description=txn_type,
        )

    def _reject(self, row_num: int, reason: str) -> None:
        message = f"Row {row_num}: {reason}"
        logger.warning("Skipping CSV row. %s", message)
        self.rejected.append(message)


def parse_platform_csv(csv_file_path: str | Path) -> Iterator[ParsedTransaction]:
    """Yield transactions from a platform export, skipping unreadable rows."""
    return PlatformCSVParser().parse(csv_file_path)
