"""CSV import domain service."""

import csv
import logging
import os
import tempfile
from pathlib import Path
from typing import BinaryIO, Iterable

from bankroll.config import DEFAULT_MAX_UPLOAD_BYTES, DEFAULT_PLATFORM
from bankroll.database.base import Database
from bankroll.domain.classifier import classify
from bankroll.domain.csv_parser import PlatformCSVParser
from bankroll.domain.entities import ImportResult, ParsedTransaction
from bankroll.domain.errors import NotFoundError, ValidationError, account_not_found

logger = logging.getLogger(__name__)

UPLOAD_CHUNK_SIZE = 64 * 1024


class CSVImportService:
    """Service for importing platform transaction histories.

    Importing is idempotent: a transaction is identified by account,
    timestamp, type, amount and balance, and one already stored is skipped.
    """

    def __init__(
        self,
        db: Database,
        platform: str = DEFAULT_PLATFORM,
        max_upload_bytes: int = DEFAULT_MAX_UPLOAD_BYTES,
    ):
        """Initialize CSV import service.

        Args:
            db: Database instance
            platform: Platform label given to accounts created by imports
            max_upload_bytes: Size cap for uploaded files
        """
        self.db = db
        self.platform = platform
        self.max_upload_bytes = max_upload_bytes

    def get_or_create_account(self, name: str) -> int:
        """Return the ID of the named account on this platform, creating it if needed.

        Raises:
            ValidationError: If name is empty
        """
        name = (name or "").strip()
        if not name:
            raise ValidationError("Account name is required")

        account = self.db.get_account_by_name(name, self.platform)
        if account is not None:
            return account.id

        account_id = self.db.create_account(name=name, platform=self.platform)
        logger.info("Created %s account '%s' (ID: %d)", self.platform, name, account_id)
        return account_id

    def import_transactions(
        self, account_id: int, records: Iterable[ParsedTransaction]
    ) -> ImportResult:
        """Insert the records that are not stored yet.

        Records are processed oldest first. A failure on one record is
        recorded in the result and the remaining records are still tried.

        Raises:
            NotFoundError: If account doesn't exist
        """
        if self.db.get_account(account_id) is None:
            raise NotFoundError(account_not_found(account_id))

        result = ImportResult()
        # Exports list newest first. Reversing before the stable sort stores
        # same-minute rows oldest first, so ids follow the balance chain.
        for record in sorted(reversed(list(records)), key=lambda r: r.date):
            try:
                if self.db.transaction_exists(
                    account_id,
                    record.date,
                    record.type,
                    record.amount,
                    record.balance,
                ):
                    result.skipped += 1
                    continue

                self.db.create_transaction(
                    account_id=account_id,
                    transaction_date=record.date,
                    type=record.type,
                    amount=record.amount,
                    balance=record.balance,
                    is_external=classify(record.type).is_external,
                    description=record.description,
                )
                result.imported += 1
            except Exception as e:
                message = (
                    f"Error importing {record.type} of {record.amount} "
                    f"at {record.date:%Y-%m-%d %H:%M}: {e}"
                )
                logger.error(message)
                result.errors.append(message)
                result.success = False

        return result

    def import_csv(self, csv_file_path: str | Path, account_name: str) -> ImportResult:
        """Import a platform CSV export into the named account.

        The whole file is parsed before anything is written, so an unreadable
        file fails without touching the database.

        Returns:
            ImportResult with imported/skipped counts, per-record errors and
            rejected rows

        Raises:
            FileNotFoundError: If CSV file doesn't exist
            ValidationError: If the file cannot be read or account name is empty
        """
        parser = PlatformCSVParser()
        try:
            records = list(parser.parse(csv_file_path))
        except (csv.Error, UnicodeDecodeError) as e:
            raise ValidationError(f"Could not read CSV file: {e}")

        account_id = self.get_or_create_account(account_name)
        result = self.import_transactions(account_id, records)
        result.rejected = list(parser.rejected)

        logger.info(
            "Import into account %d: %d imported, %d skipped, %d errors, %d rejected rows",
            account_id,
            result.imported,
            result.skipped,
            len(result.errors),
            len(result.rejected),
        )
        return result

    def import_upload(self, account_name: str, filename: str, stream: BinaryIO) -> ImportResult:
        """Import an uploaded CSV file.

        The upload is spooled to a temporary file which is removed on every
        exit path.

        Raises:
            ValidationError: If the file is not a .csv, is too large, or the
                account name is missing
        """
        if Path(filename or "").suffix.lower() != ".csv":
            raise ValidationError("Only CSV files are allowed")
        if not (account_name or "").strip():
            raise ValidationError("Account name is required")

        fd, temp_path = tempfile.mkstemp(prefix="bankroll-upload-", suffix=".csv")
        try:
            with os.fdopen(fd, "wb") as out:
                written = 0
                while True:
                    chunk = stream.read(UPLOAD_CHUNK_SIZE)
                    if not chunk:
                        break
                    if isinstance(chunk, str):
                        chunk = chunk.encode("utf-8")
                    written += len(chunk)
                    if written > self.max_upload_bytes:
                        raise ValidationError(
                            f"File exceeds the {self.max_upload_bytes} byte upload limit"
                        )
                    out.write(chunk)
            return self.import_csv(temp_path, account_name)
        finally:
            if os.path.exists(temp_path):
                os.unlink(temp_path)
