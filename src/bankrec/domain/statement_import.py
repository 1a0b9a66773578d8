"""Bank statement import domain service."""

import logging
from typing import Optional

from bankrec.database.base import Database
from bankrec.domain.account import BankAccountService
from bankrec.domain.deduplication import Deduplicator
from bankrec.domain.entities import (
    EXPENSE_CATEGORY,
    INCOME_CATEGORY,
    ImportBatch,
    ImportResult,
    NewTransaction,
    ParsedTransaction,
    TransactionType,
)
from bankrec.domain.errors import (
    EmptyResultError,
    NotFoundError,
    ValidationError,
    import_batch_not_found,
    no_transactions_found,
    unsupported_file_type,
)
from bankrec.domain.sources import ByteSource, FileByteSource
from bankrec.parsers.registry import ParserRegistry, default_registry, file_extension

logger = logging.getLogger(__name__)


def to_new_transaction(parsed: ParsedTransaction) -> NewTransaction:
    """Row to persist for a parsed transaction; amount is stored unsigned."""
    txn_type = parsed.type
    return NewTransaction(
        type=txn_type,
        category=INCOME_CATEGORY if txn_type is TransactionType.INCOME else EXPENSE_CATEGORY,
        amount=abs(parsed.amount),
        date=parsed.date,
        description=parsed.description,
        raw_description=parsed.description,
        external_id=parsed.external_id,
    )


class StatementImportService:
    """Service for importing bank statement files (OFX, CSV, XLS/XLSX)."""

    def __init__(
        self,
        db: Database,
        source: Optional[ByteSource] = None,
        parsers: Optional[ParserRegistry] = None,
    ):
        """Initialize statement import service.

        Args:
            db: Database instance
            source: Where files are fetched from when no bytes are passed;
                defaults to the local filesystem
            parsers: Parser registry; defaults to OFX, CSV and Excel
        """
        self.db = db
        self.source = source if source is not None else FileByteSource()
        self.parsers = parsers if parsers is not None else default_registry()
        self.account_service = BankAccountService(db)
        self.deduplicator = Deduplicator(db)

    def parse(self, file_name: str, data: bytes) -> tuple[str, list[ParsedTransaction]]:
        """Parse a statement file with the parser registered for its extension.

        Returns:
            Tuple of (file type label, parsed transactions)

        Raises:
            ValidationError: If the extension is unsupported or columns are undetectable
        """
        extension = file_extension(file_name)
        parser = self.parsers.get(extension)
        if parser is None:
            raise ValidationError(unsupported_file_type(extension, self.parsers.extensions))
        return parser.file_type, parser.parse(data)

    def import_file(
        self,
        tenant_id: str,
        user_id: str,
        bank_account_id: int,
        file_name: str,
        data: Optional[bytes] = None,
    ) -> ImportResult:
        """Import a statement file into a bank account.

        Args:
            tenant_id: Owning tenant
            user_id: Importing user
            bank_account_id: Target bank account (must belong to the tenant)
            file_name: Original file name; its extension selects the parser
            data: File content; fetched from the byte source when omitted

        Returns:
            ImportResult with batch ID, counts and the statement period

        Raises:
            NotFoundError: If the bank account is unknown or foreign
            ValidationError: If the file format cannot be interpreted
            EmptyResultError: If the file contains no transactions
            PersistenceError: If storing the batch fails (nothing is stored)
        """
        self.account_service.get_account(tenant_id, bank_account_id)

        if data is None:
            data = self.source.fetch(file_name)

        file_type, transactions = self.parse(file_name, data)
        if not transactions:
            raise EmptyResultError(no_transactions_found(file_name))

        dedup = self.deduplicator.split(bank_account_id, transactions)
        dates = [t.date for t in transactions]
        period_start, period_end = min(dates), max(dates)

        batch_id = self.db.record_import_batch(
            tenant_id=tenant_id,
            bank_account_id=bank_account_id,
            file_name=file_name,
            file_type=file_type,
            total_records=len(transactions),
            duplicate_count=len(dedup.duplicates),
            period_start=period_start,
            period_end=period_end,
            imported_by=user_id,
            transactions=[to_new_transaction(t) for t in dedup.new],
        )

        logger.info(
            "Imported %s as batch %d: %d parsed, %d new, %d duplicates",
            file_name,
            batch_id,
            len(transactions),
            len(dedup.new),
            len(dedup.duplicates),
        )
        return ImportResult(
            batch_id=batch_id,
            total_records=len(transactions),
            imported_count=len(dedup.new),
            duplicate_count=len(dedup.duplicates),
            period_start=period_start,
            period_end=period_end,
        )

    def list_batches(self, tenant_id: str) -> list[ImportBatch]:
        """List the tenant's import batches, newest first."""
        return self.db.list_import_batches(tenant_id)

    def get_batch(self, tenant_id: str, batch_id: int) -> ImportBatch:
        """Get an import batch owned by the tenant.

        Raises:
            NotFoundError: If the batch does not exist for the tenant
        """
        batch = self.db.get_import_batch(batch_id)
        if batch is None or batch.tenant_id != tenant_id:
            raise NotFoundError(import_batch_not_found(batch_id))
        return batch

    def delete_batch(self, tenant_id: str, batch_id: int) -> int:
        """Delete an import batch and every transaction it produced.

        Returns:
            Number of transactions deleted
        """
        self.get_batch(tenant_id, batch_id)
        deleted = self.db.delete_import_batch(batch_id)
        logger.info("Deleted import batch %d with %d transactions", batch_id, deleted)
        return deleted
