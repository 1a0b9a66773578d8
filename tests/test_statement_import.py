"""Tests for the statement import service."""

import pytest
from datetime import date
from decimal import Decimal

from sqlalchemy.exc import OperationalError

from bankrec.domain.entities import (
    EXPENSE_CATEGORY,
    INCOME_CATEGORY,
    ParsedTransaction,
    ReconciliationStatus,
    TransactionType,
)
from bankrec.domain.errors import (
    EmptyResultError,
    NotFoundError,
    PersistenceError,
    ValidationError,
)
from bankrec.domain.sources import FileByteSource, StaticByteSource
from bankrec.domain.statement_import import StatementImportService, to_new_transaction

from conftest import OTHER_TENANT, TENANT, USER


class TestToNewTransaction:
    """Tests for mapping parsed transactions to stored rows."""

    def test_expense(self):
        row = to_new_transaction(
            ParsedTransaction(date(2026, 1, 1), Decimal("-150.00"), "Pagamento XYZ", "F1")
        )
        assert row.type is TransactionType.EXPENSE
        assert row.category == EXPENSE_CATEGORY
        assert row.amount == Decimal("150.00")
        assert row.description == "Pagamento XYZ"
        assert row.raw_description == "Pagamento XYZ"
        assert row.external_id == "F1"

    def test_zero_amount_is_income(self):
        row = to_new_transaction(ParsedTransaction(date(2026, 1, 1), Decimal("0.00"), "Estorno"))
        assert row.type is TransactionType.INCOME
        assert row.category == INCOME_CATEGORY


class TestImportFile:
    """Tests for StatementImportService.import_file."""

    def test_csv_import(self, temp_db, import_service, bank_account, fixtures_dir):
        data = (fixtures_dir / "statement.csv").read_bytes()
        result = import_service.import_file(TENANT, USER, bank_account.id, "extrato.csv", data)

        assert result.total_records == 2
        assert result.imported_count == 2
        assert result.duplicate_count == 0
        assert result.period_start == date(2026, 1, 1)
        assert result.period_end == date(2026, 1, 2)

        transactions = temp_db.list_imported_transactions(TENANT)
        assert len(transactions) == 2
        by_type = {t.type: t for t in transactions}
        expense = by_type[TransactionType.EXPENSE]
        income = by_type[TransactionType.INCOME]
        assert expense.amount == Decimal("150.00")
        assert expense.category == EXPENSE_CATEGORY
        assert income.amount == Decimal("500.00")
        assert income.category == INCOME_CATEGORY
        for txn in transactions:
            assert txn.reconciliation_status is ReconciliationStatus.PENDING
            assert txn.import_batch_id == result.batch_id
            assert txn.bank_account_id == bank_account.id
            assert txn.tenant_id == TENANT
            assert txn.created_by == USER
            assert txn.external_id is None
            assert txn.linked_entity_id is None

    def test_batch_record(self, import_service, bank_account, fixtures_dir):
        data = (fixtures_dir / "statement.ofx").read_bytes()
        result = import_service.import_file(TENANT, USER, bank_account.id, "Extrato.OFX", data)

        batch = import_service.get_batch(TENANT, result.batch_id)
        assert batch.file_name == "Extrato.OFX"
        assert batch.file_type == "OFX"
        assert batch.total_records == 3
        assert batch.imported_count == 3
        assert batch.duplicate_count == 0
        assert batch.period_start == date(2026, 1, 5)
        assert batch.period_end == date(2026, 1, 20)
        assert batch.imported_by == USER
        assert batch.bank_account_id == bank_account.id

    def test_reimport_is_all_duplicates(self, temp_db, import_service, bank_account, fixtures_dir):
        data = (fixtures_dir / "statement.ofx").read_bytes()
        import_service.import_file(TENANT, USER, bank_account.id, "jan.ofx", data)
        second = import_service.import_file(TENANT, USER, bank_account.id, "jan.ofx", data)

        assert second.total_records == 3
        assert second.duplicate_count == 3
        assert second.imported_count == 0
        # period still covers every parsed transaction
        assert second.period_start == date(2026, 1, 5)
        assert second.period_end == date(2026, 1, 20)
        assert len(temp_db.list_imported_transactions(TENANT)) == 3
        assert len(import_service.list_batches(TENANT)) == 2

    def test_unclosed_ofx_deduplicates_against_closed(self, import_service, bank_account, fixtures_dir):
        import_service.import_file(
            TENANT, USER, bank_account.id, "a.ofx", (fixtures_dir / "statement.ofx").read_bytes()
        )
        result = import_service.import_file(
            TENANT,
            USER,
            bank_account.id,
            "b.ofx",
            (fixtures_dir / "statement_unclosed.ofx").read_bytes(),
        )
        assert result.duplicate_count == 3

    def test_duplicates_are_scoped_to_bank_account(
        self, temp_db, import_service, account_service, bank_account, fixtures_dir
    ):
        data = (fixtures_dir / "statement.ofx").read_bytes()
        other_id = account_service.create_account(TENANT, "Itaú")
        import_service.import_file(TENANT, USER, bank_account.id, "jan.ofx", data)
        result = import_service.import_file(TENANT, USER, other_id, "jan.ofx", data)

        assert result.imported_count == 3
        assert result.duplicate_count == 0

    def test_csv_rows_are_never_duplicates(self, temp_db, import_service, bank_account, fixtures_dir):
        data = (fixtures_dir / "statement.csv").read_bytes()
        import_service.import_file(TENANT, USER, bank_account.id, "extrato.csv", data)
        result = import_service.import_file(TENANT, USER, bank_account.id, "extrato.csv", data)

        assert result.imported_count == 2
        assert len(temp_db.list_imported_transactions(TENANT)) == 4

    def test_unknown_bank_account(self, temp_db, import_service, fixtures_dir):
        data = (fixtures_dir / "statement.csv").read_bytes()
        with pytest.raises(NotFoundError):
            import_service.import_file(TENANT, USER, 999, "extrato.csv", data)
        assert import_service.list_batches(TENANT) == []

    def test_foreign_bank_account(self, temp_db, import_service, bank_account, fixtures_dir):
        data = (fixtures_dir / "statement.csv").read_bytes()
        with pytest.raises(NotFoundError):
            import_service.import_file(OTHER_TENANT, USER, bank_account.id, "extrato.csv", data)
        assert temp_db.list_imported_transactions(TENANT) == []
        assert temp_db.list_imported_transactions(OTHER_TENANT) == []

    def test_account_checked_before_fetching(self, temp_db):
        """A missing account is reported even when the file does not exist either."""
        service = StatementImportService(temp_db, source=StaticByteSource({}))
        with pytest.raises(NotFoundError, match="Bank account 42"):
            service.import_file(TENANT, USER, 42, "missing.ofx")

    def test_unsupported_extension(self, import_service, bank_account):
        with pytest.raises(ValidationError, match=r"Unsupported file format: \.pdf"):
            import_service.import_file(TENANT, USER, bank_account.id, "extrato.pdf", b"%PDF")
        assert import_service.list_batches(TENANT) == []

    def test_undetectable_columns(self, import_service, bank_account):
        with pytest.raises(ValidationError, match="date and amount columns"):
            import_service.import_file(TENANT, USER, bank_account.id, "x.csv", b"foo;bar\n1;2\n")
        assert import_service.list_batches(TENANT) == []

    def test_empty_file(self, import_service, bank_account):
        with pytest.raises(EmptyResultError):
            import_service.import_file(TENANT, USER, bank_account.id, "x.ofx", b"<OFX></OFX>")
        assert import_service.list_batches(TENANT) == []

    def test_fetch_from_static_source(self, temp_db, bank_account, fixtures_dir):
        source = StaticByteSource({"jan.csv": (fixtures_dir / "statement.csv").read_bytes()})
        service = StatementImportService(temp_db, source=source)

        result = service.import_file(TENANT, USER, bank_account.id, "jan.csv")
        assert result.imported_count == 2

        with pytest.raises(NotFoundError):
            service.import_file(TENANT, USER, bank_account.id, "feb.csv")

    def test_fetch_from_directory(self, temp_db, bank_account, fixtures_dir):
        service = StatementImportService(temp_db, source=FileByteSource(str(fixtures_dir)))
        result = service.import_file(TENANT, USER, bank_account.id, "statement.ofx")
        assert result.imported_count == 3

    def test_failed_write_stores_nothing(self, temp_db, import_service, bank_account, fixtures_dir, monkeypatch):
        session = temp_db._get_session()

        def failing_commit():
            raise OperationalError("INSERT", {}, Exception("database is locked"))

        monkeypatch.setattr(session, "commit", failing_commit)
        data = (fixtures_dir / "statement.ofx").read_bytes()

        with pytest.raises(PersistenceError):
            import_service.import_file(TENANT, USER, bank_account.id, "jan.ofx", data)

        assert import_service.list_batches(TENANT) == []
        assert temp_db.list_imported_transactions(TENANT) == []


class TestBatches:
    """Tests for listing and deleting import batches."""

    def test_list_is_tenant_scoped(self, import_service, account_service, bank_account, fixtures_dir):
        data = (fixtures_dir / "statement.csv").read_bytes()
        other_account = account_service.create_account(OTHER_TENANT, "Caixa")
        import_service.import_file(TENANT, USER, bank_account.id, "a.csv", data)
        import_service.import_file(OTHER_TENANT, USER, other_account, "b.csv", data)

        assert [b.file_name for b in import_service.list_batches(TENANT)] == ["a.csv"]
        assert [b.file_name for b in import_service.list_batches(OTHER_TENANT)] == ["b.csv"]

    def test_get_foreign_batch(self, import_service, bank_account, fixtures_dir):
        data = (fixtures_dir / "statement.csv").read_bytes()
        result = import_service.import_file(TENANT, USER, bank_account.id, "a.csv", data)
        with pytest.raises(NotFoundError):
            import_service.get_batch(OTHER_TENANT, result.batch_id)

    def test_delete_removes_transactions(self, temp_db, import_service, bank_account, fixtures_dir):
        csv_result = import_service.import_file(
            TENANT, USER, bank_account.id, "a.csv", (fixtures_dir / "statement.csv").read_bytes()
        )
        import_service.import_file(
            TENANT, USER, bank_account.id, "a.ofx", (fixtures_dir / "statement.ofx").read_bytes()
        )

        deleted = import_service.delete_batch(TENANT, csv_result.batch_id)

        assert deleted == 2
        remaining = temp_db.list_imported_transactions(TENANT)
        assert len(remaining) == 3
        assert all(t.external_id for t in remaining)
        with pytest.raises(NotFoundError):
            import_service.get_batch(TENANT, csv_result.batch_id)

    def test_deleted_ofx_can_be_reimported(self, import_service, bank_account, fixtures_dir):
        data = (fixtures_dir / "statement.ofx").read_bytes()
        first = import_service.import_file(TENANT, USER, bank_account.id, "a.ofx", data)
        import_service.delete_batch(TENANT, first.batch_id)

        again = import_service.import_file(TENANT, USER, bank_account.id, "a.ofx", data)
        assert again.imported_count == 3

    def test_delete_foreign_batch(self, import_service, bank_account, fixtures_dir):
        data = (fixtures_dir / "statement.csv").read_bytes()
        result = import_service.import_file(TENANT, USER, bank_account.id, "a.csv", data)
        with pytest.raises(NotFoundError):
            import_service.delete_batch(OTHER_TENANT, result.batch_id)
        assert len(import_service.list_batches(TENANT)) == 1
