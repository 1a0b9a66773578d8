"""Shared pytest fixtures for bankrec tests."""

import tempfile
import os
from datetime import date
from decimal import Decimal
from pathlib import Path
import pytest

from bankrec.database.factories import create_sqlite_database
from bankrec.domain.account import BankAccountService
from bankrec.domain.entities import PurchaseOrderStatus
from bankrec.domain.entity_search import EntitySearchService
from bankrec.domain.reconciliation import ReconciliationService
from bankrec.domain.statement_import import StatementImportService

TENANT = "tenant-a"
OTHER_TENANT = "tenant-b"
USER = "maria"


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    # Create database
    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def account_service(temp_db):
    """Create a BankAccountService with a temporary database."""
    return BankAccountService(temp_db)


@pytest.fixture
def import_service(temp_db):
    """Create a StatementImportService with a temporary database."""
    return StatementImportService(temp_db)


@pytest.fixture
def reconciliation_service(temp_db):
    """Create a ReconciliationService with a temporary database."""
    return ReconciliationService(temp_db)


@pytest.fixture
def search_service(temp_db):
    """Create an EntitySearchService with a temporary database."""
    return EntitySearchService(temp_db)


@pytest.fixture
def bank_account(account_service):
    """Create a bank account for the test tenant."""
    account_id = account_service.create_account(TENANT, "Banco do Brasil", "12345-6")
    return account_service.get_account(TENANT, account_id)


@pytest.fixture
def directory(temp_db):
    """Seed suppliers, contractors, a project and purchase orders for the test tenant."""
    ids = {}
    ids["alfa"] = temp_db.create_supplier(
        TENANT, "Construtora Alfa Ltda", document="12.345.678/0001-90"
    )
    ids["cimento"] = temp_db.create_supplier(
        TENANT, "Cimentos Brasileiros", document="98765432000110"
    )
    ids["eletrica"] = temp_db.create_contractor(
        TENANT, "Eletricista Joaquim Pereira", document="11.222.333/0001-44"
    )
    ids["inactive"] = temp_db.create_supplier(
        TENANT, "Madeireira Antiga", document="55.666.777/0001-88", is_active=False
    )
    ids["foreign"] = temp_db.create_supplier(
        OTHER_TENANT, "Construtora Alfa Ltda", document="12.345.678/0001-90"
    )
    ids["project"] = temp_db.create_project(TENANT, "Residencial Jardim")
    ids["order"] = temp_db.create_purchase_order(
        project_id=ids["project"],
        supplier_id=ids["cimento"],
        order_number="2026-001",
        total_amount=Decimal("1500.00"),
        order_date=date(2026, 1, 3),
        status=PurchaseOrderStatus.APPROVED,
    )
    return ids


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


@pytest.fixture
def fixtures_dir():
    """Return the path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"
