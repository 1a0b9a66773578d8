"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Iterable, Optional
from datetime import date
from decimal import Decimal

# Import entities directly to avoid circular import through domain/__init__.py
from bankrec.domain.entities import (
    BankAccount,
    FinancialTransaction,
    ImportBatch,
    NewTransaction,
    Party,
    Project,
    PurchaseOrder,
    PurchaseOrderStatus,
    ReconciliationStatus,
    TransactionType,
)


class Database(ABC):
    """Abstract database interface for bankrec."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Bank account operations
    @abstractmethod
    def create_bank_account(
        self, tenant_id: str, bank_name: str, account_number: Optional[str] = None
    ) -> int:
        """Create a bank account. Returns account ID."""
        pass

    @abstractmethod
    def get_bank_account(self, bank_account_id: int) -> Optional[BankAccount]:
        """Get bank account by ID."""
        pass

    @abstractmethod
    def list_bank_accounts(self, tenant_id: str) -> list[BankAccount]:
        """List bank accounts of a tenant."""
        pass

    # Supplier / contractor / purchase order operations (directory data)
    @abstractmethod
    def create_supplier(
        self, tenant_id: str, name: str, document: Optional[str] = None, is_active: bool = True
    ) -> int:
        """Create a supplier. Returns supplier ID."""
        pass

    @abstractmethod
    def create_contractor(
        self, tenant_id: str, name: str, document: Optional[str] = None, is_active: bool = True
    ) -> int:
        """Create a contractor. Returns contractor ID."""
        pass

    @abstractmethod
    def list_suppliers(self, tenant_id: str, active_only: bool = False) -> list[Party]:
        """List suppliers of a tenant ordered by ID."""
        pass

    @abstractmethod
    def list_contractors(self, tenant_id: str, active_only: bool = False) -> list[Party]:
        """List contractors of a tenant ordered by ID."""
        pass

    @abstractmethod
    def get_supplier(self, supplier_id: int) -> Optional[Party]:
        """Get supplier by ID."""
        pass

    @abstractmethod
    def get_contractor(self, contractor_id: int) -> Optional[Party]:
        """Get contractor by ID."""
        pass

    @abstractmethod
    def search_suppliers(self, tenant_id: str, text: str, limit: int) -> list[Party]:
        """Active suppliers whose name (case-insensitive) or document contains text."""
        pass

    @abstractmethod
    def search_contractors(self, tenant_id: str, text: str, limit: int) -> list[Party]:
        """Active contractors whose name (case-insensitive) or document contains text."""
        pass

    @abstractmethod
    def create_project(self, tenant_id: str, name: str) -> int:
        """Create a project. Returns project ID."""
        pass

    @abstractmethod
    def list_projects(self, tenant_id: str) -> list[Project]:
        """List projects of a tenant ordered by ID."""
        pass

    @abstractmethod
    def create_purchase_order(
        self,
        project_id: int,
        supplier_id: int,
        order_number: str,
        total_amount: Decimal,
        order_date: date,
        status: PurchaseOrderStatus,
    ) -> int:
        """Create a purchase order. Returns purchase order ID."""
        pass

    @abstractmethod
    def find_purchase_orders(
        self,
        tenant_id: str,
        total_amount: Decimal,
        start_date: date,
        end_date: date,
        statuses: Iterable[PurchaseOrderStatus],
        limit: int,
    ) -> list[PurchaseOrder]:
        """Purchase orders with exactly this total, dated within [start_date, end_date]."""
        pass

    @abstractmethod
    def get_purchase_order(self, tenant_id: str, order_id: int) -> Optional[PurchaseOrder]:
        """Get a purchase order whose project belongs to the tenant."""
        pass

    # Import operations
    @abstractmethod
    def find_existing_external_ids(
        self, bank_account_id: int, external_ids: Iterable[str]
    ) -> set[str]:
        """Subset of external_ids already stored for the bank account."""
        pass

    @abstractmethod
    def record_import_batch(
        self,
        tenant_id: str,
        bank_account_id: int,
        file_name: str,
        file_type: str,
        total_records: int,
        duplicate_count: int,
        period_start: Optional[date],
        period_end: Optional[date],
        imported_by: str,
        transactions: list[NewTransaction],
    ) -> int:
        """Atomically store a batch and its transactions. Returns batch ID.

        Raises:
            PersistenceError: If the write fails; nothing is stored
        """
        pass

    @abstractmethod
    def get_import_batch(self, batch_id: int) -> Optional[ImportBatch]:
        """Get import batch by ID."""
        pass

    @abstractmethod
    def list_import_batches(self, tenant_id: str) -> list[ImportBatch]:
        """List import batches of a tenant, newest first."""
        pass

    @abstractmethod
    def delete_import_batch(self, batch_id: int) -> int:
        """Delete a batch with its transactions. Returns deleted transaction count."""
        pass

    # Transaction operations
    @abstractmethod
    def create_manual_transaction(
        self,
        tenant_id: str,
        created_by: str,
        type: TransactionType,
        category: str,
        amount: Decimal,
        date: date,
        description: str,
        bank_account_id: Optional[int] = None,
        project_id: Optional[int] = None,
    ) -> int:
        """Create a manually entered transaction. Returns transaction ID."""
        pass

    @abstractmethod
    def get_transaction(self, transaction_id: int) -> Optional[FinancialTransaction]:
        """Get transaction by ID."""
        pass

    @abstractmethod
    def list_imported_transactions(
        self,
        tenant_id: str,
        statuses: Optional[Iterable[ReconciliationStatus]] = None,
        import_batch_id: Optional[int] = None,
    ) -> list[FinancialTransaction]:
        """List imported transactions, newest first.

        Args:
            tenant_id: Owning tenant
            statuses: Optional reconciliation statuses to keep
            import_batch_id: Optional import batch filter
        """
        pass

    @abstractmethod
    def count_pending_transactions(self, tenant_id: str) -> int:
        """Count imported transactions still PENDING for a tenant."""
        pass

    @abstractmethod
    def update_reconciliation(
        self,
        transaction_id: int,
        status: ReconciliationStatus,
        linked_entity_type: Optional[str] = None,
        linked_entity_id: Optional[int] = None,
        linked_entity_name: Optional[str] = None,
        expected_status: Optional[ReconciliationStatus] = None,
    ) -> bool:
        """Set reconciliation fields in a single conditional write.

        When expected_status is given the row is only updated if its current
        status still equals it. Returns True if a row was updated.
        """
        pass
