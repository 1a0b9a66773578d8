"""Domain model entities for bankrec.

These are pure data classes representing business concepts, independent of
database schema. Services and parsers exchange these; the database layer maps
its ORM rows onto them.
"""

from dataclasses import dataclass
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional


class TransactionType(str, Enum):
    """Direction of a transaction; derived from the sign of a parsed amount."""

    INCOME = "INCOME"
    EXPENSE = "EXPENSE"

    @classmethod
    def from_amount(cls, amount: Decimal) -> "TransactionType":
        return cls.INCOME if amount >= 0 else cls.EXPENSE


class ReconciliationStatus(str, Enum):
    """Reconciliation state of a financial transaction."""

    PENDING = "PENDING"
    AUTO_MATCHED = "AUTO_MATCHED"
    MANUAL_MATCHED = "MANUAL_MATCHED"
    IGNORED = "IGNORED"

    @property
    def is_matched(self) -> bool:
        return self in (ReconciliationStatus.AUTO_MATCHED, ReconciliationStatus.MANUAL_MATCHED)


class ReconciliationFilter(str, Enum):
    """Filter used when listing imported transactions."""

    ALL = "ALL"
    PENDING = "PENDING"
    MATCHED = "MATCHED"
    IGNORED = "IGNORED"

    def statuses(self) -> Optional[tuple[ReconciliationStatus, ...]]:
        """Statuses selected by this filter, or None for no restriction."""
        if self is ReconciliationFilter.PENDING:
            return (ReconciliationStatus.PENDING,)
        if self is ReconciliationFilter.MATCHED:
            return (ReconciliationStatus.AUTO_MATCHED, ReconciliationStatus.MANUAL_MATCHED)
        if self is ReconciliationFilter.IGNORED:
            return (ReconciliationStatus.IGNORED,)
        return None


class EntityType(str, Enum):
    """Kinds of business entity a transaction can be linked to."""

    SUPPLIER = "supplier"
    CONTRACTOR = "contractor"
    PURCHASE = "purchase"


class PurchaseOrderStatus(str, Enum):
    """Purchase order lifecycle states."""

    DRAFT = "DRAFT"
    APPROVED = "APPROVED"
    ORDERED = "ORDERED"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"


ACTIONABLE_ORDER_STATUSES = (
    PurchaseOrderStatus.APPROVED,
    PurchaseOrderStatus.ORDERED,
    PurchaseOrderStatus.DELIVERED,
)

INCOME_CATEGORY = "Receita Importada"
EXPENSE_CATEGORY = "Despesa Importada"
NO_DESCRIPTION = "Sem descrição"


@dataclass(frozen=True)
class ParsedTransaction:
    """Transaction as produced by a statement parser, before persistence."""

    date: date
    amount: Decimal
    description: str
    external_id: Optional[str] = None

    @property
    def type(self) -> TransactionType:
        return TransactionType.from_amount(self.amount)


@dataclass(frozen=True)
class BankAccount:
    """Bank account domain entity."""

    id: int
    tenant_id: str
    bank_name: str
    account_number: Optional[str]
    created_at: datetime


@dataclass(frozen=True)
class Party:
    """Supplier or contractor as seen by reconciliation."""

    id: int
    entity_type: EntityType
    tenant_id: str
    name: str
    document: Optional[str]
    is_active: bool


@dataclass(frozen=True)
class Project:
    """Construction project a purchase order belongs to."""

    id: int
    tenant_id: str
    name: str


@dataclass(frozen=True)
class PurchaseOrder:
    """Purchase order domain entity, carrying display names of its relations."""

    id: int
    project_id: int
    supplier_id: int
    order_number: str
    total_amount: Decimal
    order_date: date
    status: PurchaseOrderStatus
    supplier_name: str
    project_name: str


@dataclass(frozen=True)
class ImportBatch:
    """One statement file ingestion event."""

    id: int
    tenant_id: str
    bank_account_id: int
    file_name: str
    file_type: str
    total_records: int
    imported_count: int
    duplicate_count: int
    period_start: Optional[date]
    period_end: Optional[date]
    imported_by: str
    created_at: datetime


@dataclass(frozen=True)
class FinancialTransaction:
    """Persisted transaction; the unit of reconciliation.

    ``amount`` is the absolute value; the sign is implied by ``type``.
    """

    id: int
    tenant_id: str
    bank_account_id: Optional[int]
    project_id: Optional[int]
    type: TransactionType
    category: str
    amount: Decimal
    date: date
    description: str
    raw_description: Optional[str]
    external_id: Optional[str]
    import_batch_id: Optional[int]
    reconciliation_status: ReconciliationStatus
    linked_entity_type: Optional[str]
    linked_entity_id: Optional[int]
    linked_entity_name: Optional[str]
    created_by: str
    created_at: datetime

    @property
    def matching_text(self) -> str:
        """Uppercased provider text used by every matching strategy."""
        return (self.raw_description or self.description or "").upper()

    @property
    def signed_amount(self) -> Decimal:
        return self.amount if self.type is TransactionType.INCOME else -self.amount


@dataclass(frozen=True)
class NewTransaction:
    """Row to insert as part of an import batch."""

    type: TransactionType
    category: str
    amount: Decimal
    date: date
    description: str
    raw_description: str
    external_id: Optional[str]


@dataclass(frozen=True)
class ImportResult:
    """Summary returned to the caller of an import."""

    batch_id: int
    total_records: int
    imported_count: int
    duplicate_count: int
    period_start: Optional[date]
    period_end: Optional[date]


@dataclass(frozen=True)
class ReconciliationSuggestion:
    """Candidate match for a transaction; never persisted."""

    entity_type: EntityType
    entity_id: int
    entity_name: str
    confidence: int
    reason: str


@dataclass(frozen=True)
class EntitySearchResult:
    """Supplier or contractor found by free-text search."""

    entity_type: EntityType
    entity_id: int
    entity_name: str
    document: Optional[str]
