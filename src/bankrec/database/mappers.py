"""Mapper functions to convert SQLAlchemy models into domain entities.

This layer isolates the conversion logic so the services never see ORM rows.
"""

from bankrec.domain import entities as domain
from bankrec.database.models import (
    BankAccount as ORMBankAccount,
    Supplier as ORMSupplier,
    Contractor as ORMContractor,
    Project as ORMProject,
    PurchaseOrder as ORMPurchaseOrder,
    ImportBatch as ORMImportBatch,
    FinancialTransaction as ORMFinancialTransaction,
)


def bank_account_to_domain(orm_account: ORMBankAccount) -> domain.BankAccount:
    """Convert SQLAlchemy BankAccount model to domain BankAccount entity."""
    return domain.BankAccount(
        id=orm_account.id,
        tenant_id=orm_account.tenant_id,
        bank_name=orm_account.bank_name,
        account_number=orm_account.account_number,
        created_at=orm_account.created_at,
    )


def supplier_to_domain(orm_supplier: ORMSupplier) -> domain.Party:
    """Convert SQLAlchemy Supplier model to a domain Party."""
    return domain.Party(
        id=orm_supplier.id,
        entity_type=domain.EntityType.SUPPLIER,
        tenant_id=orm_supplier.tenant_id,
        name=orm_supplier.name,
        document=orm_supplier.document,
        is_active=orm_supplier.is_active,
    )


def contractor_to_domain(orm_contractor: ORMContractor) -> domain.Party:
    """Convert SQLAlchemy Contractor model to a domain Party."""
    return domain.Party(
        id=orm_contractor.id,
        entity_type=domain.EntityType.CONTRACTOR,
        tenant_id=orm_contractor.tenant_id,
        name=orm_contractor.name,
        document=orm_contractor.document,
        is_active=orm_contractor.is_active,
    )


def project_to_domain(orm_project: ORMProject) -> domain.Project:
    """Convert SQLAlchemy Project model to domain Project entity."""
    return domain.Project(
        id=orm_project.id,
        tenant_id=orm_project.tenant_id,
        name=orm_project.name,
    )


def purchase_order_to_domain(orm_order: ORMPurchaseOrder) -> domain.PurchaseOrder:
    """Convert SQLAlchemy PurchaseOrder model to domain PurchaseOrder entity."""
    return domain.PurchaseOrder(
        id=orm_order.id,
        project_id=orm_order.project_id,
        supplier_id=orm_order.supplier_id,
        order_number=orm_order.order_number,
        total_amount=orm_order.total_amount,
        order_date=orm_order.order_date,
        status=domain.PurchaseOrderStatus(orm_order.status),
        supplier_name=orm_order.supplier.name,
        project_name=orm_order.project.name,
    )


def import_batch_to_domain(orm_batch: ORMImportBatch) -> domain.ImportBatch:
    """Convert SQLAlchemy ImportBatch model to domain ImportBatch entity."""
    return domain.ImportBatch(
        id=orm_batch.id,
        tenant_id=orm_batch.tenant_id,
        bank_account_id=orm_batch.bank_account_id,
        file_name=orm_batch.file_name,
        file_type=orm_batch.file_type,
        total_records=orm_batch.total_records,
        imported_count=orm_batch.imported_count,
        duplicate_count=orm_batch.duplicate_count,
        period_start=orm_batch.period_start,
        period_end=orm_batch.period_end,
        imported_by=orm_batch.imported_by,
        created_at=orm_batch.created_at,
    )


def transaction_to_domain(orm_txn: ORMFinancialTransaction) -> domain.FinancialTransaction:
    """Convert SQLAlchemy FinancialTransaction model to domain entity."""
    return domain.FinancialTransaction(
        id=orm_txn.id,
        tenant_id=orm_txn.tenant_id,
        bank_account_id=orm_txn.bank_account_id,
        project_id=orm_txn.project_id,
        type=domain.TransactionType(orm_txn.type),
        category=orm_txn.category,
        amount=orm_txn.amount,
        date=orm_txn.date,
        description=orm_txn.description,
        raw_description=orm_txn.raw_description,
        external_id=orm_txn.external_id,
        import_batch_id=orm_txn.import_batch_id,
        reconciliation_status=domain.ReconciliationStatus(orm_txn.reconciliation_status),
        linked_entity_type=orm_txn.linked_entity_type,
        linked_entity_id=orm_txn.linked_entity_id,
        linked_entity_name=orm_txn.linked_entity_name,
        created_by=orm_txn.created_by,
        created_at=orm_txn.created_at,
    )
