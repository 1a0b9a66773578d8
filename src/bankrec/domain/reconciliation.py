"""Reconciliation domain service."""

import logging
from typing import Optional

from bankrec.database.base import Database
from bankrec.domain.entities import (
    ACTIONABLE_ORDER_STATUSES,
    EntityType,
    FinancialTransaction,
    ReconciliationFilter,
    ReconciliationStatus,
    ReconciliationSuggestion,
    TransactionType,
)
from bankrec.domain.errors import (
    NotFoundError,
    ValidationError,
    entity_not_found,
    not_reconcilable,
    transaction_not_found,
    unknown_entity_type,
)
from bankrec.domain.matching import (
    DATE_WINDOW,
    PURCHASE_ORDER_LIMIT,
    EntityDirectory,
    cnpj_suggestions,
    find_auto_match,
    merge_suggestions,
    name_suggestions,
    proximity_suggestions,
)

logger = logging.getLogger(__name__)


class ReconciliationService:
    """Matches imported transactions to suppliers, contractors and purchase orders."""

    def __init__(self, db: Database):
        """Initialize reconciliation service.

        Args:
            db: Database instance
        """
        self.db = db

    def load_directory(self, tenant_id: str) -> EntityDirectory:
        """Load the tenant's suppliers and contractors once for matching."""
        return EntityDirectory(
            suppliers=self.db.list_suppliers(tenant_id),
            contractors=self.db.list_contractors(tenant_id),
        )

    def get_transaction(self, tenant_id: str, transaction_id: int) -> FinancialTransaction:
        """Get an imported transaction owned by the tenant.

        Raises:
            NotFoundError: If the transaction does not exist for the tenant
            ValidationError: If the transaction was entered manually
        """
        txn = self.db.get_transaction(transaction_id)
        if txn is None or txn.tenant_id != tenant_id:
            raise NotFoundError(transaction_not_found(transaction_id))
        if txn.import_batch_id is None:
            raise ValidationError(not_reconcilable(transaction_id))
        return txn

    def list_transactions(
        self,
        tenant_id: str,
        status_filter: ReconciliationFilter = ReconciliationFilter.ALL,
        import_batch_id: Optional[int] = None,
    ) -> list[FinancialTransaction]:
        """List imported transactions, newest first.

        Args:
            tenant_id: Owning tenant
            status_filter: ALL, PENDING, MATCHED (auto or manual) or IGNORED
            import_batch_id: Optional import batch to restrict to
        """
        return self.db.list_imported_transactions(
            tenant_id,
            statuses=ReconciliationFilter(status_filter).statuses(),
            import_batch_id=import_batch_id,
        )

    def count_pending(self, tenant_id: str) -> int:
        """Number of imported transactions awaiting reconciliation."""
        return self.db.count_pending_transactions(tenant_id)

    def suggestions(self, tenant_id: str, transaction_id: int) -> list[ReconciliationSuggestion]:
        """Ranked candidate matches for a transaction, highest confidence first.

        All three strategies run; an entity suggested by a stronger strategy
        is not repeated by a weaker one.
        """
        txn = self.get_transaction(tenant_id, transaction_id)
        directory = self.load_directory(tenant_id)
        text = txn.matching_text

        by_document = cnpj_suggestions(text, directory)

        by_proximity = []
        if txn.type is TransactionType.EXPENSE:
            orders = self.db.find_purchase_orders(
                tenant_id,
                total_amount=txn.amount,
                start_date=txn.date - DATE_WINDOW,
                end_date=txn.date + DATE_WINDOW,
                statuses=ACTIONABLE_ORDER_STATUSES,
                limit=PURCHASE_ORDER_LIMIT,
            )
            by_proximity = proximity_suggestions(txn, orders)

        by_name = name_suggestions(text, directory)
        return merge_suggestions(by_document, by_proximity, by_name)

    def match(
        self,
        tenant_id: str,
        transaction_id: int,
        entity_type: EntityType | str,
        entity_id: int,
        entity_name: str,
    ) -> FinancialTransaction:
        """Link a transaction to an entity by hand, whatever its current status.

        Raises:
            NotFoundError: If the transaction or the entity does not exist for the tenant
            ValidationError: If the entity type or name is invalid
        """
        self.get_transaction(tenant_id, transaction_id)
        try:
            entity_type = EntityType(entity_type)
        except ValueError:
            raise ValidationError(
                unknown_entity_type(str(entity_type), [t.value for t in EntityType])
            )
        if not entity_name or not entity_name.strip():
            raise ValidationError("Entity name is required")
        self._check_entity(tenant_id, entity_type, entity_id)

        self.db.update_reconciliation(
            transaction_id,
            ReconciliationStatus.MANUAL_MATCHED,
            linked_entity_type=entity_type.value,
            linked_entity_id=entity_id,
            linked_entity_name=entity_name.strip(),
        )
        return self.db.get_transaction(transaction_id)

    def _check_entity(self, tenant_id: str, entity_type: EntityType, entity_id: int) -> None:
        if entity_type is EntityType.PURCHASE:
            found = self.db.get_purchase_order(tenant_id, entity_id) is not None
        else:
            if entity_type is EntityType.SUPPLIER:
                party = self.db.get_supplier(entity_id)
            else:
                party = self.db.get_contractor(entity_id)
            found = party is not None and party.tenant_id == tenant_id
        if not found:
            raise NotFoundError(entity_not_found(entity_type.value, entity_id))

    def unlink(self, tenant_id: str, transaction_id: int) -> FinancialTransaction:
        """Reopen a transaction: back to PENDING with no linked entity."""
        self.get_transaction(tenant_id, transaction_id)
        self.db.update_reconciliation(transaction_id, ReconciliationStatus.PENDING)
        return self.db.get_transaction(transaction_id)

    def ignore(self, tenant_id: str, transaction_id: int) -> FinancialTransaction:
        """Mark a transaction as not needing reconciliation."""
        self.get_transaction(tenant_id, transaction_id)
        self.db.update_reconciliation(transaction_id, ReconciliationStatus.IGNORED)
        return self.db.get_transaction(transaction_id)

    def auto_match(
        self,
        tenant_id: str,
        transaction_id: int,
        directory: Optional[EntityDirectory] = None,
    ) -> Optional[ReconciliationSuggestion]:
        """Apply the first CNPJ or name match to a PENDING transaction.

        The write only happens if the transaction is still PENDING at that
        moment. Returns the applied match, or None if nothing matched or the
        transaction was resolved concurrently.
        """
        txn = self.get_transaction(tenant_id, transaction_id)
        if txn.reconciliation_status is not ReconciliationStatus.PENDING:
            return None
        if directory is None:
            directory = self.load_directory(tenant_id)
        return self._apply_auto_match(txn, directory)

    def auto_reconcile(self, tenant_id: str, batch_id: int) -> int:
        """Auto-match the PENDING transactions of one import batch.

        Returns:
            Number of transactions moved to AUTO_MATCHED
        """
        pending = self.db.list_imported_transactions(
            tenant_id, statuses=[ReconciliationStatus.PENDING], import_batch_id=batch_id
        )
        return self._reconcile(tenant_id, pending)

    def rerun_auto_reconcile(self, tenant_id: str) -> int:
        """Auto-match every PENDING imported transaction of the tenant.

        Returns:
            Number of transactions moved to AUTO_MATCHED
        """
        pending = self.db.list_imported_transactions(
            tenant_id, statuses=[ReconciliationStatus.PENDING]
        )
        return self._reconcile(tenant_id, pending)

    def _reconcile(self, tenant_id: str, transactions: list[FinancialTransaction]) -> int:
        if not transactions:
            return 0
        directory = self.load_directory(tenant_id)
        matched = sum(
            1 for txn in transactions if self._apply_auto_match(txn, directory) is not None
        )
        logger.info(
            "Auto-reconciled %d of %d pending transactions for tenant %s",
            matched,
            len(transactions),
            tenant_id,
        )
        return matched

    def _apply_auto_match(
        self, txn: FinancialTransaction, directory: EntityDirectory
    ) -> Optional[ReconciliationSuggestion]:
        match = find_auto_match(txn, directory)
        if match is None:
            return None

        applied = self.db.update_reconciliation(
            txn.id,
            ReconciliationStatus.AUTO_MATCHED,
            linked_entity_type=match.entity_type.value,
            linked_entity_id=match.entity_id,
            linked_entity_name=match.entity_name,
            expected_status=ReconciliationStatus.PENDING,
        )
        if not applied:
            logger.info("Transaction %d was resolved concurrently; auto-match skipped", txn.id)
            return None
        return match
