"""Bank account domain service."""

from typing import Optional
from bankrec.database.base import Database
from bankrec.domain.entities import BankAccount as BankAccountEntity
from bankrec.domain.errors import NotFoundError, ValidationError, bank_account_not_found


class BankAccountService:
    """Service for managing tenant bank accounts."""

    def __init__(self, db: Database):
        """Initialize bank account service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_account(
        self, tenant_id: str, bank_name: str, account_number: Optional[str] = None
    ) -> int:
        """Create a new bank account.

        Args:
            tenant_id: Owning tenant
            bank_name: Bank name
            account_number: Optional account number

        Returns:
            Account ID

        Raises:
            ValidationError: If bank name is empty
        """
        if not bank_name or not bank_name.strip():
            raise ValidationError("Bank name is required")
        return self.db.create_bank_account(
            tenant_id=tenant_id, bank_name=bank_name.strip(), account_number=account_number
        )

    def get_account(self, tenant_id: str, bank_account_id: int) -> BankAccountEntity:
        """Get a bank account owned by the tenant.

        Raises:
            NotFoundError: If the account does not exist or belongs to another tenant
        """
        account = self.db.get_bank_account(bank_account_id)
        if account is None or account.tenant_id != tenant_id:
            raise NotFoundError(bank_account_not_found(bank_account_id))
        return account

    def list_accounts(self, tenant_id: str) -> list[BankAccountEntity]:
        """List bank accounts of a tenant."""
        return self.db.list_bank_accounts(tenant_id)
