"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(ValidationError):
    """Requested domain entity does not exist for the tenant."""


class EmptyResultError(DomainError):
    """A statement file parsed successfully but yielded no transactions."""


class PersistenceError(DomainError):
    """The atomic write of an import batch failed and was rolled back."""


def bank_account_not_found(bank_account_id: int) -> str:
    """Return message for missing or foreign bank account."""
    return f"Bank account {bank_account_id} not found"


def transaction_not_found(transaction_id: int) -> str:
    """Return message for missing transaction."""
    return f"Transaction {transaction_id} not found"


def import_batch_not_found(batch_id: int) -> str:
    """Return message for missing import batch."""
    return f"Import batch {batch_id} not found"


def not_reconcilable(transaction_id: int) -> str:
    """Return message for a manual transaction used as reconciliation target."""
    return (
        f"Transaction {transaction_id} was not imported from a bank statement "
        "and cannot be reconciled"
    )


def unsupported_file_type(extension: str, supported: list[str]) -> str:
    """Return message for a file extension with no registered parser."""
    listed = ", ".join(f".{ext}" for ext in supported)
    shown = f".{extension}" if extension else "(none)"
    return f"Unsupported file format: {shown}. Use {listed}"


def columns_not_detected(source: str) -> str:
    """Return message when date/amount columns cannot be found in a header."""
    return (
        f"Could not detect the date and amount columns in the {source}. "
        "Check that the file has a header row."
    )


def no_transactions_found(file_name: str) -> str:
    """Return message for a file that yielded zero transactions."""
    return f"No transactions found in '{file_name}'"


def entity_not_found(entity_type: str, entity_id: int) -> str:
    """Return message for a missing or foreign link target."""
    return f"{entity_type.capitalize()} {entity_id} not found"


def unknown_entity_type(entity_type: str, supported: list[str]) -> str:
    """Return message for an entity type that cannot be linked."""
    return f"Unknown entity type '{entity_type}'. Use {', '.join(supported)}"
