"""Deduplication of parsed transactions against previously imported ones."""

from dataclasses import dataclass

from bankrec.database.base import Database
from bankrec.domain.entities import ParsedTransaction


@dataclass(frozen=True)
class DeduplicationResult:
    """Parsed transactions split into net-new and already imported."""

    new: list[ParsedTransaction]
    duplicates: list[ParsedTransaction]


class Deduplicator:
    """Filters parsed transactions by provider-issued external ID.

    Only transactions carrying an external ID (OFX ``FITID``) participate;
    spreadsheet rows have no reliable natural key and are always new.
    """

    def __init__(self, db: Database):
        self.db = db

    def split(
        self, bank_account_id: int, transactions: list[ParsedTransaction]
    ) -> DeduplicationResult:
        candidate_ids = {t.external_id for t in transactions if t.external_id}
        existing = (
            self.db.find_existing_external_ids(bank_account_id, candidate_ids)
            if candidate_ids
            else set()
        )

        new = []
        duplicates = []
        for txn in transactions:
            if txn.external_id and txn.external_id in existing:
                duplicates.append(txn)
            else:
                new.append(txn)
        return DeduplicationResult(new=new, duplicates=duplicates)
