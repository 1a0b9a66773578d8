"""Rule-based matching strategies used by reconciliation.

Three strategies, in priority order:

1. CNPJ found in the transaction text matches a supplier/contractor document
   (confidence 90).
2. An actionable purchase order with the same total dated within three days
   of an expense (confidence 70).
3. The words of an active supplier/contractor name appear in the transaction
   text (confidence 50).

Everything here is a pure function over already loaded data, so a batch run
loads the tenant's entities once and matches every transaction in memory.
"""

from dataclasses import dataclass
from datetime import timedelta
from typing import Iterable, Optional

from bankrec.domain.entities import (
    EntityType,
    FinancialTransaction,
    Party,
    PurchaseOrder,
    ReconciliationSuggestion,
)
from bankrec.utils.documents import document_matches, find_cnpjs

CNPJ_CONFIDENCE = 90
PROXIMITY_CONFIDENCE = 70
NAME_CONFIDENCE = 50

DATE_WINDOW = timedelta(days=3)
PURCHASE_ORDER_LIMIT = 5

# Name words this short are too common to count ("LTDA" passes, "DE" does not)
MIN_WORD_LENGTH = 4
# A single-word name must be longer than this to match on its own
MIN_SINGLE_WORD_LENGTH = 6


@dataclass(frozen=True)
class EntityDirectory:
    """Snapshot of a tenant's suppliers and contractors, in ID order."""

    suppliers: list[Party]
    contractors: list[Party]

    @property
    def parties(self) -> list[Party]:
        """Suppliers first, then contractors."""
        return self.suppliers + self.contractors


def name_words(name: str) -> list[str]:
    """Uppercased whitespace-separated words long enough to be significant."""
    return [w for w in name.upper().split() if len(w) >= MIN_WORD_LENGTH]


def name_matches(name: str, text: str) -> bool:
    """True when the entity name is recognisable in the uppercased text.

    Two or more significant words must appear, except that a name with a
    single significant word matches on that word alone if it is long enough.
    """
    words = name_words(name)
    hits = sum(1 for w in words if w in text)
    if hits >= 2:
        return True
    return len(words) == 1 and hits == 1 and len(words[0]) >= MIN_SINGLE_WORD_LENGTH


def _cnpj_suggestion(party: Party) -> ReconciliationSuggestion:
    return ReconciliationSuggestion(
        entity_type=party.entity_type,
        entity_id=party.id,
        entity_name=party.name,
        confidence=CNPJ_CONFIDENCE,
        reason=f"CNPJ {party.document} encontrado na descrição",
    )


def _name_suggestion(party: Party) -> ReconciliationSuggestion:
    return ReconciliationSuggestion(
        entity_type=party.entity_type,
        entity_id=party.id,
        entity_name=party.name,
        confidence=NAME_CONFIDENCE,
        reason=f'Nome "{party.name}" encontrado na descrição',
    )


def cnpj_suggestions(text: str, directory: EntityDirectory) -> list[ReconciliationSuggestion]:
    """Every supplier/contractor whose document holds a CNPJ found in text."""
    suggestions = []
    for raw_cnpj in find_cnpjs(text):
        for party in directory.parties:
            if document_matches(party.document, raw_cnpj):
                suggestions.append(_cnpj_suggestion(party))
    return suggestions


def proximity_suggestions(
    transaction: FinancialTransaction, orders: Iterable[PurchaseOrder]
) -> list[ReconciliationSuggestion]:
    """Suggestions for purchase orders already filtered by amount and date."""
    return [
        ReconciliationSuggestion(
            entity_type=EntityType.PURCHASE,
            entity_id=order.id,
            entity_name=f"OC {order.order_number} - {order.supplier_name} ({order.project_name})",
            confidence=PROXIMITY_CONFIDENCE,
            reason=f"Valor R$ {transaction.amount:.2f} e data próxima",
        )
        for order in orders
    ]


def name_suggestions(text: str, directory: EntityDirectory) -> list[ReconciliationSuggestion]:
    """Every active supplier/contractor whose name is recognisable in text."""
    return [
        _name_suggestion(party)
        for party in directory.parties
        if party.is_active and name_matches(party.name, text)
    ]


def merge_suggestions(
    *groups: list[ReconciliationSuggestion],
) -> list[ReconciliationSuggestion]:
    """Combine strategy results given in priority order.

    An entity keeps only its first (highest priority) suggestion. The result
    is ordered by confidence, highest first; ties keep priority order.
    """
    seen: set[tuple[EntityType, int]] = set()
    merged = []
    for group in groups:
        for suggestion in group:
            key = (suggestion.entity_type, suggestion.entity_id)
            if key in seen:
                continue
            seen.add(key)
            merged.append(suggestion)
    return sorted(merged, key=lambda s: s.confidence, reverse=True)


def find_auto_match(
    transaction: FinancialTransaction, directory: EntityDirectory
) -> Optional[ReconciliationSuggestion]:
    """First entity to link automatically, or None.

    Only the CNPJ and name strategies apply; amount/date proximity is never
    used unattended. The first hit wins, suppliers before contractors.
    """
    text = transaction.matching_text

    for raw_cnpj in find_cnpjs(text):
        for party in directory.parties:
            if document_matches(party.document, raw_cnpj):
                return _cnpj_suggestion(party)

    for party in directory.parties:
        if party.is_active and name_matches(party.name, text):
            return _name_suggestion(party)

    return None
