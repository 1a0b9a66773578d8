"""Free-text supplier/contractor search for manual reconciliation."""

from bankrec.database.base import Database
from bankrec.domain.entities import EntitySearchResult

MIN_QUERY_LENGTH = 2
RESULTS_PER_TYPE = 10


class EntitySearchService:
    """Looks up active suppliers and contractors by name or document."""

    def __init__(self, db: Database):
        self.db = db

    def search(self, tenant_id: str, query: str) -> list[EntitySearchResult]:
        """Suppliers then contractors matching the query, at most 10 of each.

        Names match case-insensitively; documents match as typed. Queries
        shorter than two characters return nothing.
        """
        query = (query or "").strip()
        if len(query) < MIN_QUERY_LENGTH:
            return []

        parties = self.db.search_suppliers(tenant_id, query, RESULTS_PER_TYPE)
        parties += self.db.search_contractors(tenant_id, query, RESULTS_PER_TYPE)
        return [
            EntitySearchResult(
                entity_type=p.entity_type,
                entity_id=p.id,
                entity_name=p.name,
                document=p.document,
            )
            for p in parties
        ]
