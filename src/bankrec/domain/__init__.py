"""Domain layer for bankrec application."""

# Services import the database layer, which itself imports domain entities,
# so they are resolved lazily.
_SERVICES = {
    "BankAccountService": "bankrec.domain.account",
    "StatementImportService": "bankrec.domain.statement_import",
    "Deduplicator": "bankrec.domain.deduplication",
    "ReconciliationService": "bankrec.domain.reconciliation",
    "EntitySearchService": "bankrec.domain.entity_search",
    "BackgroundReconciler": "bankrec.domain.background",
}

__all__ = list(_SERVICES)


def __getattr__(name):
    if name in _SERVICES:
        import importlib

        return getattr(importlib.import_module(_SERVICES[name]), name)
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
