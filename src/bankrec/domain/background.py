"""Fire-and-forget auto-reconciliation after an import."""

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Callable

from bankrec.database.base import Database
from bankrec.domain.reconciliation import ReconciliationService

logger = logging.getLogger(__name__)


class BackgroundReconciler:
    """Runs auto-reconciliation passes on worker threads.

    Every pass opens its own database handle through ``database_factory``;
    sessions are never shared across threads. Concurrent manual resolutions
    are tolerated because each auto-match write is conditional on PENDING.
    """

    def __init__(self, database_factory: Callable[[], Database], max_workers: int = 1):
        self.database_factory = database_factory
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="auto-reconcile"
        )

    def submit(self, tenant_id: str, batch_id: int) -> Future:
        """Schedule a pass over one import batch; the future yields the match count."""
        return self._executor.submit(self._run, tenant_id, batch_id)

    def _run(self, tenant_id: str, batch_id: int) -> int:
        db = self.database_factory()
        db.connect()
        try:
            return ReconciliationService(db).auto_reconcile(tenant_id, batch_id)
        except Exception:
            logger.exception("Background auto-reconciliation of batch %d failed", batch_id)
            raise
        finally:
            db.disconnect()

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)

    def __enter__(self) -> "BackgroundReconciler":
        return self

    def __exit__(self, *exc_info) -> None:
        self.shutdown()
