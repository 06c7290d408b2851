"""Demo Repository — in-memory, thread-safe keyed store of Demo records.

Invariants:
    - Every stored Demo has a non-null, unique id
    - Ids come from a monotonically increasing counter starting at 1, never reused
    - All reads and writes of _demos happen under _lock (linearizable operations)
    - Callers only ever receive copies; stored instances never leave the store

Design Decisions:
    - threading.Lock over asyncio.Lock: critical sections never await, and the
      store stays safe if handlers run in FastAPI's threadpool
    - Not-found is a representable absence (None) in find_by_id; only
      save_age_patch, which must act on an existing record, raises
    - Single process-wide instance served by get_repository(); tests override
      the dependency with a fresh DemoRepository
"""

import itertools
import logging
import threading

from demo_api.core.domain_types import FIRST_DEMO_ID, DemoId
from demo_api.core.errors import ErrorContext, ResourceNotFoundError
from demo_api.schemas.demo import Demo, DemoAgePatch

logger = logging.getLogger(__name__)


class DemoRepository:
    """Authoritative storage for Demo records."""

    def __init__(self):
        self._lock = threading.Lock()
        self._demos: dict[DemoId, Demo] = {}
        self._ids = itertools.count(FIRST_DEMO_ID)

    def find_all(self) -> list[Demo]:
        with self._lock:
            return [demo.model_copy() for demo in self._demos.values()]

    def find_by_id(self, demo_id: DemoId) -> Demo | None:
        with self._lock:
            demo = self._demos.get(demo_id)
            return demo.model_copy() if demo is not None else None

    def save(self, demo: Demo) -> Demo:
        """Insert or overwrite a record, assigning the next id when unset."""
        with self._lock:
            demo_id = demo.id if demo.id is not None else DemoId(next(self._ids))
            stored = demo.model_copy(update={"id": demo_id})
            self._demos[demo_id] = stored
        logger.debug("Saved demo", extra={"demo_id": demo_id})
        return stored.model_copy()

    def save_age_patch(self, demo_id: DemoId, age_patch: DemoAgePatch) -> Demo:
        """Set age on an existing record; raises ResourceNotFoundError if absent."""
        if demo_id is None:
            raise ValueError("demo_id is required for an age patch")
        with self._lock:
            current = self._demos.get(demo_id)
            if current is None:
                raise ResourceNotFoundError("Demo", demo_id, ErrorContext(demo_id=demo_id))
            stored = current.model_copy(update={"age": age_patch.age})
            self._demos[demo_id] = stored
        logger.debug("Patched demo age", extra={"demo_id": demo_id})
        return stored.model_copy()


_repository = DemoRepository()


def get_repository() -> DemoRepository:
    """FastAPI dependency — the process-wide repository."""
    return _repository
