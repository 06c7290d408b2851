"""Demo Service — list, get, create and the three PATCH protocols over DemoRepository.

Invariants:
    - Stateless: every call reads from and writes to the repository, nothing is cached
    - Create always gets a fresh store-assigned id (caller-supplied id ignored)
    - Patch variants never create records: unknown id → ResourceNotFoundError
    - A patched record keeps its id, whatever the patch did to the id member
    - The repository is written only after the whole patch applied and the
      result validated as a Demo; any failure leaves the store unchanged

Design Decisions:
    - Merge and JSON patch operate on Demo.to_document() and come back through
      Demo.from_document(), so a removed required field surfaces as a 400
    - Patch bodies are decoded before the id lookup: malformed documents fail
      fast without touching the store
"""

import logging
from contextlib import contextmanager

from demo_api.core.domain_types import DemoId, JsonValue
from demo_api.core.errors import DemoApiError, ErrorContext, ResourceNotFoundError
from demo_api.core.json_patch import apply_json_patch, parse_json_patch
from demo_api.core.merge_patch import apply_merge_patch
from demo_api.infrastructure.demo_repository import DemoRepository
from demo_api.schemas.demo import Demo, DemoAgePatch

logger = logging.getLogger(__name__)


class DemoService:
    """Request-level operations on Demo records."""

    def __init__(self, repository: DemoRepository):
        self.repository = repository

    def list_demos(self) -> list[Demo]:
        return self.repository.find_all()

    def get_demo(self, demo_id: DemoId) -> Demo:
        return self._get_or_raise(demo_id)

    def create_demo(self, demo: Demo) -> Demo:
        """Store a new record under a freshly assigned id."""
        created = self.repository.save(demo.model_copy(update={"id": None}))
        logger.info(f"Created demo: {created}", extra={"demo_id": created.id})
        return created

    def patch_age(self, demo_id: DemoId, age_patch: DemoAgePatch) -> Demo:
        return self.repository.save_age_patch(demo_id, age_patch)

    def merge_patch(self, demo_id: DemoId, patch: JsonValue) -> Demo:
        """Apply an RFC 7386 merge patch document."""
        current = self._get_or_raise(demo_id)
        merged = apply_merge_patch(current.to_document(), patch)
        logger.debug(f"Merged document: {merged}", extra={"demo_id": demo_id})
        with _tagged(demo_id):
            return self._save_patched(demo_id, merged)

    def json_patch(self, demo_id: DemoId, raw_operations: bytes) -> Demo:
        """Apply an RFC 6902 JSON Patch operation array."""
        with _tagged(demo_id):
            patch = parse_json_patch(raw_operations)
            current = self._get_or_raise(demo_id)
            patched = apply_json_patch(current.to_document(), patch)
            return self._save_patched(demo_id, patched)

    def _get_or_raise(self, demo_id: DemoId) -> Demo:
        demo = self.repository.find_by_id(demo_id)
        if demo is None:
            raise ResourceNotFoundError("Demo", demo_id, ErrorContext(demo_id=demo_id))
        return demo

    def _save_patched(self, demo_id: DemoId, document: JsonValue) -> Demo:
        if isinstance(document, dict):
            document = {**document, "id": demo_id}
        return self.repository.save(Demo.from_document(document))


@contextmanager
def _tagged(demo_id: DemoId):
    """Attach the target id to client errors raised by the patch pipeline."""
    try:
        yield
    except DemoApiError as e:
        if e.context.demo_id is None:
            e.context.demo_id = demo_id
        raise
