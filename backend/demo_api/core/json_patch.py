"""JSON Patch — RFC 6902 operation documents parsed and applied via the jsonpatch library.

Invariants:
    - parse_json_patch accepts only a JSON array of operation objects
    - Every operation is structurally checked (op, path) before any is applied
    - apply_json_patch is all-or-nothing: the input document is never mutated,
      so a failing operation leaves no partial result behind
    - Library exceptions never escape: decoding problems become
      MalformedPatchDocumentError, application problems PatchApplicationError

Design Decisions:
    - jsonpatch over a hand-rolled applier: full add/remove/replace/move/copy/test
      semantics and JSON Pointer escaping come for free
    - Operations applied one by one (each as a single-op JsonPatch) so the
      failing index can be reported
"""

import copy
import json
import logging

import jsonpatch
from jsonpointer import JsonPointerException

from demo_api.core.domain_types import JsonValue
from demo_api.core.errors import MalformedPatchDocumentError, PatchApplicationError

logger = logging.getLogger(__name__)


def parse_json_patch(raw: bytes | str) -> jsonpatch.JsonPatch:
    """Decode a request body into a validated JsonPatch."""
    try:
        operations = json.loads(raw)
    except (ValueError, TypeError) as e:
        raise MalformedPatchDocumentError(f"Patch body is not valid JSON: {e}") from e

    if not isinstance(operations, list):
        raise MalformedPatchDocumentError(
            "JSON Patch document must be an array of operations",
        )
    for index, operation in enumerate(operations):
        if not isinstance(operation, dict):
            raise MalformedPatchDocumentError(
                f"Operation {index} must be an object, got {type(operation).__name__}",
            )

    try:
        return jsonpatch.JsonPatch(operations)
    except (jsonpatch.InvalidJsonPatch, JsonPointerException) as e:
        raise MalformedPatchDocumentError(f"Invalid JSON Patch document: {e}") from e


def apply_json_patch(document: JsonValue, patch: jsonpatch.JsonPatch) -> JsonValue:
    """Apply every operation of `patch` to a copy of `document`, in order."""
    result = copy.deepcopy(document)
    for index, operation in enumerate(patch.patch):
        try:
            result = jsonpatch.JsonPatch([operation]).apply(result, in_place=True)
        except (jsonpatch.JsonPatchException, JsonPointerException) as e:
            logger.warning(
                f"JSON Patch operation {index} failed: {e}",
                extra={"op_count": len(patch.patch)},
            )
            raise PatchApplicationError(
                f"Operation {index} ({operation.get('op')}) failed: {e}",
                operation_index=index,
            ) from e
    return result
