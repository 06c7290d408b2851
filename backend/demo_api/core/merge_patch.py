"""JSON Merge Patch — RFC 7386 merge of a patch document into a target document.

Invariants:
    - Non-object patch replaces the target wholesale
    - Object patch: null member removes the name, any other member merges recursively
    - Target that is not an object is treated as {} when the patch is an object
    - Inputs are never mutated; the result shares no containers with either input
    - parse_merge_patch accepts any JSON value; only undecodable bodies fail

Design Decisions:
    - match/case on the native JSON union instead of isinstance chains
    - Target deep-copied once up front, then merged in place: one copy per call
      instead of one per nesting level

See https://tools.ietf.org/html/rfc7386#section-2 for the reference pseudocode.
"""

import copy
import json

from demo_api.core.domain_types import JsonValue
from demo_api.core.errors import MalformedPatchDocumentError


def apply_merge_patch(target: JsonValue, patch: JsonValue) -> JsonValue:
    """Return the result of merging `patch` into `target`."""
    return _merge(copy.deepcopy(target), patch)


def _merge(target: JsonValue, patch: JsonValue) -> JsonValue:
    match patch:
        case dict():
            match target:
                case dict():
                    merged = target
                case _:
                    merged = {}
            for name, value in patch.items():
                if value is None:
                    merged.pop(name, None)
                else:
                    merged[name] = _merge(merged.get(name), value)
            return merged
        case _:
            return copy.deepcopy(patch)


def parse_merge_patch(raw: bytes | str) -> JsonValue:
    """Decode a merge patch request body; any JSON value is a valid patch."""
    try:
        return json.loads(raw)
    except (ValueError, TypeError) as e:
        raise MalformedPatchDocumentError(f"Patch body is not valid JSON: {e}") from e
