"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - DemoId wraps int — ids are assigned by the store, starting at 1
    - JsonValue is the closed union of JSON shapes the patch algorithms accept
    - Accepted PATCH media types encoded as an Enum — no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - JsonValue as a type alias over native dict/list/scalars: json.loads output
      is used directly and decomposed with match/case in the algorithms
"""

from enum import Enum
from typing import NewType, TypeAlias


# ─── Identity Types ──────────────────────────────────────────────

DemoId = NewType("DemoId", int)


# ─── JSON Tree ───────────────────────────────────────────────────

JsonValue: TypeAlias = (
    dict[str, "JsonValue"] | list["JsonValue"] | str | int | float | bool | None
)


# ─── Constants ───────────────────────────────────────────────────

MIN_PATCH_AGE = 18
FIRST_DEMO_ID = 1


# ─── Enums ───────────────────────────────────────────────────────

class PatchMediaType(str, Enum):
    """PATCH body formats accepted by /demos/{id}."""
    AGE_PATCH = "application/json"
    MERGE_PATCH = "application/merge-patch+json"
    JSON_PATCH = "application/json-patch+json"

    @classmethod
    def from_content_type(cls, content_type: str | None) -> "PatchMediaType | None":
        """Resolve a Content-Type header, ignoring parameters like charset."""
        if not content_type:
            return None
        media_type = content_type.split(";", 1)[0].strip().lower()
        try:
            return cls(media_type)
        except ValueError:
            return None
