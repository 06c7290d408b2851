"""Demo Schemas — the person record and its typed age patch.

Invariants:
    - Demo.first_name, last_name, age are required; id is optional until the store assigns it
    - DemoAgePatch.age is required and >= MIN_PATCH_AGE
    - to_document()/from_document() round-trip through the camelCase JSON tree

Design Decisions:
    - alias_generator=to_camel + populate_by_name: snake_case in Python,
      firstName/lastName on the wire, matching the public contract
    - Unknown members ignored on input: patch documents may add fields the
      record shape does not carry
    - age keeps lax coercion of numeric strings ("30") but rejects booleans
"""

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from demo_api.core.domain_types import MIN_PATCH_AGE, JsonValue
from demo_api.core.errors import EntityValidationError


def _reject_bool(v):
    # bool is an int subclass; true/false must not become 1/0
    if isinstance(v, bool):
        raise ValueError("age must be an integer, not a boolean")
    return v


class Demo(BaseModel):
    """Person record managed by the store."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: int | None = None
    first_name: str
    last_name: str
    age: int

    @field_validator("age", mode="before")
    @classmethod
    def reject_bool_age(cls, v):
        return _reject_bool(v)

    def to_document(self) -> dict[str, JsonValue]:
        """Generic JSON tree view of the record, keyed by wire names."""
        return self.model_dump(mode="json", by_alias=True)

    @classmethod
    def from_document(cls, document: JsonValue) -> "Demo":
        """Coerce a patched JSON tree back into a Demo.

        Raises EntityValidationError when the tree lost a required member
        or carries a value of the wrong type.
        """
        if not isinstance(document, dict):
            raise EntityValidationError(
                f"Patched document must be an object, got {type(document).__name__}",
            )
        try:
            return cls.model_validate(document)
        except ValidationError as e:
            first = e.errors()[0]
            field = ".".join(str(loc) for loc in first["loc"]) or None
            raise EntityValidationError(
                f"Patched document is not a valid Demo: {first['msg']}",
                field=field,
            ) from e


class DemoAgePatch(BaseModel):
    """Typed partial update — age only."""

    age: int = Field(ge=MIN_PATCH_AGE)

    @field_validator("age", mode="before")
    @classmethod
    def reject_bool_age(cls, v):
        return _reject_bool(v)
