"""Merge Patch — tests for the pure RFC 7386 merge algorithm.

Tests cover:
    - Empty patch leaves the document unchanged
    - Scalar replace, member add, null removal
    - Non-object patch values replace object targets wholesale
    - Non-object targets are treated as {} under an object patch
    - Inputs are not mutated
    - RFC 7386 Appendix A examples
    - parse_merge_patch rejects invalid JSON
"""

import pytest

from demo_api.core.errors import MalformedPatchDocumentError
from demo_api.core.merge_patch import apply_merge_patch, parse_merge_patch


def _john() -> dict:
    return {"id": 1, "firstName": "John", "lastName": "Doe", "age": 20}


# ─── Basic semantics ─────────────────────────────────────────────

def test_empty_patch_leaves_document_unchanged():
    assert apply_merge_patch(_john(), {}) == _john()


def test_scalar_member_is_replaced():
    result = apply_merge_patch(_john(), {"age": 30})
    assert result["age"] == 30
    assert result["firstName"] == "John"


def test_null_member_removes_name():
    target = {"firstName": "John", "lastName": "Doe", "age": 20}
    assert apply_merge_patch(target, {"lastName": None}) == {
        "firstName": "John", "age": 20,
    }


def test_null_for_absent_name_is_noop():
    assert apply_merge_patch(_john(), {"nickname": None}) == _john()


def test_new_member_is_added():
    result = apply_merge_patch(_john(), {"email": "john@example.com"})
    assert result["email"] == "john@example.com"


def test_array_replaces_object_member():
    target = {"address": {"city": "Paris", "zip": "75001"}}
    assert apply_merge_patch(target, {"address": ["a", "b"]}) == {
        "address": ["a", "b"],
    }


def test_scalar_replaces_object_member():
    target = {"address": {"city": "Paris"}}
    assert apply_merge_patch(target, {"address": "unknown"}) == {
        "address": "unknown",
    }


def test_nested_objects_merge_recursively():
    target = {"address": {"city": "Paris", "zip": "75001"}}
    result = apply_merge_patch(target, {"address": {"zip": None, "country": "FR"}})
    assert result == {"address": {"city": "Paris", "country": "FR"}}


def test_object_patch_over_scalar_target_starts_from_empty_object():
    assert apply_merge_patch("hello", {"a": 1}) == {"a": 1}
    assert apply_merge_patch({"x": 5}, {"x": {"y": 1}}) == {"x": {"y": 1}}


def test_non_object_patch_replaces_whole_target():
    assert apply_merge_patch(_john(), ["a"]) == ["a"]
    assert apply_merge_patch(_john(), 42) == 42
    assert apply_merge_patch(_john(), None) is None


def test_nested_nulls_are_stripped_from_added_members():
    assert apply_merge_patch({}, {"a": {"bb": {"ccc": None}}}) == {"a": {"bb": {}}}


# ─── Purity ──────────────────────────────────────────────────────

def test_target_is_not_mutated():
    target = {"address": {"city": "Paris"}, "age": 20}
    apply_merge_patch(target, {"address": {"city": "Lyon"}, "age": None})
    assert target == {"address": {"city": "Paris"}, "age": 20}


def test_result_does_not_share_patch_containers():
    patch = {"tags": ["a", "b"]}
    result = apply_merge_patch({}, patch)
    result["tags"].append("c")
    assert patch == {"tags": ["a", "b"]}


# ─── RFC 7386 Appendix A ─────────────────────────────────────────

@pytest.mark.parametrize(
    ("target", "patch", "expected"),
    [
        ({"a": "b"}, {"a": "c"}, {"a": "c"}),
        ({"a": "b"}, {"b": "c"}, {"a": "b", "b": "c"}),
        ({"a": "b"}, {"a": None}, {}),
        ({"a": "b", "b": "c"}, {"a": None}, {"b": "c"}),
        ({"a": ["b"]}, {"a": "c"}, {"a": "c"}),
        ({"a": "c"}, {"a": ["b"]}, {"a": ["b"]}),
        ({"a": {"b": "c"}}, {"a": {"b": "d", "c": None}}, {"a": {"b": "d"}}),
        ({"a": [{"b": "c"}]}, {"a": [1]}, {"a": [1]}),
        (["a", "b"], ["c", "d"], ["c", "d"]),
        ({"a": "b"}, ["c"], ["c"]),
        ({"a": "foo"}, None, None),
        ({"a": "foo"}, "bar", "bar"),
        ({"e": None}, {"a": 1}, {"e": None, "a": 1}),
        ([1, 2], {"a": "b", "c": None}, {"a": "b"}),
    ],
)
def test_rfc7386_appendix_examples(target, patch, expected):
    assert apply_merge_patch(target, patch) == expected


# ─── parse_merge_patch ───────────────────────────────────────────

def test_parse_merge_patch_decodes_object():
    assert parse_merge_patch(b'{"age": 30, "lastName": null}') == {
        "age": 30, "lastName": None,
    }


def test_parse_merge_patch_rejects_invalid_json():
    with pytest.raises(MalformedPatchDocumentError):
        parse_merge_patch(b"{not json")
