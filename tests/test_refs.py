"""
Tests for pointer parsing and reference resolution.
"""

import pytest

from openapi_dereferencer.errors import (
    CycleDetectedError,
    ErrorKind,
    InvalidPointerError,
    ReferenceResolutionError,
)
from openapi_dereferencer.refs import is_reference, parse_pointer, resolve, resolve_pointer


class TestPointers:
    """Test cases for pointer parsing and lookup."""

    def test_parse_pointer(self):
        assert parse_pointer("#/components/schemas/Pet") == ["components", "schemas", "Pet"]

    def test_parse_pointer_unescapes_segments(self):
        assert parse_pointer("#/paths/~1billing~1v1~1costs/get") == ["paths", "/billing/v1/costs", "get"]
        assert parse_pointer("#/a~0b") == ["a~b"]
        assert parse_pointer("#/application%2Fjson") == ["application/json"]

    def test_root_pointer(self):
        assert parse_pointer("#") == []

    @pytest.mark.parametrize("pointer", ["other.yaml#/components/schemas/Pet", "https://example.com/x.json", "#components"])
    def test_external_or_malformed_pointers(self, pointer):
        with pytest.raises(InvalidPointerError) as exc_info:
            parse_pointer(pointer)
        assert exc_info.value.pointer == pointer
        assert exc_info.value.kind is ErrorKind.INVALID_POINTER

    def test_invalid_pointer_is_resolution_error(self):
        with pytest.raises(ReferenceResolutionError):
            resolve_pointer("external.json#/a", {})

    def test_resolve_pointer_through_sequences(self):
        doc = {"tags": [{"name": "a"}, {"name": "b"}]}
        assert resolve_pointer("#/tags/1/name", doc) == "b"

    def test_resolve_pointer_keeps_falsy_values(self):
        doc = {"a": {"zero": 0, "empty": "", "off": False, "none": None}}
        assert resolve_pointer("#/a/zero", doc) == 0
        assert resolve_pointer("#/a/empty", doc) == ""
        assert resolve_pointer("#/a/off", doc) is False
        assert resolve_pointer("#/a/none", doc) is None

    @pytest.mark.parametrize("pointer", ["#/components/missing", "#/tags/5", "#/tags/x", "#/tags/0/name/deeper", "#/tags/²", "#/tags/١"])
    def test_missing_segment_names_pointer(self, pointer):
        doc = {"components": {}, "tags": [{"name": "a"}]}
        with pytest.raises(ReferenceResolutionError) as exc_info:
            resolve_pointer(pointer, doc)
        assert exc_info.value.pointer == pointer
        assert pointer in str(exc_info.value)
        assert exc_info.value.kind is ErrorKind.UNRESOLVABLE


class TestResolve:
    """Test cases for chained reference resolution."""

    def test_is_reference(self):
        assert is_reference({"$ref": "#/a"})
        assert is_reference({"$ref": "#/a", "description": "sibling"})
        assert not is_reference({"$ref": {"type": "string"}})
        assert not is_reference(["$ref"])
        assert not is_reference("$ref")

    def test_non_reference_is_returned_unchanged(self):
        node = {"type": "string"}
        assert resolve(node, {}) is node

    def test_chain_resolves_to_concrete_content(self):
        doc = {
            "A": {"$ref": "#/B"},
            "B": {"$ref": "#/C"},
            "C": {"type": "integer"},
        }
        assert resolve({"$ref": "#/A"}, doc) == {"type": "integer"}

    def test_sibling_keys_are_dropped(self):
        doc = {"C": {"type": "integer"}}
        assert resolve({"$ref": "#/C", "description": "ignored"}, doc) == {"type": "integer"}

    def test_chain_cycle_is_detected(self):
        doc = {"A": {"$ref": "#/B"}, "B": {"$ref": "#/A"}}
        with pytest.raises(CycleDetectedError) as exc_info:
            resolve({"$ref": "#/A"}, doc)
        assert exc_info.value.chain == ["#/A", "#/B", "#/A"]
        assert exc_info.value.kind is ErrorKind.CYCLE

    def test_self_reference_is_detected(self):
        doc = {"A": {"$ref": "#/A"}}
        with pytest.raises(CycleDetectedError):
            resolve({"$ref": "#/A"}, doc)
