"""Tests for identifier parsing and document serialization."""

from datetime import datetime, timezone

import pytest
from bson import ObjectId

from readly.exceptions import InvalidIdentifierError
from readly.services.documents import serialize_document, to_object_id


class TestToObjectId:

    def test_valid_hex_string(self):
        oid = ObjectId()
        assert to_object_id(str(oid)) == oid

    @pytest.mark.parametrize("value", ["", "abc", "g" * 24, None])
    def test_invalid_values(self, value):
        with pytest.raises(InvalidIdentifierError):
            to_object_id(value)


class TestSerializeDocument:

    def test_none_passes_through(self):
        assert serialize_document(None) is None

    def test_nested_bson_values_become_strings(self):
        oid, ref = ObjectId(), ObjectId()
        created = datetime(2024, 1, 15, 12, 0, tzinfo=timezone.utc)

        result = serialize_document(
            {"_id": oid, "created": created, "refs": [ref], "meta": {"ref": ref, "n": 1}}
        )

        assert result == {
            "_id": str(oid),
            "created": "2024-01-15T12:00:00+00:00",
            "refs": [str(ref)],
            "meta": {"ref": str(ref), "n": 1},
        }
