"""
Tests for decoding request bodies that carry one entity or a list of entities
"""
import json
import uuid

import pytest
from pydantic import ValidationError

from app.schemas.collection import ARRAY, OBJECT, OTHER, decode_collection, json_type
from app.schemas.timeseries import MeasurementCollection
from app.schemas.project import ProjectCreate


@pytest.mark.parametrize(
    "raw, expected",
    [
        (b"[]", ARRAY),
        (b"  \n\t[{\"name\": \"a\"}]", ARRAY),
        (b"{}", OBJECT),
        (b"\r\n {\"name\": \"a\"}", OBJECT),
        (b"", OTHER),
        (b"null", OTHER),
        (b"42", OTHER),
        (b"\"text\"", OTHER),
        ("{\"name\": \"a\"}", OBJECT),
    ],
)
def test_json_type(raw, expected):
    assert json_type(raw) == expected


def test_single_object_yields_one_item():
    """A single object becomes a one element list"""
    items = decode_collection(b'{"name": "Blue Water Dam"}', ProjectCreate)
    assert len(items) == 1
    assert items[0].name == "Blue Water Dam"


def test_array_preserves_order():
    names = ["Alpha", "Bravo", "Charlie", "Delta"]
    raw = json.dumps([{"name": name} for name in names])
    items = decode_collection(raw, ProjectCreate)
    assert [item.name for item in items] == names


@pytest.mark.parametrize("raw", [b"", b"   ", b"null", b"true", b"7"])
def test_empty_or_null_yields_nothing(raw):
    """Bodies that are neither an object nor an array decode to an empty list without failing"""
    assert decode_collection(raw, ProjectCreate) == []


def test_empty_array_yields_nothing():
    assert decode_collection(b"[]", ProjectCreate) == []


def test_invalid_object_content_raises():
    with pytest.raises(ValidationError):
        decode_collection(b'{"federal_id": "missing name"}', ProjectCreate)


def test_invalid_array_item_raises():
    with pytest.raises(ValidationError):
        decode_collection(b'[{"name": "ok"}, 5]', ProjectCreate)


def test_malformed_json_after_recognized_token_raises():
    with pytest.raises(ValidationError):
        decode_collection(b'[{"name": "ok"', ProjectCreate)


def test_measurement_collection_times_normalized_to_utc():
    timeseries_id = uuid.uuid4()
    raw = json.dumps({
        "timeseries_id": str(timeseries_id),
        "items": [
            {"time": "2024-01-01T05:00:00-05:00", "value": 1.5},
            {"time": "2024-01-01T11:00:00", "value": 2.5},
        ],
    })
    (collection,) = decode_collection(raw, MeasurementCollection)
    assert collection.timeseries_id == timeseries_id
    assert [item.time.isoformat() for item in collection.items] == [
        "2024-01-01T10:00:00+00:00",
        "2024-01-01T11:00:00+00:00",
    ]
