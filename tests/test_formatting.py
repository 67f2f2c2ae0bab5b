import json

from core.formatting import (
    CHARACTER_LIMIT,
    markdown_document,
    page_number,
    project,
    shape,
    to_json,
    truncate,
)
from core.models import FormatOptions


def test_concise_projection_keeps_only_summary_fields():
    item = {"id": 1, "name": "n", "title": "t", "description": "d", "domain": "x", "extra": "y"}

    assert project([item], "concise") == [
        {"id": 1, "name": "n", "title": "t", "description": "d", "domain": "x"}
    ]


def test_concise_projection_keeps_present_fields_and_passes_scalars_through():
    assert project([{"id": 1, "owner": "me"}, "plain", 3], "concise") == [{"id": 1}, "plain", 3]


def test_detailed_and_non_list_data_are_not_projected():
    item = {"id": 1, "extra": "y"}

    assert project([item], "detailed") == [item]
    assert project(item, "concise") == item


def test_small_payload_is_serialized_unchanged():
    data = {"results": [{"id": "abcd-1234"}], "resultSetSize": 1}

    assert shape(data) == to_json(data)
    assert json.loads(shape(data)) == data


def test_large_mapping_is_replaced_by_marker_object():
    data = {"resultSetSize": 5000, "results": [{"id": str(i), "blob": "x" * 100} for i in range(500)]}
    original_length = len(to_json(data))

    shaped = truncate(data)

    assert shaped["_truncated"] is True
    assert shaped["resultSetSize"] == 5000
    assert "results" not in shaped
    assert shaped["_original_length"] == original_length
    assert f"Original length: {original_length}" in shaped["_message"]
    assert str(CHARACTER_LIMIT) in shaped["_message"]


def test_truncated_output_is_always_valid_json():
    data = [{"id": i, "description": "y" * 200} for i in range(300)]

    text = shape(data, FormatOptions(detail="detailed"))
    parsed = json.loads(text)

    assert parsed["_truncated"] is True
    assert parsed["_item_count"] == 300
    assert len(text) < CHARACTER_LIMIT


def test_payload_exactly_at_limit_is_kept():
    data = {"k": ""}
    overhead = len(to_json(data))
    data = {"k": "a" * (CHARACTER_LIMIT - overhead)}

    assert len(to_json(data)) == CHARACTER_LIMIT
    assert truncate(data) == data


def test_concise_projection_can_avoid_truncation():
    data = [{"id": i, "name": f"n{i}", "columns": ["c" * 50] * 10} for i in range(100)]

    assert "_truncated" in json.loads(shape(data, FormatOptions(detail="detailed")))
    assert json.loads(shape(data, FormatOptions(detail="concise")))[0] == {"id": 0, "name": "n0"}


def test_markdown_document_layout():
    text = markdown_document("Asset Permissions", [("Domain", "d.org"), ("Scope", "public")], "{}")

    assert text == "# Asset Permissions\n\n**Domain:** d.org\n**Scope:** public\n\n```json\n{}\n```"


def test_page_number():
    assert page_number(0, 20) == 1
    assert page_number(40, 20) == 3
    assert page_number(45, 20) == 3
