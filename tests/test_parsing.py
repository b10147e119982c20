import pytest
from pydantic import TypeAdapter

from classroom.generation.errors import ContentValidationError
from classroom.generation.parsing import (
    extract_json,
    pick_items,
    upgrade_legacy_sets,
    validate_items,
)
from classroom.generation.schemas import GeneratedChoiceSet, PromptText


def test_extract_plain_json():
    assert extract_json('{"prompts": ["a", "b"]}') == {"prompts": ["a", "b"]}


def test_extract_fenced_json():
    text = 'Here you go:\n```json\n{"statements": ["Cats are better."]}\n```\nEnjoy!'
    assert extract_json(text) == {"statements": ["Cats are better."]}


def test_extract_object_with_chatter_around_it():
    text = 'Sure! {"sets": [{"options": ["Tea", "Coffee"]}]} Let me know.'
    assert extract_json(text)["sets"][0]["options"] == ["Tea", "Coffee"]


def test_extract_bare_array():
    assert extract_json('Result: ["one", "two"]') == ["one", "two"]


@pytest.mark.parametrize("text", ["", "   ", "no json at all", "{broken: json"])
def test_unparseable_text_raises(text):
    with pytest.raises(ContentValidationError):
        extract_json(text)


def test_pick_items_shapes():
    assert pick_items({"prompts": ["a"]}, "prompts") == ["a"]
    assert pick_items({"prompt": {"question": "q"}}, "prompt") == [{"question": "q"}]
    assert pick_items(["a", "b"], "prompts") == ["a", "b"]
    assert pick_items({"other": ["a"]}, "prompts") == []
    assert pick_items("text", "prompts") == []


def test_upgrade_legacy_sets():
    items = [
        {"left": "Tea", "right": "Coffee"},
        ["Cats", "Dogs"],
        {"options": ["Sea", "Sky"]},
    ]

    assert upgrade_legacy_sets(items) == [
        {"options": ["Tea", "Coffee"]},
        {"options": ["Cats", "Dogs"]},
        {"options": ["Sea", "Sky"]},
    ]


def test_validate_items_keeps_good_and_reports_bad():
    adapter = TypeAdapter(GeneratedChoiceSet)
    items = [
        {"options": ["Tea", "Coffee"]},
        {"options": ["Only one"]},
        {"options": ["Same", "same"]},
        "not a set",
    ]

    valid, errors = validate_items(items, adapter)

    assert [s.options for s in valid] == [["Tea", "Coffee"]]
    assert len(errors) == 3


def test_prompt_text_is_stripped_and_must_have_substance():
    adapter = TypeAdapter(PromptText)
    valid, errors = validate_items(["  Talk about a hobby.  ", "", "ok", 42], adapter)

    assert valid == ["Talk about a hobby."]
    assert len(errors) == 3
