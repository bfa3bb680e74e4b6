"""Unit tests for the static checklist definition."""
import pytest

from checklist.domain import definition


def test_keys_are_unique_and_ordered_by_section():
    keys = definition.CHECKLIST_KEYS

    assert len(keys) == len(set(keys))
    assert keys == definition.CAUTI_SECTION.keys + definition.VAP_SECTION.keys
    assert keys[0] == "cauti_1"
    assert all(key.startswith("vap_") for key in definition.VAP_SECTION.keys)


@pytest.mark.parametrize("scope,expected", [
    ("cauti", definition.CAUTI_SECTION.keys),
    ("vap", definition.VAP_SECTION.keys),
    ("both", definition.CHECKLIST_KEYS),
    ("all", definition.CHECKLIST_KEYS),
])
def test_keys_for_scope(scope, expected):
    assert definition.keys_for_scope(scope) == expected


def test_reason_fields_follow_their_trigger_section():
    assert [r.key for r in definition.reason_fields_for_section("cauti")] == ["cauti_1_no_reason"]
    assert [r.key for r in definition.reason_fields_for_section("vap")] == ["vap_4_no_reason"]
    assert len(definition.reason_fields_for_section("all")) == 2


def test_reason_triggers_are_checklist_items():
    for reason in definition.REASON_FIELDS:
        assert reason.trigger_key in definition.CHECKLIST_KEYS
        assert reason.options


def test_definition_is_immutable():
    with pytest.raises(AttributeError):
        definition.CAUTI_SECTION.items[0].text = "changed"


def test_as_dict_lists_sections_and_reason_fields():
    data = definition.as_dict()

    assert data["cauti"]["items"][0] == {
        "key": "cauti_1",
        "text": definition.ITEM_TEXT_BY_KEY["cauti_1"],
    }
    assert len(data["vap"]["items"]) == len(definition.VAP_SECTION.items)
    assert data["reasonFields"][1]["triggerKey"] == "vap_4"
    assert data["reasonFields"][1]["options"] == list(definition.VAP_4_NO_REASON_OPTIONS)
