"""Unit tests for the compliance summary."""
from checklist import analytics
from checklist.domain.definition import (
    CAUTI_1_NO_REASON_OPTIONS,
    CAUTI_SECTION,
    CHECKLIST_KEYS,
    REASON_FIELDS,
)
from checklist.domain.model import Answer


def rows_with(key, values):
    return [{key: value} for value in values]


def item_summary(summary, key):
    return next(item for item in summary["items"] if item["key"] == key)


def test_yes_no_counts_and_percentages():
    rows = rows_with("cauti_3", [False] * 3 + [True] * 5 + [None] * 2)

    summary = analytics.summarize(rows, ["cauti_3"], [])
    item = item_summary(summary, "cauti_3")

    assert summary["totalRecords"] == 10
    assert item["yesCount"] == 5
    assert item["noCount"] == 3
    assert item["answeredCount"] == 8
    assert item["totalRecords"] == 10
    assert item["yesPercent"] == 62.5
    assert item["noPercent"] == 37.5
    assert item["text"] == CAUTI_SECTION.items[2].text


def test_unanswered_item_has_zero_percentages():
    rows = rows_with("vap_1", [None, None])

    item = item_summary(analytics.summarize(rows, ["vap_1"], []), "vap_1")

    assert item["answeredCount"] == 0
    assert item["yesPercent"] == 0
    assert item["noPercent"] == 0


def test_percentages_are_rounded_to_two_decimals():
    rows = rows_with("vap_2", [True, False, False])

    item = item_summary(analytics.summarize(rows, ["vap_2"], []), "vap_2")

    assert item["yesPercent"] == 33.33
    assert item["noPercent"] == 66.67
    assert item["yesPercent"] + item["noPercent"] <= 100


def test_empty_row_set():
    summary = analytics.summarize([], CHECKLIST_KEYS, REASON_FIELDS)

    assert summary["totalRecords"] == 0
    assert len(summary["items"]) == len(CHECKLIST_KEYS)
    # Every item ties at zero, so the first one wins
    assert summary["mostProblematic"]["key"] == CHECKLIST_KEYS[0]
    for reason in summary["dropdownSummaries"]:
        assert reason["totalNoCases"] == 0
        assert all(option["count"] == 0 for option in reason["options"])


def test_most_problematic_tie_goes_to_earliest_item():
    rows = [
        {"cauti_1": True, "cauti_2": False, "cauti_3": False},
        {"cauti_1": True, "cauti_2": False, "cauti_3": False},
    ]

    summary = analytics.summarize(rows, ["cauti_1", "cauti_2", "cauti_3"], [])

    assert summary["mostProblematic"]["key"] == "cauti_2"


def test_most_problematic_uses_no_count_not_percent():
    rows = [
        {"cauti_1": False, "cauti_2": False},
        {"cauti_1": None, "cauti_2": False},
        {"cauti_1": None, "cauti_2": True},
        {"cauti_1": None, "cauti_2": True},
    ]

    summary = analytics.summarize(rows, ["cauti_1", "cauti_2"], [])

    # cauti_1 is 100% no but only once; cauti_2 has two no answers
    assert summary["mostProblematic"]["key"] == "cauti_2"


def test_most_problematic_without_items_is_none():
    assert analytics.summarize([{}], [], [])["mostProblematic"] is None


def test_reason_breakdown_counts_only_no_cases():
    reason = REASON_FIELDS[0]
    first, second = CAUTI_1_NO_REASON_OPTIONS[0], CAUTI_1_NO_REASON_OPTIONS[1]
    rows = [
        {"cauti_1": False, "cauti_1_no_reason": first},
        {"cauti_1": False, "cauti_1_no_reason": first},
        {"cauti_1": False, "cauti_1_no_reason": second},
        # Reason on a yes answer is ignored
        {"cauti_1": True, "cauti_1_no_reason": first},
        {"cauti_1": None, "cauti_1_no_reason": None},
    ]

    summary = analytics.summarize(rows, ["cauti_1"], [reason])
    breakdown = summary["dropdownSummaries"][0]
    options = {option["value"]: option for option in breakdown["options"]}

    assert breakdown["key"] == "cauti_1_no_reason"
    assert breakdown["triggerKey"] == "cauti_1"
    assert breakdown["totalNoCases"] == 3
    assert breakdown["totalRecords"] == 5
    assert len(breakdown["options"]) == len(CAUTI_1_NO_REASON_OPTIONS)
    assert options[first]["count"] == 2
    assert options[first]["percentOfNoCases"] == 66.67
    assert options[first]["percentOfAllCases"] == 40.0
    assert options[second]["count"] == 1
    assert options[second]["percentOfNoCases"] == 33.33
    assert options[second]["percentOfAllCases"] == 20.0


def test_percent_guards_against_zero_total():
    assert analytics.percent(3, 0) == 0
    assert analytics.percent(1, 8) == 12.5


def test_answer_reading_of_stored_values():
    assert Answer.of(True) is Answer.YES
    assert Answer.of(False) is Answer.NO
    assert Answer.of(None) is Answer.NOT_APPLICABLE
    assert [answer.answered for answer in Answer] == [True, True, False]
