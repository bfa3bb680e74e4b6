"""
Yes/no compliance summary over a set of checklist rows.

Rows are plain mappings holding the projected item keys and reason fields,
so the summary can be computed from any query result.
"""
from typing import Any, Dict, List, Mapping, Optional, Sequence

from checklist.domain.definition import ITEM_TEXT_BY_KEY, ReasonField
from checklist.domain.model import Answer


def percent(count: int, total: int) -> float:
    if total <= 0:
        return 0
    return round(count / total * 100, 2)


def summarize_item(key: str, rows: Sequence[Mapping[str, Any]]) -> Dict[str, Any]:
    answers = [Answer.of(row.get(key)) for row in rows]
    yes_count = answers.count(Answer.YES)
    no_count = answers.count(Answer.NO)
    answered_count = sum(1 for answer in answers if answer.answered)

    return {
        "key": key,
        "text": ITEM_TEXT_BY_KEY[key],
        "yesCount": yes_count,
        "noCount": no_count,
        "answeredCount": answered_count,
        "totalRecords": len(rows),
        "yesPercent": percent(yes_count, answered_count),
        "noPercent": percent(no_count, answered_count),
    }


def most_problematic(items: List[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    """Item with the most 'no' answers; the earliest item wins a tie."""
    worst = None
    for item in items:
        if worst is None or item["noCount"] > worst["noCount"]:
            worst = item
    return worst


def summarize_reason(reason: ReasonField, rows: Sequence[Mapping[str, Any]]) -> Dict[str, Any]:
    no_case_rows = [row for row in rows if Answer.of(row.get(reason.trigger_key)) is Answer.NO]
    total_no_cases = len(no_case_rows)
    total_records = len(rows)

    options = []
    for option in reason.options:
        count = sum(1 for row in no_case_rows if row.get(reason.key) == option)
        options.append({
            "value": option,
            "count": count,
            "percentOfNoCases": percent(count, total_no_cases),
            "percentOfAllCases": percent(count, total_records),
        })

    return {
        "key": reason.key,
        "label": reason.label,
        "triggerKey": reason.trigger_key,
        "totalNoCases": total_no_cases,
        "totalRecords": total_records,
        "options": options,
    }


def summarize(
    rows: Sequence[Mapping[str, Any]],
    keys: Sequence[str],
    reason_fields: Sequence[ReasonField],
) -> Dict[str, Any]:
    items = [summarize_item(key, rows) for key in keys]
    return {
        "totalRecords": len(rows),
        "mostProblematic": most_problematic(items),
        "items": items,
        "dropdownSummaries": [summarize_reason(reason, rows) for reason in reason_fields],
    }
