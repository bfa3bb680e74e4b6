"""
Validation and mapping of checklist submissions into insert-ready payloads.

The payload always carries every item key and every reason field so that
stored rows share one shape: answers outside the assessment scope are None,
never omitted.
"""
from datetime import date, datetime, timezone
from typing import Any, Callable, Dict, Mapping, Optional

from checklist.domain.definition import (
    BOTH,
    CHECKLIST_KEYS,
    REASON_FIELDS,
    SCOPES,
    keys_for_scope,
)
from checklist.domain.exceptions import ValidationError


def utc_today() -> date:
    return datetime.now(timezone.utc).date()


def _as_text(name: str, value: Any) -> str:
    if value is None:
        return ""
    # Bed numbers are sometimes sent as JSON numbers
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        raise ValidationError(f"{name} must be a string.")
    return str(value).strip()


def build_record_payload(
    bed_no: Any,
    hn: Any,
    assessments: Any,
    assessment_scope: Any = BOTH,
    reasons: Optional[Mapping[str, Any]] = None,
    today: Callable[[], date] = utc_today,
) -> Dict[str, Any]:
    """
    Validate a submission and build the row to insert.

    Args:
        bed_no: Bed number the assessment was made at
        hn: Patient hospital number
        assessments: Mapping of item key to boolean answer
        assessment_scope: 'cauti', 'vap' or 'both'; an explicit None is rejected
        reasons: Submitted reason field values keyed by reason field key
        today: Clock used to stamp assessment_date

    Returns:
        Flat payload with assessment_date, bed_no, hn, assessment_scope,
        every item key and every reason field

    Raises:
        ValidationError: on the first invalid or missing value
    """
    bed_no = _as_text("bed_no", bed_no)
    hn = _as_text("hn", hn)
    if not bed_no or not hn or assessments is None:
        raise ValidationError("bed_no, hn and assessments are required.")

    if not isinstance(assessments, Mapping):
        raise ValidationError("assessments must be an object keyed by checklist item.")

    scope = assessment_scope
    if scope not in SCOPES:
        raise ValidationError("assessment_scope must be cauti, vap, or both.")

    required_keys = set(keys_for_scope(scope))
    reasons = reasons or {}

    payload = {
        "assessment_date": today(),
        "bed_no": bed_no,
        "hn": hn,
        "assessment_scope": scope,
    }

    for key in CHECKLIST_KEYS:
        if key not in required_keys:
            payload[key] = None
            continue
        value = assessments.get(key)
        # JSON booleans only; 0/1 and "true" are rejected
        if not isinstance(value, bool):
            raise ValidationError(f"Assessment item {key} must be boolean.")
        payload[key] = value

    for reason in REASON_FIELDS:
        if reason.trigger_key in required_keys and payload[reason.trigger_key] is False:
            value = reasons.get(reason.key)
            if value not in reason.options:
                raise ValidationError(
                    f"{reason.key} is required when {reason.trigger_key} is answered no."
                )
            payload[reason.key] = value
        else:
            payload[reason.key] = None

    return payload
