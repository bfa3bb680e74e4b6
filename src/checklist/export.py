"""CSV export of checklist records."""
import csv
import io
from datetime import datetime, timezone
from typing import Any, Iterable, List, Mapping, Optional

from checklist.domain.definition import CHECKLIST_KEYS, REASON_KEYS

CSV_COLUMNS: List[str] = [
    "assessment_date",
    "bed_no",
    "hn",
    "assessment_scope",
    *REASON_KEYS,
    *CHECKLIST_KEYS,
]


def format_cell(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if hasattr(value, "isoformat"):
        return value.isoformat()
    return str(value)


def records_to_csv(records: Iterable[Mapping[str, Any]], columns: List[str] = CSV_COLUMNS) -> str:
    """Header row plus one row per record, every cell double-quoted."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(columns)
    for record in records:
        writer.writerow([format_cell(record.get(column)) for column in columns])
    return buffer.getvalue()


def export_filename(now: Optional[datetime] = None) -> str:
    now = now or datetime.now(timezone.utc)
    return f"cauti-vap-records-{int(now.timestamp() * 1000)}.csv"
