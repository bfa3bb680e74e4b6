"""Domain events for the checklist service."""

from dataclasses import dataclass
from datetime import date

from checklist.domain.commands import Event


@dataclass
class ChecklistRecorded(Event):
    """Event raised when an assessment has been committed."""
    record_id: int
    bed_no: str
    hn: str
    assessment_scope: str
    assessment_date: date


@dataclass
class ChecklistRecordDeleted(Event):
    record_id: int
