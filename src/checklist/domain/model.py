from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from checklist.domain.definition import CHECKLIST_KEYS, REASON_KEYS
from checklist.domain.events import ChecklistRecordDeleted, ChecklistRecorded


class Answer(Enum):
    """Tri-state reading of a stored checklist answer."""
    YES = "yes"
    NO = "no"
    NOT_APPLICABLE = "n/a"

    @classmethod
    def of(cls, value: Any) -> "Answer":
        if value is True:
            return cls.YES
        if value is False:
            return cls.NO
        return cls.NOT_APPLICABLE

    @property
    def answered(self) -> bool:
        return self is not Answer.NOT_APPLICABLE


@dataclass(eq=False)
class ChecklistRecord:
    """One assessment event. Item answers are True/False, or None when out of scope."""
    assessment_date: date
    bed_no: str
    hn: str
    assessment_scope: str
    cauti_1: Optional[bool] = None
    cauti_2: Optional[bool] = None
    cauti_3: Optional[bool] = None
    cauti_4: Optional[bool] = None
    cauti_5: Optional[bool] = None
    cauti_6: Optional[bool] = None
    cauti_7: Optional[bool] = None
    cauti_8: Optional[bool] = None
    vap_1: Optional[bool] = None
    vap_2: Optional[bool] = None
    vap_3: Optional[bool] = None
    vap_4: Optional[bool] = None
    vap_5: Optional[bool] = None
    vap_6: Optional[bool] = None
    vap_7: Optional[bool] = None
    cauti_1_no_reason: Optional[str] = None
    vap_4_no_reason: Optional[str] = None
    id: Optional[int] = None
    created_at: Optional[datetime] = None
    events: List = field(default_factory=list, repr=False)

    def record(self) -> None:
        """Raise ChecklistRecorded once the row has its generated id."""
        self.events.append(
            ChecklistRecorded(
                record_id=self.id,
                bed_no=self.bed_no,
                hn=self.hn,
                assessment_scope=self.assessment_scope,
                assessment_date=self.assessment_date,
            )
        )

    def delete(self) -> None:
        self.events.append(ChecklistRecordDeleted(record_id=self.id))

    def to_dict(self) -> Dict[str, Any]:
        row = {
            "id": self.id,
            "created_at": self.created_at,
            "assessment_date": self.assessment_date,
            "bed_no": self.bed_no,
            "hn": self.hn,
            "assessment_scope": self.assessment_scope,
        }
        for key in CHECKLIST_KEYS + REASON_KEYS:
            row[key] = getattr(self, key)
        return row


@dataclass
class Patient:
    bed_no: str
    hn: str
    patient_name: str


@dataclass
class RecordFilters:
    date: Optional[date] = None
    bed: Optional[str] = None
    hn: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
