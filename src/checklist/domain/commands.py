"""Commands and base message types for the checklist service."""

from dataclasses import dataclass, field
from typing import Any, Dict

from checklist.domain.definition import BOTH


@dataclass
class Command:
    """Base class for all commands."""
    pass


@dataclass
class Event:
    """Base class for all domain events."""
    pass


@dataclass
class SubmitChecklist(Command):
    """Command to validate and store a new checklist assessment."""
    bed_no: Any
    hn: Any
    assessments: Any
    assessment_scope: Any = BOTH
    reasons: Dict[str, Any] = field(default_factory=dict)


@dataclass
class DeleteChecklistRecord(Command):
    """Command to delete a stored assessment. record_id is the raw path value."""
    record_id: Any
