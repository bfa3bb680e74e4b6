import logging
import re
from typing import Any, Dict

from checklist.domain import events
from checklist.domain.commands import DeleteChecklistRecord, SubmitChecklist
from checklist.domain.exceptions import NotFoundError, ValidationError
from checklist.domain.model import ChecklistRecord
from checklist.service_layer.unit_of_work import AbstractUnitOfWork
from checklist.service_layer.validation import build_record_payload

logger = logging.getLogger(__name__)


def submit_checklist(command: SubmitChecklist, uow: AbstractUnitOfWork) -> Dict[str, Any]:
    """
    Validate a checklist submission and store it as one record.

    Nothing is written unless the whole submission is valid and the
    commit succeeds.

    Returns:
        The created row, including the generated id and created_at
    """
    payload = build_record_payload(
        bed_no=command.bed_no,
        hn=command.hn,
        assessments=command.assessments,
        assessment_scope=command.assessment_scope,
        reasons=command.reasons,
    )

    with uow:
        record = uow.records.add(ChecklistRecord(**payload))
        record.record()
        uow.commit()
        created = record.to_dict()

    return created


# Upper bound of the Integer id column
MAX_RECORD_ID = 2 ** 31 - 1


def parse_record_id(raw_id: Any) -> int:
    """Positive ASCII-digit ids within the id column range only."""
    raw_id = str(raw_id)
    if not re.fullmatch(r"[0-9]+", raw_id):
        raise ValidationError("Invalid record id.")
    record_id = int(raw_id)
    if record_id <= 0 or record_id > MAX_RECORD_ID:
        raise ValidationError("Invalid record id.")
    return record_id


def delete_checklist_record(command: DeleteChecklistRecord, uow: AbstractUnitOfWork) -> int:
    record_id = parse_record_id(command.record_id)

    with uow:
        deleted_id = uow.records.delete(record_id)
        if deleted_id is None:
            raise NotFoundError("Record not found.")
        uow.commit()

    return deleted_id


def log_checklist_recorded(event: events.ChecklistRecorded, uow: AbstractUnitOfWork):
    logger.info(
        f"Recorded {event.assessment_scope} checklist {event.record_id} "
        f"for bed {event.bed_no} on {event.assessment_date}"
    )


def log_checklist_record_deleted(event: events.ChecklistRecordDeleted, uow: AbstractUnitOfWork):
    logger.info(f"Deleted checklist record {event.record_id}")
