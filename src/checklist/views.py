"""
Views for read operations - separate from command/write path.

Rows are serialized to dicts inside the session context so callers never
touch detached ORM instances.
"""
import logging
from dataclasses import asdict
from datetime import date
from typing import Any, Dict, List, Optional

from sqlalchemy import select

from checklist import analytics
from checklist.adapters import orm
from checklist.adapters.repository import storage_errors
from checklist.domain.definition import SECTION_FILTERS, keys_for_scope, reason_fields_for_section
from checklist.domain.exceptions import ValidationError
from checklist.domain.model import RecordFilters
from checklist.service_layer.unit_of_work import AbstractUnitOfWork

logger = logging.getLogger(__name__)


def list_records(filters: RecordFilters, uow: AbstractUnitOfWork) -> List[Dict[str, Any]]:
    """Records matching the filters, most recent assessment first."""
    with uow:
        records = uow.records.list(filters)
        return [record.to_dict() for record in records]


def list_patients(bed: Optional[str], uow: AbstractUnitOfWork) -> List[Dict[str, Any]]:
    with uow:
        return [asdict(patient) for patient in uow.records.list_patients(bed)]


def get_analytics(
    start_date: Optional[date],
    end_date: Optional[date],
    section: Optional[str],
    uow: AbstractUnitOfWork,
) -> Dict[str, Any]:
    """
    Compliance summary for the records assessed within [start_date, end_date].

    Args:
        start_date: Inclusive lower bound on assessment_date, unbounded if None
        end_date: Inclusive upper bound on assessment_date, unbounded if None
        section: 'all', 'cauti' or 'vap'; None means 'all'
        uow: Unit of work

    Returns:
        startDate, endDate, section, totalRecords, mostProblematic, items
        and dropdownSummaries
    """
    section = section or "all"
    if section not in SECTION_FILTERS:
        raise ValidationError("section must be all, cauti, or vap.")

    keys = keys_for_scope(section)
    reason_fields = reason_fields_for_section(section)

    records = orm.checklist_records.c
    columns = ["assessment_date"] + keys + [reason.key for reason in reason_fields]
    stmt = select(*[records[name] for name in columns])
    if start_date:
        stmt = stmt.where(records.assessment_date >= start_date)
    if end_date:
        stmt = stmt.where(records.assessment_date <= end_date)

    with uow:
        with storage_errors():
            rows = uow.session.execute(stmt).mappings().all()

    logger.info(f"Computing {section} analytics over {len(rows)} records")
    summary = analytics.summarize(rows, keys, reason_fields)

    return {
        "startDate": start_date.isoformat() if start_date else None,
        "endDate": end_date.isoformat() if end_date else None,
        "section": section,
        **summary,
    }
