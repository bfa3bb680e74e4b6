import logging
from datetime import datetime, timezone
from sqlalchemy import (
    Table,
    Column,
    Integer,
    String,
    Boolean,
    Date,
    DateTime,
    event,
    inspect,
)
from sqlalchemy.orm import registry
from checklist.domain import model
from checklist.domain.definition import CHECKLIST_KEYS, REASON_KEYS

logger = logging.getLogger(__name__)

# SQLAlchemy 2.0 pattern: use registry
mapper_registry = registry()
metadata = mapper_registry.metadata


def _utcnow():
    return datetime.now(timezone.utc)


checklist_records = Table(
    "checklist_records",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("created_at", DateTime(timezone=True), nullable=False, default=_utcnow),
    Column("assessment_date", Date, nullable=False, index=True),
    Column("bed_no", String(32), nullable=False),
    Column("hn", String(64), nullable=False),
    Column("assessment_scope", String(8), nullable=False, server_default="both"),
    *[Column(key, Boolean, nullable=True) for key in CHECKLIST_KEYS],
    *[Column(key, String(255), nullable=True) for key in REASON_KEYS],
)

# Owned by the ward system; only read here.
# Defined in metadata so tests and fresh databases get the table.
patients = Table(
    "patients",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("bed_no", String(32), nullable=False),
    Column("hn", String(64), nullable=False),
    Column("patient_name", String(255)),
)


def start_mappers():
    if inspect(model.ChecklistRecord, raiseerr=False) is not None:
        return
    logger.info("Starting mappers")
    mapper_registry.map_imperatively(model.ChecklistRecord, checklist_records)
    event.listen(model.ChecklistRecord, "load", receive_load)


def receive_load(record, _):
    # Loaded rows skip __init__, so the events list has to be restored here
    record.events = []
