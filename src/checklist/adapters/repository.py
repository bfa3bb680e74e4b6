import abc
import logging
from contextlib import contextmanager
from typing import List, Optional, Set

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from checklist.adapters import orm
from checklist.domain import model
from checklist.domain.exceptions import StorageError

logger = logging.getLogger(__name__)


@contextmanager
def storage_errors():
    """Re-raise database failures as StorageError carrying the driver's message."""
    try:
        yield
    except SQLAlchemyError as e:
        message = str(getattr(e, "orig", None) or e)
        logger.error(f"Database error: {message}")
        raise StorageError(message) from e


class AbstractRepository(abc.ABC):
    def __init__(self):
        self.seen = set()  # type: Set[model.ChecklistRecord]

    def add(self, record: model.ChecklistRecord) -> model.ChecklistRecord:
        self._add(record)
        self.seen.add(record)
        return record

    def get(self, record_id: int) -> Optional[model.ChecklistRecord]:
        record = self._get(record_id)
        if record:
            self.seen.add(record)
        return record

    def list(self, filters: model.RecordFilters) -> List[model.ChecklistRecord]:
        return self._list(filters)

    def delete(self, record_id: int) -> Optional[int]:
        """Delete a record by id. Returns the id, or None when nothing matched."""
        record = self.get(record_id)
        if record is None:
            return None
        self._delete(record)
        record.delete()
        return record_id

    def list_patients(self, bed: Optional[str] = None) -> List[model.Patient]:
        return self._list_patients(bed)

    @abc.abstractmethod
    def _add(self, record: model.ChecklistRecord):
        raise NotImplementedError

    @abc.abstractmethod
    def _get(self, record_id: int) -> Optional[model.ChecklistRecord]:
        raise NotImplementedError

    @abc.abstractmethod
    def _list(self, filters: model.RecordFilters) -> List[model.ChecklistRecord]:
        raise NotImplementedError

    @abc.abstractmethod
    def _delete(self, record: model.ChecklistRecord):
        raise NotImplementedError

    @abc.abstractmethod
    def _list_patients(self, bed: Optional[str]) -> List[model.Patient]:
        raise NotImplementedError


class SqlAlchemyRepository(AbstractRepository):
    def __init__(self, session):
        super().__init__()
        self.session = session

    def _add(self, record):
        with storage_errors():
            self.session.add(record)
            # Flush so the generated id and created_at are available before commit
            self.session.flush()

    def _get(self, record_id):
        with storage_errors():
            return self.session.query(model.ChecklistRecord).filter_by(id=record_id).first()

    def _list(self, filters):
        records = orm.checklist_records.c
        query = self.session.query(model.ChecklistRecord)

        if filters.date:
            query = query.filter(records.assessment_date == filters.date)
        if filters.bed:
            query = query.filter(records.bed_no == filters.bed)
        if filters.hn:
            query = query.filter(records.hn.icontains(filters.hn, autoescape=True))
        if filters.start_date:
            query = query.filter(records.assessment_date >= filters.start_date)
        if filters.end_date:
            query = query.filter(records.assessment_date <= filters.end_date)

        query = query.order_by(
            records.assessment_date.desc(),
            records.created_at.desc(),
            records.id.desc(),
        )
        with storage_errors():
            return query.all()

    def _delete(self, record):
        with storage_errors():
            self.session.delete(record)
            self.session.flush()

    def _list_patients(self, bed):
        patients = orm.patients.c
        stmt = select(patients.bed_no, patients.hn, patients.patient_name).order_by(patients.bed_no.asc())
        if bed:
            stmt = stmt.where(patients.bed_no == bed)
        with storage_errors():
            rows = self.session.execute(stmt).mappings().all()
        return [model.Patient(**row) for row in rows]
