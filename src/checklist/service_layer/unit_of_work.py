# pylint: disable=attribute-defined-outside-init
from __future__ import annotations
import abc
from sqlalchemy.orm.session import Session

from checklist.adapters import repository


class AbstractUnitOfWork(abc.ABC):
    records: repository.AbstractRepository

    def __enter__(self) -> AbstractUnitOfWork:
        return self

    def __exit__(self, *args):
        self.rollback()

    def commit(self):
        self._commit()

    def collect_new_events(self):
        for record in self.records.seen:
            while record.events:
                yield record.events.pop(0)

    @abc.abstractmethod
    def _commit(self):
        raise NotImplementedError

    @abc.abstractmethod
    def rollback(self):
        raise NotImplementedError


class SqlAlchemyUnitOfWork(AbstractUnitOfWork):
    def __init__(self, session_factory):
        self.session_factory = session_factory

    def __enter__(self):
        self.session = self.session_factory()  # type: Session
        self.records = repository.SqlAlchemyRepository(self.session)
        return super().__enter__()

    def __exit__(self, *args):
        super().__exit__(*args)
        self.session.close()

    def _commit(self):
        with repository.storage_errors():
            self.session.commit()

    def rollback(self):
        self.session.rollback()
