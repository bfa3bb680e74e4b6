# pylint: disable=redefined-outer-name
from datetime import date

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, clear_mappers
from sqlalchemy.pool import StaticPool

from checklist.adapters import orm
from checklist.domain.model import ChecklistRecord
from checklist.service_layer.unit_of_work import SqlAlchemyUnitOfWork


PATIENTS = [
    {"bed_no": "12", "hn": "H1", "patient_name": "Somchai Jaidee"},
    {"bed_no": "03", "hn": "HN-0042", "patient_name": "Malee Srisuk"},
    {"bed_no": "07", "hn": "hn-7781", "patient_name": "Anan Chaiyo"},
]


@pytest.fixture
def sqlite_session_factory():
    """Create SQLite in-memory database shared by every session of a test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    orm.metadata.create_all(engine)
    orm.start_mappers()

    with engine.begin() as connection:
        connection.execute(orm.patients.insert(), PATIENTS)

    yield sessionmaker(bind=engine)

    clear_mappers()
    engine.dispose()


@pytest.fixture
def uow(sqlite_session_factory):
    return SqlAlchemyUnitOfWork(sqlite_session_factory)


@pytest.fixture
def add_record(sqlite_session_factory):
    """Insert a record directly, bypassing validation. Unspecified answers stay None."""
    def _add_record(assessment_date=date(2024, 5, 1), bed_no="12", hn="H1", assessment_scope="both", **fields):
        session = sqlite_session_factory()
        record = ChecklistRecord(
            assessment_date=assessment_date,
            bed_no=bed_no,
            hn=hn,
            assessment_scope=assessment_scope,
            **fields,
        )
        session.add(record)
        session.commit()
        record_id = record.id
        session.close()
        return record_id

    return _add_record


@pytest.fixture
def client(sqlite_session_factory):
    from checklist.entrypoints.checklist_api import app

    app.state.session_factory = sqlite_session_factory
    yield TestClient(app)
    app.state.session_factory = None


@pytest.fixture
def unconfigured_client():
    from checklist.entrypoints.checklist_api import app

    app.state.session_factory = None
    return TestClient(app)
