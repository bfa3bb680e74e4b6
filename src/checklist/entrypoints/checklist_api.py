"""
Checklist API Entrypoint - Thin API with Command Dispatch

Writes are dispatched as commands through the message bus, reads are
delegated to views.
"""
import logging
from datetime import date, datetime, timezone
from typing import Any, Dict, Optional

import uvicorn
from dotenv import load_dotenv
from fastapi import Depends, FastAPI, Query, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import RootModel
from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker
from starlette.exceptions import HTTPException as StarletteHTTPException

import config
from checklist import export, views
from checklist.adapters import orm
from checklist.domain import definition
from checklist.domain.commands import DeleteChecklistRecord, SubmitChecklist
from checklist.domain.exceptions import ChecklistError, ConfigurationError, ValidationError
from checklist.domain.model import RecordFilters
from checklist.service_layer import messagebus
from checklist.service_layer.unit_of_work import AbstractUnitOfWork, SqlAlchemyUnitOfWork

load_dotenv()

logging.basicConfig(
    level=getattr(logging, config.get_log_level(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="CAUTI/VAP Checklist API",
    description="Infection-prevention checklist recording and compliance analytics",
    version="1.0.0"
)

# Set at startup; None means no database is configured
app.state.session_factory = None


@app.on_event("startup")
async def startup_event():
    orm.start_mappers()

    database_uri = config.get_database_uri()
    if not database_uri:
        logger.warning("DATABASE_URL is not set; data endpoints will respond with 500")
        return

    engine = create_engine(database_uri, pool_pre_ping=True)
    try:
        orm.metadata.create_all(engine)
    except SQLAlchemyError as e:
        logger.error(f"Could not create checklist tables, data endpoints will respond with 500: {e}")
        engine.dispose()
        return
    app.state.session_factory = sessionmaker(bind=engine)
    logger.info("✓ Checklist database initialized")


def get_uow(request: Request) -> AbstractUnitOfWork:
    session_factory = request.app.state.session_factory
    if session_factory is None:
        raise ConfigurationError()
    return SqlAlchemyUnitOfWork(session_factory)


# ---------- Error responses ----------

@app.exception_handler(ChecklistError)
async def checklist_error_handler(request: Request, exc: ChecklistError):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    if errors:
        location = ".".join(str(part) for part in errors[0].get("loc", ()))
        message = f"Invalid {location}: {errors[0].get('msg')}"
    else:
        message = "Invalid request."
    return JSONResponse(status_code=400, content={"error": message})


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    message = "Not found" if exc.status_code == 404 else exc.detail
    return JSONResponse(status_code=exc.status_code, content={"error": message})


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


# ---------- Request models ----------

class ChecklistSubmission(RootModel[Dict[str, Any]]):
    """
    Accept the submission as a plain JSON object; validated by the service layer
    so every rejection names the offending field.
    """
    pass


def parse_date(name: str, value: Optional[str]) -> Optional[date]:
    if not value:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise ValidationError(f"{name} must be a date in YYYY-MM-DD format.")


# ---------- Endpoints ----------

@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "service": "cauti-vap-checklist-api",
        "timestamp": datetime.now(timezone.utc).isoformat()
    }


@app.get("/api/checklist-definition")
def get_checklist_definition():
    """Sections, items and reason fields. Served without a database."""
    return definition.as_dict()


@app.get("/api/patients")
def get_patients(bed: Optional[str] = None, uow: AbstractUnitOfWork = Depends(get_uow)):
    return views.list_patients(bed, uow)


@app.post("/api/checklist", status_code=201, summary="Record a checklist assessment")
def submit_checklist(submission: ChecklistSubmission, uow: AbstractUnitOfWork = Depends(get_uow)):
    """
    Validate and store one checklist assessment.

    assessment_date is always stamped by the server.
    """
    body = submission.root
    logger.info(f"Received checklist for bed {body.get('bed_no')}")

    cmd = SubmitChecklist(
        bed_no=body.get("bed_no"),
        hn=body.get("hn"),
        assessments=body.get("assessments"),
        assessment_scope=body.get("assessment_scope", definition.BOTH),
        reasons={key: body.get(key) for key in definition.REASON_KEYS},
    )
    [created] = messagebus.handle(cmd, uow)
    return created


@app.get("/api/records")
def get_records(
    assessment_date: Optional[str] = Query(None, alias="date"),
    bed: Optional[str] = None,
    hn: Optional[str] = None,
    start_date: Optional[str] = Query(None, alias="startDate"),
    end_date: Optional[str] = Query(None, alias="endDate"),
    export_format: Optional[str] = Query(None, alias="format"),
    uow: AbstractUnitOfWork = Depends(get_uow),
):
    """
    List records, most recent first. Supports date, bed, hn, startDate and
    endDate filters; format=csv returns a CSV attachment instead of JSON.
    """
    filters = RecordFilters(
        date=parse_date("date", assessment_date),
        bed=bed,
        hn=hn,
        start_date=parse_date("startDate", start_date),
        end_date=parse_date("endDate", end_date),
    )
    records = views.list_records(filters, uow)

    if export_format == "csv":
        filename = export.export_filename()
        logger.info(f"Exporting {len(records)} records to {filename}")
        return Response(
            content=export.records_to_csv(records),
            media_type="text/csv; charset=utf-8",
            headers={"Content-Disposition": f'attachment; filename="{filename}"'},
        )

    return records


@app.delete("/api/records/{record_id}")
def delete_record(record_id: str, uow: AbstractUnitOfWork = Depends(get_uow)):
    [deleted_id] = messagebus.handle(DeleteChecklistRecord(record_id=record_id), uow)
    return {"success": True, "id": deleted_id}


@app.get("/api/analytics")
def get_analytics(
    start_date: Optional[str] = Query(None, alias="startDate"),
    end_date: Optional[str] = Query(None, alias="endDate"),
    section: Optional[str] = None,
    uow: AbstractUnitOfWork = Depends(get_uow),
):
    return views.get_analytics(
        start_date=parse_date("startDate", start_date),
        end_date=parse_date("endDate", end_date),
        section=section,
        uow=uow,
    )


def main():
    uvicorn.run(app, host="0.0.0.0", port=config.get_api_port())


if __name__ == "__main__":
    main()
