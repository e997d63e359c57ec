import json
import logging
from typing import Any, Dict, List, Optional

from fastapi import BackgroundTasks, Depends, FastAPI, File, Form, HTTPException, Request, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse

from .config import Settings, configure_logging, get_settings
from .exceptions import MissingRequiredFields, UnknownEvent
from .models import ErrorResponse, EventInfo, HealthResponse, RegisterResponse
from .normalize import RecordIndex
from .notify import send_confirmation_safely
from .register import prepare_record, register
from .schemas import REGISTRY, SchemaRegistry
from .uploads import store_upload

logger = logging.getLogger(__name__)

_settings = get_settings()
configure_logging(_settings.log_level)

app = FastAPI(
    title="event-intake",
    description="Event registration intake with per-event CSV logs",
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=list(_settings.cors_origins),
    allow_methods=["*"],
    allow_headers=["*"],
)


def get_registry() -> SchemaRegistry:
    return REGISTRY


def _error(status_code: int, message: str, missing: Optional[List[str]] = None) -> JSONResponse:
    body = ErrorResponse(message=message, missing=missing)
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


@app.exception_handler(UnknownEvent)
async def unknown_event_handler(request: Request, exc: UnknownEvent):
    return _error(400, "Unknown event key")


@app.exception_handler(MissingRequiredFields)
async def missing_fields_handler(request: Request, exc: MissingRequiredFields):
    return _error(400, "Missing fields", exc.missing)


@app.exception_handler(UnicodeEncodeError)
async def unencodable_value_handler(request: Request, exc: UnicodeEncodeError):
    logger.warning("Rejected value that cannot be written as %s: %s", exc.encoding, exc.reason)
    return _error(400, "Invalid payload")


@app.exception_handler(OSError)
async def os_error_handler(request: Request, exc: OSError):
    logger.error("Register error: %s", exc)
    return _error(500, str(exc))


@app.get("/", response_model=HealthResponse)
@app.get("/health", response_model=HealthResponse)
def health():
    return {"ok": True}


@app.post(
    "/register",
    response_model=RegisterResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def register_submission(
    background_tasks: BackgroundTasks,
    payload: Optional[str] = Form(default=None),
    event_key: Optional[str] = Form(default=None, alias="eventKey"),
    event_id: Optional[str] = Form(default=None, alias="eventId"),
    event_name: str = Form(default="", alias="eventName"),
    screenshot: Optional[UploadFile] = File(default=None),
    settings: Settings = Depends(get_settings),
    registry: SchemaRegistry = Depends(get_registry),
):
    key = event_key or event_id
    if not key:
        return _error(400, "Missing eventKey or payload")

    data: Dict[str, Any] = {}
    if payload:
        try:
            data = json.loads(payload)
        except ValueError:
            return _error(400, "Invalid payload")
        if not isinstance(data, dict):
            return _error(400, "Invalid payload")

    schema = registry.require(key)

    stored = ""
    if screenshot is not None and screenshot.filename:
        stored = store_upload(screenshot.file, screenshot.filename, settings.uploads_dir)

    record = prepare_record(
        data,
        event_name=event_name.strip() or schema.display_name,
        screenshot=stored,
    )
    logger.debug("Received payload for %s: %s", key, record)

    result = register(registry, settings, key, record)

    email = RecordIndex(result.record).get("email")
    if email:
        background_tasks.add_task(
            send_confirmation_safely, settings, str(email), result.event_name, result.record
        )

    return {"ok": True, "message": "Registered", "file": result.file_path}


@app.get("/events", response_model=List[EventInfo])
def list_events(registry: SchemaRegistry = Depends(get_registry)):
    return [
        EventInfo(
            event_key=schema.event_key,
            display_name=schema.display_name,
            file=schema.file_name,
            headers=list(schema.columns),
        )
        for schema in registry.events()
    ]


@app.get("/download/{event_key}")
def download_csv(
    event_key: str,
    settings: Settings = Depends(get_settings),
    registry: SchemaRegistry = Depends(get_registry),
):
    schema = registry.lookup(event_key)
    if schema is None:
        raise HTTPException(status_code=404, detail="Unknown event")

    path = settings.csv_dir / schema.file_name
    if not path.is_file():
        raise HTTPException(status_code=404, detail="File not found")

    return FileResponse(path, media_type="text/csv", filename=schema.file_name)
