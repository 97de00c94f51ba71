import datetime as dt
import logging

from fastapi import FastAPI, UploadFile, File, Depends, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session
from starlette.exceptions import HTTPException as StarletteHTTPException

from .auth import CredentialValidator
from .config import Settings
from .db import Database
from .employees import EmployeeStore
from .schemas import (
    EmployeeCreateRequest,
    EmployeeOut,
    LoginRequest,
    LoginResponse,
    UploadResponse,
)
from .storage import BlobStore, DEFAULT_FILENAME
from .uploads import UploadMetadataStore

logger = logging.getLogger(__name__)


def get_db(request: Request):
    db = request.app.state.database.session()
    try:
        yield db
    finally:
        db.close()


def get_blob_store(request: Request) -> BlobStore:
    return request.app.state.blob_store


def get_validator(request: Request) -> CredentialValidator:
    return request.app.state.validator


def _employee_out(e) -> dict:
    return EmployeeOut.model_validate(e).model_dump(mode="json", by_alias=True)


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or Settings()
    logging.basicConfig(level=settings.log_level.upper())

    app = FastAPI(title="HR Admin Service", version="1.0.0")
    app.state.settings = settings
    app.state.database = Database(settings.db_url)
    app.state.blob_store = BlobStore(settings.storage_path)
    app.state.validator = CredentialValidator(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.on_event("startup")
    def _startup():
        app.state.blob_store.ensure_root()
        app.state.database.init_db()

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        # клиент ожидает {"message": ...}
        return JSONResponse(status_code=exc.status_code, content={"message": exc.detail}, headers=exc.headers)

    @app.get("/health")
    def health():
        return {"status": "ok"}

    @app.get("/api/test")
    def api_test():
        return {"ok": True, "time": dt.datetime.now(dt.timezone.utc).isoformat()}

    @app.get("/api/ping")
    def ping():
        return {"message": settings.ping_message}

    @app.post("/api/login", response_model=LoginResponse, response_model_exclude_none=True)
    def login(body: LoginRequest, validator: CredentialValidator = Depends(get_validator)):
        username = body.username or ""
        if validator.validate(username, body.password or ""):
            return LoginResponse(success=True)
        logger.warning("Failed admin login for user %r", username)
        return JSONResponse(status_code=401, content={"success": False, "message": "Invalid credentials"})

    @app.post("/api/generate-employee-id")
    def generate_employee_id(body: EmployeeCreateRequest, db: Session = Depends(get_db)):
        if not (body.name or "").strip() or not (body.department or "").strip():
            raise HTTPException(status_code=400, detail="name and department are required")

        try:
            employee = EmployeeStore(db).create(body.name, body.department, body.email)
        except IntegrityError as e:
            logger.error("Employee id collision: %s", e.orig)
            raise HTTPException(status_code=409, detail="Generated employee id already exists, try again")
        return _employee_out(employee)

    @app.get("/api/employee/{employee_id}")
    def get_employee(employee_id: str, db: Session = Depends(get_db)):
        employee = EmployeeStore(db).find_by_employee_id(employee_id)
        if employee is None:
            raise HTTPException(status_code=404, detail="Not found")
        return _employee_out(employee)

    @app.post("/api/upload")
    def upload(
        file: UploadFile = File(...),
        db: Session = Depends(get_db),
        blob_store: BlobStore = Depends(get_blob_store),
    ):
        original = file.filename or DEFAULT_FILENAME
        try:
            stored = blob_store.store(file.file, original)
        except OSError as e:
            logger.error("Failed to store upload %r: %s", original, e)
            raise HTTPException(status_code=500, detail=f"Failed to store file: {e}")
        finally:
            file.file.close()

        try:
            record = UploadMetadataStore(db).save(original, stored)
        except SQLAlchemyError as e:
            # файл уже на диске, строка метаданных не создана
            logger.error("Failed to save metadata for %s: %s", stored, e)
            raise HTTPException(status_code=500, detail="Failed to save upload metadata")

        return UploadResponse(
            id=record.id,
            file_name=record.original_filename,
            uploaded_at=record.uploaded_at,
        ).model_dump(mode="json", by_alias=True)

    return app


app = create_app()
