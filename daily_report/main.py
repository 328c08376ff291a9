# daily_report/main.py
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

from daily_report.api.v1.api import api_router
from daily_report.core.config import settings
from daily_report.core.logging import configure_logging
from daily_report.db.session import init_db

logger = logging.getLogger(__name__)


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path"))
    return f"Invalid value for '{location}': {first.get('msg')}" if location else f"Invalid request: {first.get('msg')}"


def register_exception_handlers(app: FastAPI) -> None:
    """ Every error leaves the API as {"error": "<message>"}. """

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException):
        return JSONResponse({"error": exc.detail}, status_code=exc.status_code, headers=getattr(exc, "headers", None))

    @app.exception_handler(RequestValidationError)
    async def validation_error(request: Request, exc: RequestValidationError):
        return JSONResponse({"error": _validation_message(exc)}, status_code=status.HTTP_400_BAD_REQUEST)

    @app.exception_handler(IntegrityError)
    async def integrity_error(request: Request, exc: IntegrityError):
        logger.warning("Integrity error on %s %s: %s", request.method, request.url.path, exc.orig)
        return JSONResponse({"error": "Conflicting record"}, status_code=status.HTTP_409_CONFLICT)

    @app.exception_handler(Exception)
    async def unhandled_error(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse({"error": "Internal server error"}, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)


def create_app() -> FastAPI:
    configure_logging(settings.LOG_LEVEL)

    if settings.is_production and settings.JWT_SECRET_KEY in ("", "change-me"):
        raise RuntimeError("JWT_SECRET_KEY must be set to a strong value in production.")

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        init_db()
        logger.info("Database ready (%s)", settings.DATABASE_URL.split("://", 1)[0])
        yield

    app = FastAPI(title="Daily Report API", lifespan=lifespan)
    register_exception_handlers(app)

    # All JSON routes live under /api
    app.include_router(api_router, prefix="/api")

    @app.get("/")
    def read_root():
        return {"message": "Welcome to the Daily Report API"}

    return app


app = create_app()
