"""FastAPI application for the certificate issuance API."""

import logging
from contextlib import asynccontextmanager

import fastapi
from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from core.config import get_settings
from core.logger import configure_logging
from core.middleware import RequestContextMiddleware
from repositories.certificate_repository import InMemoryCertificateRepository
from routes import catalog_router, certificates_router, health_router
from schemas import ErrorResponse
from services.catalog_service import build_default_catalog
from services.certificates_service import CertificateError

configure_logging()
logger = logging.getLogger(__name__)


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(message=message).model_dump(),
    )


async def certificate_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Render domain errors as ``{success: false, message}``."""
    if not isinstance(exc, CertificateError):
        return _error_response(500, "An unexpected error occurred")

    if exc.status_code < 500:
        logger.warning(
            "request.rejected",
            extra={"status_code": exc.status_code, "reason": exc.message},
        )
    return _error_response(exc.status_code, exc.message)


async def validation_exception_handler(
    request: Request, exc: Exception
) -> JSONResponse:
    """Handler for request validation errors (body not a JSON object)."""
    if not isinstance(exc, RequestValidationError):
        return _error_response(500, "An unexpected error occurred")

    logger.warning(
        "request.validation_error",
        extra={"error_count": len(exc.errors())},
    )
    return _error_response(400, "Request body must be a JSON object")


async def http_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Keep framework errors (404 route, 405 method) in the API's error shape."""
    if not isinstance(exc, StarletteHTTPException):
        return _error_response(500, "An unexpected error occurred")
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(message=str(exc.detail)).model_dump(),
        headers=getattr(exc, "headers", None),
    )


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last-resort handler for unhandled exceptions."""
    logger.exception(
        "unhandled.exception",
        extra={"exc_type": type(exc).__name__},
    )
    return _error_response(500, "An unexpected error occurred")


@asynccontextmanager
async def lifespan(app: fastapi.FastAPI):
    """Seed the catalog and create an empty certificate store."""
    app.state.catalog = build_default_catalog()
    app.state.certificates = InMemoryCertificateRepository()
    logger.info(
        "init.complete",
        extra={
            "templates": len(app.state.catalog.list_templates()),
            "output": _settings.certificate_output,
        },
    )
    yield


_settings = get_settings()
_docs_enabled = _settings.enable_docs or _settings.debug

app = fastapi.FastAPI(
    title="Certificate API",
    version="1.0.0",
    lifespan=lifespan,
    docs_url="/docs" if _docs_enabled else None,
    redoc_url="/redoc" if _docs_enabled else None,
    openapi_url="/openapi.json" if _docs_enabled else None,
)

app.add_exception_handler(CertificateError, certificate_error_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(Exception, global_exception_handler)

if _settings.allowed_origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=_settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type"],
        expose_headers=["X-Request-Id"],
        max_age=600,
    )

# Outermost, so CORS preflights also get a request id
app.add_middleware(RequestContextMiddleware)

_settings.images_dir_path.mkdir(parents=True, exist_ok=True)
_settings.issued_dir_path.mkdir(parents=True, exist_ok=True)
app.mount(
    "/images", StaticFiles(directory=str(_settings.images_dir_path)), name="images"
)
app.mount(
    "/issued", StaticFiles(directory=str(_settings.issued_dir_path)), name="issued"
)

app.include_router(health_router)
app.include_router(catalog_router)
app.include_router(certificates_router)
