"""FastAPI application entrypoint. No business logic; only wiring, middleware and error mapping."""

from dotenv import load_dotenv

load_dotenv()

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from user_management.api.errors import processing_failure_response
from user_management.api.middleware import RequestLoggingMiddleware
from user_management.api.v1 import router as v1_router
from user_management.api.v1.health import API_VERSION
from user_management.core.config import Settings, get_settings
from user_management.core.logging_setup import configure_logging
from user_management.schemas.accounts import ErrorResponse
from user_management.services.identity_store import IdentityStoreError
from user_management.services.outcomes import OutcomeCode

logger = logging.getLogger(__name__)


def _field_name(loc: tuple[int | str, ...]) -> str:
    """('body', 'username') -> 'username'; a missing body reports as 'body'."""
    parts = [str(p) for p in loc if p not in ("body", "query", "path", "header")]
    if parts:
        return ".".join(parts)
    return str(loc[0]) if loc else "request"


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report each invalid field before authorization or persistence runs."""
    errors: dict[str, str] = {}
    for error in exc.errors():
        errors.setdefault(_field_name(tuple(error.get("loc", ()))), error.get("msg", "Invalid value"))
    logger.info(
        "Request validation failed: fields=%s",
        sorted(errors),
        extra={"request_id": getattr(request.state, "request_id", None)},
    )
    body = ErrorResponse(
        code=OutcomeCode.VALIDATION_FAILURE.code,
        message=OutcomeCode.VALIDATION_FAILURE.default_message,
        errors=errors,
    )
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=body.model_dump(mode="json"))


async def identity_store_exception_handler(request: Request, exc: IdentityStoreError) -> JSONResponse:
    logger.error(
        "Identity store error: %s",
        exc.message,
        extra={"request_id": getattr(request.state, "request_id", None)},
    )
    return processing_failure_response(getattr(request.state, "request_id", None))


def create_app(app_settings: Settings | None = None) -> FastAPI:
    """Build the application; logging toggles come from app_settings, not global state."""
    app_settings = app_settings or get_settings()
    configure_logging(app_settings)

    app = FastAPI(
        title="User Management API",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if app_settings.APP_ENV == "dev" else [],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(
        RequestLoggingMiddleware,
        log_requests=app_settings.LOG_REQUESTS,
        log_responses=app_settings.LOG_RESPONSES,
    )

    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(IdentityStoreError, identity_store_exception_handler)

    app.include_router(v1_router, prefix=app_settings.API_V1_PREFIX)

    @app.get("/version", response_class=PlainTextResponse)
    def get_version() -> str:
        """Current API version."""
        return API_VERSION

    return app


app = create_app()
