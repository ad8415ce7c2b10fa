# FastAPI app entry point
# Run with: uvicorn shifttrack.main:create_app --factory --host 0.0.0.0 --port 3000
import logging
import traceback
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn

from fastapi import Depends, FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from shifttrack.api import auth, export, shifts
from shifttrack.api.deps import require
from shifttrack.core.config import Settings
from shifttrack.core.errors import AuthenticationError, ShiftTrackError
from shifttrack.db.pool import build_pool, close_pool, open_pool
from shifttrack.db.store import PostgresShiftStore, ShiftStore

logger = logging.getLogger(__name__)


def _error_body(message, status_code: int, detail=None) -> dict:
    content = {"message": message, "status_code": status_code}
    if detail is not None:
        content["detail"] = detail
    return content


async def shifttrack_error_handler(request: Request, exc: ShiftTrackError):
    logger.warning("%s on %s %s: %s", type(exc).__name__, request.method, request.url.path, exc.message)
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthenticationError) else None
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(exc.message, exc.status_code, exc.detail),
        headers=headers,
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    logger.error("HTTP error on %s %s: %s", request.method, request.url.path, exc.detail)
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(exc.detail, exc.status_code),
        headers=getattr(exc, "headers", None),
    )


async def request_validation_handler(request: Request, exc: RequestValidationError):
    logger.warning("Malformed request on %s %s: %s", request.method, request.url.path, exc.errors())
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_error_body("Ungültige Anfrage!", status.HTTP_400_BAD_REQUEST),
    )


async def general_exception_handler(request: Request, exc: Exception):
    """
    Catch-all exception handler for unhandled errors.
    Logs the full traceback and returns a 500 error.
    """
    logger.error(
        "Unhandled exception on %s %s: %s\n%s",
        request.method,
        request.url.path,
        exc,
        traceback.format_exc(),
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_body("Internal Server Error", status.HTTP_500_INTERNAL_SERVER_ERROR),
    )


def create_app(settings: Optional[Settings] = None, store: Optional[ShiftStore] = None) -> FastAPI:
    """
    Build the application.

    Without an explicit ``store`` a PostgreSQL pool is created from
    ``settings.DATABASE_URL``, opened at startup and closed at shutdown.
    """
    if settings is None:
        settings = Settings()

    pool = None
    if store is None:
        pool = build_pool(settings)
        store = PostgresShiftStore(pool)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if pool is not None:
            await open_pool(pool)
        logger.info("Shift variant: %s", settings.SHIFT_VARIANT.value)
        yield
        if pool is not None:
            await close_pool(pool)

    app = FastAPI(title="Shift Track API", version="0.1.0", lifespan=lifespan)
    app.state.settings = settings
    app.state.store = store

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_methods=["GET", "POST"],
        allow_headers=["Content-Type", "Authorization"],
    )

    app.add_exception_handler(ShiftTrackError, shifttrack_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    # Include routers
    app.include_router(auth.router, tags=["authentication"])
    app.include_router(shifts.router, tags=["shifts"])
    app.include_router(export.router, tags=["export"])

    @app.get("/", response_class=PlainTextResponse)
    async def root():
        return "Backend läuft!"

    @app.get("/health", dependencies=[Depends(require("health"))])
    async def health():
        return {"status": "ok"}

    return app


def run() -> None:
    settings = Settings()
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info("Starting server on port %s", settings.PORT)
    uvicorn.run(
        "shifttrack.main:create_app",
        factory=True,
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    run()
