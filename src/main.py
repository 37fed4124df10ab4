import asyncio
from contextlib import asynccontextmanager
import logging
import time

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from api.api_v1.api import api_router
from core import constants
from core.config import settings
from core.exceptions import AppError
from log import setup_logging_to_console, setup_logging_to_file, setup_logging_to_seq

logger = logging.getLogger(__name__)


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code, content={"success": False, "error": message}
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging_to_console()
    if settings.is_production:
        setup_logging_to_file(app="api", level=logging.INFO)
    setup_logging_to_seq()
    logger.info(
        f"{settings.PROJECT_NAME} {settings.VERSION} started "
        f"({settings.ENVIRONMENT_NAME})"
    )
    yield


app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    openapi_url=f"{settings.API_V1_STR}/openapi.json",
    lifespan=lifespan,
)

# Set all CORS enabled origins
if settings.BACKEND_CORS_ORIGINS:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[str(origin).rstrip("/") for origin in settings.BACKEND_CORS_ORIGINS],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


@app.middleware("http")
async def request_timeout(request: Request, call_next):
    # endpoints read the deadline and roll back instead of committing late
    request.state.deadline = time.monotonic() + settings.REQUEST_TIMEOUT_SECONDS
    try:
        return await asyncio.wait_for(
            call_next(request),
            timeout=settings.REQUEST_TIMEOUT_SECONDS
            + settings.REQUEST_TIMEOUT_GRACE_SECONDS,
        )
    except asyncio.TimeoutError:
        logger.error(f"Request timeout: {request.method} {request.url.path}")
        return error_response(504, constants.MSG_REQUEST_TIMEOUT)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    return error_response(exc.status_code, exc.message)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 404 and exc.detail == "Not Found":
        return error_response(
            404, constants.MSG_ROUTE_NOT_FOUND.format(
                method=request.method, path=request.url.path
            )
        )
    return error_response(exc.status_code, str(exc.detail))


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.info(f"Invalid request {request.method} {request.url.path}: {exc.errors()}")
    return error_response(400, constants.MSG_INVALID_DATA)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    return error_response(500, constants.MSG_INTERNAL_ERROR)


app.include_router(api_router, prefix=settings.API_V1_STR)
