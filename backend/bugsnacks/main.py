from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
from starlette.exceptions import HTTPException as StarletteHTTPException

from bugsnacks import __version__
from bugsnacks.core.config import settings
from bugsnacks.core.exceptions import BugSnacksError, RequestValidationFailed
from bugsnacks.core.logging_config import logger
from bugsnacks.core.middleware import NoCacheHeadersMiddleware, RequestLoggingMiddleware
from bugsnacks.core.store import create_store
from bugsnacks.api.router import api_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan event handler for startup and shutdown"""
    logger.info("=" * 60)
    logger.info(f"Starting {settings.APP_NAME}...")
    logger.info(f"Environment: {settings.ENVIRONMENT}")
    logger.info("=" * 60)

    # One store client per process, shared read-only by every request
    app.state.store = create_store(settings)

    yield

    logger.info(f"Shutting down {settings.APP_NAME}...")
    await app.state.store.close()


def error_body(exc: BugSnacksError) -> dict:
    """The ``{"error": ...}`` envelope; validation failures may add ``issues``"""
    body = {"error": exc.message}
    if isinstance(exc, RequestValidationFailed) and exc.issues is not None:
        body["issues"] = exc.issues
    return body


async def bugsnacks_exception_handler(request: Request, exc: BugSnacksError):
    return JSONResponse(status_code=exc.status_code, content=error_body(exc))


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def request_validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.log_validation_failure(str(exc.errors()), surface="framework")
    return JSONResponse(status_code=400, content={"error": "Invalid request data"})


async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Global exception: {exc}", exc_info=True)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


def register_exception_handlers(app: FastAPI) -> None:
    """Map every failure to the JSON error envelope"""
    app.add_exception_handler(BugSnacksError, bugsnacks_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
    app.add_exception_handler(Exception, global_exception_handler)


# Create FastAPI app
app = FastAPI(
    title=settings.APP_NAME,
    description="Campus bug-bounty API: projects, test requests and bug reports paid in dining perks",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan,
    redirect_slashes=False  # Prevent 307 redirects that break CORS
)

register_exception_handlers(app)

# Add middleware (order matters - last added runs first)
# 1. Request logging
app.add_middleware(RequestLoggingMiddleware)

# 2. Disable client-side caching
if settings.NO_CACHE_HEADERS:
    app.add_middleware(NoCacheHeadersMiddleware)

# 3. CORS - permissive by default, origins from CORS_ORIGINS_STR
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials="*" not in settings.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["X-Request-ID", "X-Response-Time"],
)

app.include_router(api_router)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "bugsnacks.main:app",
        host=settings.SERVER_HOST,
        port=settings.SERVER_PORT,
        reload=settings.DEBUG,
    )
