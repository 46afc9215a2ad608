"""Main FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware

from analytics.logging_config import get_logger, setup_logging
from api.config import get_settings
from api.db.database import init_db
from api.errors import catch_unhandled_errors, register_exception_handlers

settings = get_settings()
logger = get_logger("app")

CORS_ALLOW_METHODS = ["GET", "POST", "OPTIONS"]
CORS_ALLOW_HEADERS = ["Content-Type"]


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup and shutdown."""
    setup_logging(level=settings.log_level, log_file=settings.log_file)
    logger.info(f"Starting {settings.app_name}...")
    init_db()
    logger.info("Database initialized")

    yield

    logger.info(f"Shutting down {settings.app_name}...")


# Create FastAPI application
app = FastAPI(
    title=settings.app_name,
    description="Dashboard statistics, semantic search and AI insights over user feedback",
    version="1.0.0",
    debug=settings.debug,
    lifespan=lifespan,
    docs_url=None,
    redoc_url=None,
    openapi_url=None,
)

# Registered before CORS so it sits inside it
app.middleware("http")(catch_unhandled_errors)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=CORS_ALLOW_METHODS,
    allow_headers=CORS_ALLOW_HEADERS,
)


@app.middleware("http")
async def answer_options(request: Request, call_next):
    """Answer every OPTIONS request with an empty body and the CORS headers."""
    if request.method != "OPTIONS":
        return await call_next(request)

    origin = request.headers.get("origin")
    if "*" in settings.cors_origins:
        allow_origin = "*"
    elif origin in settings.cors_origins:
        allow_origin = origin
    else:
        allow_origin = settings.cors_origins[0] if settings.cors_origins else ""

    return Response(
        status_code=200,
        headers={
            "Access-Control-Allow-Origin": allow_origin,
            "Access-Control-Allow-Methods": ", ".join(CORS_ALLOW_METHODS),
            "Access-Control-Allow-Headers": ", ".join(CORS_ALLOW_HEADERS),
        },
    )


register_exception_handlers(app)

# Include routers
from api.feedback.router import router as feedback_router  # noqa: E402
from api.insights.router import router as insights_router  # noqa: E402
from api.search.router import router as search_router  # noqa: E402

app.include_router(feedback_router, prefix="/api")
app.include_router(search_router, prefix="/api")
app.include_router(insights_router, prefix="/api")
