import logging
import time
from contextlib import asynccontextmanager
from typing import Callable

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.routing import APIRoute
from fastapi.staticfiles import StaticFiles

from app.api.error_handlers import register_error_handlers
from app.api.v1.api import api_router
from app.core.config import settings
from app.core.database import db
from app.services.storage import create_blob_store

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def custom_generate_unique_id(route: APIRoute) -> str:
    """Operation ids like ``testimonies-submit_testimony`` for generated clients"""
    tag = route.tags[0] if route.tags else "default"
    return f"{tag.replace(' ', '-')}-{route.name}"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Open the database engine and the upload store for the life of the process.
    Startup fails if the database cannot be reached.
    """
    logger.info(f"Starting {settings.PROJECT_NAME} {settings.VERSION} ({settings.ENVIRONMENT})")

    db.init_app()
    if not await db.check_connection():
        raise RuntimeError("Database connection failed")
    logger.info("Successfully connected to database")

    app.state.blob_store = create_blob_store()
    logger.info(f"Uploads stored in {settings.UPLOAD_DIR.resolve()}, served at {settings.UPLOAD_URL_PREFIX}")
    logger.info(f"CORS origins: {settings.all_cors_origins}")

    try:
        yield
    finally:
        logger.info("Shutting down application...")
        db.dispose()


app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    generate_unique_id_function=custom_generate_unique_id,
    openapi_url=f"{settings.API_PREFIX}/openapi.json",
    docs_url=f"{settings.API_PREFIX}/docs",
    redoc_url=f"{settings.API_PREFIX}/redoc",
    lifespan=lifespan,
)


@app.middleware("http")
async def add_process_time_header(request: Request, call_next: Callable):
    """Time every request and expose it as ``X-Process-Time``"""
    start_time = time.perf_counter()
    response = await call_next(request)
    process_time = time.perf_counter() - start_time
    response.headers["X-Process-Time"] = f"{process_time:.4f}"
    logger.info(f"{request.method} {request.url.path} -> {response.status_code} ({process_time:.4f}s)")
    return response


register_error_handlers(app)

if settings.all_cors_origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.all_cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

app.include_router(api_router, prefix=settings.API_PREFIX)

# Uploaded images are public, read-only
app.mount(
    settings.UPLOAD_URL_PREFIX,
    StaticFiles(directory=settings.UPLOAD_DIR, check_dir=False),
    name="uploads",
)


@app.get("/", tags=["root"])
async def root():
    """
    API name, version and documentation links.
    """
    return {
        "message": f"Welcome to the {settings.PROJECT_NAME}",
        "version": settings.VERSION,
        "environment": settings.ENVIRONMENT,
        "docs": f"{settings.API_PREFIX}/docs",
        "redoc": f"{settings.API_PREFIX}/redoc",
    }
