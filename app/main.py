# app/main.py - Application factory, middleware and error translation
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from contextlib import asynccontextmanager
from pathlib import Path
import json
import logging
import traceback
import time

from app.core.config import settings
from app.core.db import db_manager, get_engine
from app.core.errors import AppError, StorageError
from app.core.logging import setup_logging
from app.models import Base
from app.api.routers import courses, dashboard, health, students

setup_logging()
logger = logging.getLogger(__name__)
access_logger = logging.getLogger("app.access")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""
    logger.info(f"Starting {settings.API_TITLE}...")
    logger.info(f"Environment: {settings.ENV}")
    logger.info(f"Database URL: {settings.DATABASE_URL.split('@')[1] if '@' in settings.DATABASE_URL else 'local'}")

    engine = get_engine()

    # Create tables if they don't exist (for development)
    if settings.is_development:
        logger.info("Creating database tables...")
        try:
            Base.metadata.create_all(bind=engine)
            logger.info("Database tables created successfully")
        except Exception as e:
            logger.error(f"Error creating tables: {e}")

    yield

    logger.info(f"Shutting down {settings.API_TITLE}...")
    db_manager.close()


app = FastAPI(
    title=settings.API_TITLE,
    description="Student and course management with dashboard statistics",
    version=settings.API_VERSION,
    docs_url="/docs" if settings.is_development else None,
    redoc_url="/redoc" if settings.is_development else None,
    lifespan=lifespan
)


def _request_body(raw: bytes):
    if not raw:
        return None
    try:
        return json.loads(raw)
    except ValueError:
        return raw.decode("utf-8", errors="replace")


# Request logging middleware - BEFORE CORS
@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log every request once it has been answered"""
    start_time = time.time()
    body = None
    if request.method != "GET":
        body = _request_body(await request.body())

    try:
        response = await call_next(request)
    except Exception as e:
        logger.error(f"Error processing {request.method} {request.url.path}: {str(e)}")
        logger.error(traceback.format_exc())
        raise

    duration_ms = (time.time() - start_time) * 1000
    access_logger.info(
        f"{request.method} {request.url.path} {response.status_code} {duration_ms:.3f} ms - "
        f"{response.headers.get('content-length', '-')}"
    )
    access_logger.info(
        "Request completed",
        extra={"context": {
            "method": request.method,
            "path": request.url.path,
            "status": response.status_code,
            "duration": f"{duration_ms:.0f}ms",
            "params": request.path_params,
            "query": dict(request.query_params),
            "body": body,
        }}
    )
    return response


app.add_middleware(CORSMiddleware, **settings.get_cors_config())


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    """Translate domain errors; storage failures never leak their detail"""
    if isinstance(exc, StorageError):
        logger.error(
            f"Storage failure on {request.method} {request.url.path}: {exc.message}",
            exc_info=exc.__cause__ or exc,
        )
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.public_message})

    logger.warning(f"{type(exc).__name__} on {request.method} {request.url.path}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Invalid request bodies are client errors (400) with a readable message"""
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        messages.append(f"{location}: {error.get('msg')}" if location else error.get("msg"))
    logger.warning(f"Validation failed on {request.method} {request.url.path}: {messages}")
    return JSONResponse(status_code=400, content={"detail": "; ".join(messages)})


# Global exception handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Handle uncaught exceptions"""
    logger.error(f"Unhandled exception on {request.method} {request.url.path}")
    logger.error(f"   Exception: {str(exc)}")

    if settings.is_development:
        logger.error(f"   Traceback:\n{traceback.format_exc()}")
        return JSONResponse(
            status_code=500,
            content={
                "detail": str(exc),
                "traceback": traceback.format_exc()
            }
        )

    logger.error(traceback.format_exc())
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error"}
    )


# Include routers
app.include_router(courses.router, prefix="/api/courses", tags=["Courses"])
app.include_router(students.router, prefix="/api/students", tags=["Students"])
app.include_router(dashboard.router, prefix="/api/dashboard", tags=["Dashboard"])
app.include_router(health.router, prefix="/health", tags=["Health"])


# Root endpoint
@app.get("/")
async def root():
    return {
        "message": settings.API_TITLE,
        "version": settings.API_VERSION,
        "docs_url": "/docs" if settings.is_development else "Documentation disabled in production",
    }


# Static front-end, if shipped alongside the API
if Path(settings.STATIC_DIR).is_dir():
    app.mount("/", StaticFiles(directory=settings.STATIC_DIR, html=True), name="static")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host=settings.API_HOST, port=settings.API_PORT)
