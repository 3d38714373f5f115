"""
LIRA Intern Portal API - FastAPI application entry point.
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from .config import get_settings
from .database import engine, Base
from .middleware import SecurityHeadersMiddleware, RequestLoggingMiddleware
from .limiter import limiter
from .logging_config import api_logger
from .responses import ApiException, api_exception_handler
from .routes import (
    auth_router,
    activities_router,
    comments_router,
    channels_router,
    notifications_router,
    profiles_router,
    departments_router,
    attendance_router,
    reports_router,
    dashboard_router,
    functions_router,
    health_router,
)

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create tables on startup (use migrations in production)."""
    Base.metadata.create_all(bind=engine)
    api_logger.info("Application started", environment=settings.environment, version=settings.version)
    yield
    api_logger.info("Application stopped")


app = FastAPI(
    title=settings.app_name,
    description="Backend API for the LIRA University intern management portal",
    version=settings.version,
    docs_url="/api/docs" if settings.debug else None,
    redoc_url="/api/redoc" if settings.debug else None,
    lifespan=lifespan,
)

# Rate limiter
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

# Structured API errors
app.add_exception_handler(ApiException, api_exception_handler)
app.add_exception_handler(Exception, api_exception_handler)

app.add_middleware(SecurityHeadersMiddleware)

# Request logging middleware (only in debug mode)
if settings.debug:
    app.add_middleware(RequestLoggingMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=False,
    allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=[
        "Authorization",
        "Content-Type",
        "Accept",
        "Origin",
        "X-Client-Info",
        "Apikey",
    ],
    max_age=3600,  # Cache preflight requests for 1 hour
)

app.include_router(auth_router)
app.include_router(activities_router)
app.include_router(comments_router)
app.include_router(channels_router)
app.include_router(notifications_router)
app.include_router(profiles_router)
app.include_router(departments_router)
app.include_router(attendance_router)
app.include_router(reports_router)
app.include_router(dashboard_router)
app.include_router(functions_router)
app.include_router(health_router)


@app.get("/")
def root():
    return {
        "message": settings.app_name,
        "docs": "/api/docs" if settings.debug else "Disabled in production",
    }
