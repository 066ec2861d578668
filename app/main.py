from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from app.api.routes import (
    aware_router,
    domains_router,
    instrument_groups_router,
    instrument_notes_router,
    instrument_status_router,
    instruments_router,
    plot_configurations_router,
    profiles_router,
    projects_router,
    timeseries_router,
    timeseries_measurements_router,
)
from app.api.error_handlers import register_error_handlers
from app.api.middleware import RequestLoggingMiddleware
from app.core.config import settings
from app.utils.logger import get_logger

# Initialize logger
logger = get_logger("app")

app = FastAPI(
    title=settings.PROJECT_NAME,
    description="API for instrumentation monitoring projects, instruments and timeseries",
    version="0.1.0",
)

# Set up CORS
if settings.BACKEND_CORS_ORIGINS:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[str(origin) for origin in settings.BACKEND_CORS_ORIGINS],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

# Add request logging middleware
app.add_middleware(RequestLoggingMiddleware)

register_error_handlers(app)

# Include API routes
app.include_router(projects_router, prefix=settings.API_V1_STR, tags=["projects"])
app.include_router(
    plot_configurations_router,
    prefix=f"{settings.API_V1_STR}/projects",
    tags=["plot-configurations"],
)
# Notes before instruments: /instruments/notes must not match /instruments/{instrument_id}
app.include_router(instrument_notes_router, prefix=settings.API_V1_STR, tags=["instrument-notes"])
app.include_router(instruments_router, prefix=settings.API_V1_STR, tags=["instruments"])
app.include_router(
    instrument_status_router,
    prefix=f"{settings.API_V1_STR}/instruments",
    tags=["instrument-status"],
)
app.include_router(
    instrument_groups_router,
    prefix=f"{settings.API_V1_STR}/instrument_groups",
    tags=["instrument-groups"],
)
app.include_router(timeseries_router, prefix=settings.API_V1_STR, tags=["timeseries"])
app.include_router(
    timeseries_measurements_router,
    prefix=settings.API_V1_STR,
    tags=["timeseries-measurements"],
)
app.include_router(domains_router, prefix=f"{settings.API_V1_STR}/domains", tags=["domains"])
app.include_router(aware_router, prefix=f"{settings.API_V1_STR}/aware", tags=["aware"])
app.include_router(profiles_router, prefix=settings.API_V1_STR, tags=["profiles"])


# Startup event
@app.on_event("startup")
async def startup_event():
    logger.info(f"Starting {settings.PROJECT_NAME}")


# Shutdown event
@app.on_event("shutdown")
async def shutdown_event():
    logger.info(f"Shutting down {settings.PROJECT_NAME}")


@app.get("/")
def read_root():
    return {"message": f"Welcome to {settings.PROJECT_NAME}"}


@app.get("/health")
def health_check():
    return {"status": "ok"}
