"""Fitness Dashboard API - FastAPI application entry point."""
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from fitness_metrics.errors import MetricValidationError

from .config import get_settings
from .database import RecordStoreUnavailable
from .routes import stats, nutrition, progress

log = logging.getLogger(__name__)

settings = get_settings()

app = FastAPI(
    title="Fitness Dashboard API",
    description="Read-only API for workout, nutrition and progress metrics",
    version="1.0.0",
)

# Configure CORS for frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET"],
    allow_headers=["*"],
)

# Include routers
app.include_router(stats.router)
app.include_router(nutrition.router)
app.include_router(progress.router)


@app.exception_handler(MetricValidationError)
async def metric_validation_handler(request: Request, exc: MetricValidationError):
    """Invalid numeric input from the caller."""
    return JSONResponse(status_code=400, content={"detail": str(exc)})


@app.exception_handler(RecordStoreUnavailable)
async def record_store_handler(request: Request, exc: RecordStoreUnavailable):
    """The record store database is missing."""
    log.warning(f"[STORE] {request.url.path}: {exc}")
    return JSONResponse(status_code=503, content={"detail": "Record store unavailable"})


@app.get("/health")
async def health_check():
    """Health check endpoint for the API."""
    return {"status": "healthy", "service": "fitness-dashboard-api"}


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run(
        "server.dashboard_api.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=True,
    )
