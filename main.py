"""
ClinicDesk - Clinic & Patient Management API
FastAPI Backend Application Entry Point
"""

import logging
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
import uvicorn
from datetime import datetime, timezone

from database.store import create_store
from controllers import (
    patient_controller,
    event_controller,
    memo_controller,
    doctor_note_controller,
    alert_controller,
    charge_controller,
    payment_method_controller,
)
from utils.config import get_settings
from utils.exceptions import ClinicDeskError
from utils.logger import configure_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    store = getattr(app.state, "store", None)
    if store is None:
        store = create_store(get_settings())
        app.state.store = store
    await store.init()
    logger.info(f"ClinicDesk started with {type(store).__name__}")
    yield
    # Shutdown
    await store.close()
    logger.info("ClinicDesk shutting down")


def create_app(store=None) -> FastAPI:
    settings = get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="ClinicDesk API",
        description="Patients, appointments, clinical notes, alerts and billing",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    if store is not None:
        app.state.store = store

    # CORS Configuration
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health")
    async def health_check():
        return {
            "status": "healthy",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "version": "1.0.0",
            "service": "ClinicDesk Backend",
            "store": settings.store_backend,
        }

    app.include_router(patient_controller.router, prefix="/patients", tags=["Patients"])
    app.include_router(event_controller.router, prefix="/events", tags=["Events"])
    app.include_router(memo_controller.router, prefix="/memos", tags=["Memos"])
    app.include_router(
        doctor_note_controller.router, prefix="/doctor-notes", tags=["Doctor Notes"]
    )
    app.include_router(alert_controller.router, prefix="/alerts", tags=["Alerts"])
    app.include_router(charge_controller.router, prefix="/charges", tags=["Charges"])
    app.include_router(
        payment_method_controller.router,
        prefix="/payment-methods",
        tags=["Payment Methods"],
    )

    # Error Handlers
    @app.exception_handler(ClinicDeskError)
    async def domain_error_handler(request: Request, exc: ClinicDeskError):
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "error": type(exc).__name__,
                "detail": exc.message,
                "timestamp": datetime.now(timezone.utc).isoformat(),
            },
        )

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=True, log_level="info")
