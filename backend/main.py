"""FastAPI application entry point."""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api import assistant, plaid, profile, settings, vendor_bills
from api.errors import register_error_handlers
from config import get_settings
from logging_config import setup_logging

setup_logging(get_settings())
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Junyper API",
    description="Small-business accounting backend",
    version="0.1.0",
)

# CORS configuration for the dashboard
app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().CORS_ALLOW_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

# Include API routers
app.include_router(plaid.router)
app.include_router(assistant.router)
app.include_router(settings.router)
app.include_router(profile.router)
app.include_router(vendor_bills.router)


@app.get("/health")
def health_check():
    """Health check endpoint."""
    return {"status": "ok"}
