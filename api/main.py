"""FastAPI application: invoicing period API."""

from __future__ import annotations

import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.routes import router

API_VERSION = "1.0.0"
LOCAL_ORIGINS = [
    "http://localhost:8080",
    "http://localhost:3000",
    "http://127.0.0.1:8080",
]


def allowed_origins(value: str) -> list[str]:
    """Parse ALLOWED_ORIGINS ("*" or a comma-separated list); empty means local only."""
    origins = [o.strip() for o in value.split(",") if o.strip()]
    if "*" in origins:
        return ["*"]
    return origins or list(LOCAL_ORIGINS)


ALLOWED_ORIGINS = allowed_origins(os.environ.get("ALLOWED_ORIGINS", ""))

app = FastAPI(
    title="Invoice Calendar API",
    description="Billing periods, invoice numbers and billable quantities for a configured cadence.",
    version=API_VERSION,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=ALLOWED_ORIGINS != ["*"],  # credentials not allowed with wildcard
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
    max_age=3600,
)

app.include_router(router)


@app.get("/")
async def root():
    return {
        "name": "Invoice Calendar API",
        "version": API_VERSION,
        "docs": "/docs",
        "health": "/api/v1/health",
    }
