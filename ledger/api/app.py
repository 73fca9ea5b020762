"""FastAPI application entry point."""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ledger.api.routes import accounts, payments
from ledger.config import settings

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title="Installment Ledger",
    description="Financed sales, amortization schedules and an append-only payment ledger",
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["GET", "POST"],
    allow_headers=[settings.organization_header, "Content-Type"],
)

app.include_router(accounts.router)
app.include_router(payments.router)


@app.get("/health")
async def health():
    return {"status": "ok"}
