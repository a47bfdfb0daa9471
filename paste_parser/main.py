"""Paste Parser Service: FastAPI application.

POST /parse     Extract Safe transaction fields from pasted text.
GET  /networks  Supported networks.
GET  /health    Liveness check.
"""

from __future__ import annotations

import logging
import time
import uuid

from fastapi import FastAPI, Header, HTTPException, Request
from fastapi.responses import JSONResponse
from opentelemetry.propagate import extract

from paste_parser.audit import log_form_applied, log_parse_completed, log_parse_received
from paste_parser.chain_mapping import load_chain_table
from paste_parser.config import config
from paste_parser.form import InMemoryForm, process_paste
from paste_parser.models import Network, ParseRequest, ParseResponse, TransactionForm
from paste_parser.networks import DEFAULT_DIRECTORY
from paste_parser.telemetry import get_tracer, init_telemetry

# ---------------------------------------------------------------------------
# Logging setup
# ---------------------------------------------------------------------------

logging.basicConfig(
    level=getattr(logging, config.log_level.upper(), logging.INFO),
    format="%(asctime)s %(levelname)-8s [%(name)s] %(message)s",
)
logger = logging.getLogger("paste_parser")

# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------

app = FastAPI(
    title="Safe Transaction Paste Parser",
    version="0.1.0",
    description="Extracts Safe multisig transaction fields from copied Safe UI text",
)


@app.on_event("startup")
async def _startup() -> None:
    init_telemetry()
    # A missing or malformed table aborts startup, not a request
    table = load_chain_table()
    logger.info(
        "Paste parser started, shortnames=%d, networks=%d, otel=%s",
        len(table),
        len(DEFAULT_DIRECTORY),
        bool(config.otel_endpoint),
    )


# ---------------------------------------------------------------------------
# Auth dependency
# ---------------------------------------------------------------------------


def _verify_api_key(x_api_key: str = Header(default="")) -> None:
    if config.api_key and x_api_key != config.api_key:
        raise HTTPException(status_code=401, detail="Invalid or missing API key")


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------


@app.get("/health")
async def health():
    return {"status": "ok", "shortnames": len(load_chain_table()), "networks": len(DEFAULT_DIRECTORY)}


@app.get("/networks", response_model=list[Network])
async def list_networks():
    return list(DEFAULT_DIRECTORY)


@app.post("/parse", response_model=ParseResponse)
async def parse_paste_endpoint(
    body: ParseRequest,
    request: Request,
    x_api_key: str = Header(default=""),
    x_request_id: str = Header(default=""),
):
    """Parse pasted text and apply it to a fresh form."""
    _verify_api_key(x_api_key)

    tracer = get_tracer()
    ctx = extract(carrier=dict(request.headers))

    with tracer.start_as_current_span("parser.handle_parse", context=ctx) as span:
        request_id = x_request_id or str(uuid.uuid4())
        trace_id = format(span.get_span_context().trace_id, "032x")

        span.set_attribute("request.id", request_id)

        log_parse_received(request_id, len(body.text), trace_id)
        t0 = time.perf_counter()

        form = InMemoryForm(TransactionForm(method=body.method, version=body.version))
        outcome = process_paste(body.text, form, load_chain_table(), DEFAULT_DIRECTORY)

        duration_ms = (time.perf_counter() - t0) * 1000.0

        fields = outcome.fields
        log_parse_completed(
            request_id=request_id,
            trace_id=trace_id,
            outcome=outcome.kind.value,
            field_count=len(fields.present_fields()) if fields else 0,
            truncated_fields=outcome.truncated_fields,
            missing_fields=outcome.missing_fields,
            network=fields.network if fields else None,
            duration_ms=duration_ms,
        )
        log_form_applied(request_id, trace_id, outcome.applied)

        span.set_attribute("response.outcome", outcome.kind.value)
        span.set_attribute("response.applied", outcome.applied)

        return ParseResponse(
            request_id=request_id,
            trace_id=trace_id,
            outcome=outcome,
            form=form.state,
        )


# ---------------------------------------------------------------------------
# Error handler
# ---------------------------------------------------------------------------


@app.exception_handler(Exception)
async def _global_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error: %s", exc)
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error", "error": str(exc)},
    )
