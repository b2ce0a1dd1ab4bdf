"""
SwiftGuard - REST API

FastAPI binding for the validation service:
- POST /swift   submit a raw MT103 message
- GET  /swift   most recent verdict
- GET  /health  liveness
- GET  /metrics Prometheus exposition
"""

import logging
from datetime import datetime, timezone
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse, Response
from prometheus_client import CONTENT_TYPE_LATEST, Counter, generate_latest

from ..core.config import Config, get_config
from ..core.exceptions import MalformedInputException
from ..core.structured_logging import LogContext
from ..monitoring.metrics import record_fault
from ..service.models import ValidationVerdict
from ..service.validation_service import ValidationService
from .schemas import ErrorResponse, HealthResponse, NoMessageResponse, VerdictResponse

logger = logging.getLogger(__name__)

SIMULATED_TIME_HEADER = "X-Simulated-Time"

API_REQUEST_COUNTER = Counter(
    "swiftguard_api_requests_total",
    "Total SwiftGuard API requests",
    ["endpoint", "method", "status"],
)


def status_code_for(verdict: ValidationVerdict) -> int:
    """HTTP status for a verdict: 403 blocked, 409 duplicate, otherwise 200."""
    if verdict.is_blocked:
        return 403
    if verdict.is_duplicate:
        return 409
    return 200


def parse_simulated_time(value: Optional[str]) -> Optional[datetime]:
    """Parse an ISO-8601 receive time override; naive values are UTC."""
    if not value:
        return None

    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"

    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _error_response(endpoint: str, status_code: int, message: str) -> JSONResponse:
    API_REQUEST_COUNTER.labels(endpoint=endpoint, method="POST", status=str(status_code)).inc()
    return JSONResponse(
        status_code=status_code,
        content={"status": "error", "message": message},
    )


def create_app(
    config: Optional[Config] = None,
    service: Optional[ValidationService] = None,
) -> FastAPI:
    """Create and configure the FastAPI application."""
    if config is None:
        config = get_config()

    app = FastAPI(
        title="SwiftGuard",
        description="MT103 payment message parsing and compliance validation",
        version=config.version,
        docs_url="/docs" if config.debug else None,
        redoc_url="/redoc" if config.debug else None,
    )
    app.state.config = config
    app.state.validation_service = service or ValidationService(config)

    @app.post(
        "/swift",
        responses={
            200: {"model": VerdictResponse},
            400: {"model": ErrorResponse},
            403: {"model": VerdictResponse},
            409: {"model": VerdictResponse},
            413: {"model": ErrorResponse},
            500: {"model": ErrorResponse},
        },
    )
    async def submit_message(request: Request):
        """Parse, validate and screen a raw MT103 message."""
        body = await request.body()

        if len(body) > config.api.max_body_bytes:
            return _error_response("/swift", 413, "Message too large")

        try:
            received_at = parse_simulated_time(request.headers.get(SIMULATED_TIME_HEADER))
        except ValueError:
            return _error_response(
                "/swift", 400, f"Invalid {SIMULATED_TIME_HEADER} header, expected ISO-8601"
            )

        validation_service: ValidationService = request.app.state.validation_service

        try:
            # Ledger backends may block on I/O
            verdict = await run_in_threadpool(
                validation_service.validate, body, received_at=received_at
            )
        except MalformedInputException as e:
            logger.warning(
                f"Rejected malformed message: {e.message}",
                extra={"context": LogContext(trace_id=e.context.get("trace_id"))},
            )
            return _error_response("/swift", 400, "Malformed SWIFT message")
        except Exception as e:
            record_fault(e)
            logger.exception(f"Unexpected error while validating message: {e}")
            return _error_response("/swift", 500, "Internal server error")

        status_code = status_code_for(verdict)
        API_REQUEST_COUNTER.labels(endpoint="/swift", method="POST", status=str(status_code)).inc()
        return JSONResponse(status_code=status_code, content=verdict.to_dict())

    @app.get("/swift", responses={200: {"model": VerdictResponse}})
    async def get_last_message(request: Request):
        """Return the most recently processed verdict."""
        API_REQUEST_COUNTER.labels(endpoint="/swift", method="GET", status="200").inc()
        verdict = request.app.state.validation_service.last_verdict()
        if verdict is None:
            return NoMessageResponse().model_dump()
        return verdict.to_dict()

    @app.get("/health", response_model=HealthResponse)
    async def health():
        """Liveness check."""
        return HealthResponse(service=config.service_name, version=config.version)

    @app.get("/metrics")
    async def metrics():
        """Prometheus metrics."""
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    return app


def run_server(config: Optional[Config] = None, reload: bool = False) -> None:
    """Run the API with uvicorn."""
    if config is None:
        config = get_config()

    logger.info(f"Starting SwiftGuard API on {config.api.host}:{config.api.port}")

    if reload:
        # Reload needs an import string; the factory rebuilds config via get_config()
        uvicorn.run(
            "swiftguard.api.rest:create_app",
            factory=True,
            host=config.api.host,
            port=config.api.port,
            reload=True,
            log_level=config.log_level.value.lower(),
        )
    else:
        uvicorn.run(
            create_app(config),
            host=config.api.host,
            port=config.api.port,
            log_level=config.log_level.value.lower(),
            access_log=True,
        )
