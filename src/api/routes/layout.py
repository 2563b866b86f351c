"""Event layout endpoints."""

import asyncio
import logging
import sqlite3
import time

from fastapi import APIRouter, Depends, HTTPException, Request, status

from api.dependencies import verify_api_key
from api.logging import RequestLog, log_request
from api.models.requests import LayoutConfigIn, LayoutRangeRequest, LayoutRequest
from api.models.responses import ErrorCodes, LayoutRangeResponse, YearLayoutResponse
from core import config
from core.errors import LayoutConfigError
from core.validation import build_events
from models.layout import LayoutConfig, RejectedEvent, YearLayout
from services.layout import compute_layout_range

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1")


def get_client_ip(request: Request) -> str:
    """Extract client IP from request, handling proxies."""
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


def build_config(config_in: LayoutConfigIn | None) -> LayoutConfig:
    """Convert request config to LayoutConfig, mapping errors to 422."""
    try:
        if config_in is None:
            return LayoutConfig()
        return LayoutConfig(**config_in.model_dump())
    except LayoutConfigError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={
                "error": "Invalid layout configuration",
                "code": ErrorCodes.INVALID_CONFIG,
                "details": [d.strip() for d in str(e).split(";") if d.strip()],
            },
        )


def _layout_in_thread(
    raw_events: list, start_year: int, end_year: int, layout_config: LayoutConfig
) -> tuple[list[YearLayout], list[RejectedEvent]]:
    """Parse raw events and compute layouts (runs in thread pool)."""
    events, rejected = build_events(raw_events)
    layouts = compute_layout_range(events, start_year, end_year, layout_config)
    return layouts, rejected


async def _run_layout(
    request: Request,
    endpoint: str,
    raw_events: list,
    start_year: int,
    end_year: int,
    config_in: LayoutConfigIn | None,
) -> list[YearLayoutResponse]:
    """Shared request handling for the layout endpoints, with request logging."""
    start_time = time.time()

    request_log = RequestLog(
        endpoint=endpoint,
        method="POST",
        client_ip=get_client_ip(request),
        year_start=start_year,
        year_end=end_year,
        event_count=len(raw_events),
    )

    try:
        if start_year > end_year:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail={
                    "error": "start_year must not be after end_year",
                    "code": ErrorCodes.INVALID_REQUEST,
                    "details": [f"start_year={start_year}, end_year={end_year}"],
                },
            )

        if end_year - start_year + 1 > config.MAX_YEAR_SPAN:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail={
                    "error": f"Year range exceeds maximum of {config.MAX_YEAR_SPAN} years",
                    "code": ErrorCodes.INVALID_REQUEST,
                    "details": [],
                },
            )

        if len(raw_events) > config.MAX_EVENTS_PER_REQUEST:
            raise HTTPException(
                status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                detail={
                    "error": f"Too many events (maximum {config.MAX_EVENTS_PER_REQUEST})",
                    "code": ErrorCodes.TOO_MANY_EVENTS,
                    "details": [f"Received: {len(raw_events)}"],
                },
            )

        layout_config = build_config(config_in)

        # Layout is CPU-bound; keep it off the event loop
        layouts, rejected = await asyncio.to_thread(
            _layout_in_thread, raw_events, start_year, end_year, layout_config
        )

        responses = [YearLayoutResponse.from_layout(layout, rejected) for layout in layouts]

        # Log success
        request_log.status_code = 200
        # Rejections are the same for every year, so record them once
        request_log.rejected_count = len(responses[0].rejected)
        request_log.lane_overflow = any(r.lane_overflow for r in responses)
        for item in responses[0].rejected:
            request_log.details.append(
                ("rejected_event", f"{item.event_id or '<no id>'}: {item.error_message}")
            )
        for r in responses:
            if r.lane_overflow:
                request_log.details.append(("warning", f"Lane overflow in {r.year}"))
        request_log.processing_time_ms = int((time.time() - start_time) * 1000)

        return responses

    except HTTPException as e:
        # Log HTTP errors
        request_log.status_code = e.status_code
        if isinstance(e.detail, dict):
            request_log.error_code = e.detail.get("code")
            request_log.error_message = e.detail.get("error")
            for detail in e.detail.get("details", []):
                request_log.details.append(("validation_error", detail))
        else:
            request_log.error_message = str(e.detail)
        request_log.processing_time_ms = int((time.time() - start_time) * 1000)
        raise

    except Exception as e:
        # Unexpected errors
        logger.exception("Layout request failed")
        request_log.status_code = 500
        request_log.error_code = ErrorCodes.INTERNAL_ERROR
        request_log.error_message = str(e)
        request_log.processing_time_ms = int((time.time() - start_time) * 1000)

        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={
                "error": "Internal server error",
                "code": ErrorCodes.INTERNAL_ERROR,
                "details": [],
            },
        )

    finally:
        # Always log the request; a logging failure never fails the request
        try:
            log_request(request_log, config.DB_PATH)
        except sqlite3.Error as e:
            logger.warning("Could not write request log: %s", e)


@router.post("/layout", response_model=YearLayoutResponse)
async def layout_endpoint(
    request: Request,
    body: LayoutRequest,
    _api_key: str = Depends(verify_api_key),
):
    """
    Compute lanes and bar geometry for one year.

    Malformed events are skipped and listed in `rejected`.
    """
    responses = await _run_layout(
        request, "/v1/layout", body.events, body.year, body.year, body.config
    )
    return responses[0]


@router.post("/layout/range", response_model=LayoutRangeResponse)
async def layout_range_endpoint(
    request: Request,
    body: LayoutRangeRequest,
    _api_key: str = Depends(verify_api_key),
):
    """Compute an independent layout for every year in the range."""
    responses = await _run_layout(
        request, "/v1/layout/range", body.events, body.start_year, body.end_year, body.config
    )
    return LayoutRangeResponse(layouts=responses)
