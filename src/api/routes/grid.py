"""Grid cell endpoint."""

from typing import Annotated, Literal

from fastapi import APIRouter, Depends, HTTPException, Query, status

from api.dependencies import verify_api_key
from api.models.responses import ErrorCodes, GridCellOut, GridResponse
from core import config
from core.dates import generate_grid_cells, generate_week_cells, get_month_name

router = APIRouter(prefix="/v1")


@router.get("/grid", response_model=GridResponse)
async def grid_endpoint(
    start_year: Annotated[int, Query(ge=config.MIN_YEAR, le=config.MAX_YEAR)],
    end_year: Annotated[int, Query(ge=config.MIN_YEAR, le=config.MAX_YEAR)],
    mode: Annotated[Literal["month", "week"], Query()] = "month",
    _api_key: str = Depends(verify_api_key),
):
    """List the month (or ISO week) cells of a year range."""
    if start_year > end_year or end_year - start_year + 1 > config.MAX_YEAR_SPAN:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={
                "error": "Invalid year range",
                "code": ErrorCodes.INVALID_REQUEST,
                "details": [
                    f"start_year must not be after end_year and span at most {config.MAX_YEAR_SPAN} years"
                ],
            },
        )

    if mode == "week":
        cells = [
            GridCellOut(year=c.year, week=c.week, date=c.date, label=f"W{c.week}")
            for c in generate_week_cells(start_year, end_year)
        ]
    else:
        cells = [
            GridCellOut(year=c.year, month=c.month, date=c.date, label=get_month_name(c.month))
            for c in generate_grid_cells(start_year, end_year)
        ]

    return GridResponse(mode=mode, cells=cells)
