"""
Calculation history API endpoints.
"""

from functools import lru_cache

from fastapi import APIRouter, Depends, HTTPException, status

from fincal.api.schemas import HistoryItemOut, HistoryResponse, PlanInput
from fincal.calculations.exceptions import CalculationError
from fincal.config import get_settings
from fincal.services import HistoryLog, build_history_item, perform_calculation

router = APIRouter()


@lru_cache()
def get_history_log() -> HistoryLog:
    """Get the process-wide history log."""
    return HistoryLog(limit=get_settings().history_limit)


@router.get("", response_model=HistoryResponse)
async def list_history(log: HistoryLog = Depends(get_history_log)):
    """List saved calculations, newest first."""
    return HistoryResponse(
        items=[HistoryItemOut.from_item(item) for item in log.items()],
        limit=log.limit,
    )


@router.post("", response_model=HistoryItemOut, status_code=status.HTTP_201_CREATED)
async def save_calculation(inputs: PlanInput, log: HistoryLog = Depends(get_history_log)):
    """Run a calculation and save its summary."""
    request = inputs.to_request()
    try:
        result = perform_calculation(request)
        item = build_history_item(request, result)
    except CalculationError as e:
        raise HTTPException(status_code=400, detail=str(e))

    log.add(item)
    return HistoryItemOut.from_item(item)


@router.get("/{item_id}", response_model=HistoryItemOut)
async def get_history_item(item_id: str, log: HistoryLog = Depends(get_history_log)):
    """Get a saved calculation by id."""
    item = log.get(item_id)
    if item is None:
        raise HTTPException(status_code=404, detail="History item not found")
    return HistoryItemOut.from_item(item)


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
async def clear_history(log: HistoryLog = Depends(get_history_log)):
    """Remove all saved calculations."""
    log.clear()
