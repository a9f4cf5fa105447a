"""
FastAPI router for property ingestion.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException

from auth import dependencies as auth_dependencies

from .dependencies import get_bulk_ingestor
from .service import BulkIngestor

router = APIRouter()


@router.post("/properties/bulk")
async def bulk_create_properties(
    payload: dict[str, Any] = Body(...),
    user_id: str = Depends(auth_dependencies.get_current_user_id),
    ingestor: BulkIngestor = Depends(get_bulk_ingestor),
) -> dict:
    """
    Create properties for the caller, one by one.

    Always 200 once the batch runs; per-item failures are listed in `errors`.
    """
    submissions = payload.get("properties")
    if not isinstance(submissions, list):
        raise HTTPException(status_code=400, detail="properties must be an array")

    result = await ingestor.ingest(submissions, owner_id=user_id)
    return result.as_dict()
