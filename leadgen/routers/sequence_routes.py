"""Sequence Routes - create, fetch and start outreach sequences"""
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException, Query

from leadgen.dependencies import get_sequence_service
from leadgen.exceptions import (
    SequenceHasNoStepsError,
    SequenceNotFoundError,
    ValidationError,
)
from leadgen.schemas import (
    PagedResult,
    SequenceSchema,
    StartSequenceRequest,
    StartSequenceSummary,
)
from leadgen.services.sequence_service import SequenceService

router = APIRouter(prefix="/api/v1/sequences", tags=["Sequences"])


@router.get("/health")
async def health():
    return {"ok": True, "module": "Sequences", "utc": datetime.now(timezone.utc)}


@router.post("")
async def create_sequence(
    body: SequenceSchema,
    service: SequenceService = Depends(get_sequence_service),
):
    try:
        sequence_id = await service.create(body)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"sequenceId": sequence_id}


@router.get("", response_model=PagedResult[SequenceSchema])
async def get_sequences(
    page: int = 1,
    page_size: int = Query(25, alias="pageSize"),
    service: SequenceService = Depends(get_sequence_service),
):
    return await service.get_paged(page, page_size)


@router.post("/start", response_model=StartSequenceSummary)
async def start_sequence(
    body: StartSequenceRequest,
    service: SequenceService = Depends(get_sequence_service),
):
    """Fire the first step for every lead by logging one engagement each."""
    try:
        return await service.start(body.sequence_id, body.lead_ids)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except SequenceNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except SequenceHasNoStepsError as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.get("/{sequence_id}", response_model=SequenceSchema)
async def get_sequence(
    sequence_id: str,
    service: SequenceService = Depends(get_sequence_service),
):
    sequence = await service.get(sequence_id)
    if sequence is None:
        raise HTTPException(status_code=404, detail="Sequence not found")
    return sequence
