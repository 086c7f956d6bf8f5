"""List Routes - prospect list CRUD and membership"""
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException, Query

from leadgen.dependencies import get_list_service
from leadgen.exceptions import ValidationError
from leadgen.schemas import CreateListRequest, ListMembershipRequest, ListView, PagedResult
from leadgen.services.list_service import ListService

router = APIRouter(prefix="/api/v1/lists", tags=["Lists"])


@router.get("/health")
async def health():
    return {"ok": True, "module": "Lists", "utc": datetime.now(timezone.utc)}


@router.post("")
async def create_list(
    body: CreateListRequest,
    service: ListService = Depends(get_list_service),
):
    """Create a new prospect list; returns its id."""
    try:
        list_id = await service.create(body.name, body.description)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"listId": list_id}


@router.get("", response_model=PagedResult[ListView])
async def get_lists(
    page: int = 1,
    page_size: int = Query(25, alias="pageSize"),
    service: ListService = Depends(get_list_service),
):
    return await service.get_paged(page, page_size)


@router.post("/add")
async def add_leads(
    body: ListMembershipRequest,
    service: ListService = Depends(get_list_service),
):
    if not body.list_id.strip() or not body.lead_ids:
        raise HTTPException(status_code=400, detail="ListId and LeadIds are required.")
    await service.add_leads(body.list_id, body.lead_ids)
    return {"ok": True}


@router.post("/remove")
async def remove_leads(
    body: ListMembershipRequest,
    service: ListService = Depends(get_list_service),
):
    if not body.list_id.strip() or not body.lead_ids:
        raise HTTPException(status_code=400, detail="ListId and LeadIds are required.")
    await service.remove_leads(body.list_id, body.lead_ids)
    return {"ok": True}


@router.get("/{list_id}", response_model=ListView)
async def get_list(
    list_id: str,
    service: ListService = Depends(get_list_service),
):
    prospect_list = await service.get_by_id(list_id)
    if prospect_list is None:
        raise HTTPException(status_code=404, detail="List not found")
    return prospect_list
