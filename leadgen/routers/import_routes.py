"""Import Routes - pull people/companies from providers into the DB"""
from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from leadgen.dependencies import get_import_service
from leadgen.schemas import SearchRequest
from leadgen.services.import_service import ImportService

router = APIRouter(prefix="/api/v1/imports", tags=["Imports"])


@router.get("/health")
async def health():
    return {"ok": True, "module": "Imports", "utc": datetime.now(timezone.utc)}


@router.post("/people")
async def import_people(
    request: SearchRequest,
    service: ImportService = Depends(get_import_service),
):
    """Import PEOPLE from the configured provider(s) and upsert into the DB."""
    return await service.import_people(request)


@router.post("/companies")
async def import_companies(
    request: SearchRequest,
    service: ImportService = Depends(get_import_service),
):
    """Import COMPANIES from the primary provider (keyword/domain/location/paging)."""
    return await service.import_companies(request)
