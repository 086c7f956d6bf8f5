"""Export Routes - leads and companies in batches (default batchSize=10)"""
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Query

from leadgen.dependencies import get_export_service
from leadgen.schemas import CompanySchema, ExportBatch, LeadSchema
from leadgen.services.export_service import ExportService

router = APIRouter(prefix="/api/v1/exports", tags=["Exports"])


@router.get("/health")
async def health():
    return {"ok": True, "module": "Exports", "utc": datetime.now(timezone.utc)}


@router.get("/leads", response_model=ExportBatch[LeadSchema])
async def export_leads(
    page: int = 1,
    batch_size: int = Query(10, alias="batchSize"),
    service: ExportService = Depends(get_export_service),
):
    """GET /api/v1/exports/leads?page=1&batchSize=10"""
    return await service.get_lead_batch(page, batch_size)


@router.get("/companies", response_model=ExportBatch[CompanySchema])
async def export_companies(
    page: int = 1,
    batch_size: int = Query(10, alias="batchSize"),
    service: ExportService = Depends(get_export_service),
):
    """GET /api/v1/exports/companies?page=1&batchSize=10"""
    return await service.get_company_batch(page, batch_size)
