"""
Lead Routes - search (DB first, provider fallback), lookup and upsert
"""
from datetime import datetime, timezone
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from leadgen.dependencies import get_lead_service
from leadgen.exceptions import ValidationError
from leadgen.schemas import LeadSchema, SearchRequest, SearchResult
from leadgen.services.lead_service import LeadService

router = APIRouter(prefix="/api/v1/leads", tags=["Leads"])


@router.get("/health")
async def health():
    """Quick health check for the Leads module."""
    return {"ok": True, "module": "Leads", "utc": datetime.now(timezone.utc)}


# ============================================================================
# SEARCH
# ============================================================================

@router.get("/search", response_model=SearchResult)
async def search_leads_get(
    keyword: Optional[str] = None,
    title: Optional[str] = None,
    department: Optional[str] = None,
    seniority: Optional[str] = None,
    company_name: Optional[str] = Query(None, alias="companyName"),
    company_domain: Optional[str] = Query(None, alias="companyDomain"),
    location: Optional[str] = None,
    tech_includes: Optional[List[str]] = Query(None, alias="techIncludes"),
    page: int = 1,
    page_size: int = Query(25, alias="pageSize"),
    force_provider: bool = Query(False, alias="forceProvider"),
    service: LeadService = Depends(get_lead_service),
):
    """
    Search leads via query string. DB first, then provider fallback
    (unless forceProvider=true).

    Example: GET /api/v1/leads/search?keyword=data%20engineer&location=NY
    """
    request = SearchRequest(
        keyword=keyword or "",
        title=title or "",
        department=department or "",
        seniority=seniority or "",
        company_name=company_name or "",
        company_domain=company_domain or "",
        location=location or "",
        tech_includes=tech_includes or [],
        page=page,
        page_size=page_size,
        force_provider=force_provider,
    )
    return await service.search(request)


@router.post("/search", response_model=SearchResult)
async def search_leads_post(
    request: SearchRequest,
    service: LeadService = Depends(get_lead_service),
):
    """Search leads via POST body (longer filters such as techIncludes)."""
    return await service.search(request)


# ============================================================================
# UPSERT
# ============================================================================

@router.post("/upsert", response_model=List[str])
async def upsert_leads(
    leads: List[LeadSchema],
    service: LeadService = Depends(get_lead_service),
):
    """Upsert one or more unified leads; returns the stored ids."""
    try:
        return await service.upsert(leads)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))


# ============================================================================
# LOOKUP
# ============================================================================

@router.get("/{lead_id}", response_model=LeadSchema)
async def get_lead(
    lead_id: str,
    service: LeadService = Depends(get_lead_service),
):
    lead = await service.get_by_id(lead_id)
    if lead is None:
        raise HTTPException(status_code=404, detail="Lead not found")
    return lead
