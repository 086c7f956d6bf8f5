"""Batched exports of leads and companies (default 10 at a time)."""

from typing import Optional

from leadgen.config import settings
from leadgen.repository import LeadRepository
from leadgen.schemas import CompanySchema, ExportBatch, LeadSchema, LeadSearchCriteria, PagedResult
from leadgen.schemas.search import clamp_page, clamp_page_size


def next_page(result: PagedResult) -> Optional[int]:
    """Next page number while more items remain, else None."""
    if result.page * result.page_size < result.total:
        return result.page + 1
    return None


class ExportService:
    def __init__(self, repo: LeadRepository, default_batch_size: int = None):
        self.repo = repo
        self.default_batch_size = default_batch_size or settings.EXPORT_BATCH_SIZE

    async def get_lead_batch(self, page: int = 1, batch_size: int = 0) -> ExportBatch[LeadSchema]:
        criteria = LeadSearchCriteria(
            page=clamp_page(page),
            page_size=clamp_page_size(batch_size, self.default_batch_size),
        )
        result = await self.repo.search_leads(criteria)
        return ExportBatch[LeadSchema](
            items=result.items,
            page=result.page,
            batch_size=result.page_size,
            total=result.total,
            next_page=next_page(result),
        )

    async def get_company_batch(self, page: int = 1, batch_size: int = 0) -> ExportBatch[CompanySchema]:
        result = await self.repo.get_companies(
            clamp_page(page),
            clamp_page_size(batch_size, self.default_batch_size),
        )
        return ExportBatch[CompanySchema](
            items=result.items,
            page=result.page,
            batch_size=result.page_size,
            total=result.total,
            next_page=next_page(result),
        )
