"""
Lead-facing business logic.

1. Search the DB first; fall back to providers via ProviderRouter.
2. Upsert provider results so the next identical search is a DB hit.
3. Simple getters/commands for leads.
"""

import logging
from typing import Iterable, List, Optional

from leadgen.exceptions import BulkUpsertError, ValidationError
from leadgen.repository import LeadRepository
from leadgen.schemas import LeadSchema, SearchRequest, SearchResult
from leadgen.services.provider_router import ProviderRouter
from leadgen.services.reconciler import UpsertReconciler

logger = logging.getLogger(__name__)

DB_SOURCE = "DB"


class LeadService:
    """Search orchestration plus lead getters/commands."""

    def __init__(self, repo: LeadRepository, router: ProviderRouter):
        self.repo = repo
        self.router = router
        self.reconciler = UpsertReconciler(repo)

    # ---------- Queries ----------

    async def search(self, request: SearchRequest) -> SearchResult:
        criteria = request.to_criteria()

        # 1) DB first unless forced
        if not criteria.force_provider:
            page = await self.repo.search_leads(criteria)
            if page.items:
                logger.info(f"Lead search served from DB ({len(page.items)}/{page.total})")
                return SearchResult(
                    items=page.items,
                    page=page.page,
                    page_size=page.page_size,
                    total=page.total,
                    from_cache=True,
                    source=DB_SOURCE,
                )

        # 2) Provider fallback (or forced)
        page = await self.router.search(criteria)

        # 3) Persist so future searches hit the DB
        if page.items:
            try:
                await self.reconciler.upsert_leads(page.items)
            except BulkUpsertError as e:
                logger.warning(f"Partial persist of {page.source} results: {e}")

        return SearchResult(
            items=page.items,
            page=page.page,
            page_size=page.page_size,
            total=page.total,
            from_cache=False,
            source=page.source,
        )

    async def get_by_id(self, lead_id: str) -> Optional[LeadSchema]:
        if not lead_id or not lead_id.strip():
            return None
        return await self.repo.get_lead_by_id(lead_id)

    # ---------- Commands ----------

    async def upsert(self, leads: Iterable[LeadSchema]) -> List[str]:
        leads = list(leads or [])
        if not leads:
            raise ValidationError("At least one lead is required.")
        return await self.reconciler.upsert_leads(leads)
