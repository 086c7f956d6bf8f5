"""Imports people and companies from the providers into the DB."""

import logging
from typing import Any, Dict

from leadgen.exceptions import BulkUpsertError
from leadgen.repository import LeadRepository
from leadgen.schemas import SearchRequest
from leadgen.services.provider_router import ProviderRouter
from leadgen.services.reconciler import UpsertReconciler

logger = logging.getLogger(__name__)


class ImportService:
    """People go through the router; companies through the primary provider."""

    def __init__(self, repo: LeadRepository, router: ProviderRouter):
        self.router = router
        self.reconciler = UpsertReconciler(repo)

    async def import_people(self, request: SearchRequest) -> Dict[str, Any]:
        criteria = request.to_criteria(force_provider=True)

        page = await self.router.search(criteria)
        imported = len(page.items)
        if page.items:
            try:
                await self.reconciler.upsert_leads(page.items)
            except BulkUpsertError as e:
                logger.warning(f"People import partially failed: {e}")
                imported = len(e.ids)

        logger.info(f"Imported {imported} people from {page.source}")
        return {"ok": True, "imported": imported, "source": page.source}

    async def import_companies(self, request: SearchRequest) -> Dict[str, Any]:
        criteria = request.to_criteria(
            title="",
            department="",
            seniority="",
            company_name="",
            force_provider=True,
        )

        page = await self.router.search_companies(criteria)
        imported = len(page.items)
        if page.items:
            try:
                await self.reconciler.upsert_companies(page.items)
            except BulkUpsertError as e:
                logger.warning(f"Company import partially failed: {e}")
                imported = len(e.ids)

        logger.info(f"Imported {imported} companies from {page.source}")
        return {"ok": True, "imported": imported, "source": page.source}
