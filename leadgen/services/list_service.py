"""Prospect lists: create, query, add/remove leads."""

import logging
from typing import Iterable, Optional

from leadgen.exceptions import ValidationError
from leadgen.repository import LeadRepository
from leadgen.schemas import ListView, PagedResult
from leadgen.schemas.search import clamp_page, clamp_page_size

logger = logging.getLogger(__name__)


class ListService:
    def __init__(self, repo: LeadRepository):
        self.repo = repo

    async def create(self, name: str, description: Optional[str] = None) -> str:
        if not name or not name.strip():
            raise ValidationError("List name is required.")

        description = description.strip() if description is not None else None
        list_id = await self.repo.create_list(name.strip(), description)
        logger.info(f"Created list '{name.strip()}' ({list_id})")
        return list_id

    async def get_paged(self, page: int, page_size: int) -> PagedResult[ListView]:
        result = await self.repo.get_lists(clamp_page(page), clamp_page_size(page_size))
        return PagedResult[ListView](
            items=[ListView.from_list(item) for item in result.items],
            page=result.page,
            page_size=result.page_size,
            total=result.total,
        )

    async def get_by_id(self, list_id: str) -> Optional[ListView]:
        if not list_id or not list_id.strip():
            return None
        prospect_list = await self.repo.get_list_by_id(list_id)
        return ListView.from_list(prospect_list) if prospect_list else None

    async def add_leads(self, list_id: str, lead_ids: Iterable[str]) -> None:
        if not list_id or not list_id.strip():
            raise ValidationError("listId is required.")
        await self.repo.add_leads_to_list(list_id, list(lead_ids or []))

    async def remove_leads(self, list_id: str, lead_ids: Iterable[str]) -> None:
        if not list_id or not list_id.strip():
            raise ValidationError("listId is required.")
        await self.repo.remove_leads_from_list(list_id, list(lead_ids or []))
