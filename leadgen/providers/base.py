"""
Base interface for external lead providers.
All providers must implement this interface.
"""
from abc import ABC, abstractmethod
from typing import Optional

from leadgen.schemas import CompanySchema, LeadSchema, LeadSearchCriteria, PagedResult
from leadgen.schemas.search import DEFAULT_PAGE_SIZE, clamp_page, clamp_page_size

MAX_PROVIDER_PAGE_SIZE = 100


def blank_to_none(value: Optional[str]) -> Optional[str]:
    """Blank or whitespace-only filters are not sent to the provider."""
    if value is None or not value.strip():
        return None
    return value


def provider_page_size(page_size: int) -> int:
    return min(clamp_page_size(page_size, DEFAULT_PAGE_SIZE), MAX_PROVIDER_PAGE_SIZE)


class LeadProvider(ABC):
    """
    Abstract base class for external people/company sources.

    Implementations never raise on provider failures: any transport error,
    non-success status or undecodable response yields an empty page tagged
    with the provider's name.
    """

    #: Provider name used for diagnostics and as the provider_refs key
    name: str = ""

    @abstractmethod
    async def search(self, criteria: LeadSearchCriteria) -> PagedResult[LeadSchema]:
        """Provider-side people search mapped into unified leads."""

    @abstractmethod
    async def search_companies(self, criteria: LeadSearchCriteria) -> PagedResult[CompanySchema]:
        """Provider-side company search mapped into company documents."""

    def empty_leads(self, criteria: LeadSearchCriteria) -> PagedResult[LeadSchema]:
        return PagedResult[LeadSchema](
            items=[],
            page=clamp_page(criteria.page),
            page_size=clamp_page_size(criteria.page_size),
            total=0,
            from_cache=False,
            source=self.name,
        )

    def empty_companies(self, criteria: LeadSearchCriteria) -> PagedResult[CompanySchema]:
        return PagedResult[CompanySchema](
            items=[],
            page=clamp_page(criteria.page),
            page_size=clamp_page_size(criteria.page_size),
            total=0,
            from_cache=False,
            source=self.name,
        )
