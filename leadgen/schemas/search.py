"""Search criteria, paging envelope and search request/response schemas."""

from typing import Generic, List, Optional, TypeVar

from pydantic import Field

from leadgen.schemas.base import CamelModel
from leadgen.schemas.lead import LeadSchema

T = TypeVar("T")

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 25


def clamp_page(page: int) -> int:
    return DEFAULT_PAGE if page is None or page <= 0 else page


def clamp_page_size(page_size: int, default: int = DEFAULT_PAGE_SIZE) -> int:
    return default if page_size is None or page_size <= 0 else page_size


class LeadSearchCriteria(CamelModel):
    """
    Canonical query shape consumed by both the repository and the providers.

    force_provider is a hint for services; repositories ignore it.
    """
    keyword: str = ""
    title: str = ""
    department: str = ""
    seniority: str = ""
    company_name: str = ""
    company_domain: str = ""
    location: str = ""  # city/state/country
    tech_includes: List[str] = Field(default_factory=list)

    page: int = DEFAULT_PAGE
    page_size: int = DEFAULT_PAGE_SIZE
    force_provider: bool = False


class PagedResult(CamelModel, Generic[T]):
    """Page of items plus paging and provenance metadata."""
    items: List[T] = Field(default_factory=list)
    page: int = DEFAULT_PAGE
    page_size: int = DEFAULT_PAGE_SIZE
    total: int = 0
    from_cache: bool = True  # DB by default
    source: str = "DB"


class SearchRequest(CamelModel):
    """Search request accepted by the lead search and import endpoints."""
    keyword: str = ""
    title: str = ""
    department: str = ""
    seniority: str = ""
    company_name: str = ""
    company_domain: str = ""
    location: str = ""
    tech_includes: List[str] = Field(default_factory=list)
    page: int = DEFAULT_PAGE
    page_size: int = DEFAULT_PAGE_SIZE
    force_provider: bool = False

    def to_criteria(self, **overrides) -> LeadSearchCriteria:
        """Build repository/provider criteria, clamping paging to defaults."""
        values = {
            "keyword": self.keyword or "",
            "title": self.title or "",
            "department": self.department or "",
            "seniority": self.seniority or "",
            "company_name": self.company_name or "",
            "company_domain": self.company_domain or "",
            "location": self.location or "",
            "tech_includes": list(self.tech_includes or []),
            "page": clamp_page(self.page),
            "page_size": clamp_page_size(self.page_size),
            "force_provider": self.force_provider,
        }
        values.update(overrides)
        return LeadSearchCriteria(**values)


class SearchResult(CamelModel):
    """Lead search response with paging and cache hint."""
    items: List[LeadSchema] = Field(default_factory=list)
    page: int = DEFAULT_PAGE
    page_size: int = DEFAULT_PAGE_SIZE
    total: int = 0
    from_cache: bool = False  # True when served from the DB
    source: str = ""  # "DB", provider name, or joined names when aggregated


class ExportBatch(CamelModel, Generic[T]):
    """Export page with a hint for the next page to fetch."""
    items: List[T] = Field(default_factory=list)
    page: int = DEFAULT_PAGE
    batch_size: int = 10
    total: int = 0
    next_page: Optional[int] = None  # None once the last page was served
