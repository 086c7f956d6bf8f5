"""
Routes outbound searches to one or more providers.

The router owns the ordered provider list; how results are picked from it is
a pluggable selection strategy:

- FirstMatchStrategy: first provider with a non-empty page wins (default)
- AggregateStrategy: every provider is called and the pages are combined
"""

import logging
from abc import ABC, abstractmethod
from typing import List, Sequence

from leadgen.exceptions import ConfigurationError
from leadgen.providers.base import LeadProvider
from leadgen.schemas import CompanySchema, LeadSchema, LeadSearchCriteria, PagedResult

logger = logging.getLogger(__name__)


class SelectionStrategy(ABC):
    """Decides which provider results a router search returns."""

    @abstractmethod
    async def select(
        self,
        providers: Sequence[LeadProvider],
        criteria: LeadSearchCriteria,
    ) -> PagedResult[LeadSchema]:
        """Return the winning page, or an empty page with 0 items."""


class FirstMatchStrategy(SelectionStrategy):
    """Try providers in order; the first non-empty page wins."""

    async def select(self, providers, criteria):
        for provider in providers:
            page = await provider.search(criteria)
            if page.items:
                # Router-level traceability overrides whatever the provider set
                page.from_cache = False
                page.source = provider.name
                return page

            logger.info(f"Provider '{provider.name}' returned no results, trying next")

        return PagedResult[LeadSchema](items=[], total=0)


class AggregateStrategy(SelectionStrategy):
    """Call every provider and concatenate their pages in provider order."""

    async def select(self, providers, criteria):
        items: List[LeadSchema] = []
        total = 0
        contributors = []

        for provider in providers:
            page = await provider.search(criteria)
            if page.items:
                items.extend(page.items)
                total += page.total
                contributors.append(provider.name)

        return PagedResult[LeadSchema](
            items=items,
            page=criteria.page,
            page_size=criteria.page_size,
            total=total,
            from_cache=False,
            source="+".join(contributors),
        )


STRATEGIES = {
    "first_match": FirstMatchStrategy,
    "aggregate": AggregateStrategy,
}


def create_strategy(name: str) -> SelectionStrategy:
    try:
        return STRATEGIES[(name or "first_match").strip().lower()]()
    except KeyError:
        raise ConfigurationError(f"Unknown provider strategy: {name}")


class ProviderRouter:
    """Ordered providers plus a selection strategy."""

    def __init__(self, providers: Sequence[LeadProvider], strategy: SelectionStrategy = None):
        self.providers = list(providers or [])
        if not self.providers:
            raise ConfigurationError("No lead providers registered.")
        self.strategy = strategy or FirstMatchStrategy()

    @property
    def primary(self) -> LeadProvider:
        return self.providers[0]

    async def search(self, criteria: LeadSearchCriteria) -> PagedResult[LeadSchema]:
        page = await self.strategy.select(self.providers, criteria)
        if page.items:
            return page

        # Nothing anywhere: report the first configured provider, not the last tried
        logger.info(f"No provider returned results; reporting '{self.primary.name}'")
        return PagedResult[LeadSchema](
            items=[],
            page=criteria.page,
            page_size=criteria.page_size,
            total=0,
            from_cache=False,
            source=self.primary.name,
        )

    async def search_companies(self, criteria: LeadSearchCriteria) -> PagedResult[CompanySchema]:
        """Company search always goes to the primary provider."""
        return await self.primary.search_companies(criteria)
