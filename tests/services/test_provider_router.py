# tests/services/test_provider_router.py
"""
Tests for ProviderRouter and its selection strategies

Coverage:
- Configuration errors
- First-match ordering and short-circuit
- Source tagging (winner / first configured on empty)
- Aggregate strategy
"""

import pytest

from leadgen.exceptions import ConfigurationError
from leadgen.schemas import LeadSearchCriteria
from leadgen.services.provider_router import (
    AggregateStrategy,
    FirstMatchStrategy,
    ProviderRouter,
    create_strategy,
)


class TestConfiguration:

    def test_no_providers_is_fatal(self):
        with pytest.raises(ConfigurationError):
            ProviderRouter([])

    def test_unknown_strategy(self):
        with pytest.raises(ConfigurationError):
            create_strategy("round_robin")

    def test_strategy_names(self):
        assert isinstance(create_strategy("first_match"), FirstMatchStrategy)
        assert isinstance(create_strategy(" Aggregate "), AggregateStrategy)


class TestFirstMatch:

    @pytest.mark.asyncio
    async def test_first_non_empty_provider_wins(self, stub_provider_factory, lead_factory):
        first = stub_provider_factory("A", leads=[lead_factory(work_email="a@a.com")])
        second = stub_provider_factory("B", leads=[lead_factory(work_email="b@b.com")])
        router = ProviderRouter([first, second])

        page = await router.search(LeadSearchCriteria())

        assert first.calls == 1
        assert second.calls == 0
        assert page.items[0].contact.work_email == "a@a.com"
        # Router overrides the provider's own tagging
        assert page.source == "A"
        assert page.from_cache is False

    @pytest.mark.asyncio
    async def test_empty_provider_falls_through(self, stub_provider_factory, lead_factory):
        first = stub_provider_factory("A")
        second = stub_provider_factory("B", leads=[lead_factory()])
        third = stub_provider_factory("C", leads=[lead_factory()])
        router = ProviderRouter([first, second, third])

        page = await router.search(LeadSearchCriteria())

        assert (first.calls, second.calls, third.calls) == (1, 1, 0)
        assert page.source == "B"
        assert len(page.items) == 1

    @pytest.mark.asyncio
    async def test_all_empty_reports_first_configured(self, stub_provider_factory):
        x = stub_provider_factory("X")
        y = stub_provider_factory("Y")
        router = ProviderRouter([x, y])

        page = await router.search(LeadSearchCriteria(page=2, page_size=10))

        assert x.calls == 1 and y.calls == 1
        assert page.items == []
        assert page.total == 0
        assert page.source == "X"
        assert page.page == 2
        assert page.page_size == 10
        assert page.from_cache is False


class TestAggregate:

    @pytest.mark.asyncio
    async def test_combines_every_provider(self, stub_provider_factory, lead_factory):
        a = stub_provider_factory("A", leads=[lead_factory(work_email="a@a.com")])
        empty = stub_provider_factory("E")
        b = stub_provider_factory("B", leads=[lead_factory(work_email="b@b.com")])
        router = ProviderRouter([a, empty, b], strategy=AggregateStrategy())

        page = await router.search(LeadSearchCriteria())

        assert [lead.contact.work_email for lead in page.items] == ["a@a.com", "b@b.com"]
        assert page.total == 2
        assert page.source == "A+B"
        assert page.from_cache is False

    @pytest.mark.asyncio
    async def test_all_empty_reports_first_configured(self, stub_provider_factory):
        router = ProviderRouter(
            [stub_provider_factory("X"), stub_provider_factory("Y")],
            strategy=AggregateStrategy(),
        )

        page = await router.search(LeadSearchCriteria())

        assert page.source == "X"
        assert page.items == []


class TestCompanySearch:

    @pytest.mark.asyncio
    async def test_uses_primary_provider(self, stub_provider_factory):
        primary = stub_provider_factory("A")
        secondary = stub_provider_factory("B")
        router = ProviderRouter([primary, secondary])

        await router.search_companies(LeadSearchCriteria())

        assert primary.company_calls == 1
        assert secondary.company_calls == 0
