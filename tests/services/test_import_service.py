# tests/services/test_import_service.py
"""Tests for ImportService."""

import pytest

from leadgen.schemas import CompanySchema, SearchRequest
from leadgen.services.import_service import ImportService
from leadgen.services.provider_router import ProviderRouter

pytestmark = pytest.mark.integration


class TestImportPeople:

    @pytest.mark.asyncio
    async def test_always_hits_provider(self, repo, stub_provider_factory, lead_factory):
        provider = stub_provider_factory(
            "Apollo",
            leads=[lead_factory(work_email="a@x.com"), lead_factory(work_email="b@x.com")],
        )
        service = ImportService(repo, ProviderRouter([provider]))

        first = await service.import_people(SearchRequest(title="VP"))
        again = await service.import_people(SearchRequest(title="VP"))

        assert provider.calls == 2
        assert provider.last_criteria.force_provider is True
        assert first == {"ok": True, "imported": 2, "source": "Apollo"}
        assert again["imported"] == 2

        # Re-import merged into the same documents
        stored = await repo.search_leads(SearchRequest().to_criteria())
        assert stored.total == 2

    @pytest.mark.asyncio
    async def test_nothing_found(self, repo, stub_provider_factory):
        service = ImportService(repo, ProviderRouter([stub_provider_factory("Apollo")]))

        result = await service.import_people(SearchRequest(keyword="ghost"))

        assert result == {"ok": True, "imported": 0, "source": "Apollo"}


class TestImportCompanies:

    @pytest.mark.asyncio
    async def test_person_filters_are_cleared(self, repo, stub_provider_factory):
        provider = stub_provider_factory(
            "Apollo",
            companies=[
                CompanySchema(name="Acme", domain="acme.io"),
                CompanySchema(name="Beta", domain="beta.dev"),
            ],
        )
        service = ImportService(repo, ProviderRouter([provider]))

        result = await service.import_companies(SearchRequest(
            keyword="saas", title="CTO", department="Eng", seniority="C", company_name="Acme",
            location="Berlin",
        ))

        criteria = provider.last_criteria
        assert (criteria.title, criteria.department, criteria.seniority, criteria.company_name) == (
            "", "", "", ""
        )
        assert criteria.keyword == "saas"
        assert criteria.location == "Berlin"
        assert result == {"ok": True, "imported": 2, "source": "Apollo"}
        assert (await repo.get_company_by_domain("beta.dev")).name == "Beta"
