# tests/providers/test_apollo_provider.py
"""
Tests for ApolloLeadProvider

Coverage:
- Request payload normalization (blank filters, paging clamps)
- Person -> lead mapping (emails, phones, verification, provider refs)
- Company mapping
- Failure degradation (status, transport, malformed body)
- Configuration errors
"""

from contextlib import contextmanager
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from leadgen.exceptions import ConfigurationError
from leadgen.providers.apollo import ApolloLeadProvider
from leadgen.schemas import LeadSearchCriteria

BASE_URL = "https://apollo.test/"


@contextmanager
def mock_http(response=None, error=None):
    """Patch httpx.AsyncClient inside the provider; yields the client mock."""
    client = MagicMock()
    client.post = AsyncMock(return_value=response, side_effect=error)
    with patch("leadgen.providers.apollo.httpx.AsyncClient") as client_cls:
        client_cls.return_value.__aenter__.return_value = client
        yield client


@pytest.fixture
def provider():
    return ApolloLeadProvider(base_url=BASE_URL, api_key="secret")


@pytest.fixture
def apollo_person():
    return {
        "id": "ap-42",
        "first_name": "Jane",
        "last_name": "Smith",
        "title": "Head of Data",
        "department": "Engineering",
        "seniority": "Director",
        "linkedin_url": "https://linkedin.com/in/janesmith",
        "location": "Austin, TX",
        "skills": ["sql", "spark"],
        "emails": [
            {"type": "personal", "address": "jane@gmail.com", "verified": True},
            {"type": "work", "address": "jane@shopify.com", "verified": True},
            {"type": "work", "address": "j.smith@shopify.com", "verified": False},
        ],
        "phones": [
            {"type": "mobile", "number": "+1-555-0101"},
            {"type": "direct", "number": "+1-555-0102"},
        ],
        "socials": {"twitter": "https://twitter.com/jane", "github": "https://github.com/jane"},
        "company": {
            "name": "Shopify",
            "domain": "shopify.com",
            "industry": "E-commerce",
            "size": "5001-10000",
            "revenue_usd": 5.6e9,
            "hq_location": "Ottawa, Canada",
            "tech_stack": ["Ruby", "React"],
            "linkedin_url": "https://linkedin.com/company/shopify",
        },
    }


class TestRequestPayload:

    def test_blank_filters_are_not_sent(self, provider):
        criteria = LeadSearchCriteria(
            keyword="  ",
            title="CTO",
            department="",
            location="\t",
            page=2,
            page_size=10,
        )

        payload = provider.people_payload(criteria)

        assert payload == {"title": "CTO", "page": 2, "page_size": 10}

    def test_page_size_capped_at_100(self, provider):
        payload = provider.people_payload(LeadSearchCriteria(page_size=500))
        assert payload["page_size"] == 100

    def test_non_positive_paging_clamped(self, provider):
        payload = provider.companies_payload(LeadSearchCriteria(page=0, page_size=0))
        assert payload["page"] == 1
        assert payload["page_size"] == 25

    def test_tech_includes_sent_only_when_present(self, provider):
        assert "tech_includes" not in provider.people_payload(LeadSearchCriteria())
        payload = provider.people_payload(LeadSearchCriteria(tech_includes=["AWS"]))
        assert payload["tech_includes"] == ["AWS"]


class TestPeopleSearch:

    @pytest.mark.asyncio
    async def test_maps_people_into_leads(self, provider, apollo_person):
        response = httpx.Response(200, json={"total": 57, "results": [apollo_person]})

        with mock_http(response) as client:
            page = await provider.search(LeadSearchCriteria(title="Head of Data", page_size=5))

        client.post.assert_awaited_once()
        assert client.post.call_args.args[0] == "v1/people/search"
        assert client.post.call_args.kwargs["json"] == {"title": "Head of Data", "page": 1, "page_size": 5}
        assert client.post.call_args.kwargs["headers"]["Authorization"] == "Bearer secret"

        assert page.total == 57
        assert page.from_cache is False
        assert page.source == "Apollo"
        assert len(page.items) == 1

        lead = page.items[0]
        assert lead.person.first_name == "Jane"
        assert lead.person.skills == ["sql", "spark"]
        assert lead.company.domain == "shopify.com"
        assert lead.company.annual_revenue_usd == 5.6e9
        assert lead.contact.work_email == "jane@shopify.com"
        assert lead.contact.personal_email == "jane@gmail.com"
        assert lead.contact.direct_phone == "+1-555-0102"
        assert lead.contact.mobile_phone == "+1-555-0101"
        assert lead.contact.company_phone == ""
        assert lead.contact.twitter_url == "https://twitter.com/jane"
        assert lead.contact.email_verified is True
        assert lead.provider_refs == {"Apollo": "ap-42"}
        assert lead.source == "Apollo"
        assert lead.is_enriched is True
        assert lead.id == ""

    @pytest.mark.asyncio
    async def test_client_uses_configured_endpoint(self, apollo_person):
        provider = ApolloLeadProvider(base_url="https://apollo.test", api_key="secret", timeout=5.0)

        with patch("leadgen.providers.apollo.httpx.AsyncClient") as client_cls:
            client_cls.return_value.__aenter__.return_value.post = AsyncMock(
                return_value=httpx.Response(200, json={"results": []})
            )
            await provider.search(LeadSearchCriteria())

        client_cls.assert_called_once_with(base_url=BASE_URL, timeout=5.0)

    def test_unverified_work_email_is_not_verified(self, provider):
        person = {
            "emails": [
                {"type": "work", "address": "a@x.com", "verified": False},
                {"type": "personal", "address": "a@gmail.com", "verified": True},
            ]
        }
        lead = provider.person_to_lead(person)
        assert lead.contact.email_verified is False

    def test_blank_external_id_not_recorded(self, provider):
        lead = provider.person_to_lead({"id": "   ", "first_name": "No"})
        assert lead.provider_refs == {}

    @pytest.mark.asyncio
    async def test_non_success_status_returns_empty(self, provider):
        with mock_http(httpx.Response(503, text="busy")):
            page = await provider.search(LeadSearchCriteria(page=3, page_size=10))

        assert page.items == []
        assert page.total == 0
        assert page.page == 3
        assert page.from_cache is False
        assert page.source == "Apollo"

    @pytest.mark.asyncio
    async def test_transport_error_returns_empty(self, provider):
        with mock_http(error=httpx.ConnectError("connection refused")):
            page = await provider.search(LeadSearchCriteria())

        assert page.items == []
        assert page.source == "Apollo"

    @pytest.mark.asyncio
    async def test_malformed_body_returns_empty(self, provider):
        with mock_http(httpx.Response(200, text="<html>oops</html>")):
            page = await provider.search(LeadSearchCriteria())

        assert page.items == []
        assert page.total == 0


class TestCompanySearch:

    @pytest.mark.asyncio
    async def test_maps_companies_and_keeps_payload(self, provider):
        raw = {"name": "Acme", "domain": "acme.io", "tech_stack": ["Go"], "size": "11-50"}
        response = httpx.Response(200, json={"total": 1, "results": [raw]})

        with mock_http(response) as client:
            page = await provider.search_companies(
                LeadSearchCriteria(keyword="acme", title="ignored for companies")
            )

        assert client.post.call_args.args[0] == "v1/companies/search"
        assert client.post.call_args.kwargs["json"] == {"query": "acme", "page": 1, "page_size": 25}

        company = page.items[0]
        assert company.domain == "acme.io"
        assert company.tech_stack == ["Go"]
        assert company.provider_payloads == {"Apollo": raw}
        assert page.source == "Apollo"

    @pytest.mark.asyncio
    async def test_failure_returns_empty(self, provider):
        with mock_http(httpx.Response(401)):
            page = await provider.search_companies(LeadSearchCriteria())

        assert page.items == []
        assert page.source == "Apollo"


class TestConfiguration:

    def test_missing_api_key(self):
        with pytest.raises(ConfigurationError):
            ApolloLeadProvider(base_url=BASE_URL, api_key="  ")

    def test_missing_base_url(self):
        with pytest.raises(ConfigurationError):
            ApolloLeadProvider(base_url="", api_key="secret")
