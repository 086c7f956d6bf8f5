"""
Apollo.io provider.

1. People search   -> unified leads
2. Company search  -> company documents
"""

import logging
from typing import Any, Dict, List, Optional

import httpx

from leadgen.exceptions import ConfigurationError
from leadgen.providers.base import (
    LeadProvider,
    blank_to_none,
    provider_page_size,
)
from leadgen.schemas import (
    CompanyLiteSchema,
    CompanySchema,
    ContactSchema,
    LeadSchema,
    LeadSearchCriteria,
    PagedResult,
    PersonSchema,
)
from leadgen.schemas.search import clamp_page

logger = logging.getLogger(__name__)


def _first_of_type(entries: Optional[List[Dict[str, Any]]], entry_type: str, key: str) -> str:
    """Value of `key` on the first entry whose declared type matches."""
    for entry in entries or []:
        if entry.get("type") == entry_type:
            return entry.get(key) or ""
    return ""


class ApolloLeadProvider(LeadProvider):
    """Apollo.io integration for people and company search"""

    name = "Apollo"

    PEOPLE_PATH = "v1/people/search"
    COMPANIES_PATH = "v1/companies/search"

    def __init__(self, base_url: str, api_key: str, timeout: float = 30.0):
        if not base_url or not base_url.strip():
            raise ConfigurationError("Apollo base URL is required.")
        if not api_key or not api_key.strip():
            raise ConfigurationError("Apollo API key is required.")

        self.base_url = base_url if base_url.endswith("/") else base_url + "/"
        self.timeout = timeout
        self.headers = {
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
            "Cache-Control": "no-cache",
        }

    # ========================================================================
    # PAYLOADS
    # ========================================================================

    @staticmethod
    def _drop_empty(payload: Dict[str, Any]) -> Dict[str, Any]:
        return {key: value for key, value in payload.items() if value is not None}

    def people_payload(self, criteria: LeadSearchCriteria) -> Dict[str, Any]:
        return self._drop_empty({
            "query": blank_to_none(criteria.keyword),
            "title": blank_to_none(criteria.title),
            "department": blank_to_none(criteria.department),
            "seniority": blank_to_none(criteria.seniority),
            "company": blank_to_none(criteria.company_name),
            "domain": blank_to_none(criteria.company_domain),
            "location": blank_to_none(criteria.location),
            "tech_includes": list(criteria.tech_includes) if criteria.tech_includes else None,
            "page": clamp_page(criteria.page),
            "page_size": provider_page_size(criteria.page_size),
        })

    def companies_payload(self, criteria: LeadSearchCriteria) -> Dict[str, Any]:
        return self._drop_empty({
            "query": blank_to_none(criteria.keyword),
            "domain": blank_to_none(criteria.company_domain),
            "location": blank_to_none(criteria.location),
            "tech_includes": list(criteria.tech_includes) if criteria.tech_includes else None,
            "page": clamp_page(criteria.page),
            "page_size": provider_page_size(criteria.page_size),
        })

    async def _post(self, path: str, payload: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """POST to Apollo; None on a non-success status."""
        async with httpx.AsyncClient(base_url=self.base_url, timeout=self.timeout) as client:
            response = await client.post(path, json=payload, headers=self.headers)

        if not response.is_success:
            logger.warning(f"Apollo {path} returned {response.status_code}")
            return None

        return response.json() or {}

    # ========================================================================
    # PEOPLE
    # ========================================================================

    async def search(self, criteria: LeadSearchCriteria) -> PagedResult[LeadSchema]:
        payload = self.people_payload(criteria)

        try:
            data = await self._post(self.PEOPLE_PATH, payload)
            if data is None:
                return self.empty_leads(criteria)

            items = [self.person_to_lead(person) for person in data.get("results") or []]

            logger.info(f"Apollo found {len(items)} people (total: {data.get('total', 0)})")

            return PagedResult[LeadSchema](
                items=items,
                page=payload["page"],
                page_size=payload["page_size"],
                total=int(data.get("total") or 0),
                from_cache=False,
                source=self.name,
            )
        except Exception as e:
            logger.error(f"Apollo people search error: {e}")
            return self.empty_leads(criteria)

    # ========================================================================
    # COMPANIES
    # ========================================================================

    async def search_companies(self, criteria: LeadSearchCriteria) -> PagedResult[CompanySchema]:
        payload = self.companies_payload(criteria)

        try:
            data = await self._post(self.COMPANIES_PATH, payload)
            if data is None:
                return self.empty_companies(criteria)

            items = [self.company_to_document(company) for company in data.get("results") or []]

            logger.info(f"Apollo found {len(items)} companies (total: {data.get('total', 0)})")

            return PagedResult[CompanySchema](
                items=items,
                page=payload["page"],
                page_size=payload["page_size"],
                total=int(data.get("total") or 0),
                from_cache=False,
                source=self.name,
            )
        except Exception as e:
            logger.error(f"Apollo company search error: {e}")
            return self.empty_companies(criteria)

    # ========================================================================
    # MAPPING
    # ========================================================================

    def person_to_lead(self, person: Dict[str, Any]) -> LeadSchema:
        """
        Convert an Apollo person into a unified lead.

        Apollo person structure:
        {
            "id": "abc123",
            "first_name": "John",
            "last_name": "Smith",
            "title": "VP Engineering",
            "emails": [{"type": "work", "address": "...", "verified": true}],
            "phones": [{"type": "mobile", "number": "+1..."}],
            "socials": {"twitter": "...", "github": "..."},
            "company": {"name": "Shopify", "domain": "shopify.com", ...}
        }
        """
        company = person.get("company") or {}
        emails = person.get("emails") or []
        phones = person.get("phones") or []
        socials = person.get("socials") or {}

        lead = LeadSchema(
            person=PersonSchema(
                first_name=person.get("first_name") or "",
                last_name=person.get("last_name") or "",
                title=person.get("title") or "",
                department=person.get("department") or "",
                seniority=person.get("seniority") or "",
                linkedin_url=person.get("linkedin_url") or "",
                location=person.get("location") or "",
                skills=person.get("skills") or [],
            ),
            company=CompanyLiteSchema(
                name=company.get("name") or "",
                domain=company.get("domain") or "",
                industry=company.get("industry") or "",
                size=company.get("size") or "",
                annual_revenue_usd=company.get("revenue_usd"),
                hq_location=company.get("hq_location") or "",
                tech_stack=company.get("tech_stack") or [],
                linkedin_url=company.get("linkedin_url") or "",
            ),
            contact=ContactSchema(
                work_email=_first_of_type(emails, "work", "address"),
                personal_email=_first_of_type(emails, "personal", "address"),
                direct_phone=_first_of_type(phones, "direct", "number"),
                mobile_phone=_first_of_type(phones, "mobile", "number"),
                company_phone=_first_of_type(phones, "company", "number"),
                twitter_url=socials.get("twitter") or "",
                github_url=socials.get("github") or "",
                email_verified=any(
                    e.get("type") == "work" and bool(e.get("verified")) for e in emails
                ),
            ),
            source=self.name,
            is_enriched=True,
        )

        external_id = person.get("id")
        if external_id and str(external_id).strip():
            lead.provider_refs[self.name] = str(external_id)

        return lead

    def company_to_document(self, company: Dict[str, Any]) -> CompanySchema:
        """Convert an Apollo company; the raw record is kept for reference."""
        return CompanySchema(
            name=company.get("name") or "",
            domain=company.get("domain") or "",
            industry=company.get("industry") or "",
            size=company.get("size") or "",
            annual_revenue_usd=company.get("revenue_usd"),
            hq_location=company.get("hq_location") or "",
            tech_stack=company.get("tech_stack") or [],
            linkedin_url=company.get("linkedin_url") or "",
            provider_payloads={self.name: company},
        )


def create_apollo_provider(settings) -> ApolloLeadProvider:
    """Factory function"""
    return ApolloLeadProvider(
        base_url=settings.APOLLO_BASE_URL,
        api_key=settings.APOLLO_API_KEY or "",
        timeout=settings.PROVIDER_TIMEOUT_SECONDS,
    )
