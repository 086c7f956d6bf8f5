"""
Upsert reconciliation for leads and companies.

Leads resolve identity in strict priority order:
1. explicit id
2. work email
3. LinkedIn URL + company domain (both may be empty)

Companies resolve identity by domain only.
"""

import logging
from typing import Dict, Iterable, List

from leadgen.exceptions import BulkUpsertError
from leadgen.models import Company, Lead
from leadgen.repository import LeadRepository, UpsertPlan, new_id
from leadgen.schemas import CompanySchema, LeadSchema
from leadgen.schemas.base import utcnow

logger = logging.getLogger(__name__)

LEAD_INSERT_ONLY = ("id", "first_seen_utc")
LEAD_MONOTONIC = ("last_updated_utc",)
COMPANY_INSERT_ONLY = ("id", "domain")


def _is_blank(value) -> bool:
    return value is None or not str(value).strip()


def lead_match(lead: LeadSchema) -> Dict[str, str]:
    """Match filter for the document this lead should merge into."""
    if not _is_blank(lead.id):
        return {"id": lead.id}
    if not _is_blank(lead.contact.work_email):
        return {"work_email": lead.contact.work_email}
    return {
        "linkedin_url": lead.person.linkedin_url or "",
        "company_domain": lead.company.domain or "",
    }


def plan_lead(lead: LeadSchema, now=None) -> UpsertPlan:
    """
    Build the upsert for one lead.

    The match is resolved before an id is assigned, so a lead without an id
    still merges by email or fingerprint. last_updated is written on every
    merge but never moves backwards; first_seen only when the document is
    created, so first_seen <= last_updated holds across merges.
    """
    match = lead_match(lead)
    now = now or utcnow()

    last_updated = lead.last_updated_utc or now
    first_seen = lead.first_seen_utc or last_updated
    if first_seen > last_updated:
        first_seen = last_updated

    document = Lead.document_from_schema(lead)
    document["id"] = lead.id if not _is_blank(lead.id) else new_id()
    document["last_updated_utc"] = last_updated
    document["first_seen_utc"] = first_seen

    set_fields = {k: v for k, v in document.items() if k not in LEAD_INSERT_ONLY}
    insert_fields = {k: document[k] for k in LEAD_INSERT_ONLY}
    return UpsertPlan(
        match=match,
        set_fields=set_fields,
        insert_fields=insert_fields,
        monotonic_fields=LEAD_MONOTONIC,
    )


def plan_company(company: CompanySchema) -> UpsertPlan:
    document = Company.document_from_schema(company)
    document["id"] = company.id if not _is_blank(company.id) else new_id()

    set_fields = {k: v for k, v in document.items() if k not in COMPANY_INSERT_ONLY}
    insert_fields = {k: document[k] for k in COMPANY_INSERT_ONLY}
    return UpsertPlan(match={"domain": company.domain}, set_fields=set_fields, insert_fields=insert_fields)


class UpsertReconciler:
    """Resolves identities and writes leads/companies as unordered bulk upserts."""

    def __init__(self, repo: LeadRepository):
        self.repo = repo

    async def upsert_leads(self, leads: Iterable[LeadSchema]) -> List[str]:
        """
        Insert or merge each lead; returns the stored document ids in input order.

        Raises BulkUpsertError after every document was attempted if any failed.
        """
        now = utcnow()
        plans = [plan_lead(lead, now) for lead in leads]
        if not plans:
            return []

        result = await self.repo.bulk_upsert_leads(plans)
        if result.failures:
            raise BulkUpsertError(result.written_ids, result.failures)

        logger.info(f"Upserted {len(result.ids)} leads")
        return result.ids

    async def upsert_companies(self, companies: Iterable[CompanySchema]) -> List[str]:
        plans = [plan_company(company) for company in companies]
        if not plans:
            return []

        result = await self.repo.bulk_upsert_companies(plans)
        if result.failures:
            raise BulkUpsertError(result.written_ids, result.failures)

        logger.info(f"Upserted {len(result.ids)} companies")
        return result.ids
