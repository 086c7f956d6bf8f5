"""
SQLAlchemy ORM models.

Leads are stored flat (person, company snapshot and contact columns side by
side) so the search filters can run as plain column predicates. List-valued
and map-valued attributes live in JSON columns.
"""

from sqlalchemy import (
    Column, String, Boolean, Float, Text, DateTime, JSON, Index, UniqueConstraint
)
from sqlalchemy.sql import func

from leadgen.database import Base
from leadgen.schemas import (
    CompanyLiteSchema,
    CompanySchema,
    ContactSchema,
    EngagementLogSchema,
    LeadSchema,
    PersonSchema,
    ProspectListSchema,
    SequenceSchema,
    SequenceStepSchema,
)


# ============================================================================
# LEADS
# ============================================================================

class Lead(Base):
    """Unified lead document (person + company snapshot + contact channels)."""
    __tablename__ = "leads"

    id = Column(String(64), primary_key=True)

    # Person
    first_name = Column(String(255), nullable=False, default="")
    last_name = Column(String(255), nullable=False, default="")
    title = Column(String(255), nullable=False, default="")
    department = Column(String(255), nullable=False, default="")
    seniority = Column(String(100), nullable=False, default="")
    linkedin_url = Column(String(500), nullable=False, default="")
    location = Column(String(255), nullable=False, default="")
    skills = Column(JSON, nullable=False, default=list)

    # Company snapshot
    company_ref_id = Column(String(64), nullable=False, default="")
    company_name = Column(String(255), nullable=False, default="")
    company_domain = Column(String(255), nullable=False, default="")
    company_industry = Column(String(255), nullable=False, default="")
    company_size = Column(String(50), nullable=False, default="")
    company_revenue_usd = Column(Float, nullable=True)
    company_hq_location = Column(String(255), nullable=False, default="")
    company_tech_stack = Column(JSON, nullable=False, default=list)
    company_linkedin_url = Column(String(500), nullable=False, default="")

    # Contact
    work_email = Column(String(255), nullable=False, default="")
    personal_email = Column(String(255), nullable=False, default="")
    direct_phone = Column(String(50), nullable=False, default="")
    mobile_phone = Column(String(50), nullable=False, default="")
    company_phone = Column(String(50), nullable=False, default="")
    twitter_url = Column(String(500), nullable=False, default="")
    github_url = Column(String(500), nullable=False, default="")
    email_verified = Column(Boolean, nullable=False, default=False)

    # Provenance
    source = Column(String(100), nullable=False, default="DB")
    first_seen_utc = Column(DateTime(timezone=True))
    last_updated_utc = Column(DateTime(timezone=True), index=True)
    is_enriched = Column(Boolean, nullable=False, default=False)
    provider_refs = Column(JSON, nullable=False, default=dict)

    __table_args__ = (
        Index("idx_leads_work_email", "work_email"),
        Index("idx_leads_linkedin_domain", "linkedin_url", "company_domain"),
    )

    @staticmethod
    def document_from_schema(lead: LeadSchema) -> dict:
        """Flatten a lead into column values (id and timestamps included)."""
        person, company, contact = lead.person, lead.company, lead.contact
        return {
            "id": lead.id,
            "first_name": person.first_name,
            "last_name": person.last_name,
            "title": person.title,
            "department": person.department,
            "seniority": person.seniority,
            "linkedin_url": person.linkedin_url,
            "location": person.location,
            "skills": list(person.skills),
            "company_ref_id": company.company_id,
            "company_name": company.name,
            "company_domain": company.domain,
            "company_industry": company.industry,
            "company_size": company.size,
            "company_revenue_usd": company.annual_revenue_usd,
            "company_hq_location": company.hq_location,
            "company_tech_stack": list(company.tech_stack),
            "company_linkedin_url": company.linkedin_url,
            "work_email": contact.work_email,
            "personal_email": contact.personal_email,
            "direct_phone": contact.direct_phone,
            "mobile_phone": contact.mobile_phone,
            "company_phone": contact.company_phone,
            "twitter_url": contact.twitter_url,
            "github_url": contact.github_url,
            "email_verified": contact.email_verified,
            "source": lead.source,
            "first_seen_utc": lead.first_seen_utc,
            "last_updated_utc": lead.last_updated_utc,
            "is_enriched": lead.is_enriched,
            "provider_refs": dict(lead.provider_refs),
        }

    def to_schema(self) -> LeadSchema:
        return LeadSchema(
            id=self.id,
            person=PersonSchema(
                first_name=self.first_name or "",
                last_name=self.last_name or "",
                title=self.title or "",
                department=self.department or "",
                seniority=self.seniority or "",
                linkedin_url=self.linkedin_url or "",
                location=self.location or "",
                skills=self.skills or [],
            ),
            company=CompanyLiteSchema(
                company_id=self.company_ref_id or "",
                name=self.company_name or "",
                domain=self.company_domain or "",
                industry=self.company_industry or "",
                size=self.company_size or "",
                annual_revenue_usd=self.company_revenue_usd,
                hq_location=self.company_hq_location or "",
                tech_stack=self.company_tech_stack or [],
                linkedin_url=self.company_linkedin_url or "",
            ),
            contact=ContactSchema(
                work_email=self.work_email or "",
                personal_email=self.personal_email or "",
                direct_phone=self.direct_phone or "",
                mobile_phone=self.mobile_phone or "",
                company_phone=self.company_phone or "",
                twitter_url=self.twitter_url or "",
                github_url=self.github_url or "",
                email_verified=bool(self.email_verified),
            ),
            source=self.source or "DB",
            first_seen_utc=self.first_seen_utc,
            last_updated_utc=self.last_updated_utc,
            is_enriched=bool(self.is_enriched),
            provider_refs=self.provider_refs or {},
        )

    def __repr__(self):
        return f"<Lead(id={self.id}, work_email='{self.work_email}', source='{self.source}')>"


# ============================================================================
# COMPANIES
# ============================================================================

class Company(Base):
    """Full company document. Domain is the natural key."""
    __tablename__ = "companies"

    id = Column(String(64), primary_key=True)
    name = Column(String(255), nullable=False, default="")
    domain = Column(String(255), nullable=False)
    industry = Column(String(255), nullable=False, default="")
    size = Column(String(50), nullable=False, default="")
    annual_revenue_usd = Column(Float, nullable=True)
    hq_location = Column(String(255), nullable=False, default="")
    tech_stack = Column(JSON, nullable=False, default=list)
    linkedin_url = Column(String(500), nullable=False, default="")
    provider_payloads = Column(JSON, nullable=False, default=dict)

    __table_args__ = (
        UniqueConstraint("domain", name="uq_companies_domain"),
    )

    @staticmethod
    def document_from_schema(company: CompanySchema) -> dict:
        return {
            "id": company.id,
            "name": company.name,
            "domain": company.domain,
            "industry": company.industry,
            "size": company.size,
            "annual_revenue_usd": company.annual_revenue_usd,
            "hq_location": company.hq_location,
            "tech_stack": list(company.tech_stack),
            "linkedin_url": company.linkedin_url,
            "provider_payloads": dict(company.provider_payloads),
        }

    def to_schema(self) -> CompanySchema:
        return CompanySchema(
            id=self.id,
            name=self.name or "",
            domain=self.domain or "",
            industry=self.industry or "",
            size=self.size or "",
            annual_revenue_usd=self.annual_revenue_usd,
            hq_location=self.hq_location or "",
            tech_stack=self.tech_stack or [],
            linkedin_url=self.linkedin_url or "",
            provider_payloads=self.provider_payloads or {},
        )

    def __repr__(self):
        return f"<Company(id={self.id}, domain='{self.domain}')>"


# ============================================================================
# LISTS
# ============================================================================

class ProspectList(Base):
    """Named set of lead ids."""
    __tablename__ = "prospect_lists"

    id = Column(String(64), primary_key=True)
    name = Column(String(255), nullable=False)
    description = Column(Text)
    created_utc = Column(DateTime(timezone=True), server_default=func.now(), index=True)
    lead_ids = Column(JSON, nullable=False, default=list)

    def to_schema(self) -> ProspectListSchema:
        return ProspectListSchema(
            id=self.id,
            name=self.name,
            description=self.description,
            created_utc=self.created_utc,
            lead_ids=self.lead_ids or [],
        )


# ============================================================================
# SEQUENCES & ENGAGEMENT
# ============================================================================

class Sequence(Base):
    """Outreach template. Steps are stored in order as JSON."""
    __tablename__ = "sequences"

    id = Column(String(64), primary_key=True)
    name = Column(String(255), nullable=False)
    description = Column(Text)
    steps = Column(JSON, nullable=False, default=list)
    created_utc = Column(DateTime(timezone=True), server_default=func.now(), index=True)
    is_active = Column(Boolean, nullable=False, default=False)

    def to_schema(self) -> SequenceSchema:
        return SequenceSchema(
            id=self.id,
            name=self.name,
            description=self.description or "",
            steps=[SequenceStepSchema(**step) for step in (self.steps or [])],
            created_utc=self.created_utc,
            is_active=bool(self.is_active),
        )


class EngagementLog(Base):
    """Append-only record of one outreach touch."""
    __tablename__ = "engagement_logs"

    id = Column(String(64), primary_key=True)
    lead_id = Column(String(64), nullable=False, index=True)
    channel = Column(String(20), nullable=False, default="email")
    direction = Column(String(10), nullable=False, default="out")
    occurred_utc = Column(DateTime(timezone=True), nullable=False)
    subject = Column(String(500), nullable=False, default="")
    body_preview = Column(String(200), nullable=False, default="")
    status = Column(String(20), nullable=False, default="sent")
    provider_ref = Column(String(255))

    def to_schema(self) -> EngagementLogSchema:
        return EngagementLogSchema(
            id=self.id,
            lead_id=self.lead_id,
            channel=self.channel,
            direction=self.direction,
            occurred_utc=self.occurred_utc,
            subject=self.subject,
            body_preview=self.body_preview,
            status=self.status,
            provider_ref=self.provider_ref,
        )
