"""
Unified lead and company schemas.

A lead combines a person profile, a lightweight company snapshot and the
person's contact channels. These are the shapes shared by the repository,
the providers and the API.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import Field, computed_field, field_validator

from leadgen.schemas.base import CamelModel, ensure_utc


class PersonSchema(CamelModel):
    """Person core profile."""
    first_name: str = ""
    last_name: str = ""
    title: str = ""
    department: str = ""
    seniority: str = ""
    linkedin_url: str = Field(default="", alias="linkedInUrl")
    location: str = ""
    skills: List[str] = Field(default_factory=list)

    @computed_field
    @property
    def full_name(self) -> str:
        if not self.first_name.strip():
            return self.last_name
        return f"{self.first_name} {self.last_name}".strip()


class CompanyLiteSchema(CamelModel):
    """Company snapshot carried on a lead."""
    company_id: str = ""
    name: str = ""
    domain: str = ""
    industry: str = ""
    size: str = ""  # e.g. "51-200"
    annual_revenue_usd: Optional[float] = None
    hq_location: str = ""
    tech_stack: List[str] = Field(default_factory=list)
    linkedin_url: str = ""


class ContactSchema(CamelModel):
    """Contact channels for a person."""
    work_email: str = ""
    personal_email: str = ""
    direct_phone: str = ""
    mobile_phone: str = ""
    company_phone: str = ""
    twitter_url: str = ""
    github_url: str = ""
    email_verified: bool = False


class LeadSchema(CamelModel):
    """Unified lead (person + company snapshot + contact channels)."""
    id: str = Field(default="", alias="leadId")
    person: PersonSchema = Field(default_factory=PersonSchema)
    company: CompanyLiteSchema = Field(default_factory=CompanyLiteSchema)
    contact: ContactSchema = Field(default_factory=ContactSchema)

    source: str = "DB"
    first_seen_utc: Optional[datetime] = None
    last_updated_utc: Optional[datetime] = None
    is_enriched: bool = False
    provider_refs: Dict[str, str] = Field(default_factory=dict)  # provider -> external id

    @field_validator("first_seen_utc", "last_updated_utc")
    @classmethod
    def _utc(cls, value):
        return ensure_utc(value)

    @field_validator("id", "source", mode="before")
    @classmethod
    def _none_to_default(cls, value, info):
        if value is None:
            return "DB" if info.field_name == "source" else ""
        return value


class CompanySchema(CamelModel):
    """Full company document, keyed by domain."""
    id: str = Field(default="", alias="companyId")
    name: str = ""
    domain: str = ""
    industry: str = ""
    size: str = ""
    annual_revenue_usd: Optional[float] = None
    hq_location: str = ""
    tech_stack: List[str] = Field(default_factory=list)
    linkedin_url: str = ""

    # Raw provider records kept for audit; never validated
    provider_payloads: Dict[str, Any] = Field(default_factory=dict)
