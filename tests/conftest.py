# tests/conftest.py
"""Shared fixtures: in-memory SQLite store, stub providers, sample leads."""

import os

# Settings are read at import time
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("APOLLO_API_KEY", "test-apollo-key")

from datetime import datetime, timedelta, timezone
from typing import List, Optional

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from leadgen.database import Base
from leadgen import models  # noqa: F401  (registers tables)
from leadgen.providers.base import LeadProvider
from leadgen.repository import SqlLeadRepository
from leadgen.schemas import (
    CompanyLiteSchema,
    CompanySchema,
    ContactSchema,
    LeadSchema,
    PagedResult,
    PersonSchema,
)


# ============================================================================
# DATABASE
# ============================================================================

@pytest_asyncio.fixture
async def db_session():
    """Fresh in-memory database per test"""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    Session = async_sessionmaker(engine, expire_on_commit=False, autoflush=False)
    async with Session() as session:
        yield session

    await engine.dispose()


@pytest_asyncio.fixture
async def repo(db_session):
    return SqlLeadRepository(db_session)


# ============================================================================
# PROVIDERS
# ============================================================================

class StubProvider(LeadProvider):
    """Provider returning canned pages and counting calls"""

    def __init__(
        self,
        name: str,
        leads: Optional[List[LeadSchema]] = None,
        companies: Optional[List[CompanySchema]] = None,
    ):
        self.name = name
        self.leads = leads or []
        self.companies = companies or []
        self.calls = 0
        self.company_calls = 0
        self.last_criteria = None

    async def search(self, criteria):
        self.calls += 1
        self.last_criteria = criteria
        return PagedResult[LeadSchema](
            items=list(self.leads),
            page=criteria.page,
            page_size=criteria.page_size,
            total=len(self.leads),
            from_cache=True,
            source=f"{self.name}-internal",
        )

    async def search_companies(self, criteria):
        self.company_calls += 1
        self.last_criteria = criteria
        return PagedResult[CompanySchema](
            items=list(self.companies),
            page=criteria.page,
            page_size=criteria.page_size,
            total=len(self.companies),
            from_cache=False,
            source=self.name,
        )


@pytest.fixture
def stub_provider_factory():
    return StubProvider


# ============================================================================
# SAMPLE DATA
# ============================================================================

def make_lead(
    lead_id: str = "",
    work_email: str = "john.doe@techcorp.com",
    first_name: str = "John",
    last_name: str = "Doe",
    title: str = "VP of Engineering",
    linkedin_url: str = "https://linkedin.com/in/johndoe",
    company_name: str = "TechCorp",
    company_domain: str = "techcorp.com",
    tech_stack: Optional[List[str]] = None,
    source: str = "Apollo",
    last_updated_utc: Optional[datetime] = None,
    first_seen_utc: Optional[datetime] = None,
) -> LeadSchema:
    return LeadSchema(
        id=lead_id,
        person=PersonSchema(
            first_name=first_name,
            last_name=last_name,
            title=title,
            department="Engineering",
            seniority="VP",
            linkedin_url=linkedin_url,
            location="San Francisco, CA",
            skills=["python", "leadership"],
        ),
        company=CompanyLiteSchema(
            name=company_name,
            domain=company_domain,
            industry="Software",
            size="201-500",
            tech_stack=tech_stack if tech_stack is not None else ["React", "AWS"],
        ),
        contact=ContactSchema(work_email=work_email, email_verified=bool(work_email)),
        source=source,
        is_enriched=True,
        provider_refs={"Apollo": "apollo-123"},
        last_updated_utc=last_updated_utc,
        first_seen_utc=first_seen_utc,
    )


@pytest.fixture
def sample_lead():
    return make_lead()


@pytest.fixture
def lead_factory():
    return make_lead


@pytest.fixture
def yesterday():
    return datetime.now(timezone.utc) - timedelta(days=1)


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: unit tests")
    config.addinivalue_line("markers", "integration: tests against the in-memory database")
