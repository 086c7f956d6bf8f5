"""
Storage port for leads, companies, lists, sequences and engagement logs.

`LeadRepository` is the boundary the services depend on. `SqlLeadRepository`
implements it over an async SQLAlchemy session.
"""

import logging
import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Tuple, Type

from sqlalchemy import and_, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from leadgen.models import Company, EngagementLog, Lead, ProspectList, Sequence
from leadgen.schemas import (
    CompanySchema,
    EngagementLogSchema,
    LeadSchema,
    LeadSearchCriteria,
    PagedResult,
    ProspectListSchema,
    SequenceSchema,
)
from leadgen.schemas.base import ensure_utc, utcnow

logger = logging.getLogger(__name__)


def new_id() -> str:
    """Opaque document id."""
    return uuid.uuid4().hex


def latest(stored, incoming):
    """Later of two timestamps; None loses."""
    stored, incoming = ensure_utc(stored), ensure_utc(incoming)
    if stored is None or incoming is None:
        return incoming or stored
    return max(stored, incoming)


def json_array_contains(column, value: str, dialect_name: str):
    """
    EXISTS over the elements of a JSON array column, compared as text.

    Works on the decoded elements, so escaping in the stored JSON text
    (non-ASCII, quotes, backslashes) does not matter.
    """
    if dialect_name == "postgresql":
        elements = func.json_array_elements_text(column).table_valued("value")
    else:
        elements = func.json_each(column).table_valued("value")
    return select(elements.c.value).where(elements.c.value == value).exists()


@dataclass
class UpsertPlan:
    """
    One document of a bulk upsert.

    `match` selects the existing document. `set_fields` are written on both
    insert and update; `insert_fields` only when the document is created.
    On update, `monotonic_fields` keep the later of the stored and incoming
    timestamps, so they never move backwards.
    """
    match: Dict[str, Any]
    set_fields: Dict[str, Any]
    insert_fields: Dict[str, Any] = field(default_factory=dict)
    monotonic_fields: Tuple[str, ...] = ()


@dataclass
class BulkWriteResult:
    """Per-position ids (None where the write failed) and failure messages."""
    ids: List[Optional[str]] = field(default_factory=list)
    failures: Dict[int, str] = field(default_factory=dict)

    @property
    def written_ids(self) -> List[str]:
        return [doc_id for doc_id in self.ids if doc_id is not None]


class LeadRepository(ABC):
    """Unified storage boundary used by every service."""

    # -------- LEADS --------

    @abstractmethod
    async def search_leads(self, criteria: LeadSearchCriteria) -> PagedResult[LeadSchema]:
        """Filtered page of leads, most recently updated first."""

    @abstractmethod
    async def get_lead_by_id(self, lead_id: str) -> Optional[LeadSchema]:
        pass

    @abstractmethod
    async def bulk_upsert_leads(self, plans: List[UpsertPlan]) -> BulkWriteResult:
        """Unordered bulk upsert; each document is written independently."""

    # -------- COMPANIES --------

    @abstractmethod
    async def get_company_by_domain(self, domain: str) -> Optional[CompanySchema]:
        pass

    @abstractmethod
    async def bulk_upsert_companies(self, plans: List[UpsertPlan]) -> BulkWriteResult:
        pass

    @abstractmethod
    async def get_companies(self, page: int, page_size: int) -> PagedResult[CompanySchema]:
        pass

    # -------- LISTS --------

    @abstractmethod
    async def create_list(self, name: str, description: Optional[str]) -> str:
        pass

    @abstractmethod
    async def add_leads_to_list(self, list_id: str, lead_ids: Iterable[str]) -> None:
        pass

    @abstractmethod
    async def remove_leads_from_list(self, list_id: str, lead_ids: Iterable[str]) -> None:
        pass

    @abstractmethod
    async def get_list_by_id(self, list_id: str) -> Optional[ProspectListSchema]:
        pass

    @abstractmethod
    async def get_lists(self, page: int, page_size: int) -> PagedResult[ProspectListSchema]:
        pass

    # -------- SEQUENCES --------

    @abstractmethod
    async def create_sequence(self, sequence: SequenceSchema) -> str:
        pass

    @abstractmethod
    async def get_sequence(self, sequence_id: str) -> Optional[SequenceSchema]:
        pass

    @abstractmethod
    async def get_sequences(self, page: int, page_size: int) -> PagedResult[SequenceSchema]:
        pass

    # -------- ENGAGEMENT LOGS --------

    @abstractmethod
    async def log_engagements(self, logs: List[EngagementLogSchema]) -> List[str]:
        pass


class SqlLeadRepository(LeadRepository):
    """LeadRepository over an async SQLAlchemy session."""

    def __init__(self, db: AsyncSession):
        self.db = db

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    async def _page(self, query, model_schema, page: int, page_size: int) -> PagedResult:
        count_query = select(func.count()).select_from(query.subquery())
        total = (await self.db.execute(count_query)).scalar() or 0

        result = await self.db.execute(
            query.offset((page - 1) * page_size).limit(page_size)
        )
        items = [row.to_schema() for row in result.scalars().all()]

        return PagedResult[model_schema](
            items=items,
            page=page,
            page_size=page_size,
            total=total,
            from_cache=True,
            source="DB",
        )

    async def _bulk_upsert(self, model: Type, plans: List[UpsertPlan]) -> BulkWriteResult:
        """
        Apply each plan in its own transaction.

        A failing document is rolled back and recorded; the rest still commit.
        """
        result = BulkWriteResult()

        for position, plan in enumerate(plans):
            try:
                doc_id = await self._upsert_one(model, plan)
                await self.db.commit()
                result.ids.append(doc_id)
            except Exception as e:
                await self.db.rollback()
                logger.warning(
                    f"Upsert into {model.__tablename__} failed at position {position}: {e}"
                )
                result.ids.append(None)
                result.failures[position] = str(e)

        return result

    async def _upsert_one(self, model: Type, plan: UpsertPlan) -> str:
        conditions = [getattr(model, column) == value for column, value in plan.match.items()]
        query = select(model).where(and_(*conditions)).limit(1).with_for_update()
        existing = (await self.db.execute(query)).scalars().first()

        if existing is None:
            row = model(**{**plan.match, **plan.set_fields, **plan.insert_fields})
            self.db.add(row)
            await self.db.flush()
            return row.id

        for column, value in plan.set_fields.items():
            if column in plan.monotonic_fields:
                value = latest(getattr(existing, column), value)
            setattr(existing, column, value)
        await self.db.flush()
        return existing.id

    # ------------------------------------------------------------------
    # Leads
    # ------------------------------------------------------------------

    def _lead_conditions(self, criteria: LeadSearchCriteria) -> list:
        conditions = []

        keyword = (criteria.keyword or "").strip()
        if keyword:
            conditions.append(or_(
                Lead.first_name.icontains(keyword, autoescape=True),
                Lead.last_name.icontains(keyword, autoescape=True),
                Lead.title.icontains(keyword, autoescape=True),
                Lead.company_name.icontains(keyword, autoescape=True),
                Lead.company_domain.icontains(keyword, autoescape=True),
            ))

        partial_filters = (
            (Lead.title, criteria.title),
            (Lead.department, criteria.department),
            (Lead.seniority, criteria.seniority),
            (Lead.company_name, criteria.company_name),
            (Lead.location, criteria.location),
        )
        for column, value in partial_filters:
            if value and value.strip():
                conditions.append(column.icontains(value.strip(), autoescape=True))

        if criteria.company_domain and criteria.company_domain.strip():
            conditions.append(Lead.company_domain == criteria.company_domain.strip())

        # Every requested tag must appear in the stored JSON array
        dialect_name = self.db.get_bind().dialect.name
        for tag in criteria.tech_includes or []:
            if tag and tag.strip():
                conditions.append(
                    json_array_contains(Lead.company_tech_stack, tag.strip(), dialect_name)
                )

        return conditions

    async def search_leads(self, criteria: LeadSearchCriteria) -> PagedResult[LeadSchema]:
        query = select(Lead)
        conditions = self._lead_conditions(criteria)
        if conditions:
            query = query.where(and_(*conditions))
        query = query.order_by(Lead.last_updated_utc.desc(), Lead.id)

        return await self._page(query, LeadSchema, criteria.page, criteria.page_size)

    async def get_lead_by_id(self, lead_id: str) -> Optional[LeadSchema]:
        if not lead_id or not lead_id.strip():
            return None
        lead = await self.db.get(Lead, lead_id)
        return lead.to_schema() if lead else None

    async def bulk_upsert_leads(self, plans: List[UpsertPlan]) -> BulkWriteResult:
        return await self._bulk_upsert(Lead, plans)

    # ------------------------------------------------------------------
    # Companies
    # ------------------------------------------------------------------

    async def get_company_by_domain(self, domain: str) -> Optional[CompanySchema]:
        if not domain or not domain.strip():
            return None
        result = await self.db.execute(select(Company).where(Company.domain == domain))
        company = result.scalars().first()
        return company.to_schema() if company else None

    async def bulk_upsert_companies(self, plans: List[UpsertPlan]) -> BulkWriteResult:
        return await self._bulk_upsert(Company, plans)

    async def get_companies(self, page: int, page_size: int) -> PagedResult[CompanySchema]:
        query = select(Company).order_by(Company.name, Company.id)
        return await self._page(query, CompanySchema, page, page_size)

    # ------------------------------------------------------------------
    # Lists
    # ------------------------------------------------------------------

    async def create_list(self, name: str, description: Optional[str]) -> str:
        prospect_list = ProspectList(
            id=new_id(),
            name=name,
            description=description,
            created_utc=utcnow(),
            lead_ids=[],
        )
        self.db.add(prospect_list)
        await self.db.commit()
        return prospect_list.id

    async def _locked_list(self, list_id: str) -> Optional[ProspectList]:
        result = await self.db.execute(
            select(ProspectList).where(ProspectList.id == list_id).with_for_update()
        )
        return result.scalars().first()

    async def add_leads_to_list(self, list_id: str, lead_ids: Iterable[str]) -> None:
        prospect_list = await self._locked_list(list_id)
        if prospect_list is None:
            return

        members = list(prospect_list.lead_ids or [])
        for lead_id in lead_ids:
            if lead_id not in members:
                members.append(lead_id)

        # Reassign so the JSON column is flagged dirty
        prospect_list.lead_ids = members
        await self.db.commit()

    async def remove_leads_from_list(self, list_id: str, lead_ids: Iterable[str]) -> None:
        prospect_list = await self._locked_list(list_id)
        if prospect_list is None:
            return

        removed = set(lead_ids)
        prospect_list.lead_ids = [m for m in (prospect_list.lead_ids or []) if m not in removed]
        await self.db.commit()

    async def get_list_by_id(self, list_id: str) -> Optional[ProspectListSchema]:
        prospect_list = await self.db.get(ProspectList, list_id)
        return prospect_list.to_schema() if prospect_list else None

    async def get_lists(self, page: int, page_size: int) -> PagedResult[ProspectListSchema]:
        query = select(ProspectList).order_by(ProspectList.created_utc.desc(), ProspectList.id)
        return await self._page(query, ProspectListSchema, page, page_size)

    # ------------------------------------------------------------------
    # Sequences
    # ------------------------------------------------------------------

    async def create_sequence(self, sequence: SequenceSchema) -> str:
        sequence_id = sequence.id or new_id()
        row = Sequence(
            id=sequence_id,
            name=sequence.name,
            description=sequence.description,
            steps=[step.model_dump() for step in sequence.steps],
            created_utc=sequence.created_utc or utcnow(),
            is_active=sequence.is_active,
        )
        self.db.add(row)
        await self.db.commit()
        return sequence_id

    async def get_sequence(self, sequence_id: str) -> Optional[SequenceSchema]:
        sequence = await self.db.get(Sequence, sequence_id)
        return sequence.to_schema() if sequence else None

    async def get_sequences(self, page: int, page_size: int) -> PagedResult[SequenceSchema]:
        query = select(Sequence).order_by(Sequence.created_utc.desc(), Sequence.id)
        return await self._page(query, SequenceSchema, page, page_size)

    # ------------------------------------------------------------------
    # Engagement logs
    # ------------------------------------------------------------------

    async def log_engagements(self, logs: List[EngagementLogSchema]) -> List[str]:
        ids = []
        for log in logs:
            row = EngagementLog(
                id=log.id or new_id(),
                lead_id=log.lead_id,
                channel=log.channel,
                direction=log.direction,
                occurred_utc=log.occurred_utc or utcnow(),
                subject=log.subject,
                body_preview=log.body_preview,
                status=log.status,
                provider_ref=log.provider_ref,
            )
            self.db.add(row)
            ids.append(row.id)

        await self.db.commit()
        return ids
