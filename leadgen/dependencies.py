"""FastAPI dependencies wiring repositories, providers and services."""

from functools import lru_cache

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from leadgen.config import settings
from leadgen.database import get_db
from leadgen.providers import create_apollo_provider
from leadgen.repository import LeadRepository, SqlLeadRepository
from leadgen.services.export_service import ExportService
from leadgen.services.import_service import ImportService
from leadgen.services.lead_service import LeadService
from leadgen.services.list_service import ListService
from leadgen.services.provider_router import ProviderRouter, create_strategy
from leadgen.services.sequence_service import SequenceService


@lru_cache
def get_provider_router() -> ProviderRouter:
    """Process-wide router; providers are stateless between calls."""
    return ProviderRouter(
        [create_apollo_provider(settings)],
        strategy=create_strategy(settings.PROVIDER_STRATEGY),
    )


def get_repository(db: AsyncSession = Depends(get_db)) -> LeadRepository:
    return SqlLeadRepository(db)


def get_lead_service(
    repo: LeadRepository = Depends(get_repository),
    router: ProviderRouter = Depends(get_provider_router),
) -> LeadService:
    return LeadService(repo, router)


def get_import_service(
    repo: LeadRepository = Depends(get_repository),
    router: ProviderRouter = Depends(get_provider_router),
) -> ImportService:
    return ImportService(repo, router)


def get_list_service(repo: LeadRepository = Depends(get_repository)) -> ListService:
    return ListService(repo)


def get_sequence_service(repo: LeadRepository = Depends(get_repository)) -> SequenceService:
    return SequenceService(repo)


def get_export_service(repo: LeadRepository = Depends(get_repository)) -> ExportService:
    return ExportService(repo)
