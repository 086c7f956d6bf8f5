"""Pydantic schemas shared by the services, providers and API routers."""

from leadgen.schemas.lead import (
    CompanyLiteSchema,
    CompanySchema,
    ContactSchema,
    LeadSchema,
    PersonSchema,
)
from leadgen.schemas.prospect_list import (
    CreateListRequest,
    ListMembershipRequest,
    ListView,
    ProspectListSchema,
)
from leadgen.schemas.search import (
    LeadSearchCriteria,
    PagedResult,
    SearchRequest,
    SearchResult,
    ExportBatch,
)
from leadgen.schemas.sequence import (
    EngagementLogSchema,
    SequenceSchema,
    SequenceStepSchema,
    StartSequenceRequest,
    StartSequenceSummary,
)

__all__ = [
    "CompanyLiteSchema",
    "CompanySchema",
    "ContactSchema",
    "CreateListRequest",
    "EngagementLogSchema",
    "ExportBatch",
    "LeadSchema",
    "LeadSearchCriteria",
    "ListMembershipRequest",
    "ListView",
    "PagedResult",
    "PersonSchema",
    "ProspectListSchema",
    "SearchRequest",
    "SearchResult",
    "SequenceSchema",
    "SequenceStepSchema",
    "StartSequenceRequest",
    "StartSequenceSummary",
]
