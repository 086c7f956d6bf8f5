"""Prospect list schemas."""

from datetime import datetime
from typing import List, Optional

from pydantic import Field, field_validator

from leadgen.schemas.base import CamelModel, ensure_utc


class ProspectListSchema(CamelModel):
    id: str = Field(default="", alias="listId")
    name: str = ""
    description: Optional[str] = None
    created_utc: Optional[datetime] = None
    lead_ids: List[str] = Field(default_factory=list)

    @field_validator("created_utc")
    @classmethod
    def _utc(cls, value):
        return ensure_utc(value)

    @property
    def lead_count(self) -> int:
        return len(self.lead_ids)


class ListView(CamelModel):
    """List as returned by the API (membership summarized as a count)."""
    list_id: str
    name: str
    description: str = ""
    created_utc: Optional[datetime] = None
    lead_count: int = 0

    @classmethod
    def from_list(cls, prospect_list: ProspectListSchema) -> "ListView":
        return cls(
            list_id=prospect_list.id,
            name=prospect_list.name,
            description=prospect_list.description or "",
            created_utc=prospect_list.created_utc,
            lead_count=prospect_list.lead_count,
        )


class CreateListRequest(CamelModel):
    name: str = ""
    description: Optional[str] = None


class ListMembershipRequest(CamelModel):
    """Body for adding leads to / removing leads from a list."""
    list_id: str = ""
    lead_ids: List[str] = Field(default_factory=list)
