"""
Sequences: create, list/fetch, and kick off the first step by logging an
email/call/task engagement for each target lead.

Only the first step fires; later steps belong to an external scheduler.
"""

import logging
from typing import List, Optional

from leadgen.exceptions import (
    SequenceHasNoStepsError,
    SequenceNotFoundError,
    ValidationError,
)
from leadgen.repository import LeadRepository
from leadgen.schemas import (
    EngagementLogSchema,
    PagedResult,
    SequenceSchema,
    SequenceStepSchema,
    StartSequenceSummary,
)
from leadgen.schemas.base import utcnow
from leadgen.schemas.search import clamp_page, clamp_page_size
from leadgen.schemas.sequence import (
    normalize_step_type,
    normalize_wait_hours,
    truncate,
)

logger = logging.getLogger(__name__)


def first_step(steps: List[SequenceStepSchema]) -> Optional[SequenceStepSchema]:
    """Lowest order wins; on a tie the step listed first wins."""
    best = None
    for step in steps:
        if best is None or step.order < best.order:
            best = step
    return best


class SequenceService:
    def __init__(self, repo: LeadRepository):
        self.repo = repo

    # -------- CRUD --------

    async def create(self, sequence: SequenceSchema) -> str:
        if sequence is None:
            raise ValidationError("Sequence is required.")
        if not sequence.name or not sequence.name.strip():
            raise ValidationError("Sequence name is required.")

        steps = sorted(
            (
                SequenceStepSchema(
                    order=step.order,
                    type=normalize_step_type(step.type),
                    wait_hours=normalize_wait_hours(step.wait_hours),
                    template=step.template or "",
                )
                for step in sequence.steps
            ),
            key=lambda step: step.order,
        )

        normalized = SequenceSchema(
            id=sequence.id,
            name=sequence.name.strip(),
            description=sequence.description or "",
            steps=steps,
            created_utc=sequence.created_utc or utcnow(),
            is_active=sequence.is_active,
        )
        sequence_id = await self.repo.create_sequence(normalized)
        logger.info(f"Created sequence '{normalized.name}' ({sequence_id}) with {len(steps)} steps")
        return sequence_id

    async def get(self, sequence_id: str) -> Optional[SequenceSchema]:
        if not sequence_id or not sequence_id.strip():
            return None
        return await self.repo.get_sequence(sequence_id)

    async def get_paged(self, page: int, page_size: int) -> PagedResult[SequenceSchema]:
        return await self.repo.get_sequences(clamp_page(page), clamp_page_size(page_size))

    # -------- Start (first step fan-out) --------

    async def start(self, sequence_id: str, lead_ids: List[str]) -> StartSequenceSummary:
        if not sequence_id or not sequence_id.strip():
            raise ValidationError("SequenceId is required.")
        if not lead_ids:
            raise ValidationError("At least one lead is required.")

        sequence = await self.repo.get_sequence(sequence_id)
        if sequence is None:
            raise SequenceNotFoundError(sequence_id)

        step = first_step(sequence.steps)
        if step is None:
            raise SequenceHasNoStepsError(sequence_id)

        # One timestamp for the whole batch
        when = utcnow()

        logs = [
            EngagementLogSchema(
                lead_id=lead_id,
                channel=normalize_step_type(step.type),
                direction="out",
                occurred_utc=when,
                subject=f"Seq:{sequence.name} Step:{step.order}",
                body_preview=truncate(step.template),
                status="sent",
                provider_ref=sequence.id,
            )
            for lead_id in lead_ids
        ]
        await self.repo.log_engagements(logs)

        logger.info(f"Started sequence {sequence.id} step {step.order} for {len(logs)} leads")

        return StartSequenceSummary(
            ok=True,
            sequence_id=sequence.id,
            step=step.order,
            count=len(logs),
            scheduled_utc=when,
        )
