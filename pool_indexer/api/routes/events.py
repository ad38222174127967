"""Event Routes — ordered ingestion of decoded events and audit-entry lookup.

Invariants:
    - POST /api/v1/events applies events strictly in list order via EventPipeline
    - Processing stops at the first failing event; earlier events stay committed
      (each event is its own atomic unit) and the error response names the failing event
    - Re-posting an already applied event is harmless (DUPLICATE outcome)

Design Decisions:
    - Pipeline held on app.state: one pipeline (one ordering cursor, one lock) per process
"""

import logging

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from pool_indexer.core.errors import ResourceNotFoundError
from pool_indexer.infrastructure.database import get_db
from pool_indexer.models.audit_entry import AuditEntry
from pool_indexer.schemas.events import EventBatch, EventBatchResponse, EventOutcome
from pool_indexer.schemas.read_models import AuditEntryResponse
from pool_indexer.services.event_pipeline import EventPipeline

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/events", tags=["events"])


def get_pipeline(request: Request) -> EventPipeline:
    pipeline = getattr(request.app.state, "pipeline", None)
    if pipeline is None:
        raise RuntimeError("Event pipeline not initialized")
    return pipeline


@router.post(
    "", response_model=EventBatchResponse, status_code=status.HTTP_200_OK,
)
async def ingest_events(
    body: EventBatch, pipeline: EventPipeline = Depends(get_pipeline),
):
    """Apply a batch of decoded events in delivery order."""
    outcomes = []
    for payload in body.events:
        outcome = await pipeline.process(payload.to_event())
        outcomes.append(EventOutcome(
            tx_hash=payload.tx_hash,
            log_index=payload.log_index,
            kind=payload.kind,
            outcome=outcome.value,
        ))
    logger.info(f"Ingested {len(outcomes)} events")
    return EventBatchResponse(processed=len(outcomes), outcomes=outcomes)


@router.get("/{record_id}", response_model=AuditEntryResponse)
async def get_audit_entry(record_id: str, db: AsyncSession = Depends(get_db)):
    entry = await db.get(AuditEntry, record_id.lower())
    if entry is None:
        raise ResourceNotFoundError("AuditEntry", record_id)
    return AuditEntryResponse.model_validate(entry)
