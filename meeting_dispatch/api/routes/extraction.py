"""Extraction endpoints: run the meeting engine and rebuild dispatch cards."""

from __future__ import annotations

import logging
import uuid
from typing import Annotated

from fastapi import APIRouter, Header, HTTPException

from meeting_dispatch.api.models import (
    DispatchCardResponse,
    IncrementalUpdateResponse,
    MeetingExtractRequest,
    MeetingExtractResponse,
    MeetingTaskResponse,
    PendingConfirmationResponse,
)
from meeting_dispatch.config import settings
from meeting_dispatch.dispatch.card import build_post_meeting_card
from meeting_dispatch.dispatch.lookup import lookup_extracted_items, rebuild_dispatch_inputs
from meeting_dispatch.extraction.extractor import adapt_meeting_input, store_extraction_result
from meeting_dispatch.pipeline_config import DispatchConfig

logger = logging.getLogger(__name__)

router = APIRouter()


def _dispatch_config() -> DispatchConfig:
    return DispatchConfig(
        card_title=settings.dispatch_card_title,
        max_items=settings.dispatch_card_max_items,
    )


@router.post(
    "/api/meetings/extract",
    response_model=MeetingExtractResponse,
    response_model_exclude_none=True,
)
async def extract_meeting(
    body: MeetingExtractRequest,
    x_request_id: Annotated[str | None, Header()] = None,
) -> MeetingExtractResponse:
    """Extract decisions, tasks and pending conflicts from a transcript.

    A missing ``meeting_id`` is replaced by the request id (``X-Request-ID``
    header, or a generated ``req-<hex>``). With ``persist`` set the result is
    also written to the extracted_items table; storage outages return 503.
    """
    meeting_id = body.meeting_id or x_request_id or f"req-{uuid.uuid4().hex}"
    result = adapt_meeting_input(body.raw_text, body.transcript_stream)
    card = build_post_meeting_card(
        meeting_id, result.tasks, result.pending_confirmations, _dispatch_config()
    )

    items_stored: int | None = None
    if body.persist:
        try:
            items_stored = store_extraction_result(meeting_id, result)
        except Exception as exc:
            logger.exception("Storing extraction failed for meeting %s", meeting_id)
            raise HTTPException(
                status_code=503,
                detail=f"Storage unavailable: {exc}",
            ) from exc

    return MeetingExtractResponse(
        meeting_id=meeting_id,
        source_type=result.source_type,
        transcript_text=result.transcript_text,
        decision_count=result.decision_count,
        task_count=result.task_count,
        decisions=result.decisions,
        tasks=[MeetingTaskResponse.model_validate(t) for t in result.tasks],
        pending_confirmations=[
            PendingConfirmationResponse.model_validate(p) for p in result.pending_confirmations
        ],
        incremental_updates=[
            IncrementalUpdateResponse.model_validate(u) for u in result.incremental_updates
        ],
        post_meeting_card=DispatchCardResponse.model_validate(card),
        items_stored=items_stored,
    )


@router.get(
    "/api/meetings/{meeting_id}/dispatch",
    response_model=DispatchCardResponse,
    response_model_exclude_none=True,
)
async def get_dispatch_card(meeting_id: str) -> DispatchCardResponse:
    """Rebuild the dispatch card from a meeting's stored extraction."""
    try:
        rows = lookup_extracted_items(meeting_id)
    except Exception as exc:
        logger.exception("Loading stored extraction failed for meeting %s", meeting_id)
        raise HTTPException(
            status_code=503,
            detail=f"Storage unavailable: {exc}",
        ) from exc
    if not rows:
        raise HTTPException(status_code=404, detail="No stored extraction for meeting")

    tasks, pending = rebuild_dispatch_inputs(rows)
    card = build_post_meeting_card(meeting_id, tasks, pending, _dispatch_config())
    return DispatchCardResponse.model_validate(card)
