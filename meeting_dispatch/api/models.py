"""Pydantic request/response schemas for the Meeting Dispatch API."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict

from meeting_dispatch.pipeline_config import CardAction, ConflictType, SourceType


class MeetingExtractRequest(BaseModel):
    """Request body for the /api/meetings/extract endpoint.

    ``transcript_stream`` elements may be plain strings or ``{"text": ...}``
    objects; a non-empty stream takes precedence over ``raw_text``. Elements
    of any other shape are accepted here and dropped during normalization.
    """

    meeting_id: str | None = None
    raw_text: str | None = None
    transcript_stream: list[Any] | None = None
    persist: bool = False


class MeetingTaskResponse(BaseModel):
    """A single task in API responses."""

    model_config = ConfigDict(from_attributes=True)

    text: str
    description: str
    owner: str | None = None
    due_at: str | None = None


class PendingConfirmationResponse(BaseModel):
    """A queued owner/date conflict with its candidate tasks."""

    model_config = ConfigDict(from_attributes=True)

    conflict_type: ConflictType
    description: str
    candidates: list[MeetingTaskResponse] = []


class IncrementalUpdateResponse(BaseModel):
    """Net decision/task change produced by one chunk."""

    model_config = ConfigDict(from_attributes=True)

    chunk_index: int
    decisions_added: int
    tasks_added: int
    total_decisions: int
    total_tasks: int


class DispatchItemResponse(BaseModel):
    """One confirmed task on the dispatch card."""

    model_config = ConfigDict(from_attributes=True)

    recommendation_id: str
    title: str
    owner: str | None = None
    due_at: str | None = None
    actions: list[CardAction] = []


class DispatchCardResponse(BaseModel):
    """Post-meeting confirmation and dispatch card."""

    model_config = ConfigDict(from_attributes=True)

    card_type: str
    title: str
    meeting_id: str
    task_count: int
    pending_count: int
    items: list[DispatchItemResponse] = []


class MeetingExtractResponse(BaseModel):
    """Response body for the /api/meetings/extract endpoint."""

    meeting_id: str
    source_type: SourceType
    transcript_text: str
    decision_count: int
    task_count: int
    decisions: list[str] = []
    tasks: list[MeetingTaskResponse] = []
    pending_confirmations: list[PendingConfirmationResponse] = []
    incremental_updates: list[IncrementalUpdateResponse] = []
    post_meeting_card: DispatchCardResponse
    items_stored: int | None = None
