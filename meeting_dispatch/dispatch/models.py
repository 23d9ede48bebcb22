"""Presentation models for the post-meeting dispatch card."""

from __future__ import annotations

from dataclasses import dataclass, field

from meeting_dispatch.pipeline_config import CardAction

CARD_TYPE = "meeting_dispatch"


@dataclass
class DispatchItem:
    """One confirmed task rendered for accept/ignore/reschedule."""

    recommendation_id: str
    title: str
    owner: str | None = None
    due_at: str | None = None
    actions: list[CardAction] = field(default_factory=lambda: list(CardAction))


@dataclass
class MeetingDispatchCard:
    """Summary card posted to the chat surface after a meeting."""

    title: str
    meeting_id: str
    task_count: int
    pending_count: int
    items: list[DispatchItem] = field(default_factory=list)
    card_type: str = CARD_TYPE
