"""Pipeline configuration: source/conflict enums and DispatchConfig dataclass."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

DEFAULT_CARD_TITLE = "会议结束后确认并派发"
DEFAULT_CARD_MAX_ITEMS = 8


class SourceType(StrEnum):
    """Where the transcript chunks came from."""

    TEXT = "text"
    TRANSCRIPT_STREAM = "transcript_stream"


class ConflictType(StrEnum):
    """Attribute two tasks with the same description disagree on."""

    OWNER = "owner_conflict"
    DATE = "date_conflict"


class CardAction(StrEnum):
    """Actions offered on every dispatch card item."""

    ACCEPT = "accept"
    IGNORE = "ignore"
    RESCHEDULE = "reschedule"


@dataclass(frozen=True)
class DispatchConfig:
    """Immutable presentation settings for the post-meeting dispatch card.

    Defaults mirror the chat surface's current layout (eight items at most).
    """

    card_title: str = DEFAULT_CARD_TITLE
    max_items: int = DEFAULT_CARD_MAX_ITEMS
