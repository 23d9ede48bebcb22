"""Data models for structured extraction results."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum

from meeting_dispatch.pipeline_config import ConflictType, SourceType


class ItemType(StrEnum):
    """Row kinds in the extracted_items table."""

    DECISION = "decision"
    ACTION_ITEM = "action_item"
    PENDING_CANDIDATE = "pending_candidate"


@dataclass
class MeetingTask:
    """A single action item parsed from a task line."""

    text: str  # raw captured task content; dedup identity
    description: str
    owner: str | None = None
    due_at: str | None = None


@dataclass
class PendingConfirmation:
    """Conflicting task candidates awaiting a human decision."""

    conflict_type: ConflictType
    description: str
    candidates: list[MeetingTask] = field(default_factory=list)


@dataclass
class IncrementalUpdate:
    """Net change produced by one transcript chunk."""

    chunk_index: int
    decisions_added: int
    tasks_added: int
    total_decisions: int
    total_tasks: int


@dataclass
class ExtractionResult:
    """Final output of one engine invocation."""

    source_type: SourceType = SourceType.TEXT
    transcript_text: str = ""
    chunks: list[str] = field(default_factory=list)
    decisions: list[str] = field(default_factory=list)
    tasks: list[MeetingTask] = field(default_factory=list)
    pending_confirmations: list[PendingConfirmation] = field(default_factory=list)
    incremental_updates: list[IncrementalUpdate] = field(default_factory=list)

    @property
    def decision_count(self) -> int:
        return len(self.decisions)

    @property
    def task_count(self) -> int:
        return len(self.tasks)
