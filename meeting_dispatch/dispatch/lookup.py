"""Rebuild dispatch card inputs from stored extracted_items rows."""

from __future__ import annotations

import logging
from typing import Any

from meeting_dispatch.extraction.models import ItemType, MeetingTask, PendingConfirmation
from meeting_dispatch.ingestion.storage import get_supabase_client
from meeting_dispatch.pipeline_config import ConflictType

logger = logging.getLogger(__name__)


def lookup_extracted_items(meeting_id: str) -> list[dict[str, Any]]:
    """Query the extracted_items rows of one meeting in stored order."""
    client = get_supabase_client()
    result = (
        client.table("extracted_items")
        .select("*")
        .eq("meeting_id", meeting_id)
        .order("position")
        .execute()
    )
    return result.data  # type: ignore[no-any-return]


def _row_task(row: dict[str, Any]) -> MeetingTask:
    # An empty stored description is valid and must not fall back to content.
    description = row.get("description")
    return MeetingTask(
        text=row["content"],
        description=row["content"] if description is None else description,
        owner=row.get("assignee"),
        due_at=row.get("due_date"),
    )


def rebuild_dispatch_inputs(
    rows: list[dict[str, Any]],
) -> tuple[list[MeetingTask], list[PendingConfirmation]]:
    """Turn stored rows back into confirmed tasks and pending buckets.

    Rows with an unknown ``conflict_type`` are skipped with a warning.
    Decision rows are ignored; the card only shows tasks.
    """
    tasks: list[MeetingTask] = []
    pending: list[PendingConfirmation] = []
    buckets: dict[tuple[ConflictType, str], PendingConfirmation] = {}

    for row in rows:
        item_type = row.get("item_type")
        if item_type == ItemType.ACTION_ITEM:
            tasks.append(_row_task(row))
        elif item_type == ItemType.PENDING_CANDIDATE:
            try:
                conflict_type = ConflictType(row.get("conflict_type"))
            except ValueError:
                logger.warning("Skipping pending row with conflict_type %r", row.get("conflict_type"))
                continue
            task = _row_task(row)
            key = (conflict_type, task.description)
            bucket = buckets.get(key)
            if bucket is None:
                bucket = PendingConfirmation(conflict_type, task.description)
                buckets[key] = bucket
                pending.append(bucket)
            bucket.candidates.append(task)

    return tasks, pending
