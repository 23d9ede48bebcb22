"""Rule-based extraction of decisions and action items from meeting transcripts."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from meeting_dispatch.extraction.conflicts import DedupTracker, TaskLedger
from meeting_dispatch.extraction.incremental import IncrementalRecorder
from meeting_dispatch.extraction.models import ExtractionResult, ItemType, MeetingTask
from meeting_dispatch.extraction.signals import extract_meeting_signals
from meeting_dispatch.ingestion.models import StreamItem, TranscriptInput
from meeting_dispatch.ingestion.parsers import read_transcript_chunks
from meeting_dispatch.ingestion.storage import get_supabase_client, insert_rows

logger = logging.getLogger(__name__)


def extract_from_chunks(transcript: TranscriptInput) -> ExtractionResult:
    """Fold the ordered chunks of one transcript into an extraction result.

    All cross-chunk state (seen-sets, confirmed index, pending queue, delta
    recorder) is created here and discarded on return, so concurrent calls
    never share anything. Chunk order matters: confirmation and eviction
    depend on which variant of a task arrives first.

    Args:
        transcript: Normalized transcript chunks.

    Returns:
        The deduplicated decisions, confirmed tasks, pending confirmations and
        one incremental update per chunk.
    """
    dedup = DedupTracker()
    ledger = TaskLedger()
    recorder = IncrementalRecorder()
    decisions: list[str] = []

    for chunk_index, chunk in enumerate(transcript.chunks):
        signals = extract_meeting_signals(chunk)
        recorder.begin(len(decisions), len(ledger.confirmed))

        for decision in signals.decisions:
            if dedup.admit_decision(decision):
                decisions.append(decision)

        for task in signals.tasks:
            if dedup.admit_task(task):
                ledger.admit(task)

        recorder.commit(chunk_index, len(decisions), len(ledger.confirmed))

    result = ExtractionResult(
        source_type=transcript.source_type,
        transcript_text=transcript.transcript_text,
        chunks=list(transcript.chunks),
        decisions=decisions,
        tasks=ledger.confirmed,
        pending_confirmations=ledger.pending,
        incremental_updates=recorder.updates,
    )
    logger.info(
        "Extracted %d decisions, %d tasks, %d pending confirmations from %d chunks",
        result.decision_count,
        result.task_count,
        len(result.pending_confirmations),
        len(transcript.chunks),
    )
    return result


def adapt_meeting_input(
    raw_text: str | None = None,
    transcript_stream: Sequence[StreamItem] | None = None,
) -> ExtractionResult:
    """Extract structured signals from a raw text block or a transcript stream.

    This is the main entry point. A non-empty ``transcript_stream`` takes
    precedence over ``raw_text``. Supplying neither yields an empty result,
    which means "nothing extracted", never a failure.
    """
    return extract_from_chunks(read_transcript_chunks(raw_text, transcript_stream))


def _task_row(meeting_id: str, position: int, item_type: str, task: MeetingTask) -> dict[str, object]:
    return {
        "meeting_id": meeting_id,
        "position": position,
        "item_type": item_type,
        "content": task.text,
        "description": task.description,
        "assignee": task.owner,
        "due_date": task.due_at,
        "conflict_type": None,
    }


def build_extracted_rows(meeting_id: str, result: ExtractionResult) -> list[dict[str, object]]:
    """Flatten a result into ``extracted_items`` rows.

    Decisions, confirmed tasks and pending candidates each become one row;
    ``position`` preserves the result's ordering across all three kinds.
    """
    rows: list[dict[str, object]] = []
    for decision in result.decisions:
        rows.append(
            {
                "meeting_id": meeting_id,
                "position": len(rows),
                "item_type": ItemType.DECISION.value,
                "content": decision,
                "description": None,
                "assignee": None,
                "due_date": None,
                "conflict_type": None,
            }
        )
    for task in result.tasks:
        rows.append(_task_row(meeting_id, len(rows), ItemType.ACTION_ITEM.value, task))
    for pending in result.pending_confirmations:
        for candidate in pending.candidates:
            row = _task_row(meeting_id, len(rows), ItemType.PENDING_CANDIDATE.value, candidate)
            row["conflict_type"] = pending.conflict_type.value
            rows.append(row)
    return rows


def store_extraction_result(meeting_id: str, result: ExtractionResult) -> int:
    """Store an extraction result in the Supabase extracted_items table.

    Args:
        meeting_id: The meeting correlation id.
        result: Output of :func:`adapt_meeting_input`.

    Returns:
        Number of rows stored.
    """
    rows = build_extracted_rows(meeting_id, result)
    if not rows:
        return 0

    client = get_supabase_client()
    stored = insert_rows(client, "extracted_items", rows)
    logger.info("Stored %d extracted items for meeting %s", stored, meeting_id)
    return stored

