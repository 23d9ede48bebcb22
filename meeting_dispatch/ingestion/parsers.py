"""Transcript input parsing: line tokenizer and stream normalization."""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence

from meeting_dispatch.ingestion.models import StreamItem, TranscriptInput
from meeting_dispatch.pipeline_config import SourceType

_LINE_BREAK_RE = re.compile(r"\r?\n")


def split_lines(text: str) -> list[str]:
    """Split a chunk into trimmed, non-empty lines."""
    lines: list[str] = []
    for line in _LINE_BREAK_RE.split(text):
        line = line.strip()
        if line:
            lines.append(line)
    return lines


def _stream_item_text(item: object) -> str:
    """Return the trimmed text of a stream item, or ``""`` for unknown shapes.

    Accepts a plain string, a mapping with a ``text`` key, or any object
    exposing a ``text`` attribute (``StreamChunk``, pydantic models).
    """
    if isinstance(item, str):
        return item.strip()
    if isinstance(item, Mapping):
        text = item.get("text")
    else:
        text = getattr(item, "text", None)
    return text.strip() if isinstance(text, str) else ""


def read_transcript_chunks(
    raw_text: str | None = None,
    transcript_stream: Sequence[StreamItem] | None = None,
) -> TranscriptInput:
    """Normalize the two accepted input shapes into ordered chunks.

    A non-empty ``transcript_stream`` takes precedence over ``raw_text``.
    Blank stream items are dropped before chunk indices are assigned, so
    ``chunk_index`` always refers to a chunk that carried text.

    Args:
        raw_text: A single transcript block (becomes one chunk).
        transcript_stream: Ordered stream items, strings or ``{text}`` objects.

    Returns:
        A :class:`TranscriptInput` with the source type, joined text and chunks.
    """
    if transcript_stream:
        chunks = [text for text in map(_stream_item_text, transcript_stream) if text]
        return TranscriptInput(
            source_type=SourceType.TRANSCRIPT_STREAM,
            transcript_text="\n".join(chunks),
            chunks=chunks,
        )

    text = raw_text.strip() if isinstance(raw_text, str) else ""
    return TranscriptInput(
        source_type=SourceType.TEXT,
        transcript_text=text,
        chunks=[text] if text else [],
    )
