"""Data models for the transcript input boundary."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

from meeting_dispatch.pipeline_config import SourceType


@dataclass
class StreamChunk:
    """One element of a live transcript stream in its object form."""

    text: str


# A stream element arrives either as plain text or as an object carrying ``text``
# (a StreamChunk, a pydantic model, or a decoded JSON mapping).
StreamItem = str | StreamChunk | Mapping[str, object]


@dataclass
class TranscriptInput:
    """Ordered, normalized chunks ready for the extraction engine."""

    source_type: SourceType
    transcript_text: str
    chunks: list[str] = field(default_factory=list)
