"""Rule-based signal classification and task attribute parsing.

Each transcript line is matched against fixed lexical markers (Chinese and
English). Nothing here raises: lines that match no marker are dropped and
attributes that cannot be parsed are left as ``None``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import StrEnum

from meeting_dispatch.extraction.models import MeetingTask
from meeting_dispatch.ingestion.parsers import split_lines


class SignalType(StrEnum):
    """Classification of a transcript line."""

    DECISION = "decision"
    TASK = "task"
    NOISE = "noise"


@dataclass
class LineSignal:
    """Result of classifying one line."""

    signal_type: SignalType
    content: str = ""


@dataclass
class ChunkSignals:
    """Decisions and tasks found in one chunk, in line order."""

    decisions: list[str] = field(default_factory=list)
    tasks: list[MeetingTask] = field(default_factory=list)


_DECISION_RE = re.compile(r"^(?:决策|decision)\s*[:：]\s*(.+)$", re.IGNORECASE)
_TASK_RE = re.compile(r"^(?:待办|action)\s*[:：]\s*(.+)$", re.IGNORECASE)

# ASCII word boundaries so a date directly after CJK text still matches.
_DATE_RE = re.compile(r"\b\d{4}-\d{2}-\d{2}\b", re.ASCII)

# Leading "<owner> 在 <date>" / "<owner> by <date>" patterns, tried in order.
_OWNER_PATTERNS: list[re.Pattern[str]] = [
    re.compile(r"^([^\s在:：]+)\s+在\s+[0-9]{4}-[0-9]{2}-[0-9]{2}"),
    re.compile(r"^([A-Za-z][A-Za-z0-9_-]*)\s+by\s+[0-9]{4}-[0-9]{2}-[0-9]{2}", re.IGNORECASE),
]

# Full prefixes stripped to obtain the base description, tried in order.
_DESCRIPTION_PREFIXES: list[re.Pattern[str]] = [
    re.compile(r"^[^\s在:：]+\s+在\s+[0-9]{4}-[0-9]{2}-[0-9]{2}\s+前?完成\s*", re.IGNORECASE),
    re.compile(r"^[A-Za-z][A-Za-z0-9_-]*\s+by\s+[0-9]{4}-[0-9]{2}-[0-9]{2}\s+", re.IGNORECASE),
]


def classify_line(line: str) -> LineSignal:
    """Label a single trimmed line as decision, task, or noise.

    The decision marker is checked first, so a line can never be both.
    """
    decision_match = _DECISION_RE.match(line)
    if decision_match:
        return LineSignal(SignalType.DECISION, decision_match.group(1).strip())

    task_match = _TASK_RE.match(line)
    if task_match:
        return LineSignal(SignalType.TASK, task_match.group(1).strip())

    return LineSignal(SignalType.NOISE)


def extract_due_date(text: str) -> str | None:
    """Return the first ``YYYY-MM-DD`` substring anywhere in *text*."""
    match = _DATE_RE.search(text)
    return match.group(0) if match else None


def extract_owner(text: str) -> str | None:
    """Return the owner named by a leading owner/date pattern, if any."""
    for pattern in _OWNER_PATTERNS:
        match = pattern.match(text)
        if match:
            return match.group(1)
    return None


def extract_task_description(text: str) -> str:
    """Strip the leading owner/date prefix to get the base description."""
    for pattern in _DESCRIPTION_PREFIXES:
        stripped = pattern.sub("", text, count=1)
        if stripped != text:
            return stripped.strip()
    return text.strip()


def parse_task(text: str) -> MeetingTask:
    """Build a :class:`MeetingTask` from a task line's captured content.

    Owner and description come from the same leading pattern; ``due_at`` is
    searched independently across the whole text.
    """
    return MeetingTask(
        text=text,
        description=extract_task_description(text),
        owner=extract_owner(text),
        due_at=extract_due_date(text),
    )


def extract_meeting_signals(chunk: str) -> ChunkSignals:
    """Tokenize and classify one chunk.

    Args:
        chunk: Raw chunk text, possibly multi-line.

    Returns:
        The chunk's decisions and parsed tasks in line order. Duplicates are
        kept here; deduplication happens across chunks in the ledger.
    """
    signals = ChunkSignals()
    for line in split_lines(chunk):
        signal = classify_line(line)
        if signal.signal_type is SignalType.DECISION:
            signals.decisions.append(signal.content)
        elif signal.signal_type is SignalType.TASK:
            signals.tasks.append(parse_task(signal.content))
    return signals
