"""Cross-chunk task bookkeeping: deduplication, confirmation and conflicts.

A task is confirmed the first time its description is seen. A later task with
the same description but a different owner or due date revokes that
confirmation and both variants move to the pending-confirmation queue, where
they wait for a human decision. Conflicts are sticky: a conflicted description
never returns to the confirmed set within one run.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from meeting_dispatch.extraction.models import MeetingTask, PendingConfirmation
from meeting_dispatch.pipeline_config import ConflictType

logger = logging.getLogger(__name__)


class DedupTracker:
    """Seen-sets for decisions and raw task texts, scoped to one run."""

    def __init__(self) -> None:
        self._decisions: set[str] = set()
        self._tasks: set[str] = set()

    def admit_decision(self, decision: str) -> bool:
        """Record *decision*; return False if it was already seen."""
        if decision in self._decisions:
            return False
        self._decisions.add(decision)
        return True

    def admit_task(self, task: MeetingTask) -> bool:
        """Record the task's raw text; return False if it was already seen."""
        if task.text in self._tasks:
            return False
        self._tasks.add(task.text)
        return True


def _add_candidates(target: PendingConfirmation, candidates: Iterable[MeetingTask]) -> None:
    for candidate in candidates:
        if not any(existing.text == candidate.text for existing in target.candidates):
            target.candidates.append(candidate)


def _find_bucket(
    queue: list[PendingConfirmation],
    conflict_type: ConflictType,
    description: str,
) -> PendingConfirmation | None:
    for item in queue:
        if item.conflict_type == conflict_type and item.description == description:
            return item
    return None


def enqueue_conflict(
    queue: list[PendingConfirmation],
    conflict_type: ConflictType,
    description: str,
    candidates: Iterable[MeetingTask],
) -> list[PendingConfirmation]:
    """Merge *candidates* into the matching bucket of a copy of *queue*.

    The bucket is keyed by ``(conflict_type, description)`` and created when
    absent. Candidates whose raw text is already present are skipped.

    Args:
        queue: Existing pending confirmations (left unmodified).
        conflict_type: Owner or date conflict.
        description: Base task description the conflict is about.
        candidates: Tasks to add, in order.

    Returns:
        A new queue list.
    """
    next_queue = [
        PendingConfirmation(item.conflict_type, item.description, list(item.candidates))
        for item in queue
    ]
    target = _find_bucket(next_queue, conflict_type, description)
    if target is None:
        target = PendingConfirmation(conflict_type, description)
        next_queue.append(target)
    _add_candidates(target, candidates)
    return next_queue


def filter_confirmed_tasks(
    tasks: list[MeetingTask],
    queue: list[PendingConfirmation],
) -> list[MeetingTask]:
    """Drop tasks whose description has any queued conflict."""
    conflicted = {item.description for item in queue}
    return [task for task in tasks if task.description not in conflicted]


def detect_conflicts(existing: MeetingTask, incoming: MeetingTask) -> list[ConflictType]:
    """Return the attributes on which two same-description tasks disagree.

    An attribute only conflicts when both sides carry a value and the values
    differ; a missing owner or date is never a conflict signal.
    """
    conflicts: list[ConflictType] = []
    if existing.owner and incoming.owner and existing.owner != incoming.owner:
        conflicts.append(ConflictType.OWNER)
    if existing.due_at and incoming.due_at and existing.due_at != incoming.due_at:
        conflicts.append(ConflictType.DATE)
    return conflicts


class TaskLedger:
    """Confirmed task index plus the pending-confirmation queue for one run."""

    def __init__(self) -> None:
        self._index: dict[str, MeetingTask] = {}
        self._conflicted: set[str] = set()
        self.confirmed: list[MeetingTask] = []
        self.pending: list[PendingConfirmation] = []

    def is_conflicted(self, description: str) -> bool:
        return description in self._conflicted

    def admit(self, task: MeetingTask) -> None:
        """Route a non-duplicate task to the confirmed set or the pending queue."""
        if self.is_conflicted(task.description):
            bucket_types = [p.conflict_type for p in self.pending if p.description == task.description]
            for conflict_type in bucket_types:
                self.pending = enqueue_conflict(self.pending, conflict_type, task.description, [task])
            return

        current = self._index.get(task.description)
        if current is None:
            self._index[task.description] = task
            self.confirmed.append(task)
            return

        conflicts = detect_conflicts(current, task)
        if not conflicts:
            return

        for conflict_type in conflicts:
            self.pending = enqueue_conflict(self.pending, conflict_type, task.description, [current, task])
        self._conflicted.add(task.description)
        del self._index[task.description]
        self.confirmed = filter_confirmed_tasks(self.confirmed, self.pending)
        logger.debug(
            "Evicted confirmed task %r: %s",
            current.text,
            ", ".join(c.value for c in conflicts),
        )
