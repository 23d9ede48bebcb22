"""Per-chunk delta recording for streamed transcripts."""

from __future__ import annotations

from meeting_dispatch.extraction.models import IncrementalUpdate


class IncrementalRecorder:
    """Records how each chunk changed the decision and confirmed-task totals.

    Call :meth:`begin` before a chunk is processed and :meth:`commit` once the
    ledger has settled. Deltas are net list-length changes, so a chunk that
    confirms one task and evicts another reports ``tasks_added == 0``.
    """

    def __init__(self) -> None:
        self.updates: list[IncrementalUpdate] = []
        self._before_decisions = 0
        self._before_tasks = 0

    def begin(self, total_decisions: int, total_tasks: int) -> None:
        self._before_decisions = total_decisions
        self._before_tasks = total_tasks

    def commit(self, chunk_index: int, total_decisions: int, total_tasks: int) -> IncrementalUpdate:
        update = IncrementalUpdate(
            chunk_index=chunk_index,
            decisions_added=total_decisions - self._before_decisions,
            tasks_added=total_tasks - self._before_tasks,
            total_decisions=total_decisions,
            total_tasks=total_tasks,
        )
        self.updates.append(update)
        return update
