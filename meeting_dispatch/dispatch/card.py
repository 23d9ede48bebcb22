"""Build the post-meeting confirmation and dispatch card."""

from __future__ import annotations

from meeting_dispatch.dispatch.models import DispatchItem, MeetingDispatchCard
from meeting_dispatch.extraction.models import MeetingTask, PendingConfirmation
from meeting_dispatch.pipeline_config import DispatchConfig


def build_post_meeting_card(
    meeting_id: str,
    tasks: list[MeetingTask],
    pending_confirmations: list[PendingConfirmation],
    config: DispatchConfig | None = None,
) -> MeetingDispatchCard:
    """Render confirmed tasks and pending counts into a dispatch card.

    Counts cover every task and pending confirmation; only the first
    ``config.max_items`` confirmed tasks become card items. Item ids are
    ``<meeting_id>-task-<n>`` with ``n`` starting at 1.

    Args:
        meeting_id: Correlation id of the meeting.
        tasks: Confirmed tasks in confirmation order.
        pending_confirmations: Queued conflicts awaiting review.
        config: Card title and item limit; defaults to :class:`DispatchConfig`.

    Returns:
        A :class:`MeetingDispatchCard`.
    """
    config = config or DispatchConfig()
    items = [
        DispatchItem(
            recommendation_id=f"{meeting_id}-task-{n}",
            title=task.description or task.text,
            owner=task.owner,
            due_at=task.due_at,
        )
        for n, task in enumerate(tasks[: config.max_items], 1)
    ]
    return MeetingDispatchCard(
        title=config.card_title,
        meeting_id=meeting_id,
        task_count=len(tasks),
        pending_count=len(pending_confirmations),
        items=items,
    )
