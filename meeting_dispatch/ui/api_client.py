"""HTTP client wrapper for the Meeting Dispatch FastAPI backend."""

from __future__ import annotations

import os

import httpx
import streamlit as st

API_URL = os.getenv("API_URL", "http://localhost:8000")


def check_health() -> bool:
    """Return True if the API server responds to /health."""
    try:
        r = httpx.get(f"{API_URL}/health", timeout=5.0)
        return r.status_code == 200
    except httpx.ConnectError:
        return False


def extract_meeting(
    raw_text: str | None = None,
    transcript_stream: list[str] | None = None,
    meeting_id: str | None = None,
    persist: bool = False,
) -> dict:  # type: ignore[type-arg]
    """Send a transcript (single block or ordered chunks) to the extract endpoint."""
    payload: dict[str, object] = {"persist": persist}
    if transcript_stream:
        payload["transcript_stream"] = transcript_stream
    else:
        payload["raw_text"] = raw_text or ""
    if meeting_id:
        payload["meeting_id"] = meeting_id
    try:
        r = httpx.post(f"{API_URL}/api/meetings/extract", json=payload, timeout=30.0)
        r.raise_for_status()
        return r.json()  # type: ignore[no-any-return]
    except httpx.HTTPError as e:
        st.error(f"Extraction failed: {e}")
        return {}


def get_dispatch_card(meeting_id: str) -> dict:  # type: ignore[type-arg]
    """Fetch the stored dispatch card for a meeting."""
    try:
        r = httpx.get(f"{API_URL}/api/meetings/{meeting_id}/dispatch", timeout=10.0)
        r.raise_for_status()
        return r.json()  # type: ignore[no-any-return]
    except httpx.HTTPError:
        return {}


def format_task_line(task: dict) -> str:  # type: ignore[type-arg]
    """Render one task from an extract response as a markdown bullet."""
    owner = task.get("owner") or "Unassigned"
    due = task.get("due_at") or "no date"
    return f"- **{owner}** ({due}): {task['description']}"
