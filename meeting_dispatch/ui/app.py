"""Meeting Dispatch -- Streamlit UI.

Paste a transcript, review the extracted decisions, confirmed tasks and
pending conflicts, and preview the dispatch card before it is posted.
"""

from __future__ import annotations

import streamlit as st

from meeting_dispatch.ui.api_client import (
    check_health,
    extract_meeting,
    format_task_line,
    get_dispatch_card,
)

# ---------------------------------------------------------------------------
# Page config (must be first Streamlit call)
# ---------------------------------------------------------------------------
st.set_page_config(page_title="Meeting Dispatch", layout="wide")

CONFLICT_LABELS = {
    "owner_conflict": "Owner conflict",
    "date_conflict": "Due date conflict",
}

# ---------------------------------------------------------------------------
# Sidebar -- navigation + API status
# ---------------------------------------------------------------------------
with st.sidebar:
    st.title("Meeting Dispatch")
    st.markdown("---")

    page = st.radio(
        "Navigate",
        ["Extract", "Stored Card"],
        label_visibility="collapsed",
    )

    st.markdown("---")

    api_healthy = check_health()
    if api_healthy:
        st.markdown(":green_circle: API connected")
    else:
        st.markdown(":red_circle: API unreachable")


def _render_card(card: dict) -> None:  # type: ignore[type-arg]
    st.subheader(card.get("title", "Dispatch card"))
    col_a, col_b = st.columns(2)
    col_a.metric("Confirmed tasks", str(card.get("task_count", 0)))
    col_b.metric("Pending confirmations", str(card.get("pending_count", 0)))
    for item in card.get("items", []):
        line = f"- **{item['title']}**"
        if item.get("owner"):
            line += f" ({item['owner']})"
        if item.get("due_at"):
            line += f" due {item['due_at']}"
        line += f" `{' / '.join(item.get('actions', []))}`"
        st.markdown(line)


# ---------------------------------------------------------------------------
# Page: Extract
# ---------------------------------------------------------------------------
if page == "Extract":
    st.header("Extract")
    st.write(
        "Paste a transcript. Lines starting with `决策：`/`decision:` become decisions, "
        "`待办：`/`action:` become tasks."
    )

    meeting_id = st.text_input("Meeting ID (optional)")
    streamed = st.checkbox("Treat blank-line separated blocks as stream chunks")
    transcript = st.text_area("Transcript", height=240)
    persist = st.checkbox("Store result")

    if st.button("Extract", disabled=not transcript.strip()):
        if not api_healthy:
            st.error("Cannot extract: the API server is not reachable.")
        else:
            chunks = [b for b in transcript.split("\n\n") if b.strip()] if streamed else None
            with st.spinner("Extracting..."):
                result = extract_meeting(
                    raw_text=transcript,
                    transcript_stream=chunks,
                    meeting_id=meeting_id or None,
                    persist=persist,
                )
            if result:
                st.write(f"**Meeting ID:** {result['meeting_id']}")

                st.subheader("Decisions")
                for decision in result.get("decisions", []):
                    st.write(f"- {decision}")

                st.subheader("Confirmed Tasks")
                for task in result.get("tasks", []):
                    st.write(format_task_line(task))

                pending = result.get("pending_confirmations", [])
                if pending:
                    st.subheader("Pending Confirmations")
                    for item in pending:
                        label = CONFLICT_LABELS.get(item["conflict_type"], item["conflict_type"])
                        with st.expander(f"{label} -- {item['description']}"):
                            for candidate in item.get("candidates", []):
                                st.write(f"- {candidate['text']}")

                updates = result.get("incremental_updates", [])
                if len(updates) > 1:
                    st.subheader("Incremental Updates")
                    st.table(updates)

                _render_card(result["post_meeting_card"])

# ---------------------------------------------------------------------------
# Page: Stored Card
# ---------------------------------------------------------------------------
elif page == "Stored Card":
    st.header("Stored Card")
    stored_id = st.text_input("Meeting ID")
    if st.button("Load", disabled=not stored_id):
        card = get_dispatch_card(stored_id)
        if card:
            _render_card(card)
        else:
            st.info("No stored extraction found for this meeting.")
