"""Tests for API endpoints (no Supabase required)."""

from unittest.mock import MagicMock, patch

from fastapi.testclient import TestClient

from meeting_dispatch.api.main import app

client = TestClient(app)

RAW_TEXT = (
    "决策：下周发布 beta 版本\n"
    "待办：李雷 在 2026-02-25 前完成 发布公告\n"
    "待办：韩梅梅 在 2026-02-26 前完成 客户通知"
)


def test_health():
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


def test_extract_raw_text():
    response = client.post("/api/meetings/extract", json={"meeting_id": "m_001", "raw_text": RAW_TEXT})
    assert response.status_code == 200
    data = response.json()
    assert data["meeting_id"] == "m_001"
    assert data["source_type"] == "text"
    assert data["decision_count"] == 1
    assert data["task_count"] == 2
    assert data["decisions"] == ["下周发布 beta 版本"]
    assert data["tasks"][0] == {
        "text": "李雷 在 2026-02-25 前完成 发布公告",
        "description": "发布公告",
        "owner": "李雷",
        "due_at": "2026-02-25",
    }
    assert data["incremental_updates"] == [
        {"chunk_index": 0, "decisions_added": 1, "tasks_added": 2, "total_decisions": 1, "total_tasks": 2}
    ]
    card = data["post_meeting_card"]
    assert card["card_type"] == "meeting_dispatch"
    assert card["task_count"] == 2
    assert card["items"][0]["recommendation_id"] == "m_001-task-1"
    assert card["items"][0]["actions"] == ["accept", "ignore", "reschedule"]
    assert "items_stored" not in data


def test_extract_transcript_stream_mixed_items():
    response = client.post(
        "/api/meetings/extract",
        json={
            "meeting_id": "m_002",
            "transcript_stream": [
                {"text": "决策：本周确定试点名单"},
                "待办：王五 在 2026-02-27 前完成 试点合同初稿",
                {"text": "决策：本周确定试点名单\n待办：赵六 在 2026-02-28 前完成 客户沟通脚本"},
            ],
        },
    )
    assert response.status_code == 200
    data = response.json()
    assert data["source_type"] == "transcript_stream"
    assert data["decision_count"] == 1
    assert data["task_count"] == 2
    deltas = [(u["decisions_added"], u["tasks_added"]) for u in data["incremental_updates"]]
    assert deltas == [(1, 0), (0, 1), (0, 1)]


def test_extract_pending_confirmations():
    response = client.post(
        "/api/meetings/extract",
        json={
            "meeting_id": "m_003",
            "raw_text": "待办：张三 在 2026-02-25 前完成 签约材料\n待办：李四 在 2026-02-25 前完成 签约材料",
        },
    )
    data = response.json()
    assert data["task_count"] == 0
    assert data["pending_confirmations"][0]["conflict_type"] == "owner_conflict"
    assert len(data["pending_confirmations"][0]["candidates"]) == 2
    assert data["post_meeting_card"]["pending_count"] == 1


def test_extract_task_without_owner_omits_optional_fields():
    response = client.post("/api/meetings/extract", json={"meeting_id": "m", "raw_text": "待办：整理纪要"})
    task = response.json()["tasks"][0]
    assert "owner" not in task
    assert "due_at" not in task


def test_extract_empty_body_is_nothing_extracted():
    response = client.post("/api/meetings/extract", json={})
    assert response.status_code == 200
    data = response.json()
    assert data["decision_count"] == 0
    assert data["task_count"] == 0
    assert data["incremental_updates"] == []


def test_extract_uses_request_id_header_when_meeting_id_missing():
    response = client.post(
        "/api/meetings/extract",
        json={"raw_text": RAW_TEXT},
        headers={"X-Request-ID": "req-meeting-001"},
    )
    data = response.json()
    assert data["meeting_id"] == "req-meeting-001"
    assert data["post_meeting_card"]["items"][0]["recommendation_id"] == "req-meeting-001-task-1"


def test_extract_generates_meeting_id():
    response = client.post("/api/meetings/extract", json={"raw_text": RAW_TEXT})
    assert response.json()["meeting_id"].startswith("req-")


def test_extract_stream_drops_items_without_text():
    response = client.post(
        "/api/meetings/extract",
        json={"meeting_id": "m_004", "transcript_stream": [{"text": 5}, 7, None, {"speaker": "A"}, "决策：A"]},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["decisions"] == ["A"]
    assert data["transcript_text"] == "决策：A"
    assert len(data["incremental_updates"]) == 1


def test_extract_rejects_invalid_stream():
    response = client.post("/api/meetings/extract", json={"transcript_stream": "not a list"})
    assert response.status_code == 422


def test_extract_persist_stores_result():
    with patch("meeting_dispatch.api.routes.extraction.store_extraction_result", return_value=3) as mock_store:
        response = client.post(
            "/api/meetings/extract",
            json={"meeting_id": "m_001", "raw_text": RAW_TEXT, "persist": True},
        )
    assert response.status_code == 200
    assert response.json()["items_stored"] == 3
    assert mock_store.call_args.args[0] == "m_001"


def test_extract_persist_storage_failure_returns_503():
    with patch(
        "meeting_dispatch.api.routes.extraction.store_extraction_result",
        side_effect=RuntimeError("connection refused"),
    ):
        response = client.post(
            "/api/meetings/extract",
            json={"meeting_id": "m_001", "raw_text": RAW_TEXT, "persist": True},
        )
    assert response.status_code == 503
    assert "storage unavailable" in response.json()["detail"].lower()


def test_dispatch_card_from_stored_rows():
    rows = [
        {"item_type": "decision", "content": "A"},
        {
            "item_type": "action_item",
            "content": "李雷 在 2026-02-25 前完成 发布公告",
            "description": "发布公告",
            "assignee": "李雷",
            "due_date": "2026-02-25",
        },
        {
            "item_type": "pending_candidate",
            "content": "张三 在 2026-02-25 前完成 签约材料",
            "description": "签约材料",
            "assignee": "张三",
            "due_date": "2026-02-25",
            "conflict_type": "owner_conflict",
        },
    ]
    with patch("meeting_dispatch.api.routes.extraction.lookup_extracted_items", return_value=rows):
        response = client.get("/api/meetings/m_001/dispatch")

    assert response.status_code == 200
    card = response.json()
    assert card["task_count"] == 1
    assert card["pending_count"] == 1
    assert card["items"][0]["title"] == "发布公告"


def test_dispatch_card_not_found():
    with patch("meeting_dispatch.api.routes.extraction.lookup_extracted_items", return_value=[]):
        response = client.get("/api/meetings/missing/dispatch")
    assert response.status_code == 404


def test_dispatch_card_storage_failure_returns_503():
    with patch(
        "meeting_dispatch.api.routes.extraction.lookup_extracted_items",
        side_effect=RuntimeError("connection refused"),
    ):
        response = client.get("/api/meetings/m_001/dispatch")
    assert response.status_code == 503
    assert "storage unavailable" in response.json()["detail"].lower()


def test_dispatch_card_reads_supabase():
    mock_supabase = MagicMock()
    query = mock_supabase.table.return_value.select.return_value.eq.return_value.order.return_value
    query.execute.return_value.data = []
    with patch("meeting_dispatch.dispatch.lookup.get_supabase_client", return_value=mock_supabase):
        response = client.get("/api/meetings/m_001/dispatch")
    assert response.status_code == 404
    mock_supabase.table.assert_called_once_with("extracted_items")
