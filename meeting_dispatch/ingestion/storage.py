"""Supabase storage helpers."""

from __future__ import annotations

from supabase import Client, create_client

from meeting_dispatch.config import settings

# Insert batch size for extracted_items rows
BATCH_SIZE = 50


def get_supabase_client() -> Client:
    """Create and return a Supabase client from application settings."""
    return create_client(settings.supabase_url, settings.supabase_key)


def insert_rows(client: Client, table: str, rows: list[dict[str, object]]) -> int:
    """Insert *rows* into *table* in batches of :data:`BATCH_SIZE`."""
    for i in range(0, len(rows), BATCH_SIZE):
        client.table(table).insert(rows[i : i + BATCH_SIZE]).execute()
    return len(rows)
