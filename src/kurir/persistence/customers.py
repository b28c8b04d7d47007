"""Customer database persistence."""

from __future__ import annotations

import logging
from typing import Any

from ..db.supabase import require_supabase_client
from ..models.domain import Customer
from .records import first_row, utc_now_iso

TABLE = "customers"
BATCH_SIZE = 100


def list_customers(user_id: str) -> list[Customer]:
    """Return the user's customers, newest first."""
    supabase = require_supabase_client()
    response = (
        supabase.table(TABLE)
        .select("*")
        .eq("user_id", user_id)
        .order("created_at", desc=True)
        .execute()
    )
    return [Customer.from_row(row) for row in (response.data or [])]


def count_customers(user_id: str) -> int:
    supabase = require_supabase_client()
    response = supabase.table(TABLE).select("id", count="exact").eq("user_id", user_id).execute()
    if response.count is not None:
        return response.count
    return len(response.data or [])


def get_customer(user_id: str, customer_id: str) -> Customer:
    supabase = require_supabase_client()
    response = (
        supabase.table(TABLE)
        .select("*")
        .eq("id", customer_id)
        .eq("user_id", user_id)
        .limit(1)
        .execute()
    )
    return Customer.from_row(first_row(response.data, f"Customer {customer_id}"))


def create_customer(user_id: str, fields: dict[str, Any]) -> Customer:
    supabase = require_supabase_client()
    record = {**fields, "user_id": user_id}
    response = supabase.table(TABLE).insert(record).execute()
    return Customer.from_row(first_row(response.data, "Inserted customer"))


def create_customers(user_id: str, records: list[dict[str, Any]]) -> int:
    """Insert customers in batches and return how many rows were stored."""
    if not records:
        return 0

    supabase = require_supabase_client()
    inserted_count = 0
    for i in range(0, len(records), BATCH_SIZE):
        batch = [{**record, "user_id": user_id} for record in records[i:i + BATCH_SIZE]]
        response = supabase.table(TABLE).insert(batch).execute()
        inserted_count += len(response.data or [])
    logging.info(f"Imported {inserted_count} customers for user {user_id}")
    return inserted_count


def update_customer(user_id: str, customer_id: str, changes: dict[str, Any]) -> Customer:
    if not changes:
        return get_customer(user_id, customer_id)
    supabase = require_supabase_client()
    response = (
        supabase.table(TABLE)
        .update({**changes, "updated_at": utc_now_iso()})
        .eq("id", customer_id)
        .eq("user_id", user_id)
        .execute()
    )
    return Customer.from_row(first_row(response.data, f"Customer {customer_id}"))


def delete_customer(user_id: str, customer_id: str) -> None:
    supabase = require_supabase_client()
    response = supabase.table(TABLE).delete().eq("id", customer_id).eq("user_id", user_id).execute()
    first_row(response.data, f"Customer {customer_id}")
