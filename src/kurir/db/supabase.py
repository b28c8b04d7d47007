"""Supabase client for Python backend."""

import logging
from functools import lru_cache
from supabase import create_client, Client
from ..config import settings


class DatabaseNotConfiguredError(RuntimeError):
    """Raised when a store operation runs without Supabase credentials."""


@lru_cache()
def get_supabase_client() -> Client | None:
    """Get cached Supabase client instance.

    Returns:
        Supabase Client instance if configured, None otherwise.
        Note: This does not test the connection - actual queries may fail with network errors.
    """
    if not settings.supabase_url or not settings.supabase_key:
        logging.warning("Supabase credentials not configured (missing URL or key)")
        return None

    try:
        client = create_client(settings.supabase_url, settings.supabase_key)
        return client
    except Exception as e:
        logging.error(f"Failed to create Supabase client: {e}")
        return None


def require_supabase_client() -> Client:
    """Return the Supabase client or fail loudly when it is not configured."""
    client = get_supabase_client()
    if client is None:
        raise DatabaseNotConfiguredError(
            "Supabase not configured. Set KURIR_SUPABASE_URL and KURIR_SUPABASE_KEY environment variables."
        )
    return client


# Example usage patterns (always scope by user_id, the service key bypasses RLS):
#
# result = supabase.table('orders') \
#     .select('*') \
#     .eq('user_id', user_id) \
#     .order('created_at', desc=True) \
#     .execute()
#
# result = supabase.table('pricing_config') \
#     .update({'is_active': False}) \
#     .eq('id', config_id) \
#     .eq('user_id', user_id) \
#     .execute()
