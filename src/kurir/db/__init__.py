"""Database clients and utilities."""

from .supabase import DatabaseNotConfiguredError, get_supabase_client, require_supabase_client

__all__ = ["DatabaseNotConfiguredError", "get_supabase_client", "require_supabase_client"]
