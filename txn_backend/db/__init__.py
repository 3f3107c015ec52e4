"""
Database helpers for the transactions backend.
"""

from txn_backend.db.supabase import SupabaseConfigError, create_supabase_admin_client

__all__ = [
    "SupabaseConfigError",
    "create_supabase_admin_client",
]
