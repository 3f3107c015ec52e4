from __future__ import annotations

import os
from functools import lru_cache

from supabase import Client, create_client


class SupabaseConfigError(RuntimeError):
    """Raised when the data service credentials are missing."""


@lru_cache
def get_supabase_url() -> str:
    url = (os.getenv("SUPABASE_URL") or "").strip()
    if not url:
        raise SupabaseConfigError("SUPABASE_URL environment variable is not set")
    return url


@lru_cache
def get_supabase_service_key() -> str:
    key = (os.getenv("SUPABASE_SERVICE_KEY") or "").strip()
    if not key:
        raise SupabaseConfigError("SUPABASE_SERVICE_KEY environment variable is not set")
    return key


def check_supabase_config() -> None:
    """
    Fail fast when either credential is missing.

    Both variables are checked so the error names everything that is absent.
    """
    missing = [
        name
        for name in ("SUPABASE_URL", "SUPABASE_SERVICE_KEY")
        if not (os.getenv(name) or "").strip()
    ]
    if missing:
        raise SupabaseConfigError(
            f"Required environment variables are not set: {', '.join(missing)}"
        )


def create_supabase_admin_client(*, url: str | None = None, service_key: str | None = None) -> Client:
    """
    Create a Supabase client using the service key (bypasses RLS).

    The key must stay on the server; the frontend only talks to this API.
    """

    return create_client(url or get_supabase_url(), service_key or get_supabase_service_key())
