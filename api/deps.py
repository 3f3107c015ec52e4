"""
Dependency injection for the Supabase client and shared response helpers.
"""
from __future__ import annotations

import logging
from functools import lru_cache
from typing import Annotated

from fastapi import Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from supabase import Client

from txn_backend.db.supabase import create_supabase_admin_client

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_supabase_admin_client() -> Client:
    """
    Returns the process-wide Supabase client built from the service key.

    Created on first use and shared read-only by every request afterwards.
    """
    logger.info("Creating Supabase service client")
    return create_supabase_admin_client()


# Type alias for dependency injection
SupabaseAdminClient = Annotated[Client, Depends(get_supabase_admin_client)]


class ErrorResponse(BaseModel):
    error: str


class MessageResponse(BaseModel):
    message: str


def error_response(status_code: int, message: str, headers: dict[str, str] | None = None) -> JSONResponse:
    """Build the `{"error": ...}` body every endpoint uses for failures."""
    return JSONResponse(status_code=status_code, content={"error": message}, headers=headers)
