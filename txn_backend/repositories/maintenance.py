from __future__ import annotations

from typing import Any

from supabase import Client

REMOVE_DUPLICATES_RPC = "remove_duplicate_transactions"


class MaintenanceRepositoryError(RuntimeError):
    pass


def _coerce_count(data: Any) -> int:
    if isinstance(data, list):
        data = data[0] if data else None
    if isinstance(data, dict):
        data = next(iter(data.values()), None)
    if data is None or isinstance(data, bool):
        return 0
    if isinstance(data, int):
        return data
    try:
        return int(str(data).strip())
    except ValueError as exc:
        raise MaintenanceRepositoryError(f"Unexpected {REMOVE_DUPLICATES_RPC} result: {data!r}") from exc


def remove_duplicate_transactions(db: Client) -> int:
    """
    Run the database-side deduplication and return how many rows it deleted.

    What counts as a duplicate (same NSU and tax id) lives in the procedure.
    """
    try:
        response = db.rpc(REMOVE_DUPLICATES_RPC, {}).execute()
    except Exception as exc:
        raise MaintenanceRepositoryError(f"Supabase error during {REMOVE_DUPLICATES_RPC}: {exc}") from exc
    if hasattr(response, "error") and response.error:
        raise MaintenanceRepositoryError(f"Supabase error during {REMOVE_DUPLICATES_RPC}: {response.error}")
    return _coerce_count(response.data)
