from __future__ import annotations

from typing import Any

from supabase import Client

from txn_backend.models.companies import CompanyUpsert

COMPANIES_TABLE = "companies_data"
COMPANIES_CONFLICT_COLUMN = "cpf_cnpj"


class CompanyRepositoryError(RuntimeError):
    pass


def _raise_for_supabase_error(response: Any, context: str) -> None:
    if hasattr(response, "error") and response.error:
        raise CompanyRepositoryError(f"Supabase error during {context}: {response.error}")


def upsert_company(db: Client, company: CompanyUpsert) -> dict[str, Any] | None:
    query = db.table(COMPANIES_TABLE).upsert(
        company.to_payload(),
        on_conflict=COMPANIES_CONFLICT_COLUMN,
    )
    try:
        response = query.execute()
    except Exception as exc:
        raise CompanyRepositoryError(f"Supabase error during upserting company: {exc}") from exc
    _raise_for_supabase_error(response, "upserting company")
    data = response.data or []
    if isinstance(data, list) and data:
        return data[0]
    return None
