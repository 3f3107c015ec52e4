"""
Paginated, filterable transaction listing for the dashboard.
"""
from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Query
from pydantic import BaseModel

from api.deps import ErrorResponse, SupabaseAdminClient, error_response
from txn_backend.models.transactions import Page, TransactionFilters
from txn_backend.repositories.transactions import TransactionRepositoryError, list_transactions

logger = logging.getLogger(__name__)

router = APIRouter(tags=["transactions"])

LIST_ERROR_MESSAGE = "Erro interno do servidor ao buscar transações."


class TransactionList(BaseModel):
    data: list[dict[str, Any]]
    totalItems: int | None


@router.get(
    "/transactions",
    response_model=TransactionList,
    responses={500: {"model": ErrorResponse}},
)
def get_transactions(
    db: SupabaseAdminClient,
    page: str | None = Query(default=None),
    items_per_page: str | None = Query(default=None, alias="itemsPerPage"),
    search: str = Query(default=""),
    status: str = Query(default=""),
    data_transacao: str = Query(default=""),
    above10k: str | None = Query(default=None),
):
    """
    List transactions sorted by amount then date (both descending).

    `search` matches store name, tax id or TID; `above10k=true` keeps only
    amounts over 10000. `totalItems` counts every match, not just this page.
    """
    filters = TransactionFilters(
        search=search,
        status=status,
        data_transacao=data_transacao,
        above_10k=above10k == "true",
    )
    window = Page.from_raw(page, items_per_page)

    try:
        result = list_transactions(db, filters, window)
    except TransactionRepositoryError as exc:
        logger.error(f"Erro ao buscar transações: {exc}")
        return error_response(500, LIST_ERROR_MESSAGE)

    return {"data": result.rows, "totalItems": result.total}
