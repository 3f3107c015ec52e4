from __future__ import annotations

from typing import Any, Iterable

from supabase import Client

from txn_backend.models.transactions import (
    AMOUNT_COLUMN,
    DATE_COLUMN,
    HIGH_VALUE_THRESHOLD,
    SEARCH_COLUMNS,
    STATUS_COLUMN,
    TAX_ID_COLUMN,
    AnyILike,
    Equals,
    GreaterThan,
    Page,
    Predicate,
    TransactionFilters,
    TransactionPage,
)

TRANSACTIONS_TABLE = "transactions"
# Embeds the related `companies_data` row through the cpf/cnpj foreign key.
TRANSACTIONS_SELECT = "*, companies_data(*)"

# Characters with meaning inside a PostgREST `or=(...)` expression.
_RESERVED_FILTER_CHARS = frozenset(',.:()"\\')


class TransactionRepositoryError(RuntimeError):
    pass


def _execute(query: Any, context: str) -> Any:
    try:
        response = query.execute()
    except Exception as exc:
        raise TransactionRepositoryError(f"Supabase error during {context}: {exc}") from exc
    if hasattr(response, "error") and response.error:
        raise TransactionRepositoryError(f"Supabase error during {context}: {response.error}")
    return response


def _quote_filter_value(value: str) -> str:
    if not any(ch in _RESERVED_FILTER_CHARS for ch in value):
        return value
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def build_predicates(filters: TransactionFilters) -> list[Predicate]:
    """
    Turn listing filters into the list of conditions to AND together.

    Empty filters contribute nothing, so an empty list means "all rows".
    """
    predicates: list[Predicate] = []
    if filters.search:
        predicates.append(AnyILike(columns=SEARCH_COLUMNS, term=filters.search))
    if filters.status:
        predicates.append(Equals(STATUS_COLUMN, filters.status))
    if filters.data_transacao:
        predicates.append(Equals(DATE_COLUMN, filters.data_transacao))
    if filters.above_10k:
        predicates.append(GreaterThan(AMOUNT_COLUMN, HIGH_VALUE_THRESHOLD))
    return predicates


def ilike_any_expression(predicate: AnyILike) -> str:
    pattern = _quote_filter_value(f"%{predicate.term}%")
    return ",".join(f"{column}.ilike.{pattern}" for column in predicate.columns)


def apply_predicates(query: Any, predicates: Iterable[Predicate]) -> Any:
    for predicate in predicates:
        if isinstance(predicate, AnyILike):
            query = query.or_(ilike_any_expression(predicate))
        elif isinstance(predicate, Equals):
            query = query.eq(predicate.column, predicate.value)
        elif isinstance(predicate, GreaterThan):
            query = query.gt(predicate.column, predicate.value)
        else:
            raise TypeError(f"Unsupported predicate: {predicate!r}")
    return query


def list_transactions(db: Client, filters: TransactionFilters, page: Page) -> TransactionPage:
    """
    Fetch one page of transactions (with their company row) plus the total match count.

    Rows are ordered by amount, then date, both descending.
    """
    query = db.table(TRANSACTIONS_TABLE).select(TRANSACTIONS_SELECT, count="exact")
    query = apply_predicates(query, build_predicates(filters))
    query = (
        query.order(AMOUNT_COLUMN, desc=True)
        .order(DATE_COLUMN, desc=True)
        .range(page.offset, page.end)
    )
    response = _execute(query, "listing transactions")
    return TransactionPage(rows=list(response.data or []), total=getattr(response, "count", None))


def update_transactions_status(db: Client, cpf_cnpj: str, status: str) -> list[dict[str, Any]]:
    """Overwrite the status of every transaction of a tax id. Returns the updated rows."""
    query = db.table(TRANSACTIONS_TABLE).update({STATUS_COLUMN: status}).eq(TAX_ID_COLUMN, cpf_cnpj)
    response = _execute(query, "updating transaction status")
    return list(response.data or [])
