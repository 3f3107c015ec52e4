from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Union

DEFAULT_PAGE = 1
DEFAULT_ITEMS_PER_PAGE = 16
HIGH_VALUE_THRESHOLD = 10000

# Columns of `transactions` the listing filters and sorts on.
STORE_NAME_COLUMN = "loja"
TAX_ID_COLUMN = "cpf_cnpj_loja"
TID_COLUMN = "tid"
STATUS_COLUMN = "status"
DATE_COLUMN = "data_transacao"
AMOUNT_COLUMN = "valor_transacao"

SEARCH_COLUMNS: tuple[str, ...] = (STORE_NAME_COLUMN, TAX_ID_COLUMN, TID_COLUMN)

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def _positive_int(raw: Any, default: int) -> int:
    if raw is None or isinstance(raw, bool):
        return default
    # Reads the numeric prefix: "2abc" and "2.7" are both 2.
    match = _LEADING_INT.match(str(raw))
    if match is None:
        return default
    value = int(match.group(1))
    return value if value >= 1 else default


@dataclass(frozen=True)
class Page:
    """Offset/limit window over the sorted result set (1-based page number)."""

    page: int = DEFAULT_PAGE
    items_per_page: int = DEFAULT_ITEMS_PER_PAGE

    @classmethod
    def from_raw(cls, page: Any = None, items_per_page: Any = None) -> "Page":
        """
        Build a page from raw query-string values.

        Only the leading digits count; missing, non-numeric or non-positive
        values fall back to the defaults instead of failing the request.
        """
        return cls(
            page=_positive_int(page, DEFAULT_PAGE),
            items_per_page=_positive_int(items_per_page, DEFAULT_ITEMS_PER_PAGE),
        )

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.items_per_page

    @property
    def end(self) -> int:
        # PostgREST ranges are inclusive on both ends.
        return self.offset + self.items_per_page - 1


@dataclass(frozen=True)
class TransactionFilters:
    search: str = ""
    status: str = ""
    data_transacao: str = ""
    above_10k: bool = False


@dataclass(frozen=True)
class Equals:
    column: str
    value: Any


@dataclass(frozen=True)
class GreaterThan:
    column: str
    value: Any


@dataclass(frozen=True)
class AnyILike:
    """Case-insensitive substring match on any of `columns` (OR-combined)."""

    columns: tuple[str, ...]
    term: str


Predicate = Union[Equals, GreaterThan, AnyILike]


@dataclass(frozen=True)
class TransactionPage:
    rows: list[dict[str, Any]] = field(default_factory=list)
    total: int | None = None
