"""In-memory fake of the Supabase client surface used by the repositories."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any


@dataclass
class FakeResponse:
    data: Any = None
    count: int | None = None
    error: Any = None


def _split_or_expression(expression: str) -> list[str]:
    parts: list[str] = []
    current: list[str] = []
    in_quotes = False
    escaped = False
    for ch in expression:
        if escaped:
            current.append(ch)
            escaped = False
        elif ch == "\\" and in_quotes:
            current.append(ch)
            escaped = True
        elif ch == '"':
            in_quotes = not in_quotes
            current.append(ch)
        elif ch == "," and not in_quotes:
            parts.append("".join(current))
            current = []
        else:
            current.append(ch)
    parts.append("".join(current))
    return parts


def _unquote(value: str) -> str:
    if len(value) >= 2 and value.startswith('"') and value.endswith('"'):
        return value[1:-1].replace('\\"', '"').replace("\\\\", "\\")
    return value


def _ilike(value: Any, pattern: str) -> bool:
    needle = pattern.strip("%").casefold()
    return needle in str(value or "").casefold()


class FakeQuery:
    def __init__(self, db: "FakeSupabase", table: str) -> None:
        self._db = db
        self._table = table
        self._action = "select"
        self._payload: Any = None
        self._on_conflict: str | None = None
        self._embed_companies = False
        self._count = False
        self._filters: list[Any] = []
        self._orders: list[tuple[str, bool]] = []
        self._range: tuple[int, int] | None = None

    # --- builder ---

    def select(self, columns: str = "*", count: str | None = None) -> "FakeQuery":
        self._embed_companies = "companies_data(" in columns
        self._count = count == "exact"
        return self

    def update(self, payload: dict[str, Any]) -> "FakeQuery":
        self._action = "update"
        self._payload = payload
        return self

    def upsert(self, payload: dict[str, Any], on_conflict: str = "") -> "FakeQuery":
        self._action = "upsert"
        self._payload = payload
        self._on_conflict = on_conflict
        return self

    def eq(self, column: str, value: Any) -> "FakeQuery":
        self._filters.append(lambda row: row.get(column) == value)
        return self

    def gt(self, column: str, value: Any) -> "FakeQuery":
        self._filters.append(lambda row: row.get(column) is not None and row.get(column) > value)
        return self

    def or_(self, expression: str) -> "FakeQuery":
        clauses = []
        for part in _split_or_expression(expression):
            column, operator, value = part.split(".", 2)
            assert operator == "ilike", operator
            clauses.append((column, _unquote(value)))
        self._filters.append(lambda row: any(_ilike(row.get(c), p) for c, p in clauses))
        return self

    def order(self, column: str, desc: bool = False) -> "FakeQuery":
        self._orders.append((column, desc))
        return self

    def range(self, start: int, end: int) -> "FakeQuery":
        self._range = (start, end)
        return self

    # --- execution ---

    def _matching(self) -> list[dict[str, Any]]:
        rows = self._db.tables.setdefault(self._table, [])
        return [row for row in rows if all(f(row) for f in self._filters)]

    def execute(self) -> FakeResponse:
        self._db.executed.append((self._table, self._action))
        if self._db.fail_on and (self._table, self._action) in self._db.fail_on:
            raise RuntimeError(f"simulated failure on {self._table}.{self._action}")

        if self._action == "update":
            matched = self._matching()
            for row in matched:
                row.update(self._payload)
            return FakeResponse(data=copy.deepcopy(matched))

        if self._action == "upsert":
            rows = self._db.tables.setdefault(self._table, [])
            key = self._on_conflict
            for row in rows:
                if row.get(key) == self._payload.get(key):
                    row.clear()
                    row.update(self._payload)
                    return FakeResponse(data=[dict(row)])
            rows.append(dict(self._payload))
            return FakeResponse(data=[dict(self._payload)])

        matched = self._matching()
        for column, desc in reversed(self._orders):
            matched.sort(key=lambda row: row.get(column), reverse=desc)
        total = len(matched)
        if self._range is not None:
            start, end = self._range
            matched = matched[start : end + 1]
        result = copy.deepcopy(matched)
        if self._embed_companies:
            for row in result:
                row["companies_data"] = self._db.company_for(row.get("cpf_cnpj_loja"))
        return FakeResponse(data=result, count=total if self._count else None)


class FakeRpc:
    def __init__(self, db: "FakeSupabase", name: str) -> None:
        self._db = db
        self._name = name

    def execute(self) -> FakeResponse:
        self._db.executed.append((self._name, "rpc"))
        if self._db.fail_on and (self._name, "rpc") in self._db.fail_on:
            raise RuntimeError(f"simulated failure on rpc {self._name}")
        assert self._name == "remove_duplicate_transactions", self._name
        return FakeResponse(data=self._db.remove_duplicates())


@dataclass
class FakeSupabase:
    """
    Enough of `supabase.Client` to run the repositories against lists of dicts.

    Duplicates for the RPC are rows sharing `nsu` and `cpf_cnpj_loja`; the first one is kept.
    """

    tables: dict[str, list[dict[str, Any]]] = field(default_factory=dict)
    fail_on: set[tuple[str, str]] = field(default_factory=set)
    executed: list[tuple[str, str]] = field(default_factory=list)

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self, name)

    def rpc(self, name: str, params: dict[str, Any] | None = None) -> FakeRpc:
        return FakeRpc(self, name)

    def company_for(self, cpf_cnpj: Any) -> dict[str, Any] | None:
        for row in self.tables.get("companies_data", []):
            if row.get("cpf_cnpj") == cpf_cnpj:
                return dict(row)
        return None

    def remove_duplicates(self) -> int:
        rows = self.tables.get("transactions", [])
        seen: set[tuple[Any, Any]] = set()
        kept = []
        for row in rows:
            key = (row.get("nsu"), row.get("cpf_cnpj_loja"))
            if key in seen:
                continue
            seen.add(key)
            kept.append(row)
        removed = len(rows) - len(kept)
        self.tables["transactions"] = kept
        return removed


def make_transaction(
    tid: str,
    *,
    loja: str = "Loja Centro",
    cpf_cnpj_loja: str = "12345678000199",
    status: str = "paid",
    data_transacao: str = "2025-01-10",
    valor_transacao: float = 100.0,
    nsu: str | None = None,
) -> dict[str, Any]:
    return {
        "tid": tid,
        "loja": loja,
        "cpf_cnpj_loja": cpf_cnpj_loja,
        "status": status,
        "data_transacao": data_transacao,
        "valor_transacao": valor_transacao,
        "nsu": nsu or f"nsu-{tid}",
    }
