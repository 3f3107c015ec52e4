"""
Domain models shared by the repositories and the API layer.
"""

from txn_backend.models.companies import CompanyUpsert
from txn_backend.models.transactions import (
    AnyILike,
    Equals,
    GreaterThan,
    Page,
    Predicate,
    TransactionFilters,
    TransactionPage,
)

__all__ = [
    "AnyILike",
    "CompanyUpsert",
    "Equals",
    "GreaterThan",
    "Page",
    "Predicate",
    "TransactionFilters",
    "TransactionPage",
]
