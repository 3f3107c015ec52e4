"""
Repository layer for data-service access patterns.
"""

from txn_backend.repositories.companies import CompanyRepositoryError, upsert_company
from txn_backend.repositories.maintenance import MaintenanceRepositoryError, remove_duplicate_transactions
from txn_backend.repositories.transactions import (
    TransactionRepositoryError,
    apply_predicates,
    build_predicates,
    list_transactions,
    update_transactions_status,
)

__all__ = [
    "CompanyRepositoryError",
    "MaintenanceRepositoryError",
    "TransactionRepositoryError",
    "apply_predicates",
    "build_predicates",
    "list_transactions",
    "remove_duplicate_transactions",
    "update_transactions_status",
]
