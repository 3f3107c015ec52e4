"""
Data maintenance endpoints.
"""
from __future__ import annotations

import logging

from fastapi import APIRouter

from api.deps import ErrorResponse, MessageResponse, SupabaseAdminClient, error_response
from txn_backend.repositories.maintenance import MaintenanceRepositoryError, remove_duplicate_transactions

logger = logging.getLogger(__name__)

router = APIRouter(tags=["maintenance"])

REMOVE_DUPLICATES_ERROR_MESSAGE = "Erro interno do servidor ao remover duplicatas."


@router.post(
    "/remove-duplicates",
    response_model=MessageResponse,
    responses={500: {"model": ErrorResponse}},
)
def remove_duplicates(db: SupabaseAdminClient):
    """Delete duplicate transactions (same NSU and CNPJ) via the database procedure."""
    try:
        removed = remove_duplicate_transactions(db)
    except MaintenanceRepositoryError as exc:
        logger.error(f"Erro ao remover duplicatas: {exc}")
        return error_response(500, REMOVE_DUPLICATES_ERROR_MESSAGE)

    logger.info(f"{removed} duplicate transactions removed")
    return {"message": f"{removed} duplicatas removidas com sucesso."}
