"""
Client (CNPJ) follow-up updates: transaction status plus company notes.
"""
from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Body
from pydantic import BaseModel, ConfigDict

from api.deps import ErrorResponse, MessageResponse, SupabaseAdminClient, error_response
from txn_backend.models.companies import CompanyUpsert
from txn_backend.repositories.companies import CompanyRepositoryError, upsert_company
from txn_backend.repositories.transactions import TransactionRepositoryError, update_transactions_status

logger = logging.getLogger(__name__)

router = APIRouter(tags=["clients"])

MISSING_FIELDS_MESSAGE = "CNPJ e novo status são obrigatórios."
UPDATE_ERROR_MESSAGE = "Erro interno do servidor ao atualizar dados."
UPDATE_SUCCESS_MESSAGE = "Dados do cliente atualizados com sucesso!"


class ClientUpdateRequest(BaseModel):
    """
    Update payload sent by the dashboard.

    `cnpj` and `newStatus` are required, but are declared optional so a
    missing value is answered with 400 instead of a schema error. Numeric
    tax ids are accepted and kept as strings.
    """

    model_config = ConfigDict(coerce_numbers_to_str=True)

    cnpj: str | None = None
    newStatus: str | None = None
    newObservation: str | None = None
    tasks: Any = None
    attachmentUrl: str | None = None


@router.post(
    "/update-client",
    response_model=MessageResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def update_client(
    db: SupabaseAdminClient,
    payload: ClientUpdateRequest | None = Body(default=None),
):
    """
    Set the status of every transaction of a CNPJ and upsert its company row.

    The two writes are separate calls: if the company upsert fails, the
    status change already made is kept.
    """
    if payload is None or not payload.cnpj or not payload.newStatus:
        return error_response(400, MISSING_FIELDS_MESSAGE)

    try:
        update_transactions_status(db, payload.cnpj, payload.newStatus)
    except TransactionRepositoryError as exc:
        logger.error(f"Erro ao atualizar dados do cliente: {exc}")
        return error_response(500, UPDATE_ERROR_MESSAGE)

    company = CompanyUpsert(
        cpf_cnpj=payload.cnpj,
        observation=payload.newObservation,
        tasks=payload.tasks,
        attachment_url=payload.attachmentUrl,
    )
    try:
        upsert_company(db, company)
    except CompanyRepositoryError as exc:
        logger.error(
            f"Erro ao atualizar dados do cliente: {exc} "
            f"(status das transações de {payload.cnpj} já alterado para {payload.newStatus!r})"
        )
        return error_response(500, UPDATE_ERROR_MESSAGE)

    return {"message": UPDATE_SUCCESS_MESSAGE}
