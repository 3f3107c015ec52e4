from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class CompanyUpsert:
    """
    Company metadata row (maps to `companies_data`, keyed by `cpf_cnpj`).

    Every field is written on upsert; `None` clears the stored value.
    """

    cpf_cnpj: str
    observation: str | None = None
    tasks: Any = None  # free-form JSON owned by the frontend (usually a list)
    attachment_url: str | None = None

    def to_payload(self) -> dict[str, Any]:
        return {
            "cpf_cnpj": self.cpf_cnpj,
            "observation": self.observation,
            "tasks": self.tasks,
            "attachment_url": self.attachment_url,
        }
