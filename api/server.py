"""
Entry point that validates configuration and serves the API with uvicorn.

Usage:
    python -m api.server
    transactions-bff            # console script installed by pyproject.toml
"""
from __future__ import annotations

import logging
import os
import sys

import uvicorn

from txn_backend.db.supabase import check_supabase_config
from txn_backend.utils.env import get_port, load_env

logger = logging.getLogger(__name__)


def configure_logging() -> str:
    level = (os.getenv("LOG_LEVEL") or "INFO").upper()
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    return level


def main() -> int:
    """Run the FastAPI server"""
    load_env()
    level = configure_logging()

    try:
        check_supabase_config()
        port = get_port()
    except RuntimeError as exc:
        logger.error(f"ERRO: {exc}")
        return 1

    host = os.getenv("HOST", "0.0.0.0")
    logger.info(f"Iniciando servidor na porta {port}.")

    from api.main import app

    uvicorn.run(app, host=host, port=port, log_level=level.lower())
    return 0


if __name__ == "__main__":
    sys.exit(main())
