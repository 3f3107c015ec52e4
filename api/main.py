"""
Transactions BFF - FastAPI application.

Provides endpoints for:
- Listing, filtering and paginating transactions
- Updating a client's (CNPJ) status, notes, tasks and attachment
- Removing duplicate transactions
"""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.datastructures import Headers
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from api.deps import error_response, get_supabase_admin_client
from api.routers import clients, maintenance, transactions
from txn_backend.db.supabase import check_supabase_config
from txn_backend.utils.env import get_max_body_bytes

logger = logging.getLogger(__name__)

MAX_BODY_BYTES = get_max_body_bytes()
BODY_TOO_LARGE_MESSAGE = "Corpo da requisição excede o limite de 10 MB."
INVALID_BODY_MESSAGE = "Corpo da requisição inválido."


class BodySizeLimitMiddleware:
    """
    Reject request bodies larger than `max_body_bytes`.

    A declared Content-Length over the limit is refused up front; bodies
    without one (chunked) are counted as they are received.
    """

    def __init__(self, app: ASGIApp, max_body_bytes: int) -> None:
        self.app = app
        self.max_body_bytes = max_body_bytes

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        content_length = Headers(scope=scope).get("content-length")
        if content_length is not None:
            try:
                size = int(content_length)
            except ValueError:
                await error_response(400, "Cabeçalho Content-Length inválido.")(scope, receive, send)
                return
            if size > self.max_body_bytes:
                logger.warning(f"Rejected {scope['method']} {scope['path']}: body of {size} bytes")
                await error_response(413, BODY_TOO_LARGE_MESSAGE)(scope, receive, send)
                return

        received = 0

        async def limited_receive() -> Message:
            nonlocal received
            message = await receive()
            if message["type"] == "http.request":
                received += len(message.get("body", b""))
                if received > self.max_body_bytes:
                    logger.warning(f"Rejected {scope['method']} {scope['path']}: body over {self.max_body_bytes} bytes")
                    # FastAPI re-raises HTTPException from body parsing; anything else becomes a 400.
                    raise HTTPException(status_code=413, detail=BODY_TOO_LARGE_MESSAGE)
            return message

        await self.app(scope, limited_receive, send)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown events."""
    # Startup
    logger.info("Starting up Transactions BFF...")
    check_supabase_config()
    get_supabase_admin_client()
    logger.info("API pronta para receber requisições.")
    yield
    # Shutdown
    logger.info("Shutting down Transactions BFF...")


app = FastAPI(
    title="Transactions BFF",
    description="Backend-for-frontend for the transactions dashboard",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(BodySizeLimitMiddleware, max_body_bytes=MAX_BODY_BYTES)

# Any origin may call the API; no cookies are involved, so credentials stay off.
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return error_response(exc.status_code, str(exc.detail), headers=exc.headers)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.warning(f"Invalid request to {request.url.path}: {exc.errors()}")
    return error_response(400, INVALID_BODY_MESSAGE)


# Include routers
app.include_router(transactions.router)
app.include_router(clients.router)
app.include_router(maintenance.router)


@app.get("/")
def root():
    """Health check endpoint."""
    return {"status": "ok", "service": "transactions-bff"}


@app.get("/health")
def health():
    """Health check endpoint."""
    return {"status": "healthy"}
