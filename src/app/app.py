"""Entrypoint da aplicação Hookrelay.

Inicializa o bootstrap e expõe a aplicação ASGI (FastAPI).

Uso (produção):
    uvicorn app.app:app --host 0.0.0.0 --port 8080

Uso (desenvolvimento):
    uvicorn app.app:app --reload --host 0.0.0.0 --port 8080
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.routes import create_api_router
from api.routes.webhook.runtime_tasks import drain_background_tasks
from app.bootstrap import (
    get_broadcast_target,
    get_routing_store,
    initialize_app,
    validate_runtime_settings,
)
from config.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

# Inicializar logging ANTES de qualquer import que use logger
initialize_app()

logger = get_logger(__name__)

SHUTDOWN_DRAIN_TIMEOUT_SECONDS = 30.0


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Gerencia ciclo de vida da aplicação.

    Startup:
    - Valida configurações
    - Inicializa store de roteamento e alvo de broadcast

    Shutdown:
    - Aguarda broadcasts pendentes
    - Fecha conexões gracefully
    """
    logger.info("app_starting", extra={"service": "hookrelay"})
    validate_runtime_settings()
    app.state.routing_store = None

    try:
        app.state.routing_store = get_routing_store()
    except Exception as exc:
        logger.warning("routing_store_not_ready", extra={"error_type": type(exc).__name__})

    yield

    logger.info("app_shutting_down", extra={"service": "hookrelay"})
    await drain_background_tasks(timeout_seconds=SHUTDOWN_DRAIN_TIMEOUT_SECONDS)
    if get_broadcast_target.cache_info().currsize:
        await get_broadcast_target().aclose()
    routing_store = getattr(app.state, "routing_store", None)
    close_async = getattr(routing_store, "aclose", None)
    if callable(close_async):
        await close_async()


def create_app() -> FastAPI:
    """Cria e configura a aplicação FastAPI."""
    fastapi_app = FastAPI(
        title="Hookrelay",
        description="Gateway multi-tenant de ingestão de webhooks",
        version="1.0.0",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    # Assinantes SSE podem ser navegadores em outras origens
    fastapi_app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    fastapi_app.include_router(create_api_router())

    logger.info("app_configured", extra={"service": "hookrelay"})

    return fastapi_app


# Aplicação ASGI exposta para uvicorn
app = create_app()


def main() -> None:
    """Entrypoint para execução direta (desenvolvimento)."""
    import uvicorn

    logger.info("Starting Hookrelay in development mode")
    uvicorn.run(
        "app.app:app",
        host="0.0.0.0",
        port=8080,
        reload=True,
    )


if __name__ == "__main__":
    main()
