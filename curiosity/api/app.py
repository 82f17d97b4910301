from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from curiosity import __version__
from curiosity.api.routes.chat import router as chat_router
from curiosity.api.routes.health import router as health_router
from curiosity.core.background_tasks import get_background_manager
from curiosity.utils.logger import api_logger


@asynccontextmanager
async def lifespan(app: FastAPI):
    if hasattr(app.state, "shutdown_event"):
        from curiosity.api.deps import set_shutdown_event

        set_shutdown_event(app.state.shutdown_event)
        api_logger.info("Shutdown event registered with chat service")

    yield

    # Let pending activity records and callbacks finish
    await get_background_manager().shutdown(timeout=5.0)


def create_app() -> FastAPI:
    app = FastAPI(
        title="Curiosity Agent",
        description="Tool-calling sales assistant with SSE streaming",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(chat_router)
    app.include_router(health_router)
    return app
