"""FastAPI application factory."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from contribution_target.interface.dependencies import shutdown, startup
from contribution_target.interface.error_handlers import register_error_handlers
from contribution_target.interface.routes import router


@asynccontextmanager
async def _lifespan(app: FastAPI) -> AsyncIterator[None]:
    await startup()
    yield
    await shutdown()


def create_app() -> FastAPI:
    """Build and wire the FastAPI application."""
    app = FastAPI(
        title="Contribution Target",
        version="1.0.0",
        description=(
            "Given a local git repository, returns the default branch of the "
            "repository the user contributes to: the upstream's default branch "
            "for forks that contribute to their parent, otherwise the "
            "repository's own default branch."
        ),
        lifespan=_lifespan,
    )

    register_error_handlers(app)
    app.include_router(router)

    @app.get("/health", include_in_schema=False)
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    return app
