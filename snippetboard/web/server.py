"""FastAPI application factory for the snippet board web UI."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from ..api import SnippetApiClient
from ..config import ClientSettings
from ..controllers import CollectionController
from ..controllers.collection import SnippetCollectionClient
from .route import router


def create_app(
    settings: ClientSettings | None = None,
    *,
    client: SnippetCollectionClient | None = None,
) -> FastAPI:
    """Create the web UI around one collection controller.

    When no ``client`` is given an HTTP client is built from ``settings`` at
    startup and closed on shutdown.
    """

    settings = settings or ClientSettings.from_env()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if client is not None:
            yield
            return

        async with SnippetApiClient.from_settings(settings) as api_client:
            app.state.controller = CollectionController(api_client)
            yield

    app = FastAPI(title="Snippet Board", version="0.1.0", lifespan=lifespan)
    app.state.settings = settings
    if client is not None:
        app.state.controller = CollectionController(client)
    app.include_router(router)

    return app


app = create_app()


__all__ = ["app", "create_app"]
