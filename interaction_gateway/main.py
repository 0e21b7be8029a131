"""FastAPI application for the Discord interaction gateway."""
import logging
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse

from interaction_gateway.client import Client
from interaction_gateway.config import load_settings
from interaction_gateway.errors import InvalidPayload, VerificationFailure
from interaction_gateway.interactions_router import router as interactions_router

logger = logging.getLogger(__name__)


def create_app(client: Client) -> FastAPI:
    """Build the app serving `client`'s interactions endpoint."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan: fetch credentials on startup."""
        await client.start()
        try:
            yield
        finally:
            await client.aclose()

    app = FastAPI(
        title="Discord Interaction Gateway",
        description="Verifies Discord interaction webhooks and publishes them as events",
        lifespan=lifespan,
    )
    app.state.client = client

    @app.exception_handler(VerificationFailure)
    async def verification_failure_handler(request: Request, exc: VerificationFailure):
        return PlainTextResponse(str(exc), status_code=401)

    @app.exception_handler(InvalidPayload)
    async def invalid_payload_handler(request: Request, exc: InvalidPayload):
        return PlainTextResponse(str(exc), status_code=400)

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        return {"status": "healthy", "ready": client.credentials.ready}

    # Catch-all POST route; keep it after the fixed routes
    app.include_router(interactions_router)

    return app


def run(client: Optional[Client] = None) -> None:
    """Serve the gateway with uvicorn on the configured host and port."""
    if client is None:
        client = Client(load_settings())
    settings = client.settings

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info("Listening on %s:%s", settings.host, settings.port)
    uvicorn.run(
        create_app(client),
        host=settings.host,
        port=settings.port,
        backlog=511,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
