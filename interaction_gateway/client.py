"""Entry point object tying together settings, credentials and events."""
import logging
from typing import Optional

import httpx

from interaction_gateway.auth import CredentialProvider
from interaction_gateway.config import Settings
from interaction_gateway.constants import CLIENT_READY
from interaction_gateway.dependencies import load_verify_key
from interaction_gateway.events import EventEmitter

logger = logging.getLogger(__name__)


class Client(EventEmitter):
    """
    Publishes verified interactions as events.

    Events: `command_interaction`, `context_menu_interaction`,
    `button_interaction`, `client_ready`, `credential_error`, `webhook_error`.

    Example:
        client = Client(load_settings())

        @client.on("command_interaction")
        async def on_command(interaction):
            await interaction.defer()
            await interaction.followup({"content": "done"})
    """

    def __init__(
        self,
        settings: Settings,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        super().__init__()
        self.settings = settings
        self.verify_key = load_verify_key(settings.public_key)
        self.http = http_client or httpx.AsyncClient(timeout=20.0)
        self.credentials = CredentialProvider(
            self.http,
            settings.client_id,
            settings.client_secret,
            base_url=settings.api_base_url,
            scope=settings.oauth_scope,
            emitter=self,
        )

    @property
    def client_id(self) -> str:
        return self.settings.client_id

    async def start(self) -> "Client":
        """Fetch client credentials, then emit `client_ready`."""
        await self.credentials.start()
        self.emit(CLIENT_READY, self)
        return self

    async def aclose(self) -> None:
        await self.http.aclose()
