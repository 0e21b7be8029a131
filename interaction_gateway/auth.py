"""Client-credentials bearer token for outbound Discord API calls."""
import logging
from typing import Optional

import httpx

from interaction_gateway.constants import (
    CREDENTIAL_ERROR,
    DEFAULT_OAUTH_SCOPE,
    DISCORD_API_BASE_URL,
)
from interaction_gateway.errors import CredentialFetchFailure
from interaction_gateway.events import EventEmitter

logger = logging.getLogger(__name__)


class CredentialProvider:
    """
    Exchanges the application's id and secret for a bearer token.

    `authorization` stays None until `start()` succeeds and is replaced as a
    whole on every successful fetch.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        client_id: str,
        client_secret: str,
        *,
        base_url: str = DISCORD_API_BASE_URL,
        scope: str = DEFAULT_OAUTH_SCOPE,
        emitter: Optional[EventEmitter] = None,
    ) -> None:
        self._http = http_client
        self._client_secret = client_secret
        self._emitter = emitter
        self.client_id = client_id
        self.scope = scope
        self.token_url = f"{base_url.rstrip('/')}/oauth2/token"
        self._authorization: Optional[str] = None

    @property
    def authorization(self) -> Optional[str]:
        return self._authorization

    @property
    def ready(self) -> bool:
        return self._authorization is not None

    async def start(self) -> "CredentialProvider":
        """Fetch a token; failures are emitted as `credential_error` and re-raised."""
        try:
            response = await self._http.post(
                self.token_url,
                data={
                    "client_id": self.client_id,
                    "client_secret": self._client_secret,
                    "grant_type": "client_credentials",
                    "scope": self.scope,
                },
            )
            response.raise_for_status()
            token = response.json()
            authorization = f"{token['token_type']} {token['access_token']}"
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            raise self._report(
                CredentialFetchFailure(
                    f"Token request failed: {status} {exc.response.text}",
                    status_code=status,
                )
            ) from exc
        except (httpx.HTTPError, ValueError, KeyError, TypeError) as exc:
            raise self._report(
                CredentialFetchFailure(f"Token request failed: {exc!r}")
            ) from exc

        self._authorization = authorization
        logger.info("Obtained client credentials for application %s", self.client_id)
        return self

    def _report(self, error: CredentialFetchFailure) -> CredentialFetchFailure:
        logger.error("%s", error)
        if self._emitter is not None:
            self._emitter.emit(CREDENTIAL_ERROR, error)
        return error
