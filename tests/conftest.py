from __future__ import annotations

import json
from typing import Any, Callable, Optional

import httpx
import pytest
from nacl.signing import SigningKey

from interaction_gateway.client import Client
from interaction_gateway.config import Settings

API_BASE_URL = "https://discord.test/api/v10"
TIMESTAMP = "1700000000"


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def signing_key() -> SigningKey:
    return SigningKey.generate()


@pytest.fixture
def settings(signing_key: SigningKey) -> Settings:
    return Settings(
        client_id="app-1",
        client_secret="secret-1",
        public_key=signing_key.verify_key.encode().hex(),
        api_base_url=API_BASE_URL,
    )


def default_discord_handler(request: httpx.Request) -> httpx.Response:
    if request.url.path.endswith("/oauth2/token"):
        return httpx.Response(
            200, json={"token_type": "Bearer", "access_token": "token-abc"}
        )
    if "/webhooks/" in request.url.path:
        return httpx.Response(
            200,
            json={
                "id": "msg-1",
                "channel_id": "channel-1",
                "content": "done",
                "author": {"id": "app-1", "username": "gateway", "bot": True},
                "flags": 0,
                "timestamp": "2024-01-01T00:00:00+00:00",
            },
        )
    return httpx.Response(404, json={"message": "Unknown"})


@pytest.fixture
def discord_requests() -> list[httpx.Request]:
    return []


@pytest.fixture
def make_client(settings: Settings, discord_requests: list[httpx.Request]):
    def factory(
        handler: Optional[Callable[[httpx.Request], httpx.Response]] = None,
    ) -> Client:
        responder = handler or default_discord_handler

        def record(request: httpx.Request) -> httpx.Response:
            discord_requests.append(request)
            return responder(request)

        http_client = httpx.AsyncClient(transport=httpx.MockTransport(record))
        return Client(settings, http_client=http_client)

    return factory


@pytest.fixture
def client(make_client) -> Client:
    return make_client()


@pytest.fixture
def sign(signing_key: SigningKey):
    def signer(body: bytes, timestamp: str = TIMESTAMP) -> dict[str, str]:
        signature = signing_key.sign(timestamp.encode("utf-8") + body).signature
        return {
            "Content-Type": "application/json",
            "X-Signature-Ed25519": signature.hex(),
            "X-Signature-Timestamp": timestamp,
        }

    return signer


def encode(payload: Any) -> bytes:
    return json.dumps(payload).encode("utf-8")


def interaction_payload(interaction_type: int, data: Optional[dict] = None, **extra) -> dict:
    payload: dict[str, Any] = {
        "id": "interaction-1",
        "application_id": "app-1",
        "type": interaction_type,
        "token": "token-1",
        "version": 1,
        "channel_id": "channel-1",
        "user": {"id": "user-1", "username": "alice", "discriminator": "0001"},
    }
    if data is not None:
        payload["data"] = data
    payload.update(extra)
    return payload
