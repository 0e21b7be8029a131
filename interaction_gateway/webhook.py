"""Outbound interaction webhook client."""
import json
import logging
from typing import Any, Dict, Optional, Union

import httpx

from interaction_gateway.constants import DISCORD_API_BASE_URL, WEBHOOK_ERROR
from interaction_gateway.errors import OutboundSendFailure
from interaction_gateway.events import EventEmitter
from interaction_gateway.models import Message, MessagePayload

logger = logging.getLogger(__name__)


class WebhookClient:
    """Sends follow-up messages through an interaction's webhook."""

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        application_id: Optional[str],
        token: Optional[str],
        *,
        base_url: str = DISCORD_API_BASE_URL,
        emitter: Optional[EventEmitter] = None,
    ) -> None:
        self._http = http_client
        self._emitter = emitter
        self.application_id = application_id
        self.token = token
        self.url = f"{base_url.rstrip('/')}/webhooks/{application_id}/{token}"

    async def send(self, payload: Union[MessagePayload, Dict[str, Any]]) -> Message:
        """
        POST a message to the webhook and return the created message.

        Payloads with files are sent as multipart with a `payload_json` part.
        """
        if isinstance(payload, MessagePayload):
            body = payload.to_dict()
            files = payload.files
        else:
            body = dict(payload)
            files = []

        try:
            if files:
                response = await self._http.post(
                    self.url,
                    params={"wait": "true"},
                    data={"payload_json": json.dumps(body)},
                    files=[
                        (f"files[{index}]", (item.filename, item.content, item.content_type))
                        for index, item in enumerate(files)
                    ],
                )
            else:
                response = await self._http.post(
                    self.url, params={"wait": "true"}, json=body
                )
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            error = OutboundSendFailure(
                f"Webhook send failed: {status} {exc.response.text}", status_code=status
            )
            self._report(error)
            raise error from exc
        except httpx.HTTPError as exc:
            error = OutboundSendFailure(f"Webhook send failed: {exc}")
            self._report(error)
            raise error from exc

        return Message.from_payload(response.json())

    def _report(self, error: OutboundSendFailure) -> None:
        logger.warning("%s (application %s)", error, self.application_id)
        if self._emitter is not None:
            self._emitter.emit(WEBHOOK_ERROR, error)
