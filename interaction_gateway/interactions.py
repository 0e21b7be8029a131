"""Interaction variants and their reply state."""
import asyncio
from typing import TYPE_CHECKING, Any, Dict, Optional, Union

from interaction_gateway.constants import (
    EPHEMERAL_FLAG,
    ApplicationCommandType,
    InteractionResponseType,
    InteractionType,
    MessageComponentType,
    resolve_enum,
)
from interaction_gateway.errors import AlreadyReplied, NotYetAcknowledged
from interaction_gateway.models import Member, Message, MessagePayload, User
from interaction_gateway.options import (
    CommandInteractionOptionResolver,
    resolve_command_options,
    resolve_context_menu_options,
)
from interaction_gateway.webhook import WebhookClient

if TYPE_CHECKING:
    from interaction_gateway.client import Client


class InteractionReply:
    """The pending HTTP response for one interaction request."""

    def __init__(self) -> None:
        self._sent = asyncio.Event()
        self.status_code: Optional[int] = None
        self.body: Optional[Dict[str, Any]] = None

    @property
    def sent(self) -> bool:
        return self._sent.is_set()

    def send(self, body: Dict[str, Any], status_code: int = 200) -> None:
        if self.sent:
            raise AlreadyReplied()
        self.status_code = status_code
        self.body = body
        self._sent.set()

    async def wait(self) -> None:
        await self._sent.wait()


class Interaction:
    """Fields shared by every interaction variant."""

    def __init__(
        self,
        client: "Client",
        data: Dict[str, Any],
        reply: Optional[InteractionReply] = None,
    ) -> None:
        self.client = client
        self._reply = reply if reply is not None else InteractionReply()

        self.application_id: Optional[str] = data.get("application_id")
        self.channel_id: Optional[str] = data.get("channel_id")
        self.guild_id: Optional[str] = data.get("guild_id")
        self.id: Optional[str] = data.get("id")
        self.token: Optional[str] = data.get("token")
        self.type: Optional[InteractionType] = resolve_enum(InteractionType, data.get("type"))
        self.version: Optional[int] = data.get("version")

        member = data.get("member")
        self.member: Optional[Member] = (
            Member.from_payload(member, self.guild_id) if member else None
        )
        self.user: User = User.from_payload((member or {}).get("user") or data.get("user"))

        self.deferred = False
        self.ephemeral = False
        self.replied = False

        self.webhook = WebhookClient(
            client.http,
            self.application_id,
            self.token,
            base_url=client.settings.api_base_url,
            emitter=client,
        )

    @property
    def is_in_guild(self) -> bool:
        return bool(self.guild_id and self.member)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} id={self.id!r} type={self.type!r}>"


class BaseCommandInteraction(Interaction):
    """
    Application command interaction.

    Must be acknowledged over HTTP with `defer()` before any `followup()`.
    """

    options: CommandInteractionOptionResolver

    def __init__(
        self,
        client: "Client",
        data: Dict[str, Any],
        reply: Optional[InteractionReply] = None,
    ) -> None:
        super().__init__(client, data, reply)
        command = data.get("data") or {}
        self.command_id: Optional[str] = command.get("id")
        self.command_name: Optional[str] = command.get("name")
        self.command_type: Optional[ApplicationCommandType] = resolve_enum(
            ApplicationCommandType, command.get("type")
        )

    async def defer(self, ephemeral: bool = False) -> None:
        """Acknowledge now and reply later with a follow-up."""
        if self._reply.sent:
            raise AlreadyReplied()

        body: Dict[str, Any] = {
            "type": InteractionResponseType.DEFERRED_CHANNEL_MESSAGE_WITH_SOURCE.value
        }
        if ephemeral:
            body["data"] = {"flags": EPHEMERAL_FLAG}
        self._reply.send(body)

        self.deferred = True
        self.ephemeral = ephemeral

    async def followup(self, payload: Union[MessagePayload, Dict[str, Any]]) -> Message:
        """Send a follow-up message; requires the HTTP reply to be sent."""
        if not self._reply.sent:
            raise NotYetAcknowledged()

        message = await self.webhook.send(payload)
        self.replied = True
        return message


class CommandInteraction(BaseCommandInteraction):
    """Chat input (slash) command interaction."""

    def __init__(
        self,
        client: "Client",
        data: Dict[str, Any],
        reply: Optional[InteractionReply] = None,
    ) -> None:
        super().__init__(client, data, reply)
        self.options = resolve_command_options(data.get("data") or {}, self.guild_id)


class ContextMenuInteraction(BaseCommandInteraction):
    """User or message context-menu command interaction."""

    def __init__(
        self,
        client: "Client",
        data: Dict[str, Any],
        reply: Optional[InteractionReply] = None,
    ) -> None:
        super().__init__(client, data, reply)
        command = data.get("data") or {}
        self.target_id: Optional[str] = command.get("target_id")
        self.target_type = self.command_type
        self.options = resolve_context_menu_options(command, self.guild_id)


class MessageComponentInteraction(Interaction):
    """Interaction with a component attached to a message."""

    def __init__(
        self,
        client: "Client",
        data: Dict[str, Any],
        reply: Optional[InteractionReply] = None,
    ) -> None:
        super().__init__(client, data, reply)
        component = data.get("data") or {}
        self.component_type: Optional[MessageComponentType] = resolve_enum(
            MessageComponentType, component.get("component_type")
        )
        self.custom_id: Optional[str] = component.get("custom_id")
        message = data.get("message")
        self.message: Optional[Message] = (
            Message.from_payload(message, self.guild_id) if message else None
        )

    async def defer_update(self) -> None:
        """Acknowledge without changing the message the component is attached to."""
        if self._reply.sent:
            raise AlreadyReplied()
        self._reply.send({"type": InteractionResponseType.DEFERRED_UPDATE_MESSAGE.value})
        self.deferred = True

    async def followup(self, payload: Union[MessagePayload, Dict[str, Any]]) -> Message:
        message = await self.webhook.send(payload)
        self.replied = True
        return message


class ButtonInteraction(MessageComponentInteraction):
    """Button click interaction."""
