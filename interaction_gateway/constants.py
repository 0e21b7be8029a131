"""Discord interaction protocol constants."""
from enum import Enum, IntEnum
from typing import Optional, Type, TypeVar, Union

DISCORD_API_BASE_URL = "https://discord.com/api/v10"
DISCORD_CDN_URL = "https://cdn.discordapp.com"
DEFAULT_OAUTH_SCOPE = "applications.commands.update"

EPHEMERAL_FLAG = 1 << 6

# Event names published by the client
COMMAND_INTERACTION = "command_interaction"
CONTEXT_MENU_INTERACTION = "context_menu_interaction"
BUTTON_INTERACTION = "button_interaction"
CLIENT_READY = "client_ready"
CREDENTIAL_ERROR = "credential_error"
WEBHOOK_ERROR = "webhook_error"


class InteractionType(IntEnum):
    PING = 1
    APPLICATION_COMMAND = 2
    MESSAGE_COMPONENT = 3
    APPLICATION_COMMAND_AUTOCOMPLETE = 4
    MODAL_SUBMIT = 5


class ApplicationCommandType(IntEnum):
    CHAT_INPUT = 1
    USER = 2
    MESSAGE = 3


class ApplicationCommandOptionType(IntEnum):
    SUB_COMMAND = 1
    SUB_COMMAND_GROUP = 2
    STRING = 3
    INTEGER = 4
    BOOLEAN = 5
    USER = 6
    CHANNEL = 7
    ROLE = 8
    MENTIONABLE = 9
    NUMBER = 10
    ATTACHMENT = 11


class MessageComponentType(IntEnum):
    ACTION_ROW = 1
    BUTTON = 2
    SELECT_MENU = 3


class InteractionResponseType(IntEnum):
    PONG = 1
    CHANNEL_MESSAGE_WITH_SOURCE = 4
    DEFERRED_CHANNEL_MESSAGE_WITH_SOURCE = 5
    DEFERRED_UPDATE_MESSAGE = 6
    UPDATE_MESSAGE = 7


E = TypeVar("E", bound=Enum)


def resolve_enum(enum_cls: Type[E], value: Union[int, str, None]) -> Optional[E]:
    """
    Map a wire discriminant to its symbolic member.

    Accepts the numeric code or the member name. Unknown values map to None.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        member = enum_cls.__members__.get(value)
        if member is not None:
            return member
        if not value.isdigit():
            return None
        value = int(value)
    try:
        return enum_cls(value)
    except ValueError:
        return None
