"""Map verified interaction payloads to interaction variants."""
import logging
from typing import TYPE_CHECKING, Any, Dict, Optional, Tuple

from interaction_gateway.constants import (
    BUTTON_INTERACTION,
    COMMAND_INTERACTION,
    CONTEXT_MENU_INTERACTION,
    ApplicationCommandType,
    InteractionType,
    MessageComponentType,
    resolve_enum,
)
from interaction_gateway.interactions import (
    ButtonInteraction,
    CommandInteraction,
    ContextMenuInteraction,
    Interaction,
    InteractionReply,
)

if TYPE_CHECKING:
    from interaction_gateway.client import Client

logger = logging.getLogger(__name__)


def classify_interaction(
    client: "Client",
    payload: Dict[str, Any],
    reply: Optional[InteractionReply] = None,
) -> Optional[Tuple[str, Interaction]]:
    """
    Build the interaction variant for a verified, non-ping payload.

    Returns the event name and the interaction, or None when the payload has
    no variant (select menus, autocomplete, modals, unknown codes).
    """
    interaction_type = resolve_enum(InteractionType, payload.get("type"))
    data = payload.get("data") or {}

    if interaction_type == InteractionType.APPLICATION_COMMAND:
        command_type = resolve_enum(ApplicationCommandType, data.get("type"))
        if command_type == ApplicationCommandType.CHAT_INPUT:
            return COMMAND_INTERACTION, CommandInteraction(client, payload, reply)
        if command_type in (ApplicationCommandType.USER, ApplicationCommandType.MESSAGE):
            return CONTEXT_MENU_INTERACTION, ContextMenuInteraction(client, payload, reply)
        logger.debug("Dropping command interaction with data.type=%r", data.get("type"))
        return None

    if interaction_type == InteractionType.MESSAGE_COMPONENT:
        component_type = resolve_enum(MessageComponentType, data.get("component_type"))
        if component_type == MessageComponentType.BUTTON:
            return BUTTON_INTERACTION, ButtonInteraction(client, payload, reply)
        # TODO: SelectMenuInteraction for MessageComponentType.SELECT_MENU
        logger.debug(
            "Dropping component interaction with component_type=%r",
            data.get("component_type"),
        )
        return None

    logger.debug("Dropping interaction with type=%r", payload.get("type"))
    return None
