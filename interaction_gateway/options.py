"""Command option resolution for application command interactions."""
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple

from interaction_gateway.constants import ApplicationCommandOptionType, resolve_enum
from interaction_gateway.models import Member, User

OptionType = ApplicationCommandOptionType

_NESTING_TYPES = (OptionType.SUB_COMMAND, OptionType.SUB_COMMAND_GROUP)


@dataclass(frozen=True)
class ResolvedOption:
    """One node of a resolved command option tree."""

    name: Optional[str]
    type: Optional[OptionType]
    value: Any = None
    options: Optional[Tuple["ResolvedOption", ...]] = None
    member: Optional[Member] = None
    user: Optional[User] = None


@dataclass(frozen=True)
class ResolvedEntities:
    """Members and users from the payload's resolved table, keyed by id."""

    members: Optional[Dict[str, Member]] = None
    users: Optional[Dict[str, User]] = None


def _merged_member(
    member: Dict[str, Any], user: Optional[Dict[str, Any]], guild_id: Optional[str]
) -> Member:
    return Member.from_payload({**member, "user": user}, guild_id)


def transform_option(
    option: Dict[str, Any],
    resolved: Optional[Dict[str, Any]] = None,
    guild_id: Optional[str] = None,
) -> ResolvedOption:
    """
    Transform a raw option node into a ResolvedOption.

    Nested options (sub-commands and groups) are transformed recursively with
    the same resolved table. USER options pick up `member` and `user` from the
    resolved table when the option value is a key there.
    """
    option_type = resolve_enum(OptionType, option.get("type"))

    nested = None
    if "options" in option:
        nested = tuple(
            transform_option(child, resolved, guild_id)
            for child in option.get("options") or []
        )

    value = option.get("value")

    member = None
    user = None
    if resolved and option_type == OptionType.USER and value is not None:
        key = str(value)
        users = resolved.get("users") or {}
        member_data = (resolved.get("members") or {}).get(key)
        if member_data is not None:
            member = _merged_member(member_data, users.get(key), guild_id)
        user_data = users.get(key)
        if user_data is not None:
            user = User.from_payload(user_data)

    return ResolvedOption(
        name=option.get("name"),
        type=option_type,
        value=value,
        options=nested,
        member=member,
        user=user,
    )


def transform_resolved(
    resolved: Optional[Dict[str, Any]], guild_id: Optional[str] = None
) -> ResolvedEntities:
    """Build the resolved-entities projection once per interaction."""
    resolved = resolved or {}
    members = resolved.get("members")
    users = resolved.get("users")

    return ResolvedEntities(
        members=(
            {
                member_id: _merged_member(member, (users or {}).get(member_id), guild_id)
                for member_id, member in members.items()
            }
            if members is not None
            else None
        ),
        users=(
            {user_id: User.from_payload(user) for user_id, user in users.items()}
            if users is not None
            else None
        ),
    )


class CommandInteractionOptionResolver:
    """
    Read-only view over the options of one command interaction.

    If the first option is a sub-command, its children are the effective
    options. If the first option is a sub-command group, the group and the
    sub-command inside it are unwrapped together.
    """

    def __init__(
        self,
        options: Sequence[ResolvedOption],
        resolved: Optional[ResolvedEntities] = None,
    ) -> None:
        options = tuple(options)
        self._resolved = resolved or ResolvedEntities()
        self._sub_command_name: Optional[str] = None
        self._sub_command_group_name: Optional[str] = None

        first = options[0] if options else None
        self._is_sub_command = first is not None and first.type == OptionType.SUB_COMMAND
        self._is_sub_command_group = (
            first is not None and first.type == OptionType.SUB_COMMAND_GROUP
        )

        if self._is_sub_command_group:
            self._sub_command_group_name = first.name
            options = first.options or ()
            first = options[0] if options else None
            if first is not None and first.type == OptionType.SUB_COMMAND:
                self._sub_command_name = first.name
                options = first.options or ()
        elif self._is_sub_command:
            self._sub_command_name = first.name
            options = first.options or ()

        self._options = options

    @property
    def options(self) -> Tuple[ResolvedOption, ...]:
        return self._options

    @property
    def resolved(self) -> ResolvedEntities:
        return self._resolved

    @property
    def is_sub_command(self) -> bool:
        return self._is_sub_command

    @property
    def is_sub_command_group(self) -> bool:
        return self._is_sub_command_group

    @property
    def sub_command_name(self) -> Optional[str]:
        return self._sub_command_name

    @property
    def sub_command_group_name(self) -> Optional[str]:
        return self._sub_command_group_name

    def __iter__(self):
        return iter(self._options)

    def __len__(self) -> int:
        return len(self._options)

    def get(self, name: str) -> Optional[ResolvedOption]:
        for option in self._options:
            if option.name == name:
                return option
        return None

    def _get_typed(self, name: str, option_type: OptionType) -> Optional[ResolvedOption]:
        option = self.get(name)
        if option is None or option.type != option_type:
            return None
        return option

    def get_string(self, name: str) -> Optional[str]:
        option = self._get_typed(name, OptionType.STRING)
        return option.value if option else None

    def get_integer(self, name: str) -> Optional[int]:
        option = self._get_typed(name, OptionType.INTEGER)
        return option.value if option else None

    def get_number(self, name: str) -> Optional[float]:
        option = self._get_typed(name, OptionType.NUMBER)
        return option.value if option else None

    def get_boolean(self, name: str) -> Optional[bool]:
        option = self._get_typed(name, OptionType.BOOLEAN)
        return option.value if option else None

    def get_user(self, name: str) -> Optional[User]:
        option = self._get_typed(name, OptionType.USER)
        return option.user if option else None

    def get_member(self, name: str) -> Optional[Member]:
        option = self._get_typed(name, OptionType.USER)
        return option.member if option else None

    def get_sub_command(self) -> Optional[str]:
        return self._sub_command_name

    def get_sub_command_group(self) -> Optional[str]:
        return self._sub_command_group_name


def resolve_command_options(
    data: Dict[str, Any], guild_id: Optional[str] = None
) -> CommandInteractionOptionResolver:
    """Resolve a chat-input command's `data.options` against `data.resolved`."""
    resolved = data.get("resolved")
    options: List[ResolvedOption] = [
        transform_option(option, resolved, guild_id) for option in data.get("options") or []
    ]
    return CommandInteractionOptionResolver(options, transform_resolved(resolved, guild_id))


def resolve_context_menu_options(
    data: Dict[str, Any], guild_id: Optional[str] = None
) -> CommandInteractionOptionResolver:
    """
    Normalize a context-menu target into a single command option.

    User targets become a USER option named "user". Message targets are not
    resolved and produce no option.
    """
    target_id = data.get("target_id")
    resolved = data.get("resolved") or {}

    options: List[ResolvedOption] = []
    if target_id is not None and (resolved.get("users") or {}).get(str(target_id)):
        options.append(
            transform_option(
                {"name": "user", "type": OptionType.USER.value, "value": target_id},
                resolved,
                guild_id,
            )
        )
    return CommandInteractionOptionResolver(options, transform_resolved(resolved, guild_id))
