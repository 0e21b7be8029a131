"""Data holders built from Discord interaction payloads."""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from interaction_gateway.constants import DISCORD_CDN_URL, EPHEMERAL_FLAG


def _parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    try:
        return datetime.fromisoformat(value)
    except (TypeError, ValueError):
        return None


def _to_int(value: Any) -> Optional[int]:
    if value is None:
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


@dataclass(frozen=True)
class User:
    """Discord user."""

    id: Optional[str]
    username: Optional[str] = None
    discriminator: Optional[str] = None
    avatar: Optional[str] = None
    bot: Optional[bool] = None
    public_flags: Optional[int] = None

    @classmethod
    def from_payload(cls, data: Optional[Dict[str, Any]]) -> "User":
        data = data or {}
        return cls(
            id=data.get("id"),
            username=data.get("username"),
            discriminator=data.get("discriminator"),
            avatar=data.get("avatar"),
            bot=data.get("bot"),
            public_flags=data.get("public_flags"),
        )

    @property
    def mention(self) -> str:
        return f"<@{self.id}>"

    @property
    def tag(self) -> str:
        return f"{self.username}#{self.discriminator}"

    @property
    def avatar_url(self) -> str:
        if self.avatar:
            return f"{DISCORD_CDN_URL}/avatars/{self.id}/{self.avatar}.png"
        index = (_to_int(self.discriminator) or 0) % 5
        return f"{DISCORD_CDN_URL}/embed/avatars/{index}.png"


@dataclass(frozen=True)
class Member:
    """Member of a guild, wrapping its user."""

    user: Optional[User]
    guild_id: Optional[str] = None
    nickname: Optional[str] = None
    avatar: Optional[str] = None
    roles: Tuple[str, ...] = ()
    joined_at: Optional[datetime] = None
    premium_since: Optional[datetime] = None
    deaf: Optional[bool] = None
    mute: Optional[bool] = None
    is_pending: Optional[bool] = None
    permissions: Optional[int] = None

    @classmethod
    def from_payload(
        cls, data: Optional[Dict[str, Any]], guild_id: Optional[str] = None
    ) -> "Member":
        data = data or {}
        user_data = data.get("user")
        return cls(
            user=User.from_payload(user_data) if user_data else None,
            guild_id=guild_id,
            nickname=data.get("nick"),
            avatar=data.get("avatar"),
            roles=tuple(data.get("roles") or ()),
            joined_at=_parse_timestamp(data.get("joined_at")),
            premium_since=_parse_timestamp(data.get("premium_since")),
            deaf=data.get("deaf"),
            mute=data.get("mute"),
            is_pending=data.get("pending"),
            permissions=_to_int(data.get("permissions")),
        )

    @property
    def id(self) -> Optional[str]:
        return self.user.id if self.user else None

    @property
    def display_name(self) -> Optional[str]:
        if self.nickname:
            return self.nickname
        return self.user.username if self.user else None

    @property
    def mention(self) -> str:
        return f"<@{'!' if self.nickname else ''}{self.id}>"


@dataclass(frozen=True)
class Message:
    """Message returned by the webhook API or attached to a component interaction."""

    id: Optional[str]
    channel_id: Optional[str] = None
    guild_id: Optional[str] = None
    author: Optional[User] = None
    content: str = ""
    embeds: Tuple[Dict[str, Any], ...] = ()
    components: Tuple[Dict[str, Any], ...] = ()
    flags: int = 0
    pinned: bool = False
    tts: bool = False
    mention_everyone: bool = False
    mentions: Dict[str, User] = field(default_factory=dict)
    mention_roles: Tuple[str, ...] = ()
    timestamp: Optional[datetime] = None
    webhook_id: Optional[str] = None

    @classmethod
    def from_payload(
        cls, data: Optional[Dict[str, Any]], guild_id: Optional[str] = None
    ) -> "Message":
        data = data or {}
        author = data.get("author")
        return cls(
            id=data.get("id"),
            channel_id=data.get("channel_id"),
            guild_id=guild_id or data.get("guild_id"),
            author=User.from_payload(author) if author else None,
            content=data.get("content") or "",
            embeds=tuple(data.get("embeds") or ()),
            components=tuple(data.get("components") or ()),
            flags=_to_int(data.get("flags")) or 0,
            pinned=bool(data.get("pinned")),
            tts=bool(data.get("tts")),
            mention_everyone=bool(data.get("mention_everyone")),
            mentions={
                user["id"]: User.from_payload(user)
                for user in data.get("mentions") or []
                if isinstance(user, dict) and "id" in user
            },
            mention_roles=tuple(data.get("mention_roles") or ()),
            timestamp=_parse_timestamp(data.get("timestamp")),
            webhook_id=data.get("webhook_id"),
        )

    @property
    def is_ephemeral(self) -> bool:
        return bool(self.flags & EPHEMERAL_FLAG)


@dataclass(frozen=True)
class MessageFile:
    """File attached to an outbound message."""

    filename: str
    content: bytes
    content_type: str = "application/octet-stream"


@dataclass
class MessagePayload:
    """Outbound message body for an interaction webhook."""

    content: str = ""
    embeds: List[Dict[str, Any]] = field(default_factory=list)
    components: List[Dict[str, Any]] = field(default_factory=list)
    ephemeral: bool = False
    files: List[MessageFile] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {
            "content": self.content,
            "embeds": list(self.embeds),
            "components": list(self.components),
            "flags": EPHEMERAL_FLAG if self.ephemeral else 0,
        }
        if self.files:
            body["attachments"] = [
                {"id": index, "filename": item.filename}
                for index, item in enumerate(self.files)
            ]
        return body
