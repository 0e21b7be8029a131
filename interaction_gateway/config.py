"""Environment configuration for the interaction gateway."""
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import load_dotenv

from interaction_gateway.constants import DEFAULT_OAUTH_SCOPE, DISCORD_API_BASE_URL


@dataclass(frozen=True)
class Settings:
    """Deployment settings for one gateway process."""

    client_id: str
    client_secret: str
    public_key: str
    host: str = "0.0.0.0"
    port: int = 8000
    api_base_url: str = DISCORD_API_BASE_URL
    oauth_scope: str = DEFAULT_OAUTH_SCOPE
    log_level: str = "INFO"


def _require(env: Mapping[str, str], name: str) -> str:
    value = env.get(name)
    if not value:
        raise RuntimeError(f"Set {name} env var")
    return value


def load_settings(env: Optional[Mapping[str, str]] = None) -> Settings:
    """
    Build settings from the environment.

    When no mapping is given, a `.env` file is loaded first and `os.environ`
    is read.
    """
    if env is None:
        load_dotenv()
        env = os.environ

    port_raw = env.get("PORT") or "8000"
    try:
        port = int(port_raw)
    except ValueError:
        raise RuntimeError(f"PORT must be an integer, got {port_raw!r}") from None

    return Settings(
        client_id=_require(env, "DISCORD_CLIENT_ID"),
        client_secret=_require(env, "DISCORD_CLIENT_SECRET"),
        public_key=_require(env, "DISCORD_PUBLIC_KEY"),
        host=env.get("HOST") or "0.0.0.0",
        port=port,
        api_base_url=(env.get("DISCORD_API_BASE_URL") or DISCORD_API_BASE_URL).rstrip("/"),
        oauth_scope=env.get("DISCORD_OAUTH_SCOPE") or DEFAULT_OAUTH_SCOPE,
        log_level=(env.get("LOG_LEVEL") or "INFO").upper(),
    )
