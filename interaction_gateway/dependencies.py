"""FastAPI dependencies for the interactions endpoint."""
import json
import logging
from typing import Any, Dict, Optional

from fastapi import Header, Request
from nacl.exceptions import BadSignatureError
from nacl.signing import VerifyKey

from interaction_gateway.errors import InvalidPayload, VerificationFailure

logger = logging.getLogger(__name__)


def load_verify_key(public_key: str) -> VerifyKey:
    """Parse the application's hex-encoded Ed25519 public key."""
    try:
        return VerifyKey(bytes.fromhex(public_key))
    except (ValueError, TypeError) as e:
        raise RuntimeError("DISCORD_PUBLIC_KEY must be a hex-encoded Ed25519 key") from e


def verify_signature(
    raw_body: bytes,
    timestamp: Optional[str],
    signature: Optional[str],
    verify_key: VerifyKey,
) -> bool:
    """
    Check a Discord request signature.

    Discord signs: timestamp + raw_body
    Missing headers and malformed hex count as unverified.
    """
    if not timestamp or not signature:
        return False
    try:
        message = timestamp.encode("utf-8") + raw_body
        verify_key.verify(message, bytes.fromhex(signature))
    except (BadSignatureError, ValueError, TypeError):
        return False
    return True


async def verify_discord_request(
    request: Request,
    x_signature_ed25519: Optional[str] = Header(None, alias="X-Signature-Ed25519"),
    x_signature_timestamp: Optional[str] = Header(None, alias="X-Signature-Timestamp"),
) -> Dict[str, Any]:
    """Verify the request signature and return the parsed payload."""
    raw_body = await request.body()
    verify_key: VerifyKey = request.app.state.client.verify_key

    if not verify_signature(raw_body, x_signature_timestamp, x_signature_ed25519, verify_key):
        logger.warning("Rejected interaction request with invalid signature")
        raise VerificationFailure()

    try:
        payload = json.loads(raw_body)
    except ValueError as e:
        raise InvalidPayload() from e
    if not isinstance(payload, dict):
        raise InvalidPayload()
    return payload
