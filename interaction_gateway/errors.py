"""Exception types raised by the interaction gateway."""
from typing import Optional


class GatewayError(Exception):
    """Base interaction gateway error."""


class VerificationFailure(GatewayError):
    """Request signature is missing or does not verify."""

    def __init__(self, message: str = "invalid request signature") -> None:
        super().__init__(message)


class InvalidPayload(GatewayError):
    """Verified request body is not a JSON interaction object."""

    def __init__(self, message: str = "invalid request body") -> None:
        super().__init__(message)


class ReplyProtocolViolation(GatewayError):
    """Interaction reply sequence was used out of order."""


class AlreadyReplied(ReplyProtocolViolation):
    """The initial HTTP reply for this interaction was already sent."""

    def __init__(self, message: str = "Reply already sent.") -> None:
        super().__init__(message)


class NotYetAcknowledged(ReplyProtocolViolation):
    """A follow-up was attempted before the initial HTTP reply."""

    def __init__(self, message: str = "Reply not sent.") -> None:
        super().__init__(message)


class DiscordAPIError(GatewayError):
    """Outbound Discord API request failed."""

    def __init__(self, message: str, *, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class CredentialFetchFailure(DiscordAPIError):
    """Client-credentials token exchange failed."""


class OutboundSendFailure(DiscordAPIError):
    """Webhook follow-up send failed."""
