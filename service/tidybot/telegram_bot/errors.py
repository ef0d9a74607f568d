"""
Error taxonomy for webhook handling and outbound Bot API calls.
"""


class TidybotError(Exception):
    """Base class for all bot errors."""


class AuthenticationError(TidybotError):
    """Inbound request did not carry the configured webhook secret."""


class MalformedInputError(TidybotError):
    """Inbound body is not JSON or does not look like a Telegram update."""


class OutboundCallFailure(TidybotError):
    """A Bot API call failed (network, HTTP status or `ok: false`)."""

    def __init__(self, method: str, reason: str):
        super().__init__(f"{method} failed: {reason}")
        self.method = method
        self.reason = reason
