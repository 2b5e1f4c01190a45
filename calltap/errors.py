"""Exception hierarchy for CallTap."""


class CallTapError(Exception):
    """Base class for all CallTap errors."""


class SessionClosed(CallTapError):
    """Raised when a finalized audio session is appended to or finalized again."""


class EncodingOverflow(CallTapError):
    """Raised when a payload is too large for the 32-bit WAV length fields."""

    def __init__(self, payload_length: int, limit: int):
        self.payload_length = payload_length
        self.limit = limit
        super().__init__(
            f"Payload of {payload_length} bytes exceeds WAV limit of {limit} bytes"
        )


class TransportError(CallTapError):
    """Connection drop or protocol error on the monitor stream."""


class StorageWriteFailure(CallTapError):
    """Raised when an encoded recording could not be written to storage."""


class CallSetupError(CallTapError):
    """Raised when the outbound call could not be initiated."""


class ControlRequestError(CallTapError):
    """Raised when a message could not be injected into the live call."""


class InvalidTransition(CallTapError, ValueError):
    """Raised on an illegal reconnect state change."""
