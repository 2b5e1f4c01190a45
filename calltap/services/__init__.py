"""Services layer for CallTap application logic."""

from .call_client import VapiClient
from .recording_service import RecordingService

__all__ = [
    "VapiClient",
    "RecordingService"
]
