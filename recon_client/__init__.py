# Python client for the RECON backend API
from .api import ApiClient, ApiClientError
from .session import SessionStore
from .transcripts import TranscriptCache

__all__ = [
    "ApiClient",
    "ApiClientError",
    "SessionStore",
    "TranscriptCache",
]
