"""Backend client layer -- marketplace REST API integration via httpx."""

from desk.backend.client import BackendClient
from desk.backend.http_client import HttpBackendClient

__all__ = ["BackendClient", "HttpBackendClient"]
