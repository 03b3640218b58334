"""Infrastructure - configuration, logging and the backend API client."""

from shopadmin.infrastructure.api_client import AdminAPIClient, APIError, APIResponse
from shopadmin.infrastructure.config import Settings, settings
from shopadmin.infrastructure.logging import configure_logging

__all__ = [
    "AdminAPIClient",
    "APIError",
    "APIResponse",
    "Settings",
    "configure_logging",
    "settings",
]
