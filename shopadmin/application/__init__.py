"""Application layer - session context and catalog orchestration."""

from shopadmin.application.catalog_service import CatalogService
from shopadmin.application.session import AuthSession, create_session

__all__ = [
    "AuthSession",
    "CatalogService",
    "create_session",
]
