"""Pytest configuration and fixtures."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from shopadmin.catalog.tree import CategoryTree
from shopadmin.infrastructure.api_client import AdminAPIClient, APIError, APIResponse


# Fragrance (1)
# ├── Perfume (2)
# │   ├── Eau de Parfum (4)
# │   └── Eau de Toilette (5)
# └── Body Mist (3)
# Apparel (6)
# └── Shirts (7)
#     └── Polo Shirts (8)
# Gift Cards (9)
CATEGORY_PAYLOAD = [
    {
        "id": 1,
        "name": "Fragrance",
        "parent_id": None,
        "children": [
            {
                "id": 2,
                "name": "Perfume",
                "parent_id": 1,
                "children": [
                    {"id": 4, "name": "Eau de Parfum", "parent_id": 2, "children": []},
                    {"id": 5, "name": "Eau de Toilette", "parent_id": 2, "children": []},
                ],
            },
            {"id": 3, "name": "Body Mist", "parent_id": 1, "children": []},
        ],
    },
    {
        "id": 6,
        "name": "Apparel",
        "parent_id": None,
        "children": [
            {
                "id": 7,
                "name": "Shirts",
                "parent_id": 6,
                "children": [
                    {"id": 8, "name": "Polo Shirts", "parent_id": 7, "children": None},
                ],
            },
        ],
    },
    {"id": 9, "name": "Gift Cards", "parent_id": None},
]


@pytest.fixture
def category_payload() -> list[dict]:
    """Nested category list as the backend returns it."""
    return CATEGORY_PAYLOAD


@pytest.fixture
def tree() -> CategoryTree:
    """Category tree built from the sample payload."""
    return CategoryTree.from_payload(CATEGORY_PAYLOAD)


@pytest.fixture
def mock_api_client() -> MagicMock:
    """Create a mock dashboard API client."""
    client = MagicMock(spec=AdminAPIClient)

    # Make all methods async
    client.login = AsyncMock()
    client.get_profile = AsyncMock()
    client.list_categories = AsyncMock()
    client.create_category = AsyncMock()
    client.delete_category = AsyncMock()
    client.get_attribute_templates = AsyncMock()
    client.save_attribute_templates = AsyncMock()
    client.list_products = AsyncMock()
    client.get_product = AsyncMock()
    client.create_product = AsyncMock()
    client.update_product = AsyncMock()
    client.delete_product = AsyncMock()
    client.delete_product_image = AsyncMock()
    client.close = AsyncMock()

    return client


def make_success_response(data: dict | list | None) -> APIResponse:
    """Create a successful API response."""
    return APIResponse(success=True, data=data)


def make_error_response(
    error_code: str,
    message: str,
    status_code: int = 400,
) -> APIResponse:
    """Create an error API response."""
    return APIResponse(
        success=False,
        error=APIError(
            error_code=error_code,
            message=message,
            status_code=status_code,
        ),
    )
