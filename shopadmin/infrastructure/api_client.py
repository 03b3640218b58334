"""Dashboard API Client.

Thin HTTP client for the e-commerce backend REST API.
This module handles authentication, error handling, and response parsing.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

import httpx
import structlog

from shopadmin.catalog.schemas import AttributeTemplatesSaveRequest

logger = structlog.get_logger()


@dataclass
class APIError:
    """Represents an API error response."""

    error_code: str
    message: str
    status_code: int
    details: dict[str, Any] = field(default_factory=dict)


@dataclass
class APIResponse:
    """Represents an API response."""

    success: bool
    data: dict[str, Any] | list[Any] | None = None
    error: APIError | None = None


def _form_data(fields: list[tuple[str, str]]) -> dict[str, str | list[str]]:
    """Group form pairs into the mapping httpx expects.

    Repeated names become a list so every value is sent.
    """
    grouped: dict[str, str | list[str]] = {}
    for name, value in fields:
        if name not in grouped:
            grouped[name] = value
            continue
        current = grouped[name]
        if isinstance(current, list):
            current.append(value)
        else:
            grouped[name] = [current, value]
    return grouped


class AdminAPIClient:
    """HTTP client for the dashboard backend.

    Provides one method per endpoint the dashboard uses. The bearer
    token is read from ``token_provider`` on every request, so signing in
    or out takes effect without rebuilding the client.
    """

    def __init__(
        self,
        base_url: str,
        token_provider: Callable[[], str | None] | None = None,
        timeout: float = 30.0,
    ) -> None:
        """Initialize the API client.

        Args:
            base_url: Backend API base URL (e.g., "http://localhost:5000/api").
            token_provider: Returns the current auth token, if any.
            timeout: Request timeout in seconds.
        """
        self.base_url = base_url.rstrip("/")
        self.token_provider = token_provider or (lambda: None)
        self.timeout = timeout
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                headers={"Accept": "application/json"},
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def _request(
        self,
        method: str,
        path: str,
        json: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
        data: list[tuple[str, str]] | None = None,
        files: list[tuple[str, tuple[str, bytes, str]]] | None = None,
    ) -> APIResponse:
        """Make an API request.

        Args:
            method: HTTP method.
            path: API endpoint path.
            json: Request body as JSON.
            params: Query parameters.
            data: Multipart form fields.
            files: Multipart file parts.

        Returns:
            APIResponse with success status and data or error.
        """
        client = await self._get_client()

        headers = {}
        token = self.token_provider()
        if token:
            headers["Authorization"] = f"Bearer {token}"

        # Filter out None params
        if params:
            params = {k: v for k, v in params.items() if v is not None}

        try:
            logger.debug(
                "Making API request",
                method=method,
                path=path,
                has_body=json is not None or data is not None,
            )

            response = await client.request(
                method=method,
                url=path,
                json=json,
                params=params,
                data=_form_data(data) if data else None,
                files=files,
                headers=headers,
            )

            if response.status_code >= 400:
                try:
                    error_data = response.json()
                except ValueError:
                    error_data = {}
                if not isinstance(error_data, dict):
                    error_data = {}
                return APIResponse(
                    success=False,
                    error=APIError(
                        error_code=error_data.get("error_code", "HTTP_ERROR"),
                        message=error_data.get("message")
                        or f"Request failed with status {response.status_code}",
                        status_code=response.status_code,
                        details=error_data.get("details") or {},
                    ),
                )

            # Handle empty responses (204 No Content)
            if response.status_code == 204 or not response.content:
                return APIResponse(success=True, data=None)

            try:
                body = response.json()
            except ValueError:
                logger.error(
                    "Invalid API response body",
                    path=path,
                    status_code=response.status_code,
                )
                return APIResponse(
                    success=False,
                    error=APIError(
                        error_code="INVALID_RESPONSE",
                        message=f"Response from {path} is not valid JSON",
                        status_code=502,
                    ),
                )
            return APIResponse(success=True, data=body)

        except httpx.TimeoutException as e:
            logger.error("API request timeout", path=path, error=str(e))
            return APIResponse(
                success=False,
                error=APIError(
                    error_code="TIMEOUT",
                    message=f"Request timed out: {path}",
                    status_code=504,
                ),
            )
        except httpx.RequestError as e:
            logger.error("API request failed", path=path, error=str(e))
            return APIResponse(
                success=False,
                error=APIError(
                    error_code="REQUEST_ERROR",
                    message=f"Request failed: {str(e)}",
                    status_code=500,
                ),
            )

    # =========================================================================
    # Auth Endpoints
    # =========================================================================

    async def login(self, email: str, password: str) -> APIResponse:
        """Sign in.

        Args:
            email: User email.
            password: User password.

        Returns:
            APIResponse with the user fields and ``token``.
        """
        return await self._request(
            method="POST",
            path="/users/login",
            json={"email": email, "password": password},
        )

    async def get_profile(self) -> APIResponse:
        """Get the signed-in user's profile.

        Returns:
            APIResponse with user data.
        """
        return await self._request(method="GET", path="/users/profile")

    # =========================================================================
    # Category Endpoints
    # =========================================================================

    async def list_categories(self) -> APIResponse:
        """Get the category forest.

        Returns:
            APIResponse with ``{"data": [...nested categories]}``.
        """
        return await self._request(method="GET", path="/categories")

    async def create_category(self, name: str, parent_id: int | None = None) -> APIResponse:
        """Create a category.

        Args:
            name: Category name.
            parent_id: Parent id; None creates a root category.

        Returns:
            APIResponse with created category data.
        """
        return await self._request(
            method="POST",
            path="/categories",
            json={"name": name, "parent_id": parent_id},
        )

    async def delete_category(self, category_id: int) -> APIResponse:
        """Delete a category.

        Args:
            category_id: Category identifier.

        Returns:
            APIResponse.
        """
        return await self._request(method="DELETE", path=f"/categories/{category_id}")

    # =========================================================================
    # Attribute Template Endpoints
    # =========================================================================

    async def get_attribute_templates(self, category_id: int) -> APIResponse:
        """Get the attribute templates of a category.

        Args:
            category_id: Category identifier.

        Returns:
            APIResponse with ``{"data": [...templates]}``.
        """
        return await self._request(
            method="GET",
            path=f"/products/attributes/templates/{category_id}",
        )

    async def save_attribute_templates(
        self,
        category_id: int,
        fields: list[dict[str, Any]],
    ) -> APIResponse:
        """Replace the attribute templates of a category.

        Args:
            category_id: Category identifier.
            fields: Template fields (name, type, optional id).

        Returns:
            APIResponse.
        """
        body = AttributeTemplatesSaveRequest(category_id=category_id, fields=fields)
        return await self._request(
            method="POST",
            path="/products/attributes/templates",
            json=body.model_dump(by_alias=True, exclude_none=True),
        )

    # =========================================================================
    # Product Endpoints
    # =========================================================================

    async def list_products(self, params: dict[str, Any] | None = None) -> APIResponse:
        """List products.

        Args:
            params: Optional query parameters passed through.

        Returns:
            APIResponse with product list.
        """
        return await self._request(method="GET", path="/products", params=params)

    async def get_product(self, product_id: int | str) -> APIResponse:
        """Get a product by ID.

        Args:
            product_id: Product identifier.

        Returns:
            APIResponse with ``{"data": product}``.
        """
        return await self._request(method="GET", path=f"/products/{product_id}")

    async def create_product(
        self,
        fields: list[tuple[str, str]],
        files: list[tuple[str, tuple[str, bytes, str]]] | None = None,
    ) -> APIResponse:
        """Create a product from multipart form fields.

        Args:
            fields: Form fields.
            files: Image file parts.

        Returns:
            APIResponse with created product data.
        """
        return await self._request(
            method="POST",
            path="/products",
            data=fields,
            files=files or None,
        )

    async def update_product(
        self,
        product_id: int | str,
        fields: list[tuple[str, str]],
        files: list[tuple[str, tuple[str, bytes, str]]] | None = None,
    ) -> APIResponse:
        """Update a product from multipart form fields.

        Args:
            product_id: Product identifier.
            fields: Form fields.
            files: New image file parts.

        Returns:
            APIResponse with updated product data.
        """
        return await self._request(
            method="PUT",
            path=f"/products/{product_id}",
            data=fields,
            files=files or None,
        )

    async def delete_product(self, product_id: int | str) -> APIResponse:
        """Delete a product.

        Args:
            product_id: Product identifier.

        Returns:
            APIResponse.
        """
        return await self._request(method="DELETE", path=f"/products/{product_id}")

    async def delete_product_image(self, image_id: int) -> APIResponse:
        """Delete a stored product image.

        Args:
            image_id: Image identifier.

        Returns:
            APIResponse.
        """
        return await self._request(method="DELETE", path=f"/products/images/{image_id}")
