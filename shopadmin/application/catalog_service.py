"""Catalog service for dashboard operations.

High-level service that combines API client calls with the catalog
structures: it turns responses into trees, templates and drafts, and
turns failed responses into domain errors.
"""

from collections.abc import Iterable, Mapping
from typing import Any

import structlog

from shopadmin.catalog.attributes import (
    AttributeTemplate,
    AttributeValues,
    clean_template_fields,
)
from shopadmin.catalog.products import ImageFile, ProductDraft
from shopadmin.catalog.schemas import CategoryCreateRequest
from shopadmin.catalog.tree import CategoryTree
from shopadmin.catalog.variants import GeneratorConfig, VariantEditor, VariantGenerator
from shopadmin.domain.exceptions import CatalogAPIError, ProductValidationError
from shopadmin.infrastructure.api_client import AdminAPIClient, APIResponse
from shopadmin.infrastructure.config import Settings, settings as default_settings

logger = structlog.get_logger()


def _unwrap(response: APIResponse, fallback: str) -> Any:
    """Return the response body, raising on failure.

    Args:
        response: API response.
        fallback: Message used when the backend sent none.

    Raises:
        CatalogAPIError: If the request failed.
    """
    if response.success:
        return response.data
    error = response.error
    if error is None:
        raise CatalogAPIError(fallback)
    raise CatalogAPIError(
        error.message or fallback,
        error_code=error.error_code,
        status_code=error.status_code,
    )


def _data(body: Any) -> Any:
    """Strip the ``{"data": ...}`` envelope when present."""
    if isinstance(body, Mapping) and "data" in body:
        return body["data"]
    return body


class CatalogService:
    """Service for catalog operations.

    Example usage:
        service = CatalogService(session.client)
        tree = await service.load_tree()
        draft = await service.load_product(12)
        await service.save_product(draft, product_id=12)
    """

    def __init__(self, client: AdminAPIClient, settings: Settings | None = None) -> None:
        """Initialize service.

        Args:
            client: Backend API client.
            settings: Settings for image limits; defaults apply when omitted.
        """
        self.client = client
        self.settings = settings or default_settings

    # =========================================================================
    # Categories
    # =========================================================================

    async def load_tree(self) -> CategoryTree:
        """Fetch the category forest.

        Returns:
            CategoryTree (empty when the backend has none).

        Raises:
            CatalogAPIError: If the request failed.
        """
        body = _unwrap(
            await self.client.list_categories(),
            "Failed to load categories from server",
        )
        tree = CategoryTree.from_response(body)
        logger.info("Category tree loaded", roots=len(tree.root_ids), categories=len(tree))
        return tree

    async def create_category(self, name: str, parent_id: int | None = None) -> Any:
        """Create a category.

        Args:
            name: Category name.
            parent_id: Parent id, or None for a root category.

        Returns:
            Created category data as returned by the backend.

        Raises:
            CatalogAPIError: If the request failed.
        """
        request = CategoryCreateRequest(name=name, parent_id=parent_id)
        body = _unwrap(
            await self.client.create_category(request.name, request.parent_id),
            "Failed to create category",
        )
        logger.info("Category created", name=name, parent_id=parent_id)
        return _data(body)

    async def delete_category(self, category_id: int) -> None:
        """Delete a category.

        Raises:
            CatalogAPIError: If the request failed.
        """
        _unwrap(
            await self.client.delete_category(category_id),
            "Could not delete category",
        )
        logger.info("Category deleted", category_id=category_id)

    # =========================================================================
    # Attribute Templates
    # =========================================================================

    async def load_templates(self, category_id: int) -> list[AttributeTemplate]:
        """Fetch a category's attribute templates.

        A failed fetch is treated as "no templates yet".

        Args:
            category_id: Category identifier.

        Returns:
            Templates in display order.
        """
        response = await self.client.get_attribute_templates(category_id)
        if not response.success:
            logger.info(
                "No attribute templates",
                category_id=category_id,
                error_code=response.error.error_code if response.error else None,
            )
            return []
        rows = _data(response.data) or []
        return [AttributeTemplate.from_payload(row) for row in rows]

    async def save_templates(
        self,
        category_id: int,
        fields: Iterable[AttributeTemplate | Mapping[str, Any]],
    ) -> list[AttributeTemplate]:
        """Save a category's attribute templates, dropping unnamed fields.

        Args:
            category_id: Category identifier.
            fields: Fields as edited.

        Returns:
            The templates as stored after the save.

        Raises:
            EmptyTemplateError: If no field has a name.
            CatalogAPIError: If the request failed.
        """
        cleaned = clean_template_fields(fields)
        _unwrap(
            await self.client.save_attribute_templates(
                category_id, [t.to_dict() for t in cleaned]
            ),
            "Failed to sync with database",
        )
        logger.info("Attribute templates saved", category_id=category_id, count=len(cleaned))
        return await self.load_templates(category_id)

    # =========================================================================
    # Products
    # =========================================================================

    async def list_products(self, **params: Any) -> list[dict[str, Any]]:
        """Fetch the product list.

        Raises:
            CatalogAPIError: If the request failed.
        """
        body = _unwrap(
            await self.client.list_products(params or None),
            "Failed to load products",
        )
        return list(_data(body) or [])

    async def load_product(self, product_id: int | str) -> ProductDraft:
        """Fetch a product into an editable draft.

        Attribute values are resolved against the templates of the
        product's category.

        Args:
            product_id: Product identifier.

        Returns:
            ProductDraft.

        Raises:
            CatalogAPIError: If the request failed.
        """
        body = _unwrap(
            await self.client.get_product(product_id),
            "Failed to fetch product details",
        )
        payload = _data(body) or {}
        draft = ProductDraft.from_product(payload)
        if draft.category_id:
            templates = await self.load_templates(draft.category_id)
            draft.attributes = AttributeValues.from_product(
                payload.get("attributeValues") or [], templates
            )
        return draft

    def add_images(self, draft: ProductDraft, files: Iterable[ImageFile]) -> None:
        """Queue images on a draft using the configured limits.

        Raises:
            ImageLimitError: If a limit is exceeded.
        """
        draft.add_images(
            files,
            max_bytes=self.settings.max_image_bytes,
            max_images=self.settings.max_images,
        )

    def variant_editor(self, draft: ProductDraft | None = None) -> VariantEditor:
        """Open a variant editing session.

        Args:
            draft: Draft whose stored variants seed the session.

        Returns:
            VariantEditor using the configured SKU token length.
        """
        generator = VariantGenerator(
            GeneratorConfig(token_digits=self.settings.sku_token_digits)
        )
        return VariantEditor(generator, draft.variants if draft else ())

    async def save_product(
        self,
        draft: ProductDraft,
        product_id: int | str | None = None,
    ) -> Any:
        """Create or update a product from a draft.

        Args:
            draft: Product draft.
            product_id: Existing product to update; None creates one.

        Returns:
            Product data as returned by the backend.

        Raises:
            ProductValidationError: If the draft fails the form checks.
            CatalogAPIError: If the request failed.
        """
        reason = draft.validate()
        if reason is not None:
            raise ProductValidationError(reason)

        fields = draft.to_form_fields()
        files = draft.to_files()
        if product_id is None:
            response = await self.client.create_product(fields, files)
            fallback = "Failed to create product"
        else:
            response = await self.client.update_product(product_id, fields, files)
            fallback = "Failed to update product"

        body = _unwrap(response, fallback)
        logger.info(
            "Product saved",
            product_id=product_id,
            product_type=draft.product_type.value,
            variants=len(draft.variants),
            new_images=len(draft.new_images),
        )
        return _data(body)

    async def delete_product(self, product_id: int | str) -> None:
        """Delete a product.

        Raises:
            CatalogAPIError: If the request failed.
        """
        _unwrap(await self.client.delete_product(product_id), "Failed to delete product")
        logger.info("Product deleted", product_id=product_id)

    async def delete_image(self, draft: ProductDraft, image_id: int) -> None:
        """Delete a stored image and drop it from the draft.

        Raises:
            CatalogAPIError: If the request failed.
        """
        _unwrap(
            await self.client.delete_product_image(image_id),
            "Failed to delete image. It might be linked to orders.",
        )
        draft.forget_existing_image(image_id)
        logger.info("Product image deleted", image_id=image_id)
