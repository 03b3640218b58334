"""Product drafts.

The editable state behind the add/edit product form: scalar fields,
attribute values, videos, variants and images. Drafts are checked on
the client before submission and flattened into multipart form fields.
"""

import json
import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from shopadmin.catalog.attributes import AttributeValues
from shopadmin.catalog.variants import VariantRecord
from shopadmin.domain.exceptions import ImageLimitError

MAX_IMAGE_BYTES = 5 * 1024 * 1024
MAX_IMAGES = 5


class ProductType(str, Enum):
    """Whether a product sells as one SKU or through variants."""

    SIMPLE = "simple"
    VARIABLE = "variable"


def slugify(text: str) -> str:
    """Derive a URL slug from a product name.

    Args:
        text: Product name.

    Returns:
        Lowercase slug (e.g., "Eau de Parfum 50ml" -> "eau-de-parfum-50ml").
    """
    slug = re.sub(r"\s+", "-", str(text).lower())
    slug = re.sub(r"[^\w\-]+", "", slug)
    slug = re.sub(r"--+", "-", slug)
    return slug.strip("-")


@dataclass
class ProductImage:
    """An image already stored on the backend."""

    id: int
    url: str
    is_primary: bool = False


@dataclass
class ImageFile:
    """An image selected for upload."""

    filename: str
    content: bytes
    content_type: str = "application/octet-stream"

    @property
    def size(self) -> int:
        return len(self.content)


@dataclass
class ProductVideo:
    """A product video link."""

    video_url: str
    title: str = ""
    provider: str = ""

    def to_dict(self) -> dict[str, str]:
        return {"video_url": self.video_url, "title": self.title, "provider": self.provider}


def _number(value: Any) -> float:
    """Form numbers: blank counts as zero, junk as NaN (fails every check)."""
    if value is None or value == "":
        return 0.0
    try:
        return float(value)
    except (TypeError, ValueError):
        return float("nan")


# Scalar form fields in submission order
SCALAR_FIELDS = (
    "name",
    "slug",
    "sku",
    "price",
    "brand",
    "category_id",
    "stock",
    "description",
    "similarities",
    "weight",
    "length",
    "width",
    "height",
    "is_published",
    "is_pinned",
    "is_best_seller",
)


@dataclass
class ProductDraft:
    """Editable product form state.

    Numeric fields hold whatever the form holds (often strings); they
    are only interpreted by ``validate`` and sent as-is.
    """

    name: str = ""
    slug: str = ""
    sku: str = ""
    price: Any = ""
    brand: str = ""
    category_id: int | None = None
    stock: Any = ""
    description: str = ""
    similarities: str = ""
    weight: Any = ""
    length: Any = ""
    width: Any = ""
    height: Any = ""
    is_published: bool = True
    is_pinned: bool = False
    is_best_seller: bool = False
    product_type: ProductType = ProductType.SIMPLE
    attributes: AttributeValues = field(default_factory=AttributeValues)
    videos: list[ProductVideo] = field(default_factory=list)
    variants: list[VariantRecord] = field(default_factory=list)
    existing_images: list[ProductImage] = field(default_factory=list)
    new_images: list[ImageFile] = field(default_factory=list)

    @classmethod
    def from_product(cls, payload: Mapping[str, Any]) -> "ProductDraft":
        """Map a fetched product (``GET /products/{id}`` data) to a draft.

        Attribute values need the category's templates and are loaded
        separately.

        Args:
            payload: Product data.

        Returns:
            ProductDraft.
        """

        def text(key: str) -> Any:
            value = payload.get(key)
            return "" if value is None else value

        stock = payload.get("countInStock")
        if stock is None:
            stock = payload.get("stock")

        return cls(
            name=text("name"),
            slug=text("slug"),
            sku=text("sku"),
            price=text("price"),
            brand=text("brand"),
            category_id=payload.get("category_id"),
            stock="" if stock is None else stock,
            description=text("description"),
            similarities=text("similarities"),
            weight=text("weight"),
            length=text("length"),
            width=text("width"),
            height=text("height"),
            is_published=bool(payload.get("is_published")),
            is_pinned=bool(payload.get("is_pinned")),
            is_best_seller=bool(payload.get("is_best_seller")),
            product_type=ProductType(payload.get("product_type") or ProductType.SIMPLE),
            videos=[
                ProductVideo(
                    video_url=v.get("video_url", ""),
                    title=v.get("title") or "",
                    provider=v.get("provider") or "",
                )
                for v in payload.get("videos") or []
            ],
            variants=[VariantRecord.from_payload(v) for v in payload.get("variants") or []],
            existing_images=[
                ProductImage(
                    id=img["id"],
                    url=img.get("url", ""),
                    is_primary=bool(img.get("is_primary")),
                )
                for img in payload.get("images") or []
            ],
        )

    def rename(self, name: str) -> None:
        """Set the name and regenerate the slug from it."""
        self.name = name
        self.slug = slugify(name)

    # =========================================================================
    # Images
    # =========================================================================

    def add_images(
        self,
        files: Iterable[ImageFile],
        max_bytes: int = MAX_IMAGE_BYTES,
        max_images: int = MAX_IMAGES,
    ) -> None:
        """Queue new images for upload.

        Either every file is accepted or none is.

        Args:
            files: Selected files.
            max_bytes: Largest accepted file.
            max_images: Most images the product may carry in total.

        Raises:
            ImageLimitError: If a file is too large or the total is exceeded.
        """
        files = list(files)
        if any(f.size > max_bytes for f in files):
            raise ImageLimitError(
                f"One or more images exceed the {max_bytes // (1024 * 1024)}MB limit",
                details={"max_bytes": max_bytes},
            )
        total = len(self.existing_images) + len(self.new_images) + len(files)
        if total > max_images:
            raise ImageLimitError(
                f"Total images cannot exceed {max_images}",
                details={"max_images": max_images, "requested": total},
            )
        self.new_images.extend(files)

    def remove_new_image(self, index: int) -> ImageFile:
        """Drop a queued image by position."""
        return self.new_images.pop(index)

    def forget_existing_image(self, image_id: int) -> None:
        """Drop a stored image from the draft after the backend deleted it."""
        self.existing_images = [img for img in self.existing_images if img.id != image_id]

    # =========================================================================
    # Validation
    # =========================================================================

    def validate(self) -> str | None:
        """Run the form checks.

        Returns:
            The first failed check as a user-facing message, or None.
        """
        if not self.name.strip() or len(self.name) < 3:
            return "Product name must be at least 3 characters"
        if not self.category_id:
            return "Please select a category"
        if not self.existing_images and not self.new_images:
            return "Please have at least one image"
        if not self.brand.strip():
            return "Brand is required"

        if self.product_type is ProductType.SIMPLE:
            if not _number(self.price) > 0:
                return "Price must be greater than $0"
            if self.stock == "" or not _number(self.stock) >= 0:
                return "Stock cannot be negative"

        if self.product_type is ProductType.VARIABLE:
            if not self.variants:
                return "Please generate at least one variant for variable products"
            for variant in self.variants:
                if not _number(variant.price) > 0 or not _number(variant.stock) >= 0:
                    return f"Variant {variant.sku} has invalid price or stock"

        if _number(self.weight) < 0:
            return "Weight cannot be negative"
        if any(_number(v) < 0 for v in (self.length, self.width, self.height)):
            return "Dimensions cannot be negative"

        return None

    # =========================================================================
    # Serialization
    # =========================================================================

    def to_form_fields(self) -> list[tuple[str, str]]:
        """Flatten the draft into multipart form fields.

        Empty and null scalars are left out, except ``stock`` which is
        always sent. Variants go out only for variable products.

        Returns:
            (name, value) pairs in submission order.
        """
        fields: list[tuple[str, str]] = []
        for name in SCALAR_FIELDS:
            value = getattr(self, name)
            if name == "stock":
                fields.append((name, str(value)))
            elif value is not None and value != "":
                fields.append((name, _form_value(value)))

        fields.append(("product_type", self.product_type.value))
        fields.append(("attributes", self.attributes.to_json()))

        videos = [v.to_dict() for v in self.videos if v.video_url.strip()]
        if videos:
            fields.append(("videos", json.dumps(videos)))

        if self.product_type is ProductType.VARIABLE:
            fields.append(("variants", json.dumps([v.to_dict() for v in self.variants])))

        return fields

    def to_files(self) -> list[tuple[str, tuple[str, bytes, str]]]:
        """Queued images as httpx multipart file tuples."""
        return [
            ("images", (f.filename, f.content, f.content_type)) for f in self.new_images
        ]


def _form_value(value: Any) -> str:
    """Render a scalar the way a browser form would."""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)
