"""Wire schemas for the dashboard REST API.

Pydantic models for the payloads the backend sends and accepts. The
catalog structures are built from these after validation, so malformed
rows fail here rather than deep inside a tree walk.
"""

import json
from typing import Any, Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


# ============================================================================
# Category Schemas
# ============================================================================


class CategoryPayload(BaseModel):
    """One category as returned by ``GET /categories`` (nested)."""

    id: int = Field(..., description="Unique category identifier")
    name: str = Field(..., description="Display name")
    parent_id: int | None = Field(default=None, description="Parent category id")
    children: list["CategoryPayload"] = Field(
        default_factory=list, description="Direct subcategories, in display order"
    )

    @field_validator("children", mode="before")
    @classmethod
    def _none_children(cls, value: Any) -> Any:
        return [] if value is None else value


class CategoryCreateRequest(BaseModel):
    """Request body for ``POST /categories``."""

    name: str = Field(..., min_length=1, description="Category name")
    parent_id: int | None = Field(
        default=None, description="Parent category id; None creates a root"
    )


# ============================================================================
# Variant Schemas
# ============================================================================


class VariantPayload(BaseModel):
    """A product variant row as stored by the backend.

    ``options`` may arrive JSON-encoded when the backend keeps it in a
    text column.
    """

    sku: str = Field(default="", description="Stock keeping unit")
    options: dict[str, str] = Field(
        default_factory=dict, description="Axis name to chosen value"
    )
    price: float = Field(default=0, description="Variant price")
    stock: int = Field(default=0, description="Units in stock")
    weight: float = Field(default=0, description="Weight in grams")

    @field_validator("options", mode="before")
    @classmethod
    def _decode_options(cls, value: Any) -> Any:
        if value is None:
            return {}
        if isinstance(value, str):
            return json.loads(value) if value.strip() else {}
        return value

    @field_validator("price", "stock", "weight", mode="before")
    @classmethod
    def _none_is_zero(cls, value: Any) -> Any:
        return 0 if value is None or value == "" else value


# ============================================================================
# Attribute Schemas
# ============================================================================


AttributeType = Literal["text", "number", "color"]


class AttributeTemplatePayload(BaseModel):
    """One attribute field defined for a category."""

    id: int | None = Field(default=None, description="Template id once saved")
    name: str = Field(default="", description="Attribute label")
    type: AttributeType = Field(default="text", description="Input type")


class AttributeTemplatesSaveRequest(BaseModel):
    """Request body for ``POST /products/attributes/templates``."""

    model_config = ConfigDict(populate_by_name=True)

    category_id: int = Field(..., alias="categoryId")
    fields: list[AttributeTemplatePayload]


# ============================================================================
# Auth Schemas
# ============================================================================


class UserPayload(BaseModel):
    """A dashboard user as returned by login and profile endpoints."""

    model_config = ConfigDict(populate_by_name=True)

    id: int | str = Field(..., validation_alias=AliasChoices("id", "_id"))
    name: str = ""
    email: str = ""
    is_admin: bool = Field(
        default=False, validation_alias=AliasChoices("is_admin", "isAdmin")
    )


class LoginResponse(UserPayload):
    """Response of ``POST /users/login``: the user plus a bearer token."""

    token: str = Field(..., description="Bearer token for later requests")
