"""Domain layer - value object base and domain exceptions.

Example usage:
    from shopadmin.domain import DomainError, VariantIndexError

    try:
        editor.remove_variant(7)
    except VariantIndexError as e:
        print(e.details)
"""

from shopadmin.domain.base import ValueObject
from shopadmin.domain.exceptions import (
    AuthenticationError,
    AttributeTemplateError,
    CatalogAPIError,
    CategoryError,
    DomainError,
    DuplicateCategoryError,
    EmptyTemplateError,
    ImageLimitError,
    InvalidAttributeValueError,
    InvalidCategorySelectionError,
    InvalidSelectionLevelError,
    InvalidVariantValueError,
    NotAuthenticatedError,
    ProductError,
    ProductValidationError,
    UnknownVariantFieldError,
    VariantError,
    VariantIndexError,
)

__all__ = [
    # Base
    "ValueObject",
    # Exceptions
    "AttributeTemplateError",
    "AuthenticationError",
    "CatalogAPIError",
    "CategoryError",
    "DomainError",
    "DuplicateCategoryError",
    "EmptyTemplateError",
    "ImageLimitError",
    "InvalidAttributeValueError",
    "InvalidCategorySelectionError",
    "InvalidSelectionLevelError",
    "InvalidVariantValueError",
    "NotAuthenticatedError",
    "ProductError",
    "ProductValidationError",
    "UnknownVariantFieldError",
    "VariantError",
    "VariantIndexError",
]
