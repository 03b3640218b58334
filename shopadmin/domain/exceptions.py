"""Domain exceptions.

All domain-level errors raised by the catalog structures and the
application services. Pure lookups (category paths, filtering) never
raise; these errors are reserved for invalid edits and rejected input.
"""

from typing import Any


class DomainError(Exception):
    """Base class for all domain exceptions.

    All domain errors should inherit from this class to allow
    catching domain-specific errors at the application layer.
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """Initialize domain error.

        Args:
            message: Human-readable error message.
            details: Optional dictionary with additional error context.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


# ============================================================================
# Category Errors
# ============================================================================


class CategoryError(DomainError):
    """Base class for category tree errors."""

    pass


class DuplicateCategoryError(CategoryError):
    """Raised when a category payload contains the same id twice."""

    def __init__(self, category_id: int) -> None:
        """Initialize duplicate category error.

        Args:
            category_id: The repeated category id.
        """
        super().__init__(
            f"Category {category_id} appears more than once in the tree",
            details={"category_id": category_id},
        )


class InvalidSelectionLevelError(CategoryError):
    """Raised when a dropdown level is selected before its parent level."""

    def __init__(self, level: int, depth: int) -> None:
        """Initialize invalid selection level error.

        Args:
            level: Requested level.
            depth: Current depth of the selection path.
        """
        super().__init__(
            f"Cannot select at level {level}; selection path has depth {depth}",
            details={"level": level, "depth": depth},
        )


class InvalidCategorySelectionError(CategoryError):
    """Raised when a picked category is not offered at its dropdown level."""

    def __init__(self, category_id: int, level: int) -> None:
        """Initialize invalid category selection error.

        Args:
            category_id: Picked category.
            level: Dropdown level it was picked at.
        """
        super().__init__(
            f"Category {category_id} is not an option at level {level}",
            details={"category_id": category_id, "level": level},
        )


# ============================================================================
# Variant Errors
# ============================================================================


class VariantError(DomainError):
    """Base class for variant editing errors."""

    pass


class VariantIndexError(VariantError):
    """Raised when a variant or axis index is out of range."""

    def __init__(self, index: int, size: int, kind: str = "variant") -> None:
        """Initialize variant index error.

        Args:
            index: Requested index.
            size: Number of items available.
            kind: What was being indexed ("variant" or "axis").
        """
        super().__init__(
            f"No {kind} at index {index} (have {size})",
            details={"index": index, "size": size, "kind": kind},
        )


class UnknownVariantFieldError(VariantError):
    """Raised when an edit targets a field variants do not have."""

    def __init__(self, field_name: str) -> None:
        """Initialize unknown variant field error.

        Args:
            field_name: The rejected field name.
        """
        super().__init__(
            f"Variant has no editable field '{field_name}'",
            details={"field": field_name},
        )


class InvalidVariantValueError(VariantError):
    """Raised when a variant field edit cannot be coerced."""

    def __init__(self, field_name: str, value: Any) -> None:
        """Initialize invalid variant value error.

        Args:
            field_name: Field being edited.
            value: Raw value that failed coercion.
        """
        super().__init__(
            f"Invalid value {value!r} for variant field '{field_name}'",
            details={"field": field_name, "value": value},
        )


# ============================================================================
# Attribute Errors
# ============================================================================


class AttributeTemplateError(DomainError):
    """Base class for attribute template errors."""

    pass


class InvalidAttributeValueError(AttributeTemplateError):
    """Raised when a raw form value does not fit its template type."""

    def __init__(self, template_name: str, template_type: str, value: Any) -> None:
        """Initialize invalid attribute value error.

        Args:
            template_name: Attribute template name.
            template_type: Declared template type.
            value: Raw value that failed coercion.
        """
        super().__init__(
            f"Invalid {template_type} value {value!r} for attribute '{template_name}'",
            details={
                "template": template_name,
                "type": template_type,
                "value": value,
            },
        )


class EmptyTemplateError(AttributeTemplateError):
    """Raised when saving a template set with no named fields."""

    def __init__(self) -> None:
        """Initialize empty template error."""
        super().__init__("At least one attribute name is required")


# ============================================================================
# Product Errors
# ============================================================================


class ProductError(DomainError):
    """Base class for product draft errors."""

    pass


class ProductValidationError(ProductError):
    """Raised when a product draft fails the form checks."""

    def __init__(self, reason: str) -> None:
        """Initialize product validation error.

        Args:
            reason: First failed check, as shown to the user.
        """
        super().__init__(reason, details={"reason": reason})


class ImageLimitError(ProductError):
    """Raised when new images exceed the size or count limits."""

    pass


# ============================================================================
# Session / API Errors
# ============================================================================


class NotAuthenticatedError(DomainError):
    """Raised when an operation needs a signed-in user and there is none."""

    def __init__(self) -> None:
        """Initialize not authenticated error."""
        super().__init__("No authenticated user in this session")


class CatalogAPIError(DomainError):
    """Raised by the catalog service when the backend rejects a request.

    The backend joins several validation messages with commas; they are
    split into ``messages`` so each one can be reported on its own.
    """

    def __init__(
        self,
        message: str,
        error_code: str = "UNKNOWN_ERROR",
        status_code: int = 500,
    ) -> None:
        """Initialize catalog API error.

        Args:
            message: Backend error message.
            error_code: Machine-readable error code.
            status_code: HTTP status code.
        """
        super().__init__(
            message,
            details={"error_code": error_code, "status_code": status_code},
        )
        self.error_code = error_code
        self.status_code = status_code
        self.messages = [m.strip() for m in message.split(",") if m.strip()] or [message]


class AuthenticationError(DomainError):
    """Raised when the backend rejects a sign-in."""

    def __init__(self, message: str, status_code: int = 401) -> None:
        """Initialize authentication error.

        Args:
            message: Backend error message.
            status_code: HTTP status code.
        """
        super().__init__(message, details={"status_code": status_code})
        self.status_code = status_code
