"""Product variant generator.

Expands named option axes (Size: S, M, L / Color: Red, Blue) into one
variant row per combination, each with a derived SKU and zeroed price,
stock and weight. Rows are then edited in place by position.

Generation order is the cartesian product with the first axis as the
outermost loop, so the last axis varies fastest:

    Size: S, M  x  Color: Red, Blue
    -> (S, Red), (S, Blue), (M, Red), (M, Blue)
"""

import itertools
import json
import re
import time
from collections.abc import Callable, Iterable, Iterator, Mapping, Sequence
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any

import structlog

from shopadmin.catalog.schemas import VariantPayload
from shopadmin.domain.base import ValueObject
from shopadmin.domain.exceptions import (
    InvalidVariantValueError,
    UnknownVariantFieldError,
    VariantIndexError,
)

logger = structlog.get_logger()


# ============================================================================
# Constants
# ============================================================================

SKU_PREFIX = "VAR"

_WHITESPACE = re.compile(r"\s+")

# Editable variant fields and the type form input is coerced to
EDITABLE_FIELDS: dict[str, type] = {
    "sku": str,
    "price": float,
    "stock": int,
    "weight": float,
}


# ============================================================================
# Value Types
# ============================================================================


def parse_option_values(raw: str) -> tuple[str, ...]:
    """Split a comma-separated value list.

    Args:
        raw: Input such as "S, M, L".

    Returns:
        Trimmed, non-empty values in input order.
    """
    return tuple(v.strip() for v in raw.split(",") if v.strip())


@dataclass(frozen=True)
class OptionAxis(ValueObject):
    """A named dimension of variation.

    Attributes:
        name: Axis name (e.g., "Size").
        values: Values in display order (e.g., ("S", "M", "L")).
    """

    name: str
    values: tuple[str, ...]

    @classmethod
    def parse(cls, name: str, raw_values: str) -> "OptionAxis":
        """Create an axis from form input.

        Args:
            name: Axis name.
            raw_values: Comma-separated values.

        Returns:
            OptionAxis (possibly with no values).
        """
        return cls(name=name.strip(), values=parse_option_values(raw_values))

    @property
    def is_usable(self) -> bool:
        """Whether the axis can contribute to generation."""
        return bool(self.name) and bool(self.values)


@dataclass
class VariantRecord:
    """One SKU-bearing combination of option values.

    Attributes:
        sku: Stock keeping unit.
        options: Axis name to chosen value, one entry per axis.
        price: Variant price.
        stock: Units in stock.
        weight: Weight in grams.
    """

    sku: str
    options: dict[str, str] = field(default_factory=dict)
    price: float = 0
    stock: int = 0
    weight: float = 0

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any] | VariantPayload) -> "VariantRecord":
        """Create a record from a fetched product's variant row.

        Args:
            payload: Variant row; ``options`` may be JSON-encoded.

        Returns:
            VariantRecord.
        """
        row = VariantPayload.model_validate(payload)
        return cls(
            sku=row.sku,
            options=dict(row.options),
            price=row.price,
            stock=row.stock,
            weight=row.weight,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary.

        Returns:
            Dictionary with sku, options, price, stock and weight.
        """
        return asdict(self)

    @property
    def label(self) -> str:
        """Option values joined for display (e.g., "S / Red")."""
        return " / ".join(self.options.values())


# ============================================================================
# Generator
# ============================================================================


@dataclass
class GeneratorConfig:
    """Configuration for variant generation.

    Attributes:
        sku_prefix: Leading SKU segment.
        token_digits: Trailing timestamp digits appended to every SKU.
    """

    sku_prefix: str = SKU_PREFIX
    token_digits: int = 4

    def __post_init__(self) -> None:
        """Validate token length against a millisecond timestamp."""
        if not 1 <= self.token_digits <= 13:
            raise ValueError(
                f"token_digits must be between 1 and 13, got {self.token_digits}"
            )


class VariantGenerator:
    """Expands option axes into variant records.

    Example usage:
        generator = VariantGenerator()
        variants = generator.generate([
            OptionAxis("Size", ("S", "M")),
            OptionAxis("Color", ("Red", "Blue")),
        ])
        [v.sku for v in variants]   # ['VAR-S-RED-4821', ...]
    """

    def __init__(
        self,
        config: GeneratorConfig | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """Initialize generator.

        Args:
            config: Generator configuration.
            clock: Returns the current time in seconds; the SKU token is
                taken from its millisecond value.
        """
        self.config = config or GeneratorConfig()
        self.clock = clock

    def _token(self) -> str:
        """Short batch token from the current timestamp."""
        millis = str(int(self.clock() * 1000))
        return millis[-self.config.token_digits:]

    def combinations(self, axes: Sequence[OptionAxis]) -> Iterator[dict[str, str]]:
        """Iterate the cartesian product of usable axes.

        Axes without values are skipped. With no usable axes nothing is
        yielded.

        Args:
            axes: Axes in definition order.

        Yields:
            Axis name to value mappings, last axis varying fastest.
        """
        usable = [axis for axis in axes if axis.is_usable]
        if not usable:
            return
        for combo in itertools.product(*(axis.values for axis in usable)):
            options: dict[str, str] = {}
            for axis, value in zip(usable, combo):
                options[axis.name] = value
            yield options

    def sku_for(self, options: Mapping[str, str], token: str) -> str:
        """Derive the SKU for one combination.

        Args:
            options: Combination in axis order.
            token: Batch token.

        Returns:
            SKU such as "VAR-XL-NAVYBLUE-4821".
        """
        body = _WHITESPACE.sub("", "-".join(options.values()).upper())
        return f"{self.config.sku_prefix}-{body}-{token}"

    def generate(self, axes: Sequence[OptionAxis]) -> list[VariantRecord]:
        """Materialize one variant per combination.

        Args:
            axes: Axes in definition order.

        Returns:
            Variants with zeroed price, stock and weight. SKUs are unique
            within the batch; empty when no axis has values.
        """
        token = self._token()
        seen: dict[str, int] = {}
        variants = []

        for options in self.combinations(axes):
            sku = self.sku_for(options, token)
            # Values differing only by case or spacing collapse to one SKU
            if sku in seen:
                seen[sku] += 1
                sku = f"{sku}-{seen[sku]}"
            else:
                seen[sku] = 1
            variants.append(VariantRecord(sku=sku, options=options))

        logger.debug(
            "Generated variants",
            axes=[axis.name for axis in axes if axis.is_usable],
            count=len(variants),
        )
        return variants


def generate_variants(
    axes: Sequence[OptionAxis],
    clock: Callable[[], float] | None = None,
) -> list[VariantRecord]:
    """Expand axes into variants with the default configuration.

    Args:
        axes: Axes in definition order.
        clock: Optional time source for the SKU token.

    Returns:
        Generated variants.
    """
    generator = VariantGenerator(clock=clock) if clock else VariantGenerator()
    return generator.generate(axes)


# ============================================================================
# Editing Session
# ============================================================================


class EditorState(str, Enum):
    """Variant editing session states.

    State diagram:
        NO_AXES
          │
          │ add_axis
          ▼
        AXES_DEFINED ◄──── remove_variant (last one)
          │
          │ generate
          ▼
        VARIANTS_GENERATED ──┐ update_variant / remove_variant /
          ▲                  │ add_axis / remove_axis (marks stale)
          └──────────────────┘
    """

    NO_AXES = "no_axes"
    AXES_DEFINED = "axes_defined"
    VARIANTS_GENERATED = "variants_generated"


class VariantEditor:
    """Editing session for a variable product's axes and variants.

    Changing the axes after generating leaves the existing variants in
    place and marks them stale until ``generate`` is called again.
    Regenerating discards every hand edit.
    """

    def __init__(
        self,
        generator: VariantGenerator | None = None,
        variants: Iterable[VariantRecord] = (),
    ) -> None:
        """Initialize editor.

        Args:
            generator: Generator to use.
            variants: Variants already stored on the product.
        """
        self.generator = generator or VariantGenerator()
        self._axes: list[OptionAxis] = []
        self._variants: list[VariantRecord] = list(variants)
        self.stale = False

    @property
    def axes(self) -> list[OptionAxis]:
        """Defined axes in order."""
        return list(self._axes)

    @property
    def variants(self) -> list[VariantRecord]:
        """Current variants in order."""
        return list(self._variants)

    @property
    def state(self) -> EditorState:
        """Current session state."""
        if self._variants:
            return EditorState.VARIANTS_GENERATED
        if self._axes:
            return EditorState.AXES_DEFINED
        return EditorState.NO_AXES

    def load(self, rows: Iterable[Mapping[str, Any] | VariantPayload]) -> None:
        """Replace variants with rows fetched from the backend.

        Args:
            rows: Variant rows.
        """
        self._variants = [VariantRecord.from_payload(row) for row in rows]
        self.stale = False

    # =========================================================================
    # Axes
    # =========================================================================

    def add_axis(self, name: str, raw_values: str) -> OptionAxis | None:
        """Define a new axis from form input.

        Args:
            name: Axis name.
            raw_values: Comma-separated values.

        Returns:
            The added axis, or None when the name or values are empty.
        """
        if not name or not raw_values:
            return None
        axis = OptionAxis.parse(name, raw_values)
        if not axis.is_usable:
            return None
        self._axes.append(axis)
        if self._variants:
            self.stale = True
        return axis

    def remove_axis(self, index: int) -> OptionAxis:
        """Remove an axis by position.

        Args:
            index: Axis position.

        Returns:
            The removed axis.

        Raises:
            VariantIndexError: If no axis exists at ``index``.
        """
        if not 0 <= index < len(self._axes):
            raise VariantIndexError(index, len(self._axes), kind="axis")
        axis = self._axes.pop(index)
        if self._variants:
            self.stale = True
        return axis

    # =========================================================================
    # Variants
    # =========================================================================

    def generate(self) -> list[VariantRecord]:
        """Regenerate all variants from the current axes.

        With no axes this does nothing and the existing variants stay.

        Returns:
            The current variants.
        """
        if not self._axes:
            return self.variants
        previous = len(self._variants)
        self._variants = self.generator.generate(self._axes)
        self.stale = False
        logger.info(
            "Variants regenerated",
            previous_count=previous,
            count=len(self._variants),
        )
        return self.variants

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self._variants):
            raise VariantIndexError(index, len(self._variants))

    def update_variant(self, index: int, field_name: str, value: Any) -> VariantRecord:
        """Edit one field of one variant.

        Numeric fields accept form strings; an empty string means zero.

        Args:
            index: Variant position.
            field_name: One of sku, price, stock, weight.
            value: New value.

        Returns:
            The updated variant.

        Raises:
            VariantIndexError: If no variant exists at ``index``.
            UnknownVariantFieldError: If the field is not editable.
            InvalidVariantValueError: If the value cannot be coerced.
        """
        self._check_index(index)
        kind = EDITABLE_FIELDS.get(field_name)
        if kind is None:
            raise UnknownVariantFieldError(field_name)

        coerced = _coerce(field_name, kind, value)
        variant = self._variants[index]
        updated = VariantRecord(**{**variant.to_dict(), field_name: coerced})
        self._variants[index] = updated
        return updated

    def remove_variant(self, index: int) -> VariantRecord:
        """Remove one variant, keeping the others in order.

        Args:
            index: Variant position.

        Returns:
            The removed variant.

        Raises:
            VariantIndexError: If no variant exists at ``index``.
        """
        self._check_index(index)
        return self._variants.pop(index)

    def to_json(self) -> str:
        """Serialize variants for the ``variants`` form field."""
        return json.dumps([v.to_dict() for v in self._variants])


def _coerce(field_name: str, kind: type, value: Any) -> Any:
    """Coerce a form value to the field's type."""
    if kind is str:
        return "" if value is None else str(value)
    if value is None or (isinstance(value, str) and not value.strip()):
        return kind(0)
    try:
        number = float(value)
    except (TypeError, ValueError) as e:
        raise InvalidVariantValueError(field_name, value) from e
    if kind is int:
        if not number.is_integer():
            raise InvalidVariantValueError(field_name, value)
        return int(number)
    return number
