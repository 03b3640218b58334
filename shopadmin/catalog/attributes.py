"""Category attribute templates and product attribute values.

Each category defines a set of extra specification fields (templates),
typed as text, number or color. A product stores one value per
template, keyed by template id.
"""

import json
import re
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from typing import Any

from shopadmin.catalog.schemas import AttributeTemplatePayload, AttributeType
from shopadmin.domain.base import ValueObject
from shopadmin.domain.exceptions import EmptyTemplateError, InvalidAttributeValueError

_HEX_COLOR = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")


@dataclass(frozen=True)
class AttributeTemplate(ValueObject):
    """An attribute field defined for a category.

    Attributes:
        id: Template id (None until saved).
        name: Label shown on the product form.
        type: Input type.
    """

    name: str
    type: AttributeType = "text"
    id: int | None = None

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any] | AttributeTemplatePayload) -> "AttributeTemplate":
        """Create a template from an API row."""
        row = AttributeTemplatePayload.model_validate(payload)
        return cls(name=row.name, type=row.type, id=row.id)

    def to_dict(self) -> dict[str, Any]:
        """Convert to the API shape, omitting the id of unsaved templates."""
        data: dict[str, Any] = {"name": self.name, "type": self.type}
        if self.id is not None:
            data["id"] = self.id
        return data


# ============================================================================
# Attribute Values
# ============================================================================


@dataclass(frozen=True)
class TextValue(ValueObject):
    """Free text attribute value."""

    value: str


@dataclass(frozen=True)
class NumberValue(ValueObject):
    """Numeric attribute value."""

    value: float


@dataclass(frozen=True)
class ColorValue(ValueObject):
    """Hex color attribute value (e.g., "#1a2b3c")."""

    value: str


AttributeValue = TextValue | NumberValue | ColorValue


def coerce_attribute_value(template: AttributeTemplate, raw: Any) -> AttributeValue:
    """Turn raw form input into the value type the template declares.

    Args:
        template: Template the value belongs to.
        raw: Raw input.

    Returns:
        Typed attribute value.

    Raises:
        InvalidAttributeValueError: If the input does not fit the type.
    """
    if template.type == "number":
        if isinstance(raw, bool):
            raise InvalidAttributeValueError(template.name, template.type, raw)
        try:
            return NumberValue(float(raw))
        except (TypeError, ValueError) as e:
            raise InvalidAttributeValueError(template.name, template.type, raw) from e

    text = "" if raw is None else str(raw).strip()
    if template.type == "color":
        if not _HEX_COLOR.match(text):
            raise InvalidAttributeValueError(template.name, template.type, raw)
        return ColorValue(text.lower())
    return TextValue(text)


class AttributeValues:
    """Attribute values of one product, keyed by template id."""

    def __init__(self, values: Mapping[int, AttributeValue] | None = None) -> None:
        self._values: dict[int, AttributeValue] = dict(values or {})

    @classmethod
    def from_product(
        cls,
        attribute_values: Iterable[Mapping[str, Any]],
        templates: Iterable[AttributeTemplate],
    ) -> "AttributeValues":
        """Rebuild values from a fetched product's ``attributeValues``.

        Rows without a template, or whose template is not in
        ``templates``, are skipped. So are stored values that no longer
        fit the template type.

        Args:
            attribute_values: Rows with ``attribute_template_id`` and ``value``.
            templates: Templates of the product's category.

        Returns:
            AttributeValues.
        """
        by_id = {t.id: t for t in templates if t.id is not None}
        result = cls()
        for row in attribute_values:
            template = by_id.get(row.get("attribute_template_id"))
            if template is None:
                continue
            try:
                result._values[template.id] = coerce_attribute_value(template, row.get("value"))
            except InvalidAttributeValueError:
                continue
        return result

    def set(self, template: AttributeTemplate, raw: Any) -> AttributeValue:
        """Store a value for a saved template.

        Args:
            template: Template with an id.
            raw: Raw form input.

        Returns:
            The stored typed value.
        """
        if template.id is None:
            raise InvalidAttributeValueError(template.name, template.type, raw)
        value = coerce_attribute_value(template, raw)
        self._values[template.id] = value
        return value

    def get(self, template_id: int) -> AttributeValue | None:
        """Get the value stored for a template id."""
        return self._values.get(template_id)

    def to_dict(self) -> dict[str, Any]:
        """Plain mapping of template id (as string) to value."""
        return {str(k): v.value for k, v in self._values.items()}

    def to_json(self) -> str:
        """Serialize for the ``attributes`` form field."""
        return json.dumps(self.to_dict())

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[int]:
        return iter(self._values)


def clean_template_fields(
    fields: Iterable[AttributeTemplate | Mapping[str, Any]],
) -> list[AttributeTemplate]:
    """Drop unnamed fields before saving a category's templates.

    Args:
        fields: Fields as edited.

    Returns:
        Fields whose trimmed name is non-empty.

    Raises:
        EmptyTemplateError: If no field has a name.
    """
    cleaned = []
    for item in fields:
        template = item if isinstance(item, AttributeTemplate) else AttributeTemplate.from_payload(item)
        if template.name.strip():
            cleaned.append(template)
    if not cleaned:
        raise EmptyTemplateError()
    return cleaned
