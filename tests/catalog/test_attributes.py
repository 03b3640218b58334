"""Tests for attribute templates and values."""

import json

import pytest

from shopadmin.catalog.attributes import (
    AttributeTemplate,
    AttributeValues,
    ColorValue,
    NumberValue,
    TextValue,
    clean_template_fields,
    coerce_attribute_value,
)
from shopadmin.domain.exceptions import EmptyTemplateError, InvalidAttributeValueError

VOLUME = AttributeTemplate(id=1, name="Volume (ml)", type="number")
SCENT = AttributeTemplate(id=2, name="Scent", type="text")
BOTTLE = AttributeTemplate(id=3, name="Bottle Color", type="color")


class TestAttributeTemplate:
    """Tests for AttributeTemplate."""

    def test_from_payload(self) -> None:
        """Templates are read from API rows."""
        template = AttributeTemplate.from_payload({"id": 4, "name": "Origin", "type": "text"})
        assert template == AttributeTemplate(id=4, name="Origin", type="text")

    def test_from_payload_default_type(self) -> None:
        """A missing type defaults to text."""
        assert AttributeTemplate.from_payload({"name": "Origin"}).type == "text"

    def test_to_dict_omits_unsaved_id(self) -> None:
        """Unsaved templates are sent without an id."""
        assert AttributeTemplate(name="Origin").to_dict() == {"name": "Origin", "type": "text"}
        assert VOLUME.to_dict() == {"name": "Volume (ml)", "type": "number", "id": 1}


class TestCoerceAttributeValue:
    """Tests for typed value coercion."""

    def test_number(self) -> None:
        """Numeric templates parse floats."""
        assert coerce_attribute_value(VOLUME, "50") == NumberValue(50.0)

    def test_number_invalid(self) -> None:
        """Non-numeric input for a number template raises."""
        with pytest.raises(InvalidAttributeValueError):
            coerce_attribute_value(VOLUME, "fifty")

    def test_text_trimmed(self) -> None:
        """Text values are trimmed."""
        assert coerce_attribute_value(SCENT, "  Citrus ") == TextValue("Citrus")

    def test_color_normalized(self) -> None:
        """Colors are validated and lowercased."""
        assert coerce_attribute_value(BOTTLE, "#1A2B3C") == ColorValue("#1a2b3c")
        assert coerce_attribute_value(BOTTLE, "#fff") == ColorValue("#fff")

    def test_color_invalid(self) -> None:
        """Non-hex input for a color template raises."""
        with pytest.raises(InvalidAttributeValueError):
            coerce_attribute_value(BOTTLE, "blue")


class TestAttributeValues:
    """Tests for per-product attribute values."""

    def test_set_and_serialize(self) -> None:
        """Values serialize keyed by template id."""
        values = AttributeValues()
        values.set(VOLUME, "100")
        values.set(SCENT, "Woody")
        assert json.loads(values.to_json()) == {"1": 100.0, "2": "Woody"}
        assert len(values) == 2

    def test_set_requires_saved_template(self) -> None:
        """Values cannot be stored for an unsaved template."""
        with pytest.raises(InvalidAttributeValueError):
            AttributeValues().set(AttributeTemplate(name="Origin"), "FR")

    def test_from_product(self) -> None:
        """Stored rows are matched to templates by id."""
        rows = [
            {"attribute_template_id": 1, "value": "75", "template": {"id": 1}},
            {"attribute_template_id": 3, "value": "#000000", "template": {"id": 3}},
            {"attribute_template_id": 99, "value": "orphan"},
            {"attribute_template_id": 1, "value": "not a number"},
        ]
        values = AttributeValues.from_product(rows, [VOLUME, SCENT, BOTTLE])
        assert values.get(1) == NumberValue(75.0)
        assert values.get(3) == ColorValue("#000000")
        assert values.get(99) is None
        assert values.get(2) is None


class TestCleanTemplateFields:
    """Tests for template cleanup before saving."""

    def test_drops_unnamed(self) -> None:
        """Fields with blank names are dropped."""
        cleaned = clean_template_fields(
            [{"name": "Scent", "type": "text"}, {"name": "   ", "type": "number"}, VOLUME]
        )
        assert [t.name for t in cleaned] == ["Scent", "Volume (ml)"]

    def test_all_unnamed_rejected(self) -> None:
        """Saving only blank fields raises."""
        with pytest.raises(EmptyTemplateError):
            clean_template_fields([{"name": "", "type": "text"}])
