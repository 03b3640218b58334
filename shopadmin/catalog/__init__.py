"""Catalog structuring.

Category tree lookups and filtering, cascading category selection,
variant generation, attribute templates and product drafts.
"""

from shopadmin.catalog.attributes import (
    AttributeTemplate,
    AttributeValues,
    ColorValue,
    NumberValue,
    TextValue,
    clean_template_fields,
    coerce_attribute_value,
)
from shopadmin.catalog.products import (
    ImageFile,
    ProductDraft,
    ProductImage,
    ProductType,
    ProductVideo,
    slugify,
)
from shopadmin.catalog.selection import DESELECT, CascadingSelection, SelectorLevel
from shopadmin.catalog.tree import CategoryNode, CategoryTree
from shopadmin.catalog.variants import (
    EditorState,
    GeneratorConfig,
    OptionAxis,
    VariantEditor,
    VariantGenerator,
    VariantRecord,
    generate_variants,
    parse_option_values,
)

__all__ = [
    # Tree
    "CategoryNode",
    "CategoryTree",
    # Selection
    "DESELECT",
    "CascadingSelection",
    "SelectorLevel",
    # Variants
    "EditorState",
    "GeneratorConfig",
    "OptionAxis",
    "VariantEditor",
    "VariantGenerator",
    "VariantRecord",
    "generate_variants",
    "parse_option_values",
    # Attributes
    "AttributeTemplate",
    "AttributeValues",
    "ColorValue",
    "NumberValue",
    "TextValue",
    "clean_template_fields",
    "coerce_attribute_value",
    # Products
    "ImageFile",
    "ProductDraft",
    "ProductImage",
    "ProductType",
    "ProductVideo",
    "slugify",
]
