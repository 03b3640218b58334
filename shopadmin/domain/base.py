"""Base classes for domain layer.

Value objects used across the catalog structures: immutable and
compared by their attributes.
"""

from abc import ABC
from dataclasses import dataclass


@dataclass(frozen=True)
class ValueObject(ABC):
    """Base class for value objects.

    Value objects are immutable and compared by their attributes,
    not by identity. Two option axes with the same name and values
    are interchangeable.

    Example:
        @dataclass(frozen=True)
        class OptionAxis(ValueObject):
            name: str
            values: tuple[str, ...]
    """

    pass
