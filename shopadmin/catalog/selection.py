"""Cascading category selection.

Models the chain of dependent dropdowns used to pick a category:
level 0 lists the root categories, and each further level lists the
children of whatever was picked one level up. Picking at level L
discards everything below L.
"""

from dataclasses import dataclass

import structlog

from shopadmin.catalog.tree import CategoryNode, CategoryTree
from shopadmin.domain.exceptions import (
    InvalidCategorySelectionError,
    InvalidSelectionLevelError,
)

logger = structlog.get_logger()

# Value of the "Select Category..." placeholder option
DESELECT = -1


@dataclass(frozen=True)
class SelectorLevel:
    """One dropdown in the cascade.

    Attributes:
        level: Position in the cascade (0 = roots).
        options: Categories offered at this level.
        selected_id: Category picked here, or None.
    """

    level: int
    options: tuple[CategoryNode, ...]
    selected_id: int | None = None


class CascadingSelection:
    """Drill-down selection path over a category tree.

    Example usage:
        selection = CascadingSelection(tree)
        selection.select(0, 1)          # picks root 1, returns 1
        selection.select(1, 4)          # picks child 4, returns 4
        selection.select(1, DESELECT)   # back to 1
        [lvl.options for lvl in selection.levels()]
    """

    def __init__(self, tree: CategoryTree, initial_id: int | None = None) -> None:
        """Initialize selection.

        Args:
            tree: Category forest to select from.
            initial_id: Category to pre-select (e.g. when editing a product).
        """
        self.tree = tree
        self._path: list[int] = []
        if initial_id is not None:
            self.restore(initial_id)

    @property
    def path(self) -> list[int]:
        """Selected ids from root downwards."""
        return list(self._path)

    @property
    def effective(self) -> int | None:
        """The deepest selected category, or None."""
        return self._path[-1] if self._path else None

    def restore(self, category_id: int) -> bool:
        """Select the full path leading to ``category_id``.

        Args:
            category_id: Category to pre-select.

        Returns:
            True if the category was found; otherwise the selection is
            left as it was.
        """
        path = self.tree.find_path(category_id)
        if path is None:
            logger.debug("Initial category not in tree", category_id=category_id)
            return False
        self._path = path
        return True

    def select(self, level: int, category_id: int) -> int | None:
        """Pick a category at a dropdown level.

        Args:
            level: Dropdown level being changed.
            category_id: Picked id, or DESELECT to clear this level.

        Returns:
            The new effective selection: the picked id, or on DESELECT the
            selection one level up (None at level 0).

        Raises:
            InvalidSelectionLevelError: If ``level`` skips past the path.
            InvalidCategorySelectionError: If ``category_id`` is not one of
                the options offered at ``level``.
        """
        if level < 0 or level > len(self._path):
            raise InvalidSelectionLevelError(level, len(self._path))

        path = self._path[:level]
        if category_id == DESELECT:
            self._path = path
            return path[level - 1] if level > 0 else None

        options = self.tree.children_of(path[level - 1] if level > 0 else None)
        if all(node.id != category_id for node in options):
            raise InvalidCategorySelectionError(category_id, level)

        path.append(category_id)
        self._path = path
        return category_id

    def levels(self) -> list[SelectorLevel]:
        """Dropdowns currently on offer.

        Level 0 is always present. Level L+1 appears only when the
        category picked at level L exists among level L's options and has
        at least one child.

        Returns:
            SelectorLevel per rendered dropdown.
        """
        options = self.tree.roots
        result = [
            SelectorLevel(
                level=0,
                options=tuple(options),
                selected_id=self._path[0] if self._path else None,
            )
        ]

        for index, selected_id in enumerate(self._path):
            selected = next((n for n in options if n.id == selected_id), None)
            if selected is None or selected.is_leaf:
                break
            options = self.tree.children_of(selected.id)
            next_level = index + 1
            result.append(
                SelectorLevel(
                    level=next_level,
                    options=tuple(options),
                    selected_id=(
                        self._path[next_level] if next_level < len(self._path) else None
                    ),
                )
            )

        return result
