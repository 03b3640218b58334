"""Tests for cascading category selection."""

import pytest

from shopadmin.catalog.selection import DESELECT, CascadingSelection
from shopadmin.catalog.tree import CategoryTree
from shopadmin.domain.exceptions import (
    InvalidCategorySelectionError,
    InvalidSelectionLevelError,
)


class TestCascadingSelection:
    """Tests for drill-down selection."""

    @pytest.fixture
    def selection(self, tree: CategoryTree) -> CascadingSelection:
        """Create an empty selection over the sample tree."""
        return CascadingSelection(tree)

    def test_initially_only_roots_offered(self, selection: CascadingSelection) -> None:
        """With nothing picked only level 0 is offered."""
        levels = selection.levels()
        assert len(levels) == 1
        assert [n.id for n in levels[0].options] == [1, 6, 9]
        assert levels[0].selected_id is None
        assert selection.effective is None

    def test_select_root_offers_children(self, selection: CascadingSelection) -> None:
        """Picking a root with children offers them at level 1."""
        assert selection.select(0, 1) == 1
        levels = selection.levels()
        assert len(levels) == 2
        assert [n.id for n in levels[1].options] == [2, 3]
        assert levels[1].selected_id is None

    def test_childless_root_offers_no_next_level(self, selection: CascadingSelection) -> None:
        """Picking a childless root offers no level 1."""
        selection.select(0, 9)
        assert len(selection.levels()) == 1
        assert selection.effective == 9

    def test_drill_down(self, selection: CascadingSelection) -> None:
        """Each pick extends the path."""
        selection.select(0, 1)
        selection.select(1, 2)
        assert selection.select(2, 5) == 5
        assert selection.path == [1, 2, 5]
        # Level 3 is not offered because 5 is a leaf
        assert [lvl.selected_id for lvl in selection.levels()] == [1, 2, 5]

    def test_select_replaces_suffix(self, selection: CascadingSelection) -> None:
        """Picking at a level drops everything below it."""
        selection.select(0, 1)
        selection.select(1, 2)
        selection.select(2, 4)
        selection.select(1, 3)
        assert selection.path == [1, 3]

    def test_select_new_root_clears_path(self, selection: CascadingSelection) -> None:
        """Switching root discards the old branch."""
        selection.select(0, 1)
        selection.select(1, 2)
        selection.select(0, 6)
        assert selection.path == [6]
        assert [n.id for n in selection.levels()[1].options] == [7]

    def test_deselect_reports_parent(self, selection: CascadingSelection) -> None:
        """Deselecting at level L truncates to L and returns the parent."""
        selection.select(0, 1)
        selection.select(1, 2)
        selection.select(2, 4)
        assert selection.select(2, DESELECT) == 2
        assert selection.path == [1, 2]

    def test_deselect_root_reports_none(self, selection: CascadingSelection) -> None:
        """Deselecting at level 0 clears the selection."""
        selection.select(0, 1)
        assert selection.select(0, DESELECT) is None
        assert selection.path == []
        assert selection.effective is None

    def test_skipping_levels_rejected(self, selection: CascadingSelection) -> None:
        """A level past the end of the path cannot be picked."""
        with pytest.raises(InvalidSelectionLevelError):
            selection.select(2, 5)

    def test_restore_initial(self, tree: CategoryTree) -> None:
        """An initial id pre-selects the full path."""
        selection = CascadingSelection(tree, initial_id=8)
        assert selection.path == [6, 7, 8]
        assert len(selection.levels()) == 3

    def test_restore_unknown_keeps_selection(self, selection: CascadingSelection) -> None:
        """An unknown initial id leaves the selection alone."""
        selection.select(0, 6)
        assert selection.restore(404) is False
        assert selection.path == [6]

    def test_non_root_at_level_zero_rejected(self, selection: CascadingSelection) -> None:
        """Only roots can be picked at level 0."""
        with pytest.raises(InvalidCategorySelectionError) as exc_info:
            selection.select(0, 7)
        assert exc_info.value.details == {"category_id": 7, "level": 0}
        assert selection.path == []

    def test_unknown_id_rejected(self, selection: CascadingSelection) -> None:
        """Ids missing from the tree are rejected."""
        with pytest.raises(InvalidCategorySelectionError):
            selection.select(0, 999)
        assert selection.effective is None

    def test_non_child_rejected_keeps_path(self, selection: CascadingSelection) -> None:
        """A pick outside the parent's children leaves the path unchanged."""
        selection.select(0, 6)
        with pytest.raises(InvalidCategorySelectionError):
            selection.select(1, 1)
        with pytest.raises(InvalidCategorySelectionError):
            selection.select(1, 2)
        assert selection.path == [6]

    def test_path_stays_a_parent_chain(self, tree: CategoryTree) -> None:
        """Any accepted sequence of picks matches the tree path."""
        selection = CascadingSelection(tree)
        selection.select(0, 6)
        selection.select(1, 7)
        selection.select(2, 8)
        assert selection.path == tree.find_path(selection.effective)
