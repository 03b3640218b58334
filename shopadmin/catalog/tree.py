"""Category tree.

The backend returns categories as a nested forest:

    [{"id": 1, "name": "Fragrance", "children": [
        {"id": 4, "name": "Perfume", "children": []}]}]

This module flattens that into an arena of nodes indexed by id, each
node listing its children by id. Path lookup and filtering walk the
arena recursively; nothing here mutates a tree once built.
"""

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field, replace
from typing import Any

from shopadmin.catalog.schemas import CategoryPayload
from shopadmin.domain.exceptions import DuplicateCategoryError


@dataclass(frozen=True)
class CategoryNode:
    """A category in the arena.

    Attributes:
        id: Category ID (unique across the forest).
        name: Display name.
        parent_id: ID of parent category (None for root).
        level: Depth in the tree (0 = root).
        children: Child category IDs in display order.
    """

    id: int
    name: str
    parent_id: int | None = None
    level: int = 0
    children: tuple[int, ...] = field(default=(), repr=False)

    @property
    def is_leaf(self) -> bool:
        """Whether the category has no subcategories."""
        return not self.children


class CategoryTree:
    """A forest of categories stored as an arena.

    Example usage:
        tree = CategoryTree.from_response(body)
        tree.find_path(42)           # [1, 7, 42]
        tree.filter("perf").roots    # pruned forest
    """

    def __init__(
        self,
        nodes: Mapping[int, CategoryNode] | None = None,
        roots: Iterable[int] = (),
    ) -> None:
        """Initialize tree from an already-built arena.

        Args:
            nodes: Nodes indexed by id.
            roots: Root ids in display order.
        """
        self._nodes: dict[int, CategoryNode] = dict(nodes or {})
        self._roots: tuple[int, ...] = tuple(roots)

    # =========================================================================
    # Construction
    # =========================================================================

    @classmethod
    def from_payload(
        cls,
        categories: Iterable[Mapping[str, Any] | CategoryPayload],
    ) -> "CategoryTree":
        """Build a tree from the nested category list.

        Args:
            categories: Root categories, each with nested ``children``.

        Returns:
            New CategoryTree.

        Raises:
            DuplicateCategoryError: If an id appears twice.
        """
        nodes: dict[int, CategoryNode] = {}

        def add(payload: CategoryPayload, parent_id: int | None, level: int) -> int:
            if payload.id in nodes:
                raise DuplicateCategoryError(payload.id)
            # Reserve the id before descending so a repeat below is caught
            nodes[payload.id] = CategoryNode(
                id=payload.id, name=payload.name, parent_id=parent_id, level=level
            )
            child_ids = tuple(
                add(child, payload.id, level + 1) for child in payload.children
            )
            nodes[payload.id] = replace(nodes[payload.id], children=child_ids)
            return payload.id

        roots = [
            add(CategoryPayload.model_validate(item), None, 0)
            for item in categories
        ]
        return cls(nodes, roots)

    @classmethod
    def from_response(cls, body: Mapping[str, Any] | list[Any] | None) -> "CategoryTree":
        """Build a tree from a ``GET /categories`` response body.

        Accepts either the ``{"data": [...]}`` envelope or a bare list.
        A missing or null ``data`` gives an empty forest.

        Args:
            body: Decoded JSON body.

        Returns:
            New CategoryTree.
        """
        if body is None:
            return cls()
        if isinstance(body, Mapping):
            return cls.from_payload(body.get("data") or [])
        return cls.from_payload(body)

    # =========================================================================
    # Access
    # =========================================================================

    @property
    def roots(self) -> list[CategoryNode]:
        """Root categories in display order."""
        return [self._nodes[i] for i in self._roots]

    @property
    def root_ids(self) -> tuple[int, ...]:
        """Root category ids in display order."""
        return self._roots

    def get(self, category_id: int) -> CategoryNode | None:
        """Get category by ID.

        Args:
            category_id: Category ID.

        Returns:
            CategoryNode if found, None otherwise.
        """
        return self._nodes.get(category_id)

    def children_of(self, category_id: int | None) -> list[CategoryNode]:
        """Get the direct children of a category.

        Args:
            category_id: Parent id, or None for the forest roots.

        Returns:
            Child nodes in display order; empty for unknown ids.
        """
        if category_id is None:
            return self.roots
        node = self._nodes.get(category_id)
        if node is None:
            return []
        return [self._nodes[i] for i in node.children]

    def walk(self) -> Iterator[tuple[CategoryNode, int]]:
        """Iterate the forest depth-first, pre-order.

        Yields:
            (node, depth) pairs, roots at depth 0.
        """

        def visit(ids: tuple[int, ...], depth: int) -> Iterator[tuple[CategoryNode, int]]:
            for node_id in ids:
                node = self._nodes[node_id]
                yield node, depth
                yield from visit(node.children, depth + 1)

        yield from visit(self._roots, 0)

    def leaves(self) -> list[CategoryNode]:
        """Get categories with no children, in pre-order."""
        return [node for node, _ in self.walk() if node.is_leaf]

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, category_id: object) -> bool:
        return category_id in self._nodes

    def __iter__(self) -> Iterator[CategoryNode]:
        return (node for node, _ in self.walk())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CategoryTree):
            return NotImplemented
        return self._roots == other._roots and self._nodes == other._nodes

    def __repr__(self) -> str:
        return f"<CategoryTree(roots={len(self._roots)}, nodes={len(self._nodes)})>"

    # =========================================================================
    # Path Lookup
    # =========================================================================

    def find_path(self, target_id: int) -> list[int] | None:
        """Find the chain of ids from a root down to ``target_id``.

        Searches depth-first, roots and children in display order, and
        returns the first match.

        Args:
            target_id: Category to locate.

        Returns:
            Ids from root to target inclusive, or None if not present.
        """

        def search(ids: tuple[int, ...], path: list[int]) -> list[int] | None:
            for node_id in ids:
                if node_id == target_id:
                    return [*path, node_id]
                found = search(self._nodes[node_id].children, [*path, node_id])
                if found is not None:
                    return found
            return None

        return search(self._roots, [])

    # =========================================================================
    # Filtering
    # =========================================================================

    def filter(self, query: str) -> "CategoryTree":
        """Prune the forest to categories matching ``query``.

        A category whose name contains the query (case-insensitive) is
        kept with its whole original subtree. A category that does not
        match is kept only if some descendant matches, and then only with
        its filtered children.

        Args:
            query: Substring to look for. Empty returns an equal tree.

        Returns:
            New CategoryTree; empty when nothing matches.
        """
        if not query:
            return CategoryTree(self._nodes, self._roots)

        needle = query.lower()
        kept: dict[int, CategoryNode] = {}

        def keep_subtree(node_id: int) -> None:
            node = self._nodes[node_id]
            kept[node_id] = node
            for child_id in node.children:
                keep_subtree(child_id)

        def prune(ids: tuple[int, ...]) -> tuple[int, ...]:
            result = []
            for node_id in ids:
                node = self._nodes[node_id]
                if needle in node.name.lower():
                    keep_subtree(node_id)
                    result.append(node_id)
                    continue
                children = prune(node.children)
                if children:
                    kept[node_id] = replace(node, children=children)
                    result.append(node_id)
            return tuple(result)

        roots = prune(self._roots)
        return CategoryTree(kept, roots)

    def flat_search(self, query: str) -> list[CategoryNode]:
        """Search categories by name without keeping tree structure.

        Args:
            query: Case-insensitive substring.

        Returns:
            Matching nodes in pre-order.
        """
        needle = query.lower()
        return [node for node in self if needle in node.name.lower()]

    # =========================================================================
    # Serialization
    # =========================================================================

    def to_payload(self) -> list[dict[str, Any]]:
        """Convert back to the nested JSON shape the API uses.

        Returns:
            List of root dictionaries with nested ``children``.
        """

        def dump(node_id: int) -> dict[str, Any]:
            node = self._nodes[node_id]
            return {
                "id": node.id,
                "name": node.name,
                "parent_id": node.parent_id,
                "children": [dump(child_id) for child_id in node.children],
            }

        return [dump(root_id) for root_id in self._roots]
