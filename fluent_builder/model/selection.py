"""Selection trees for partial copies.

A selection tree names the properties (and, recursively, their
sub-properties) that take part in a partial copy. Together with a
:class:`SelectionMode` it decides for every property whether it is copied.
The generated partial-copy constructors encode exactly the rule implemented
by :meth:`SelectionTree.includes`, so this class doubles as the reference for
what the emitted guards do at runtime.
"""

from __future__ import annotations

from enum import Enum
from typing import Iterable, Optional

from pydantic import BaseModel, ConfigDict, Field


class SelectionMode(str, Enum):
    """Whether a selection tree lists what to copy or what to skip."""
    INCLUDE = "include"
    EXCLUDE = "exclude"


class SelectionTree(BaseModel):
    """A node of a selection tree, keyed by property name."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(default="", description="Property name ('' for the root)")
    children: dict[str, SelectionTree] = Field(default_factory=dict)

    @classmethod
    def empty(cls) -> "SelectionTree":
        return cls()

    @classmethod
    def from_paths(cls, paths: Iterable[str]) -> "SelectionTree":
        """Build a tree from dotted property paths.

        ``["items.name", "items.price", "owner"]`` yields a root with the
        children ``items`` (itself holding ``name`` and ``price``) and the
        leaf ``owner``.
        """
        nested: dict = {}
        for path in paths:
            node = nested
            for segment in (part.strip() for part in path.split(".")):
                if not segment:
                    raise ValueError(f"Empty segment in selection path: {path!r}")
                node = node.setdefault(segment, {})
        return cls._from_nested("", nested)

    @classmethod
    def _from_nested(cls, name: str, nested: dict) -> "SelectionTree":
        return cls(
            name=name,
            children={key: cls._from_nested(key, value) for key, value in nested.items()},
        )

    @property
    def is_leaf(self) -> bool:
        return not self.children

    def get(self, name: str) -> Optional[SelectionTree]:
        return self.children.get(name)

    def child_or_empty(self, name: str) -> SelectionTree:
        """The node for *name*, or an empty tree when it has none."""
        node = self.children.get(name)
        return node if node is not None else SelectionTree.empty()

    def includes(self, name: str, mode: SelectionMode) -> bool:
        """Whether the property *name* is copied under *mode*.

        Inclusion mode copies a property iff it has a node. Exclusion mode
        skips a property only when its node is a leaf; a node with children
        excludes sub-properties and still copies the property itself.
        """
        node = self.children.get(name)
        if mode == SelectionMode.INCLUDE:
            return node is not None
        return node is None or not node.is_leaf

    def paths(self) -> list[str]:
        """Flatten the tree back into dotted leaf paths."""
        if self.is_leaf:
            return [self.name] if self.name else []
        prefix = f"{self.name}." if self.name else ""
        return [f"{prefix}{path}" for child in self.children.values() for path in child.paths()]


SelectionTree.model_rebuild()
