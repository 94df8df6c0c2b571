"""Translation trees.

A translation file is parsed into a tree of :class:`Branch` and :class:`Leaf`
nodes. Objects become branches, arrays become branches keyed by their index
("0", "1", ...), everything else becomes a leaf.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, Iterable, Iterator, Mapping, Optional, Tuple, Union

Scalar = Union[str, int, float, bool, None]


@dataclass(frozen=True)
class Leaf:
    value: Scalar


@dataclass(frozen=True)
class Branch:
    children: Mapping[str, "TranslationTree"]

    def get(self, key: str) -> Optional["TranslationTree"]:
        return self.children.get(key)


TranslationTree = Union[Leaf, Branch]


def _items(data: Any) -> Iterator[Tuple[str, Any]]:
    if isinstance(data, dict):
        return ((str(k), v) for k, v in data.items())
    return ((str(i), v) for i, v in enumerate(data))


def build_tree(data: Any) -> TranslationTree:
    """Convert decoded JSON into a read-only translation tree.

    Built with an explicit stack, so nesting depth is not bounded by the
    interpreter's recursion limit.
    """
    if not isinstance(data, (dict, list)):
        return Leaf(data)
    root: Dict[str, TranslationTree] = {}
    stack = [(_items(data), root)]
    while stack:
        items, children = stack[-1]
        for key, value in items:
            if isinstance(value, (dict, list)):
                nested: Dict[str, TranslationTree] = {}
                children[key] = Branch(MappingProxyType(nested))
                stack.append((_items(value), nested))
                break
            children[key] = Leaf(value)
        else:
            stack.pop()
    return Branch(MappingProxyType(root))


def walk(tree: Optional[TranslationTree], keys: Iterable[str]) -> Any:
    """Follow ``keys`` into ``tree`` and return the leaf value found there.

    Returns ``None`` when any key is missing, when a leaf is reached before the
    keys run out, or when the keys end on a branch.
    """
    node = tree
    for key in keys:
        if not isinstance(node, Branch):
            return None
        node = node.get(key)
        if node is None:
            return None
    if isinstance(node, Leaf):
        return node.value
    return None

