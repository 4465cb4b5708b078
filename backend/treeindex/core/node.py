# backend/treeindex/core/node.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Optional, List


@dataclass(eq=False)
class TNode:
    """Binary tree node: integer key, cached balance factor and links.

    ``parent`` is a back-reference only; ownership flows root -> children.
    """
    key: int
    balance: int = 0
    parent: Optional[TNode] = field(default=None, repr=False)
    left: Optional[TNode] = field(default=None, repr=False)
    right: Optional[TNode] = field(default=None, repr=False)

    def is_leaf(self) -> bool:
        return self.left is None and self.right is None

    def children(self) -> List[TNode]:
        return [c for c in (self.left, self.right) if c is not None]

    def print(self, file=None) -> None:
        print(str(self), file=file)

    def __str__(self) -> str:
        left = self.left.key if self.left is not None else None
        right = self.right.key if self.right is not None else None
        return f"TNode(key={self.key}, balance={self.balance}, left={left}, right={right})"
