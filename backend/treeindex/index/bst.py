from __future__ import annotations
import logging
from collections import deque
from typing import Iterator, List, Optional, Tuple, Union

from treeindex.core.node import TNode
from treeindex.errors import StructuralInvariantError
from treeindex.io_counters import count_visit, count_write

logger = logging.getLogger(__name__)


def _levels(root: Optional[TNode]) -> List[List[int]]:
    if root is None:
        return []
    out: List[List[int]] = []
    queue = deque([root])
    while queue:
        level: List[int] = []
        for _ in range(len(queue)):
            node = queue.popleft()
            level.append(node.key)
            if node.left is not None:
                queue.append(node.left)
            if node.right is not None:
                queue.append(node.right)
        out.append(level)
    return out


def _post_order(root: Optional[TNode]) -> List[TNode]:
    if root is None:
        return []
    out: List[TNode] = []
    stack = [root]
    while stack:
        node = stack.pop()
        out.append(node)
        stack.extend(node.children())
    out.reverse()
    return out


def _check_key(key) -> int:
    if not isinstance(key, int):
        raise TypeError(f"La clave debe ser entera, se recibió {type(key).__name__}")
    return key


class BST:
    """Unbalanced binary search tree over integer keys.

    Equal keys are routed to the right subtree, so duplicates are kept.
    ``BST()`` is empty, ``BST(5)`` holds a single node and ``BST(node)``
    adopts an existing node (and whatever hangs below it) as the root.
    """

    def __init__(self, root: Union[int, TNode, None] = None):
        if root is None:
            self.root: Optional[TNode] = None
        elif isinstance(root, TNode):
            root.parent = None
            self.root = root
        else:
            self.root = TNode(_check_key(root))

    # root access
    def get_root(self) -> Optional[TNode]:
        return self.root

    def set_root(self, root: Optional[TNode]) -> None:
        if root is not None:
            root.parent = None
        self.root = root

    def is_empty(self) -> bool:
        return self.root is None

    # link helpers (keep parent back-references in sync)
    def _set_left(self, node: TNode, child: Optional[TNode]) -> None:
        node.left = child
        if child is not None:
            child.parent = node
        count_write()

    def _set_right(self, node: TNode, child: Optional[TNode]) -> None:
        node.right = child
        if child is not None:
            child.parent = node
        count_write()

    # mutation
    def insert(self, key: int) -> None:
        self.insert_node(TNode(_check_key(key)))

    def insert_node(self, node: TNode) -> None:
        """Attach ``node`` at the first empty slot on its search path."""
        if self.root is None:
            self.set_root(node)
            return
        cur = self.root
        while True:
            count_visit()
            if node.key < cur.key:
                if cur.left is None:
                    self._set_left(cur, node)
                    return
                cur = cur.left
            else:
                if cur.right is None:
                    self._set_right(cur, node)
                    return
                cur = cur.right

    def delete(self, key: int) -> bool:
        """Remove one node holding ``key``. Returns False if it was absent."""
        new_root, removed = self._delete(self.root, key)
        self.set_root(new_root)
        if not removed:
            logger.warning("Clave %s no encontrada; el árbol no cambia", key)
        return removed

    def _delete(self, node: Optional[TNode], key: int) -> Tuple[Optional[TNode], bool]:
        if node is None:
            return None, False
        count_visit()
        if key < node.key:
            new_left, removed = self._delete(node.left, key)
            self._set_left(node, new_left)
            return node, removed
        if key > node.key:
            new_right, removed = self._delete(node.right, key)
            self._set_right(node, new_right)
            return node, removed

        if node.left is None or node.right is None:
            child = node.left if node.left is not None else node.right
            node.left = node.right = node.parent = None
            return child, True
        # two children: copy the in-order successor up, then drop the successor
        succ = self._min_node(node.right)
        node.key = succ.key
        new_right, _ = self._delete(node.right, succ.key)
        self._set_right(node, new_right)
        return node, True

    def _min_node(self, node: TNode) -> TNode:
        while node.left is not None:
            count_visit()
            node = node.left
        return node

    # lookup
    def search(self, key: int) -> Optional[TNode]:
        cur = self.root
        while cur is not None:
            count_visit()
            if cur.key == key:
                return cur
            cur = cur.left if key < cur.key else cur.right
        return None

    def __contains__(self, key: int) -> bool:
        return self.search(key) is not None

    # traversals
    def in_order(self) -> List[int]:
        out: List[int] = []
        self._in_order(self.root, out)
        return out

    def _in_order(self, node: Optional[TNode], out: List[int]) -> None:
        stack: List[TNode] = []
        while stack or node is not None:
            while node is not None:
                stack.append(node)
                node = node.left
            node = stack.pop()
            out.append(node.key)
            node = node.right

    def breadth_first(self) -> List[List[int]]:
        return _levels(self.root)

    def __iter__(self) -> Iterator[int]:
        return iter(self.in_order())

    def print_in_order(self, file=None) -> None:
        print(" ".join(str(k) for k in self.in_order()), file=file)

    def print_bf(self, file=None) -> None:
        for level in self.breadth_first():
            print(" ".join(str(k) for k in level), file=file)

    # shape
    def size(self) -> int:
        return len(_post_order(self.root))

    def __len__(self) -> int:
        return self.size()

    def height(self) -> int:
        return self.get_height(self.root)

    def get_height(self, node: Optional[TNode]) -> int:
        """Number of levels below and including ``node``, walked level by level."""
        height = 0
        level = [node] if node is not None else []
        while level:
            height += 1
            level = [c for n in level for c in n.children()]
        return height

    def get_balance(self, node: Optional[TNode]) -> int:
        if node is None:
            return 0
        return self.get_height(node.left) - self.get_height(node.right)

    def is_balanced(self) -> bool:
        heights = {None: 0}
        for node in _post_order(self.root):
            lh, rh = heights[node.left], heights[node.right]
            if abs(lh - rh) > 1:
                return False
            heights[node] = 1 + max(lh, rh)
        return True

    def validate(self) -> None:
        """Debug pass: ordering and parent links. Raises StructuralInvariantError."""
        if self.root is not None and self.root.parent is not None:
            raise StructuralInvariantError("La raíz tiene padre")
        stack = [(self.root, None, None)] if self.root is not None else []
        while stack:
            node, lo, hi = stack.pop()
            self._check(node, lo, hi)
            if node.left is not None:
                stack.append((node.left, lo, node.key))
            if node.right is not None:
                stack.append((node.right, node.key, hi))

    def _check(self, node: TNode, lo: Optional[int], hi: Optional[int]) -> None:
        if (lo is not None and node.key < lo) or (hi is not None and node.key > hi):
            raise StructuralInvariantError(
                f"Clave {node.key} fuera de rango [{lo}, {hi}]")
        for child in node.children():
            if child.parent is not node:
                raise StructuralInvariantError(
                    f"Enlace padre roto bajo la clave {node.key}")
