from __future__ import annotations
import logging
from typing import Optional, Union

from treeindex.core.node import TNode
from treeindex.errors import StructuralInvariantError
from treeindex.index.bst import BST, _levels
from treeindex.io_counters import count_rebalance, count_rotation, count_visit

logger = logging.getLogger(__name__)


class AVL(BST):
    """Height-balanced BST.

    Every insert/delete is followed by a rebalance pass over the whole tree
    (children first, then the node), and the node returned for the root
    becomes the new root. Heights are recomputed by walking the subtree each
    time; nothing is cached except the informative ``TNode.balance``.
    """

    def __init__(self, root: Union[int, TNode, None] = None):
        super().__init__(None if isinstance(root, TNode) else root)
        if isinstance(root, TNode):
            # rebuilt from the keys in level order; the given shape is discarded
            for level in _levels(root):
                for key in level:
                    self.insert(key)

    def insert_node(self, node: TNode) -> None:
        super().insert_node(node)
        self.set_root(self.rebalance(self.root))

    def delete(self, key: int) -> bool:
        removed = super().delete(key)
        self.set_root(self.rebalance(self.root))
        return removed

    # balancing
    def rebalance(self, node: Optional[TNode]) -> Optional[TNode]:
        """Rebalance every node below ``node`` and then ``node`` itself.

        Returns the root of the resulting subtree, which the caller must link
        back in place of ``node``.
        """
        if node is None:
            return None
        count_rebalance()
        new_left = self.rebalance(node.left)
        if new_left is not node.left:
            self._set_left(node, new_left)
        new_right = self.rebalance(node.right)
        if new_right is not node.right:
            self._set_right(node, new_right)
        return self._balance(node)

    def _balance(self, node: TNode) -> TNode:
        count_visit()
        bf = self.get_balance(node)
        node.balance = bf
        if bf > 1:
            if self.get_balance(node.left) < 0:
                self._set_left(node, self.rotate_left(node.left))
            return self.rotate_right(node)
        if bf < -1:
            if self.get_balance(node.right) > 0:
                self._set_right(node, self.rotate_right(node.right))
            return self.rotate_left(node)
        return node

    def rotate_right(self, node: TNode) -> TNode:
        logger.debug("Rotación derecha en %s", node.key)
        count_rotation()
        parent = node.parent
        left = node.left
        self._set_left(node, left.right)
        self._set_right(left, node)
        left.parent = parent
        node.balance = self.get_balance(node)
        left.balance = self.get_balance(left)
        return left

    def rotate_left(self, node: TNode) -> TNode:
        logger.debug("Rotación izquierda en %s", node.key)
        count_rotation()
        parent = node.parent
        right = node.right
        self._set_right(node, right.left)
        self._set_left(right, node)
        right.parent = parent
        node.balance = self.get_balance(node)
        right.balance = self.get_balance(right)
        return right

    def validate(self) -> None:
        super().validate()
        if not self.is_balanced():
            raise StructuralInvariantError("Árbol AVL desbalanceado")
