from treeindex.core.node import TNode
from treeindex.index.bst import BST
from treeindex.index.avl import AVL

__all__ = ["TNode", "BST", "AVL"]
