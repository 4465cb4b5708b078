# backend/treeindex/catalog.py
from enum import Enum
from typing import Dict, Any, List, Union

from treeindex.errors import TreeExistsError, TreeNotFoundError
from treeindex.index.avl import AVL
from treeindex.index.bst import BST


class TreeKind(Enum):
    BST = "BST"
    AVL = "AVL"


_FACTORIES = {
    TreeKind.BST: BST,
    TreeKind.AVL: AVL,
}


class Catalog:
    def __init__(self):
        self.trees: Dict[str, Dict[str, Any]] = {}

    def register_tree(self, name: str, kind: TreeKind = TreeKind.AVL) -> Union[BST, AVL]:
        if name in self.trees:
            raise TreeExistsError(f"Árbol '{name}' ya registrado")
        tree = _FACTORIES[kind]()
        self.trees[name] = {"kind": kind, "tree": tree}
        return tree

    def get_tree(self, name: str) -> Union[BST, AVL]:
        if name not in self.trees:
            raise TreeNotFoundError(name)
        return self.trees[name]["tree"]

    def get_kind(self, name: str) -> TreeKind:
        if name not in self.trees:
            raise TreeNotFoundError(name)
        return self.trees[name]["kind"]

    def list_trees(self) -> List[str]:
        return list(self.trees.keys())

    def drop_tree(self, name: str) -> None:
        if name not in self.trees:
            raise TreeNotFoundError(name)
        del self.trees[name]
