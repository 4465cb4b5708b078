import logging
from typing import Any, Dict, Optional

from treeindex.catalog import Catalog
from treeindex.errors import CommandParserError
from treeindex.parser_cmd import (
    parse_command, CreateTreeStatement, DropTreeStatement,
    InsertStatement, DeleteStatement, SelectStatement,
)

logger = logging.getLogger(__name__)


class Engine:
    def __init__(self, catalog: Optional[Catalog] = None):
        self.catalog = catalog if catalog is not None else Catalog()

    def execute(self, text: str) -> Dict[str, Any]:
        stmt = parse_command(text)
        logger.info("Ejecutando %s sobre '%s'", type(stmt).__name__, stmt.tree_name)
        if isinstance(stmt, CreateTreeStatement):
            return self._exec_create(stmt)
        elif isinstance(stmt, DropTreeStatement):
            return self._exec_drop(stmt)
        elif isinstance(stmt, InsertStatement):
            return self._exec_insert(stmt)
        elif isinstance(stmt, DeleteStatement):
            return self._exec_delete(stmt)
        elif isinstance(stmt, SelectStatement):
            return self._exec_select(stmt)
        else:
            raise CommandParserError(f"Comando no soportado: {type(stmt).__name__}")

    def _exec_create(self, stmt: CreateTreeStatement) -> Dict[str, Any]:
        tree = self.catalog.register_tree(stmt.tree_name, stmt.kind)
        for key in stmt.values:
            tree.insert(key)
        return {"kind": "create", "tree": stmt.tree_name,
                "type": stmt.kind.value, "inserted": len(stmt.values)}

    def _exec_drop(self, stmt: DropTreeStatement) -> Dict[str, Any]:
        self.catalog.drop_tree(stmt.tree_name)
        return {"kind": "drop", "tree": stmt.tree_name}

    def _exec_insert(self, stmt: InsertStatement) -> Dict[str, Any]:
        tree = self.catalog.get_tree(stmt.tree_name)
        for key in stmt.values:
            tree.insert(key)
        return {"kind": "insert", "tree": stmt.tree_name, "inserted": len(stmt.values)}

    def _exec_delete(self, stmt: DeleteStatement) -> Dict[str, Any]:
        tree = self.catalog.get_tree(stmt.tree_name)
        removed = tree.delete(stmt.key)
        return {"kind": "delete", "tree": stmt.tree_name, "deleted": 1 if removed else 0}

    def _exec_select(self, stmt: SelectStatement) -> Dict[str, Any]:
        tree = self.catalog.get_tree(stmt.tree_name)
        if stmt.key is not None:
            node = tree.search(stmt.key)
            rows = [] if node is None else [node.key]
            return {"kind": "select", "tree": stmt.tree_name,
                    "found": node is not None, "rows": rows}
        if stmt.order == "LEVEL":
            rows = tree.breadth_first()
        else:
            rows = tree.in_order()
        return {"kind": "select", "tree": stmt.tree_name, "order": stmt.order, "rows": rows}

    def snapshot(self, name: str) -> Dict[str, Any]:
        tree = self.catalog.get_tree(name)
        root = tree.get_root()
        snap = {
            "name": name,
            "kind": self.catalog.get_kind(name).value,
            "size": tree.size(),
            "height": tree.height(),
            "root": None if root is None else root.key,
            "in_order": tree.in_order(),
            "levels": tree.breadth_first(),
            "balanced": tree.is_balanced(),
        }
        return snap
