import pytest

from treeindex.catalog import TreeKind
from treeindex.errors import CommandParserError
from treeindex.parser_cmd import (
    parse_command, CreateTreeStatement, DropTreeStatement,
    InsertStatement, DeleteStatement, SelectStatement,
)


def test_create_defaults_to_avl():
    stmt = parse_command("CREATE TREE idx")
    assert stmt == CreateTreeStatement("idx", TreeKind.AVL, [])


def test_create_with_kind_and_values():
    stmt = parse_command("create tree plain using bst values (5, -3, 7);")
    assert stmt == CreateTreeStatement("plain", TreeKind.BST, [5, -3, 7])


def test_drop():
    assert parse_command("DROP TREE idx") == DropTreeStatement("idx")


def test_insert():
    stmt = parse_command("INSERT INTO idx VALUES (10, 20,30) -- tres claves")
    assert stmt == InsertStatement("idx", [10, 20, 30])


def test_delete():
    assert parse_command("DELETE FROM idx WHERE key = 25") == DeleteStatement("idx", 25)
    assert parse_command("DELETE FROM idx WHERE key=-4") == DeleteStatement("idx", -4)


def test_select_variants():
    assert parse_command("SELECT * FROM idx") == SelectStatement("idx", None, "INORDER")
    assert parse_command("SELECT * FROM idx WHERE key == 3") == SelectStatement("idx", 3, "INORDER")
    assert parse_command("SELECT * FROM idx ORDER BY level") == SelectStatement("idx", None, "LEVEL")
    assert parse_command("SELECT * FROM idx ORDER BY breadth_first").order == "LEVEL"


@pytest.mark.parametrize("text", [
    "",
    "-- solo comentario",
    "UPDATE idx SET key = 1",
    "CREATE TABLE idx",
    "CREATE TREE idx USING RBTREE",
    "INSERT INTO idx VALUES (1, 'a')",
    "INSERT INTO idx VALUES (1 2)",
    "INSERT INTO idx VALUES (1,",
    "DELETE FROM idx WHERE key > 3",
    "DELETE FROM idx WHERE value = 3",
    "SELECT key FROM idx",
    "SELECT * FROM idx ORDER BY postorder",
    "SELECT * FROM idx extra",
    "DROP TREE 123",
])
def test_invalid_commands(text):
    with pytest.raises(CommandParserError):
        parse_command(text)
