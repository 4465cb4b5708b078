import io
import logging
import random

import pytest

from treeindex.core.node import TNode
from treeindex.errors import StructuralInvariantError
from treeindex.index.bst import BST


@pytest.fixture
def tree():
    t = BST()
    for k in (5, 3, 7, 1, 4, 6, 8):
        t.insert(k)
    return t


def test_empty_tree():
    t = BST()
    assert t.is_empty()
    assert t.get_root() is None
    assert t.in_order() == []
    assert t.breadth_first() == []
    assert t.search(1) is None
    assert len(t) == 0
    assert t.height() == 0


def test_single_key_constructor():
    t = BST(9)
    assert t.get_root().key == 9
    assert t.in_order() == [9]


def test_node_constructor_adopts_subtree():
    root = TNode(10)
    child = TNode(4, parent=root)
    root.left = child
    t = BST(root)
    assert t.get_root() is root
    assert t.in_order() == [4, 10]
    t.validate()


def test_insert_shape(tree):
    assert tree.in_order() == [1, 3, 4, 5, 6, 7, 8]
    assert tree.breadth_first() == [[5], [3, 7], [1, 4, 6, 8]]
    assert tree.height() == 3
    tree.validate()


def test_insert_sets_parent(tree):
    node = tree.search(4)
    assert node.parent.key == 3
    assert node.parent.parent is tree.get_root()


def test_duplicates_route_right():
    t = BST()
    for k in (5, 5, 5):
        t.insert(k)
    root = t.get_root()
    assert root.left is None
    assert root.right.key == 5 and root.right.right.key == 5
    assert t.in_order() == [5, 5, 5]


def test_insert_node_into_empty_tree():
    t = BST()
    n = TNode(2)
    t.insert_node(n)
    assert t.get_root() is n


def test_search(tree):
    assert tree.search(6).key == 6
    assert tree.search(42) is None
    assert 8 in tree
    assert 0 not in tree


def test_search_is_idempotent(tree):
    assert tree.search(7) is tree.search(7)


def test_delete_two_children_uses_successor(tree):
    assert tree.delete(3)
    assert tree.in_order() == [1, 4, 5, 6, 7, 8]
    assert tree.breadth_first() == [[5], [4, 7], [1, 6, 8]]
    tree.validate()


def test_delete_leaf(tree):
    assert tree.delete(8)
    assert tree.search(7).right is None
    tree.validate()


def test_delete_one_child_splices(tree):
    tree.delete(8)
    tree.delete(7)
    root = tree.get_root()
    assert root.right.key == 6
    assert root.right.parent is root
    tree.validate()


def test_delete_root_until_empty(tree):
    for _ in range(7):
        assert tree.delete(tree.get_root().key)
        tree.validate()
    assert tree.is_empty()


def test_delete_missing_is_logged_noop(tree, caplog):
    before = tree.breadth_first()
    with caplog.at_level(logging.WARNING, logger="treeindex.index.bst"):
        assert tree.delete(99) is False
    assert tree.breadth_first() == before
    assert "99" in caplog.text


def test_delete_on_empty_tree():
    t = BST()
    assert t.delete(1) is False
    assert t.is_empty()


def test_print_helpers(tree):
    buf = io.StringIO()
    tree.print_in_order(file=buf)
    tree.print_bf(file=buf)
    assert buf.getvalue() == "1 3 4 5 6 7 8\n5\n3 7\n1 4 6 8\n"


def test_validate_detects_broken_order(tree):
    tree.search(1).key = 100
    with pytest.raises(StructuralInvariantError):
        tree.validate()


def test_validate_detects_broken_parent(tree):
    tree.search(1).parent = None
    with pytest.raises(StructuralInvariantError):
        tree.validate()


def test_random_operations_keep_order():
    rng = random.Random(11)
    t = BST()
    keys = []
    for _ in range(300):
        k = rng.randrange(60)
        if keys and rng.random() < 0.4:
            k = rng.choice(keys)
            assert t.delete(k)
            keys.remove(k)
        else:
            t.insert(k)
            keys.append(k)
        assert t.in_order() == sorted(keys)
        assert len(t) == len(keys)
    t.validate()


def test_deep_chain_is_walked_without_recursion():
    t = BST()
    for k in range(2000):
        t.insert(k)
    assert len(t) == 2000
    assert t.height() == 2000
    assert t.in_order() == list(range(2000))
    assert not t.is_balanced()
    t.validate()


@pytest.mark.parametrize("bad", [2.9, "3", None])
def test_insert_rejects_non_integer_keys(bad):
    t = BST(1)
    with pytest.raises(TypeError):
        t.insert(bad)
    assert t.in_order() == [1]


def test_constructor_rejects_non_integer_key():
    with pytest.raises(TypeError):
        BST(2.5)
