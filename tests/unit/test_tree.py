"""Tests for the general (n-ary) tree operations."""

import pytest

from algotrace.algorithms import tree
from algotrace.api import run_operation
from algotrace.builders import StructureBuildError, new_tree, seed_tree
from algotrace.structure_types import StructureKind, Tree


def _shape(node):
    if node is None:
        return None
    return (node.value, [_shape(c) for c in node.children])


class TestSeed:
    def test_seed_shape(self):
        assert _shape(seed_tree().root) == (
            1,
            [(2, [(4, []), (5, [])]), (3, [(6, []), (7, []), (8, [])])],
        )

    def test_unknown_parent_rejected(self):
        with pytest.raises(StructureBuildError, match="Cannot add 9 under 42"):
            new_tree(1, [(42, 9)])


class TestInsertChild:
    def test_appends_as_last_child(self):
        original = seed_tree()
        result = tree.insert_child(original, 3, 9)
        _, parent = result.structure.locate(3)
        assert [c.value for c in parent.children] == [6, 7, 8, 9]
        assert original.locate(9) == (None, None)
        assert result.trace.last.variables["height"] == 3

    def test_deeper_child_grows_height(self):
        result = tree.insert_child(seed_tree(), 4, 9)
        assert result.trace.last.variables["height"] == 4
        assert result.trace.last.highlight == frozenset({4, 9})

    def test_empty_tree_gets_a_root(self):
        result = tree.insert_child(Tree(), 0, 5)
        assert _shape(result.structure.root) == (5, [])

    def test_missing_parent_fails(self):
        original = seed_tree()
        result = tree.insert_child(original, 42, 9)
        assert not result.ok
        assert result.structure is original
        assert result.trace.last.label == "parent not found"

    def test_duplicate_value_fails(self):
        result = tree.insert_child(seed_tree(), 2, 7)
        assert not result.ok
        assert result.trace.last.label == "duplicate value"


class TestDeleteNode:
    def test_leaf(self):
        result = tree.delete_node(seed_tree(), 5)
        assert _shape(result.structure.root)[1][0] == (2, [(4, [])])

    def test_first_child_is_promoted(self):
        result = tree.delete_node(seed_tree(), 3)
        assert _shape(result.structure.root) == (
            1,
            [(2, [(4, []), (5, [])]), (6, [(7, []), (8, [])])],
        )
        assert "promote 6" in [s.label for s in result.trace]

    def test_root_with_children(self):
        result = tree.delete_node(seed_tree(), 1)
        root = result.structure.root
        assert root.value == 2
        assert [c.value for c in root.children] == [4, 5, 3]

    def test_lone_root_empties_the_tree(self):
        result = tree.delete_node(new_tree(1), 1)
        assert result.structure.root is None
        assert result.trace.last.variables["remaining_nodes"] == 0

    def test_missing_value_fails(self):
        original = seed_tree()
        result = tree.delete_node(original, 42)
        assert not result.ok
        assert result.structure is original


class TestSearch:
    def test_found_counts_preorder_comparisons(self):
        result = tree.search(seed_tree(), 5)
        assert result.value is True
        assert result.trace.last.variables["comparisons"] == 4

    def test_not_found_compares_every_node(self):
        result = tree.search(seed_tree(), 42)
        assert result.value is False
        assert result.trace.last.label == "not found"
        assert result.trace.last.variables["comparisons"] == 8


class TestTraversals:
    def test_dfs_is_preorder(self):
        result = tree.dfs(seed_tree())
        assert result.value == [1, 2, 4, 5, 3, 6, 7, 8]
        assert "backtrack from 3" in [s.label for s in result.trace]

    def test_bfs_is_level_order(self):
        result = tree.bfs(seed_tree())
        assert result.value == [1, 2, 3, 4, 5, 6, 7, 8]
        assert [s.label for s in result.trace if s.label.startswith("level")] == [
            "level 0",
            "level 1",
            "level 2",
        ]
        assert result.trace.last.variables["levels"] == 3

    def test_empty_tree_traversals(self):
        assert tree.dfs(Tree()).value == []
        assert tree.bfs(Tree()).value == []


class TestFindHeight:
    def test_seed_height(self):
        result = tree.find_height(seed_tree())
        assert result.value == 3
        assert result.trace.last.label == "done"

    def test_leaf_and_empty(self):
        assert tree.find_height(new_tree(1)).value == 1
        assert tree.find_height(Tree()).value == 0

    def test_every_node_is_measured(self):
        result = tree.find_height(seed_tree())
        measured = {s.variables["node"] for s in result.trace if "node" in s.variables}
        assert measured == set(range(1, 9))


class TestRegistry:
    def test_run_insert_child_from_text(self):
        result = run_operation(seed_tree(), "insert_child", "2", "10")
        assert result.structure.KIND == StructureKind.TREE
        assert result.structure.locate(10)[0].value == 2

    def test_non_numeric_parent_rejected(self):
        with pytest.raises(ValueError, match="Invalid input"):
            run_operation(seed_tree(), "insert_child", "root", "10")
