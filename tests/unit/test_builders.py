"""Tests for structure builders, fixed-capacity factories and seeds."""

import pytest

from algotrace.builders import (
    GraphBuilder,
    StructureBuildError,
    new_avl_tree,
    new_circular_buffer,
    new_hash_table,
    new_heap,
    seed_circular_buffer,
    seed_graph,
    seed_hash_table,
    seed_heap,
    seed_linked_list,
    seed_queue,
)
from algotrace.run_types import EngineConfig
from algotrace.structure_types import ChainKind, HeapKind
from algotrace.validation import InputValidationError


class TestGraphBuilder:
    def test_duplicate_node_rejected(self):
        builder = GraphBuilder().add_node("A")
        with pytest.raises(StructureBuildError, match="already exists"):
            builder.add_node("A")

    def test_edge_needs_both_nodes(self):
        builder = GraphBuilder().add_node("A")
        with pytest.raises(StructureBuildError, match="Unknown node"):
            builder.add_edge("A", "B", 1)

    def test_duplicate_edge_rejected_in_either_direction(self):
        builder = GraphBuilder().add_node("A").add_node("B").add_edge("A", "B", 3)
        with pytest.raises(StructureBuildError, match="already exists"):
            builder.add_edge("B", "A", 5)

    def test_self_loop_rejected(self):
        with pytest.raises(StructureBuildError):
            GraphBuilder().add_node("A").add_edge("A", "A", 1)

    def test_non_numeric_weight_rejected(self):
        builder = GraphBuilder().add_node("A").add_node("B")
        with pytest.raises(InputValidationError):
            builder.add_edge("A", "B", "far")

    def test_build(self):
        g = GraphBuilder().add_node("A", 1, 2).add_node("B").add_edge("A", "B", "4").build()
        assert g.node_ids() == ["A", "B"]
        assert g.edge_weight("B", "A") == 4


class TestFactories:
    def test_hash_table_capacity_fixed(self):
        assert new_hash_table(11).capacity == 11
        with pytest.raises(InputValidationError):
            new_hash_table(0)

    def test_circular_buffer_capacity(self):
        assert new_circular_buffer("4").capacity == 4

    def test_new_heap_heapifies(self):
        h = new_heap([1, 5, 3], HeapKind.MAX)
        assert h.values[0] == 5
        assert h.is_valid()

    def test_new_avl_tree(self):
        assert new_avl_tree([1, 2, 3]).root.value == 2


class TestSeeds:
    def test_seed_heap(self):
        assert seed_heap().values == [90, 85, 75, 70, 60, 65, 55]

    def test_seed_heap_min_config(self):
        h = seed_heap(EngineConfig(heap_kind=HeapKind.MIN))
        assert h.kind == HeapKind.MIN
        assert h.values[0] == 55

    def test_seed_hash_table_is_hashed(self):
        table = seed_hash_table()
        assert [(i, b.key) for i, b in table.occupied()] == [(0, "banana"), (2, "cherry"), (5, "apple")]

    def test_seed_graph(self):
        g = seed_graph()
        assert g.node_ids() == ["A", "B", "C", "D", "E"]
        assert len(g.edges) == 6

    def test_seed_linear(self):
        assert seed_queue().items == [10, 20, 30, 40]
        assert seed_circular_buffer().capacity == 8
        assert seed_linked_list(ChainKind.DOUBLY).values() == [10, 20, 30]
