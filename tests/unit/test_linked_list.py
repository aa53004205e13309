"""Tests for singly, doubly and circular linked-list operations."""

import pytest

from algotrace.algorithms import linked_list
from algotrace.builders import new_linked_list, seed_linked_list
from algotrace.structure_types import ChainKind


def _assert_links(chain):
    """Check prev links (doubly) and the closing link (circular)."""
    nodes = list(chain.iter_nodes())
    if chain.kind == ChainKind.DOUBLY and nodes:
        assert nodes[0].prev is None
        for a, b in zip(nodes, nodes[1:]):
            assert b.prev is a
    if chain.kind == ChainKind.CIRCULAR and nodes:
        assert nodes[-1].next is chain.head
    if chain.kind != ChainKind.CIRCULAR and nodes:
        assert nodes[-1].next is None


ALL_KINDS = [ChainKind.SINGLY, ChainKind.DOUBLY, ChainKind.CIRCULAR]


class TestInsert:
    @pytest.mark.parametrize("kind", ALL_KINDS)
    def test_insert_head(self, kind):
        chain = new_linked_list(kind, [20, 30])
        result = linked_list.insert_head(chain, 10)
        assert result.structure.values() == [10, 20, 30]
        _assert_links(result.structure)

    @pytest.mark.parametrize("kind", ALL_KINDS)
    def test_insert_tail(self, kind):
        chain = new_linked_list(kind, [10, 20])
        result = linked_list.insert_tail(chain, 30)
        assert result.structure.values() == [10, 20, 30]
        _assert_links(result.structure)

    @pytest.mark.parametrize("kind", ALL_KINDS)
    def test_insert_into_empty(self, kind):
        result = linked_list.insert_tail(new_linked_list(kind), 1)
        assert result.structure.values() == [1]
        _assert_links(result.structure)

    @pytest.mark.parametrize("kind", ALL_KINDS)
    @pytest.mark.parametrize("position, expected", [(0, [5, 10, 20]), (1, [10, 5, 20]), (2, [10, 20, 5])])
    def test_insert_at(self, kind, position, expected):
        chain = new_linked_list(kind, [10, 20])
        result = linked_list.insert_at(chain, position, 5)
        assert result.structure.values() == expected
        _assert_links(result.structure)

    def test_insert_at_out_of_range(self):
        chain = seed_linked_list(ChainKind.DOUBLY)
        result = linked_list.insert_at(chain, 9, 1)
        assert not result.ok
        assert result.structure is chain

    def test_tail_insert_walks_the_list(self):
        result = linked_list.insert_tail(seed_linked_list(), 50)
        walks = [s for s in result.trace if s.label.startswith("current = current.next")]
        assert len(walks) == 3

    def test_caller_chain_is_not_mutated(self):
        chain = seed_linked_list()
        linked_list.insert_head(chain, 1)
        assert chain.values() == [10, 20, 30, 40]


class TestDelete:
    @pytest.mark.parametrize("kind", ALL_KINDS)
    @pytest.mark.parametrize(
        "value, expected, case",
        [(10, [20, 30], "head"), (20, [10, 30], "middle"), (30, [10, 20], "tail")],
    )
    def test_delete_cases(self, kind, value, expected, case):
        result = linked_list.delete(new_linked_list(kind, [10, 20, 30]), value)
        assert result.structure.values() == expected
        assert result.trace.last.variables["case"] == case
        _assert_links(result.structure)

    @pytest.mark.parametrize("kind", ALL_KINDS)
    def test_delete_only_node(self, kind):
        result = linked_list.delete(new_linked_list(kind, [7]), 7)
        assert result.structure.head is None
        assert result.trace.last.variables["case"] == "only node"

    def test_delete_missing(self):
        chain = seed_linked_list()
        result = linked_list.delete(chain, 99)
        assert not result.ok
        assert result.structure is chain

    def test_delete_from_empty(self):
        assert not linked_list.delete(new_linked_list(), 1).ok


class TestSearchAndTraverse:
    def test_search_found(self):
        assert linked_list.search(seed_linked_list(), 30).value == 2

    def test_search_missing(self):
        result = linked_list.search(seed_linked_list(ChainKind.CIRCULAR), 99)
        assert result.value is None
        assert result.trace.last.label == "not found"

    def test_circular_traversal_stops_at_head(self):
        result = linked_list.traverse(seed_linked_list(ChainKind.CIRCULAR))
        assert result.value == [10, 20, 30, 40]
        assert "back at the head" in result.trace.last.explanation

    def test_backward_traversal(self):
        result = linked_list.traverse_backward(seed_linked_list(ChainKind.DOUBLY))
        assert result.value == [30, 20, 10]

    def test_backward_traversal_needs_doubly(self):
        result = linked_list.traverse_backward(seed_linked_list(ChainKind.SINGLY))
        assert not result.ok

    def test_circular_snapshot_keeps_cycle(self):
        result = linked_list.insert_tail(seed_linked_list(ChainKind.CIRCULAR), 50)
        snapshot = result.trace.last.snapshot
        assert snapshot.last().next is snapshot.head
        assert snapshot.values() == [10, 20, 30, 40, 50]
