"""Tests for traced heap operations."""

import random

import pytest

from algotrace import constants
from algotrace.algorithms import heap
from algotrace.builders import new_heap, seed_heap
from algotrace.structure_types import Heap, HeapKind


def _insert_all(h, values):
    results = []
    for v in values:
        result = heap.insert(h, v)
        results.append(result)
        h = result.structure
    return h, results


class TestInsert:
    def test_max_heap_insert_10_20_30(self):
        h, _ = _insert_all(Heap(), [10, 20, 30])
        assert h.values == [30, 10, 20]

    def test_min_heap_insert(self):
        h, _ = _insert_all(Heap(kind=HeapKind.MIN), [30, 20, 10])
        assert h.values == [10, 30, 20]

    def test_swaps_are_recorded(self):
        _, results = _insert_all(Heap(), [10, 20])
        labels = [s.label for s in results[-1].trace]
        assert labels == ["append 20", "swap index 1 with parent 0", "heap property restored"]

    def test_caller_heap_is_not_mutated(self):
        original = Heap(values=[5])
        heap.insert(original, 9)
        assert original.values == [5]

    @pytest.mark.parametrize("kind", [HeapKind.MAX, HeapKind.MIN])
    def test_settled_snapshots_satisfy_heap_property(self, kind):
        rng = random.Random(3)
        h, results = _insert_all(Heap(kind=kind), [rng.randint(0, 99) for _ in range(40)])
        for result in results:
            settled = result.trace.tagged(constants.TAG_HEAP_SETTLED)
            assert settled
            for step in settled:
                assert step.snapshot.is_valid()


class TestExtract:
    def test_extract_returns_root(self):
        result = heap.extract(seed_heap())
        assert result.value == 90
        assert result.structure.values[0] == 85
        assert result.structure.is_valid()

    def test_extract_empty_heap(self):
        empty = Heap()
        result = heap.extract(empty)
        assert not result.ok
        assert result.structure is empty
        assert "empty" in result.trace.last.explanation.lower()

    def test_extract_single(self):
        result = heap.extract(Heap(values=[4]))
        assert result.value == 4
        assert result.structure.values == []

    def test_left_child_checked_before_right_on_tie(self):
        # both children equal: the left one must win
        result = heap.extract(Heap(values=[9, 5, 5, 1]))
        assert result.structure.values == [5, 1, 5]

    def test_repeated_extract_keeps_heap_valid(self):
        h = new_heap([random.Random(1).randint(0, 50) for _ in range(25)], HeapKind.MIN)
        while h.values:
            result = heap.extract(h)
            for step in result.trace.tagged(constants.TAG_HEAP_SETTLED):
                assert step.snapshot.is_valid()
            h = result.structure


class TestHeapSort:
    def test_max_heap_sorts_descending(self):
        h = seed_heap()
        result = heap.heap_sort(h)
        assert result.value == [90, 85, 75, 70, 65, 60, 55]
        assert result.structure is h

    def test_min_heap_sorts_ascending(self):
        h = new_heap([4, 8, 1, 9, 3], HeapKind.MIN)
        assert heap.heap_sort(h).value == [1, 3, 4, 8, 9]

    def test_empty_heap_sort(self):
        assert heap.heap_sort(Heap()).value == []


class TestHeapifyAndPeek:
    def test_heapify_switches_kind(self):
        result = heap.heapify(seed_heap(), HeapKind.MIN)
        assert result.structure.kind == HeapKind.MIN
        assert result.structure.values[0] == 55
        assert result.structure.is_valid()

    def test_peek(self):
        result = heap.peek(seed_heap())
        assert result.value == 90
        assert len(result.trace) == 1

    def test_peek_empty(self):
        assert not heap.peek(Heap()).ok

    def test_index_helpers(self):
        assert Heap.parent(5) == 2
        assert (Heap.left(2), Heap.right(2)) == (5, 6)
