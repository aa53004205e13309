"""Tests for array searches, insertion sort and element insertion."""

from algotrace.algorithms import array
from algotrace.structure_types import ArrayState


class TestSearch:
    def test_linear_search_first_match(self):
        result = array.linear_search(ArrayState([4, 2, 7, 2]), 2)
        assert result.value == 1
        assert len(result.trace) == 3

    def test_linear_search_missing(self):
        assert array.linear_search(ArrayState([1, 2]), 5).value is None

    def test_binary_search(self):
        result = array.binary_search(ArrayState([1, 3, 5, 7, 9, 11]), 9)
        assert result.value == 4
        mids = [s.variables["mid"] for s in result.trace if "mid" in s.variables]
        assert mids == [2, 4]

    def test_binary_search_missing(self):
        result = array.binary_search(ArrayState([1, 3, 5]), 4)
        assert result.value is None
        assert result.trace.last.label == "not found"

    def test_binary_search_rejects_unsorted(self):
        arr = ArrayState([3, 1, 2])
        result = array.binary_search(arr, 1)
        assert not result.ok
        assert result.structure is arr


class TestMutations:
    def test_insertion_sort(self):
        arr = ArrayState([5, 2, 4, 6, 1, 3])
        result = array.insertion_sort(arr)
        assert result.structure.values == [1, 2, 3, 4, 5, 6]
        assert arr.values == [5, 2, 4, 6, 1, 3]

    def test_append(self):
        assert array.append(ArrayState([1]), 2).structure.values == [1, 2]

    def test_insert_at_shifts_right(self):
        result = array.insert_at(ArrayState([1, 2, 3]), 1, 9)
        assert result.structure.values == [1, 9, 2, 3]
        shifts = [s.label for s in result.trace if s.label.startswith("arr[") and "] = arr[" in s.label]
        assert shifts == ["arr[3] = arr[2]", "arr[2] = arr[1]"]

    def test_insert_at_out_of_range(self):
        assert not array.insert_at(ArrayState([1]), 5, 0).ok
