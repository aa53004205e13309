"""Binary heap operations with step tracing.

The comparator comes from ``Heap.better``: ``a > b`` for a max-heap and
``a < b`` for a min-heap. Every snapshot recorded right after a sift
completes is tagged ``heap-settled``.
"""

from __future__ import annotations

import logging

from .. import constants
from ..recorder import TraceRecorder
from ..structure_types import Heap, HeapKind
from ._base import OperationResult, working_copy

logger = logging.getLogger(__name__)


def _sift_up(heap: Heap, index: int, recorder: TraceRecorder) -> None:
    values = heap.values
    while index > 0:
        parent = heap.parent(index)
        if not heap.better(values[index], values[parent]):
            recorder.emit(
                f"compare {values[index]} with parent {values[parent]}",
                f"{values[index]} does not beat its parent {values[parent]}; stop sifting up.",
                snapshot=heap,
                variables={"index": index, "parent": parent},
                highlight={index, parent},
            )
            break
        values[index], values[parent] = values[parent], values[index]
        recorder.emit(
            f"swap index {index} with parent {parent}",
            f"{values[parent]} beats its parent {values[index]}; swapping them.",
            snapshot=heap,
            variables={"index": index, "parent": parent},
            highlight={index, parent},
        )
        index = parent


def _sift_down(heap: Heap, index: int, recorder: TraceRecorder) -> None:
    values = heap.values
    size = len(values)
    while True:
        extreme = index
        left, right = heap.left(index), heap.right(index)
        if left < size and heap.better(values[left], values[extreme]):
            extreme = left
        if right < size and heap.better(values[right], values[extreme]):
            extreme = right
        if extreme == index:
            recorder.emit(
                f"index {index} in place",
                f"{values[index]} already beats its children; stop sifting down.",
                snapshot=heap,
                variables={"index": index, "left": left, "right": right},
                highlight={index},
            )
            break
        values[index], values[extreme] = values[extreme], values[index]
        recorder.emit(
            f"swap index {index} with child {extreme}",
            f"Child {values[index]} beats {values[extreme]}; swapping them.",
            snapshot=heap,
            variables={"index": index, "child": extreme},
            highlight={index, extreme},
        )
        index = extreme


def _settled(heap: Heap, recorder: TraceRecorder, explanation: str) -> None:
    recorder.emit(
        "heap property restored",
        explanation,
        snapshot=heap,
        variables={"size": len(heap.values), "kind": heap.kind.value},
        tags=(constants.TAG_HEAP_SETTLED,),
    )


def _extract_root(heap: Heap, recorder: TraceRecorder) -> int | float:
    values = heap.values
    root = values[0]
    recorder.emit(
        f"extract root {root}",
        f"The root {root} is the {heap.kind.value}imum; removing it.",
        snapshot=heap,
        variables={"root": root},
        highlight={0},
    )
    last = values.pop()
    if values:
        values[0] = last
        recorder.emit(
            f"move {last} to root",
            f"Moved the last element {last} into the root slot.",
            snapshot=heap,
            variables={"root": root, "moved": last},
            highlight={0},
        )
        _sift_down(heap, 0, recorder)
    return root


# ── Public operations ────────────────────────────────────────────


def insert(heap: Heap, value: int | float) -> OperationResult:
    recorder = TraceRecorder("heap.insert")
    work = working_copy(heap)
    work.values.append(value)
    index = len(work.values) - 1
    recorder.emit(
        f"append {value}",
        f"Appended {value} at index {index}; sifting up.",
        snapshot=work,
        variables={"value": value, "index": index},
        highlight={index},
    )
    _sift_up(work, index, recorder)
    _settled(work, recorder, f"Inserted {value}; every parent beats its children.")
    return OperationResult.completed(work, recorder)


def extract(heap: Heap) -> OperationResult:
    """Remove the root; the result's ``value`` is the removed root."""
    recorder = TraceRecorder("heap.extract")
    if not heap.values:
        return OperationResult.failed(heap, recorder, "heap is empty", "Heap is empty; nothing to extract.")
    work = working_copy(heap)
    root = _extract_root(work, recorder)
    _settled(work, recorder, f"Extracted {root}; every parent beats its children.")
    return OperationResult.completed(work, recorder, value=root)


def peek(heap: Heap) -> OperationResult:
    recorder = TraceRecorder("heap.peek")
    if not heap.values:
        return OperationResult.failed(heap, recorder, "heap is empty", "Heap is empty; nothing to peek.")
    root = heap.values[0]
    recorder.emit(
        f"peek root {root}",
        f"The {heap.kind.value}imum element is {root}.",
        snapshot=heap,
        variables={"root": root},
        highlight={0},
    )
    return OperationResult.completed(heap, recorder, value=root)


def heap_sort(heap: Heap) -> OperationResult:
    """Drain a working copy by repeated extraction.

    The returned structure is the input heap; the result's ``value`` is the
    extracted sequence (descending for a max-heap, ascending for a min-heap).
    """
    recorder = TraceRecorder("heap.heap_sort")
    work = working_copy(heap)
    ordered: list[int | float] = []
    recorder.emit(
        "heap sort",
        f"Sorting {len(work.values)} values by repeated extraction.",
        snapshot=work,
        variables={"size": len(work.values)},
    )
    while work.values:
        ordered.append(_extract_root(work, recorder))
        recorder.emit(
            f"output {ordered[-1]}",
            f"Sorted so far: {ordered}.",
            snapshot=work,
            variables={"sorted": ", ".join(str(v) for v in ordered), "remaining": len(work.values)},
            tags=(constants.TAG_HEAP_SETTLED,),
        )
    logger.info("Heap sort produced %d values", len(ordered))
    return OperationResult.completed(heap, recorder, value=ordered)


def heapify(heap: Heap, kind: HeapKind | None = None) -> OperationResult:
    """Bottom-up build over the heap's current values, optionally switching kind."""
    recorder = TraceRecorder("heap.heapify")
    work = working_copy(heap)
    if kind is not None:
        work.kind = HeapKind(kind)
    recorder.emit(
        f"build {work.kind.value}-heap",
        f"Building a {work.kind.value}-heap from {work.values}.",
        snapshot=work,
        variables={"kind": work.kind.value, "size": len(work.values)},
    )
    for index in range(len(work.values) // 2 - 1, -1, -1):
        _sift_down(work, index, recorder)
    _settled(work, recorder, f"Built a {work.kind.value}-heap.")
    return OperationResult.completed(work, recorder)
