"""Traced structure algorithms and the operation registry.

Every operation takes the current structure value first, followed by its
already-validated arguments, and returns an ``OperationResult``. The
registry pairs each operation with the parsers that validate its raw
arguments.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

from ..structure_types import StructureKind
from .. import validation
from . import array, avl, graph, hash_table, heap, linear, linked_list, tree
from ._base import OperationResult, working_copy


@dataclass(frozen=True)
class RegisteredOperation:
    """A registered operation and the parsers for its positional arguments."""

    func: Callable[..., OperationResult]
    parsers: tuple[Callable[[Any], Any], ...] = ()

    @property
    def arity(self) -> int:
        return len(self.parsers)


_number = validation.parse_number
_key = validation.parse_key
_node = validation.parse_node_id
_position = validation.parse_position

_OPERATIONS: dict[StructureKind, dict[str, RegisteredOperation]] = {
    StructureKind.AVL_TREE: {
        "insert": RegisteredOperation(avl.insert, (_number,)),
        "delete": RegisteredOperation(avl.delete, (_number,)),
        "search": RegisteredOperation(avl.search, (_number,)),
        "inorder": RegisteredOperation(avl.inorder),
        "preorder": RegisteredOperation(avl.preorder),
        "postorder": RegisteredOperation(avl.postorder),
    },
    StructureKind.TREE: {
        "insert_child": RegisteredOperation(tree.insert_child, (_number, _number)),
        "delete_node": RegisteredOperation(tree.delete_node, (_number,)),
        "search": RegisteredOperation(tree.search, (_number,)),
        "dfs": RegisteredOperation(tree.dfs),
        "bfs": RegisteredOperation(tree.bfs),
        "find_height": RegisteredOperation(tree.find_height),
    },
    StructureKind.HEAP: {
        "insert": RegisteredOperation(heap.insert, (_number,)),
        "extract": RegisteredOperation(heap.extract),
        "peek": RegisteredOperation(heap.peek),
        "heap_sort": RegisteredOperation(heap.heap_sort),
        "heapify": RegisteredOperation(heap.heapify, (validation.parse_heap_kind,)),
    },
    StructureKind.HASH_TABLE: {
        "insert": RegisteredOperation(hash_table.insert, (_key, validation.parse_text)),
        "search": RegisteredOperation(hash_table.search, (_key,)),
        "delete": RegisteredOperation(hash_table.delete, (_key,)),
        "compare_hashes": RegisteredOperation(hash_table.compare_hashes, (_key,)),
    },
    StructureKind.GRAPH: {
        "bfs": RegisteredOperation(graph.bfs, (_node,)),
        "dfs": RegisteredOperation(graph.dfs, (_node,)),
        "dijkstra": RegisteredOperation(graph.dijkstra, (_node, _node)),
    },
    StructureKind.QUEUE: {
        "enqueue": RegisteredOperation(linear.queue_enqueue, (_number,)),
        "dequeue": RegisteredOperation(linear.queue_dequeue),
        "front": RegisteredOperation(linear.queue_front),
    },
    StructureKind.STACK: {
        "push": RegisteredOperation(linear.stack_push, (_number,)),
        "pop": RegisteredOperation(linear.stack_pop),
        "peek": RegisteredOperation(linear.stack_peek),
        "check_balanced": RegisteredOperation(linear.check_balanced, (validation.parse_expression,)),
    },
    StructureKind.CIRCULAR_BUFFER: {
        "enqueue": RegisteredOperation(linear.buffer_enqueue, (_number,)),
        "dequeue": RegisteredOperation(linear.buffer_dequeue),
        "peek": RegisteredOperation(linear.buffer_peek),
        "status": RegisteredOperation(linear.buffer_status),
    },
    StructureKind.LINKED_LIST: {
        "insert_head": RegisteredOperation(linked_list.insert_head, (_number,)),
        "insert_tail": RegisteredOperation(linked_list.insert_tail, (_number,)),
        "insert_at": RegisteredOperation(linked_list.insert_at, (_position, _number)),
        "delete": RegisteredOperation(linked_list.delete, (_number,)),
        "search": RegisteredOperation(linked_list.search, (_number,)),
        "traverse": RegisteredOperation(linked_list.traverse),
        "traverse_backward": RegisteredOperation(linked_list.traverse_backward),
    },
    StructureKind.ARRAY: {
        "linear_search": RegisteredOperation(array.linear_search, (_number,)),
        "binary_search": RegisteredOperation(array.binary_search, (_number,)),
        "insertion_sort": RegisteredOperation(array.insertion_sort),
        "append": RegisteredOperation(array.append, (_number,)),
        "insert_at": RegisteredOperation(array.insert_at, (_position, _number)),
    },
}


def get_operation(kind: StructureKind, name: str) -> RegisteredOperation:
    """Look up the operation *name* registered for structures of *kind*.

    Raises ``ValueError`` if *name* is not registered for *kind*.
    """
    entry = _OPERATIONS.get(StructureKind(kind), {}).get(name)
    if entry is None:
        raise ValueError(f"Unknown operation for {StructureKind(kind).value}: {name}")
    return entry


SUPPORTED_OPERATIONS: dict[StructureKind, tuple[str, ...]] = {
    kind: tuple(ops.keys()) for kind, ops in _OPERATIONS.items()
}

__all__ = [
    "OperationResult",
    "RegisteredOperation",
    "get_operation",
    "working_copy",
    "SUPPORTED_OPERATIONS",
]
