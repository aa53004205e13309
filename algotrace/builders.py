"""Structure construction: graph builder, fixed-capacity factories and seeds."""

from __future__ import annotations

import logging
from typing import Any, Iterable

from . import constants
from .algorithms import avl, hash_table, heap, tree as general_tree
from .run_types import EngineConfig
from .structure_types import (
    AVLTree,
    ArrayState,
    ChainKind,
    CircularBuffer,
    Graph,
    GraphEdge,
    GraphNode,
    HashTable,
    Heap,
    HeapKind,
    LinkedChain,
    ListNode,
    Queue,
    Stack,
    Tree,
    TreeNode,
)
from .validation import parse_capacity, parse_edge, parse_node_id

logger = logging.getLogger(__name__)


class StructureBuildError(ValueError):
    """Raised when a builder is asked for an inconsistent structure."""


class GraphBuilder:
    """Accumulates nodes and undirected weighted edges, then builds a Graph."""

    def __init__(self):
        self._nodes: list[GraphNode] = []
        self._edges: list[GraphEdge] = []

    def add_node(self, node_id: Any, x: float = 0.0, y: float = 0.0) -> GraphBuilder:
        node_id = parse_node_id(node_id)
        if any(n.id == node_id for n in self._nodes):
            raise StructureBuildError(f"Node {node_id} already exists")
        self._nodes.append(GraphNode(node_id, x, y))
        return self

    def add_edge(self, source: Any, target: Any, weight: Any = 1) -> GraphBuilder:
        source, target, weight = parse_edge(source, target, weight)
        known = {n.id for n in self._nodes}
        missing = [n for n in (source, target) if n not in known]
        if missing:
            raise StructureBuildError(f"Unknown node(s) for edge {source}-{target}: {', '.join(missing)}")
        if source == target:
            raise StructureBuildError(f"Self-loop on {source} is not allowed")
        if any({e.source, e.target} == {source, target} for e in self._edges):
            raise StructureBuildError(f"Edge {source}-{target} already exists")
        self._edges.append(GraphEdge(source, target, weight))
        return self

    def build(self) -> Graph:
        logger.debug("Built graph with %d nodes, %d edges", len(self._nodes), len(self._edges))
        return Graph(nodes=list(self._nodes), edges=list(self._edges))


# ── Factories ────────────────────────────────────────────────────


def new_hash_table(capacity: Any = constants.HASH_TABLE_CAPACITY) -> HashTable:
    return HashTable(buckets=[None] * parse_capacity(capacity))


def new_circular_buffer(capacity: Any = constants.CIRCULAR_BUFFER_CAPACITY) -> CircularBuffer:
    return CircularBuffer(slots=[None] * parse_capacity(capacity))


def new_heap(values: Iterable[int | float] = (), kind: HeapKind = HeapKind.MAX) -> Heap:
    """Heapify *values* into a new heap of *kind*."""
    return heap.heapify(Heap(values=list(values)), kind).structure


def new_avl_tree(values: Iterable[int | float] = ()) -> AVLTree:
    tree = AVLTree()
    for value in values:
        tree = avl.insert(tree, value).structure
    return tree


def new_tree(
    root: int | float | None = None, edges: Iterable[tuple[int | float, int | float]] = ()
) -> Tree:
    """Build a general tree from *root* and ``(parent, child)`` pairs in order."""
    tree = Tree(root=TreeNode(root) if root is not None else None)
    for parent, child in edges:
        result = general_tree.insert_child(tree, parent, child)
        if not result.ok:
            raise StructureBuildError(f"Cannot add {child} under {parent}: {result.trace.last.explanation}")
        tree = result.structure
    return tree


def new_linked_list(kind: ChainKind = ChainKind.SINGLY, values: Iterable[Any] = ()) -> LinkedChain:
    kind = ChainKind(kind)
    chain = LinkedChain(kind=kind)
    previous: ListNode | None = None
    for value in values:
        node = ListNode(value)
        if previous is None:
            chain.head = node
        else:
            previous.next = node
            if kind == ChainKind.DOUBLY:
                node.prev = previous
        previous = node
    if kind == ChainKind.CIRCULAR and previous is not None:
        previous.next = chain.head
    return chain


# ── Seeds ────────────────────────────────────────────────────────


def seed_heap(config: EngineConfig = EngineConfig()) -> Heap:
    return new_heap(constants.SEED_HEAP, config.heap_kind)


def seed_hash_table(config: EngineConfig = EngineConfig()) -> HashTable:
    table = new_hash_table(config.hash_capacity)
    for key, value in constants.SEED_HASH_ENTRIES:
        table = hash_table.insert(table, key, value).structure
    return table


def seed_graph() -> Graph:
    builder = GraphBuilder()
    for node_id, x, y in constants.SEED_GRAPH_NODES:
        builder.add_node(node_id, x, y)
    for source, target, weight in constants.SEED_GRAPH_EDGES:
        builder.add_edge(source, target, weight)
    return builder.build()


def seed_queue() -> Queue:
    return Queue(items=list(constants.SEED_QUEUE))


def seed_stack() -> Stack:
    return Stack()


def seed_circular_buffer(config: EngineConfig = EngineConfig()) -> CircularBuffer:
    return new_circular_buffer(config.circular_capacity)


def seed_linked_list(kind: ChainKind = ChainKind.SINGLY) -> LinkedChain:
    values = constants.SEED_DOUBLY_LIST if ChainKind(kind) == ChainKind.DOUBLY else constants.SEED_SINGLY_LIST
    return new_linked_list(kind, values)


def seed_tree() -> Tree:
    return new_tree(constants.SEED_TREE_ROOT, constants.SEED_TREE_EDGES)


def seed_array(values: Iterable[int | float] = ()) -> ArrayState:
    return ArrayState(values=list(values))
