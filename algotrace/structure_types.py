"""Data-structure models (pure data, no algorithm logic).

Every model is a plain mutable dataclass so that algorithms can work on a
deep-copied working instance. ``KIND`` tags each model with the structure kind
carried by a step snapshot.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, Iterator


class StructureKind(str, Enum):
    """Kinds of structure a snapshot can hold."""

    AVL_TREE = "avl_tree"
    HEAP = "heap"
    HASH_TABLE = "hash_table"
    GRAPH = "graph"
    QUEUE = "queue"
    STACK = "stack"
    CIRCULAR_BUFFER = "circular_buffer"
    LINKED_LIST = "linked_list"
    ARRAY = "array"
    TREE = "tree"


# ── AVL tree ─────────────────────────────────────────────────────


@dataclass
class AVLNode:
    value: int | float
    height: int = 1
    left: AVLNode | None = None
    right: AVLNode | None = None

    @property
    def balance_factor(self) -> int:
        return node_height(self.left) - node_height(self.right)

    def to_dict(self) -> dict:
        return {
            "value": self.value,
            "height": self.height,
            "balance_factor": self.balance_factor,
            "left": self.left.to_dict() if self.left else None,
            "right": self.right.to_dict() if self.right else None,
        }


def node_height(node: AVLNode | None) -> int:
    return node.height if node else 0


@dataclass
class AVLTree:
    KIND: ClassVar[StructureKind] = StructureKind.AVL_TREE

    root: AVLNode | None = None

    def nodes(self) -> Iterator[AVLNode]:
        """Yield nodes in pre-order."""
        pending = [self.root] if self.root else []
        while pending:
            node = pending.pop()
            yield node
            if node.right:
                pending.append(node.right)
            if node.left:
                pending.append(node.left)

    def to_dict(self) -> dict:
        return {"root": self.root.to_dict() if self.root else None}


# ── General tree ─────────────────────────────────────────────────


@dataclass
class TreeNode:
    value: int | float
    children: list[TreeNode] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {"value": self.value, "children": [c.to_dict() for c in self.children]}


@dataclass
class Tree:
    """Rooted tree with any number of ordered children per node.

    Node values are unique so a value identifies its node.
    """

    KIND: ClassVar[StructureKind] = StructureKind.TREE

    root: TreeNode | None = None

    def nodes(self) -> Iterator[TreeNode]:
        """Yield nodes in pre-order, children left to right."""
        pending = [self.root] if self.root else []
        while pending:
            node = pending.pop()
            yield node
            pending.extend(reversed(node.children))

    def locate(self, value: int | float) -> tuple[TreeNode | None, TreeNode | None]:
        """Return ``(parent, node)`` for *value*; ``(None, None)`` when absent."""
        pending: list[tuple[TreeNode | None, TreeNode]] = [(None, self.root)] if self.root else []
        while pending:
            parent, node = pending.pop()
            if node.value == value:
                return parent, node
            pending.extend((node, c) for c in reversed(node.children))
        return None, None

    def values(self) -> list[int | float]:
        return [n.value for n in self.nodes()]

    def to_dict(self) -> dict:
        return {"root": self.root.to_dict() if self.root else None}


# ── Heap ─────────────────────────────────────────────────────────


class HeapKind(str, Enum):
    MAX = "max"
    MIN = "min"


@dataclass
class Heap:
    """Array-backed binary heap; ``kind`` fixes the comparator direction."""

    KIND: ClassVar[StructureKind] = StructureKind.HEAP

    values: list[int | float] = field(default_factory=list)
    kind: HeapKind = HeapKind.MAX

    def better(self, a: int | float, b: int | float) -> bool:
        return a > b if self.kind == HeapKind.MAX else a < b

    @staticmethod
    def parent(index: int) -> int:
        return (index - 1) // 2

    @staticmethod
    def left(index: int) -> int:
        return 2 * index + 1

    @staticmethod
    def right(index: int) -> int:
        return 2 * index + 2

    def is_valid(self) -> bool:
        return all(
            not self.better(self.values[i], self.values[self.parent(i)])
            for i in range(1, len(self.values))
        )

    def to_dict(self) -> dict:
        return {"kind": self.kind.value, "values": list(self.values)}


# ── Hash table ───────────────────────────────────────────────────


@dataclass
class Bucket:
    key: str
    value: Any


@dataclass
class HashTable:
    """Open-addressing table; the bucket list never changes length."""

    KIND: ClassVar[StructureKind] = StructureKind.HASH_TABLE

    buckets: list[Bucket | None] = field(default_factory=list)

    @property
    def capacity(self) -> int:
        return len(self.buckets)

    def occupied(self) -> list[tuple[int, Bucket]]:
        return [(i, b) for i, b in enumerate(self.buckets) if b is not None]

    def to_dict(self) -> dict:
        return {
            "capacity": self.capacity,
            "buckets": [
                {"key": b.key, "value": b.value} if b else None for b in self.buckets
            ],
        }


# ── Graph ────────────────────────────────────────────────────────


@dataclass
class GraphNode:
    id: str
    x: float = 0.0
    y: float = 0.0


@dataclass
class GraphEdge:
    source: str
    target: str
    weight: float = 1


@dataclass
class Graph:
    """Weighted graph; edges are treated as undirected."""

    KIND: ClassVar[StructureKind] = StructureKind.GRAPH

    nodes: list[GraphNode] = field(default_factory=list)
    edges: list[GraphEdge] = field(default_factory=list)

    def node_ids(self) -> list[str]:
        return [n.id for n in self.nodes]

    def has_node(self, node_id: str) -> bool:
        return any(n.id == node_id for n in self.nodes)

    def adjacency(self) -> dict[str, list[tuple[str, float]]]:
        """Neighbor lists in edge-insertion order, mirrored for both endpoints."""
        adj: dict[str, list[tuple[str, float]]] = {n.id: [] for n in self.nodes}
        for edge in self.edges:
            adj[edge.source].append((edge.target, edge.weight))
            adj[edge.target].append((edge.source, edge.weight))
        return adj

    def edge_weight(self, a: str, b: str) -> float | None:
        for edge in self.edges:
            if {edge.source, edge.target} == {a, b}:
                return edge.weight
        return None

    def to_dict(self) -> dict:
        return {
            "nodes": [{"id": n.id, "x": n.x, "y": n.y} for n in self.nodes],
            "edges": [
                {"source": e.source, "target": e.target, "weight": e.weight}
                for e in self.edges
            ],
        }


# ── Linear structures ────────────────────────────────────────────


@dataclass
class Queue:
    """FIFO queue; ``capacity`` of None means unbounded."""

    KIND: ClassVar[StructureKind] = StructureKind.QUEUE

    items: list[Any] = field(default_factory=list)
    capacity: int | None = None

    def is_full(self) -> bool:
        return self.capacity is not None and len(self.items) >= self.capacity

    def to_dict(self) -> dict:
        return {"items": list(self.items), "capacity": self.capacity}


@dataclass
class Stack:
    """LIFO stack; the top is the last item."""

    KIND: ClassVar[StructureKind] = StructureKind.STACK

    items: list[Any] = field(default_factory=list)
    capacity: int | None = None

    def is_full(self) -> bool:
        return self.capacity is not None and len(self.items) >= self.capacity

    def to_dict(self) -> dict:
        return {"items": list(self.items), "capacity": self.capacity}


@dataclass
class CircularBuffer:
    KIND: ClassVar[StructureKind] = StructureKind.CIRCULAR_BUFFER

    slots: list[Any] = field(default_factory=list)
    front: int = 0
    rear: int = -1
    size: int = 0

    @property
    def capacity(self) -> int:
        return len(self.slots)

    def is_full(self) -> bool:
        return self.size >= self.capacity

    def is_empty(self) -> bool:
        return self.size == 0

    def items(self) -> list[Any]:
        """Stored values in FIFO order, front first."""
        return [self.slots[(self.front + i) % self.capacity] for i in range(self.size)]

    def to_dict(self) -> dict:
        return {
            "slots": list(self.slots),
            "front": self.front,
            "rear": self.rear,
            "size": self.size,
            "capacity": self.capacity,
        }


# ── Linked chains ────────────────────────────────────────────────


class ChainKind(str, Enum):
    SINGLY = "singly"
    DOUBLY = "doubly"
    CIRCULAR = "circular"


@dataclass(eq=False)
class ListNode:
    value: Any
    next: ListNode | None = None
    prev: ListNode | None = field(default=None, repr=False)  # doubly-linked only


@dataclass(eq=False)
class LinkedChain:
    """Singly, doubly or circular chain of ListNodes.

    In a circular chain the last node's ``next`` is the head.
    """

    KIND: ClassVar[StructureKind] = StructureKind.LINKED_LIST

    kind: ChainKind = ChainKind.SINGLY
    head: ListNode | None = None

    def iter_nodes(self) -> Iterator[ListNode]:
        node = self.head
        while node is not None:
            yield node
            node = node.next
            if node is self.head:
                return

    def values(self) -> list[Any]:
        return [node.value for node in self.iter_nodes()]

    def last(self) -> ListNode | None:
        last = None
        for last in self.iter_nodes():
            pass
        return last

    def __len__(self) -> int:
        return sum(1 for _ in self.iter_nodes())

    def to_dict(self) -> dict:
        return {"kind": self.kind.value, "values": self.values()}


# ── Array ────────────────────────────────────────────────────────


@dataclass
class ArrayState:
    KIND: ClassVar[StructureKind] = StructureKind.ARRAY

    values: list[int | float] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {"values": list(self.values)}


Structure = (
    AVLTree
    | Heap
    | HashTable
    | Graph
    | Queue
    | Stack
    | CircularBuffer
    | LinkedChain
    | ArrayState
    | Tree
)
