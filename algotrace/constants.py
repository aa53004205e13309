"""Named constants: eliminates magic strings and numbers across the engine."""

from __future__ import annotations

DEFAULT_SPEED_MS = 1000
FIRST_TICK_DELAY_MS = 0

HASH_TABLE_CAPACITY = 7
CIRCULAR_BUFFER_CAPACITY = 8

DJB2_SEED = 5381
INT32_MASK = 0xFFFFFFFF
INT32_SIGN_BIT = 0x80000000

# Step tags
TAG_POST_REBALANCE = "post-rebalance"
TAG_HEAP_SETTLED = "heap-settled"
TAG_FAILED = "failed"

BRACKET_PAIRS: dict[str, str] = {")": "(", "]": "[", "}": "{"}

# Seed values for freshly opened visualizers
SEED_HEAP: tuple[int, ...] = (90, 85, 75, 70, 60, 65, 55)
SEED_HASH_ENTRIES: tuple[tuple[str, str], ...] = (
    ("apple", "🍎"),
    ("banana", "🍌"),
    ("cherry", "🍒"),
)
SEED_GRAPH_NODES: tuple[tuple[str, float, float], ...] = (
    ("A", 100.0, 100.0),
    ("B", 250.0, 50.0),
    ("C", 400.0, 100.0),
    ("D", 350.0, 250.0),
    ("E", 150.0, 250.0),
)
SEED_GRAPH_EDGES: tuple[tuple[str, str, float], ...] = (
    ("A", "B", 4),
    ("A", "E", 2),
    ("B", "C", 3),
    ("C", "D", 1),
    ("D", "E", 5),
    ("E", "B", 7),
)
SEED_QUEUE: tuple[int, ...] = (10, 20, 30, 40)
SEED_SINGLY_LIST: tuple[int, ...] = (10, 20, 30, 40)
SEED_DOUBLY_LIST: tuple[int, ...] = (10, 20, 30)
SEED_GRAPH_START = "A"
SEED_GRAPH_END = "D"
SEED_TREE_ROOT = 1
SEED_TREE_EDGES: tuple[tuple[int, int], ...] = (
    (1, 2),
    (1, 3),
    (2, 4),
    (2, 5),
    (3, 6),
    (3, 7),
    (3, 8),
)
