"""General (n-ary) tree operations with step tracing.

Node values are unique, so operations address nodes by value. Deleting a
node with children promotes its first child into the freed slot; the other
children are re-parented under the promoted child, after its own children.
"""

from __future__ import annotations

import logging
from collections import deque

from ..recorder import TraceRecorder
from ..structure_types import Tree, TreeNode
from ._base import OperationResult, working_copy

logger = logging.getLogger(__name__)


def _join(values) -> str:
    return ", ".join(str(v) for v in values)


def _height(node: TreeNode | None) -> int:
    if node is None:
        return 0
    return 1 + max((_height(c) for c in node.children), default=0)


def insert_child(tree: Tree, parent: int | float, value: int | float) -> OperationResult:
    """Append *value* as the last child of *parent*.

    On an empty tree *value* becomes the root and *parent* is ignored.
    """
    recorder = TraceRecorder("tree.insert_child")
    work = working_copy(tree)
    recorder.emit(
        f"insert_child({parent}, {value})",
        f"Inserting {value} as a child of {parent}.",
        snapshot=work,
        variables={"parent": parent, "value": value},
    )
    if work.root is None:
        work.root = TreeNode(value)
        recorder.emit(
            f"root = Node({value})",
            f"The tree is empty; {value} becomes the root.",
            snapshot=work,
            variables={"value": value, "height": 1},
            highlight={value},
        )
        return OperationResult.completed(work, recorder)

    if work.locate(value)[1] is not None:
        return OperationResult.failed(
            tree,
            recorder,
            "duplicate value",
            f"{value} already exists in the tree; nothing inserted.",
            variables={"value": value},
            highlight={value},
        )
    _, parent_node = work.locate(parent)
    if parent_node is None:
        return OperationResult.failed(
            tree,
            recorder,
            "parent not found",
            f"Parent node {parent} is not in the tree; nothing inserted.",
            variables={"parent": parent, "value": value},
        )
    recorder.emit(
        f"parent = find_node({parent})",
        f"Found parent node {parent} with {len(parent_node.children)} children.",
        snapshot=work,
        variables={"parent": parent, "children_count": len(parent_node.children)},
        highlight={parent},
    )
    parent_node.children.append(TreeNode(value))
    recorder.emit(
        f"parent.children.append({value})",
        f"Added {value} as child {len(parent_node.children)} of {parent}.",
        snapshot=work,
        variables={
            "parent": parent,
            "children_count": len(parent_node.children),
            "height": _height(work.root),
        },
        highlight={parent, value},
    )
    return OperationResult.completed(work, recorder)


def delete_node(tree: Tree, value: int | float) -> OperationResult:
    recorder = TraceRecorder("tree.delete_node")
    work = working_copy(tree)
    recorder.emit(
        f"delete_node({value})",
        f"Deleting node {value}.",
        snapshot=work,
        variables={"value": value},
    )
    parent, node = work.locate(value)
    if node is None:
        return OperationResult.failed(
            tree,
            recorder,
            "not found",
            f"{value} is not in the tree; nothing deleted.",
            variables={"value": value},
        )
    recorder.emit(
        f"node = find_node({value})",
        f"Found {value}; it has {len(node.children)} children.",
        snapshot=work,
        variables={"value": value, "children_count": len(node.children)},
        highlight={value},
    )

    replacement: TreeNode | None = None
    if node.children:
        replacement, *siblings = node.children
        replacement.children.extend(siblings)
        recorder.emit(
            f"promote {replacement.value}",
            f"Promoting first child {replacement.value} into the place of {value}"
            + (f"; {_join(s.value for s in siblings)} move under it." if siblings else "."),
            snapshot=work,
            variables={"promoted": replacement.value, "moved": _join(s.value for s in siblings)},
            highlight={value, replacement.value},
        )

    if parent is None:
        work.root = replacement
    else:
        index = next(i for i, c in enumerate(parent.children) if c is node)
        if replacement is None:
            del parent.children[index]
        else:
            parent.children[index] = replacement
    recorder.emit(
        f"remove {value}",
        f"Removed {value} from the tree.",
        snapshot=work,
        variables={
            "deleted": value,
            "remaining_nodes": len(work.values()),
            "height": _height(work.root),
        },
        highlight={replacement.value} if replacement else (),
    )
    return OperationResult.completed(work, recorder)


def search(tree: Tree, value: int | float) -> OperationResult:
    """Pre-order search; ``value`` of the result is True when found."""
    recorder = TraceRecorder("tree.search")
    comparisons = 0
    found = False
    for node in tree.nodes():
        comparisons += 1
        recorder.emit(
            f"compare {node.value}",
            f"{node.value} == {value}? {'yes' if node.value == value else 'no'}.",
            snapshot=tree,
            variables={"value": value, "current": node.value, "comparisons": comparisons},
            highlight={node.value},
        )
        if node.value == value:
            found = True
            break
    recorder.emit(
        "found" if found else "not found",
        f"Found {value} after {comparisons} comparisons."
        if found
        else f"{value} is not in the tree ({comparisons} comparisons).",
        snapshot=tree,
        variables={"value": value, "found": found, "comparisons": comparisons},
        highlight={value} if found else (),
    )
    return OperationResult.completed(tree, recorder, value=found)


def dfs(tree: Tree) -> OperationResult:
    """Pre-order depth-first traversal; ``value`` is the visit order."""
    recorder = TraceRecorder("tree.dfs")
    visited: list[int | float] = []

    def walk(node: TreeNode, level: int) -> None:
        visited.append(node.value)
        recorder.emit(
            f"visit {node.value}",
            f"Visit node {node.value} at level {level}.",
            snapshot=tree,
            variables={"current": node.value, "level": level, "visited": _join(visited)},
            highlight={node.value},
        )
        if node.children:
            recorder.emit(
                f"for child in {node.value}.children",
                f"Exploring {len(node.children)} children of {node.value}.",
                snapshot=tree,
                variables={"parent": node.value, "children": _join(c.value for c in node.children)},
                highlight={c.value for c in node.children},
            )
            for child in node.children:
                walk(child, level + 1)
        recorder.emit(
            f"backtrack from {node.value}",
            f"Finished the subtree rooted at {node.value}.",
            snapshot=tree,
            variables={"backtrack_from": node.value, "visited": _join(visited)},
        )

    if tree.root is not None:
        walk(tree.root, 0)
    recorder.emit(
        "done",
        f"DFS visited {len(visited)} nodes: {_join(visited)}.",
        snapshot=tree,
        variables={"visited": _join(visited)},
        highlight=set(visited),
    )
    return OperationResult.completed(tree, recorder, value=visited)


def bfs(tree: Tree) -> OperationResult:
    """Level-order traversal; ``value`` is the visit order."""
    recorder = TraceRecorder("tree.bfs")
    queue: deque[TreeNode] = deque([tree.root] if tree.root else [])
    visited: list[int | float] = []
    recorder.emit(
        f"queue = [{tree.root.value if tree.root else ''}]",
        "Starting level-order traversal from the root.",
        snapshot=tree,
        variables={"queue": _join(n.value for n in queue)},
    )
    level = 0
    while queue:
        level_size = len(queue)
        recorder.emit(
            f"level {level}",
            f"Processing level {level} with {level_size} nodes.",
            snapshot=tree,
            variables={"level": level, "queue": _join(n.value for n in queue)},
            highlight={n.value for n in queue},
        )
        for _ in range(level_size):
            node = queue.popleft()
            visited.append(node.value)
            recorder.emit(
                f"visit {node.value}",
                f"Dequeued {node.value} at level {level}.",
                snapshot=tree,
                variables={"current": node.value, "level": level, "visited": _join(visited)},
                highlight={node.value},
            )
            if node.children:
                queue.extend(node.children)
                recorder.emit(
                    f"enqueue children of {node.value}",
                    f"Adding {_join(c.value for c in node.children)} to the queue.",
                    snapshot=tree,
                    variables={"parent": node.value, "queue": _join(n.value for n in queue)},
                    highlight={c.value for c in node.children},
                )
        level += 1
    recorder.emit(
        "done",
        f"BFS visited {len(visited)} nodes over {level} levels: {_join(visited)}.",
        snapshot=tree,
        variables={"visited": _join(visited), "levels": level},
        highlight=set(visited),
    )
    logger.debug("Tree BFS visited %d nodes over %d levels", len(visited), level)
    return OperationResult.completed(tree, recorder, value=visited)


def find_height(tree: Tree) -> OperationResult:
    """Height in nodes: 0 for an empty tree, 1 for a lone root."""
    recorder = TraceRecorder("tree.find_height")

    def measure(node: TreeNode) -> int:
        if not node.children:
            recorder.emit(
                f"height({node.value}) = 1",
                f"{node.value} is a leaf, so its height is 1.",
                snapshot=tree,
                variables={"node": node.value, "height": 1},
                highlight={node.value},
            )
            return 1
        child_height = max(measure(c) for c in node.children)
        height = 1 + child_height
        recorder.emit(
            f"height({node.value}) = 1 + {child_height}",
            f"Tallest child subtree of {node.value} has height {child_height}, so {node.value} has height {height}.",
            snapshot=tree,
            variables={"node": node.value, "child_height": child_height, "height": height},
            highlight={node.value},
        )
        return height

    height = measure(tree.root) if tree.root is not None else 0
    recorder.emit(
        "done",
        f"Tree height is {height}.",
        snapshot=tree,
        variables={"height": height},
    )
    return OperationResult.completed(tree, recorder, value=height)
