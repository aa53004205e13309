"""AVL tree operations with step tracing.

Insert and delete descend recursively over a working copy of the tree. Each
recursive call receives an ``attach`` callback that links a (possibly
rotated) subtree back into its parent, so a whole-tree snapshot taken in the
middle of rebalancing always shows the tree as it currently stands.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Iterable

from .. import constants
from ..recorder import TraceRecorder
from ..structure_types import AVLNode, AVLTree, node_height
from ._base import OperationResult, working_copy

logger = logging.getLogger(__name__)

Attach = Callable[[AVLNode | None], None]


def _attach_root(tree: AVLTree) -> Attach:
    def attach(node: AVLNode | None) -> None:
        tree.root = node

    return attach


def _attach_left(parent: AVLNode) -> Attach:
    def attach(node: AVLNode | None) -> None:
        parent.left = node

    return attach


def _attach_right(parent: AVLNode) -> Attach:
    def attach(node: AVLNode | None) -> None:
        parent.right = node

    return attach


def _update_height(node: AVLNode) -> None:
    node.height = 1 + max(node_height(node.left), node_height(node.right))


class _AVLRun:
    """Mutable state of one traced AVL operation."""

    def __init__(self, tree: AVLTree, recorder: TraceRecorder):
        self.tree = tree
        self.recorder = recorder
        self.comparisons = 0
        self.duplicate = False
        self.missing = False

    def snap(
        self,
        label: str,
        explanation: str,
        *,
        variables: dict[str, Any] | None = None,
        highlight: Iterable = (),
        tags: Iterable[str] = (),
    ) -> None:
        self.recorder.emit(
            label,
            explanation,
            snapshot=self.tree,
            variables=variables,
            highlight=highlight,
            tags=tags,
        )

    def compare(self, node: AVLNode, value: int | float) -> None:
        self.comparisons += 1
        if value < node.value:
            direction = "left"
        elif value > node.value:
            direction = "right"
        else:
            direction = "here"
        self.snap(
            f"compare {value} with {node.value}",
            f"Comparing {value} with {node.value}: go {direction}."
            if direction != "here"
            else f"{value} equals {node.value}.",
            variables={"value": value, "current": node.value, "direction": direction},
            highlight={node.value},
        )

    def refresh(self, node: AVLNode) -> None:
        _update_height(node)
        self.snap(
            f"update height of {node.value}",
            f"Height of {node.value} is {node.height}, balance factor {node.balance_factor}.",
            variables={
                "node": node.value,
                "height": node.height,
                "balance_factor": node.balance_factor,
            },
            highlight={node.value},
        )

    # ── rotations ────────────────────────────────────────────────

    def rotate_right(self, y: AVLNode, attach: Attach, case: str) -> AVLNode:
        x = y.left
        y.left = x.right
        x.right = y
        _update_height(y)
        _update_height(x)
        attach(x)
        self.snap(
            f"rotate right at {y.value}",
            f"{case} case: right rotation makes {x.value} the parent of {y.value}.",
            variables={"rotation_case": case, "pivot": y.value, "new_root": x.value},
            highlight={x.value, y.value},
        )
        return x

    def rotate_left(self, x: AVLNode, attach: Attach, case: str) -> AVLNode:
        y = x.right
        x.right = y.left
        y.left = x
        _update_height(x)
        _update_height(y)
        attach(y)
        self.snap(
            f"rotate left at {x.value}",
            f"{case} case: left rotation makes {y.value} the parent of {x.value}.",
            variables={"rotation_case": case, "pivot": x.value, "new_root": y.value},
            highlight={x.value, y.value},
        )
        return y

    def rebalance(self, node: AVLNode, attach: Attach) -> AVLNode:
        balance = node.balance_factor
        if balance > 1:
            case = "LR" if node.left.balance_factor < 0 else "LL"
            if case == "LR":
                node.left = self.rotate_left(node.left, _attach_left(node), case)
            return self.rotate_right(node, attach, case)
        if balance < -1:
            case = "RL" if node.right.balance_factor > 0 else "RR"
            if case == "RL":
                node.right = self.rotate_right(node.right, _attach_right(node), case)
            return self.rotate_left(node, attach, case)
        return node

    # ── insert / delete ──────────────────────────────────────────

    def insert(self, node: AVLNode | None, value: int | float, attach: Attach) -> AVLNode:
        if node is None:
            created = AVLNode(value)
            attach(created)
            self.snap(
                f"create node {value}",
                f"Found an empty spot; placing {value} here.",
                variables={"value": value},
                highlight={value},
            )
            return created

        self.compare(node, value)
        if value < node.value:
            node.left = self.insert(node.left, value, _attach_left(node))
        elif value > node.value:
            node.right = self.insert(node.right, value, _attach_right(node))
        else:
            self.duplicate = True
            return node

        if self.duplicate:
            return node
        self.refresh(node)
        return self.rebalance(node, attach)

    def delete(self, node: AVLNode | None, value: int | float, attach: Attach) -> AVLNode | None:
        if node is None:
            self.missing = True
            return None

        self.compare(node, value)
        if value < node.value:
            node.left = self.delete(node.left, value, _attach_left(node))
        elif value > node.value:
            node.right = self.delete(node.right, value, _attach_right(node))
        elif node.left is None or node.right is None:
            child = node.left if node.left is not None else node.right
            attach(child)
            self.snap(
                f"remove node {value}",
                f"{value} has at most one child; replacing it with "
                + (f"{child.value}." if child else "nothing."),
                variables={"removed": value, "replacement": child.value if child else None},
                highlight={child.value} if child else (),
            )
            return child
        else:
            successor = node.right
            while successor.left is not None:
                successor = successor.left
            self.snap(
                f"find successor of {value}",
                f"{value} has two children; its in-order successor is {successor.value}.",
                variables={"removed": value, "successor": successor.value},
                highlight={value, successor.value},
            )
            node.value = successor.value
            self.snap(
                f"copy {successor.value} into node",
                f"Copied successor {successor.value}; now deleting it from the right subtree.",
                variables={"successor": successor.value},
                highlight={successor.value},
            )
            node.right = self.delete(node.right, successor.value, _attach_right(node))

        if self.missing:
            return node
        self.refresh(node)
        return self.rebalance(node, attach)


# ── Public operations ────────────────────────────────────────────


def insert(tree: AVLTree, value: int | float) -> OperationResult:
    """Insert *value*, rebalancing every ancestor on the way back up.

    Duplicates leave the tree unchanged.
    """
    recorder = TraceRecorder("avl.insert")
    run = _AVLRun(working_copy(tree), recorder)
    run.snap(f"insert({value})", f"Inserting {value} into the AVL tree.", variables={"value": value})
    run.insert(run.tree.root, value, _attach_root(run.tree))
    if run.duplicate:
        return OperationResult.failed(
            tree,
            recorder,
            "duplicate value",
            f"{value} already exists in the tree; nothing inserted.",
            variables={"value": value},
            highlight={value},
        )
    run.snap(
        "done",
        f"Inserted {value}; the tree is balanced.",
        variables={"value": value, "height": node_height(run.tree.root)},
        highlight={value},
        tags=(constants.TAG_POST_REBALANCE,),
    )
    logger.debug("AVL insert %s -> root %s", value, run.tree.root.value)
    return OperationResult.completed(run.tree, recorder)


def delete(tree: AVLTree, value: int | float) -> OperationResult:
    recorder = TraceRecorder("avl.delete")
    run = _AVLRun(working_copy(tree), recorder)
    run.snap(f"delete({value})", f"Deleting {value} from the AVL tree.", variables={"value": value})
    run.delete(run.tree.root, value, _attach_root(run.tree))
    if run.missing:
        return OperationResult.failed(
            tree,
            recorder,
            "not found",
            f"{value} is not in the tree; nothing deleted.",
            variables={"value": value, "comparisons": run.comparisons},
        )
    run.snap(
        "done",
        f"Deleted {value}; the tree is balanced.",
        variables={"value": value, "height": node_height(run.tree.root)},
        tags=(constants.TAG_POST_REBALANCE,),
    )
    return OperationResult.completed(run.tree, recorder)


def search(tree: AVLTree, value: int | float) -> OperationResult:
    """BST descent; ``value`` of the result is True when found."""
    recorder = TraceRecorder("avl.search")
    run = _AVLRun(working_copy(tree), recorder)
    node = run.tree.root
    while node is not None:
        run.compare(node, value)
        if value == node.value:
            break
        node = node.left if value < node.value else node.right

    found = node is not None
    run.snap(
        "found" if found else "not found",
        f"Found {value} after {run.comparisons} comparisons."
        if found
        else f"{value} is not in the tree ({run.comparisons} comparisons).",
        variables={"value": value, "found": found, "comparisons": run.comparisons},
        highlight={value} if found else (),
    )
    return OperationResult.completed(run.tree, recorder, value=found)


def _traverse(tree: AVLTree, order: str) -> OperationResult:
    recorder = TraceRecorder(f"avl.{order}")
    visited: list[int | float] = []

    def visit(node: AVLNode) -> None:
        visited.append(node.value)
        recorder.emit(
            f"visit {node.value}",
            f"{order.capitalize()} traversal visits {node.value}.",
            snapshot=tree,
            variables={"current": node.value, "order": ", ".join(str(v) for v in visited)},
            highlight={node.value},
        )

    def walk(node: AVLNode | None) -> None:
        if node is None:
            return
        if order == "preorder":
            visit(node)
        walk(node.left)
        if order == "inorder":
            visit(node)
        walk(node.right)
        if order == "postorder":
            visit(node)

    walk(tree.root)
    recorder.emit(
        "done",
        f"{order.capitalize()} traversal complete: {visited}.",
        snapshot=tree,
        variables={"order": ", ".join(str(v) for v in visited)},
    )
    return OperationResult.completed(tree, recorder, value=visited)


def inorder(tree: AVLTree) -> OperationResult:
    return _traverse(tree, "inorder")


def preorder(tree: AVLTree) -> OperationResult:
    return _traverse(tree, "preorder")


def postorder(tree: AVLTree) -> OperationResult:
    return _traverse(tree, "postorder")
