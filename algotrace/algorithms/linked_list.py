"""Singly, doubly and circular linked-list operations with step tracing.

Every operation works on any ``LinkedChain`` and keeps the kind's link
invariants: doubly chains maintain ``prev`` back-references and circular
chains keep the last node pointing at the head. Highlights are node
positions counted from the head.
"""

from __future__ import annotations

from typing import Any

from ..recorder import TraceRecorder
from ..structure_types import ChainKind, LinkedChain, ListNode
from ._base import OperationResult, working_copy


def _walk_to(chain: LinkedChain, position: int, recorder: TraceRecorder, purpose: str) -> ListNode:
    """Follow ``next`` links from the head to *position*, one step per hop."""
    node = chain.head
    for index in range(position):
        recorder.emit(
            f"current = current.next ({index} -> {index + 1})",
            f"Moving past {node.value} {purpose}.",
            snapshot=chain,
            variables={"index": index, "current": node.value},
            highlight={index},
        )
        node = node.next
    return node


def _link_head(chain: LinkedChain, node: ListNode) -> None:
    old_head = chain.head
    if old_head is None:
        chain.head = node
        if chain.kind == ChainKind.CIRCULAR:
            node.next = node
        return
    last = chain.last()
    node.next = old_head
    if chain.kind == ChainKind.DOUBLY:
        old_head.prev = node
    chain.head = node
    if chain.kind == ChainKind.CIRCULAR:
        last.next = node


def _link_after(chain: LinkedChain, previous: ListNode, node: ListNode) -> None:
    node.next = previous.next
    previous.next = node
    if chain.kind == ChainKind.DOUBLY:
        node.prev = previous
        if node.next is not None:
            node.next.prev = node


# ── Insertion ────────────────────────────────────────────────────


def insert_head(chain: LinkedChain, value: Any) -> OperationResult:
    recorder = TraceRecorder("linked_list.insert_head")
    work = working_copy(chain)
    recorder.emit(
        f"new_node = Node({value})",
        f"Creating a node for {value}.",
        snapshot=work,
        variables={"value": value, "length": len(work)},
    )
    _link_head(work, ListNode(value))
    recorder.emit(
        "head = new_node",
        f"{value} is the new head"
        + ("; the last node now points back to it." if work.kind == ChainKind.CIRCULAR else "."),
        snapshot=work,
        variables={"value": value, "length": len(work)},
        highlight={0},
    )
    return OperationResult.completed(work, recorder)


def insert_tail(chain: LinkedChain, value: Any) -> OperationResult:
    recorder = TraceRecorder("linked_list.insert_tail")
    if chain.head is None:
        work = working_copy(chain)
        _link_head(work, ListNode(value))
        recorder.emit(
            "head = new_node",
            f"The list was empty; {value} becomes the only node.",
            snapshot=work,
            variables={"value": value, "length": 1},
            highlight={0},
        )
        return OperationResult.completed(work, recorder)
    return _insert_after_position(chain, len(chain), value, recorder)


def insert_at(chain: LinkedChain, position: int, value: Any) -> OperationResult:
    """Insert so that *value* ends up at *position* (0..length)."""
    recorder = TraceRecorder("linked_list.insert_at")
    length = len(chain)
    if position > length:
        return OperationResult.failed(
            chain,
            recorder,
            "position out of range",
            f"Position {position} is past the end of a list of length {length}.",
            variables={"position": position, "length": length},
        )
    if position == 0:
        work = working_copy(chain)
        _link_head(work, ListNode(value))
        recorder.emit(
            "head = new_node",
            f"Inserted {value} at the head.",
            snapshot=work,
            variables={"value": value, "position": 0, "length": len(work)},
            highlight={0},
        )
        return OperationResult.completed(work, recorder)
    return _insert_after_position(chain, position, value, recorder)


def _insert_after_position(
    chain: LinkedChain, position: int, value: Any, recorder: TraceRecorder
) -> OperationResult:
    work = working_copy(chain)
    previous = _walk_to(work, position - 1, recorder, f"towards position {position}")
    recorder.emit(
        f"previous = node {position - 1}",
        f"{previous.value} will precede the new node.",
        snapshot=work,
        variables={"value": value, "position": position, "previous": previous.value},
        highlight={position - 1},
    )
    _link_after(work, previous, ListNode(value))
    recorder.emit(
        "previous.next = new_node",
        f"Linked {value} in at position {position}.",
        snapshot=work,
        variables={"value": value, "position": position, "length": len(work)},
        highlight={position},
    )
    return OperationResult.completed(work, recorder)


# ── Removal and lookup ───────────────────────────────────────────


def delete(chain: LinkedChain, value: Any) -> OperationResult:
    """Unlink the first node holding *value*."""
    recorder = TraceRecorder("linked_list.delete")
    if chain.head is None:
        return OperationResult.failed(chain, recorder, "list empty", "The list is empty; nothing to delete.")

    work = working_copy(chain)
    previous: ListNode | None = None
    target: ListNode | None = None
    position = 0
    for position, node in enumerate(work.iter_nodes()):
        recorder.emit(
            f"check node {position}",
            f"Does {node.value} equal {value}?",
            snapshot=work,
            variables={"value": value, "index": position, "current": node.value},
            highlight={position},
        )
        if node.value == value:
            target = node
            break
        previous = node

    if target is None:
        return OperationResult.failed(
            chain,
            recorder,
            "not found",
            f"{value} is not in the list; nothing deleted.",
            variables={"value": value},
        )

    successor = target.next
    if previous is None:
        if successor is None or successor is target:
            work.head = None
            case = "only node"
        else:
            last = work.last()
            work.head = successor
            if work.kind == ChainKind.DOUBLY:
                successor.prev = None
            if work.kind == ChainKind.CIRCULAR:
                last.next = successor
            case = "head"
    else:
        previous.next = successor
        if work.kind == ChainKind.DOUBLY and successor is not None:
            successor.prev = previous
        case = "tail" if successor is None or successor is work.head else "middle"

    recorder.emit(
        f"unlink {value}",
        f"Removed {value} ({case}).",
        snapshot=work,
        variables={"value": value, "case": case, "length": len(work)},
        highlight={position - 1} if previous is not None else (),
    )
    return OperationResult.completed(work, recorder)


def search(chain: LinkedChain, value: Any) -> OperationResult:
    """The result's ``value`` is the matching position, or None."""
    recorder = TraceRecorder("linked_list.search")
    for position, node in enumerate(chain.iter_nodes()):
        recorder.emit(
            f"check node {position}",
            f"Does {node.value} equal {value}?",
            snapshot=chain,
            variables={"value": value, "index": position, "current": node.value},
            highlight={position},
        )
        if node.value == value:
            recorder.emit(
                "found",
                f"Found {value} at position {position}.",
                snapshot=chain,
                variables={"value": value, "index": position, "found": True},
                highlight={position},
            )
            return OperationResult.completed(chain, recorder, value=position)
    recorder.emit(
        "not found",
        f"{value} is not in the list.",
        snapshot=chain,
        variables={"value": value, "found": False},
    )
    return OperationResult.completed(chain, recorder)


def traverse(chain: LinkedChain) -> OperationResult:
    """Visit nodes head to tail; a circular chain stops when it reaches the head again."""
    recorder = TraceRecorder("linked_list.traverse")
    seen: list[Any] = []
    for position, node in enumerate(chain.iter_nodes()):
        seen.append(node.value)
        recorder.emit(
            f"visit node {position}",
            f"Visiting {node.value}.",
            snapshot=chain,
            variables={"index": position, "current": node.value, "visited": ", ".join(map(str, seen))},
            highlight={position},
        )
    ending = "back at the head" if chain.kind == ChainKind.CIRCULAR and seen else "reached null"
    recorder.emit(
        "done",
        f"Traversal {ending}: {seen}.",
        snapshot=chain,
        variables={"visited": ", ".join(map(str, seen))},
    )
    return OperationResult.completed(chain, recorder, value=seen)


def traverse_backward(chain: LinkedChain) -> OperationResult:
    """Walk ``prev`` links from the tail; doubly linked chains only."""
    recorder = TraceRecorder("linked_list.traverse_backward")
    if chain.kind != ChainKind.DOUBLY:
        return OperationResult.failed(
            chain,
            recorder,
            "not doubly linked",
            f"A {chain.kind.value} list has no back-references to follow.",
        )
    seen: list[Any] = []
    node = chain.last()
    position = len(chain) - 1
    while node is not None:
        seen.append(node.value)
        recorder.emit(
            f"visit node {position}",
            f"Visiting {node.value} via prev links.",
            snapshot=chain,
            variables={"index": position, "current": node.value, "visited": ", ".join(map(str, seen))},
            highlight={position},
        )
        node = node.prev
        position -= 1
    recorder.emit(
        "done",
        f"Backward traversal reached the head: {seen}.",
        snapshot=chain,
        variables={"visited": ", ".join(map(str, seen))},
    )
    return OperationResult.completed(chain, recorder, value=seen)
