"""Queue, stack and circular buffer operations with step tracing."""

from __future__ import annotations

from typing import Any

from .. import constants
from ..recorder import TraceRecorder
from ..structure_types import CircularBuffer, Queue, Stack
from ._base import OperationResult, working_copy

# ── Queue ────────────────────────────────────────────────────────


def queue_enqueue(queue: Queue, value: Any) -> OperationResult:
    recorder = TraceRecorder("queue.enqueue")
    if queue.is_full():
        return OperationResult.failed(
            queue,
            recorder,
            "queue full",
            f"Queue is full ({queue.capacity} items); cannot enqueue {value}.",
            variables={"value": value, "size": len(queue.items)},
        )
    work = working_copy(queue)
    work.items.append(value)
    rear = len(work.items) - 1
    recorder.emit(
        f"enqueue({value})",
        f"Added {value} at the rear (index {rear}).",
        snapshot=work,
        variables={"value": value, "front": 0, "rear": rear, "size": len(work.items)},
        highlight={rear},
    )
    return OperationResult.completed(work, recorder)


def queue_dequeue(queue: Queue) -> OperationResult:
    """The result's ``value`` is the removed front item."""
    recorder = TraceRecorder("queue.dequeue")
    if not queue.items:
        return OperationResult.failed(queue, recorder, "queue empty", "Queue is empty; nothing to dequeue.")
    work = working_copy(queue)
    recorder.emit(
        "front = queue[0]",
        f"The front item is {work.items[0]}.",
        snapshot=work,
        variables={"front": work.items[0], "size": len(work.items)},
        highlight={0},
    )
    value = work.items.pop(0)
    recorder.emit(
        f"dequeue() -> {value}",
        f"Removed {value} from the front; {len(work.items)} item(s) remain.",
        snapshot=work,
        variables={"value": value, "size": len(work.items)},
    )
    return OperationResult.completed(work, recorder, value=value)


def queue_front(queue: Queue) -> OperationResult:
    recorder = TraceRecorder("queue.front")
    if not queue.items:
        return OperationResult.failed(queue, recorder, "queue empty", "Queue is empty; there is no front item.")
    recorder.emit(
        "front()",
        f"The front item is {queue.items[0]}.",
        snapshot=queue,
        variables={"front": queue.items[0], "size": len(queue.items)},
        highlight={0},
    )
    return OperationResult.completed(queue, recorder, value=queue.items[0])


# ── Stack ────────────────────────────────────────────────────────


def stack_push(stack: Stack, value: Any) -> OperationResult:
    recorder = TraceRecorder("stack.push")
    if stack.is_full():
        return OperationResult.failed(
            stack,
            recorder,
            "stack overflow",
            f"Stack is full ({stack.capacity} items); cannot push {value}.",
            variables={"value": value, "size": len(stack.items)},
        )
    work = working_copy(stack)
    work.items.append(value)
    top = len(work.items) - 1
    recorder.emit(
        f"push({value})",
        f"Pushed {value}; it is now the top.",
        snapshot=work,
        variables={"value": value, "top": top, "size": len(work.items)},
        highlight={top},
    )
    return OperationResult.completed(work, recorder)


def stack_pop(stack: Stack) -> OperationResult:
    recorder = TraceRecorder("stack.pop")
    if not stack.items:
        return OperationResult.failed(stack, recorder, "stack underflow", "Stack is empty; nothing to pop.")
    work = working_copy(stack)
    top = len(work.items) - 1
    recorder.emit(
        "top = stack[top]",
        f"The top item is {work.items[top]}.",
        snapshot=work,
        variables={"top": top, "value": work.items[top]},
        highlight={top},
    )
    value = work.items.pop()
    recorder.emit(
        f"pop() -> {value}",
        f"Popped {value}; {len(work.items)} item(s) remain.",
        snapshot=work,
        variables={"value": value, "size": len(work.items)},
    )
    return OperationResult.completed(work, recorder, value=value)


def stack_peek(stack: Stack) -> OperationResult:
    recorder = TraceRecorder("stack.peek")
    if not stack.items:
        return OperationResult.failed(stack, recorder, "stack empty", "Stack is empty; nothing to peek.")
    top = len(stack.items) - 1
    recorder.emit(
        "peek()",
        f"The top item is {stack.items[top]}.",
        snapshot=stack,
        variables={"top": top, "value": stack.items[top]},
        highlight={top},
    )
    return OperationResult.completed(stack, recorder, value=stack.items[top])


def check_balanced(stack: Stack, expression: str) -> OperationResult:
    """Bracket matching over ``()[]{}`` using a scratch stack.

    The input stack is returned unchanged; ``value`` is True when balanced.
    """
    recorder = TraceRecorder("stack.check_balanced")
    scratch = Stack()
    openers = set(constants.BRACKET_PAIRS.values())

    def fail(position: int, explanation: str) -> OperationResult:
        recorder.emit(
            "unbalanced",
            explanation,
            snapshot=scratch,
            variables={"expression": expression, "position": position, "balanced": False},
        )
        return OperationResult.completed(stack, recorder, value=False)

    for position, ch in enumerate(expression):
        if ch in openers:
            scratch.items.append(ch)
            recorder.emit(
                f"push '{ch}'",
                f"Opening bracket '{ch}' at position {position}.",
                snapshot=scratch,
                variables={"expression": expression, "position": position, "char": ch},
                highlight={len(scratch.items) - 1},
            )
        elif ch in constants.BRACKET_PAIRS:
            expected = constants.BRACKET_PAIRS[ch]
            if not scratch.items:
                return fail(position, f"Closing '{ch}' at position {position} has no opener.")
            if scratch.items[-1] != expected:
                return fail(
                    position,
                    f"Closing '{ch}' at position {position} does not match '{scratch.items[-1]}'.",
                )
            scratch.items.pop()
            recorder.emit(
                f"pop '{expected}'",
                f"'{ch}' closes '{expected}'.",
                snapshot=scratch,
                variables={"expression": expression, "position": position, "char": ch},
            )

    if scratch.items:
        return fail(len(expression), f"{len(scratch.items)} bracket(s) left unclosed.")
    recorder.emit(
        "balanced",
        "Every bracket is matched.",
        snapshot=scratch,
        variables={"expression": expression, "balanced": True},
    )
    return OperationResult.completed(stack, recorder, value=True)


# ── Circular buffer ──────────────────────────────────────────────


def _cursors(buffer: CircularBuffer) -> dict[str, Any]:
    return {"front": buffer.front, "rear": buffer.rear, "size": buffer.size}


def buffer_enqueue(buffer: CircularBuffer, value: Any) -> OperationResult:
    recorder = TraceRecorder("circular_buffer.enqueue")
    if buffer.is_full():
        return OperationResult.failed(
            buffer,
            recorder,
            "buffer full",
            f"Circular queue is full ({buffer.capacity} slots); cannot enqueue {value}.",
            variables=_cursors(buffer),
        )
    work = working_copy(buffer)
    work.rear = (work.rear + 1) % work.capacity
    recorder.emit(
        f"rear = (rear + 1) % {work.capacity}",
        f"Rear advances to slot {work.rear}.",
        snapshot=work,
        variables={"value": value, **_cursors(work)},
        highlight={work.rear},
    )
    work.slots[work.rear] = value
    work.size += 1
    recorder.emit(
        f"queue[{work.rear}] = {value}",
        f"Stored {value} in slot {work.rear}.",
        snapshot=work,
        variables={"value": value, **_cursors(work)},
        highlight={work.rear},
    )
    return OperationResult.completed(work, recorder)


def buffer_dequeue(buffer: CircularBuffer) -> OperationResult:
    recorder = TraceRecorder("circular_buffer.dequeue")
    if buffer.is_empty():
        return OperationResult.failed(
            buffer, recorder, "buffer empty", "Circular queue is empty; nothing to dequeue.", variables=_cursors(buffer)
        )
    work = working_copy(buffer)
    slot = work.front
    value = work.slots[slot]
    work.slots[slot] = None
    work.front = (work.front + 1) % work.capacity
    work.size -= 1
    recorder.emit(
        f"dequeue() -> {value}",
        f"Removed {value} from slot {slot}; front advances to {work.front}.",
        snapshot=work,
        variables={"value": value, **_cursors(work)},
        highlight={slot},
    )
    return OperationResult.completed(work, recorder, value=value)


def buffer_peek(buffer: CircularBuffer) -> OperationResult:
    recorder = TraceRecorder("circular_buffer.peek")
    if buffer.is_empty():
        return OperationResult.failed(
            buffer, recorder, "buffer empty", "Circular queue is empty; nothing to peek.", variables=_cursors(buffer)
        )
    value = buffer.slots[buffer.front]
    recorder.emit(
        "peek()",
        f"The front item is {value} in slot {buffer.front}.",
        snapshot=buffer,
        variables={"value": value, **_cursors(buffer)},
        highlight={buffer.front},
    )
    return OperationResult.completed(buffer, recorder, value=value)


def buffer_status(buffer: CircularBuffer) -> OperationResult:
    """Report fullness; ``value`` is ``(is_empty, is_full)``."""
    recorder = TraceRecorder("circular_buffer.status")
    recorder.emit(
        "status()",
        f"{buffer.size} of {buffer.capacity} slots used"
        + ("; the queue is full." if buffer.is_full() else "; the queue is empty." if buffer.is_empty() else "."),
        snapshot=buffer,
        variables={"is_empty": buffer.is_empty(), "is_full": buffer.is_full(), **_cursors(buffer)},
    )
    return OperationResult.completed(buffer, recorder, value=(buffer.is_empty(), buffer.is_full()))
