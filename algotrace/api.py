"""Composable API functions for running and replaying traced operations.

Each function is usable on its own: ``run_operation`` validates raw input
and runs one algorithm, ``dump_trace`` renders a finished trace as text and
``play_to_completion`` drives a trace through a timed controller on the
running asyncio loop.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable

from .algorithms import OperationResult, get_operation
from .playback import AsyncioScheduler, PlaybackController
from .run_types import PlaybackConfig
from .structure_types import Structure
from .trace_stats import count_labels
from .trace_types import Step, Trace
from .validation import InputValidationError

logger = logging.getLogger(__name__)


def run_operation(structure: Structure, operation: str, *raw_args: Any) -> OperationResult:
    """Validate raw arguments and run *operation* on *structure*.

    Args:
        structure: The current structure value; never mutated.
        operation: Operation name registered for the structure's kind.
        *raw_args: Unvalidated positional arguments (typed-in strings or numbers).

    Returns:
        The OperationResult holding the new structure and its finalized trace.

    Raises:
        ValueError: If the operation is not registered for this structure kind.
        InputValidationError: If the arguments are missing or malformed; no
            trace is produced in that case.
    """
    entry = get_operation(structure.KIND, operation)
    if len(raw_args) != entry.arity:
        raise InputValidationError(
            f"{operation} expects {entry.arity} argument(s), got {len(raw_args)}"
        )
    args = [parse(raw) for parse, raw in zip(entry.parsers, raw_args)]
    logger.info("Running %s.%s%s", structure.KIND.value, operation, tuple(args))
    result = entry.func(structure, *args)
    logger.info(
        "%s.%s finished: %d steps, ok=%s",
        structure.KIND.value,
        operation,
        len(result.trace),
        result.ok,
    )
    return result


def dump_trace(trace: Trace, show_variables: bool = True) -> str:
    """Render *trace* as text, one step per line.

    Args:
        trace: A finalized trace.
        show_variables: Append each step's variable bindings when True.

    Returns:
        A multi-line string ending with a per-label summary.
    """
    lines = []
    for step in trace:
        line = f"  {step.sequence:>3}  {step.label}: {step.explanation}"
        if show_variables and step.variables:
            bindings = ", ".join(f"{k}={v}" for k, v in step.variables.items())
            line += f"  [{bindings}]"
        if step.tags:
            line += f"  <{', '.join(sorted(step.tags))}>"
        lines.append(line)
    counts = count_labels(trace)
    lines.append(f"  {len(trace)} steps, {len(counts)} distinct labels")
    return "\n".join(lines)


async def play_to_completion(
    source: Trace | OperationResult,
    config: PlaybackConfig = PlaybackConfig(),
    on_step: Callable[[Step], None] | None = None,
) -> PlaybackController:
    """Auto-advance *source* on the running loop until its last step is applied.

    Args:
        source: A trace, or an OperationResult carrying one.
        config: Playback speed settings.
        on_step: Optional callback receiving every applied step.

    Returns:
        The controller, left PAUSED at the end of the trace.
    """
    controller = PlaybackController(AsyncioScheduler(), config)
    finished = asyncio.Event()

    def listener(step: Step, ctrl: PlaybackController) -> None:
        if on_step is not None:
            on_step(step)
        if ctrl.is_complete:
            finished.set()

    controller.subscribe(listener)
    controller.start(source)
    if not controller.is_complete:
        await finished.wait()
    return controller
