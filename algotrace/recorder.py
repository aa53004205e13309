"""Append-only step recorder used by every structure algorithm."""

from __future__ import annotations

import copy
import dataclasses
import logging
from types import MappingProxyType
from typing import Any, Iterable

from .structure_types import Structure
from .trace_types import Step, Trace

logger = logging.getLogger(__name__)


class TraceFinalizedError(RuntimeError):
    """Raised when a step is recorded after the trace was finalized."""


class TraceRecorder:
    """Accumulates Steps for one algorithm invocation.

    The recorder holds no structure state of its own: callers hand it a
    snapshot per step and ``emit`` deep-copies it on the spot, so later
    mutation of the working structure never reaches a recorded step.
    """

    def __init__(self, operation: str = ""):
        self.operation = operation
        self._steps: list[Step] = []
        self._finalized = False

    def __len__(self) -> int:
        return len(self._steps)

    @property
    def finalized(self) -> bool:
        return self._finalized

    def record(self, step: Step) -> Step:
        """Append *step*, renumbering its sequence to the current length.

        The recorded step gets a read-only copy of its variables.
        """
        if self._finalized:
            raise TraceFinalizedError(
                f"Trace for '{self.operation}' is finalized; cannot record more steps"
            )
        numbered = dataclasses.replace(
            step,
            sequence=len(self._steps),
            variables=MappingProxyType(dict(step.variables)),
        )
        self._steps.append(numbered)
        return numbered

    def emit(
        self,
        label: str,
        explanation: str,
        *,
        snapshot: Structure | None = None,
        variables: dict[str, Any] | None = None,
        highlight: Iterable = (),
        tags: Iterable[str] = (),
    ) -> Step:
        """Build and record a Step, copying *snapshot* by value."""
        return self.record(
            Step(
                sequence=len(self._steps),
                label=label,
                explanation=explanation,
                snapshot=copy.deepcopy(snapshot),
                variables=dict(variables or {}),
                highlight=frozenset(highlight),
                tags=frozenset(tags),
            )
        )

    def finalize(self) -> Trace:
        if not self._finalized:
            self._finalized = True
            logger.info(
                "Finalized trace for %s: %d steps", self.operation or "<anonymous>", len(self._steps)
            )
        return Trace(steps=tuple(self._steps))
