"""Shared result type and helpers for the traced structure algorithms."""

from __future__ import annotations

import copy
from dataclasses import dataclass
from typing import Any, Iterable, TypeVar

from .. import constants
from ..recorder import TraceRecorder
from ..structure_types import Structure
from ..trace_types import Trace

S = TypeVar("S")


@dataclass(frozen=True)
class OperationResult:
    """Outcome of one algorithm invocation.

    ``structure`` is the new structure value (the untouched input when the
    operation failed), ``trace`` the finalized steps and ``value`` whatever the
    operation returns to the caller (an extracted root, a search hit, a
    traversal order, ...).
    """

    structure: Structure
    trace: Trace
    value: Any = None
    ok: bool = True

    @classmethod
    def completed(
        cls, structure: Structure, recorder: TraceRecorder, value: Any = None
    ) -> OperationResult:
        return cls(structure=structure, trace=recorder.finalize(), value=value)

    @classmethod
    def failed(
        cls,
        original: Structure,
        recorder: TraceRecorder,
        label: str,
        explanation: str,
        *,
        variables: dict[str, Any] | None = None,
        highlight: Iterable = (),
        value: Any = None,
    ) -> OperationResult:
        """Close the trace with an explanatory step and hand back *original*."""
        recorder.emit(
            label,
            explanation,
            snapshot=original,
            variables=variables,
            highlight=highlight,
            tags=(constants.TAG_FAILED,),
        )
        return cls(structure=original, trace=recorder.finalize(), value=value, ok=False)


def working_copy(structure: S) -> S:
    """Return an independent mutable copy the algorithm may rewire freely."""
    return copy.deepcopy(structure)
