"""Pure functions for computing statistics over traces."""

from __future__ import annotations

from collections import Counter

from .trace_types import Trace


def count_labels(trace: Trace) -> dict[str, int]:
    """Return a frequency map of step labels in the given trace.

    Args:
        trace: A finalized trace.

    Returns:
        A dict mapping label strings to their occurrence counts.
        Empty dict for an empty trace.
    """
    return dict(Counter(step.label for step in trace))


def count_tags(trace: Trace) -> dict[str, int]:
    """Return how many steps carry each tag."""
    return dict(Counter(tag for step in trace for tag in step.tags))


def count_snapshots(trace: Trace) -> int:
    return sum(1 for step in trace if step.snapshot is not None)
