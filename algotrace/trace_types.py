"""Trace data types for step-by-step algorithm replay."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator, Mapping

from .structure_types import Structure, StructureKind


@dataclass(frozen=True)
class Step:
    """A single recorded moment of an algorithm run.

    ``variables`` and ``highlight`` replace the previous step's bindings and
    highlight set wholesale; they are never merged. ``snapshot`` is a deep
    copy of the working structure taken when the step was recorded.
    """

    sequence: int
    label: str
    explanation: str
    snapshot: Structure | None = None
    variables: Mapping[str, Any] = field(default_factory=dict)
    highlight: frozenset = frozenset()
    tags: frozenset[str] = frozenset()

    @property
    def kind(self) -> StructureKind | None:
        return self.snapshot.KIND if self.snapshot is not None else None

    def has_tag(self, tag: str) -> bool:
        return tag in self.tags

    def to_dict(self) -> dict:
        return {
            "sequence": self.sequence,
            "label": self.label,
            "explanation": self.explanation,
            "kind": self.kind.value if self.kind else None,
            "snapshot": self.snapshot.to_dict() if self.snapshot is not None else None,
            "variables": dict(self.variables),
            "highlight": sorted(self.highlight, key=str),
            "tags": sorted(self.tags),
        }


@dataclass(frozen=True)
class Trace:
    """Finalized, ordered steps of exactly one algorithm invocation.

    Sequences are contiguous from 0.
    """

    steps: tuple[Step, ...] = ()

    def __len__(self) -> int:
        return len(self.steps)

    def __getitem__(self, index: int) -> Step:
        return self.steps[index]

    def __iter__(self) -> Iterator[Step]:
        return iter(self.steps)

    @property
    def last(self) -> Step | None:
        return self.steps[-1] if self.steps else None

    def tagged(self, tag: str) -> list[Step]:
        return [s for s in self.steps if tag in s.tags]

    def snapshots(self) -> list[Structure]:
        return [s.snapshot for s in self.steps if s.snapshot is not None]
