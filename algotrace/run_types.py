"""Engine configuration types (pure data, no business logic)."""

from __future__ import annotations

from dataclasses import dataclass

from . import constants
from .structure_types import HeapKind


@dataclass(frozen=True)
class EngineConfig:
    """Groups construction-time settings for freshly seeded structures."""

    hash_capacity: int = constants.HASH_TABLE_CAPACITY
    circular_capacity: int = constants.CIRCULAR_BUFFER_CAPACITY
    heap_kind: HeapKind = HeapKind.MAX


@dataclass(frozen=True)
class PlaybackConfig:
    """Groups playback controller settings."""

    speed_ms: float = constants.DEFAULT_SPEED_MS
    first_tick_delay_ms: float = constants.FIRST_TICK_DELAY_MS
