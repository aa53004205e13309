"""Step-trace execution engine for data-structure visualizers."""

from .api import (  # noqa: F401
    run_operation,
    dump_trace,
    play_to_completion,
)
from .algorithms import OperationResult, get_operation, SUPPORTED_OPERATIONS  # noqa: F401
from .playback import PlaybackController, PlaybackState, AsyncioScheduler  # noqa: F401
from .recorder import TraceRecorder, TraceFinalizedError  # noqa: F401
from .trace_types import Step, Trace  # noqa: F401
from .validation import InputValidationError  # noqa: F401
