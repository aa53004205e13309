"""Tests for trace statistics."""

from algotrace.recorder import TraceRecorder
from algotrace.structure_types import Heap
from algotrace.trace_stats import count_labels, count_snapshots, count_tags


def _make_trace():
    recorder = TraceRecorder()
    recorder.emit("compare", "a", snapshot=Heap())
    recorder.emit("compare", "b", tags=["x"])
    recorder.emit("swap", "c", snapshot=Heap(), tags=["x", "y"])
    return recorder.finalize()


class TestTraceStats:
    def test_empty_trace(self):
        trace = TraceRecorder().finalize()
        assert count_labels(trace) == {}
        assert count_tags(trace) == {}
        assert count_snapshots(trace) == 0

    def test_label_counts(self):
        assert count_labels(_make_trace()) == {"compare": 2, "swap": 1}

    def test_tag_counts(self):
        assert count_tags(_make_trace()) == {"x": 2, "y": 1}

    def test_snapshot_count(self):
        assert count_snapshots(_make_trace()) == 2
