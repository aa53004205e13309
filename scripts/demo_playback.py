#!/usr/bin/env python3
"""Demo: run traced operations on the seeded structures and replay them.

Exercises the whole engine:
  1. seeded structures are built through the builders
  2. each operation is validated and run to completion, producing a trace
  3. the trace is replayed on an asyncio timer through the playback controller

Usage:
    poetry run python scripts/demo_playback.py
    poetry run python scripts/demo_playback.py --structure graph --speed 50
    poetry run python scripts/demo_playback.py --dump --verbose
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
import time
from pathlib import Path

# Ensure repo root is importable
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from algotrace import builders, constants
from algotrace.api import dump_trace, play_to_completion, run_operation
from algotrace.run_types import PlaybackConfig
from algotrace.structure_types import ChainKind
from algotrace.trace_stats import count_tags

DEMOS = {
    "heap": lambda: (builders.seed_heap(), [("insert", "95"), ("extract",), ("heap_sort",)]),
    "avl": lambda: (builders.new_avl_tree(), [("insert", "30"), ("insert", "20"), ("insert", "10")]),
    "hash": lambda: (builders.seed_hash_table(), [("insert", "Elppa", "🍏"), ("search", "apple")]),
    "graph": lambda: (
        builders.seed_graph(),
        [
            ("bfs", constants.SEED_GRAPH_START),
            ("dfs", constants.SEED_GRAPH_START),
            ("dijkstra", constants.SEED_GRAPH_START, constants.SEED_GRAPH_END),
        ],
    ),
    "tree": lambda: (builders.seed_tree(), [("insert_child", "4", "9"), ("bfs",), ("find_height",), ("delete_node", "3")]),
    "list": lambda: (builders.seed_linked_list(ChainKind.DOUBLY), [("insert_at", "1", "15"), ("traverse_backward",)]),
}


def _print_header(title: str):
    width = 60
    print(f"\n{'=' * width}")
    print(f"  {title}")
    print(f"{'=' * width}\n")


async def _run_demo(name: str, speed_ms: float, dump: bool):
    structure, operations = DEMOS[name]()
    for operation, *raw_args in operations:
        _print_header(f"{name}: {operation}({', '.join(raw_args)})")
        result = run_operation(structure, operation, *raw_args)
        if dump:
            print(dump_trace(result.trace))
            print()

        t0 = time.perf_counter()
        await play_to_completion(
            result,
            PlaybackConfig(speed_ms=speed_ms),
            on_step=lambda step: print(f"  > {step.explanation}"),
        )
        elapsed = time.perf_counter() - t0

        print(f"\n  Steps    : {len(result.trace)}")
        print(f"  Tags     : {count_tags(result.trace) or '-'}")
        print(f"  Returned : {result.value!r}")
        print(f"  Replay   : {elapsed:.2f}s")
        structure = result.structure


def main():
    parser = argparse.ArgumentParser(description="Step-trace playback demo")
    parser.add_argument(
        "--structure",
        "-s",
        default="heap",
        choices=sorted(DEMOS),
        help="Structure to demo (default: heap)",
    )
    parser.add_argument(
        "--speed",
        type=float,
        default=100,
        help="Milliseconds between steps (default: 100)",
    )
    parser.add_argument("--dump", action="store_true", help="Print each trace before replaying it")
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging",
    )
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    asyncio.run(_run_demo(args.structure, args.speed, args.dump))


if __name__ == "__main__":
    main()
