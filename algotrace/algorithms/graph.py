"""Graph traversals and shortest paths with step tracing.

Adjacency comes from ``Graph.adjacency()``, which mirrors every edge into
both endpoints' neighbor lists in edge-insertion order.
"""

from __future__ import annotations

import logging
import math
from collections import deque

from ..recorder import TraceRecorder
from ..structure_types import Graph
from ._base import OperationResult

logger = logging.getLogger(__name__)


def _join(ids) -> str:
    return ", ".join(str(i) for i in ids)


def _unknown_node(graph: Graph, recorder: TraceRecorder, *node_ids: str) -> OperationResult | None:
    missing = [n for n in node_ids if not graph.has_node(n)]
    if not missing:
        return None
    return OperationResult.failed(
        graph,
        recorder,
        "unknown node",
        f"Node {_join(missing)} does not exist in the graph.",
        variables={"missing": _join(missing)},
    )


def bfs(graph: Graph, start: str) -> OperationResult:
    """Breadth-first traversal; the result's ``value`` is the visit order.

    Nodes are marked visited when dequeued. A neighbor is enqueued only if it
    is neither visited nor already waiting in the queue.
    """
    recorder = TraceRecorder("graph.bfs")
    if (failure := _unknown_node(graph, recorder, start)) is not None:
        return failure
    adjacency = graph.adjacency()
    queue: deque[str] = deque([start])
    visited: list[str] = []
    recorder.emit(
        f"queue = [{start}]",
        f"Starting breadth-first search from {start}.",
        snapshot=graph,
        variables={"queue": start, "visited": ""},
        highlight={start},
    )
    while queue:
        current = queue.popleft()
        visited.append(current)
        recorder.emit(
            f"visit {current}",
            f"Dequeued {current} and marked it visited.",
            snapshot=graph,
            variables={"current": current, "queue": _join(queue), "visited": _join(visited)},
            highlight={current},
        )
        for neighbor, _weight in adjacency[current]:
            if neighbor in visited or neighbor in queue:
                continue
            queue.append(neighbor)
            recorder.emit(
                f"enqueue {neighbor}",
                f"{neighbor} is a new neighbor of {current}; adding it to the queue.",
                snapshot=graph,
                variables={"current": current, "queue": _join(queue), "visited": _join(visited)},
                highlight={current, neighbor},
            )
    recorder.emit(
        "done",
        f"BFS order: {_join(visited)}.",
        snapshot=graph,
        variables={"visited": _join(visited)},
        highlight=set(visited),
    )
    logger.debug("BFS from %s visited %d nodes", start, len(visited))
    return OperationResult.completed(graph, recorder, value=visited)


def dfs(graph: Graph, start: str) -> OperationResult:
    """Depth-first traversal with an explicit stack.

    Neighbors are pushed in reverse adjacency order so they are popped in
    their original order.
    """
    recorder = TraceRecorder("graph.dfs")
    if (failure := _unknown_node(graph, recorder, start)) is not None:
        return failure
    adjacency = graph.adjacency()
    stack: list[str] = [start]
    visited: list[str] = []
    recorder.emit(
        f"stack = [{start}]",
        f"Starting depth-first search from {start}.",
        snapshot=graph,
        variables={"stack": start, "visited": ""},
        highlight={start},
    )
    while stack:
        current = stack.pop()
        if current in visited:
            continue
        visited.append(current)
        recorder.emit(
            f"visit {current}",
            f"Popped {current} and marked it visited.",
            snapshot=graph,
            variables={"current": current, "stack": _join(stack), "visited": _join(visited)},
            highlight={current},
        )
        for neighbor, _weight in reversed(adjacency[current]):
            if neighbor in visited or neighbor in stack:
                continue
            stack.append(neighbor)
            recorder.emit(
                f"push {neighbor}",
                f"Pushed unvisited neighbor {neighbor} of {current}.",
                snapshot=graph,
                variables={"current": current, "stack": _join(stack), "visited": _join(visited)},
                highlight={current, neighbor},
            )
    recorder.emit(
        "done",
        f"DFS order: {_join(visited)}.",
        snapshot=graph,
        variables={"visited": _join(visited)},
        highlight=set(visited),
    )
    return OperationResult.completed(graph, recorder, value=visited)


def _format_distances(dist: dict[str, float]) -> str:
    return ", ".join(f"{node}={'∞' if math.isinf(d) else d}" for node, d in dist.items())


def dijkstra(graph: Graph, start: str, end: str) -> OperationResult:
    """Array-based Dijkstra from *start*, stopping once *end* is selected.

    The result's ``value`` is ``(path, distance)``; for an unreachable *end*
    the path is empty and the distance is ``math.inf``.
    """
    recorder = TraceRecorder("graph.dijkstra")
    if (failure := _unknown_node(graph, recorder, start, end)) is not None:
        return failure
    adjacency = graph.adjacency()
    dist: dict[str, float] = {node_id: math.inf for node_id in graph.node_ids()}
    parent: dict[str, str | None] = {node_id: None for node_id in graph.node_ids()}
    visited: set[str] = set()
    dist[start] = 0
    recorder.emit(
        f"dist[{start}] = 0",
        f"All distances start at infinity except {start}.",
        snapshot=graph,
        variables={"distances": _format_distances(dist)},
        highlight={start},
    )

    while len(visited) < len(dist):
        current = None
        for node_id in dist:
            if node_id not in visited and (current is None or dist[node_id] < dist[current]):
                current = node_id
        if current is None or math.isinf(dist[current]):
            recorder.emit(
                "no reachable nodes left",
                "Every remaining node is unreachable.",
                snapshot=graph,
                variables={"distances": _format_distances(dist)},
            )
            break
        visited.add(current)
        recorder.emit(
            f"select {current}",
            f"{current} has the smallest tentative distance ({dist[current]}).",
            snapshot=graph,
            variables={"current": current, "distance": dist[current], "distances": _format_distances(dist)},
            highlight={current},
        )
        if current == end:
            break
        for neighbor, weight in adjacency[current]:
            if neighbor in visited:
                continue
            candidate = dist[current] + weight
            if candidate < dist[neighbor]:
                dist[neighbor] = candidate
                parent[neighbor] = current
                recorder.emit(
                    f"relax {current} -> {neighbor}",
                    f"Shorter path to {neighbor} via {current}: {candidate}.",
                    snapshot=graph,
                    variables={
                        "current": current,
                        "neighbor": neighbor,
                        "weight": weight,
                        "distances": _format_distances(dist),
                    },
                    highlight={current, neighbor},
                )

    if math.isinf(dist[end]):
        recorder.emit(
            "no path",
            f"{end} is unreachable from {start}.",
            snapshot=graph,
            variables={"distance": "∞"},
        )
        return OperationResult.completed(graph, recorder, value=([], math.inf))

    path = [end]
    while path[-1] != start:
        path.append(parent[path[-1]])
    path.reverse()
    for a, b in zip(path, path[1:]):
        recorder.emit(
            f"path edge {a} -> {b}",
            f"The shortest path uses edge {a}-{b}.",
            snapshot=graph,
            variables={"from": a, "to": b, "weight": graph.edge_weight(a, b)},
            highlight={a, b},
        )
    recorder.emit(
        "done",
        f"Shortest path {' -> '.join(path)} with total distance {dist[end]}.",
        snapshot=graph,
        variables={"path": " -> ".join(path), "distance": dist[end]},
        highlight=set(path),
    )
    logger.debug("Dijkstra %s -> %s: %s (%s)", start, end, path, dist[end])
    return OperationResult.completed(graph, recorder, value=(path, dist[end]))
