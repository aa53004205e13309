"""Open-addressing hash table operations with linear probing.

The table's hash is the sum of the key's character codes modulo the table
capacity. Probing never visits more than ``capacity`` slots.
"""

from __future__ import annotations

import logging

from .. import constants
from ..recorder import TraceRecorder
from ..structure_types import Bucket, HashTable
from ._base import OperationResult, working_copy

logger = logging.getLogger(__name__)


def char_sum_hash(key: str, capacity: int) -> int:
    return sum(ord(ch) for ch in key) % capacity


def _to_int32(n: int) -> int:
    n &= constants.INT32_MASK
    return n - (1 << 32) if n & constants.INT32_SIGN_BIT else n


def djb2_hash(key: str, capacity: int) -> int:
    """djb2 with 32-bit shift semantics; the running sum itself is not truncated."""
    h = constants.DJB2_SEED
    for ch in key:
        h = _to_int32(_to_int32(h) << 5) + h + ord(ch)
    return abs(h) % capacity


def _traced_hash(table: HashTable, key: str, recorder: TraceRecorder) -> int:
    running = 0
    for position, ch in enumerate(key):
        running += ord(ch)
        recorder.emit(
            f"sum += ord('{ch}')",
            f"Adding the code of '{ch}' ({ord(ch)}) gives {running}.",
            snapshot=table,
            variables={"key": key, "char": ch, "code": ord(ch), "position": position, "sum": running},
        )
    home = running % table.capacity
    recorder.emit(
        f"index = {running} % {table.capacity}",
        f"hash('{key}') = {running} mod {table.capacity} = {home}.",
        snapshot=table,
        variables={"key": key, "sum": running, "capacity": table.capacity, "index": home},
        highlight={home},
    )
    return home


def _probe(table: HashTable, key: str, home: int, recorder: TraceRecorder) -> tuple[int | None, int]:
    """Walk the cluster starting at *home* looking for *key*.

    Returns ``(index, probes)`` where index is None when an empty slot (or a
    full lap) proves the key absent.
    """
    index = home
    for probes in range(table.capacity):
        bucket = table.buckets[index]
        if bucket is None:
            recorder.emit(
                f"slot {index} empty",
                f"Slot {index} is empty, so '{key}' is not in the table.",
                snapshot=table,
                variables={"key": key, "index": index, "probes": probes},
                highlight={index},
            )
            return None, probes
        if bucket.key == key:
            recorder.emit(
                f"slot {index} matches",
                f"Slot {index} holds '{key}'.",
                snapshot=table,
                variables={"key": key, "index": index, "probes": probes},
                highlight={index},
            )
            return index, probes
        recorder.emit(
            f"slot {index} holds '{bucket.key}'",
            f"Slot {index} holds a different key; probing slot {(index + 1) % table.capacity}.",
            snapshot=table,
            variables={"key": key, "index": index, "probes": probes + 1},
            highlight={index},
        )
        index = (index + 1) % table.capacity
    return None, table.capacity


# ── Public operations ────────────────────────────────────────────


def insert(table: HashTable, key: str, value: str) -> OperationResult:
    """Place *key* at its home slot or the first empty slot after it.

    A key that is already present has its value replaced in place, so keys
    stay unique. The result's ``value`` is the number of collisions.
    """
    recorder = TraceRecorder("hash_table.insert")
    work = working_copy(table)
    home = _traced_hash(work, key, recorder)
    index = home
    for collisions in range(work.capacity):
        bucket = work.buckets[index]
        if bucket is None or bucket.key == key:
            replaced = bucket is not None
            work.buckets[index] = Bucket(key, value)
            recorder.emit(
                f"table[{index}] = ('{key}', {value!r})",
                f"Updated '{key}' in slot {index}."
                if replaced
                else f"Placed '{key}' in slot {index} after {collisions} collision(s).",
                snapshot=work,
                variables={"key": key, "index": index, "home": home, "collisions": collisions},
                highlight={index},
            )
            return OperationResult.completed(work, recorder, value=collisions)
        next_index = (index + 1) % work.capacity
        recorder.emit(
            f"collision at {index}",
            f"Slot {index} is taken by '{bucket.key}'; trying slot {next_index}.",
            snapshot=work,
            variables={"key": key, "index": index, "home": home, "collisions": collisions + 1},
            highlight={index},
        )
        index = next_index

    logger.info("Hash table full; could not insert %r", key)
    return OperationResult.failed(
        table,
        recorder,
        "table full",
        f"Table full: probed all {table.capacity} slots without finding room for '{key}'.",
        variables={"key": key, "home": home, "collisions": table.capacity},
    )


def search(table: HashTable, key: str) -> OperationResult:
    """The result's ``value`` is the stored value, or None when absent."""
    recorder = TraceRecorder("hash_table.search")
    home = _traced_hash(table, key, recorder)
    index, probes = _probe(table, key, home, recorder)
    if index is None:
        recorder.emit(
            "not found",
            f"'{key}' not found after {probes} probe(s).",
            snapshot=table,
            variables={"key": key, "found": False, "probes": probes},
        )
        return OperationResult.completed(table, recorder)
    found = table.buckets[index].value
    recorder.emit(
        "found",
        f"'{key}' found at slot {index} with value {found!r}.",
        snapshot=table,
        variables={"key": key, "found": True, "index": index, "probes": probes},
        highlight={index},
    )
    return OperationResult.completed(table, recorder, value=found)


def delete(table: HashTable, key: str) -> OperationResult:
    """Remove *key*, then re-seat the rest of its cluster.

    Re-seating each following entry from its own home slot keeps every
    remaining key reachable by a probe that stops at the first empty slot.
    """
    recorder = TraceRecorder("hash_table.delete")
    work = working_copy(table)
    home = _traced_hash(work, key, recorder)
    index, probes = _probe(work, key, home, recorder)
    if index is None:
        return OperationResult.failed(
            table,
            recorder,
            "not found",
            f"'{key}' is not in the table; nothing deleted.",
            variables={"key": key, "probes": probes},
        )

    work.buckets[index] = None
    recorder.emit(
        f"table[{index}] = empty",
        f"Removed '{key}' from slot {index}.",
        snapshot=work,
        variables={"key": key, "index": index},
        highlight={index},
    )

    follow = (index + 1) % work.capacity
    for _ in range(work.capacity - 1):
        entry = work.buckets[follow]
        if entry is None:
            break
        work.buckets[follow] = None
        target = char_sum_hash(entry.key, work.capacity)
        while work.buckets[target] is not None:
            target = (target + 1) % work.capacity
        work.buckets[target] = entry
        if target != follow:
            recorder.emit(
                f"move '{entry.key}' {follow} -> {target}",
                f"Re-seated '{entry.key}' closer to its home slot.",
                snapshot=work,
                variables={"key": entry.key, "from": follow, "to": target},
                highlight={follow, target},
            )
        follow = (follow + 1) % work.capacity

    recorder.emit(
        "deleted",
        f"Deleted '{key}'.",
        snapshot=work,
        variables={"key": key, "size": len(work.occupied())},
    )
    return OperationResult.completed(work, recorder)


def compare_hashes(table: HashTable, key: str) -> OperationResult:
    """Trace the char-sum hash next to djb2 for *key*.

    The result's ``value`` is ``(char_sum_index, djb2_index)``.
    """
    recorder = TraceRecorder("hash_table.compare_hashes")
    simple = _traced_hash(table, key, recorder)
    h = constants.DJB2_SEED
    for ch in key:
        h = _to_int32(_to_int32(h) << 5) + h + ord(ch)
        recorder.emit(
            f"h = h * 33 + ord('{ch}')",
            f"djb2 running hash after '{ch}' is {h}.",
            snapshot=table,
            variables={"key": key, "char": ch, "hash": h},
        )
    djb2 = abs(h) % table.capacity
    recorder.emit(
        "compare",
        f"Char-sum hash picks slot {simple}; djb2 picks slot {djb2}.",
        snapshot=table,
        variables={"key": key, "char_sum": simple, "djb2": djb2},
        highlight={simple, djb2},
    )
    return OperationResult.completed(table, recorder, value=(simple, djb2))
