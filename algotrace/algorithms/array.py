"""Array searches, insertion sort and element insertion with step tracing."""

from __future__ import annotations

from ..recorder import TraceRecorder
from ..structure_types import ArrayState
from ._base import OperationResult, working_copy


def linear_search(array: ArrayState, target: int | float) -> OperationResult:
    """The result's ``value`` is the first matching index, or None."""
    recorder = TraceRecorder("array.linear_search")
    for index, item in enumerate(array.values):
        recorder.emit(
            f"arr[{index}] == {target}?",
            f"Comparing {item} with {target}.",
            snapshot=array,
            variables={"index": index, "current": item, "target": target},
            highlight={index},
        )
        if item == target:
            recorder.emit(
                "found",
                f"Found {target} at index {index}.",
                snapshot=array,
                variables={"index": index, "target": target, "found": True},
                highlight={index},
            )
            return OperationResult.completed(array, recorder, value=index)
    recorder.emit(
        "not found",
        f"{target} is not in the array.",
        snapshot=array,
        variables={"target": target, "found": False},
    )
    return OperationResult.completed(array, recorder)


def binary_search(array: ArrayState, target: int | float) -> OperationResult:
    recorder = TraceRecorder("array.binary_search")
    values = array.values
    if any(a > b for a, b in zip(values, values[1:])):
        return OperationResult.failed(
            array,
            recorder,
            "array not sorted",
            "Binary search needs a sorted array; sort it first.",
            variables={"target": target},
        )
    low, high = 0, len(values) - 1
    while low <= high:
        mid = (low + high) // 2
        recorder.emit(
            f"mid = ({low} + {high}) // 2 = {mid}",
            f"Checking the middle element {values[mid]}.",
            snapshot=array,
            variables={"low": low, "high": high, "mid": mid, "target": target},
            highlight={mid},
        )
        if values[mid] == target:
            recorder.emit(
                "found",
                f"Found {target} at index {mid}.",
                snapshot=array,
                variables={"index": mid, "target": target, "found": True},
                highlight={mid},
            )
            return OperationResult.completed(array, recorder, value=mid)
        if values[mid] < target:
            low = mid + 1
        else:
            high = mid - 1
    recorder.emit(
        "not found",
        f"{target} is not in the array.",
        snapshot=array,
        variables={"low": low, "high": high, "target": target, "found": False},
    )
    return OperationResult.completed(array, recorder)


def insertion_sort(array: ArrayState) -> OperationResult:
    recorder = TraceRecorder("array.insertion_sort")
    work = working_copy(array)
    values = work.values
    for i in range(1, len(values)):
        key = values[i]
        j = i - 1
        recorder.emit(
            f"key = arr[{i}]",
            f"Inserting {key} into the sorted prefix.",
            snapshot=work,
            variables={"i": i, "key": key},
            highlight={i},
        )
        while j >= 0 and values[j] > key:
            values[j + 1] = values[j]
            recorder.emit(
                f"arr[{j + 1}] = arr[{j}]",
                f"{values[j]} is larger than {key}; shifting it right.",
                snapshot=work,
                variables={"i": i, "j": j, "key": key},
                highlight={j, j + 1},
            )
            j -= 1
        values[j + 1] = key
        recorder.emit(
            f"arr[{j + 1}] = {key}",
            f"Placed {key} at index {j + 1}.",
            snapshot=work,
            variables={"i": i, "key": key},
            highlight={j + 1},
        )
    recorder.emit("done", f"Sorted: {values}.", snapshot=work)
    return OperationResult.completed(work, recorder)


def append(array: ArrayState, value: int | float) -> OperationResult:
    recorder = TraceRecorder("array.append")
    work = working_copy(array)
    work.values.append(value)
    recorder.emit(
        f"arr.append({value})",
        f"Appended {value} at index {len(work.values) - 1}.",
        snapshot=work,
        variables={"value": value, "length": len(work.values)},
        highlight={len(work.values) - 1},
    )
    return OperationResult.completed(work, recorder)


def insert_at(array: ArrayState, position: int, value: int | float) -> OperationResult:
    recorder = TraceRecorder("array.insert_at")
    if position > len(array.values):
        return OperationResult.failed(
            array,
            recorder,
            "index out of range",
            f"Index {position} is past the end of an array of length {len(array.values)}.",
            variables={"position": position, "length": len(array.values)},
        )
    work = working_copy(array)
    values = work.values
    values.append(None)
    for i in range(len(values) - 1, position, -1):
        values[i] = values[i - 1]
        recorder.emit(
            f"arr[{i}] = arr[{i - 1}]",
            f"Shifting {values[i]} right to make room.",
            snapshot=work,
            variables={"i": i, "position": position},
            highlight={i},
        )
    values[position] = value
    recorder.emit(
        f"arr[{position}] = {value}",
        f"Inserted {value} at index {position}.",
        snapshot=work,
        variables={"value": value, "position": position, "length": len(values)},
        highlight={position},
    )
    return OperationResult.completed(work, recorder)
