"""Deterministic render ordering for options.

Options render in ascending priority. The ordering is a recursive partition
sort with a first-element pivot; two quirks are part of its contract and are
pinned by regression tests:

1. Two-element inputs take a pair shortcut: swap only when the first
   priority is strictly greater, so ties keep their original order.
2. In the general partition, items equal to the pivot go to the right-hand
   partition, after the pivot.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, TypeVar

from .core.models.option import Option, coerce_priority

T = TypeVar("T")


def priority_of(item: Any) -> int:
    """Ordering priority of an Option or a mapping with a "priority" key."""
    if isinstance(item, Option):
        return item.priority
    if isinstance(item, Mapping):
        return coerce_priority(item.get("priority"))
    return coerce_priority(getattr(item, "priority", None))


def sort_by_priority(
    items: Sequence[T] | Mapping[Any, T], *, pair_shortcut: bool = True
) -> list[T]:
    """Order items non-decreasing by priority.

    Args:
        items: Options (or priority-bearing mappings). A mapping is sorted by
            its values; its keys are dropped.
        pair_shortcut: Use the direct comparison for two-element inputs.
            Disable to route every input through the general partition.

    Returns:
        A new list, a permutation of the input.
    """
    if isinstance(items, Mapping):
        seq: list[T] = list(items.values())
    else:
        seq = list(items)
    return _partition_sort(seq, pair_shortcut)


def _partition_sort(seq: list[T], pair_shortcut: bool) -> list[T]:
    length = len(seq)
    if length < 2:
        return list(seq)

    if length == 2 and pair_shortcut:
        first, second = seq
        if priority_of(first) > priority_of(second):
            return [second, first]
        return [first, second]

    pivot = seq[0]
    pivot_priority = priority_of(pivot)
    left: list[T] = []
    right: list[T] = []
    for item in seq[1:]:
        if priority_of(item) < pivot_priority:
            left.append(item)
        else:
            right.append(item)

    return (
        _partition_sort(left, pair_shortcut)
        + [pivot]
        + _partition_sort(right, pair_shortcut)
    )


def render_order(options: Sequence[Option] | Mapping[Any, Option]) -> list[str]:
    """Keys of ``options`` in render order."""
    return [option.key for option in sort_by_priority(options)]
