"""Segment trees used by the edge routing steps."""

from __future__ import annotations

import math


def _capacity(size: int) -> int:
    leaves = 1
    while leaves < max(size, 1):
        leaves *= 2
    return leaves


class PointSetMinTree:
    """Array with point assignment and searches for the nearest value below a limit."""

    def __init__(self, size: int, initial: int = 0) -> None:
        if size < 0:
            raise ValueError("size must not be negative")
        self._size = size
        self._leaves = _capacity(size)
        self._tree: list[float] = [math.inf] * (2 * self._leaves)
        for index in range(size):
            self._tree[self._leaves + index] = initial
        for node in range(self._leaves - 1, 0, -1):
            self._tree[node] = min(self._tree[2 * node], self._tree[2 * node + 1])

    def __len__(self) -> int:
        return self._size

    def _check(self, index: int) -> None:
        if not 0 <= index < self._size:
            raise IndexError(f"index {index} out of range 0..{self._size}")

    def set(self, index: int, value: int) -> None:
        """Store ``value`` at ``index``."""
        self._check(index)
        node = self._leaves + index
        self._tree[node] = value
        node //= 2
        while node:
            self._tree[node] = min(self._tree[2 * node], self._tree[2 * node + 1])
            node //= 2

    def value_at_point(self, index: int) -> int:
        """Return the value stored at ``index``."""
        self._check(index)
        return self._tree[self._leaves + index]

    def right_most_less_than(self, position: int, value: int) -> int:
        """Largest index <= ``position`` holding a value below ``value``, or -1."""
        return self._right_most(1, 0, self._leaves, position, value)

    def left_most_less_than(self, position: int, value: int) -> int:
        """Smallest index >= ``position`` holding a value below ``value``, or -1."""
        return self._left_most(1, 0, self._leaves, position, value)

    def _right_most(self, node: int, lo: int, hi: int, position: int, value: int) -> int:
        if lo > position or self._tree[node] >= value:
            return -1
        if hi - lo == 1:
            return lo
        mid = (lo + hi) // 2
        found = self._right_most(2 * node + 1, mid, hi, position, value)
        if found != -1:
            return found
        return self._right_most(2 * node, lo, mid, position, value)

    def _left_most(self, node: int, lo: int, hi: int, position: int, value: int) -> int:
        if hi <= position or self._tree[node] >= value:
            return -1
        if hi - lo == 1:
            return lo
        mid = (lo + hi) // 2
        found = self._left_most(2 * node, lo, mid, position, value)
        if found != -1:
            return found
        return self._left_most(2 * node + 1, mid, hi, position, value)


class RangeAssignMaxTree:
    """Array with assignment to half-open ranges and range maximum queries."""

    def __init__(self, size: int, initial: int = 0) -> None:
        if size < 0:
            raise ValueError("size must not be negative")
        self._size = size
        self._leaves = _capacity(size)
        self._max: list[float] = [-math.inf] * (2 * self._leaves)
        self._pending: list[int | None] = [None] * (2 * self._leaves)
        for index in range(size):
            self._max[self._leaves + index] = initial
        for node in range(self._leaves - 1, 0, -1):
            self._max[node] = max(self._max[2 * node], self._max[2 * node + 1])

    def __len__(self) -> int:
        return self._size

    def _check(self, left: int, right: int) -> None:
        if left < 0 or right > self._size or left >= right:
            raise IndexError(f"range [{left}, {right}) invalid for size {self._size}")

    def set_range(self, left: int, right: int, value: int) -> None:
        """Assign ``value`` to every index in ``[left, right)``."""
        self._check(left, right)
        self._assign(1, 0, self._leaves, left, right, value)

    def range_maximum(self, left: int, right: int) -> int:
        """Return the largest value in ``[left, right)``."""
        self._check(left, right)
        return self._query(1, 0, self._leaves, left, right)

    def _push(self, node: int) -> None:
        value = self._pending[node]
        if value is None:
            return
        for child in (2 * node, 2 * node + 1):
            self._max[child] = value
            self._pending[child] = value
        self._pending[node] = None

    def _assign(self, node: int, lo: int, hi: int, left: int, right: int, value: int) -> None:
        if right <= lo or hi <= left:
            return
        if left <= lo and hi <= right:
            self._max[node] = value
            self._pending[node] = value
            return
        self._push(node)
        mid = (lo + hi) // 2
        self._assign(2 * node, lo, mid, left, right, value)
        self._assign(2 * node + 1, mid, hi, left, right, value)
        self._max[node] = max(self._max[2 * node], self._max[2 * node + 1])

    def _query(self, node: int, lo: int, hi: int, left: int, right: int) -> float:
        if right <= lo or hi <= left:
            return -math.inf
        if left <= lo and hi <= right:
            return self._max[node]
        self._push(node)
        mid = (lo + hi) // 2
        return max(
            self._query(2 * node, lo, mid, left, right),
            self._query(2 * node + 1, mid, hi, left, right),
        )