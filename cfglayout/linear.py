"""Constraint building and a greedy solver for the layout compaction program.

Every constraint relates exactly two variables: ``(a, b, c)`` stands for
``x_a - x_b <= c`` as an inequality and ``x_a - x_b = c`` as an equality.
"""

from __future__ import annotations

import heapq
from bisect import bisect_left, insort
from dataclasses import dataclass

Constraint = tuple[int, int, int]


@dataclass
class Segment:
    """Segment or block side at position ``x`` covering ``[y0, y1]``."""

    x: int
    variable_id: int
    y0: int
    y1: int


def create_inequality(
    a: int, pos_a: int, b: int, pos_b: int, min_spacing: int, positions: list[int]
) -> Constraint:
    """Constraint keeping the point at ``pos_a`` of ``a`` left of ``pos_b`` of ``b``.

    The spacing is never larger than the current distance between the points.
    """
    min_spacing = min(min_spacing, pos_b - pos_a)
    return (a, b, pos_b - positions[b] - (pos_a - positions[a]) - min_spacing)


def create_inequalities_from_segments(
    segments: list[Segment],
    positions: list[int],
    variable_group: list[int],
    block_count: int,
    block_spacing: int,
    segment_spacing: int,
) -> list[Constraint]:
    """Return inequalities that keep every segment on the same side of its neighbours.

    Variables below ``block_count`` are blocks; segments whose variables share a
    group in ``variable_group`` belong to one edge and may touch.
    """
    inequalities: list[Constraint] = []
    # Last segment seen for each range of y starting at the key.
    keys: list[int] = [-1]
    last_seen: dict[int, tuple[int, int]] = {-1: (-1, -1)}

    for segment in sorted(segments, key=lambda s: s.x):
        start = bisect_left(keys, segment.y0) - 1
        last = last_seen[keys[start]]
        end = start
        while end < len(keys) and keys[end] <= segment.y1:
            prev_variable, prev_pos = last_seen[keys[end]]
            if prev_variable != -1:
                min_spacing = segment_spacing
                if prev_variable < block_count and segment.variable_id < block_count:
                    if prev_variable == segment.variable_id:
                        # two sides of the same block
                        end += 1
                        continue
                    min_spacing = block_spacing
                elif variable_group[prev_variable] == variable_group[segment.variable_id]:
                    min_spacing = 0
                inequalities.append(
                    create_inequality(
                        prev_variable,
                        prev_pos,
                        segment.variable_id,
                        segment.x,
                        min_spacing,
                        positions,
                    )
                )
            last = last_seen[keys[end]]
            end += 1
        if keys[start] < segment.y0:
            start += 1
        for key in keys[start:end]:
            del last_seen[key]
        del keys[start:end]
        for key, value in ((segment.y0, (segment.variable_id, segment.x)), (segment.y1, last)):
            if key not in last_seen:
                insort(keys, key)
            last_seen[key] = value
    return inequalities


class _Solver:
    """One greedy pass: move variables until they hit a constraint, then move them together."""

    def __init__(
        self,
        objective: list[int],
        inequalities: list[Constraint],
        equalities: list[Constraint],
        solution: list[int],
        stick_when_not_moving: bool,
    ) -> None:
        n = len(solution)
        self.solution = solution
        self.objective = list(objective)
        self.inequalities = [list(c) for c in inequalities]
        self.equalities = [list(c) for c in equalities]
        self.stick = stick_when_not_moving
        self.group = list(range(n))
        self.edges: list[list[int]] = [[] for _ in range(n)]
        self.edge_count = [0] * n
        self.processed = [False] * n
        # Smallest value in a group relative to its root, to keep every x_i >= 0.
        self.relative_min = [0] * n
        for index, (a, b, _) in enumerate(self.inequalities):
            self.edges[a].append(index)
            self.edges[b].append(index)
            self.edge_count[a] += 1
            self.edge_count[b] += 1

    def find(self, v: int) -> int:
        group = self.group
        while group[v] != v:
            group[v] = group[group[v]]
            v = group[v]
        return v

    def join(self, a: int, b: int) -> None:
        a = self.find(a)
        b = self.find(b)
        self.group[self.find(b)] = self.find(a)
        self.edge_count[a] += self.edge_count[b]
        self.objective[a] += self.objective[b]
        internal = 0
        kept: list[int] = []
        for index in self.edges[b]:
            constraint = self.inequalities[index]
            other = constraint[0] + constraint[1] - b
            if self.find(other) == a:
                internal += 1
                continue
            kept.append(index)
            diff = self.solution[a] - self.solution[b]
            if b == constraint[0]:
                constraint[0] = a
                constraint[2] += diff
            else:
                constraint[1] = a
                constraint[2] -= diff
        self.edges[a].extend(kept)
        self.edges[b] = []
        self.edge_count[a] -= internal
        self.relative_min[a] = min(
            self.relative_min[a],
            self.relative_min[b] + self.solution[b] - self.solution[a],
        )

    def _join_equalities(self) -> None:
        for equality in self.equalities:
            a = self.find(equality[0])
            b = self.find(equality[1])
            if a == b:
                equality[:] = [0, 0, 0]
                continue
            # attach the group with fewer constraints to the larger one
            if self.edge_count[a] > self.edge_count[b]:
                a, b = b, a
            self.join(b, a)
            equality[:] = [a, b, self.solution[a] - self.solution[b]]
            self.processed[a] = True

    def _limit(self, g: int, decrease: bool) -> tuple[int | None, int]:
        smallest: int | None
        if decrease:
            smallest = -self.solution[g] - self.relative_min[g]
        else:
            smallest = None
        limiting = -1
        for index in self.edges[g]:
            a, b, bound = self.inequalities[index]
            if decrease:
                if g == a:
                    continue
                other = a
            else:
                if g == b:
                    continue
                other = b
            if self.find(other) == g:
                continue
            if decrease:
                move = self.solution[other] - bound - self.solution[g]
                if move > smallest:
                    smallest, limiting = move, other
            else:
                move = self.solution[other] + bound - self.solution[g]
                if smallest is None or move < smallest:
                    smallest, limiting = move, other
        return smallest, limiting

    def run(self) -> None:
        self._join_equalities()
        queue = [(self.edge_count[i], i) for i in range(len(self.solution)) if not self.processed[i]]
        heapq.heapify(queue)
        while queue:
            size, g = heapq.heappop(queue)
            if size != self.edge_count[g] or self.processed[g]:
                continue
            direction = self.objective[g]
            if direction == 0:
                continue
            move, limiting = self._limit(g, direction > 0)
            if move is None:
                # An unbounded variable is left alone rather than stretched to infinity.
                move = 0
            self.solution[g] += move
            if move == 0 and not self.stick:
                continue
            self.processed[g] = True
            if limiting != -1:
                self.join(limiting, g)
                if not self.processed[limiting]:
                    heapq.heappush(queue, (self.edge_count[limiting], limiting))
                self.equalities.append([g, limiting, self.solution[g] - self.solution[limiting]])
        for a, b, bound in reversed(self.equalities):
            self.solution[a] = self.solution[b] + bound


def optimize_linear_program(
    n: int,
    objective: list[int],
    inequalities: list[Constraint],
    equalities: list[Constraint],
    solution: list[int],
) -> list[int]:
    """Reduce ``sum(objective[i] * x_i)`` keeping the constraints and ``x_i >= 0``.

    ``solution`` must hold a feasible starting point; it is improved in place and
    returned. The result is not guaranteed to be optimal.
    """
    if len(objective) != n or len(solution) != n:
        raise ValueError("objective and solution must both have n entries")
    unique: dict[tuple[int, int], int] = {}
    for a, b, bound in sorted(inequalities):
        unique.setdefault((a, b), bound)
    reduced = [(a, b, bound) for (a, b), bound in unique.items()]
    _Solver(objective, reduced, equalities, solution, True).run()
    return solution