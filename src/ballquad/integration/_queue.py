"""Ordering strategies for pending segments.

The scheduler only pushes and pops; which segment is refined next is decided
here.
"""

import heapq
import itertools
from typing import Iterable, Iterator, List, Tuple

import mpmath

from ballquad.integration._options import IntegrationOptions
from ballquad.integration._segment import Segment


class StackOrder:
    """Last in, first out: depth-first refinement in path order."""

    def __init__(self):
        self._items: List[Segment] = []

    def push(self, segment: Segment) -> None:
        self._items.append(segment)

    def extend(self, segments: Iterable[Segment]) -> None:
        """Push so that the first of ``segments`` is popped first."""
        for segment in reversed(list(segments)):
            self.push(segment)

    def pop(self) -> Segment:
        return self._items.pop()

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Segment]:
        return iter(self._items)


class WorstFirstOrder:
    """
    Largest error bound first.

    Segments without a known bound (fresh edges) are treated as infinitely
    bad. Ties keep insertion order.
    """

    def __init__(self):
        self._heap: List[Tuple[mpmath.mpf, int, Segment]] = []
        self._counter = itertools.count()

    def push(self, segment: Segment) -> None:
        priority = segment.priority
        if priority is None:
            priority = mpmath.inf
        heapq.heappush(self._heap, (-priority, next(self._counter), segment))

    def extend(self, segments: Iterable[Segment]) -> None:
        for segment in segments:
            self.push(segment)

    def pop(self) -> Segment:
        return heapq.heappop(self._heap)[2]

    def __len__(self) -> int:
        return len(self._heap)

    def __iter__(self) -> Iterator[Segment]:
        return (entry[2] for entry in self._heap)


def ordering_for(options: IntegrationOptions):
    """Ordering strategy selected by ``options.use_heap``."""
    if options.use_heap:
        return WorstFirstOrder()
    return StackOrder()
