# statespace_lab/core/frontiers.py
from __future__ import annotations
import heapq
from collections import deque


class FIFOQueue:
    def __init__(self):
        self.q = deque()
    def push(self, x): self.q.append(x)
    def pop(self): return self.q.popleft()
    def __len__(self): return len(self.q)


class PriorityQueue:
    """Min-heap by key(x); equal keys pop in insertion order."""
    def __init__(self, key):
        self.key = key
        self.h = []
        self.counter = 0  # tie-breaker for stability
    def push(self, x):
        self.counter += 1
        heapq.heappush(self.h, (self.key(x), self.counter, x))
    def pop(self):
        return heapq.heappop(self.h)[2]
    def __len__(self): return len(self.h)


_REMOVED = object()


class IndexedPriorityQueue:
    """
    Min-heap with at most one live entry per state key.

    Replacing or removing an entry marks the old heap slot as dead (lazy deletion);
    dead slots are skipped on pop. Equal priorities pop in insertion order, so a
    replaced entry goes behind everything already queued at its priority.
    """
    def __init__(self):
        self.h = []
        self.counter = 0
        self.live = {}  # key -> [priority, count, key, item]

    def push(self, key, item, priority: float):
        if key in self.live:
            self.remove(key)
        self.counter += 1
        entry = [priority, self.counter, key, item]
        self.live[key] = entry
        heapq.heappush(self.h, entry)

    def get(self, key):
        entry = self.live.get(key)
        return None if entry is None else entry[3]

    def remove(self, key):
        entry = self.live.pop(key)
        entry[3] = _REMOVED

    def pop(self):
        while self.h:
            priority, count, key, item = heapq.heappop(self.h)
            if item is _REMOVED:
                continue
            del self.live[key]
            return item
        raise IndexError("pop from an empty IndexedPriorityQueue")

    def __contains__(self, key):
        return key in self.live

    def __len__(self):
        return len(self.live)

    def compact(self):
        """Drop dead slots once they dominate the heap."""
        if len(self.h) > 2 * len(self.live):
            self.h = [e for e in self.h if e[3] is not _REMOVED]
            heapq.heapify(self.h)
