# cachebench/policies/pca.py
import heapq
from collections import defaultdict, deque

from .base import BaseCache, no_value


class _Entry:
    __slots__ = ("key", "value", "next_use")

    def __init__(self, key, value, next_use):
        self.key      = key
        self.value    = value
        self.next_use = next_use    # trace index of next reference, None = never


class PerfectCache(BaseCache):
    """
    Perfect Caching Algorithm: Belady's MIN over a trace known up front.

    On eviction drops the resident whose next reference is farthest in the
    future. Residents that never come back sit on a separate stack and are
    evicted first. The trace passed here must be the exact key sequence
    replayed later through lookup_update().
    """
    def __init__(self, capacity: int, key_seq=()):
        super().__init__(capacity)
        self.future    = defaultdict(deque)     # key -> trace indices still ahead
        self.farthest  = []                     # (-next_use, key), max-heap
        self.redundant = []                     # keys with no next use, LIFO
        self.position  = 0                      # lookups replayed so far
        for idx, key in enumerate(key_seq):
            self.future[key].append(idx)

    # ----------------------------------------------------------
    def next_use(self, key):
        """Trace index at which `key` is referenced next, without consuming it."""
        q = self.future.get(key)
        return q[0] if q else None

    def lookup_update(self, key, value_fn=None) -> bool:
        nxt = self._advance(key)
        entry = self.store.get(key)
        if entry is not None:                    # ------------- HIT
            entry.next_use = nxt
            self._file(entry)
            return True

        # ------------- MISS
        if self.capacity == 0 or nxt is None:
            return False

        if self.is_full() and not self._free_space(nxt):
            return False

        value_fn = value_fn or no_value
        entry = _Entry(key, value_fn(key), nxt)
        self.store[key] = entry
        self._file(entry)
        return False

    def clear(self):
        super().clear()
        self.future.clear()
        self.farthest.clear()
        self.redundant.clear()
        self.position = 0

    # ----------------------------------------------------------
    def _advance(self, key):
        """Consume the current occurrence of `key` and return its next one."""
        self.position += 1
        q = self.future.get(key)
        if not q:
            return None
        q.popleft()
        return q[0] if q else None

    def _file(self, entry):
        # the previous record of this entry goes stale by itself:
        # it no longer matches entry.next_use
        if entry.next_use is None:
            self.redundant.append(entry.key)
        else:
            heapq.heappush(self.farthest, (-entry.next_use, entry.key))
            if len(self.farthest) > 2 * len(self.store) + 16:
                self.farthest = [(-e.next_use, e.key) for e in self.store.values()
                                 if e.next_use is not None]
                heapq.heapify(self.farthest)

    def _pop_redundant(self):
        while self.redundant:
            k = self.redundant.pop()
            entry = self.store.get(k)
            if entry is not None and entry.next_use is None:
                return entry
        return None

    def _peek_farthest(self):
        while self.farthest:
            neg, k = self.farthest[0]
            entry = self.store.get(k)
            if entry is not None and entry.next_use == -neg:
                return entry
            heapq.heappop(self.farthest)        # stale
        return None

    def _free_space(self, inserting_next) -> bool:
        """
        Evict one resident to make room for a key next used at
        `inserting_next`. Returns False when inserting would not pay off.
        """
        victim = self._pop_redundant()
        if victim is None:
            victim = self._peek_farthest()
            if victim is None or inserting_next >= victim.next_use:
                return False
            heapq.heappop(self.farthest)
        del self.store[victim.key]
        return True
