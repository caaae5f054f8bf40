# cachebench/policies/lfu.py
import heapq

from .base import BaseCache, no_value


class _Entry:
    __slots__ = ("key", "value", "count", "seq")

    def __init__(self, key, value, count, seq):
        self.key   = key
        self.value = value
        self.count = count          # hits since insertion
        self.seq   = seq            # seq of the live heap record


class LFU(BaseCache):
    """
    Least-Frequently-Used cache counted in entries.
    Uses a min-heap keyed by (count, seq_no) so equal counts stay distinct
    and the least recently touched one goes first.
    """
    def __init__(self, capacity: int):
        super().__init__(capacity)
        self.heap = []              # (count, seq, key)
        self.seq  = 0               # monotone timestamp

    # ----------------------------------------------------------
    def lookup_update(self, key, value_fn=None) -> bool:
        self.seq += 1
        entry = self.store.get(key)
        if entry is not None:                    # ------------- HIT
            entry.count += 1
            entry.seq    = self.seq
            self._push(entry)
            return True

        # ------------- MISS
        if self.capacity == 0:
            return False

        if self.is_full():
            self._evict()

        value_fn = value_fn or no_value
        entry = _Entry(key, value_fn(key), 0, self.seq)
        self.store[key] = entry
        self._push(entry)
        return False

    def clear(self):
        super().clear()
        self.heap.clear()
        self.seq = 0

    def use_count(self, key):
        entry = self.store.get(key)
        return None if entry is None else entry.count

    # ----------------------------------------------------------
    def _push(self, entry):
        heapq.heappush(self.heap, (entry.count, entry.seq, entry.key))
        # drop stale records once they outnumber live ones
        if len(self.heap) > 2 * len(self.store) + 16:
            self.heap = [(e.count, e.seq, e.key) for e in self.store.values()]
            heapq.heapify(self.heap)

    def _evict(self):
        while self.heap:
            _, s, k = heapq.heappop(self.heap)
            entry = self.store.get(k)
            # skip stale heap entries
            if entry is None or entry.seq != s:
                continue
            del self.store[k]
            return entry
        return None
