# cachebench/simulator.py
from typing import Callable, Iterable, List
import pandas as pd


def trace_keys(trace, key_func=None) -> Iterable:
    if isinstance(trace, pd.DataFrame):
        if key_func is not None:
            return (key_func(row) for row in trace.itertuples(index=False))
        return trace["key"].tolist()
    if key_func is not None:
        return (key_func(k) for k in trace)
    return trace


def test_cache(cache, key_seq, value_fn=None) -> int:
    """Apply lookup_update to `cache` for every key; return the number of hits."""
    hit_count = 0
    for key in key_seq:
        hit_count += cache.lookup_update(key, value_fn)
    return hit_count


test_cache.__test__ = False      # not a pytest test


class CacheSim:
    """
    Replays a trace through a policy object that implements:
      lookup_update(key, value_fn=None) -> bool
    A trace is a DataFrame with a `key` column or any sequence of keys.
    """
    def __init__(self, capacity: int, policy_ctor: Callable):
        self.capacity = capacity
        self.policy   = policy_ctor(capacity)

    def hits(self, trace, key_func: Callable = None,
             value_fn: Callable = None) -> List[bool]:
        return [self.policy.lookup_update(key, value_fn)
                for key in trace_keys(trace, key_func)]

    def hit_count(self, trace, key_func: Callable = None,
                  value_fn: Callable = None) -> int:
        return test_cache(self.policy, trace_keys(trace, key_func), value_fn)

    def replay(self, trace, key_func: Callable = None) -> float:
        flags = self.hits(trace, key_func)
        if not flags:
            return 0.0
        return sum(flags) / len(flags)
