# cachebench/policies/metrics.py
from ..simulator import CacheSim, trace_keys


def replay_with_metrics(trace, policy_ctor, capacity, key_func=None):
    sim = CacheSim(capacity, policy_ctor)
    hits = reqs = 0

    for key in trace_keys(trace, key_func):
        reqs += 1
        if sim.policy.lookup_update(key):
            hits += 1

    return {
        "hits": hits,
        "misses": reqs - hits,
        "requests": reqs,
        "hit_ratio": hits / reqs if reqs else 0.0,
        "resident": sim.policy.current_size(),
    }
