import numpy as np
import pytest

from cachebench.policies.lfu import LFU
from cachebench.policies.pca import PerfectCache
from cachebench import simulator


def belady_hits(cap, trace):
    """Quadratic MIN with bypass, used as a reference."""
    resident = set()
    hits = 0
    for i, key in enumerate(trace):
        def next_use(k):
            for j in range(i + 1, len(trace)):
                if trace[j] == k:
                    return j
            return float("inf")

        if key in resident:
            hits += 1
            continue
        nxt = next_use(key)
        if cap == 0 or nxt == float("inf"):
            continue
        if len(resident) >= cap:
            victim = max(resident, key=next_use)
            if nxt >= next_use(victim):
                continue
            resident.remove(victim)
        resident.add(key)
    return hits


def random_traces(n=40, seed=7):
    rng = np.random.default_rng(seed)
    for _ in range(n):
        cap = int(rng.integers(0, 8))
        length = int(rng.integers(0, 120))
        upper = int(rng.integers(1, 20))
        yield cap, rng.integers(0, upper, size=length).tolist()


@pytest.mark.parametrize("cap,trace", list(random_traces()))
def test_perfect_beats_lfu(cap, trace):
    lfu_hits = simulator.test_cache(LFU(cap), trace)
    pca_hits = simulator.test_cache(PerfectCache(cap, trace), trace)
    assert pca_hits >= lfu_hits
    assert pca_hits <= len(trace)


@pytest.mark.parametrize("cap,trace", list(random_traces(20, seed=11)))
def test_perfect_matches_reference(cap, trace):
    assert simulator.test_cache(PerfectCache(cap, trace), trace) == belady_hits(cap, trace)


@pytest.mark.parametrize("policy", ["lfu", "pca"])
def test_size_never_exceeds_capacity(policy):
    rng = np.random.default_rng(3)
    trace = rng.integers(0, 30, size=500).tolist()
    for cap in (0, 1, 5, 17):
        cache = LFU(cap) if policy == "lfu" else PerfectCache(cap, trace)
        for key in trace:
            cache.lookup_update(key)
            assert cache.current_size() <= cap


def test_zero_capacity_has_no_hits():
    trace = [1, 1, 1, 2, 2, 1]
    assert simulator.test_cache(LFU(0), trace) == 0
    assert simulator.test_cache(PerfectCache(0, trace), trace) == 0


def test_clear_makes_residents_miss():
    trace = [1, 2, 1, 2, 1, 2]
    for cache in (LFU(2), PerfectCache(2, trace)):
        for key in trace[:2]:
            cache.lookup_update(key)
        cache.clear()
        assert cache.is_empty()
        assert cache.lookup_update(1) is False
