from .policies.lfu import LFU
from .policies.pca import PerfectCache
from .simulator import CacheSim, test_cache

__all__ = ["LFU", "PerfectCache", "CacheSim", "test_cache"]
