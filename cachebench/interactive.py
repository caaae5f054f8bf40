# cachebench/interactive.py
import sys
from dataclasses import dataclass, field
from typing import List

from .ingest import read_key_seq
from .policies.lfu import LFU
from .policies.pca import PerfectCache
from .simulator import test_cache

FORMAT_HELP = ("Invalid input format\n"
               "Input format:\n"
               "'cache_size N elem1 elem2 ... elemN', where N is number of elements")


@dataclass
class RunOptions:
    cache_size: int
    elem_num: int
    key_seq: List[int] = field(default_factory=list)


def read_run_options(stream) -> RunOptions:
    """
    Parse 'cache_size N elem1 ... elemN' from a text stream.
    Raises ValueError on malformed input.
    """
    tokens = iter(stream.read().split())
    try:
        cache_size = int(next(tokens))
        elem_num   = int(next(tokens))
    except (StopIteration, ValueError):
        raise ValueError(FORMAT_HELP) from None

    if cache_size < 0 or elem_num < 0:
        raise ValueError("Error: cache size and number of elements "
                         "must be positive integers")

    try:
        key_seq = read_key_seq(elem_num, [" ".join(tokens)])
    except ValueError:
        raise ValueError(FORMAT_HELP) from None
    if len(key_seq) < elem_num:
        raise ValueError(FORMAT_HELP)
    return RunOptions(cache_size, elem_num, key_seq)


def main(stream=None):
    stream = stream or sys.stdin
    try:
        opt = read_run_options(stream)
    except ValueError as e:
        print(e)
        return 1

    lfu = LFU(opt.cache_size)
    pca = PerfectCache(opt.cache_size, opt.key_seq)

    print("Hits statistics: ")
    print("- LFU    :", test_cache(lfu, opt.key_seq))
    print("- Perfect:", test_cache(pca, opt.key_seq))
    return 0


if __name__ == "__main__":
    sys.exit(main())
