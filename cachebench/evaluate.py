# cachebench/evaluate.py
import argparse
import sys
from dataclasses import dataclass

import numpy as np
import pandas as pd
from tqdm import tqdm

from .policies.lfu import LFU
from .policies.pca import PerfectCache
from .simulator import CacheSim


@dataclass
class TestOptions:
    __test__ = False

    cache_size: int
    elem_num: int
    lower: int
    upper: int

    def __str__(self):
        return (f"cache size = {self.cache_size}; "
                f"elements number = {self.elem_num}; "
                f"range of keys: [{self.lower}; {self.upper}]")


# ---- Generated test table ----
OPTIONS = [
    TestOptions(   4,     8, 0,     6),
    TestOptions(   4,    16, 0,     9),

    TestOptions(   8,    16, 0,    12),
    TestOptions(   8,    32, 0,    20),

    TestOptions(  16,    32, 0,    24),
    TestOptions(  16,    64, 0,    36),

    TestOptions(  32,    64, 0,    48),
    TestOptions(  32,   128, 0,    72),

    TestOptions(  64,   128, 0,    96),
    TestOptions(  64,   256, 0,   144),

    TestOptions( 128,   512, 0,   192),
    TestOptions( 128,   512, 0,   288),

    TestOptions(1024, 25000, 0, 10000),
    TestOptions(1024, 50000, 0, 15000),
]

EXTRA_OPTIONS = TestOptions(2048, 100000, 0, 50000)

COLUMNS = ["test", "cache_size", "elem_num", "lower", "upper",
           "lfu_hits", "pca_hits"]


def generate_key_seq(rng: np.random.Generator, opt: TestOptions) -> np.ndarray:
    # upper bound is inclusive
    return rng.integers(opt.lower, opt.upper + 1, size=opt.elem_num)


def run_generated_test_single(opt: TestOptions, rng: np.random.Generator):
    key_seq = generate_key_seq(rng, opt).tolist()

    lfu = CacheSim(opt.cache_size, LFU)
    pca = CacheSim(opt.cache_size, lambda cap: PerfectCache(cap, key_seq))
    return lfu.hit_count(key_seq), pca.hit_count(key_seq)


def run_all(options=OPTIONS, seed=None, extra=0, progress=False) -> pd.DataFrame:
    rng  = np.random.default_rng(seed)
    plan = list(options) + [EXTRA_OPTIONS] * extra
    rows = []
    for i, opt in enumerate(tqdm(plan, disable=not progress), start=1):
        lfu_hits, pca_hits = run_generated_test_single(opt, rng)
        rows.append((i, opt.cache_size, opt.elem_num, opt.lower, opt.upper,
                     lfu_hits, pca_hits))
    return pd.DataFrame(rows, columns=COLUMNS)


def print_report(res: pd.DataFrame, n_main: int):
    for row in res.itertuples(index=False):
        opt = TestOptions(row.cache_size, row.elem_num, row.lower, row.upper)
        if row.test == n_main + 1:
            print("Additional tests: ")
            print(opt)
        if row.test <= n_main:
            print(f"Test #{row.test} {opt}")
        else:
            print(f"Additional test #{row.test - n_main}")
        print(f"- LFU    : {row.lfu_hits}")
        print(f"- Perfect: {row.pca_hits}")
        print()


def main(argv=None):
    ap = argparse.ArgumentParser(
        description="Compare LFU and perfect caching on generated traces.")
    ap.add_argument("--seed", type=int, default=None)
    ap.add_argument("--extra", type=int, default=0,
                    help="number of additional large generated tests")
    ap.add_argument("--out", default=None, help="write results to this CSV")
    ap.add_argument("--progress", action="store_true")
    args = ap.parse_args(argv)

    if args.extra < 0:
        print("--extra must be non-negative")
        return 1

    res = run_all(OPTIONS, seed=args.seed, extra=args.extra,
                  progress=args.progress)
    print_report(res, len(OPTIONS))

    if args.out:
        res.to_csv(args.out, index=False)
        print("Wrote", args.out)
    return 0


if __name__ == "__main__":
    sys.exit(main())
