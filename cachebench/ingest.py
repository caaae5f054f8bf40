# cachebench/ingest.py
import argparse
import pathlib
import sys

import pandas as pd


def read_key_seq(elem_num, stream, key_type=int):
    """
    Read up to `elem_num` whitespace separated keys from a text stream.
    Stops early at end of stream; raises ValueError on a token that
    `key_type` cannot convert.
    """
    key_seq = []
    for line in stream:
        for tok in line.split():
            if len(key_seq) >= elem_num:
                return key_seq
            try:
                key_seq.append(key_type(tok))
            except ValueError:
                raise ValueError(f"bad key {tok!r}") from None
    return key_seq


def _int_keys(keys: pd.Series) -> pd.Series:
    """Convert text keys to int64 only when every key is a plain integer
    whose text survives the round trip ("01" and "1.5" stay strings)."""
    if not len(keys) or not keys.str.fullmatch(r"-?\d+").all():
        return keys
    try:
        num = keys.astype("int64")
    except (ValueError, OverflowError):
        return keys
    if not (num.astype(str) == keys).all():
        return keys
    return num


def load_trace(path) -> pd.DataFrame:
    path = pathlib.Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Trace not found: {path}")

    if path.suffix == ".parquet":
        df = pd.read_parquet(path)
    elif path.suffix == ".csv":
        df = pd.read_csv(path, dtype=str, keep_default_na=False)
    else:
        with open(path) as f:
            df = pd.DataFrame({"key": [tok for line in f for tok in line.split()]},
                              dtype=str)
    if "key" not in df.columns:
        if not len(df.columns):
            raise ValueError(f"Trace has no columns: {path}")
        df = df.rename(columns={df.columns[0]: "key"})
    if path.suffix != ".parquet":
        # text keys; parquet columns keep their stored type
        df["key"] = _int_keys(df["key"].astype(str))
    return df[["key"]]


def save_trace(df: pd.DataFrame, path):
    path = pathlib.Path(path)
    if path.suffix == ".parquet":
        df.to_parquet(path, compression="zstd")
    else:
        df.to_csv(path, index=False)


def main(argv=None):
    ap = argparse.ArgumentParser(description="Convert a key trace to parquet/CSV.")
    ap.add_argument("src")
    ap.add_argument("dst")
    args = ap.parse_args(argv)

    print("Loading…")
    try:
        df = load_trace(args.src)
    except (FileNotFoundError, ValueError) as e:
        print(e)
        return 1
    save_trace(df, args.dst)
    print("Wrote", args.dst, "rows:", len(df))
    return 0


if __name__ == "__main__":
    sys.exit(main())
