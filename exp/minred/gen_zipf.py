#!/usr/bin/env python3
import argparse
import math
import sys
from typing import Iterable, Optional, Sequence, TextIO

import numpy as np

from freq_utils import zipf_counts


def parse_count_arg(text: str) -> int:
    # base prefixes as with strtoll(..., 0)
    return int(text, 0)


def write_counts(out: TextIO, n: int, chunks: Iterable[np.ndarray]) -> int:
    out.write(f"{n}\n")
    written = 0
    for chunk in chunks:
        out.write("\n".join(str(c) for c in chunk.tolist()))
        out.write("\n")
        written += chunk.size
    return written


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Generate a count followed by non-decreasing Zipf-like frequencies for calc_minred."
    )
    parser.add_argument("counts", type=parse_count_arg, help="Number of frequencies (0x.. and 0o.. accepted).")
    parser.add_argument("exponent", type=float, help="Zipf exponent (>= 0).")
    parser.add_argument("--out", default=None, help="Output file (default: stdout).")
    args = parser.parse_args(argv)

    if args.counts < 0:
        parser.error("counts must be >= 0")
    if not math.isfinite(args.exponent) or args.exponent < 0:
        parser.error("exponent must be a finite number >= 0")

    try:
        chunks = zipf_counts(args.counts, args.exponent)
    except ValueError as exc:
        print(f"{parser.prog}: {exc}", file=sys.stderr)
        return 1

    if args.out:
        with open(args.out, "w", encoding="utf-8") as f:
            written = write_counts(f, args.counts, chunks)
        print(f"Wrote {written} counts to {args.out}")
    else:
        write_counts(sys.stdout, args.counts, chunks)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
