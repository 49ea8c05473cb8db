#!/usr/bin/env python3
import argparse
import sys
from typing import List, Optional, Sequence

from freq_utils import (
    AllocationFailureError,
    FrequencyError,
    load_config,
    read_frequencies,
    validate_frequencies,
    write_json,
)
from minred_utils import CodeStats, calculate_minimum_redundancy, code_stats

verbose = False


def log(msg):
    if verbose:
        sys.stderr.write(str(msg) + "\n")


def format_report(freqs: Sequence[int], lengths: Sequence[int], stats: CodeStats, table_limit: int) -> List[str]:
    lines = []
    if len(freqs) <= table_limit:
        for i, (f, l) in enumerate(zip(freqs, lengths)):
            lines.append(f"f_{i:02d} = {f:4d}, |c_{i:02d}| = {l:2d}")
    lines.append(f"entropy                 = {stats.entropy:5.2f} bits per symbol")
    lines.append(f"minimum-redundancy code = {stats.average:5.2f} bits per symbol")
    if stats.inefficiency is not None:
        lines.append(f"inefficiency            = {stats.inefficiency:5.2f}%")
    return lines


def main(argv: Optional[Sequence[str]] = None) -> int:
    global verbose
    parser = argparse.ArgumentParser(
        description="Calculate minimum-redundancy codeword lengths in place and report entropy/inefficiency."
    )
    parser.add_argument("input", nargs="?", default="-", help="Frequency file (count, then non-decreasing frequencies); '-' for stdin.")
    parser.add_argument("--config", default=None, help="JSON config with max_symbols / table_limit.")
    parser.add_argument("--max-symbols", type=int, default=None, help="Override the maximum declared symbol count.")
    parser.add_argument("--table-limit", type=int, default=None, help="Print per-symbol lines only when n is at most this.")
    parser.add_argument("--json-out", default=None, help="Also write lengths and statistics to this JSON file.")
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args(argv)
    verbose = args.verbose

    try:
        cfg = load_config(args.config)
    except (OSError, ValueError) as exc:
        parser.error(f"bad config {args.config}: {exc}")
    max_symbols = args.max_symbols if args.max_symbols is not None else cfg["max_symbols"]
    table_limit = args.table_limit if args.table_limit is not None else cfg["table_limit"]

    try:
        if args.input == "-":
            freqs = read_frequencies(sys.stdin, max_symbols)
        else:
            with open(args.input, "r", encoding="utf-8") as f:
                freqs = read_frequencies(f, max_symbols)
        total = validate_frequencies(freqs)
        try:
            lengths = list(freqs)
        except MemoryError:
            raise AllocationFailureError(f"unable to allocate memory for {len(freqs)} lengths") from None
    except (FrequencyError, OSError) as exc:
        print(f"{parser.prog}: {exc}", file=sys.stderr)
        return 1
    log(f"read {len(freqs)} frequencies, total {total}")

    # lengths is handed over to the calculator; freqs stays untouched
    calculate_minimum_redundancy(lengths)
    stats = code_stats(freqs, lengths)
    log(f"max codeword length {stats.max_length}, cost {stats.cost} bits")

    for line in format_report(freqs, lengths, stats, table_limit):
        print(line)

    if args.json_out:
        try:
            write_json(args.json_out, {
                "n": stats.n,
                "total": stats.total,
                "cost_bits": stats.cost,
                "entropy": stats.entropy,
                "average_length": stats.average,
                "inefficiency_pct": stats.inefficiency,
                "max_length": stats.max_length,
                "frequencies": freqs,
                "code_lengths": lengths,
            })
        except OSError as exc:
            print(f"{parser.prog}: cannot write {args.json_out}: {exc}", file=sys.stderr)
            return 1
        log(f"Wrote {args.json_out}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
