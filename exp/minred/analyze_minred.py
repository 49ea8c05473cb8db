#!/usr/bin/env python3
import argparse
import csv
import fnmatch
import os
import sys
from typing import Dict, Iterator, Optional, Sequence

from freq_utils import FrequencyError, load_config, load_frequency_file
from minred_utils import code_cost, code_stats, compute_lengths, heap_code_lengths, is_complete_code


def iter_freq_files(root: str, pattern: str) -> Iterator[str]:
    for dirpath, _, filenames in os.walk(root):
        for name in sorted(filenames):
            if fnmatch.fnmatch(name, pattern):
                yield os.path.join(dirpath, name)


def analyze_file(path: str, max_symbols: int, cross_check: bool) -> Dict:
    freqs = load_frequency_file(path, max_symbols)
    lengths = compute_lengths(freqs)
    stats = code_stats(freqs, lengths)
    row = {
        "file": path,
        "n": stats.n,
        "total": stats.total,
        "entropy": stats.entropy,
        "avg_len": stats.average,
        "inefficiency_pct": "" if stats.inefficiency is None else stats.inefficiency,
        "max_len": stats.max_length,
        "complete": is_complete_code(lengths) if stats.n >= 2 else "",
        "heap_cost_match": "",
    }
    if cross_check:
        row["heap_cost_match"] = code_cost(freqs, heap_code_lengths(freqs)) == stats.cost
    return row


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Compute minimum-redundancy code statistics for a directory of frequency files.")
    parser.add_argument("--freq-dir", required=True, help="Directory containing frequency files.")
    parser.add_argument("--pattern", default="*.freq", help="Filename glob to select frequency files.")
    parser.add_argument("--out-dir", default="exp/minred/out", help="Output directory for csv/summary.")
    parser.add_argument("--config", default=None, help="JSON config with max_symbols.")
    parser.add_argument("--max-symbols", type=int, default=None)
    parser.add_argument("--cross-check", action="store_true", help="Compare cost against a heap-built Huffman tree.")
    args = parser.parse_args(argv)

    try:
        cfg = load_config(args.config)
    except (OSError, ValueError) as exc:
        parser.error(f"bad config {args.config}: {exc}")
    max_symbols = args.max_symbols if args.max_symbols is not None else cfg["max_symbols"]

    freq_files = list(iter_freq_files(args.freq_dir, args.pattern))
    if not freq_files:
        print(f"No {args.pattern} files found under {args.freq_dir}", file=sys.stderr)
        return 1

    rows = []
    errors = 0
    mismatches = 0
    for path in freq_files:
        try:
            row = analyze_file(path, max_symbols, args.cross_check)
        except (FrequencyError, OSError) as exc:
            print(f"Skip {path}: {exc}", file=sys.stderr)
            errors += 1
            continue
        if row["heap_cost_match"] is False:
            print(f"Cost mismatch: {path}", file=sys.stderr)
            mismatches += 1
        rows.append(row)

    os.makedirs(args.out_dir, exist_ok=True)
    csv_path = os.path.join(args.out_dir, "minred_metrics.csv")
    with open(csv_path, "w", encoding="utf-8", newline="") as f:
        if rows:
            writer = csv.DictWriter(f, fieldnames=list(rows[0].keys()))
            writer.writeheader()
            writer.writerows(rows)

    summary_path = os.path.join(args.out_dir, "minred_summary.md")
    with open(summary_path, "w", encoding="utf-8") as f:
        f.write("# Minimum-Redundancy Code Summary\n\n")
        f.write(f"- Files analyzed: {len(rows)}\n")
        f.write(f"- Files rejected: {errors}\n")
        if args.cross_check:
            f.write(f"- Heap cost mismatches: {mismatches}\n")
        if rows:
            total_syms = sum(r["total"] for r in rows)
            weighted_ent = sum(r["entropy"] * r["total"] for r in rows) / total_syms
            weighted_len = sum(r["avg_len"] * r["total"] for r in rows) / total_syms
            f.write(f"- Weighted entropy: {weighted_ent:.3f} bits/symbol\n")
            f.write(f"- Weighted code length: {weighted_len:.3f} bits/symbol\n")
            f.write(f"- Longest codeword: {max(r['max_len'] for r in rows)} bits\n")
        f.write("\n| file | n | entropy | avg_len | inefficiency % |\n")
        f.write("|---|---|---|---|---|\n")
        for r in rows:
            ineff = "n/a" if r["inefficiency_pct"] == "" else f"{r['inefficiency_pct']:.2f}"
            rel = os.path.relpath(r["file"], args.freq_dir)
            f.write(f"| {rel} | {r['n']} | {r['entropy']:.3f} | {r['avg_len']:.3f} | {ineff} |\n")

    print(f"Wrote {csv_path}")
    print(f"Wrote {summary_path}")
    if errors or mismatches:
        return 2
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
