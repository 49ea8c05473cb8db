#!/usr/bin/env python3
import json
import math
import re
from typing import Dict, Iterable, Iterator, List, Optional, TextIO

import numpy as np


MAX_SYMBOLS = 1000000000
TABLE_LIMIT = 100
INT64_MAX = (1 << 63) - 1
ZIPF_CHUNK = 1 << 20
# what scanf("%lld") accepts: optional sign, ASCII digits only
INT_TOKEN = re.compile(r"[+-]?[0-9]+", re.ASCII)


class FrequencyError(ValueError):
    pass


class InvalidCountError(FrequencyError):
    pass


class AllocationFailureError(FrequencyError):
    pass


class OrderingError(FrequencyError):
    pass


class ZeroTotalError(FrequencyError):
    pass


class FrequencyParseError(FrequencyError):
    pass


def iter_tokens(lines: Iterable[str]) -> Iterator[str]:
    for line in lines:
        yield from line.split()


def parse_count(token: Optional[str], max_symbols: int = MAX_SYMBOLS) -> int:
    if token is None:
        raise InvalidCountError("missing symbol count")
    if not INT_TOKEN.fullmatch(token):
        raise InvalidCountError(f"symbol count must be an integer, got {token!r}")
    n = int(token)
    if n <= 0 or n > max_symbols:
        raise InvalidCountError(f"n should be positive and at most {max_symbols}, got {n}")
    return n


def parse_frequency(token: str, index: int) -> int:
    if not INT_TOKEN.fullmatch(token):
        raise FrequencyParseError(f"frequency {index} is not an integer: {token!r}")
    value = int(token)
    if not -INT64_MAX - 1 <= value <= INT64_MAX:
        raise FrequencyParseError(f"frequency {index} does not fit in 64 bits: {value}")
    return value


def read_frequencies(stream: TextIO, max_symbols: int = MAX_SYMBOLS) -> List[int]:
    """Read a declared count followed by up to that many frequencies.

    A stream that ends early truncates the count to what was read; tokens
    past the declared count are ignored.
    """
    tokens = iter_tokens(stream)
    freqs: List[int] = []
    try:
        n = parse_count(next(tokens, None), max_symbols)
        for token in tokens:
            freqs.append(parse_frequency(token, len(freqs)))
            if len(freqs) == n:
                break
    except MemoryError:
        raise AllocationFailureError("unable to allocate memory for frequencies") from None
    except UnicodeDecodeError as exc:
        raise FrequencyParseError(f"input is not valid text: {exc}") from None
    return freqs


def validate_frequencies(freqs: List[int]) -> int:
    total = 0
    for i, f in enumerate(freqs):
        total += f
        if f < 0:
            raise OrderingError(
                f"input frequencies must be non-negative and non-decreasing (f_{i} = {f})"
            )
        if i > 0 and freqs[i - 1] > f:
            raise OrderingError(
                "input frequencies must be non-negative and non-decreasing "
                f"(f_{i - 1} = {freqs[i - 1]} > f_{i} = {f})"
            )
    if total <= 0:
        raise ZeroTotalError("sum of frequencies must be positive")
    return total


def load_frequency_file(path: str, max_symbols: int = MAX_SYMBOLS) -> List[int]:
    with open(path, "r", encoding="utf-8") as f:
        freqs = read_frequencies(f, max_symbols)
    validate_frequencies(freqs)
    return freqs


def load_json(path: str) -> Dict:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def write_json(path: str, payload: Dict) -> None:
    with open(path, "w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2, ensure_ascii=False)


def load_config(path: Optional[str]) -> Dict[str, int]:
    cfg = {"max_symbols": MAX_SYMBOLS, "table_limit": TABLE_LIMIT}
    if not path:
        return cfg
    raw = load_json(path)
    if not isinstance(raw, dict):
        raise ValueError(f"config must be a JSON object, got {type(raw).__name__}")
    for key in cfg:
        if raw.get(key) is not None:
            try:
                cfg[key] = int(raw[key])
            except TypeError:
                raise ValueError(f"{key} must be an integer, got {raw[key]!r}") from None
    if cfg["max_symbols"] <= 0:
        raise ValueError(f"max_symbols must be > 0 in {path}")
    return cfg


def _zipf_chunks(n: int, expon: float, chunk: int) -> Iterator[np.ndarray]:
    # exp(-e*log(i)) / exp(-e*log(n)); log(n) is taken from the first chunk so i == n gives exactly 1
    log_n = None
    for hi in range(n, 0, -chunk):
        lo = max(hi - chunk, 0)
        logs = np.log(np.arange(hi, lo, -1, dtype=np.float64))
        if log_n is None:
            log_n = logs[0]
        yield np.exp(expon * (log_n - logs)).astype(np.int64)


def zipf_counts(n: int, exponent: float, chunk: int = ZIPF_CHUNK) -> Iterator[np.ndarray]:
    """Return int64 chunks of floor((n / i) ** exponent) for i = n..1, non-decreasing.

    Arguments are checked before any chunk is produced.
    """
    if n < 0:
        raise ValueError(f"count must be >= 0, got {n}")
    if not math.isfinite(exponent) or exponent < 0:
        raise ValueError(f"exponent must be finite and >= 0, got {exponent}")
    if n == 0:
        return iter(())
    # the exponent is single precision, as in the original generator
    expon = float(np.float32(exponent))
    if expon * math.log(n) >= 63 * math.log(2):
        raise ValueError("largest count (n ** exponent) does not fit in 64 bits")
    return _zipf_chunks(n, expon, chunk)
