#!/usr/bin/env python3
import heapq
from fractions import Fraction
from typing import List, MutableSequence, NamedTuple, Optional, Sequence

import numpy as np


def calculate_minimum_redundancy(A: MutableSequence[int]) -> None:
    """Overwrite non-decreasing frequencies in A with minimum-redundancy codeword lengths.

    Moffat & Katajainen, "In-place calculation of minimum-redundancy codes"
    (WADS 1995). The same storage is read three ways: weights and parent
    pointers, then internal-node depths, then leaf depths.
    """
    n = len(A)
    if n == 0:
        return
    if n == 1:
        A[0] = 0
        return

    # first pass, left to right: A[0..nxt-1] become parent pointers
    A[0] += A[1]
    root = 0
    leaf = 2
    for nxt in range(1, n - 1):
        # first item of the pair; an internal node wins only on strict <
        if leaf >= n or A[root] < A[leaf]:
            A[nxt] = A[root]
            A[root] = nxt
            root += 1
        else:
            A[nxt] = A[leaf]
            leaf += 1

        # second item
        if leaf >= n or (root < nxt and A[root] < A[leaf]):
            A[nxt] += A[root]
            A[root] = nxt
            root += 1
        else:
            A[nxt] += A[leaf]
            leaf += 1

    # second pass, right to left: parent pointers become internal depths
    A[n - 2] = 0
    for nxt in range(n - 3, -1, -1):
        A[nxt] = A[A[nxt]] + 1

    # third pass, right to left: internal depths become leaf depths
    avbl = 1
    used = 0
    dpth = 0
    root = n - 2
    nxt = n - 1
    while avbl > 0:
        while root >= 0 and A[root] == dpth:
            used += 1
            root -= 1
        while avbl > used:
            A[nxt] = dpth
            nxt -= 1
            avbl -= 1
        avbl = 2 * used
        dpth += 1
        used = 0


def compute_lengths(freqs: Sequence[int]) -> List[int]:
    lengths = [int(f) for f in freqs]
    calculate_minimum_redundancy(lengths)
    return lengths


def heap_code_lengths(freqs: Sequence[int]) -> List[int]:
    """Reference Huffman lengths built with an explicit heap-ordered tree.

    Every symbol takes part, zero weights included, so the total cost is
    comparable with calculate_minimum_redundancy. Ties may be broken
    differently, so individual lengths can differ while the cost agrees.
    """
    n = len(freqs)
    if n == 0:
        return []
    if n == 1:
        return [0]

    heap = [(int(f), sym, sym, None, None) for sym, f in enumerate(freqs)]
    heapq.heapify(heap)
    order = n
    while len(heap) > 1:
        left = heapq.heappop(heap)
        right = heapq.heappop(heap)
        heapq.heappush(heap, (left[0] + right[0], order, -1, left, right))
        order += 1

    lengths = [0] * n

    def walk(node, depth):
        _, _, sym, l, r = node
        if sym >= 0:
            lengths[sym] = depth
            return
        walk(l, depth + 1)
        walk(r, depth + 1)

    walk(heap[0], 0)
    return lengths


def kraft_sum(lengths: Sequence[int]) -> Fraction:
    if not lengths:
        return Fraction(0)
    top = max(lengths)
    return Fraction(sum(1 << (top - l) for l in lengths), 1 << top)


def is_complete_code(lengths: Sequence[int]) -> bool:
    return len(lengths) >= 2 and kraft_sum(lengths) == 1


def code_cost(freqs: Sequence[int], lengths: Sequence[int]) -> int:
    if len(freqs) != len(lengths):
        raise ValueError("freqs/lengths length mismatch.")
    return sum(int(f) * int(l) for f, l in zip(freqs, lengths))


def entropy_bits(freqs: Sequence[int]) -> float:
    arr = np.asarray(freqs, dtype=np.float64)
    total = arr.sum()
    if arr.size == 0 or total <= 0:
        return 0.0
    probs = arr[arr > 0] / total
    return 0.0 - float((probs * np.log2(probs)).sum())


class CodeStats(NamedTuple):
    n: int
    total: int
    cost: int
    entropy: float
    average: float
    inefficiency: Optional[float]
    max_length: int


def code_stats(freqs: Sequence[int], lengths: Sequence[int]) -> CodeStats:
    total = sum(int(f) for f in freqs)
    if total <= 0:
        raise ValueError("Sum of frequencies must be positive.")
    cost = code_cost(freqs, lengths)
    ent = entropy_bits(freqs)
    average = cost / total
    inefficiency = 100.0 * average / ent - 100.0 if ent > 0.0 else None
    return CodeStats(
        n=len(freqs),
        total=total,
        cost=cost,
        entropy=ent,
        average=average,
        inefficiency=inefficiency,
        max_length=max(lengths, default=0),
    )
