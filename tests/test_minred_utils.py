import random
from fractions import Fraction

import numpy as np
import pytest

from minred_utils import (
    calculate_minimum_redundancy,
    code_cost,
    code_stats,
    compute_lengths,
    entropy_bits,
    heap_code_lengths,
    is_complete_code,
    kraft_sum,
)


def random_freqs(rng, n, hi=1000, lo=0):
    return sorted(rng.randint(lo, hi) for _ in range(n))


def test_empty_input():
    assert compute_lengths([]) == []


def test_single_symbol():
    assert compute_lengths([42]) == [0]


def test_two_symbols():
    assert compute_lengths([5, 7]) == [1, 1]


def test_four_equal():
    assert compute_lengths([1, 1, 1, 1]) == [2, 2, 2, 2]


def test_three_symbols():
    lengths = compute_lengths([1, 2, 3])
    assert sorted(lengths) == [1, 2, 2]
    assert lengths == [2, 2, 1]
    assert kraft_sum(lengths) == 1


def test_five_equal():
    assert compute_lengths([1, 1, 1, 1, 1]) == [3, 3, 2, 2, 2]


def test_ties_prefer_leaf():
    # preferring the internal node on ties would give [3, 3, 2, 1] at the same cost
    assert compute_lengths([1, 1, 2, 2]) == [2, 2, 2, 2]


def test_fibonacci_weights_give_deepest_tree():
    freqs = [1, 1, 2, 3, 5, 8, 13, 21]
    lengths = compute_lengths(freqs)
    assert max(lengths) == len(freqs) - 1
    assert kraft_sum(lengths) == 1


def test_in_place_overwrites_buffer():
    buf = [1, 2, 3]
    assert calculate_minimum_redundancy(buf) is None
    assert buf == [2, 2, 1]


def test_compute_lengths_leaves_input_untouched():
    freqs = [1, 1, 2, 3, 5]
    before = list(freqs)
    compute_lengths(freqs)
    assert freqs == before


def test_numpy_buffer_matches_list():
    freqs = [0, 1, 1, 4, 9, 9, 20, 50]
    arr = np.array(freqs, dtype=np.int64)
    calculate_minimum_redundancy(arr)
    assert arr.tolist() == compute_lengths(freqs)


def test_zero_frequencies():
    lengths = compute_lengths([0, 0, 0, 5])
    assert kraft_sum(lengths) == 1
    assert lengths[-1] == 1


@pytest.mark.parametrize("seed", range(20))
def test_random_inputs_kraft_and_monotone(seed):
    rng = random.Random(seed)
    freqs = random_freqs(rng, rng.randint(2, 300))
    if sum(freqs) == 0:
        freqs[-1] = 1
    lengths = compute_lengths(freqs)
    assert len(lengths) == len(freqs)
    assert all(l >= 1 for l in lengths)
    assert kraft_sum(lengths) == Fraction(1)
    assert all(lengths[i] >= lengths[i + 1] for i in range(len(lengths) - 1))


@pytest.mark.parametrize("seed", range(20))
def test_random_inputs_within_shannon_bound(seed):
    rng = random.Random(1000 + seed)
    freqs = random_freqs(rng, rng.randint(2, 300), hi=10 ** rng.randint(1, 6), lo=1)
    stats = code_stats(freqs, compute_lengths(freqs))
    assert stats.entropy - 1e-9 <= stats.average < stats.entropy + 1


@pytest.mark.parametrize("seed", range(20))
def test_cost_matches_heap_reference(seed):
    rng = random.Random(2000 + seed)
    freqs = random_freqs(rng, rng.randint(1, 200), hi=rng.choice([3, 50, 100000]))
    assert code_cost(freqs, compute_lengths(freqs)) == code_cost(freqs, heap_code_lengths(freqs))


def test_deterministic():
    rng = random.Random(7)
    freqs = random_freqs(rng, 500)
    assert compute_lengths(freqs) == compute_lengths(freqs)


def test_heap_reference_small_cases():
    assert heap_code_lengths([]) == []
    assert heap_code_lengths([3]) == [0]
    assert heap_code_lengths([5, 7]) == [1, 1]
    assert sorted(heap_code_lengths([1, 2, 3])) == [1, 2, 2]


def test_kraft_sum():
    assert kraft_sum([]) == 0
    assert kraft_sum([1, 2, 2]) == 1
    assert kraft_sum([2, 2, 2]) == Fraction(3, 4)
    assert kraft_sum([1, 1, 1]) == Fraction(3, 2)
    assert is_complete_code([1, 1])
    assert not is_complete_code([0])
    assert not is_complete_code([2, 2, 2])


def test_code_cost_length_mismatch():
    with pytest.raises(ValueError):
        code_cost([1, 2], [1])


def test_entropy_bits():
    assert entropy_bits([1, 1, 1, 1]) == pytest.approx(2.0)
    assert entropy_bits([0, 0, 4]) == 0.0
    assert entropy_bits([]) == 0.0


def test_code_stats():
    stats = code_stats([1, 2, 3], [2, 2, 1])
    assert stats.n == 3
    assert stats.total == 6
    assert stats.cost == 9
    assert stats.average == pytest.approx(1.5)
    assert stats.entropy == pytest.approx(1.459148, abs=1e-6)
    assert stats.inefficiency == pytest.approx(100 * 1.5 / stats.entropy - 100)
    assert stats.max_length == 2


def test_code_stats_single_symbol_has_no_inefficiency():
    stats = code_stats([7], [0])
    assert stats.entropy == 0.0
    assert stats.inefficiency is None


def test_code_stats_rejects_zero_total():
    with pytest.raises(ValueError):
        code_stats([0, 0], [1, 1])
