import itertools

import pytest

from solver.errors import OracleError
from solver.knapsack import DPKnapsackOracle, GurobiKnapsackOracle, make_oracle


def brute_force(profits, weights, capacity):
    best = 0
    for sel in itertools.product([0, 1], repeat=len(weights)):
        if sum(w*s for w, s in zip(weights, sel)) <= capacity:
            best = max(best, sum(p*s for p, s in zip(profits, sel)))
    return best


CASES = [
    ([10, 40, 30, 50], [5, 4, 6, 3], 10),
    ([1, 1, 1, 1], [1, 1, 1, 1], 2),
    ([7, 0, 3, 9, 4], [3, 2, 4, 5, 1], 8),
    ([500000, 333333, 250000], [6, 4, 3], 7),
    ([5, 5], [10, 3], 9),
]


@pytest.mark.parametrize("oracle", [DPKnapsackOracle(), GurobiKnapsackOracle()],
                         ids=["dp", "ilp"])
@pytest.mark.parametrize("profits, weights, capacity", CASES)
def test_oracles_are_exact(oracle, profits, weights, capacity):
    best, selection = oracle.solve(profits, weights, capacity)
    assert best == brute_force(profits, weights, capacity)
    assert sum(w for w, s in zip(weights, selection) if s) <= capacity
    assert sum(p for p, s in zip(profits, selection) if s) == best


def test_dp_prefers_lower_indices_on_ties():
    best, selection = DPKnapsackOracle().solve([1, 1, 1, 1], [1, 1, 1, 1], 2)
    assert best == 2
    assert selection == [True, True, False, False]


def test_dp_skips_zero_profit_items():
    best, selection = DPKnapsackOracle().solve([0, 3, 0], [1, 1, 1], 3)
    assert best == 3
    assert selection == [False, True, False]


def test_dp_floors_capacity():
    best, selection = DPKnapsackOracle().solve([4, 4], [2, 2], 3.9)
    assert best == 4
    assert selection.count(True) == 1


@pytest.mark.parametrize("oracle", [DPKnapsackOracle(), GurobiKnapsackOracle()],
                         ids=["dp", "ilp"])
def test_oracle_errors(oracle):
    with pytest.raises(OracleError):
        oracle.solve([1, 1], [1, 1], 0)
    with pytest.raises(OracleError):
        oracle.solve([1], [1, 1], 5)
    with pytest.raises(OracleError):
        oracle.solve([1, 1], [6, 7], 5)


def test_dp_needs_integral_weights():
    with pytest.raises(OracleError):
        DPKnapsackOracle().solve([1, 1], [1.5, 2], 5)


def test_make_oracle():
    assert isinstance(make_oracle(), DPKnapsackOracle)
    assert isinstance(make_oracle(use_ilp=True), GurobiKnapsackOracle)
