# solver/column_generation.py

import math
from collections import namedtuple

from .knapsack import make_oracle

EPSILON = 1e-6
PROFIT_SCALE = 1e6

PricingResult = namedtuple("PricingResult", ["pattern", "reduced_cost"])
"""
pattern: tuple of n booleans, or None if no improving pattern exists
reduced_cost: 1 - (best knapsack profit) for the priced selection
"""


def duals_to_profits(duals, scale=PROFIT_SCALE):
    """
    Knapsack profit of each item: the positive part of its dual price,
    multiplied by scale and truncated to an integer.
    Items with zero or negative dual get profit 0.
    """
    profits = []
    for d in duals:
        if d > 0:
            profits.append(int(math.floor(scale * d)))
        else:
            profits.append(0)
    return profits


def reduced_cost_of(best_profit, scale=PROFIT_SCALE):
    """Every pattern costs one bin, so its reduced cost is 1 - sum of covered duals."""
    return 1.0 - best_profit / scale


class ColumnGenerator:
    """
    Handles the pricing subproblem for bin packing,
    generating patterns (columns) given the dual prices of the covering constraints.

    Example usage:
      generator = ColumnGenerator(weights, bin_capacity)
      result = generator.generate_pattern(duals)
      if result.pattern is not None:
          # negative reduced cost => add pattern
    """

    def __init__(self, weights, bin_capacity, use_ilp=False, epsilon=EPSILON,
                 profit_scale=PROFIT_SCALE, oracle=None):
        """
        weights: list of item weights
        bin_capacity: capacity of every bin
        use_ilp: if True, use a Gurobi ILP for the knapsack; else dynamic programming.
        oracle: explicit knapsack oracle, overrides use_ilp.
        """
        self.weights = list(weights)
        self.bin_capacity = bin_capacity
        self.n = len(self.weights)
        self.epsilon = epsilon
        self.profit_scale = profit_scale
        self.oracle = oracle if oracle is not None else make_oracle(use_ilp)

    def generate_pattern(self, duals):
        """
        Solve the pricing subproblem to find a new pattern with negative reduced cost.
        duals: list of dual prices, one per item covering constraint.

        Returns a PricingResult. The pattern is None when
        reduced_cost >= -epsilon, i.e. the current pool prices out.
        """
        if len(duals) != self.n:
            raise ValueError(f"got {len(duals)} duals for {self.n} items")
        profits = duals_to_profits(duals, self.profit_scale)
        best_profit, selection = self.oracle.solve(profits, self.weights, self.bin_capacity)
        rc = reduced_cost_of(best_profit, self.profit_scale)
        if rc >= -self.epsilon:
            return PricingResult(None, rc)
        return PricingResult(tuple(bool(s) for s in selection), rc)
