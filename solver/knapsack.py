# solver/knapsack.py

import math

import gurobipy as gp
from gurobipy import GRB

from .errors import OracleError


def _check_knapsack_input(profits, weights, capacity):
    if capacity <= 0:
        raise OracleError(f"knapsack capacity must be positive, got {capacity}")
    if len(profits) != len(weights):
        raise OracleError(f"got {len(profits)} profits for {len(weights)} weights")
    if len(weights) > 0 and all(w > capacity for w in weights):
        raise OracleError("every item is heavier than the knapsack capacity")


class DPKnapsackOracle:
    """
    Exact 0/1 knapsack by dynamic programming over the (integer) capacity.

    dp[c] = best profit achievable with capacity c using the items seen so far.
    keep[i][c] records whether item i was taken to reach dp[c]; the selection
    is rebuilt from the last item backwards. An item is only taken when it
    strictly improves dp[c], so among equal-profit selections the one using
    lower-indexed items is returned.
    """

    name = "dp"

    def solve(self, profits, weights, capacity):
        """
        profits: list of non-negative integer profits
        weights: list of integer weights
        capacity: bin capacity (floored to an integer)

        Returns: (best_profit, selection) where selection[i] is True if item i is packed.
        """
        _check_knapsack_input(profits, weights, capacity)
        for w in weights:
            if float(w) != int(w):
                raise OracleError(f"dynamic programming needs integral weights, got {w}")
        C = int(math.floor(capacity))
        n = len(weights)
        dp = [0]*(C+1)
        keep = []
        for i in range(n):
            w_i = int(weights[i])
            p_i = profits[i]
            taken = bytearray(C+1)
            if p_i > 0 and w_i <= C:
                for c in range(C, w_i - 1, -1):
                    val = dp[c - w_i] + p_i
                    if val > dp[c]:
                        dp[c] = val
                        taken[c] = 1
            keep.append(taken)

        selection = [False]*n
        c = C
        for i in range(n - 1, -1, -1):
            if keep[i][c]:
                selection[i] = True
                c -= int(weights[i])
        return dp[C], selection


class GurobiKnapsackOracle:
    """
    Exact 0/1 knapsack as a binary ILP:
      max sum(profits[i]*u_i)
      subject to sum(weights[i]*u_i) <= capacity
                u_i in {0, 1}
    """

    name = "ilp"

    def solve(self, profits, weights, capacity):
        _check_knapsack_input(profits, weights, capacity)
        n = len(weights)
        m = None
        try:
            m = gp.Model()
            m.Params.OutputFlag = 0
            u_vars = []
            for i in range(n):
                var = m.addVar(vtype=GRB.BINARY, obj=profits[i], name=f"u_{i}")
                u_vars.append(var)
            m.addConstr(gp.quicksum(weights[i]*u_vars[i] for i in range(n)) <= capacity,
                        name="capacity")
            m.ModelSense = GRB.MAXIMIZE
            # integer profits can be large after scaling
            m.Params.MIPGap = 0.0
            m.Params.MIPGapAbs = 0.5
            m.optimize()
            if m.Status != GRB.OPTIMAL:
                raise OracleError(f"knapsack model ended with Gurobi status {m.Status}")
            selection = [u.X > 0.5 for u in u_vars]
        except gp.GurobiError as e:
            raise OracleError(f"Gurobi error in pricing: {e}") from e
        finally:
            if m is not None:
                m.dispose()
        best = sum(p for p, used in zip(profits, selection) if used)
        return best, selection


def make_oracle(use_ilp=False):
    if use_ilp:
        return GurobiKnapsackOracle()
    return DPKnapsackOracle()
