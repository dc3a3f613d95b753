# solver/master_problem.py

import gurobipy as gp
from gurobipy import GRB

from .errors import InfeasibleMasterError

STATUS_NAMES = {
    GRB.OPTIMAL: "Optimal",
    GRB.INFEASIBLE: "Infeasible",
    GRB.INF_OR_UNBD: "InfeasibleOrUnbounded",
    GRB.UNBOUNDED: "Unbounded",
    GRB.ITERATION_LIMIT: "IterationLimit",
    GRB.TIME_LIMIT: "TimeLimit",
    GRB.INTERRUPTED: "Interrupted",
    GRB.SUBOPTIMAL: "Suboptimal",
}


def status_name(status):
    return STATUS_NAMES.get(status, f"Status{status}")


class MasterProblem:
    """
    Set-partitioning master problem over a growing set of patterns:

        minimize   sum_j L_j
        subject to sum_j pattern_j[i] * L_j == 1    for every item i
                   L_j >= 0

    The Gurobi model is built once; every new pattern enters as one new
    variable/column. Variable j always belongs to pattern j of the pool.
    """

    def __init__(self, instance, mip_time_limit=None):
        self.instance = instance
        self.n = len(instance.weights)
        self.mip_time_limit = mip_time_limit
        self.model = None
        self.lambdas = []
        self.fill = []
        self.is_integer = False

    def initialize(self):
        """
        One covering constraint per item and one singleton variable per item
        (variable i only appears in constraint i).
        """
        try:
            m = gp.Model("master")
            self.model = m
            m.Params.OutputFlag = 0  # silent
            for i in range(self.n):
                var = m.addVar(lb=0, ub=GRB.INFINITY, vtype=GRB.CONTINUOUS, obj=1.0, name=f"L_{i}")
                self.lambdas.append(var)
            for i in range(self.n):
                c = m.addConstr(self.lambdas[i] == 1, name=f"fill_{i}")
                self.fill.append(c)
            m.ModelSense = GRB.MINIMIZE
        except gp.GurobiError as e:
            raise InfeasibleMasterError(f"Gurobi error building master problem: {e}") from e
        return self

    @property
    def num_variables(self):
        return len(self.lambdas)

    def solve_relaxation(self):
        """
        Solve the current LP.
        Returns: (obj, values, duals) where duals[i] is the dual price of item i's constraint.
        """
        if self.is_integer:
            raise RuntimeError("master problem already restricted to integers")
        m = self.model
        try:
            m.optimize()
            if m.Status != GRB.OPTIMAL:
                raise InfeasibleMasterError(
                    f"master relaxation ended with status {status_name(m.Status)}")
            values = [v.X for v in self.lambdas]
            duals = [c.Pi for c in self.fill]
            return m.ObjVal, values, duals
        except gp.GurobiError as e:
            raise InfeasibleMasterError(f"Gurobi error solving master relaxation: {e}") from e

    def add_pattern(self, pattern):
        """
        Append a continuous variable with cost 1 and coefficient pattern[i]
        in the covering constraint of item i. Returns the variable index.
        """
        if self.is_integer:
            raise RuntimeError("cannot add columns after integer restriction")
        if len(pattern) != self.n:
            raise ValueError(f"pattern has {len(pattern)} entries, expected {self.n}")
        constrs = [self.fill[i] for i, used in enumerate(pattern) if used]
        j = len(self.lambdas)
        try:
            col = gp.Column([1.0]*len(constrs), constrs)
            var = self.model.addVar(lb=0, ub=GRB.INFINITY, vtype=GRB.CONTINUOUS, obj=1.0,
                                    column=col, name=f"L_{j}")
        except gp.GurobiError as e:
            raise InfeasibleMasterError(f"Gurobi error adding pattern column: {e}") from e
        self.lambdas.append(var)
        return j

    def finalize_integer(self):
        """
        Restrict every variable to non-negative integers and re-solve.
        Returns: (obj, values, status_name). With a time limit the best
        incumbent is accepted.
        """
        m = self.model
        self.is_integer = True
        try:
            for v in self.lambdas:
                v.VType = GRB.INTEGER
            if self.mip_time_limit is not None:
                m.Params.TimeLimit = self.mip_time_limit
            m.optimize()
            if m.Status in (GRB.INFEASIBLE, GRB.INF_OR_UNBD, GRB.UNBOUNDED) or m.SolCount == 0:
                raise InfeasibleMasterError(
                    f"integer master ended with status {status_name(m.Status)}")
            values = [v.X for v in self.lambdas]
            return m.ObjVal, values, status_name(m.Status)
        except gp.GurobiError as e:
            raise InfeasibleMasterError(f"Gurobi error solving integer master: {e}") from e

    def close(self):
        if self.model is not None:
            self.model.dispose()
            self.model = None
