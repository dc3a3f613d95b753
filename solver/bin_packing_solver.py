# solver/bin_packing_solver.py

import time
from collections import namedtuple

from data.instance import make_instance

from .column_generation import ColumnGenerator, EPSILON, PROFIT_SCALE
from .errors import SolutionError
from .master_problem import MasterProblem
from .pattern_pool import PatternPool
from .reporter import build_bins, check_bins, describe_pattern, format_master_debug

SolveResult = namedtuple("SolveResult", [
    "bins", "num_bins", "objective", "lp_bound", "iterations", "num_patterns",
    "status", "solver_status", "values", "patterns", "runtime",
])
"""
bins: list of bins, each a sorted list of 0-based item indices
objective: optimal (or best found) value of the integer master
lp_bound: objective of the last master relaxation
iterations: number of patterns added by column generation
status: 'converged', 'iteration_limit', 'time_limit' or 'repeated'
solver_status: Gurobi status of the integer master, e.g. 'Optimal'
values: integer master values, aligned with patterns
"""

CONVERGED = "converged"
ITERATION_LIMIT = "iteration_limit"
TIME_LIMIT = "time_limit"
REPEATED = "repeated"


class BinPackingCGSolver:
    """
    Column generation for one-dimensional bin packing using Gurobi.
    Alternates between the master relaxation and the knapsack pricing problem
    until no pattern has negative reduced cost, then solves the master with
    integer variables over the generated patterns.
    """

    def __init__(self, bin_capacity, item_weights, logger=None, use_ilp_pricing=False,
                 epsilon=EPSILON, profit_scale=PROFIT_SCALE, max_iterations=None,
                 time_limit=None, mip_time_limit=None, debug=False, oracle=None):
        """
        bin_capacity: capacity of every bin
        item_weights: list of item weights
        logger: optional SolverLogger for structured logging
        use_ilp_pricing: if True, pricing uses a Gurobi ILP for the knapsack; else DP.
        max_iterations, time_limit: optional budgets for the generation loop
        mip_time_limit: optional Gurobi time limit for the final integer solve
        debug: print master values and duals after every relaxation
        """
        self.instance = make_instance(bin_capacity, item_weights)
        self.n = len(self.instance.weights)
        self.logger = logger
        self.use_ilp_pricing = use_ilp_pricing
        self.epsilon = epsilon
        self.profit_scale = profit_scale
        self.max_iterations = max_iterations
        self.time_limit = time_limit
        self.mip_time_limit = mip_time_limit
        self.debug = debug
        self.oracle = oracle

        self.pool = None
        self.iterations = 0
        self.lp_obj = None

    @classmethod
    def from_instance(cls, instance, **kwargs):
        return cls(instance.bin_capacity, instance.weights, **kwargs)

    def solve(self):
        """
        Public entry point. Runs column generation, then the integer master.
        Returns a SolveResult.
        """
        opened_here = False
        if self.logger and self.logger.file_handle is None:
            self.logger.open()
            opened_here = True
        try:
            return self._solve()
        finally:
            if opened_here:
                self.logger.close()

    def _log(self, event, objective, details=""):
        if self.logger:
            self.logger.log_event(event, self.iterations, objective, details)

    def _solve(self):
        start_t = time.time()
        self._log("SolverStart", 0, f"items={self.n}, capacity={self.instance.bin_capacity}")

        # initial patterns: one item per bin
        self.pool = PatternPool.seed_singletons(self.n)
        self.iterations = 0
        master = MasterProblem(self.instance, mip_time_limit=self.mip_time_limit)
        generator = ColumnGenerator(self.instance.weights, self.instance.bin_capacity,
                                    use_ilp=self.use_ilp_pricing, epsilon=self.epsilon,
                                    profit_scale=self.profit_scale, oracle=self.oracle)
        try:
            master.initialize()
            status = self._generate_columns(master, generator, start_t)
            self.pool.freeze()

            obj, values, solver_status = master.finalize_integer()
            self._log("IntegerSolved", obj, f"status={solver_status}")
        finally:
            master.close()

        bins = build_bins(values, self.pool, self.epsilon)
        check_bins(bins, self.instance)
        if abs(len(bins) - obj) > self.epsilon:
            raise SolutionError(f"{len(bins)} bins emitted for integer objective {obj}")

        runtime = time.time() - start_t
        self._log("SolverEnd", obj, f"bins={len(bins)}, status={status}")
        return SolveResult(
            bins=bins,
            num_bins=len(bins),
            objective=obj,
            lp_bound=self.lp_obj,
            iterations=self.iterations,
            num_patterns=len(self.pool),
            status=status,
            solver_status=solver_status,
            values=values,
            patterns=list(self.pool),
            runtime=runtime,
        )

    def _generate_columns(self, master, generator, start_t):
        """
        Loop until pricing finds no improving pattern or a budget is exhausted.
        Returns the termination reason.
        """
        while True:
            lp_obj, values, duals = master.solve_relaxation()
            self.lp_obj = lp_obj
            self._log("MasterSolved", lp_obj, f"patterns={len(self.pool)}")
            if self.debug:
                dump = format_master_debug(self.iterations, lp_obj, values, duals)
                print(dump)
                self._log("MasterDebug", lp_obj, " ".join(dump.split()))

            result = generator.generate_pattern(duals)
            if self.debug:
                print(f"Reduced cost is {result.reduced_cost:.6f}")
                self._log("PricingDebug", lp_obj, f"reduced_cost={result.reduced_cost:.6f}")
            if result.pattern is None:
                self._log("Converged", lp_obj, f"reduced_cost={result.reduced_cost:.6g}")
                return CONVERGED

            if result.pattern in self.pool:
                # already priced at a non-negative reduced cost by the LP solver
                self._log("Stopped", lp_obj, f"reason={REPEATED}")
                return REPEATED
            if self.max_iterations is not None and self.iterations >= self.max_iterations:
                self._log("Stopped", lp_obj, f"reason={ITERATION_LIMIT}")
                return ITERATION_LIMIT
            if self.time_limit is not None and time.time() - start_t >= self.time_limit:
                self._log("Stopped", lp_obj, f"reason={TIME_LIMIT}")
                return TIME_LIMIT

            j = self.pool.append(result.pattern)
            k = master.add_pattern(result.pattern)
            if j != k:
                raise RuntimeError(f"pattern {j} stored as master variable {k}")
            self.iterations += 1
            self._log("PatternAdded", lp_obj,
                      f"reduced_cost={result.reduced_cost:.6g}, "
                      + describe_pattern(result.pattern, self.instance.weights))
