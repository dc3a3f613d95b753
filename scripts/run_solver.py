# scripts/run_solver.py

import argparse
import sys

from data.instance import load_instance
from solver.bin_packing_solver import BinPackingCGSolver, CONVERGED
from solver.column_generation import EPSILON, PROFIT_SCALE
from solver.errors import InputError, InfeasibleMasterError, OracleError, SolutionError
from solver.logger import SolverLogger
from solver.reporter import format_report

EXIT_CODES = {
    InputError: 2,
    InfeasibleMasterError: 3,
    OracleError: 4,
    SolutionError: 5,
}


def build_parser():
    parser = argparse.ArgumentParser(
        description="Solve a one-dimensional bin packing instance by column generation.")
    parser.add_argument("instance", help="instance file: item count, bin capacity, then the weights")
    parser.add_argument("--ilp-pricing", action="store_true",
                        help="solve the pricing knapsack with Gurobi instead of dynamic programming")
    parser.add_argument("--epsilon", type=float, default=EPSILON)
    parser.add_argument("--profit-scale", type=float, default=PROFIT_SCALE)
    parser.add_argument("--max-iterations", type=int, default=None)
    parser.add_argument("--time-limit", type=float, default=None,
                        help="seconds allowed for column generation")
    parser.add_argument("--mip-time-limit", type=float, default=None,
                        help="seconds allowed for the final integer solve")
    parser.add_argument("--log-file", default=None, help="write a CSV event log")
    parser.add_argument("--debug", action="store_true",
                        help="print master values and duals at every iteration")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    logger = SolverLogger(args.log_file) if args.log_file else None
    try:
        inst = load_instance(args.instance)
        solver = BinPackingCGSolver.from_instance(
            inst,
            logger=logger,
            use_ilp_pricing=args.ilp_pricing,
            epsilon=args.epsilon,
            profit_scale=args.profit_scale,
            max_iterations=args.max_iterations,
            time_limit=args.time_limit,
            mip_time_limit=args.mip_time_limit,
            debug=args.debug,
        )
        result = solver.solve()
    except (InputError, InfeasibleMasterError, OracleError, SolutionError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_CODES[type(e)]
    print(format_report(result))
    if result.status != CONVERGED:
        print(f"Column generation stopped early: {result.status}", file=sys.stderr)
    return 0


if __name__=="__main__":
    sys.exit(main())
