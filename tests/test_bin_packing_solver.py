import csv
import math

import pytest

from data.generator import generate_random_instance
from data.instance import make_instance
from solver.bin_packing_solver import BinPackingCGSolver
from solver.errors import InfeasibleMasterError, InputError
from solver.logger import SolverLogger


def assert_valid_packing(instance, result):
    seen = sorted(i for b in result.bins for i in b)
    assert seen == list(range(len(instance.weights)))
    for b in result.bins:
        assert sum(instance.weights[i] for i in b) <= instance.bin_capacity
    assert result.num_bins == len(result.bins)
    assert result.num_bins == pytest.approx(result.objective)


def test_scenario_pairs_of_unit_items():
    solver = BinPackingCGSolver(2, [1, 1, 1, 1])
    res = solver.solve()
    assert_valid_packing(solver.instance, res)
    assert res.num_bins == 2
    assert all(len(b) == 2 for b in res.bins)
    assert res.status == "converged"


def test_scenario_item_exceeds_capacity():
    with pytest.raises(InputError):
        BinPackingCGSolver(4, [5])


def test_scenario_three_equal_items():
    solver = BinPackingCGSolver(6, [3, 3, 3])
    res = solver.solve()
    assert_valid_packing(solver.instance, res)
    assert res.num_bins == 2
    assert sorted(len(b) for b in res.bins) == [1, 2]


def test_scenario_items_fill_whole_bins():
    solver = BinPackingCGSolver(5, [5, 5, 5, 5])
    res = solver.solve()
    assert res.iterations == 0
    assert res.num_patterns == 4
    assert res.num_bins == 4
    assert sorted(res.bins) == [[0], [1], [2], [3]]


def test_no_pair_fits_converges_on_seed():
    solver = BinPackingCGSolver(7, [4, 5, 6])
    res = solver.solve()
    assert res.iterations == 0
    assert res.status == "converged"
    assert res.num_bins == 3
    assert res.lp_bound == pytest.approx(3.0)


def test_patterns_are_never_repeated():
    solver = BinPackingCGSolver(10, [2, 5, 4, 7, 1, 3, 8, 6, 2])
    res = solver.solve()
    assert len(set(res.patterns)) == len(res.patterns)
    assert res.num_patterns == 9 + res.iterations


@pytest.mark.parametrize("seed", [1, 2, 3])
def test_random_instances_are_packed(seed):
    inst = generate_random_instance(14, 50, min_weight=5, max_weight=35, seed=seed)
    res = BinPackingCGSolver.from_instance(inst).solve()
    assert_valid_packing(inst, res)
    assert res.num_bins >= math.ceil(sum(inst.weights) / inst.bin_capacity)
    assert res.num_bins >= math.ceil(res.lp_bound - 1e-6)
    for pat in res.patterns:
        assert sum(w for used, w in zip(pat, inst.weights) if used) <= inst.bin_capacity


def test_ilp_pricing_reaches_same_bound():
    inst = generate_random_instance(10, 30, min_weight=4, max_weight=20, seed=7)
    dp = BinPackingCGSolver.from_instance(inst).solve()
    ilp = BinPackingCGSolver.from_instance(inst, use_ilp_pricing=True).solve()
    assert_valid_packing(inst, ilp)
    assert dp.lp_bound == pytest.approx(ilp.lp_bound, abs=1e-3)


def test_equality_covering_never_reuses_a_pattern():
    # one pattern is optimal for every bin, but each bin needs its own copy
    solver = BinPackingCGSolver(4, [2]*8)
    res = solver.solve()
    assert_valid_packing(solver.instance, res)
    assert res.num_bins == 4
    assert all(v < 1.5 for v in res.values)


def test_iteration_limit_keeps_seed_solution():
    solver = BinPackingCGSolver(2, [1, 1, 1, 1], max_iterations=0)
    res = solver.solve()
    assert res.status == "iteration_limit"
    assert res.iterations == 0
    assert res.num_bins == 4


def test_iteration_limit_after_one_pattern():
    solver = BinPackingCGSolver(3, [1, 1, 1, 1, 1, 1], max_iterations=1)
    res = solver.solve()
    assert res.status == "iteration_limit"
    assert res.iterations == 1
    assert_valid_packing(solver.instance, res)


def test_time_limit_zero_stops_generation():
    solver = BinPackingCGSolver(2, [1, 1, 1, 1], time_limit=0)
    res = solver.solve()
    assert res.status == "time_limit"
    assert res.num_bins == 4


def test_logger_records_events(tmp_path):
    log_file = tmp_path / "log.csv"
    solver = BinPackingCGSolver(2, [1, 1, 1, 1], logger=SolverLogger(str(log_file)))
    solver.solve()
    with open(log_file) as f:
        rows = list(csv.DictReader(f))
    events = [r["event"] for r in rows]
    assert events[0] == "SolverStart"
    assert "MasterSolved" in events
    assert "PatternAdded" in events
    assert events[-3:] == ["Converged", "IntegerSolved", "SolverEnd"]


def test_debug_prints_master_state(capsys):
    BinPackingCGSolver(6, [3, 3, 3], debug=True).solve()
    out = capsys.readouterr().out
    assert "Fill0 = " in out
    assert "Reduced cost is" in out


class SingletonOracle:
    """Claims item 0 alone is worth two bins, a pattern the seed already holds."""

    def solve(self, profits, weights, capacity):
        selection = [False]*len(weights)
        selection[0] = True
        return 2_000_000, selection


def test_repeated_pattern_stops_generation(tmp_path):
    log_file = tmp_path / "log.csv"
    solver = BinPackingCGSolver(6, [3, 3, 3], oracle=SingletonOracle(),
                                logger=SolverLogger(str(log_file)))
    res = solver.solve()
    assert res.status == "repeated"
    assert res.iterations == 0
    assert res.num_patterns == 3
    assert_valid_packing(solver.instance, res)
    assert res.num_bins == 3
    with open(log_file) as f:
        rows = list(csv.DictReader(f))
    assert any(r["event"] == "Stopped" and r["details"] == "reason=repeated" for r in rows)


def test_mip_time_limit_run():
    solver = BinPackingCGSolver(6, [3, 3, 3], mip_time_limit=30)
    res = solver.solve()
    assert res.solver_status == "Optimal"
    assert res.num_bins == 2


def test_integer_master_failure_surfaces():
    solver = BinPackingCGSolver(2, [1, 1, 1, 1], mip_time_limit=-1)
    with pytest.raises(InfeasibleMasterError):
        solver.solve()


def test_debug_output_is_logged(tmp_path):
    log_file = tmp_path / "log.csv"
    BinPackingCGSolver(6, [3, 3, 3], debug=True, logger=SolverLogger(str(log_file))).solve()
    with open(log_file) as f:
        rows = list(csv.DictReader(f))
    master_rows = [r for r in rows if r["event"] == "MasterDebug"]
    pricing_rows = [r for r in rows if r["event"] == "PricingDebug"]
    assert master_rows and pricing_rows
    assert "Fill0 = " in master_rows[0]["details"]
    assert pricing_rows[-1]["details"].startswith("reduced_cost=")
