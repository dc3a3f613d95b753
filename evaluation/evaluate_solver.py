# evaluation/evaluate_solver.py

import time
import csv
from solver.bin_packing_solver import BinPackingCGSolver
from evaluation.metrics import solution_metrics

FIELDNAMES = ["instance_id","pricing","time","iterations","patterns","bins","lower_bound","gap","status"]

def evaluate_pricing(instances, backends=None, output_csv="pricing_comparison.csv", **solver_kwargs):
    """
    instances: list of Instance records
    backends: dict of { backend_name: use_ilp_pricing flag }
    output_csv: path to store results
    We measure time, column generation iterations and the number of bins.
    """
    if backends is None:
        backends = {"dp": False, "ilp": True}
    results = []
    for idx, inst in enumerate(instances):
        for name, use_ilp in backends.items():
            start_t = time.time()
            solver = BinPackingCGSolver.from_instance(inst, use_ilp_pricing=use_ilp,
                                                      **solver_kwargs)
            res = solver.solve()
            end_t = time.time()
            m = solution_metrics(inst, res)
            results.append({
                "instance_id": idx,
                "pricing": name,
                "time": end_t - start_t,
                "iterations": m["iterations"],
                "patterns": m["patterns"],
                "bins": m["bins"],
                "lower_bound": m["lower_bound"],
                "gap": m["gap"],
                "status": m["status"],
            })
    # write to CSV
    with open(output_csv, "w", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=FIELDNAMES)
        writer.writeheader()
        for r in results:
            writer.writerow(r)
    return results
