# evaluation/metrics.py

import csv
import math
import statistics

from solver.column_generation import EPSILON


def solution_metrics(instance, result, epsilon=EPSILON):
    """
    Quality figures of one SolveResult:
      lower_bound: ceil of the final LP objective (valid once generation converged)
      gap: bins used minus lower_bound
      fill_ratio: total item weight over total bin capacity used
    """
    lower_bound = math.ceil(result.lp_bound - epsilon)
    used_capacity = result.num_bins * instance.bin_capacity
    fill_ratio = sum(instance.weights) / used_capacity if used_capacity > 0 else 0.0
    return {
        "bins": result.num_bins,
        "lp_bound": result.lp_bound,
        "lower_bound": lower_bound,
        "gap": result.num_bins - lower_bound,
        "fill_ratio": fill_ratio,
        "patterns": result.num_patterns,
        "iterations": result.iterations,
        "status": result.status,
    }


def summarize_csv_performance(csv_file):
    """
    Reads 'pricing_comparison.csv' and computes average time, iterations, bins per pricing backend.
    """
    data = []
    with open(csv_file, "r") as f:
        reader = csv.DictReader(f)
        for row in reader:
            row["time"] = float(row["time"])
            row["iterations"] = int(row["iterations"])
            row["bins"] = int(row["bins"])
            row["gap"] = int(row["gap"])
            row["instance_id"] = int(row["instance_id"])
            data.append(row)
    # group by backend
    backends = {}
    for row in data:
        s = row["pricing"]
        if s not in backends:
            backends[s] = []
        backends[s].append(row)
    # compute stats
    results = {}
    for s, rows in backends.items():
        avg_time = statistics.mean(r["time"] for r in rows)
        avg_iterations = statistics.mean(r["iterations"] for r in rows)
        avg_bins = statistics.mean(r["bins"] for r in rows)
        max_gap = max(r["gap"] for r in rows)
        results[s] = {"avg_time":avg_time, "avg_iterations":avg_iterations,
                      "avg_bins":avg_bins, "max_gap":max_gap}
    return results
