# solver/reporter.py

import math

from .errors import SolutionError
from .pattern_pool import pattern_weight


def build_bins(values, pool, epsilon=1e-6):
    """
    Turn integer master values into bins.
    values: value of master variable j, aligned with pool pattern j
    pool: PatternPool

    A variable with value k >= 1 - epsilon yields k identical bins.
    Returns a list of bins, each a sorted list of 0-based item indices.
    """
    if len(values) != len(pool):
        raise ValueError(f"got {len(values)} values for {len(pool)} patterns")
    bins = []
    for j, val in enumerate(values):
        if val < 1.0 - epsilon:
            continue
        copies = int(math.floor(val + epsilon))
        items = pool.items_of(j)
        for _ in range(copies):
            bins.append(list(items))
    return bins


def check_bins(bins, instance):
    """Raise SolutionError unless every bin fits and every item is packed exactly once."""
    n = len(instance.weights)
    seen = [0]*n
    for b, items in enumerate(bins):
        load = sum(instance.weights[i] for i in items)
        if load > instance.bin_capacity:
            raise SolutionError(f"bin {b+1} holds {load} > capacity {instance.bin_capacity}")
        for i in items:
            seen[i] += 1
    missing = [i+1 for i, c in enumerate(seen) if c == 0]
    repeated = [i+1 for i, c in enumerate(seen) if c > 1]
    if missing:
        raise SolutionError(f"items not packed: {missing}")
    if repeated:
        raise SolutionError(f"items packed more than once: {repeated}")


def format_report(result):
    """Human readable report with 1-based item indices."""
    lines = [f"Solution status: {result.solver_status}", ""]
    lines.append(f"Best solution uses {result.num_bins} bins")
    for b, items in enumerate(result.bins, start=1):
        lines.append(f"Bin[{b}] = " + " ".join(str(i+1) for i in items))
    return "\n".join(lines)


def format_master_debug(iteration, lp_obj, values, duals):
    lines = ["", f"Iteration {iteration}: using {lp_obj:g} bins", ""]
    for j, val in enumerate(values):
        if val > 0:
            lines.append(f"  Lambda{j} = {val:g}")
    lines.append("")
    for i, d in enumerate(duals):
        lines.append(f"  Fill{i} = {d:g}")
    return "\n".join(lines)


def describe_pattern(pattern, weights):
    items = [i+1 for i, used in enumerate(pattern) if used]
    return f"items={items} load={pattern_weight(pattern, weights)}"
