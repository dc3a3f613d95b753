# scripts/compare_pricing.py

import argparse
import glob
import os
from data.instance import load_instance
from evaluation.evaluate_solver import evaluate_pricing
from evaluation.metrics import summarize_csv_performance

def main(argv=None):
    parser = argparse.ArgumentParser(description="Compare DP and ILP pricing on a set of instances.")
    parser.add_argument("--instance-dir", default="instances")
    parser.add_argument("--output-csv", default="pricing_comparison.csv")
    args = parser.parse_args(argv)

    # load test instances
    paths = sorted(glob.glob(os.path.join(args.instance_dir, "*.txt")))
    instances = [load_instance(p) for p in paths]

    backends = {
        "dp": False,
        "ilp": True
    }

    # evaluate
    evaluate_pricing(instances, backends, output_csv=args.output_csv)
    for name, stats in summarize_csv_performance(args.output_csv).items():
        print(f"{name}: avg_time={stats['avg_time']:.3f}s avg_iterations={stats['avg_iterations']:.1f} "
              f"avg_bins={stats['avg_bins']:.2f} max_gap={stats['max_gap']}")
    print(f"Evaluation done. See {args.output_csv}")

if __name__=="__main__":
    main()
