# scripts/generate_data.py

import argparse
import os
from data.generator import generate_multiple_instances
from data.instance import write_instance


def main(argv=None):
    parser = argparse.ArgumentParser(description="Write random bin packing instances.")
    parser.add_argument("--out-dir", default="instances")
    parser.add_argument("--count", type=int, default=10)
    parser.add_argument("--num-items", type=int, default=20)
    parser.add_argument("--capacity", type=int, default=100)
    parser.add_argument("--min-weight", type=int, default=10)
    parser.add_argument("--max-weight", type=int, default=60)
    parser.add_argument("--seed", type=int, default=None)
    args = parser.parse_args(argv)

    # 1) Generate random instances
    instances = generate_multiple_instances(
        count=args.count,
        seed=args.seed,
        num_items=args.num_items,
        bin_capacity=args.capacity,
        min_weight=args.min_weight,
        max_weight=args.max_weight
    )

    # 2) Save them in the solver's text format
    os.makedirs(args.out_dir, exist_ok=True)
    for idx, inst in enumerate(instances):
        write_instance(inst, os.path.join(args.out_dir, f"instance_{idx:03d}.txt"))
    print(f"Saved {len(instances)} instances to {args.out_dir}")

if __name__=="__main__":
    main()
