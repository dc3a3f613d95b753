# data/generator.py

import random

from data.instance import make_instance


def generate_random_instance(num_items, bin_capacity, min_weight=1, max_weight=None, seed=None):
    if seed is not None:
        random.seed(seed)
    if max_weight is None:
        max_weight = bin_capacity
    weights = []
    for i in range(num_items):
        w = random.randint(min_weight, max_weight)
        # ensure w <= bin_capacity
        w = min(w, bin_capacity)
        weights.append(w)
    return make_instance(bin_capacity, weights)


def generate_multiple_instances(count=10, seed=None, **kwargs):
    if seed is not None:
        random.seed(seed)
    instances = []
    for i in range(count):
        inst = generate_random_instance(**kwargs)
        instances.append(inst)
    return instances
