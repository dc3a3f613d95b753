# data/instance.py

from collections import namedtuple

from solver.errors import InputError

Instance = namedtuple("Instance", ["bin_capacity", "weights"])
"""
bin_capacity: capacity shared by every bin
weights: tuple of item weights, item i has weight weights[i]
"""


def make_instance(bin_capacity, weights):
    """
    Validate and build an Instance. Every weight must be positive and fit
    into a single bin, otherwise no packing exists.
    """
    if bin_capacity <= 0:
        raise InputError(f"bin capacity must be positive, got {bin_capacity}")
    weights = tuple(weights)
    if len(weights) == 0:
        raise InputError("instance has no items")
    for i, w in enumerate(weights):
        if w <= 0:
            raise InputError(f"item {i+1} has non-positive weight {w}")
        if w > bin_capacity:
            raise InputError(f"item {i+1} of weight {w} exceeds bin capacity {bin_capacity}")
    return Instance(bin_capacity=bin_capacity, weights=weights)


def _number(token):
    value = float(token)
    if value.is_integer():
        return int(value)
    return value


def parse_instance(text):
    """
    Parse '<n> <capacity> <w_1> ... <w_n>' (any whitespace). Tokens after the
    n-th weight are ignored.
    """
    tokens = text.split()
    if len(tokens) < 2:
        raise InputError("expected an item count and a bin capacity")
    try:
        count = int(tokens[0])
    except ValueError:
        raise InputError(f"invalid item count {tokens[0]!r}") from None
    if count <= 0:
        raise InputError(f"item count must be positive, got {count}")
    try:
        capacity = _number(tokens[1])
    except ValueError:
        raise InputError(f"invalid bin capacity {tokens[1]!r}") from None
    weight_tokens = tokens[2:2 + count]
    if len(weight_tokens) < count:
        raise InputError(f"expected {count} weights, found {len(weight_tokens)}")
    weights = []
    for tok in weight_tokens:
        try:
            weights.append(int(tok))
        except ValueError:
            raise InputError(f"invalid item weight {tok!r}") from None
    return make_instance(capacity, weights)


def load_instance(path):
    try:
        with open(path, "r") as f:
            text = f.read()
    except OSError as e:
        raise InputError(f"No such file: {path} ({e.strerror})") from e
    return parse_instance(text)


def write_instance(instance, path):
    with open(path, "w") as f:
        f.write(f"{len(instance.weights)}\n")
        f.write(f"{instance.bin_capacity}\n")
        for w in instance.weights:
            f.write(f"{w}\n")
