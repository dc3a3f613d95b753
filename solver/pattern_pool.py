# solver/pattern_pool.py


class PatternPool:
    """
    Append-only, index-stable collection of bin patterns.
    A pattern is a tuple of n booleans, pattern[i] is True if item i is in the bin.
    Pattern j of the pool is always the column of master variable j.
    """

    def __init__(self, n):
        self.n = n
        self._patterns = []
        self._index = {}
        self._frozen = False

    @classmethod
    def seed_singletons(cls, n):
        """Pool holding the n trivial patterns, pattern i packs item i alone."""
        pool = cls(n)
        for i in range(n):
            pat = [False]*n
            pat[i] = True
            pool.append(pat)
        return pool

    def append(self, pattern):
        """Store a pattern and return its index."""
        if self._frozen:
            raise RuntimeError("pattern pool is frozen")
        pat = tuple(bool(v) for v in pattern)
        if len(pat) != self.n:
            raise ValueError(f"pattern has {len(pat)} entries, expected {self.n}")
        self._patterns.append(pat)
        # first occurrence wins for lookups
        self._index.setdefault(pat, len(self._patterns) - 1)
        return len(self._patterns) - 1

    def index_of(self, pattern):
        return self._index.get(tuple(bool(v) for v in pattern))

    def freeze(self):
        self._frozen = True

    @property
    def frozen(self):
        return self._frozen

    def items_of(self, j):
        """Item indices (0-based) packed by pattern j."""
        return [i for i, used in enumerate(self._patterns[j]) if used]

    def __contains__(self, pattern):
        return self.index_of(pattern) is not None

    def __getitem__(self, j):
        return self._patterns[j]

    def __len__(self):
        return len(self._patterns)

    def __iter__(self):
        return iter(self._patterns)


def pattern_weight(pattern, weights):
    return sum(w for used, w in zip(pattern, weights) if used)
