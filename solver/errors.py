# solver/errors.py


class BinPackingError(Exception):
    """Base class for every fatal condition raised by the solver."""


class InputError(BinPackingError):
    """Missing, unreadable or structurally invalid instance."""


class InfeasibleMasterError(BinPackingError):
    """The relaxed or integer master problem could not be solved to a usable point."""


class OracleError(BinPackingError):
    """The knapsack oracle could not produce a result."""


class SolutionError(BinPackingError):
    """The reconstructed bins are not a valid packing of the instance."""
