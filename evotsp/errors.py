class EvoTSPError(Exception):
    """Base class for all errors raised by evotsp."""


class InvalidInputError(EvoTSPError, ValueError):
    """City list is empty or holds a malformed coordinate."""


class InvalidConfigError(EvoTSPError, ValueError):
    """Run parameters are out of range."""


class InvariantViolationError(EvoTSPError, AssertionError):
    """A tour stopped being a permutation of the cities. Always a bug."""


class StopEvolution(EvoTSPError):
    """Raised from a progress callback to end the run at a generation boundary."""
