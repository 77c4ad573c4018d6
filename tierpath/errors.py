# tierpath/errors.py
class TierPathError(Exception):
    """Base class for every error raised by tierpath."""


class MapFormatError(TierPathError, ValueError):
    pass


class InvalidTierError(TierPathError, ValueError):
    pass


class OutOfBoundsError(TierPathError, ValueError):
    pass


class SearchBudgetExceeded(TierPathError):
    """Raised when a search pops more nodes than its expansion budget allows."""

    def __init__(self, budget: int):
        super().__init__(f"search exceeded its budget of {budget} expansions")
        self.budget = budget
