"""
Planning failures surfaced to callers.

Unresolved draft references and empty token sets are recovered locally and
have no exception type.
"""


class PlanningError(Exception):
    """Base class for failures of a planning request."""
    pass


class MalformedProposal(PlanningError):
    """The plan proposal was not a JSON array of valid day entries."""
    pass


class InsufficientPool(PlanningError):
    """Too few recipes satisfy the active preferences to fill a week."""

    def __init__(self, available: int, required: int):
        self.available = available
        self.required = required
        super().__init__(
            f"Only {available} recipes match your preferences; at least {required} are needed for a weekly plan"
        )
