from typing import Sequence


class RoutingError(Exception):
    """Base class for failures raised by the routing engine."""


class InvalidContext(RoutingError):
    def __init__(self, missing: Sequence[str]) -> None:
        self.missing = list(missing)
        super().__init__(f"Missing required fields: {', '.join(self.missing)}")


class NoEligibleRoute(RoutingError):
    """No MID can take the payment. Callers treat this as "no route", not as a fault."""

    def __init__(self, message: str = "No active routes found matching the criteria") -> None:
        super().__init__(message)
