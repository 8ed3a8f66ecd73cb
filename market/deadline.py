import time

from market.config import settings
from market.exceptions import OperationTimeout


class Deadline:
    """Monotonic time limit for a single operation."""

    def __init__(self, seconds: float | None = None, clock=time.monotonic):
        if seconds is None:
            seconds = settings.REQUEST_TIMEOUT
        self.seconds = seconds
        self._clock = clock
        self.expires_at = clock() + seconds

    def remaining(self) -> float:
        return max(0.0, self.expires_at - self._clock())

    def check(self, step: str = ""):
        if self._clock() >= self.expires_at:
            raise OperationTimeout(
                "request timed out",
                detail=f"deadline of {self.seconds}s exceeded at {step or 'unknown step'}",
            )
