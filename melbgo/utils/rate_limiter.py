"""Rate limiter for suggestion requests - in-memory implementation"""
from collections import defaultdict, deque
from datetime import datetime, timedelta
from typing import Deque, Dict, Optional


class InMemoryRateLimiter:
    """
    Sliding-window limiter keyed by client address.

    Suggestions hit a paid text-generation API, so each client gets a fixed
    number of requests per window.
    """

    def __init__(self, max_requests: int = 30, window: timedelta = timedelta(hours=1)):
        self.max_requests = max_requests
        self.window = window
        self.requests: Dict[str, Deque[datetime]] = defaultdict(deque)

    def _prune(self, client_id: str, now: datetime) -> Deque[datetime]:
        history = self.requests[client_id]
        cutoff = now - self.window
        while history and history[0] <= cutoff:
            history.popleft()
        return history

    def is_allowed(self, client_id: str, now: Optional[datetime] = None) -> bool:
        """Record the request and report whether it is within the limit"""
        now = now or datetime.now()
        history = self._prune(client_id, now)
        if len(history) >= self.max_requests:
            return False
        history.append(now)
        return True

    def get_remaining(self, client_id: str, now: Optional[datetime] = None) -> int:
        now = now or datetime.now()
        return max(0, self.max_requests - len(self._prune(client_id, now)))
