import time
import threading
from typing import List, Optional, Sequence, Tuple


class _Bucket:
    """Token bucket refilled continuously at limit/window tokens per second."""

    def __init__(self, limit: int, window: float):
        self.limit = limit
        self.window = window
        self.tokens = float(limit)
        self.last_refill = time.monotonic()

    @property
    def refill_rate(self) -> float:
        return self.limit / self.window

    def refill(self, now: float) -> None:
        elapsed = now - self.last_refill
        self.tokens = min(self.limit, self.tokens + elapsed * self.refill_rate)
        self.last_refill = now

    def wait_time(self, tokens: int) -> float:
        return max(0.0, (tokens - self.tokens) / self.refill_rate)


class RateLimiter:
    """Token bucket rate limiter for API requests.

    Enforces any number of limits at once, one bucket per (count, window)
    pair. A request proceeds only when every bucket has a token.

    Example:
        # Riot development key: 20 requests/second, 100 requests/2 minutes
        limiter = RateLimiter([(20, 1.0), (100, 120.0)])
    """

    def __init__(self, limits: Sequence[Tuple[int, float]]):
        """Initialize rate limiter.

        Args:
            limits: Sequence of (max_requests, window_seconds) pairs

        Raises:
            ValueError: If no limits are given or a limit is not positive
        """
        if not limits:
            raise ValueError("At least one (limit, window) pair is required")
        for limit, window in limits:
            if limit <= 0 or window <= 0:
                raise ValueError(f"Invalid rate limit: {limit} per {window}s")

        self._buckets: List[_Bucket] = [_Bucket(limit, window) for limit, window in limits]

        # Thread lock for thread-safe operations
        self._lock = threading.Lock()

    @classmethod
    def development_key(cls) -> "RateLimiter":
        """Limiter matching the default Riot development key limits."""
        return cls([(20, 1.0), (100, 120.0)])

    @property
    def limits(self) -> List[Tuple[int, float]]:
        return [(bucket.limit, bucket.window) for bucket in self._buckets]

    def _check_tokens(self, tokens: int) -> None:
        # A bucket never holds more than its limit
        capacity = min(bucket.limit for bucket in self._buckets)
        if tokens < 1 or tokens > capacity:
            raise ValueError(f"tokens must be between 1 and {capacity}, got {tokens}")

    def _refill_tokens(self) -> None:
        now = time.monotonic()
        for bucket in self._buckets:
            bucket.refill(now)

    def _take(self, tokens: int) -> bool:
        if all(bucket.tokens >= tokens for bucket in self._buckets):
            for bucket in self._buckets:
                bucket.tokens -= tokens
            return True
        return False

    def acquire(self, tokens: int = 1, timeout: Optional[float] = None) -> bool:
        """Acquire tokens for making API requests.

        Blocks until tokens are available or timeout is reached.

        Args:
            tokens: Number of tokens to acquire (default 1)
            timeout: Maximum time to wait in seconds (None = wait forever)

        Returns:
            True if tokens were acquired, False if timeout was reached

        Raises:
            ValueError: If tokens exceeds the smallest bucket limit
        """
        self._check_tokens(tokens)
        deadline = None if timeout is None else time.monotonic() + timeout

        while True:
            with self._lock:
                self._refill_tokens()
                if self._take(tokens):
                    return True
                # The slowest bucket decides when a request can go out
                wait_time = max(bucket.wait_time(tokens) for bucket in self._buckets)

            if deadline is not None:
                remaining = deadline - time.monotonic()
                if remaining <= 0:
                    return False
                wait_time = min(wait_time, remaining)

            time.sleep(max(0.01, wait_time))

    def try_acquire(self, tokens: int = 1) -> bool:
        """Try to acquire tokens without blocking.

        Returns:
            True if tokens were acquired, False otherwise
        """
        self._check_tokens(tokens)
        with self._lock:
            self._refill_tokens()
            return self._take(tokens)

    def reset(self) -> None:
        """Reset rate limiter to initial state."""
        with self._lock:
            now = time.monotonic()
            for bucket in self._buckets:
                bucket.tokens = float(bucket.limit)
                bucket.last_refill = now

    def get_wait_time(self, tokens: int = 1) -> float:
        """Get estimated wait time in seconds for acquiring tokens."""
        self._check_tokens(tokens)
        with self._lock:
            self._refill_tokens()
            return max(bucket.wait_time(tokens) for bucket in self._buckets)
