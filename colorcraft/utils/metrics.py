"""
ColorCraft Metrics Collection
Process-wide counters plus bounded windows of recent timings and sample counts.
"""
import time
from collections import Counter, deque
from threading import Lock
from typing import Any, Deque, Dict, Optional, Sequence

# Most recent observations kept per series
WINDOW_SIZE = 1000


def percentile(values: Sequence[float], pct: int) -> float:
    """Linearly interpolated percentile of values (0.0 when empty)."""
    if not values:
        return 0.0

    ordered = sorted(values)
    rank = (len(ordered) - 1) * pct / 100
    low = int(rank)
    if low + 1 >= len(ordered):
        return ordered[low]
    return ordered[low] + (rank - low) * (ordered[low + 1] - ordered[low])


def summarize(values: Sequence[float]) -> Dict[str, float]:
    """count/mean/min/max/p50/p95 of a series, or {} when empty."""
    if not values:
        return {}
    return {
        "count": len(values),
        "mean": sum(values) / len(values),
        "min": min(values),
        "max": max(values),
        "p50": percentile(values, 50),
        "p95": percentile(values, 95),
    }


class MetricsCollector:
    """In-process metrics shared by the request handlers."""

    def __init__(self, window: int = WINDOW_SIZE):
        self.window = window
        self._lock = Lock()
        self._counters: Counter = Counter()
        self._timings: Dict[str, Deque[float]] = {}
        self._sample_counts: Deque[int] = deque(maxlen=window)
        self._start_time = time.time()

    def increment(self, name: str, amount: int = 1):
        with self._lock:
            self._counters[name] += amount

    def increment_request_count(self, operation: str):
        """Count one request for an operation (extract, harmony, ...)."""
        self.increment(f"{operation}_requests_total")

    def increment_failure_count(self, operation: str, error_type: str):
        self.increment(f"{operation}_failed_total_{error_type}")

    def record_timing(self, operation: str, duration_ms: float):
        with self._lock:
            series = self._timings.setdefault(f"{operation}_duration_ms", deque(maxlen=self.window))
            series.append(duration_ms)

    def record_sample_count(self, count: int):
        """Record how many opaque pixels one sampling pass produced."""
        with self._lock:
            self._sample_counts.append(count)

    def get_counters(self) -> Dict[str, int]:
        with self._lock:
            return dict(self._counters)

    def get_timing_stats(self) -> Dict[str, Dict[str, float]]:
        with self._lock:
            return {name: summarize(list(series)) for name, series in self._timings.items() if series}

    def get_sample_count_stats(self) -> Dict[str, float]:
        with self._lock:
            return summarize(list(self._sample_counts))

    def get_uptime_seconds(self) -> float:
        return time.time() - self._start_time

    def get_summary(self) -> Dict[str, Any]:
        """Everything served by the metrics endpoint."""
        return {
            "uptime_seconds": self.get_uptime_seconds(),
            "counters": self.get_counters(),
            "timing_stats": self.get_timing_stats(),
            "sample_count_stats": self.get_sample_count_stats(),
        }

    def reset(self):
        with self._lock:
            self._counters.clear()
            self._timings.clear()
            self._sample_counts.clear()
            self._start_time = time.time()


# Global metrics instance
_metrics: Optional[MetricsCollector] = None


def get_metrics_instance() -> MetricsCollector:
    """Get or create the global metrics collector."""
    global _metrics
    if _metrics is None:
        _metrics = MetricsCollector()
    return _metrics


def reset_metrics():
    """Reset global metrics (for testing)."""
    if _metrics is not None:
        _metrics.reset()
