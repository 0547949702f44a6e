"""
FastAPI middleware for request logging and lightweight metrics.

This module provides:
- Request/Response logging with request_id propagation
- Request timing for latency tracking
- In-memory metrics collection exposed by the /metrics endpoint

Middleware Stack Order (in main.py):
    1. LoggingMiddleware (outermost - captures everything)
    2. CORS Middleware
    3. Application routes
"""

import logging
import threading
import time
import uuid
from collections import deque
from dataclasses import dataclass, field
from typing import Callable, Deque, Dict

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from core.logging_config import set_request_id, clear_request_id

logger = logging.getLogger(__name__)


# =============================================================================
# IN-MEMORY METRICS COLLECTOR
# =============================================================================

@dataclass
class RequestMetrics:
    """Container for a single request's metrics."""
    method: str
    path: str
    status_code: int
    duration_ms: float


@dataclass
class MetricsCollector:
    """
    In-memory metrics collector with a fixed-size latency buffer.

    Counters are cumulative since process start; percentiles are computed
    over the last ``max_history`` requests only.
    """
    max_history: int = 1000

    total_requests: int = 0
    status_counts: Dict[str, int] = field(
        default_factory=lambda: {"2xx": 0, "3xx": 0, "4xx": 0, "5xx": 0}
    )

    _durations: Deque[float] = field(default_factory=deque, init=False, repr=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False)

    def __post_init__(self) -> None:
        self._durations = deque(maxlen=self.max_history)

    def record_request(self, metrics: RequestMetrics) -> None:
        """Record a completed request's metrics."""
        category = f"{metrics.status_code // 100}xx"
        with self._lock:
            self._durations.append(metrics.duration_ms)
            self.total_requests += 1
            if category in self.status_counts:
                self.status_counts[category] += 1

    def get_latency_percentiles(self) -> Dict[str, float]:
        """
        Calculate p50, p95 and p99 latency in milliseconds.

        Returns zeros if no request has been recorded yet.
        """
        with self._lock:
            durations = sorted(self._durations)
        if not durations:
            return {"p50": 0.0, "p95": 0.0, "p99": 0.0}

        n = len(durations)

        def percentile(p: float) -> float:
            return durations[min(int(n * p / 100), n - 1)]

        return {
            "p50": round(percentile(50), 2),
            "p95": round(percentile(95), 2),
            "p99": round(percentile(99), 2),
        }

    def reset(self) -> None:
        """Drop all recorded data."""
        with self._lock:
            self._durations.clear()
            self.total_requests = 0
            for key in self.status_counts:
                self.status_counts[key] = 0

    def get_prometheus_format(self) -> str:
        """Export metrics in Prometheus text format."""
        latencies = self.get_latency_percentiles()
        lines = [
            "# HELP http_requests_total Total HTTP requests",
            "# TYPE http_requests_total counter",
            f"http_requests_total {self.total_requests}",
            "",
            "# HELP http_requests_by_status HTTP requests by status category",
            "# TYPE http_requests_by_status counter",
        ]
        lines.extend(
            f'http_requests_by_status{{status="{category}"}} {count}'
            for category, count in self.status_counts.items()
        )
        lines.extend([
            "",
            "# HELP http_request_duration_ms Request duration in milliseconds",
            "# TYPE http_request_duration_ms gauge",
            f'http_request_duration_ms{{quantile="0.5"}} {latencies["p50"]}',
            f'http_request_duration_ms{{quantile="0.95"}} {latencies["p95"]}',
            f'http_request_duration_ms{{quantile="0.99"}} {latencies["p99"]}',
        ])
        return "\n".join(lines) + "\n"


metrics_collector = MetricsCollector()


def get_metrics_collector() -> MetricsCollector:
    """Get the process-wide metrics collector."""
    return metrics_collector


# =============================================================================
# LOGGING MIDDLEWARE
# =============================================================================

class LoggingMiddleware(BaseHTTPMiddleware):
    """
    Request/Response logging middleware with request_id propagation.

    - Generates a short request_id for each request
    - Logs request start and completion
    - Records latency metrics
    - Adds X-Request-ID header to responses
    """

    # Paths excluded from detailed logging
    EXCLUDED_PATHS = {"/health", "/ready", "/metrics", "/docs", "/redoc", "/openapi.json"}

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Process request with logging and metrics collection."""
        request_id = str(uuid.uuid4())[:8]
        set_request_id(request_id)

        method = request.method
        path = request.url.path
        start_time = time.perf_counter()

        if path not in self.EXCLUDED_PATHS:
            logger.info("Request started", extra={"method": method, "path": path})

        try:
            response = await call_next(request)
        except Exception as e:
            logger.exception(
                "Request failed with exception",
                extra={"method": method, "path": path, "error": str(e)}
            )
            clear_request_id()
            raise

        duration_ms = (time.perf_counter() - start_time) * 1000
        status_code = response.status_code

        metrics_collector.record_request(RequestMetrics(
            method=method,
            path=path,
            status_code=status_code,
            duration_ms=duration_ms,
        ))

        if path not in self.EXCLUDED_PATHS:
            log_level = logging.WARNING if status_code >= 400 else logging.INFO
            logger.log(
                log_level,
                "Request completed",
                extra={
                    "method": method,
                    "path": path,
                    "status_code": status_code,
                    "duration_ms": round(duration_ms, 2),
                }
            )

        clear_request_id()
        response.headers["X-Request-ID"] = request_id
        return response
