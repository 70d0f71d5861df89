"""
In-process telemetry: structured events, counters and latency samples.

Nothing leaves the process. Events are written to the "todoq.telemetry"
logger; counters and latencies are kept in memory so tests and the CLI can
inspect them.
"""

from __future__ import annotations

import contextlib
import time
from collections import Counter, defaultdict
from collections.abc import Iterator
from typing import Any

from todoq.observability.logging import get_logger

logger = get_logger("todoq.telemetry")

_counters: Counter[str] = Counter()
_latencies: defaultdict[str, list[float]] = defaultdict(list)


def _latency_key(metric_name: str) -> str:
    # "ingest.llm.latency" and "ingest.llm.latency_ms" name the same series
    return metric_name if metric_name.endswith("_ms") else f"{metric_name}_ms"


def log_event(event_name: str, **fields: Any) -> None:
    """
    Log one structured event as `event=<name> key=value ...`.

    Callers redact user text and addresses before passing them in.
    """
    rendered = " ".join(f"{key}={fields[key]!r}" for key in sorted(fields))
    logger.info("event=%s %s", event_name, rendered)


def counter(name: str, increment: int = 1) -> int:
    """Add increment to a named counter and return the new total."""
    _counters[name] += increment
    return _counters[name]


def get_counter(name: str) -> int:
    return _counters[name]


@contextlib.contextmanager
def time_block(metric_name: str) -> Iterator[None]:
    """Record the wall time of the enclosed block in milliseconds, even on error."""
    started = time.perf_counter()
    try:
        yield
    finally:
        elapsed_ms = (time.perf_counter() - started) * 1000
        _latencies[_latency_key(metric_name)].append(elapsed_ms)
        logger.debug("timing=%s ms=%.1f", metric_name, elapsed_ms)


def get_latency_stats(metric_name: str) -> dict[str, float]:
    """Count, min, max, avg and p95 (milliseconds) for one latency series."""
    samples = sorted(_latencies.get(_latency_key(metric_name), ()))
    if not samples:
        return {"count": 0, "min": 0.0, "max": 0.0, "avg": 0.0, "p95": 0.0}

    p95_index = min(int(len(samples) * 0.95), len(samples) - 1)
    return {
        "count": len(samples),
        "min": samples[0],
        "max": samples[-1],
        "avg": sum(samples) / len(samples),
        "p95": samples[p95_index],
    }


def reset() -> None:
    """Forget all counters and latency samples."""
    _counters.clear()
    _latencies.clear()
