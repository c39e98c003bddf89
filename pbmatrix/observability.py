"""
Observability utilities for pbmatrix.

This module provides:
- Logging configuration for the ``pbmatrix`` logger hierarchy
- A profiler that times kernel runs; the process-wide instance records
  nothing until enable() is called
"""

import logging
import time
from collections import defaultdict
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Optional, Dict, Any, List


# ============================================================================
# Logging Configuration
# ============================================================================

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DETAILED_LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s'


def configure_logging(level: str = "INFO", log_file: Optional[str] = None) -> logging.Logger:
    """
    Configure logging for the pbmatrix package.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional file path; the file always receives DEBUG records

    Returns:
        The configured ``pbmatrix`` logger.
    """
    log_level = getattr(logging, level.upper())

    pbmatrix_logger = logging.getLogger('pbmatrix')
    pbmatrix_logger.setLevel(logging.DEBUG if log_file else log_level)

    # Reconfiguring replaces handlers instead of stacking duplicates
    for handler in list(pbmatrix_logger.handlers):
        pbmatrix_logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler()
    console_handler.setLevel(log_level)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt='%Y-%m-%d %H:%M:%S'))
    pbmatrix_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(DETAILED_LOG_FORMAT, datefmt='%Y-%m-%d %H:%M:%S'))
        pbmatrix_logger.addHandler(file_handler)

    pbmatrix_logger.propagate = False
    return pbmatrix_logger


# ============================================================================
# Performance Profiling
# ============================================================================

@dataclass
class ProfileEntry:
    """Single timed kernel run."""
    name: str
    start_time: float
    end_time: Optional[float] = None
    duration: Optional[float] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    def complete(self):
        self.end_time = time.perf_counter()
        self.duration = self.end_time - self.start_time


class ExecutionProfiler:
    """
    Records how long named operations take.

    Example:
        profiler = ExecutionProfiler()

        with profiler.profile("compute", size=100):
            compute_matrix(100)

        print(profiler.get_summary())
    """

    def __init__(self, enabled: bool = True):
        self.entries: List[ProfileEntry] = []
        self.aggregated: Dict[str, List[float]] = defaultdict(list)
        self._enabled = enabled

    @contextmanager
    def profile(self, name: str, **metadata):
        """Times the enclosed block under ``name``; keyword arguments become metadata."""
        if not self._enabled:
            yield None
            return

        entry = ProfileEntry(name=name, start_time=time.perf_counter(), metadata=metadata)
        try:
            yield entry
        finally:
            entry.complete()
            self.entries.append(entry)
            self.aggregated[name].append(entry.duration)

    def get_summary(self) -> Dict[str, Dict[str, float]]:
        """
        Aggregated statistics per operation name.

        Returns:
            Mapping of name to count, total, mean, min and max duration (seconds).
        """
        summary = {}
        for name, durations in self.aggregated.items():
            if durations:
                summary[name] = {
                    'count': len(durations),
                    'total': sum(durations),
                    'mean': sum(durations) / len(durations),
                    'min': min(durations),
                    'max': max(durations)
                }
        return summary

    def reset(self):
        self.entries.clear()
        self.aggregated.clear()

    @property
    def enabled(self) -> bool:
        return self._enabled

    def enable(self):
        self._enabled = True

    def disable(self):
        self._enabled = False


# Global profiler instance
_global_profiler = ExecutionProfiler(enabled=False)

def get_profiler() -> ExecutionProfiler:
    """Get the global profiler instance. Call ``enable()`` on it to record kernel runs."""
    return _global_profiler
