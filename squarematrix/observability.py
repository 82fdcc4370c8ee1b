"""
Observability utilities for squarematrix.

This module provides:
- Logging configuration for the `squarematrix` logger hierarchy
- A lightweight execution profiler used by the demo driver
"""

import logging
import sys
import time
from contextlib import contextmanager
from typing import Optional, Dict, Any, List
from dataclasses import dataclass, field
from collections import defaultdict


LOGGER_NAME = 'squarematrix'


# ============================================================================
# Logging Configuration
# ============================================================================

def configure_logging(level: str = "INFO", log_file: Optional[str] = None):
    """
    Configure logging for squarematrix.

    Silent fallbacks in SquareMatrix (ignored writes, zero reads, size
    mismatches) are reported at DEBUG, so level="DEBUG" turns this into the
    library's diagnostic channel.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional file path to write logs

    Returns:
        The configured `squarematrix` logger
    """
    log_level = getattr(logging, level.upper())

    console_formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    detailed_formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    package_logger = logging.getLogger(LOGGER_NAME)
    package_logger.setLevel(log_level)

    # Reconfiguring replaces earlier handlers instead of stacking them
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler()
    console_handler.setLevel(log_level)
    console_handler.setFormatter(console_formatter)
    package_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(logging.DEBUG)  # Always log everything to file
        file_handler.setFormatter(detailed_formatter)
        package_logger.addHandler(file_handler)
        # The file gets every record, so the logger itself must let them through
        package_logger.setLevel(logging.DEBUG)

    package_logger.propagate = False

    return package_logger


# ============================================================================
# Step Timing
# ============================================================================

@dataclass
class ProfileEntry:
    """Timing of one matrix operation, with the matrix size it ran on."""
    name: str
    start_time: float
    duration: Optional[float] = None
    metadata: Dict[str, Any] = field(default_factory=dict)


class ExecutionProfiler:
    """
    Times the steps of a demo run.

    Example:
        profiler = ExecutionProfiler()

        with profiler.profile("multiply", size=3):
            C * D

        profiler.print_summary()
    """

    def __init__(self):
        self.entries: List[ProfileEntry] = []
        self._enabled = True

    @contextmanager
    def profile(self, name: str, **metadata):
        """
        Time the enclosed block under `name`. Yields the entry, or None while
        the profiler is disabled.
        """
        if not self._enabled:
            yield None
            return

        entry = ProfileEntry(name=name, start_time=time.perf_counter(), metadata=metadata)
        try:
            yield entry
        finally:
            entry.duration = time.perf_counter() - entry.start_time
            self.entries.append(entry)

    def get_summary(self) -> Dict[str, Dict[str, float]]:
        """
        Aggregate the recorded entries per operation name.

        Returns:
            Dictionary mapping operation names to count/total/mean
        """
        durations = defaultdict(list)
        for entry in self.entries:
            durations[entry.name].append(entry.duration)
        return {
            name: {'count': len(values), 'total': sum(values), 'mean': sum(values) / len(values)}
            for name, values in durations.items()
        }

    def print_summary(self, out=None):
        out = out if out is not None else sys.stdout
        summary = self.get_summary()

        out.write("\n" + "="*60 + "\n")
        out.write("EXECUTION PROFILE SUMMARY\n")
        out.write("="*60 + "\n")
        out.write(f"{'Operation':<24} {'Count':>6} {'Total (s)':>13} {'Mean (s)':>13}\n")
        out.write("-"*60 + "\n")
        for name, stats in sorted(summary.items(), key=lambda x: x[1]['total'], reverse=True):
            out.write(f"{name:<24} {stats['count']:>6} {stats['total']:>13.6f} {stats['mean']:>13.6f}\n")
        out.write("="*60 + "\n")

    def reset(self):
        self.entries.clear()

    def enable(self):
        self._enabled = True

    def disable(self):
        self._enabled = False


# Global profiler instance
_global_profiler = ExecutionProfiler()

def get_profiler() -> ExecutionProfiler:
    """Get the global profiler instance."""
    return _global_profiler
