"""Timing utilities for regquery runs.

The search time reported to the user covers hive parsing and the query
itself. Rendering and export happen after the timer is stopped.
"""

import logging
import time
from typing import Any, Optional

logger = logging.getLogger(__name__)


class TimingContext:
    """Context manager for timing a run, with an explicit early stop.

    Parameters
    ----------
    operation_name : str
        Name of the operation being timed
    logger_instance : logging.Logger, optional
        Logger to use for output. If None, uses module logger
    log_level : int, default logging.DEBUG
        Log level for timing messages

    Examples
    --------
    >>> with TimingContext("Hive search") as timer:
    ...     hits = search(store)
    ...     timer.stop()
    ...     render(hits)
    [DEBUG] Hive search completed in 0.12s

    """

    def __init__(
        self, operation_name: str, logger_instance: Optional[logging.Logger] = None, log_level: int = logging.DEBUG
    ) -> None:
        """Initialize the timing context for an operation."""
        self.operation_name = operation_name
        self.logger = logger_instance or logger
        self.log_level = log_level
        self.start_time: Optional[float] = None
        self.end_time: Optional[float] = None

    def __enter__(self) -> "TimingContext":
        """Enter the timing context and start the timer."""
        self.start()
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Exit the timing context and log the elapsed time."""
        self.stop()
        elapsed = self.elapsed

        if exc_type is None:
            self.logger.log(self.log_level, f"{self.operation_name} completed in {elapsed:.2f}s")
        else:
            self.logger.log(self.log_level, f"{self.operation_name} failed after {elapsed:.2f}s")

    def start(self) -> None:
        self.start_time = time.perf_counter()
        self.end_time = None
        self.logger.log(self.log_level, f"Starting: {self.operation_name}")

    def stop(self) -> float:
        """Stop the timer if it is running and return the elapsed seconds.

        Stopping an already stopped timer keeps the first stop time.
        """
        if self.start_time is not None and self.end_time is None:
            self.end_time = time.perf_counter()
        return self.elapsed

    @property
    def elapsed(self) -> float:
        """Get elapsed time in seconds.

        Returns
        -------
        float
            Elapsed time in seconds, up to now while the timer is running

        """
        if self.start_time is None:
            return 0.0
        end = self.end_time if self.end_time is not None else time.perf_counter()
        return end - self.start_time
