"""
Logging configuration for the Clarifai Tagger.
"""

import logging
from typing import Any, Dict, Optional
from rich.console import Console
from rich.logging import RichHandler
from .config import settings


def setup_logging(level: Optional[str] = None) -> None:
    """Configure clean, simple logging output."""

    # Configure standard library logging with Rich handler
    logging.basicConfig(
        format="%(message)s",
        level=getattr(logging, (level or settings.log_level).upper()),
        handlers=[RichHandler(
            console=Console(stderr=True),
            rich_tracebacks=True,
            show_time=True,
            show_path=False,
            show_level=False,
            markup=False
        )],
        force=True  # Override any existing configuration
    )

    # Silence noisy third-party loggers
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def get_logger(name: str):
    """Get a standard logger instance."""
    return logging.getLogger(f"clarifai_tagger.{name}")


class MetricsLogger:
    """Logger for tracking compute metrics."""

    def __init__(self):
        self.logger = get_logger("metrics")
        self.metrics: Dict[str, Any] = {
            "computes": 0,
            "references_submitted": 0,
            "references_tagged": 0,
            "tags_assigned": 0,
            "compute_time": 0.0,
        }

    def log_compute(self, submitted: int, tagged: int, tags_count: int, compute_time: float) -> None:
        """Log a successful compute call."""
        self.metrics["computes"] += 1
        self.metrics["references_submitted"] += submitted
        self.metrics["references_tagged"] += tagged
        self.metrics["tags_assigned"] += tags_count
        self.metrics["compute_time"] += compute_time

        self.logger.debug(
            f"Compute finished: {tagged}/{submitted} references | Tags: {tags_count} | "
            f"Time: {compute_time:.3f}s | Total: {self.metrics['computes']} computes"
        )

    def get_metrics(self) -> Dict[str, Any]:
        """Get current metrics."""
        return self.metrics.copy()
