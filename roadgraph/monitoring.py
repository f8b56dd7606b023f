from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from typing import Iterator, Optional

from .config import ObservabilityConfig, get_config
from .domain.errors import ConfigurationError

logger = logging.getLogger("roadgraph")


def configure_logging(config: Optional[ObservabilityConfig] = None) -> None:
    """Apply the observability config to the root logger."""
    config = config or get_config().observability
    level = logging.getLevelName(config.level.upper())
    if not isinstance(level, int):
        raise ConfigurationError(
            f"Unknown log level: {config.level}",
            setting_name="level",
            expected_type="DEBUG, INFO, WARNING, ERROR or CRITICAL",
        )
    logging.basicConfig(level=level, format=config.format)
    logger.debug("Logging configured", extra={"level": config.level})


@contextmanager
def timed(label: str) -> Iterator[dict[str, float]]:
    """Measure the wall-clock time of a block.

    The yielded dict receives ``duration_s`` once the block exits.
    """
    timing: dict[str, float] = {}
    started = time.perf_counter()
    try:
        yield timing
    finally:
        timing["duration_s"] = time.perf_counter() - started
        logger.debug(
            f"{label} took {timing['duration_s'] * 1000:.1f}ms",
            extra={"label": label, "duration_s": timing["duration_s"]},
        )
