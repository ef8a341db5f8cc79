"""structlog setup for QuantumSwap entry points.

Library modules only call ``structlog.get_logger()``; applications (the API
server, simulations) call ``configure_logging`` once at startup.
"""

from __future__ import annotations

import logging
import os

import structlog

LOG_LEVEL_ENV = "QUANTUMSWAP_LOG_LEVEL"


def resolve_level(level: str | int | None = None) -> int:
    """Turn a level name, number or None (read from the environment) into a logging level."""
    if level is None:
        level = os.environ.get(LOG_LEVEL_ENV, "INFO")
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level!r}")
    return resolved


def configure_logging(level: str | int | None = None, *, json: bool = False) -> None:
    """Configure structlog with level filtering and console or JSON rendering."""
    renderer: structlog.types.Processor = (
        structlog.processors.JSONRenderer() if json else structlog.dev.ConsoleRenderer()
    )
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(resolve_level(level)),
    )


__all__ = ["configure_logging", "resolve_level"]
