"""structlog setup for applications built on the client."""

from __future__ import annotations

import sys
from typing import TextIO

import structlog


def configure_logging(stream: TextIO | None = None, *, json: bool | None = None) -> None:
    """Install the structlog processor pipeline, printing to stderr by default.

    The client never calls this itself; applications call it once at startup.
    Output is rendered for humans when the stream is a terminal and as JSON
    otherwise, unless ``json`` forces one or the other.
    """
    stream = stream or sys.stderr
    if json is None:
        json = not stream.isatty()
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.JSONRenderer() if json else structlog.dev.ConsoleRenderer(),
        ],
        logger_factory=structlog.PrintLoggerFactory(file=stream),
    )
