"""
Structured logging setup for the serverless function and the local gateway.

Logs are rendered as one JSON object per line on stdout so the hosting
platform's log collector picks them up unchanged.
"""

from __future__ import annotations

import logging
import os
import sys

import structlog


SERVICE_NAME = "chat-proxy"


def _add_service(logger, method_name, event_dict):
    event_dict.setdefault("service", SERVICE_NAME)
    event_dict.setdefault("env", os.getenv("ENV", "dev"))
    return event_dict


def configure_logging():
    """
    Configure structured JSON logging for the current environment.

    returns:
    - structlog logger; every entry carries ``service`` and ``env``.

    behaviour:
    - Reads the level from LOG_LEVEL (default INFO).
    - Writes to stdout.
    - Loggers are not cached, so a later reconfiguration (for example
      structlog.testing.capture_logs) applies to module-level loggers too.

    example log entry:
    {
      "event": "response.sent",
      "level": "info",
      "timestamp": "2026-10-17T13:00:00Z",
      "service": "chat-proxy",
      "env": "dev",
      "status": 200
    }
    """
    level = os.getenv("LOG_LEVEL", "INFO").upper()

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level, logging.INFO),
    )

    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            _add_service,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    return structlog.get_logger()
