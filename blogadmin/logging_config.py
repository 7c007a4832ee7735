"""
Logging configuration for the API server and the provisioning command.

Everything goes to stdout through one handler; uvicorn's access log drops
the /healthz probes.
"""

import logging
from typing import Any, Dict


class HealthCheckFilter(logging.Filter):
    """Filter to suppress health check endpoint logs."""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        return not ("/healthz" in message and "GET" in message)


def get_logging_config(level: str = "INFO") -> Dict[str, Any]:
    """Get the dictConfig for the given blogadmin log level."""
    level = level.upper()
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "filters": {
            "health_check": {"()": HealthCheckFilter},
        },
        "formatters": {
            "default": {
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "default",
                "stream": "ext://sys.stdout",
            },
        },
        "loggers": {
            "uvicorn.access": {
                "handlers": ["console"],
                "filters": ["health_check"],
                "level": "INFO",
                "propagate": False,
            },
            "blogadmin": {
                "handlers": ["console"],
                "level": level,
                "propagate": False,
            },
        },
        "root": {
            "level": level,
            "handlers": ["console"],
        },
    }
