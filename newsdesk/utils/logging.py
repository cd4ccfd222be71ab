"""Structured logging for the newsroom.

Uses structlog for JSON-formatted, machine-readable logs. Raw generation
errors land here and nowhere else; readers only see short messages.
"""
import logging
import logging.handlers
import re
from pathlib import Path

import structlog

# Bound fields that hold credentials
_SECRET_FIELD = re.compile(r"(api_?key|secret|token|password)$", re.IGNORECASE)

# Google API keys, e.g. echoed back in an SDK error URL
_GOOGLE_KEY = re.compile(r"AIza[0-9A-Za-z_\-]{35}")


def mask_secret(value: str, show_chars: int = 4) -> str:
    """Keep the first few characters for identification, star the rest."""
    if not value:
        return "[NOT_SET]"
    if len(value) <= show_chars:
        return "*" * len(value)
    return value[:show_chars] + "*" * (len(value) - show_chars)


def redact_secrets(logger, method_name, event_dict):
    """structlog processor: mask credential fields and key-shaped strings."""
    for field, value in event_dict.items():
        if not isinstance(value, str):
            continue
        if _SECRET_FIELD.search(field):
            event_dict[field] = mask_secret(value)
        elif "AIza" in value:
            event_dict[field] = _GOOGLE_KEY.sub(lambda m: mask_secret(m.group(0)), value)
    return event_dict


def configure_logging(log_dir: str = "logs", level: str = "INFO") -> None:
    """Configure structured logging with JSON renderer and file output.

    Args:
        log_dir: Directory for log files. Created if it doesn't exist.
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
    """
    log_path = Path(log_dir)
    log_path.mkdir(parents=True, exist_ok=True)
    log_level = getattr(logging, level.upper(), logging.INFO)

    # File handler with rotation (10MB, keep 5)
    file_handler = logging.handlers.RotatingFileHandler(
        log_path / "newsdesk.jsonl",
        maxBytes=10_000_000,
        backupCount=5,
        encoding="utf-8",
    )

    logging.basicConfig(
        format="%(message)s",
        level=log_level,
        handlers=[file_handler],
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_logger_name,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            redact_secrets,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str):
    """Get a named structlog logger.

    Args:
        name: Logger name, typically the module or component name.
    """
    return structlog.get_logger(name)
