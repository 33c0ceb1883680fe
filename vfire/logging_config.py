"""
Logging setup.

The web process writes one JSON object per line (Cloud Logging style) and
scrubs credentials out of every message. CLI commands use structlog.
"""
import json
import logging
import re
import sys

import structlog

SENSITIVE_PATTERNS = [
    (re.compile(r'(password["\']?\s*[:=]\s*["\']?)([^"\'&\s,}]+)', re.I), r'\1***REDACTED***'),
    (re.compile(r'(api[_-]?key["\']?\s*[:=]\s*["\']?)([^"\'&\s,}]+)', re.I), r'\1***REDACTED***'),
    (re.compile(r'(token["\']?\s*[:=]\s*["\']?)([^"\'&\s,}]+)', re.I), r'\1***REDACTED***'),
    (re.compile(r'(secret["\']?\s*[:=]\s*["\']?)([^"\'&\s,}]+)', re.I), r'\1***REDACTED***'),
    (re.compile(r'(Bearer\s+)([a-zA-Z0-9._-]+)', re.I), r'\1***REDACTED***'),
]

SENSITIVE_KEYS = ('password', 'token', 'secret', 'api_key', 'signature')


def sanitize_log_message(message: str) -> str:
    """Remove sensitive data patterns from log messages."""
    for pattern, replacement in SENSITIVE_PATTERNS:
        message = pattern.sub(replacement, message)
    return message


def _sanitize_props(props: dict) -> dict:
    clean = {}
    for key, value in props.items():
        if any(s in key.lower() for s in SENSITIVE_KEYS):
            clean[key] = '***REDACTED***'
        elif isinstance(value, str):
            clean[key] = sanitize_log_message(value)
        else:
            clean[key] = value
    return clean


class SanitizingFilter(logging.Filter):
    """Rewrites the record message with credentials masked."""

    def filter(self, record):
        message = record.getMessage()
        record.msg = sanitize_log_message(message)
        record.args = ()
        if isinstance(getattr(record, "props", None), dict):
            record.props = _sanitize_props(record.props)
        return True


class JsonFormatter(logging.Formatter):
    def format(self, record):
        json_log = {
            "severity": record.levelname,
            "message": record.getMessage(),
            "timestamp": self.formatTime(record, self.datefmt),
            "logger": record.name,
            "module": record.module,
        }
        if hasattr(record, "props"):
            json_log.update(record.props)

        if record.exc_info:
            json_log["exception"] = self.formatException(record.exc_info)

        return json.dumps(json_log, default=str)


def configure_logging(level="INFO", json_output=True):
    handler = logging.StreamHandler()
    if json_output:
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    handler.addFilter(SanitizingFilter())

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(level)
    return root


def configure_cli_logging(level="INFO"):
    """structlog console output for CLI commands."""
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(logging.getLevelName(level)),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )
    return structlog.get_logger("vfire.cli")
