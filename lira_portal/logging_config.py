"""
LIRA Portal Logging Configuration
Structured logging with context for debugging and monitoring

Loggers carry bound fields (endpoint, role, model, source) so every line of
an AI request can be filtered by them. Credentials never reach the output.
"""
import logging
import sys
import json
import traceback
from datetime import datetime, timezone
from typing import Any, Dict, Optional
from functools import wraps
import time
import os

# ============================================================
# LOG LEVELS
# ============================================================

LOG_LEVEL = os.environ.get("LIRA_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = os.environ.get("LIRA_LOG_FORMAT", "json")  # json or text

# Printed first, in this order, by the text formatter
PRIORITY_KEYS = ("request_id", "endpoint", "user_id", "role", "model", "source", "activity_id")

# Field names whose values are masked (upstream keys and bearer tokens)
SENSITIVE_KEYS = ("authorization", "password", "token", "api_key", "secret", "secret_key")
SENSITIVE_SUFFIXES = ("_api_key", "_token", "_secret", "_password")
REDACTED = "***"


def is_sensitive(key: str) -> bool:
    key = key.lower()
    return key in SENSITIVE_KEYS or key.endswith(SENSITIVE_SUFFIXES)


def redact(context: Dict[str, Any]) -> Dict[str, Any]:
    """Mask values of credential-like fields."""
    return {key: REDACTED if is_sensitive(key) else value for key, value in context.items()}


# ============================================================
# STRUCTURED LOGGING
# ============================================================

class StructuredLogger:
    """Logger that outputs structured JSON logs"""

    def __init__(self, name: str, bound: Optional[Dict[str, Any]] = None):
        self.name = name
        self.bound = dict(bound or {})
        self.logger = logging.getLogger(name)
        self.logger.setLevel(getattr(logging, LOG_LEVEL, logging.INFO))
        self.logger.propagate = False

        if not self.logger.handlers:
            handler = logging.StreamHandler(sys.stdout)
            handler.setFormatter(StructuredFormatter() if LOG_FORMAT == "json" else TextFormatter())
            self.logger.addHandler(handler)

    def bind(self, **fields) -> "StructuredLogger":
        """Child logger that adds fields to every record."""
        return StructuredLogger(self.name, {**self.bound, **fields})

    def _log(self, level: str, message: str, **context):
        extra = {
            "context": redact({**self.bound, **context}),
            "logger_name": self.name,
        }
        getattr(self.logger, level.lower())(message, extra=extra)

    def debug(self, message: str, **context):
        self._log("debug", message, **context)

    def info(self, message: str, **context):
        self._log("info", message, **context)

    def warning(self, message: str, **context):
        self._log("warning", message, **context)

    def error(self, message: str, error: Optional[Exception] = None, **context):
        if error:
            context["error_type"] = type(error).__name__
            context["error_message"] = str(error)
            # Only inside an except block is there a traceback to record
            if sys.exc_info()[0] is not None:
                context["traceback"] = traceback.format_exc()
        self._log("error", message, **context)


class StructuredFormatter(logging.Formatter):
    """Formats logs as JSON"""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": getattr(record, "logger_name", record.name),
            "message": record.getMessage(),
        }

        if hasattr(record, "context"):
            log_data.update(record.context)

        return json.dumps(log_data, default=str)


class TextFormatter(logging.Formatter):
    """Formats logs as readable text"""

    COLORS = {
        "DEBUG": "\033[36m",     # Cyan
        "INFO": "\033[32m",      # Green
        "WARNING": "\033[33m",   # Yellow
        "ERROR": "\033[31m",     # Red
        "CRITICAL": "\033[35m",  # Magenta
    }
    RESET = "\033[0m"

    @staticmethod
    def ordered_items(context: Dict[str, Any]):
        first = [(k, context[k]) for k in PRIORITY_KEYS if k in context]
        rest = [(k, v) for k, v in context.items() if k not in PRIORITY_KEYS and k != "traceback"]
        return first + rest

    def format(self, record: logging.LogRecord) -> str:
        color = self.COLORS.get(record.levelname, "")
        timestamp = datetime.now(timezone.utc).strftime("%H:%M:%S")

        parts = [
            f"{color}[{timestamp}]",
            f"[{record.levelname}]",
            f"{self.RESET}{record.getMessage()}",
        ]

        context = getattr(record, "context", None)
        if context:
            context_str = " ".join(f"{k}={v}" for k, v in self.ordered_items(context))
            if context_str:
                parts.append(f"\033[90m({context_str}){self.RESET}")

        return " ".join(parts)


# ============================================================
# FUNCTION TIMING DECORATOR
# ============================================================

def timed(logger: StructuredLogger, **fields):
    """Decorator to log function execution time"""
    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            start = time.time()
            try:
                result = func(*args, **kwargs)
                logger.debug(
                    f"{func.__name__} completed",
                    function=func.__name__,
                    duration_ms=round((time.time() - start) * 1000, 2),
                    **fields,
                )
                return result
            except Exception as e:
                logger.error(
                    f"{func.__name__} failed",
                    error=e,
                    function=func.__name__,
                    duration_ms=round((time.time() - start) * 1000, 2),
                    **fields,
                )
                raise

        return wrapper

    return decorator


# ============================================================
# LOGGER INSTANCES
# ============================================================

api_logger = StructuredLogger("lira.api")
ai_logger = StructuredLogger("lira.ai")
db_logger = StructuredLogger("lira.db")


def get_logger(name: str) -> StructuredLogger:
    """Get or create a logger by name"""
    return StructuredLogger(f"lira.{name}")
