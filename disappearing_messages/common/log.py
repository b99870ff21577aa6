# Disappearing Messages Logging Module
# Meaningful logging functions for the timer token and its collaborators

import logging
import sys
import os
from typing import Optional, Dict, Any

from contextvars import ContextVar


# Custom TRACE level (lower than DEBUG)
TRACE_LEVEL = 5
logging.addLevelName(TRACE_LEVEL, "TRACE")

# Convenience constants for log levels
TRACE = TRACE_LEVEL
DEBUG = logging.DEBUG
INFO = logging.INFO
WARNING = logging.WARNING
ERROR = logging.ERROR
CRITICAL = logging.CRITICAL

class TokenFormatter(logging.Formatter):
    """Custom formatter that adds caller context and colors for different log levels."""

    # Color codes for different log levels
    COLORS = {
        'TRACE': '\033[90m',    # Dark gray
        'DEBUG': '\033[36m',    # Cyan
        'INFO': '\033[0m',      # Default
        'WARNING': '\033[33m',  # Yellow
        'ERROR': '\033[31m',    # Red
        'CRITICAL': '\033[91m', # Bright red
        'RESET': '\033[0m'      # Reset color
    }

    def format(self, record):
        # Add caller context (file:function:line)
        if hasattr(record, 'pathname') and hasattr(record, 'funcName'):
            filename = record.pathname.split('/')[-1].split('\\')[-1]
            record.caller_context = f"{filename}:{record.funcName}:{record.lineno}"
        else:
            record.caller_context = "unknown"

        # Add color coding if terminal supports it
        if hasattr(sys.stderr, 'isatty') and sys.stderr.isatty():
            color = self.COLORS.get(record.levelname, self.COLORS['RESET'])
            record.levelname = f"{color}{record.levelname}{self.COLORS['RESET']}"

        return super().format(record)


LEVEL_MAP = {
    'TRACE': TRACE_LEVEL,
    'DEBUG': logging.DEBUG,
    'INFO': logging.INFO,
    'WARNING': logging.WARNING,
    'ERROR': logging.ERROR,
    'CRITICAL': logging.CRITICAL
}

def resolve_level(name: Optional[str], default: int = logging.INFO) -> int:
    """Map a level name (case-insensitive) to its numeric value."""
    if not name:
        return default
    return LEVEL_MAP.get(name.upper(), default)

def apply_log_level(name: Optional[str]) -> int:
    """Set the root logger level from a level name, e.g. the configured LOG_LEVEL."""
    level = resolve_level(name)
    logging.root.setLevel(level)
    return level

# Bootstrap level from the process environment, config.py re-applies LOG_LEVEL once .env is read
log_level = os.getenv('LOG_LEVEL', 'INFO').upper()

logging.basicConfig(
    format="%(asctime)s - %(name)s - %(levelname)s - %(caller_context)s - %(message)s",
    level=resolve_level(log_level)
)

logger = logging.getLogger(__name__)

token_formatter = TokenFormatter(
    "%(asctime)s - %(name)s - %(levelname)s - %(caller_context)s - %(message)s"
)

# Apply custom formatter to all handlers
for handler in logging.root.handlers:
    handler.setFormatter(token_formatter)

# Suppress verbose logging from external libraries
telethon_logger = logging.getLogger("telethon")
telethon_logger.setLevel(logging.WARNING)


conversation_id: ContextVar[Optional[str]] = ContextVar('conversation_id', default=None)

def set_conversation_context(thread_id: Optional[str] = None):
    """Set the conversation being processed - appended to token log messages."""
    conversation_id.set(thread_id)

def get_context_suffix() -> str:
    """Get current context info to append to log messages."""
    thread_id = conversation_id.get()
    if thread_id:
        return f" | conversation_id={thread_id}"
    return ""


# === TIMER TOKEN ===

def log_inconsistent_timer_input(field: str, supplied: Any, normalized: Any, level: int = logging.WARNING):
    context = get_context_suffix()
    logger.log(level,
        "[TOKEN] Inconsistent timer input: %s=%s normalized to %s%s",
        field, supplied, normalized, context
    )

def log_token_created(enabled: bool, duration_seconds: int, level: int = TRACE_LEVEL):
    context = get_context_suffix()
    logger.log(level, "[TOKEN] Timer token created: enabled=%s, duration_seconds=%d%s", enabled, duration_seconds, context)

def log_token_imported(enabled: bool, duration_seconds: int, level: int = logging.DEBUG):
    logger.log(level, "[TOKEN] Timer token imported: enabled=%s, duration_seconds=%d", enabled, duration_seconds)


# === CONFIGURATION RECORDS ===

def log_configuration_derived(thread_id: str, duration: str, level: int = logging.DEBUG):
    logger.log(level, "[CONFIG] Token derived from configuration: thread_id=%s, timer=%s", thread_id, duration)

def log_configuration_updated(thread_id: str, old_duration: str, new_duration: str, level: int = logging.INFO):
    logger.log(level, "[CONFIG] Configuration updated: thread_id=%s, timer %s -> %s", thread_id, old_duration, new_duration)

def log_non_preset_timer(thread_id: str, duration_seconds: int, level: int = logging.INFO):
    logger.log(level, "[CONFIG] Timer is not one of the presets: thread_id=%s, duration_seconds=%d", thread_id, duration_seconds)


# === TELEGRAM PROTOCOL ===

def log_protocol_timer_received(message_id: Optional[int], expire_timer: int, level: int = logging.DEBUG):
    if message_id is not None:
        logger.log(level, "[PROTOCOL] Expiration timer received: message_id=%s, ttl_period=%d", message_id, expire_timer)
    else:
        logger.log(level, "[PROTOCOL] Expiration timer received: ttl_period=%d", expire_timer)

def log_set_ttl_request_built(period: int, level: int = logging.DEBUG):
    logger.log(level, "[PROTOCOL] SetHistoryTTL request built: period=%d", period)


# === ERROR HANDLING ===

def log_validation_error(operation: str, error: str, context: Optional[Dict[str, Any]] = None, level: int = logging.ERROR):
    if context:
        logger.log(level, "[VALIDATION] %s validation failed: %s, context: %s", operation, error, context)
    else:
        logger.log(level, "[VALIDATION] %s validation failed: %s", operation, error)
