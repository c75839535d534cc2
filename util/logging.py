"""
Structured logging for the dashboard state layer.
Persistence failures and state mutations are reported here and nowhere else.
"""

import logging
from typing import Any, Dict, List

SENSITIVE_FIELDS = ['email', 'password', 'secret', 'token', 'value', 'payload']


class StructuredLogger:
    """Structured logger for store operations and state-container mutations."""

    def __init__(self, name: str = "zervos"):
        self.logger = logging.getLogger(name)
        self.logger.setLevel(logging.INFO)

        # Create handler if not already set
        if not self.logger.handlers:
            handler = logging.StreamHandler()
            formatter = logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
            )
            handler.setFormatter(formatter)
            self.logger.addHandler(handler)

    def log_operation(self, operation: str, status: str, details: Dict[str, Any] = None, level: int = logging.INFO):
        """Log a structured operation."""
        message = f"Operation: {operation}, Status: {status}"
        if details:
            message += f", Details: {details}"

        self.logger.log(level, message)

    def log_store_failure(self, operation: str, key: str = None, error: Any = None, kind: str = "unavailable"):
        """Log a SafeStore failure that was absorbed and turned into a fallback."""
        details = {"kind": kind}
        if key is not None:
            details["key"] = key
        if error is not None:
            details["error"] = f"{type(error).__name__}: {str(error)[:100]}"

        self.log_operation(f"store.{operation}", "fallback", details, level=logging.WARNING)

    def log_state_change(self, component: str, action: str, details: Dict[str, Any] = None):
        """Log a state-container mutation with sensitive fields redacted."""
        log_details = sanitize_payload(details) if details else {}
        self.log_operation(f"{component}.{action}", "applied", log_details, level=logging.DEBUG)

    def log_decode_issues(self, record: str, errors: List[str]):
        """Log lenient-decode problems for a persisted record."""
        details = {
            "record": record,
            "error_count": len(errors),
            "errors": [str(e)[:100] for e in errors[:5]]
        }
        self.log_operation("codec.decode", "degraded", details, level=logging.WARNING)

    # Standard logging methods for compatibility
    def info(self, message: str) -> None:
        """Log an info message."""
        self.logger.info(message)

    def warning(self, message: str) -> None:
        """Log a warning message."""
        self.logger.warning(message)

    def error(self, message: str) -> None:
        """Log an error message."""
        self.logger.error(message)

    def debug(self, message: str) -> None:
        """Log a debug message."""
        self.logger.debug(message)


def sanitize_payload(payload: Any, reveal_sensitive: bool = False, sensitive_fields: List[str] = None) -> Any:
    """Sanitize payloads for logging."""
    if sensitive_fields is None:
        sensitive_fields = SENSITIVE_FIELDS

    if isinstance(payload, dict):
        sanitized = {}
        for k, v in payload.items():
            if reveal_sensitive or k not in sensitive_fields:
                sanitized[k] = sanitize_payload(v, reveal_sensitive, sensitive_fields)
            else:
                sanitized[k] = "[REDACTED]"
        return sanitized
    elif isinstance(payload, str):
        # Truncate long strings
        return payload[:100] + "..." if len(payload) > 100 else payload
    elif isinstance(payload, list):
        return [sanitize_payload(item, reveal_sensitive, sensitive_fields) for item in payload]
    else:
        return payload


# Global logger instance
logger = StructuredLogger()
