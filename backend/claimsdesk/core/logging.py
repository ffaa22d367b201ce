"""
Logging configuration with field masking for employee contact data
"""
import logging
import re

from claimsdesk.core.config import settings


# Patterns to mask in logs
MASK_PATTERNS = [
    (r'"employee_email":\s*"[^"]*"', '"employee_email": "***@***"'),
    (r"'employee_email':\s*'[^']*'", "'employee_email': '***@***'"),
    (r"[a-zA-Z0-9._%+-]+@(gmail|outlook)\.com", "***@***"),
]


class MaskingFormatter(logging.Formatter):
    """Custom formatter that masks sensitive fields."""

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        for pattern, replacement in MASK_PATTERNS:
            message = re.sub(pattern, replacement, message, flags=re.IGNORECASE)
        return message


def setup_logging() -> logging.Logger:
    """Configure application logging."""
    logger = logging.getLogger("claimsdesk")
    logger.setLevel(logging.DEBUG if settings.DEBUG else logging.INFO)

    # Reloads (uvicorn --reload, test re-imports) must not stack handlers
    if not logger.handlers:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(logging.DEBUG if settings.DEBUG else logging.INFO)
        console_handler.setFormatter(
            MaskingFormatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        )
        logger.addHandler(console_handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Child logger under the application logger."""
    if name.startswith("claimsdesk"):
        return logging.getLogger(name)
    return logging.getLogger(f"claimsdesk.{name}")


# Global logger instance
logger = setup_logging()
