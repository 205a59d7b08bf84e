"""Logging filter for redacting sensitive data from log messages."""

import logging
import re
from typing import Pattern


class SensitiveDataFilter(logging.Filter):
    """Filter to redact sensitive data from log messages.

    Redacts:
    - Google API keys and the service API key
    - Authorization and X-API-Key headers
    - Bearer tokens
    """

    def __init__(self):
        super().__init__()

        # More specific patterns come first
        self.patterns: list[tuple[Pattern, str]] = [
            (
                re.compile(r"(?i)(Authorization):\s+(Bearer\s+)?([^\s,]+)"),
                r"\1: ***REDACTED***",
            ),
            (
                re.compile(r"(?i)(X-API-Key):\s*([^\s,]+)"),
                r"\1: ***REDACTED***",
            ),
            # Environment variable assignments (e.g., GOOGLE_API_KEY=abc123)
            (
                re.compile(r"(?i)(GOOGLE_API_KEY|API_KEY)=([^\s,\)]+)"),
                r"\1=***REDACTED***",
            ),
            (
                re.compile(
                    r"(?i)(api[_-]?key|apikey|token|secret|password)['\"]?\s*[:=]\s*['\"]?"
                    r"([A-Za-z0-9_\-\.]{20,})"
                ),
                r"\1=***REDACTED***",
            ),
            (
                re.compile(r"(?i)\bBearer\s+([A-Za-z0-9_\-\.=]+)"),
                r"Bearer ***REDACTED***",
            ),
            # Google API keys appearing on their own
            (
                re.compile(r"\bAIza[A-Za-z0-9_\-]{15,}\b"),
                r"***REDACTED***",
            ),
        ]

    def filter(self, record: logging.LogRecord) -> bool:
        """Redact the record in place and always let it through."""
        if record.msg:
            record.msg = self.redact(str(record.msg))

        # Redact args (used in % formatting)
        if record.args:
            if isinstance(record.args, dict):
                record.args = {k: self._redact_value(v) for k, v in record.args.items()}
            elif isinstance(record.args, tuple):
                record.args = tuple(self._redact_value(arg) for arg in record.args)

        if record.exc_text:
            record.exc_text = self.redact(record.exc_text)

        return True

    def _redact_value(self, value):
        # Only strings, so numeric %d arguments keep working
        if isinstance(value, str):
            return self.redact(value)
        return value

    def redact(self, text: str) -> str:
        """Apply redaction patterns to text.

        Args:
            text: Text to redact

        Returns:
            Text with sensitive data redacted
        """
        for pattern, replacement in self.patterns:
            text = pattern.sub(replacement, text)
        return text
