import logging
import re

_LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

# OpenAI-style secret keys and bearer tokens
_SECRET_RE = re.compile(r"(Bearer\s+)[^\s\"']+|\bsk-[A-Za-z0-9_\-]{8,}")


def redact_secrets(text: str) -> str:
    """Mask provider keys and bearer tokens inside ``text``."""

    def _mask(m: re.Match[str]) -> str:
        if m.group(1):
            return f"{m.group(1)}***"
        return "sk-***"

    return _SECRET_RE.sub(_mask, text)


class SecretRedactingFilter(logging.Filter):
    """Rewrite records so provider credentials never reach a handler."""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        cleaned = redact_secrets(message)
        if cleaned != message:
            record.msg = cleaned
            record.args = None
        return True


def configure_logging(level: str = "INFO") -> None:
    """Initialize or update the root logger with our canonical format."""
    desired_level = getattr(logging, level.upper(), logging.INFO)
    root = logging.getLogger()
    if root.handlers:
        root.setLevel(desired_level)
        for handler in root.handlers:
            handler.setLevel(desired_level)
            if not any(isinstance(f, SecretRedactingFilter) for f in handler.filters):
                handler.addFilter(SecretRedactingFilter())
        return
    logging.basicConfig(level=desired_level, format=_LOG_FORMAT)
    for handler in root.handlers:
        handler.addFilter(SecretRedactingFilter())
    logging.getLogger("bridal").info("Logging configured: level=%s", level)
