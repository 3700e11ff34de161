"""Logging setup with document-number redaction.

Classifier and suite code already avoid logging raw input; the
``DocumentNumberFilter`` on the console handler is the second line: any
passport-, SNILS-, VIN- or plate-shaped token in a message or its args is
replaced with ``[REDACTED]`` before it is formatted.
"""
import logging
import logging.config
import re

REDACTED = "[REDACTED]"

DOCUMENT_NUMBER_PATTERNS = [
    # 6+ digits, optionally split by single spaces or dashes (passport, INN, OGRN, SNILS)
    re.compile(r"\b\d(?:[\s-]?\d){5,}\b"),
    # VIN-shaped
    re.compile(r"\b[A-Z0-9]{17}\b"),
    # registration plate, either alphabet's look-alikes
    re.compile(r"(?i)\b[АВЕКМНОРСТУХABEKMHOPCTYX]\d{3}[АВЕКМНОРСТУХABEKMHOPCTYX]{2}\d{2,3}\b"),
]

# ``input=...`` / ``raw_input: ...`` keeps its key, loses its value.
INPUT_ASSIGNMENT_PATTERN = re.compile(r"(?i)((?:raw_)?input\s*[=:]\s*)([^,\s]+)")


def redact(text: str) -> str:
    for pattern in DOCUMENT_NUMBER_PATTERNS:
        text = pattern.sub(REDACTED, text)
    return INPUT_ASSIGNMENT_PATTERN.sub(rf"\1{REDACTED}", text)


class DocumentNumberFilter(logging.Filter):
    def _sanitize(self, value: object) -> object:
        return redact(value) if isinstance(value, str) else value

    def filter(self, record: logging.LogRecord) -> bool:
        record.msg = self._sanitize(record.msg)

        if isinstance(record.args, tuple):
            record.args = tuple(self._sanitize(item) for item in record.args)
        elif isinstance(record.args, dict):
            record.args = {key: self._sanitize(value) for key, value in record.args.items()}

        return True


def build_logging_config(level: str, redact_document_numbers: bool = True) -> dict:
    """Return the ``dictConfig`` mapping used by ``setup_logging()``."""
    console: dict = {
        "class": "logging.StreamHandler",
        "formatter": "default",
    }
    if redact_document_numbers:
        console["filters"] = ["document_numbers"]

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "filters": {
            "document_numbers": {"()": "docid.core.logging.DocumentNumberFilter"},
        },
        "formatters": {
            "default": {"format": "%(asctime)s %(levelname)s %(name)s %(message)s"},
        },
        "handlers": {"console": console},
        "loggers": {
            "": {"handlers": ["console"], "level": level.upper()},
            "uvicorn.access": {"handlers": ["console"], "level": "WARNING", "propagate": False},
        },
    }


def setup_logging() -> None:
    from docid.core.settings import get_settings

    settings = get_settings()
    logging.config.dictConfig(
        build_logging_config(settings.log_level, settings.redact_document_numbers)
    )
