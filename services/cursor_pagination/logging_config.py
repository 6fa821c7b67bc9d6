"""
Logging configuration for cursor pagination.

structlog over the standard library logger. Entries render as JSON lines, or
as a single readable text line when ``log_format`` is ``text``:

    2024-01-01T00:00:00Z [records-api] [INFO] cursor_pagination.paginator - Paged | size=3

Usage:
    from services.cursor_pagination.logging_config import setup_service_logging

    setup_service_logging("records-api", log_level="DEBUG", log_format="text")
"""

import logging
import sys
from typing import Any, List, Optional

import structlog

_PACKAGE_PREFIX = "services."


def add_service_context(
    logger: structlog.types.WrappedLogger,
    method_name: str,
    event_dict: structlog.types.EventDict,
) -> structlog.types.EventDict:
    """Tag entries from ``services.<name>...`` loggers with ``service=<name>``."""
    root, _, rest = event_dict.get("logger", "").partition(".")
    if root == "services" and rest:
        event_dict.setdefault("service", rest.split(".", 1)[0])
    return event_dict


class TextLineRenderer:
    """Render one entry per line: header fields first, remaining keys as ``k=v``."""

    max_value_length = 150

    def __init__(self, service_name: str):
        self.service_name = service_name

    def __call__(
        self,
        logger: structlog.types.WrappedLogger,
        method_name: str,
        event_dict: structlog.types.EventDict,
    ) -> str:
        entry = dict(event_dict)
        logger_name = entry.pop("logger", "")
        if logger_name.startswith(_PACKAGE_PREFIX):
            logger_name = logger_name[len(_PACKAGE_PREFIX) :]

        line = " ".join(
            part
            for part in (
                entry.pop("timestamp", ""),
                f"[{entry.pop('service', self.service_name)}]",
                f"[{entry.pop('level', method_name).upper()}]",
                logger_name,
                f"- {entry.pop('event', '')}",
            )
            if part
        )
        if entry:
            context = ", ".join(f"{k}={self._short(v)}" for k, v in entry.items())
            line = f"{line} | {context}"
        return line

    def _short(self, value: Any) -> str:
        text = str(value)
        if isinstance(value, (str, int, float, bool)) or value is None:
            return text
        return text[: self.max_value_length]


def _processors(service_name: str, log_format: str) -> List[Any]:
    renderer = (
        structlog.processors.JSONRenderer()
        if log_format == "json"
        else TextLineRenderer(service_name)
    )
    return [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        add_service_context,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        renderer,
    ]


def setup_service_logging(
    service_name: str,
    log_level: Optional[str] = None,
    log_format: Optional[str] = None,
) -> None:
    """
    Route structlog through a stdout handler on the root logger.

    ``log_level`` and ``log_format`` fall back to ``PaginationSettings``.
    Calling this again replaces the previous configuration.
    """
    from services.cursor_pagination.settings import get_settings

    settings = get_settings()
    log_level = (log_level or settings.pagination_log_level).upper()
    log_format = (log_format or settings.pagination_log_format).lower()

    structlog.configure(
        processors=_processors(service_name, log_format),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logging.basicConfig(level=log_level, handlers=[handler], force=True)

    get_logger(__name__).info(
        "Logging configured", service_name=service_name, log_format=log_format
    )


def get_logger(name: str, **initial_values: Any) -> structlog.BoundLogger:
    """structlog logger for ``name``, bound to ``initial_values``."""
    return structlog.get_logger(name, **initial_values)
