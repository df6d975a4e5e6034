import logging
from collections.abc import Mapping, MutableMapping
from typing import Any, Literal

import structlog

LogLevel = Literal["debug", "info", "warning", "error"]

# Keys whose values must never reach a log sink
SENSITIVE_KEYS = frozenset({"token", "auth_token", "password", "password_hash", "secret", "auth_secret"})
REDACTED = "[redacted]"

events_logger = structlog.get_logger("helpdesk.events")


def redact_sensitive(_: Any, __: str, event_dict: MutableMapping[str, Any]) -> MutableMapping[str, Any]:
    """Structlog processor replacing sensitive values with a placeholder."""
    for key in event_dict.keys() & SENSITIVE_KEYS:
        event_dict[key] = REDACTED
    return event_dict


def log_event(
    message: str,
    category: str,
    context: Mapping[str, Any] | None = None,
    level: LogLevel = "info",
    error: BaseException | None = None,
) -> None:
    """Emit one structured event tagged with a category (e.g. "auth", "ticket")."""
    data = {key: REDACTED if key in SENSITIVE_KEYS else value for key, value in (context or {}).items()}
    data.pop("event", None)
    if error is not None:
        data["exc_info"] = error
    getattr(events_logger, level)(message, category=category, **data)


def setup_logging(debug: bool) -> None:
    # Set log level based on debug mode
    log_level = logging.DEBUG if debug else logging.INFO

    # Configure standard library logging
    logging.basicConfig(
        level=log_level,
        format="%(message)s",
    )

    # Suppress verbose MongoDB logs
    for name in ("pymongo", "pymongo.topology", "pymongo.connection", "pymongo.command"):
        logging.getLogger(name).setLevel(logging.WARNING)

    # Base processors for all environments
    processors: list[structlog.types.Processor] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        redact_sensitive,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if debug:
        # Colored console output for development
        processors.append(structlog.dev.ConsoleRenderer())
    else:
        # JSON output for production
        processors.append(structlog.processors.JSONRenderer())

    structlog.configure(
        processors=processors,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
