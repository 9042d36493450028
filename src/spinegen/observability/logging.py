"""Structured logging setup: structlog on top of stdlib logging, JSON-lines output."""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from typing import IO, TYPE_CHECKING, Final

import structlog

if TYPE_CHECKING:
    from spinegen.config.schema import GenerationSettings

_DEFAULT_LOGGER_NAME: Final[str] = "spinegen"
_HANDLER_NAME: Final[str] = "spinegen-structured"

_SHARED_PROCESSORS: Final[tuple[structlog.typing.Processor, ...]] = (
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    structlog.processors.TimeStamper(fmt="iso", utc=True),
)


def configure_logging(
    level: int | str = "WARNING",
    *,
    json_output: bool = True,
    stream: IO[str] | None = None,
    logger_name: str = _DEFAULT_LOGGER_NAME,
) -> logging.Logger:
    """Route structlog events from ``logger_name`` to a single stream handler."""

    resolved_level = _parse_log_level(level)
    renderer: structlog.typing.Processor
    if json_output:
        renderer = structlog.processors.JSONRenderer(sort_keys=True)
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *_SHARED_PROCESSORS,
            structlog.processors.StackInfoRenderer(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=list(_SHARED_PROCESSORS),
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.processors.format_exc_info,
            renderer,
        ],
    )

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.set_name(_HANDLER_NAME)
    handler.setLevel(resolved_level)
    handler.setFormatter(formatter)

    logger = logging.getLogger(logger_name)
    for existing in list(logger.handlers):
        if existing.get_name() == _HANDLER_NAME:
            logger.removeHandler(existing)
            existing.close()
    logger.addHandler(handler)
    logger.setLevel(resolved_level)
    logger.propagate = False
    return logger


def configure_logging_from_settings(
    settings: GenerationSettings,
    *,
    stream: IO[str] | None = None,
) -> logging.Logger:
    return configure_logging(settings.log_level, json_output=settings.log_json, stream=stream)


def reset_logging(logger_name: str = _DEFAULT_LOGGER_NAME) -> None:
    """Remove the structured handler and restore structlog defaults."""

    logger = logging.getLogger(logger_name)
    for existing in list(logger.handlers):
        if existing.get_name() == _HANDLER_NAME:
            logger.removeHandler(existing)
            existing.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
    structlog.contextvars.clear_contextvars()
    structlog.reset_defaults()


@contextmanager
def generation_scope(**fields: object) -> Iterator[None]:
    """Bind correlation fields (seed, property name, ...) for events in scope."""

    with structlog.contextvars.bound_contextvars(**fields):
        yield


def _parse_log_level(value: int | str) -> int:
    if isinstance(value, int):
        return value

    if not isinstance(value, str):
        raise ValueError(f"level must be int or str, got {type(value).__name__}")

    normalized = value.strip().upper()
    parsed = logging.getLevelNamesMapping().get(normalized)
    if parsed is None:
        raise ValueError(f"unsupported logging level {value!r}")
    return parsed


__all__ = [
    "configure_logging",
    "configure_logging_from_settings",
    "generation_scope",
    "reset_logging",
]
