"""structlog setup for dnastore.

Codec and slot record events go through structlog loggers bound to the
library name and version. ``configure_logging`` installs one stdlib handler
whose renderer (JSON or console) and level come from a ``CodecConfig``.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any, Iterator, cast

import structlog
from structlog.dev import ConsoleRenderer
from structlog.stdlib import BoundLogger
from structlog.types import Processor

if TYPE_CHECKING:
    from dnastore.config import CodecConfig

LIBRARY_NAME = "dnastore"


def _package_version() -> str:
    try:
        from dnastore import __version__
    except ImportError:
        return "unknown"
    return __version__


def _coerce_level(level: str | int) -> int:
    """Translate a string/int level into the numeric logging level."""
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if isinstance(resolved, str):
            raise ValueError(f"Invalid log level: {level}")
        return int(resolved)
    return int(level)


def _shared_processors() -> list[Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]


def build_renderer(json_output: bool) -> Processor:
    """Final processor of the handler: one JSON object or one console line per event."""
    if json_output:
        return structlog.processors.JSONRenderer(sort_keys=True)
    return ConsoleRenderer(colors=False)


def configure_logging(config: "CodecConfig | None" = None) -> None:
    """Apply ``config.log_level`` and ``config.json_logs`` to structlog and stdlib logging.

    Without a config the defaults of ``CodecConfig`` are used. Warnings are
    captured too, so ``SlotOverridden`` notices land in the same stream as
    codec events.
    """
    if config is None:
        from dnastore.config import CodecConfig

        config = CodecConfig()

    shared = _shared_processors()
    structlog.configure(
        processors=[
            *shared,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler()
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=build_renderer(config.json_logs),
            foreign_pre_chain=shared,
        )
    )
    logging.basicConfig(level=_coerce_level(config.log_level), handlers=[handler], force=True)
    logging.captureWarnings(True)


def get_logger(name: str) -> BoundLogger:
    """Return a structlog logger tagged with the library name and version."""
    return cast(
        BoundLogger,
        structlog.get_logger(name).bind(
            library=LIBRARY_NAME,
            version=_package_version(),
        ),
    )


@contextmanager
def log_context(**kwargs: Any) -> Iterator[None]:
    """Bind fields such as the file path to every event logged inside the block."""
    with structlog.contextvars.bound_contextvars(**kwargs):
        yield
