"""Logging setup for Finshare.

Everything logs through a single ``finshare`` logger wrapped in a
``ContextualLogger``. Call ``with_context`` to get a child logger that stamps
extra dimensions (requester, owner, record id...) onto every line.

Records are rendered by structlog processors: local runs get the console
renderer, every other environment emits one JSON object per line.
"""

import logging
import sys
from typing import Any, MutableMapping

import structlog

from finshare.core.config import settings

_TIME_STAMPER = structlog.processors.TimeStamper(fmt="iso", key="timestamp", utc=True)

_PRE_CHAIN: list[structlog.types.Processor] = [
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    structlog.stdlib.ExtraAdder(),
    _TIME_STAMPER,
]


def build_formatter(json_output: bool) -> structlog.stdlib.ProcessorFormatter:
    """Formatter that runs stdlib records through the structlog chain."""
    if json_output:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)
    return structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.processors.format_exc_info,
            renderer,
        ],
        foreign_pre_chain=_PRE_CHAIN,
    )


class ContextualLogger(logging.LoggerAdapter):
    """Logger adapter that carries a dict of context dimensions."""

    def __init__(self, logger: logging.Logger, extra: dict[str, Any] | None = None):
        """Wrap ``logger`` with an initial set of dimensions."""
        super().__init__(logger, dict(extra or {}))

    def process(self, msg: Any, kwargs: MutableMapping[str, Any]) -> tuple[Any, MutableMapping[str, Any]]:
        """Merge the adapter dimensions with any per-call ``extra``."""
        kwargs["extra"] = {**self.extra, **(kwargs.get("extra") or {})}
        return msg, kwargs

    def with_context(self, **dimensions: Any) -> "ContextualLogger":
        """Return a child logger with ``dimensions`` added to the current ones."""
        return ContextualLogger(self.logger, {**self.extra, **dimensions})


def _build_logger() -> ContextualLogger:
    base = logging.getLogger("finshare")
    if not base.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(build_formatter(json_output=not settings.is_local))
        base.addHandler(handler)
    base.setLevel(settings.LOG_LEVEL)
    return ContextualLogger(base)


logger = _build_logger()
