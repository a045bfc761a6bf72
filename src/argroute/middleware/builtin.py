"""Built-in middleware: command logging.

Logs each dispatched command before and after the handler runs, and
logs (then re-raises) anything the handler raises.
"""

import logging
import time
from dataclasses import dataclass
from typing import Any

from argroute.middleware.protocol import Next
from argroute.request import Request

logger = logging.getLogger("argroute.commands")


@dataclass(frozen=True, slots=True)
class CommandLogConfig:
    """Command logging configuration.

    Override what you need::

        CommandLogConfig(level=logging.INFO, log_extra=False)
    """

    level: int = logging.DEBUG
    log_params: bool = True
    log_extra: bool = True
    logger_name: str | None = None  # None = "argroute.commands"


class CommandLogMiddleware:
    """Log command start, duration, and failures.

    Usage::

        router.build(lambda b: b.with_middleware(CommandLogMiddleware()).handle(
            "deploy <env>", "Deploy", deploy,
        ))

    Exceptions are logged with their traceback and re-raised unchanged.
    """

    __slots__ = ("_logger", "config")

    def __init__(self, config: CommandLogConfig | None = None) -> None:
        self.config = config or CommandLogConfig()
        self._logger = (
            logging.getLogger(self.config.logger_name) if self.config.logger_name else logger
        )

    def _describe(self, request: Request) -> str:
        parts = [" ".join(request.args) or "<empty>"]
        if self.config.log_params and request.params:
            parts.append(f"params={request.params!r}")
        if self.config.log_extra and request.extra:
            parts.append(f"extra={list(request.extra)!r}")
        return " ".join(parts)

    def __call__(self, request: Request, next: Next) -> Any:
        cfg = self.config
        described = self._describe(request)
        self._logger.log(cfg.level, "running %s", described)
        start = time.monotonic()
        try:
            result = next(request)
        except Exception:
            elapsed = time.monotonic() - start
            self._logger.exception("failed %s after %.3fs", described, elapsed)
            raise
        elapsed = time.monotonic() - start
        self._logger.log(cfg.level, "finished %s in %.3fs", described, elapsed)
        return result
