"""strategy_engine.core.logging

Stdlib logging setup. Modules log through ``logging.getLogger(__name__)``;
the embedding application decides whether to call ``configure_logging``.
"""

from __future__ import annotations

import json
import logging

from strategy_engine.core.config import LoggingConfig

_ROOT = "strategy_engine"


class JsonFormatter(logging.Formatter):
    """One JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "ts": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        return json.dumps(payload, sort_keys=True)


def configure_logging(cfg: LoggingConfig | None = None) -> logging.Logger:
    """Attach a single stream handler to the package logger and return it."""

    cfg = cfg or LoggingConfig()
    logger = logging.getLogger(_ROOT)
    logger.setLevel(cfg.level.upper())

    for h in list(logger.handlers):
        logger.removeHandler(h)

    handler = logging.StreamHandler()
    if cfg.json_output:
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.propagate = False
    return logger
