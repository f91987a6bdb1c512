from __future__ import annotations

import json
import logging
import sys
import time
from pathlib import Path
from typing import Any, Dict, List, Optional

_CONSOLE_FORMAT = "[%(asctime)s] %(levelname)s %(message)s"
_CONSOLE_DATEFMT = "%Y-%m-%d %H:%M:%S"


class JsonLogFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:  # noqa: D401
        payload: Dict[str, Any] = {
            "ts": time.time(),
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


def configure_logging(
    log_path: Optional[Path],
    *,
    verbose: bool = False,
    name: str = "xcheader",
) -> logging.Logger:
    """Attach a console handler and, when possible, a JSONL file handler."""

    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    handlers[0].setFormatter(logging.Formatter(_CONSOLE_FORMAT, _CONSOLE_DATEFMT))
    if log_path is not None:
        try:
            log_path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(log_path, encoding="utf-8")
        except OSError as exc:
            logger.warning("Cannot open log file %s: %s", log_path, exc)
        else:
            file_handler.setFormatter(JsonLogFormatter())
            handlers.append(file_handler)
    for handler in handlers:
        logger.addHandler(handler)
    logger.propagate = False
    return logger
