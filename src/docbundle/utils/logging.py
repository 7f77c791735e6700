from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Optional

ROOT_LOGGER = "docbundle"

# pypdf warns about every malformed source PDF; the merger already reports those files
THIRD_PARTY_LEVELS = {
    "pypdf": logging.ERROR,
    "urllib3": logging.WARNING,
}


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "ts": datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z",
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


def setup_logging(level: str | None = None, json_output: bool = False) -> None:
    """
    Configure the root logger for the docbundle CLI: one stderr handler
    (stdout carries the saved file names), text or JSON lines.
    """
    lvl = getattr(logging, (level or "INFO").upper(), logging.INFO)
    root = logging.getLogger()
    # Clear existing handlers (avoid duplicates)
    for h in list(root.handlers):
        root.removeHandler(h)

    handler = logging.StreamHandler(stream=sys.stderr)
    if json_output:
        fmt = JsonFormatter()
    else:
        fmt = logging.Formatter(
            fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    handler.setFormatter(fmt)
    root.addHandler(handler)
    root.setLevel(lvl)

    for name, quiet_level in THIRD_PARTY_LEVELS.items():
        # DEBUG runs see everything
        logging.getLogger(name).setLevel(logging.NOTSET if lvl <= logging.DEBUG else quiet_level)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Logger under the `docbundle` namespace; `get_logger("merger")` -> docbundle.merger."""
    if not name or name == ROOT_LOGGER:
        return logging.getLogger(ROOT_LOGGER)
    if not name.startswith(ROOT_LOGGER + "."):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)
