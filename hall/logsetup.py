from __future__ import annotations

import logging
import sys
from pathlib import Path

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
LOG_FILE_NAME = "hall.log"


def _parse_level(raw: str) -> int:
    level = logging.getLevelName(str(raw or "info").strip().upper())
    if not isinstance(level, int):
        raise ValueError(f"unknown logging level: {raw!r}")
    return level


def configure_logging(log_dir: str | Path, level: str = "info") -> logging.Logger:
    """
    Log everything at `level` and above to <log_dir>/hall.log, and duplicate
    INFO and above to stderr.
    """
    root = logging.getLogger("hall")
    root.setLevel(_parse_level(level))
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT)

    directory = Path(log_dir)
    directory.mkdir(parents=True, exist_ok=True)
    file_handler = logging.FileHandler(directory / LOG_FILE_NAME, encoding="utf-8")
    file_handler.setFormatter(formatter)
    root.addHandler(file_handler)

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setLevel(logging.INFO)
    stderr_handler.setFormatter(formatter)
    root.addHandler(stderr_handler)
    return root
