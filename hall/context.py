from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import Callable

from .config import Config
from .db import RecordDB


def today_utc() -> date:
    return datetime.now(timezone.utc).date()


@dataclass
class AppContext:
    """Everything a request needs: built once at startup, then shared read-only."""

    config: Config
    db: RecordDB
    clock: Callable[[], date] = field(default=today_utc)

    @classmethod
    def from_config(cls, config: Config) -> "AppContext":
        return cls(config=config, db=RecordDB(config.database_path))
