from __future__ import annotations

from datetime import date

import pytest

from hall.config import AdminKey, Config
from hall.context import AppContext
from hall.db import RecordDB

FIXED_DAY = date(2019, 5, 14)


@pytest.fixture()
def admin_keys() -> list[AdminKey]:
    return [
        AdminKey(username="alice", key="alice-secret-key"),
        AdminKey(username="bob", key="bob-secret-key"),
    ]


@pytest.fixture()
def config(tmp_path, admin_keys) -> Config:
    return Config(
        project_name="Pytest",
        logging_dir=str(tmp_path / "logs"),
        database_path=str(tmp_path / "records.db"),
        static_dir=str(tmp_path / "static"),
        admin_keys=admin_keys,
    )


@pytest.fixture()
def ctx(config) -> AppContext:
    return AppContext(config=config, db=RecordDB(config.database_path), clock=lambda: FIXED_DAY)


@pytest.fixture()
def alice(admin_keys) -> AdminKey:
    return admin_keys[0]
