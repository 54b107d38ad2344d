from __future__ import annotations

import json
import logging

import pytest
from pydantic import ValidationError

from hall.config import load_config, parse_admin_keys
from hall.logsetup import configure_logging


def test_defaults_without_file_or_env(tmp_path) -> None:
    cfg = load_config(tmp_path / "missing.json", environ={})
    assert cfg.project_name == "Hall of Fame"
    assert cfg.server.port == 8000
    assert cfg.admin_keys is None
    assert cfg.admin_enabled is False


def test_json_file_then_env_overrides(tmp_path) -> None:
    path = tmp_path / "config.json"
    path.write_text(
        json.dumps(
            {
                "project_name": "Acme",
                "server": {"host": "0.0.0.0", "port": 9000},
                "admin_keys": [{"username": "ops", "key": "from-file"}],
            }
        ),
        encoding="utf-8",
    )
    cfg = load_config(path, environ={"HALL_PORT": "9100", "HALL_PUBLIC_LISTING": "yes"})
    assert cfg.project_name == "Acme"
    assert cfg.server.host == "0.0.0.0"
    assert cfg.server.port == 9100
    assert cfg.public_listing is True
    assert [k.username for k in cfg.admin_keys] == ["ops"]

    cfg = load_config(path, environ={"HALL_ADMIN_KEYS": "alice:a:b, bob:c"})
    assert [(k.username, k.key) for k in cfg.admin_keys] == [("alice", "a:b"), ("bob", "c")]


def test_hall_config_env_points_at_file(tmp_path) -> None:
    path = tmp_path / "other.json"
    path.write_text(json.dumps({"project_name": "Other"}), encoding="utf-8")
    assert load_config(environ={"HALL_CONFIG": str(path)}).project_name == "Other"


def test_default_config_file_is_read_from_working_directory(tmp_path, monkeypatch) -> None:
    (tmp_path / "config.json").write_text(
        json.dumps({"project_name": "Cwd", "admin_keys": [{"username": "ops", "key": "k"}]}),
        encoding="utf-8",
    )
    monkeypatch.chdir(tmp_path)
    cfg = load_config(environ={})
    assert cfg.project_name == "Cwd"
    assert cfg.admin_enabled is True


def test_empty_admin_keys_env_disables_admin(tmp_path) -> None:
    cfg = load_config(tmp_path / "missing.json", environ={"HALL_ADMIN_KEYS": ""})
    assert cfg.admin_keys == []
    assert cfg.admin_enabled is False


@pytest.mark.parametrize("raw", ["alice", "alice:", ":secret"])
def test_parse_admin_keys_rejects_bad_entries(raw) -> None:
    with pytest.raises(ValueError):
        parse_admin_keys(raw)


def test_invalid_port_fails_loudly(tmp_path) -> None:
    with pytest.raises(ValidationError):
        load_config(tmp_path / "missing.json", environ={"HALL_PORT": "70000"})


def test_configure_logging_writes_file(tmp_path) -> None:
    log = configure_logging(tmp_path / "logs", "debug")
    logging.getLogger("hall.store").debug("hello from test")
    for handler in log.handlers:
        handler.flush()
    assert "hello from test" in (tmp_path / "logs" / "hall.log").read_text(encoding="utf-8")
    for handler in list(log.handlers):
        log.removeHandler(handler)
        handler.close()


def test_configure_logging_rejects_unknown_level(tmp_path) -> None:
    with pytest.raises(ValueError):
        configure_logging(tmp_path / "logs", "loud")
