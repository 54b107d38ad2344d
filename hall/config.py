from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field

_TRUTHY = {"1", "true", "yes", "on"}
# relative to the working directory, like database_path and logging_dir
DEFAULT_CONFIG_PATH = Path("config.json")


class AdminKey(BaseModel, frozen=True):
    username: str = Field(min_length=1)
    key: str = Field(min_length=1)


class ServerConfig(BaseModel):
    host: str = "127.0.0.1"
    port: int = Field(default=8000, ge=1, le=65535)


class Config(BaseModel, frozen=True):
    project_name: str = "Hall of Fame"
    logging_dir: str = "logs"
    logging_level: str = "info"
    database_path: str = "records.db"
    static_dir: str = "static"
    public_listing: bool = False
    server: ServerConfig = Field(default_factory=ServerConfig)
    admin_keys: Optional[list[AdminKey]] = None

    @property
    def admin_enabled(self) -> bool:
        return bool(self.admin_keys)


def env_flag(raw: str) -> bool:
    return raw.strip().lower() in _TRUTHY


def parse_admin_keys(raw: str) -> list[dict[str, str]]:
    """
    "alice:secret1,bob:secret2" -> [{"username": "alice", "key": "secret1"}, ...]
    The secret may itself contain ':' (only the first one separates).
    """
    out: list[dict[str, str]] = []
    for token in raw.split(","):
        item = token.strip()
        if not item:
            continue
        username, sep, key = item.partition(":")
        if not sep or not username.strip() or not key:
            raise ValueError(f"HALL_ADMIN_KEYS entry must look like user:key (got {item!r})")
        out.append({"username": username.strip(), "key": key})
    return out


def _load_json(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"config file must contain a JSON object: {path}")
    return data


def _env_overrides(environ: dict[str, str]) -> dict[str, Any]:
    out: dict[str, Any] = {}
    simple = {
        "HALL_PROJECT_NAME": "project_name",
        "HALL_LOG_DIR": "logging_dir",
        "HALL_LOG_LEVEL": "logging_level",
        "HALL_DB_PATH": "database_path",
        "HALL_STATIC_DIR": "static_dir",
    }
    for env_name, field in simple.items():
        raw = (environ.get(env_name) or "").strip()
        if raw:
            out[field] = raw

    raw_public = (environ.get("HALL_PUBLIC_LISTING") or "").strip()
    if raw_public:
        out["public_listing"] = env_flag(raw_public)

    server: dict[str, Any] = {}
    raw_host = (environ.get("HALL_HOST") or "").strip()
    if raw_host:
        server["host"] = raw_host
    raw_port = (environ.get("HALL_PORT") or "").strip()
    if raw_port:
        server["port"] = int(raw_port)
    if server:
        out["server"] = server

    if "HALL_ADMIN_KEYS" in environ:
        out["admin_keys"] = parse_admin_keys(environ["HALL_ADMIN_KEYS"])
    return out


def load_config(path: str | Path | None = None, environ: Optional[dict[str, str]] = None) -> Config:
    """
    Defaults -> JSON file -> HALL_* environment variables (later wins).
    Raises pydantic.ValidationError / ValueError on bad values so startup fails loudly.
    """
    env = dict(os.environ if environ is None else environ)
    if path is None:
        raw_path = (env.get("HALL_CONFIG") or "").strip()
        path = Path(raw_path) if raw_path else DEFAULT_CONFIG_PATH
    data = _load_json(Path(path))

    overrides = _env_overrides(env)
    server = dict(data.get("server") or {})
    server.update(overrides.pop("server", {}))
    data.update(overrides)
    if server:
        data["server"] = server
    return Config.model_validate(data)
