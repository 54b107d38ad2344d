from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

import pytest

from hall.db import ID_COUNTER_KEY, RECORD_PREFIX, BackendError, RecordDB, is_record_key, key_for


def test_key_for_formats_decimal_id() -> None:
    assert key_for(0) == "SI-0"
    assert key_for(42) == "SI-42"
    assert key_for(2**64 - 1) == "SI-18446744073709551615"


def test_is_record_key() -> None:
    assert is_record_key("SI-1")
    assert not is_record_key("si-1")
    assert not is_record_key(ID_COUNTER_KEY)


def test_generate_id_is_monotonic(tmp_path) -> None:
    db = RecordDB(tmp_path / "kv.db")
    ids = [db.generate_id() for _ in range(5)]
    assert ids == sorted(ids)
    assert len(set(ids)) == 5


def test_generate_id_survives_reopen(tmp_path) -> None:
    path = tmp_path / "kv.db"
    first = RecordDB(path).generate_id()
    assert RecordDB(path).generate_id() > first


def test_generate_id_unique_under_concurrency(tmp_path) -> None:
    db = RecordDB(tmp_path / "kv.db")
    with ThreadPoolExecutor(max_workers=8) as pool:
        ids = list(pool.map(lambda _: db.generate_id(), range(64)))
    assert len(set(ids)) == 64


def test_scan_prefix_skips_counter_and_foreign_keys(tmp_path) -> None:
    db = RecordDB(tmp_path / "kv.db")
    db.generate_id()
    db.insert("SI-2", b"two")
    db.insert("SI-10", b"ten")
    db.insert("SJ-1", b"other")
    db.insert("_", b"x")
    keys = [k for k, _ in db.scan_prefix(RECORD_PREFIX)]
    assert sorted(keys) == ["SI-10", "SI-2"]
    assert len(list(db.scan_prefix(RECORD_PREFIX))) == 2


def test_insert_get_remove(tmp_path) -> None:
    db = RecordDB(tmp_path / "kv.db")
    assert db.get("SI-1") is None
    db.insert("SI-1", b"a")
    db.insert("SI-1", b"b")
    assert db.get("SI-1") == b"b"
    assert db.remove("SI-1") is True
    assert db.remove("SI-1") is False
    assert db.get("SI-1") is None


def test_unreachable_path_raises_backend_error(tmp_path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    with pytest.raises(BackendError):
        RecordDB(blocker / "sub" / "kv.db")


def test_lost_directory_on_call_raises_backend_error(tmp_path) -> None:
    db = RecordDB(tmp_path / "kv.db")
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    db.path = blocker / "sub" / "kv.db"
    with pytest.raises(BackendError):
        db.get("SI-1")
    with pytest.raises(BackendError):
        db.generate_id()
