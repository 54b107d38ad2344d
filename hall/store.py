from __future__ import annotations

import functools
import logging
from typing import Callable, List

from .config import AdminKey
from .context import AppContext
from .db import RECORD_PREFIX, BackendError, key_for
from .errors import (
    ID_MISMATCH_MESSAGE,
    NO_ID_MESSAGE,
    NOT_FOUND_MESSAGE,
    ErrorKind,
    Outcome,
)
from .models import HallEntry, RecordSubmission

logger = logging.getLogger("hall.store")


def _encode(entry: HallEntry) -> bytes:
    return entry.model_dump_json().encode("utf-8")


def _decode(raw: bytes) -> HallEntry:
    return HallEntry.model_validate_json(raw)


def _shielded(op: Callable[..., Outcome]) -> Callable[..., Outcome]:
    # Backend and (de)serialization failures (pydantic's ValidationError is a
    # ValueError) become the generic 500; the detail only goes to the log.
    @functools.wraps(op)
    def wrapper(*args, **kwargs) -> Outcome:
        try:
            return op(*args, **kwargs)
        except (BackendError, ValueError):
            logger.exception("%s failed", op.__name__)
            return Outcome.failed()

    return wrapper


def list_records(ctx: AppContext) -> List[HallEntry]:
    """Every stored entry, in backend key order (not numeric ID order)."""
    return [_decode(value) for _, value in ctx.db.scan_prefix(RECORD_PREFIX)]


@_shielded
def add_record(ctx: AppContext, new_record: RecordSubmission, user: AdminKey) -> Outcome:
    missing = new_record.missing_for_create()
    if missing:
        return Outcome.error(ErrorKind.CLIENT, f"Missing required field(s): {', '.join(missing)}")

    new_id = ctx.db.generate_id()
    entry = HallEntry(
        id=new_id,
        reference_id=new_record.reference_id,
        affected_service=new_record.affected_service,
        date=ctx.clock(),
        summary=new_record.summary,
        reporter=new_record.reporter,
        reporter_handle=new_record.reporter_handle,
    )
    entry.generate_anchor()
    ctx.db.insert(key_for(new_id), _encode(entry))

    msg = f"Report created (ID: {new_id})"
    logger.info("%s by %s", msg, user.username)
    return Outcome.created(msg)


@_shielded
def remove_record(ctx: AppContext, record_id: int, user: AdminKey) -> Outcome:
    if not ctx.db.remove(key_for(record_id)):
        return Outcome.error(ErrorKind.CLIENT, NOT_FOUND_MESSAGE)
    logger.info("Report removed (ID: %s) by %s", record_id, user.username)
    return Outcome.no_content()


@_shielded
def update_record(ctx: AppContext, updated_record: RecordSubmission, user: AdminKey) -> Outcome:
    """
    Overwrite the mutable fields of an existing entry; id, date and
    anchor_key are kept. Read then write with no compare-and-swap: of two
    concurrent updates to one ID the later write wins.
    """
    if updated_record.id is None:
        return Outcome.error(ErrorKind.CLIENT, NO_ID_MESSAGE)
    current_id = updated_record.id
    key = key_for(current_id)

    raw = ctx.db.get(key)
    if raw is None:
        return Outcome.error(ErrorKind.CLIENT, NOT_FOUND_MESSAGE)
    old_record = _decode(raw)

    # The storage key must keep matching the record's ID or it can't be found again.
    if old_record.id != current_id:
        logger.error("Stored record under %s has ID %s", key, old_record.id)
        return Outcome.error(ErrorKind.CLIENT, ID_MISMATCH_MESSAGE)

    new_record = old_record.model_copy(update=updated_record.changes())
    # model_copy skips validation; round-trip so a bad value can't be stored
    new_record = HallEntry.model_validate(new_record.model_dump())
    ctx.db.insert(key, _encode(new_record))

    msg = f"Report has been updated (ID: {current_id})"
    logger.info("%s by %s", msg, user.username)
    return Outcome.success(msg)
