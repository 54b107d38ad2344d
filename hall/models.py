from __future__ import annotations

import datetime as dt
import hashlib
import json
from typing import Optional

from pydantic import BaseModel, Field

U64_MAX = 2**64 - 1

MUTABLE_FIELDS = ("reference_id", "affected_service", "summary", "reporter", "reporter_handle")
REQUIRED_ON_CREATE = ("reference_id", "affected_service", "summary", "reporter")


class HallEntry(BaseModel):
    # Allocated by the store and used for updates/deletions.
    id: int = Field(ge=0, le=U64_MAX)
    anchor_key: Optional[str] = None
    # Supplied by the reporter for linking to tickets, incidents, etc.
    reference_id: int = Field(ge=0, le=U64_MAX)
    affected_service: str
    date: dt.date
    summary: str
    reporter: str
    # Handle, profile URL, etc. shown next to the reporter's name.
    reporter_handle: Optional[str] = None

    def _hash_state(self) -> bytes:
        values = [
            self.id,
            self.anchor_key,
            self.reference_id,
            self.affected_service,
            self.date.isoformat(),
            self.summary,
            self.reporter,
            self.reporter_handle,
        ]
        return json.dumps(values, ensure_ascii=False, separators=(",", ":")).encode("utf-8")

    def generate_anchor(self) -> str:
        """
        Set anchor_key to "{year}-{HASH}", e.g. "2019-5B2CBFE78ED4BD69".

        anchor_key is part of the hashed state, so call this once before the
        entry is first stored.
        """
        digest = hashlib.blake2b(self._hash_state(), digest_size=8).digest()
        value = int.from_bytes(digest, "big")
        self.anchor_key = f"{self.date.year}-{value:X}"
        return self.anchor_key


class RecordSubmission(BaseModel):
    """Body of /admin/add and /admin/update."""

    # Only used by updates; ignored elsewhere.
    id: Optional[int] = Field(default=None, ge=0, le=U64_MAX)
    reference_id: Optional[int] = Field(default=None, ge=0, le=U64_MAX)
    affected_service: Optional[str] = None
    # Accepted as Y-M-D but never stored: creation uses the server date and
    # updates keep the original one.
    date: Optional[dt.date] = None
    summary: Optional[str] = None
    reporter: Optional[str] = None
    reporter_handle: Optional[str] = None

    def missing_for_create(self) -> list[str]:
        return [name for name in REQUIRED_ON_CREATE if getattr(self, name) is None]

    def changes(self) -> dict:
        # reporter_handle may be cleared with an explicit null; the rest can't be null.
        out = {}
        for name in MUTABLE_FIELDS:
            if name not in self.model_fields_set:
                continue
            value = getattr(self, name)
            if value is None and name != "reporter_handle":
                continue
            out[name] = value
        return out


class OperationResponse(BaseModel):
    code: int
    message: str
