from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from ..auth import require_admin
from ..config import AdminKey
from ..models import RecordSubmission
from ..responses import generate_response
from ..store import add_record, list_records, remove_record, update_record

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/list")
def admin_list_records(request: Request, user: AdminKey = Depends(require_admin)):
    return [x.model_dump(mode="json") for x in list_records(request.app.state.ctx)]


@router.post("/add")
def admin_add_record(request: Request, payload: RecordSubmission, user: AdminKey = Depends(require_admin)):
    return generate_response(add_record(request.app.state.ctx, payload, user))


@router.post("/update")
def admin_update_record(request: Request, payload: RecordSubmission, user: AdminKey = Depends(require_admin)):
    return generate_response(update_record(request.app.state.ctx, payload, user))


@router.post("/remove/{record_id}")
def admin_remove_record(request: Request, record_id: int, user: AdminKey = Depends(require_admin)):
    return generate_response(remove_record(request.app.state.ctx, record_id, user))
