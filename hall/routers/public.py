from __future__ import annotations

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse

from ..errors import NOT_FOUND_ROUTE_MESSAGE, Outcome
from ..render import render_report_list
from ..responses import generate_response
from ..store import list_records

router = APIRouter(tags=["public"])


@router.get("/", response_class=HTMLResponse)
def report_page(request: Request):
    ctx = request.app.state.ctx
    return HTMLResponse(render_report_list(ctx.config.project_name, list_records(ctx)))


@router.get("/list")
def public_list_records(request: Request):
    ctx = request.app.state.ctx
    if not ctx.config.public_listing:
        return generate_response(Outcome(404, NOT_FOUND_ROUTE_MESSAGE))
    return [x.model_dump(mode="json") for x in list_records(ctx)]
