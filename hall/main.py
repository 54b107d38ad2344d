from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.staticfiles import StaticFiles

from . import __version__
from .config import load_config
from .context import AppContext
from .errors import MALFORMED_REQUEST_MESSAGE, AdminAccessDenied, ErrorKind, Outcome
from .responses import generate_response
from .routers import admin, public

logger = logging.getLogger("hall.web")


async def _admin_denied(request: Request, exc: AdminAccessDenied):
    return generate_response(exc.outcome)


async def _malformed_request(request: Request, exc: RequestValidationError):
    logger.info("Malformed request to %s: %s", request.url.path, exc.errors())
    return generate_response(Outcome.error(ErrorKind.CLIENT, MALFORMED_REQUEST_MESSAGE))


async def _unexpected_error(request: Request, exc: Exception):
    # anything not produced by user input becomes the generic failure
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return generate_response(Outcome.failed())


def create_app(ctx: Optional[AppContext] = None) -> FastAPI:
    if ctx is None:
        ctx = AppContext.from_config(load_config())

    app = FastAPI(title=f"{ctx.config.project_name} Hall of Fame", version=__version__)
    app.state.ctx = ctx

    app.add_exception_handler(AdminAccessDenied, _admin_denied)
    app.add_exception_handler(RequestValidationError, _malformed_request)
    app.add_exception_handler(Exception, _unexpected_error)

    static_dir = Path(ctx.config.static_dir)
    if static_dir.is_dir():
        app.mount("/static", StaticFiles(directory=str(static_dir)), name="static")

    app.include_router(public.router)
    app.include_router(admin.router)

    logger.info("Project name set to: %s", ctx.config.project_name)
    if not ctx.config.admin_enabled:
        logger.warning("No admin keys configured; the admin interface is disabled")
    return app
