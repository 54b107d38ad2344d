from __future__ import annotations

from fastapi.responses import JSONResponse, Response

from .errors import Outcome
from .models import OperationResponse


def generate_response(outcome: Outcome) -> Response:
    if outcome.status == 204:
        return Response(status_code=204)
    body = OperationResponse(code=outcome.status, message=outcome.message)
    return JSONResponse(body.model_dump(), status_code=outcome.status)
