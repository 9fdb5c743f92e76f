"""User Resource — the single /user endpoint, every verb delegated to the dispatcher.

Invariants:
    - The route accepts every common verb so unsupported ones reach the dispatcher
      and get its 405 body, not the framework's
    - Routes never contain business logic (delegate to RequestDispatcher)

Design Decisions:
    - Raw body passed through as text: JSON parsing and its error message belong to
      the operations, not to FastAPI request validation
"""

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from user_api.api.dependencies import get_dispatcher
from user_api.schemas.api import ApiRequest
from user_api.services.request_dispatch import RequestDispatcher

logger = logging.getLogger(__name__)
router = APIRouter(tags=["users"])

ROUTED_METHODS = ["GET", "POST", "PUT", "DELETE", "PATCH", "HEAD", "OPTIONS"]


async def to_api_request(request: Request) -> ApiRequest:
    """Translate a Starlette request into the dispatcher's ApiRequest."""
    raw = await request.body()
    return ApiRequest(
        http_method=request.method,
        query_parameters=dict(request.query_params),
        body=raw.decode("utf-8", errors="replace") if raw else None,
    )


@router.api_route("/user", methods=ROUTED_METHODS)
async def user_resource(
    request: Request, dispatcher: RequestDispatcher = Depends(get_dispatcher),
):
    """Dispatch /user by HTTP method."""
    response = await dispatcher.dispatch(await to_api_request(request))
    return JSONResponse(
        status_code=response.status_code,
        content=response.body,
        headers=response.headers,
    )
