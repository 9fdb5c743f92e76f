"""Request Dispatch — explicit routing from HTTP method to user operation.

Invariants:
    - Exactly one operation runs per request; unknown methods run none (405)
    - Every operation call is bounded by timeout_seconds — a hung store call
      becomes RequestTimeoutError, never a hung request
    - dispatch() never raises: every outcome is an ApiResponse
    - UserServiceError → its http_status (400, or 405) with {"error": message};
      anything unexpected → 400 {"error": "internal error"}, logged with traceback

Design Decisions:
    - Explicit dict over getattr: every method→handler mapping visible in one place
      (ADR: ExMA no convention-over-config)
    - Success status codes stored beside the handler: POST is the only 201
    - asyncio.wait_for abandons the operation on timeout. A boto3 call already
      running in its worker thread is not interrupted and may still complete;
      the botocore connect/read timeouts are what bound that thread
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable

from pydantic import BaseModel

from user_api.core.errors import (
    MethodNotAllowedError,
    RequestTimeoutError,
    UserServiceError,
)
from user_api.schemas.api import ApiRequest, ApiResponse
from user_api.schemas.user import ErrorBody
from user_api.services.user_operations import UserOperations

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 10.0
INTERNAL_ERROR_MESSAGE = "internal error"

Handler = Callable[[ApiRequest], Awaitable[Any]]


def _serialize(result: Any) -> Any:
    """Render operation results as JSON-ready values (users by alias)."""
    if isinstance(result, BaseModel):
        return result.model_dump(by_alias=True)
    if isinstance(result, list):
        return [_serialize(r) for r in result]
    return result


class RequestDispatcher:
    """Routes HTTP method -> user operation. Explicit registration."""

    def __init__(
        self,
        operations: UserOperations,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
    ):
        self._operations = operations
        self._timeout_seconds = timeout_seconds

        # ADR: every mapping explicit — adding a verb requires editing this dict
        self._handlers: dict[str, tuple[Handler, int]] = {
            "GET": (self._get, 200),
            "POST": (self._post, 201),
            "PUT": (self._put, 200),
            "DELETE": (self._delete, 200),
        }

    async def dispatch(self, request: ApiRequest) -> ApiResponse:
        """Route request to its operation and render the HTTP response."""
        method = request.http_method.upper()
        try:
            entry = self._handlers.get(method)
            if entry is None:
                raise MethodNotAllowedError(method)
            handler, success_status = entry
            result = await self._run_bounded(handler(request))
            response = ApiResponse(status_code=success_status, body=_serialize(result))
        except UserServiceError as e:
            logger.warning(
                f"{method} failed: {e.message}",
                extra={"http_method": method, "error_code": e.code, "status_code": e.http_status},
            )
            response = ApiResponse(
                status_code=e.http_status,
                body=ErrorBody(error=e.message).to_response(),
            )
        except Exception as e:
            logger.error(
                f"Unhandled error dispatching {method}: {e}",
                exc_info=True,
                extra={"http_method": method},
            )
            response = ApiResponse(
                status_code=400,
                body=ErrorBody(error=INTERNAL_ERROR_MESSAGE).to_response(),
            )

        logger.info(
            f"{method} /user -> {response.status_code}",
            extra={"http_method": method, "status_code": response.status_code},
        )
        return response

    async def _run_bounded(self, call: Awaitable[Any]) -> Any:
        try:
            return await asyncio.wait_for(call, timeout=self._timeout_seconds)
        except asyncio.TimeoutError:
            raise RequestTimeoutError(self._timeout_seconds)

    async def _get(self, request: ApiRequest):
        return await self._operations.fetch(request.query_parameters.get("email"))

    async def _post(self, request: ApiRequest):
        return await self._operations.create(request.body)

    async def _put(self, request: ApiRequest):
        return await self._operations.update(request.body)

    async def _delete(self, request: ApiRequest):
        return await self._operations.delete(request.query_parameters.get("email"))
