"""Route Dependencies — injects the store and dispatcher into request handlers.

Invariants:
    - The UserStore is built once per process (lifespan) and read from app.state
    - Handlers never construct boto3 clients themselves

Design Decisions:
    - get_user_store is the single override point for tests (in-memory store)
"""

from fastapi import Depends, Request

from user_api.config import Settings, get_settings
from user_api.core.repository_protocols import UserStore
from user_api.services.request_dispatch import RequestDispatcher
from user_api.services.user_operations import UserOperations


def get_user_store(request: Request) -> UserStore:
    """FastAPI dependency for the process-wide user store."""
    store = getattr(request.app.state, "user_store", None)
    if store is None:
        raise RuntimeError("User store not initialized")
    return store


def get_dispatcher(
    store: UserStore = Depends(get_user_store),
    settings: Settings = Depends(get_settings),
) -> RequestDispatcher:
    return RequestDispatcher(
        UserOperations(store), timeout_seconds=settings.request_timeout_seconds,
    )
