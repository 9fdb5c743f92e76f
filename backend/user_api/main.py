"""User API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery — ExMA anti-pattern)
    - Global error handlers map UserServiceError → {"error": message}
    - The DynamoDB store is built once per process in the lifespan and kept on app.state

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern
    - Lifespan reuses an existing store: Mangum enters the lifespan on every Lambda
      invocation, a warm container must not rebuild its boto3 client each time
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from user_api.api.error_handlers import register_error_handlers
from user_api.api.routes import users
from user_api.config import get_settings
from user_api.infrastructure.dynamodb_user_store import DynamoUserStore
from user_api.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    if getattr(app.state, "user_store", None) is None:
        app.state.user_store = DynamoUserStore.from_settings(settings)
        logger.info(
            "User store initialized",
            extra={"table_name": settings.table_name},
        )
    yield


app = FastAPI(title="User API", version="1.0.0", lifespan=lifespan)

# Routes — explicit registration (ExMA: no convention-over-config)
app.include_router(users.router)

register_error_handlers(app)
