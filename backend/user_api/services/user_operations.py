"""User Operations — fetch, create, update and delete against an injected UserStore.

Invariants:
    - create validates email syntax BEFORE any store access
    - create never writes when the pre-check finds an existing record, and its write
      is conditional (attribute_not_exists) — the conditional write is the guard
    - delete is conditional (attribute_exists); absent and failed are not distinguished
    - update replaces all attributes wholesale (no merge), last writer wins
    - fetch(email) of a missing record returns an empty-identity User, not an error
    - Every failure is a UserServiceError subclass (core/errors.py)

Design Decisions:
    - Store injected via constructor: no module-level client, tests pass an in-memory store
    - create's pre-check failures are logged and ignored: the conditional put still
      protects the invariant and reports "could not put item"
    - update validates email syntax too (ADR: identity invariant, see DESIGN.md)
"""

import logging

from pydantic import ValidationError

from user_api.core.errors import (
    ConditionCheckFailedError,
    DeleteItemError,
    FetchRecordError,
    InvalidEmailError,
    InvalidUserDataError,
    MissingEmailError,
    PutItemError,
    StoreError,
    UnmarshalRecordError,
    UserAlreadyExistsError,
    UserDoesNotExistError,
    UserServiceError,
)
from user_api.core.repository_protocols import UserStore
from user_api.core.validators import is_email_valid
from user_api.schemas.user import User

logger = logging.getLogger(__name__)

DELETED_ACK = {"status": "deleted"}


def parse_user(body: str | None) -> User:
    """Parse a request body into a User. Raises InvalidUserDataError."""
    if body is None:
        raise InvalidUserDataError()
    try:
        return User.model_validate_json(body)
    except ValidationError:
        raise InvalidUserDataError()


def _to_user(item: dict) -> User:
    try:
        return User.model_validate(item)
    except ValidationError:
        raise UnmarshalRecordError()


class UserOperations:
    """The four repository operations behind /user."""

    def __init__(self, store: UserStore):
        self._store = store

    async def fetch_user(self, email: str) -> User:
        """Consistent read by email. Empty-identity User when absent."""
        try:
            item = await self._store.get(email)
        except StoreError:
            raise FetchRecordError()
        if item is None:
            return User()
        return _to_user(item)

    async def fetch_users(self) -> list[User]:
        """Every record in the table, in store order."""
        try:
            items = await self._store.scan()
        except StoreError:
            raise FetchRecordError()
        return [_to_user(item) for item in items]

    async def fetch(self, email: str | None) -> User | list[User]:
        if email:
            return await self.fetch_user(email)
        return await self.fetch_users()

    async def create(self, body: str | None) -> User:
        user = parse_user(body)
        if not is_email_valid(user.email):
            raise InvalidEmailError()

        try:
            current = await self.fetch_user(user.email)
        except UserServiceError as e:
            logger.warning(
                f"Create pre-check failed, relying on conditional write: {e.message}",
                extra={"error_code": e.code, "operation": "create"},
            )
        else:
            if not current.is_empty:
                raise UserAlreadyExistsError()

        try:
            await self._store.put(user.to_item(), if_not_exists=True)
        except ConditionCheckFailedError:
            logger.info(
                "Create lost conditional write race",
                extra={"operation": "create"},
            )
            raise PutItemError()
        except StoreError:
            raise PutItemError()
        return user

    async def update(self, body: str | None) -> User:
        user = parse_user(body)
        if not is_email_valid(user.email):
            raise InvalidEmailError()

        current = await self.fetch_user(user.email)
        if current.is_empty:
            raise UserDoesNotExistError()

        try:
            await self._store.put(user.to_item())
        except StoreError:
            raise PutItemError()
        return user

    async def delete(self, email: str | None) -> dict:
        if not email:
            raise MissingEmailError()
        try:
            await self._store.delete(email, if_exists=True)
        except StoreError:
            raise DeleteItemError()
        return dict(DELETED_ACK)
