"""Request Dispatch — tests for explicit method routing and response rendering.

Tests cover:
    - Each verb routes to its operation with the right success status
    - Unknown verbs return 405 without touching the store
    - Domain failures render 400 + {"error": message}
    - Timeouts and unexpected exceptions never escape dispatch()
"""

import json

import pytest

from user_api.schemas.api import ApiRequest
from user_api.services.request_dispatch import RequestDispatcher
from user_api.services.user_operations import UserOperations
from tests.services.fake_user_store import InMemoryUserStore

ALICE = {"email": "a@b.com", "firstName": "A", "lastName": "B"}


def _request(method, query=None, body=None) -> ApiRequest:
    return ApiRequest(
        http_method=method, query_parameters=query or {}, body=body,
    )


@pytest.mark.parametrize("method, query, body, expected_status", [
    ("GET", {}, None, 200),
    ("POST", {}, json.dumps(ALICE), 201),
    ("PUT", {}, json.dumps(ALICE), 200),
    ("DELETE", {"email": "a@b.com"}, None, 200),
])
async def test_each_supported_verb_reaches_its_operation(
    dispatcher, store, method, query, body, expected_status,
):
    if method in ("PUT", "DELETE"):
        store.items["a@b.com"] = dict(ALICE)
    res = await dispatcher.dispatch(_request(method, query, body))
    assert res.status_code == expected_status
    assert store.calls, f"{method} made no store call"


async def test_post_creates_with_201(dispatcher, store):
    res = await dispatcher.dispatch(_request("POST", body=json.dumps(ALICE)))
    assert res.status_code == 201
    assert res.body == ALICE
    assert store.items["a@b.com"] == ALICE


async def test_get_single_user_200(dispatcher, store):
    store.items["a@b.com"] = dict(ALICE)
    res = await dispatcher.dispatch(_request("GET", {"email": "a@b.com"}))
    assert res.status_code == 200
    assert res.body == ALICE


async def test_get_all_users_returns_list(dispatcher, store):
    store.items["a@b.com"] = dict(ALICE)
    res = await dispatcher.dispatch(_request("GET"))
    assert res.status_code == 200
    assert res.body == [ALICE]


async def test_get_missing_user_is_200_with_empty_identity(dispatcher):
    """Preserved behavior: not found is an empty record, not a 404."""
    res = await dispatcher.dispatch(_request("GET", {"email": "missing@b.com"}))
    assert res.status_code == 200
    assert res.body == {"email": "", "firstName": "", "lastName": ""}


async def test_put_updates_with_200(dispatcher, store):
    store.items["a@b.com"] = dict(ALICE)
    body = json.dumps({**ALICE, "lastName": "Z"})
    res = await dispatcher.dispatch(_request("PUT", body=body))
    assert res.status_code == 200
    assert res.body["lastName"] == "Z"


async def test_delete_returns_status_deleted(dispatcher, store):
    store.items["a@b.com"] = dict(ALICE)
    res = await dispatcher.dispatch(_request("DELETE", {"email": "a@b.com"}))
    assert res.status_code == 200
    assert res.body == {"status": "deleted"}


async def test_lowercase_method_is_routed(dispatcher):
    res = await dispatcher.dispatch(_request("get"))
    assert res.status_code == 200


@pytest.mark.parametrize("method", ["PATCH", "HEAD", "OPTIONS", "TRACE", "FOO"])
async def test_unsupported_method_is_405(dispatcher, store, method):
    res = await dispatcher.dispatch(
        _request(method, {"email": "a@b.com"}, body=json.dumps(ALICE)),
    )
    assert res.status_code == 405
    assert res.body == {"error": "method not allowed"}
    assert store.calls == []


async def test_domain_failure_is_400_with_error_body(dispatcher):
    res = await dispatcher.dispatch(_request("POST", body="{bad json"))
    assert res.status_code == 400
    assert res.body == {"error": "invalid user data"}


async def test_duplicate_create_is_400_already_exists(dispatcher):
    await dispatcher.dispatch(_request("POST", body=json.dumps(ALICE)))
    res = await dispatcher.dispatch(_request("POST", body=json.dumps(ALICE)))
    assert res.status_code == 400
    assert res.body == {"error": "user already exists"}


async def test_delete_missing_is_400_could_not_delete(dispatcher):
    res = await dispatcher.dispatch(_request("DELETE", {"email": "a@b.com"}))
    assert res.status_code == 400
    assert res.body == {"error": "could not delete item"}


async def test_slow_store_times_out_with_400():
    store = InMemoryUserStore([ALICE])
    store.delay_seconds = 1.0
    dispatcher = RequestDispatcher(UserOperations(store), timeout_seconds=0.05)
    res = await dispatcher.dispatch(_request("GET", {"email": "a@b.com"}))
    assert res.status_code == 400
    assert res.body == {"error": "request timed out"}


class _BrokenStore(InMemoryUserStore):
    async def scan(self):
        raise ValueError("unexpected shape")


async def test_unexpected_exception_never_escapes():
    dispatcher = RequestDispatcher(UserOperations(_BrokenStore()))
    res = await dispatcher.dispatch(_request("GET"))
    assert res.status_code == 400
    assert res.body == {"error": "internal error"}


async def test_response_declares_json(dispatcher):
    res = await dispatcher.dispatch(_request("GET"))
    assert res.headers["Content-Type"] == "application/json"
