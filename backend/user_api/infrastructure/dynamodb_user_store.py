"""DynamoDB User Store — boto3-backed UserStore with conditional writes and error mapping.

Invariants:
    - get() always uses ConsistentRead
    - put(if_not_exists=True) / delete(if_exists=True) attach the existence predicate
      server-side — this is the concurrency guard, not any read done beforehand
    - ConditionalCheckFailedException → ConditionCheckFailedError; every other
      ClientError / BotoCoreError → StoreError (core/errors.py)
    - botocore makes exactly one attempt per call (no retries)

Design Decisions:
    - boto3 resource Table API: native Python types in and out, Attr condition builder
    - Blocking boto3 calls run in asyncio.to_thread: the dispatcher's wait_for can
      enforce the per-call timeout without blocking the event loop
    - scan() follows LastEvaluatedKey until exhausted: callers get the whole table,
      no pagination surface (ADR: scan pagination is not an API feature)
"""

import asyncio
import logging

import boto3
from boto3.dynamodb.conditions import Attr
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from user_api.config import Settings
from user_api.core.errors import ConditionCheckFailedError, StoreError

logger = logging.getLogger(__name__)

PARTITION_KEY = "email"
_CONDITION_FAILED = "ConditionalCheckFailedException"


def build_table(settings: Settings):
    """Create the boto3 Table resource for settings.table_name."""
    config = Config(
        connect_timeout=settings.store_connect_timeout_seconds,
        read_timeout=settings.store_read_timeout_seconds,
        retries={"total_max_attempts": 1, "mode": "standard"},
    )
    resource = boto3.resource(
        "dynamodb",
        region_name=settings.aws_region,
        endpoint_url=settings.dynamodb_endpoint_url,
        config=config,
    )
    return resource.Table(settings.table_name)


class DynamoUserStore:
    """UserStore over a single DynamoDB table keyed by email."""

    def __init__(self, table):
        self._table = table
        self.table_name: str = table.name

    @classmethod
    def from_settings(cls, settings: Settings) -> "DynamoUserStore":
        return cls(build_table(settings))

    async def get(self, email: str) -> dict | None:
        response = await self._call(
            "get_item",
            self._table.get_item,
            Key={PARTITION_KEY: email},
            ConsistentRead=True,
        )
        return response.get("Item")

    async def scan(self) -> list[dict]:
        items: list[dict] = []
        kwargs: dict = {}
        while True:
            response = await self._call("scan", self._table.scan, **kwargs)
            items.extend(response.get("Items", []))
            last_key = response.get("LastEvaluatedKey")
            if not last_key:
                return items
            kwargs["ExclusiveStartKey"] = last_key

    async def put(self, item: dict, *, if_not_exists: bool = False) -> None:
        kwargs: dict = {"Item": item}
        if if_not_exists:
            kwargs["ConditionExpression"] = Attr(PARTITION_KEY).not_exists()
        await self._call("put_item", self._table.put_item, **kwargs)

    async def delete(self, email: str, *, if_exists: bool = False) -> None:
        kwargs: dict = {"Key": {PARTITION_KEY: email}}
        if if_exists:
            kwargs["ConditionExpression"] = Attr(PARTITION_KEY).exists()
        await self._call("delete_item", self._table.delete_item, **kwargs)

    async def _call(self, operation: str, method, **kwargs) -> dict:
        """Run a blocking boto3 call off-loop and map botocore failures."""
        try:
            return await asyncio.to_thread(method, **kwargs)
        except ClientError as e:
            code = e.response.get("Error", {}).get("Code", "")
            if code == _CONDITION_FAILED:
                logger.info(
                    f"Condition check failed on {operation}",
                    extra={"operation": operation, "table_name": self.table_name},
                )
                raise ConditionCheckFailedError(operation, code) from e
            logger.error(
                f"DynamoDB {operation} failed: {code}",
                extra={"operation": operation, "table_name": self.table_name, "error_code": code},
            )
            raise StoreError(operation, code) from e
        except BotoCoreError as e:
            logger.error(
                f"DynamoDB {operation} transport error: {e}",
                extra={"operation": operation, "table_name": self.table_name},
            )
            raise StoreError(operation, type(e).__name__) from e
