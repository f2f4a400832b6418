from __future__ import annotations

import logging
from typing import Any

import boto3
from boto3.dynamodb.types import TypeDeserializer, TypeSerializer
from botocore.exceptions import BotoCoreError, ClientError

from phonebook.errors import StorageFailure
from phonebook.models import KEY_ATTR


log = logging.getLogger("phonebook")

_serializer = TypeSerializer()
_deserializer = TypeDeserializer()


def to_wire(item: dict[str, Any]) -> dict[str, Any]:
    return {k: _serializer.serialize(v) for k, v in item.items()}


def from_wire(item: dict[str, Any]) -> dict[str, Any]:
    return {k: _deserializer.deserialize(v) for k, v in item.items()}


class DynamoItemStore:
    """
    Item store on one DynamoDB table keyed by a string hash key.
    Uses the low-level client; attribute names go through #aliases since
    "Name" is a reserved word.
    """

    def __init__(
        self,
        table: str,
        client: Any = None,
        region: str | None = None,
        endpoint_url: str | None = None,
        key_attr: str = KEY_ATTR,
    ):
        self.table = table
        self.key_attr = key_attr
        self.client = client or boto3.client("dynamodb", region_name=region, endpoint_url=endpoint_url)

    def put(self, item: dict[str, Any]) -> None:
        if not item.get(self.key_attr):
            raise StorageFailure(f"item is missing its key attribute {self.key_attr!r}")
        try:
            wire = to_wire(item)
        except TypeError as e:
            # e.g. floats, which DynamoDB only accepts as Decimal
            raise StorageFailure(f"item {item[self.key_attr]!r} has a value DynamoDB cannot store: {e}") from e
        self._call("put_item", TableName=self.table, Item=wire)
        log.info("item_put table=%s key=%s", self.table, item[self.key_attr])

    def delete(self, key: str) -> None:
        self._call("delete_item", TableName=self.table, Key=to_wire({self.key_attr: key}))
        log.info("item_deleted table=%s key=%s", self.table, key)

    def query_by_key(self, key_name: str, value: str) -> list[dict[str, Any]]:
        resp = self._call(
            "query",
            TableName=self.table,
            KeyConditionExpression="#k = :v",
            ExpressionAttributeNames={"#k": key_name},
            ExpressionAttributeValues={":v": _serializer.serialize(value)},
        )
        return [from_wire(i) for i in resp.get("Items") or []]

    def scan_by_attribute(self, attr_name: str, value: str) -> list[dict[str, Any]]:
        # Single page only; tables here hold one small document's worth of rows.
        resp = self._call(
            "scan",
            TableName=self.table,
            FilterExpression="#a = :v",
            ExpressionAttributeNames={"#a": attr_name},
            ExpressionAttributeValues={":v": _serializer.serialize(value)},
        )
        return [from_wire(i) for i in resp.get("Items") or []]

    def _call(self, op: str, **params: Any) -> dict[str, Any]:
        try:
            return getattr(self.client, op)(**params)
        except (BotoCoreError, ClientError) as e:
            raise StorageFailure(f"{op} on {self.table} failed: {e}") from e
