from __future__ import annotations

import logging
from typing import Any

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from phonebook.errors import StorageFailure


log = logging.getLogger("phonebook")


class S3BlobStore:
    """Blob store on a single S3 bucket. Objects are text, written with overwrite semantics."""

    def __init__(self, bucket: str, client: Any = None, region: str | None = None, endpoint_url: str | None = None):
        self.bucket = bucket
        self.client = client or boto3.client("s3", region_name=region, endpoint_url=endpoint_url)

    def put(self, name: str, content: str) -> None:
        try:
            self.client.put_object(Bucket=self.bucket, Key=name, Body=content.encode("utf-8"))
        except (BotoCoreError, ClientError) as e:
            raise StorageFailure(f"put_object {self.bucket}/{name} failed: {e}") from e
        log.info("blob_put bucket=%s key=%s bytes=%s", self.bucket, name, len(content))

    def delete(self, name: str) -> None:
        # S3 answers 204 for missing keys too.
        try:
            self.client.delete_object(Bucket=self.bucket, Key=name)
        except (BotoCoreError, ClientError) as e:
            raise StorageFailure(f"delete_object {self.bucket}/{name} failed: {e}") from e
        log.info("blob_deleted bucket=%s key=%s", self.bucket, name)
