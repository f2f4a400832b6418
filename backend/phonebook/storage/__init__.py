from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache

from phonebook.config import Settings, get_settings
from phonebook.storage.base import BlobStore, ItemStore
from phonebook.storage.memory import MemoryBlobStore, MemoryItemStore


@dataclass
class Storage:
    blobs: BlobStore
    items: ItemStore
    backend: str = "memory"


def build_storage(settings: Settings) -> Storage:
    if settings.storage_backend == "aws":
        from phonebook.storage.dynamo import DynamoItemStore
        from phonebook.storage.s3 import S3BlobStore

        return Storage(
            blobs=S3BlobStore(settings.bucket_name, region=settings.aws_region, endpoint_url=settings.aws_endpoint_url),
            items=DynamoItemStore(settings.table_name, region=settings.aws_region, endpoint_url=settings.aws_endpoint_url),
            backend="aws",
        )
    # Demo default: everything in-process.
    return Storage(blobs=MemoryBlobStore(), items=MemoryItemStore())


@lru_cache
def get_storage() -> Storage:
    return build_storage(get_settings())
