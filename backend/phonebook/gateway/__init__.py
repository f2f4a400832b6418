from __future__ import annotations

from phonebook.gateway.base import StorageGateway
from phonebook.gateway.http import HttpGateway
from phonebook.gateway.store import StoreGateway

__all__ = ["HttpGateway", "StorageGateway", "StoreGateway"]
