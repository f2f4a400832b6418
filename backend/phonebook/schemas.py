from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


MISS_MESSAGE = "No Entries in the Phone Book Match Your Query"


class QueryResponse(BaseModel):
    # Wire names follow the item store's result shape.
    model_config = ConfigDict(populate_by_name=True)

    items: list[dict[str, Any]] = Field(default_factory=list, alias="Items")
    count: int = Field(default=0, alias="Count")
    error: str | None = None


class HealthResponse(BaseModel):
    ok: bool = True
    storage: str
