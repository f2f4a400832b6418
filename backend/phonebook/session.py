from __future__ import annotations

import enum
from dataclasses import dataclass, field


class SyncState(str, enum.Enum):
    IDLE = "idle"
    FETCHING = "fetching"
    BLOB_STORING = "blob_storing"
    PARSING = "parsing"
    ITEM_STORING = "item_storing"
    LOADED = "loaded"
    CLEARING = "clearing"


@dataclass
class SessionState:
    """
    Everything one client session remembers between actions.
    `key_registry` holds the primary keys written since the last clear; the item
    store has no "delete all", so clearing walks this list.
    """

    key_registry: list[str] = field(default_factory=list)
    query_count: int = 0
    first_run: bool = True
    state: SyncState = SyncState.IDLE
    loaded_lines: list[str] = field(default_factory=list)

    @property
    def loaded(self) -> bool:
        return self.state == SyncState.LOADED

    def next_query_number(self) -> int:
        self.query_count += 1
        return self.query_count

    def reset(self) -> None:
        self.key_registry.clear()
        self.loaded_lines.clear()
        self.query_count = 0
        self.state = SyncState.IDLE
