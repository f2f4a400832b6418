from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

# Item-store attribute names. "Name" is the table's primary key.
KEY_ATTR = "Name"
FIRST_NAME_ATTR = "First_Name"
LAST_NAME_ATTR = "Last_Name"
NAME_ATTRS = (KEY_ATTR, FIRST_NAME_ATTR, LAST_NAME_ATTR)


@dataclass
class Record:
    first_name: str
    last_name: str
    attributes: dict[str, str] = field(default_factory=dict)
    # The item exactly as the store returned it; None for records parsed from text.
    stored: dict[str, str] | None = field(default=None, compare=False, repr=False)

    @property
    def full_name(self) -> str:
        if self.stored is not None and self.stored.get(KEY_ATTR):
            return self.stored[KEY_ATTR]
        return f"{self.first_name} {self.last_name}"

    def to_item(self) -> dict[str, str]:
        if self.stored is not None:
            return dict(self.stored)
        item = {k: v for k, v in self.attributes.items() if k not in NAME_ATTRS}
        return {
            KEY_ATTR: self.full_name,
            FIRST_NAME_ATTR: self.first_name,
            LAST_NAME_ATTR: self.last_name,
            **item,
        }

    @classmethod
    def from_item(cls, item: dict[str, Any]) -> "Record":
        stored = {str(k): str(v) for k, v in item.items()}
        first = stored.get(FIRST_NAME_ATTR, "")
        last = stored.get(LAST_NAME_ATTR, "")
        if not (first or last):
            # Items written by hand may only carry the key.
            first, _, last = stored.get(KEY_ATTR, "").partition(" ")
        attrs = {k: v for k, v in stored.items() if k not in NAME_ATTRS}
        return cls(first_name=first, last_name=last, attributes=attrs, stored=stored)
