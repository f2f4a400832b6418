from __future__ import annotations


class PhonebookError(Exception):
    """Base class for everything the phonebook raises on purpose."""


class FetchFailure(PhonebookError):
    """The source document could not be downloaded."""


class StorageFailure(PhonebookError):
    """A blob store or item store call was rejected."""


class MalformedRecord(PhonebookError):
    def __init__(self, line: str, reason: str = "expected at least a last and a first name"):
        super().__init__(f"{reason}: {line!r}")
        self.line = line
        self.reason = reason


class EmptyQueryInput(PhonebookError):
    def __init__(self) -> None:
        super().__init__("Please enter a first name, a last name, or both")
