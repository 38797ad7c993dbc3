"""Single-slot result store contract."""

from typing import Protocol

from pydantic import JsonValue


class ResultStoreError(RuntimeError):
    """Raised when the result store cannot be read or written."""


class ResultStore(Protocol):
    """Holds at most one raw JSON payload, last write wins.

    The slot is untyped: any JSON value may be written, and readers decide
    whether it is a usable record.
    """

    async def get(self) -> JsonValue:
        """Return the stored payload, or None when the slot is empty."""

    async def put(self, payload: JsonValue) -> None:
        """Replace the stored payload."""

    async def clear(self) -> None:
        """Empty the slot."""
