"""JSON file-backed result store."""

import json
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path

from pydantic import JsonValue

from hair_analysis.services.results import ResultStore, ResultStoreError


@dataclass
class FileResultStore(ResultStore):
    """Keeps the slot in a single JSON file.

    Writes land in a temporary file in the same directory and are swapped in
    with ``os.replace``, so a reader sees either the old or the new payload.
    Two stores pointed at different files do not see each other's writes.
    """

    path: Path

    async def get(self) -> JsonValue:
        """Read the slot; a missing or empty file means empty."""
        try:
            content = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as exc:
            raise ResultStoreError("Failed to read data") from exc
        if not content.strip():
            return None
        try:
            return json.loads(content)
        except json.JSONDecodeError as exc:
            raise ResultStoreError("Failed to read data") from exc

    async def put(self, payload: JsonValue) -> None:
        """Atomically replace the slot."""
        self._write(json.dumps(payload, indent=2))

    async def clear(self) -> None:
        """Remove the stored payload."""
        try:
            self.path.unlink(missing_ok=True)
        except OSError as exc:
            raise ResultStoreError("Failed to clear data") from exc

    def _write(self, content: str) -> None:
        directory = self.path.parent
        try:
            directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=directory, prefix=f".{self.path.name}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    handle.write(content)
                    handle.flush()
                    os.fsync(handle.fileno())
                os.replace(tmp_name, self.path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as exc:
            raise ResultStoreError("Failed to write data") from exc
