"""Supabase-backed result store."""

from dataclasses import dataclass

from pydantic import JsonValue
from supabase import Client

from hair_analysis.services.results import ResultStore, ResultStoreError

_SLOT_ID = 1


@dataclass
class SupabaseResultStore(ResultStore):
    """Keeps the slot as a single row with a JSON payload column."""

    client: Client
    table: str = "analysis_results"

    async def get(self) -> JsonValue:
        """Return the payload of the slot row, if present."""
        try:
            response = (
                self.client.table(self.table)
                .select("payload")
                .eq("id", _SLOT_ID)
                .limit(1)
                .execute()
            )
        except Exception as exc:
            raise ResultStoreError("Failed to read data") from exc
        if not response.data:
            return None
        return response.data[0].get("payload")

    async def put(self, payload: JsonValue) -> None:
        """Upsert the slot row."""
        try:
            self.client.table(self.table).upsert(
                {"id": _SLOT_ID, "payload": payload}
            ).execute()
        except Exception as exc:
            raise ResultStoreError("Failed to write data") from exc

    async def clear(self) -> None:
        """Delete the slot row."""
        try:
            self.client.table(self.table).delete().eq("id", _SLOT_ID).execute()
        except Exception as exc:
            raise ResultStoreError("Failed to clear data") from exc
