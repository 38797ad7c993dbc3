"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from pathlib import Path

from supabase import create_client

from hair_analysis.adapters.file_result_store import FileResultStore
from hair_analysis.adapters.http_result_store import HttpxResultStore
from hair_analysis.adapters.supabase_result_store import SupabaseResultStore
from hair_analysis.config import Settings
from hair_analysis.services.publisher import ResultPublisher
from hair_analysis.services.results import ResultStore
from hair_analysis.services.sessions import SessionController
from hair_analysis.services.status import StatusBoard


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    result_store: ResultStore
    status_board: StatusBoard
    publisher: ResultPublisher
    session_controller: SessionController
    close_resources: Callable[[], Awaitable[None]]


def build_result_store(
    settings: Settings,
) -> tuple[ResultStore, Callable[[], Awaitable[None]]]:
    """Create the configured result store and its cleanup hook."""
    backend = settings.result_store_backend.strip().lower()

    async def noop_close() -> None:
        return None

    if backend == "file":
        return FileResultStore(Path(settings.result_store_path)), noop_close
    if backend == "supabase":
        if not settings.supabase_url or not settings.supabase_service_key:
            raise ValueError("Supabase backend requires SUPABASE_URL and key")
        client = create_client(settings.supabase_url, settings.supabase_service_key)
        return SupabaseResultStore(client, table=settings.supabase_table), noop_close
    if backend == "http":
        if not settings.result_store_url:
            raise ValueError("HTTP backend requires RESULT_STORE_URL")
        store = HttpxResultStore.create(settings.result_store_url)
        return store, store.close
    raise ValueError(f"Unknown result store backend: {settings.result_store_backend}")


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    result_store, close_store = build_result_store(resolved_settings)
    status_board = StatusBoard()
    publisher = ResultPublisher(store=result_store, status_board=status_board)
    session_controller = SessionController(
        store=result_store,
        status_board=status_board,
        poll_interval_seconds=resolved_settings.poll_interval_seconds,
        fallback_timeout_seconds=resolved_settings.fallback_timeout_seconds,
        processing_seconds=resolved_settings.processing_seconds,
        max_image_bytes=resolved_settings.max_image_bytes,
    )

    async def close_resources() -> None:
        await session_controller.close()
        await close_store()

    return AppContainer(
        settings=resolved_settings,
        result_store=result_store,
        status_board=status_board,
        publisher=publisher,
        session_controller=session_controller,
        close_resources=close_resources,
    )
