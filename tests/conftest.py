"""Shared test fixtures."""

import asyncio
import copy
from dataclasses import dataclass, field

import pytest
from pydantic import JsonValue

from hair_analysis.config import Settings
from hair_analysis.containers import AppContainer
from hair_analysis.services.publisher import ResultPublisher
from hair_analysis.services.results import ResultStore, ResultStoreError
from hair_analysis.services.sessions import SessionController
from hair_analysis.services.status import StatusBoard

VALID_RECORD = {
    "hairCount": 72000,
    "confidence": 88,
    "category": "medium",
    "imageQuality": "Excellent",
}

PNG_DATA_URL = "data:image/png;base64,iVBORw0KGgoAAAANSUhEUgAAAAEAAAAB"


@dataclass
class InMemoryResultStore(ResultStore):
    """In-memory single-slot store for tests."""

    payload: JsonValue = None
    reads: int = 0
    writes: int = 0
    clears: int = 0

    async def get(self) -> JsonValue:
        self.reads += 1
        return self.payload

    async def put(self, payload: JsonValue) -> None:
        self.writes += 1
        self.payload = copy.deepcopy(payload)

    async def clear(self) -> None:
        self.clears += 1
        self.payload = None


@dataclass
class SlowClearResultStore(InMemoryResultStore):
    """In-memory store whose clear suspends before emptying the slot."""

    clear_delay: float = 0.05

    async def clear(self) -> None:
        self.clears += 1
        await asyncio.sleep(self.clear_delay)
        self.payload = None


@dataclass
class FlakyClearResultStore(InMemoryResultStore):
    """In-memory store whose first few clears fail."""

    clear_failures: int = 1

    async def clear(self) -> None:
        self.clears += 1
        if self.clear_failures > 0:
            self.clear_failures -= 1
            raise ResultStoreError("store unreachable")
        self.payload = None


@dataclass
class FailingResultStore(ResultStore):
    """Store that fails a configurable number of reads before recovering."""

    failures_left: int = 1
    payload: JsonValue = None
    fail_writes: bool = False
    reads: int = 0

    async def get(self) -> JsonValue:
        self.reads += 1
        if self.failures_left > 0:
            self.failures_left -= 1
            raise ResultStoreError("store unreachable")
        return self.payload

    async def put(self, payload: JsonValue) -> None:
        if self.fail_writes:
            raise ResultStoreError("store unreachable")
        self.payload = copy.deepcopy(payload)

    async def clear(self) -> None:
        self.payload = None


@dataclass
class ReportRecorder:
    """Collects finished reports handed to the render side."""

    reports: list[object] = field(default_factory=list)

    def __call__(self, report: object) -> None:
        self.reports.append(report)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        result_store_backend="file",
        result_store_path="unused.json",
        poll_interval_seconds=0.01,
        fallback_timeout_seconds=5.0,
        processing_seconds=0.0,
    )


@pytest.fixture
def result_store() -> InMemoryResultStore:
    return InMemoryResultStore()


@pytest.fixture
def container(settings: Settings, result_store: InMemoryResultStore) -> AppContainer:
    status_board = StatusBoard()
    publisher = ResultPublisher(store=result_store, status_board=status_board)
    session_controller = SessionController(
        store=result_store,
        status_board=status_board,
        poll_interval_seconds=settings.poll_interval_seconds,
        fallback_timeout_seconds=settings.fallback_timeout_seconds,
        processing_seconds=settings.processing_seconds,
        max_image_bytes=settings.max_image_bytes,
    )

    async def close_resources() -> None:
        await session_controller.close()

    return AppContainer(
        settings=settings,
        result_store=result_store,
        status_board=status_board,
        publisher=publisher,
        session_controller=session_controller,
        close_resources=close_resources,
    )
