"""Tests for the result poller."""

import asyncio

from hair_analysis.domain.results import ResultRecord
from hair_analysis.services.poller import PollerState, ResultPoller
from tests.conftest import (
    VALID_RECORD,
    FailingResultStore,
    FlakyClearResultStore,
    InMemoryResultStore,
)


def _collecting_poller(
    store: object, interval: float = 0.01
) -> tuple[ResultPoller, list[ResultRecord]]:
    received: list[ResultRecord] = []

    async def on_result(record: ResultRecord) -> None:
        received.append(record)

    poller = ResultPoller(store=store, on_result=on_result, interval_seconds=interval)
    return poller, received


def test_poll_once_consumes_valid_record_and_clears_store() -> None:
    store = InMemoryResultStore(payload=dict(VALID_RECORD))
    poller, received = _collecting_poller(store)

    async def scenario() -> None:
        poller.state = PollerState.POLLING
        await poller.poll_once()
        await poller.poll_once()

    asyncio.run(scenario())

    assert len(received) == 1
    assert received[0].hair_count == 72000
    assert store.payload is None
    assert poller.state is PollerState.CONSUMED
    assert poller.cleared


def test_malformed_records_keep_polling() -> None:
    store = InMemoryResultStore(payload={"hairCount": 90000})
    poller, received = _collecting_poller(store)

    async def scenario() -> None:
        poller.start()
        await asyncio.sleep(0.05)
        assert poller.state is PollerState.POLLING
        assert store.payload == {"hairCount": 90000}
        store.payload = dict(VALID_RECORD)
        await asyncio.sleep(0.05)

    asyncio.run(scenario())

    assert len(received) == 1
    assert store.reads >= 3
    assert store.payload is None


def test_transport_errors_are_retried() -> None:
    store = FailingResultStore(failures_left=2, payload=dict(VALID_RECORD))
    poller, received = _collecting_poller(store)

    async def scenario() -> None:
        poller.start()
        await asyncio.sleep(0.1)

    asyncio.run(scenario())

    assert store.reads >= 3
    assert len(received) == 1
    assert poller.state is PollerState.CONSUMED


def test_cancel_stops_reads() -> None:
    store = InMemoryResultStore()
    poller, received = _collecting_poller(store)

    async def scenario() -> None:
        poller.start()
        await asyncio.sleep(0.03)
        poller.cancel()
        reads_at_cancel = store.reads
        store.payload = dict(VALID_RECORD)
        await asyncio.sleep(0.05)
        assert store.reads == reads_at_cancel

    asyncio.run(scenario())

    assert poller.state is PollerState.CANCELLED
    assert received == []
    assert store.payload is not None


def test_cancel_is_idempotent_and_start_after_cancel_is_ignored() -> None:
    store = InMemoryResultStore(payload=dict(VALID_RECORD))
    poller, received = _collecting_poller(store)

    async def scenario() -> None:
        poller.cancel()
        poller.cancel()
        poller.start()
        await asyncio.sleep(0.03)

    asyncio.run(scenario())

    assert poller.state is PollerState.CANCELLED
    assert store.reads == 0
    assert received == []


def test_failed_clear_still_delivers_and_is_reported() -> None:
    store = FlakyClearResultStore(payload=dict(VALID_RECORD), clear_failures=1)
    poller, received = _collecting_poller(store)

    async def scenario() -> None:
        poller.state = PollerState.POLLING
        await poller.poll_once()

    asyncio.run(scenario())

    assert len(received) == 1
    assert poller.state is PollerState.CONSUMED
    assert not poller.cleared
    assert store.payload == VALID_RECORD


def test_non_object_payload_keeps_polling() -> None:
    store = InMemoryResultStore(payload=[dict(VALID_RECORD)])
    poller, received = _collecting_poller(store)

    async def scenario() -> None:
        poller.state = PollerState.POLLING
        assert await poller.poll_once() is None

    asyncio.run(scenario())

    assert received == []
    assert poller.state is PollerState.POLLING
    assert store.payload == [VALID_RECORD]
