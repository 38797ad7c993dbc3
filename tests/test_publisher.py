"""Tests for the operator result publisher."""

import asyncio

import pytest

from hair_analysis.domain.results import Tier, parse_result_record
from hair_analysis.services.publisher import ResultPublisher, build_operator_record
from hair_analysis.services.status import StatusBoard
from tests.conftest import InMemoryResultStore


def test_publish_stores_record_and_posts_status() -> None:
    store = InMemoryResultStore(payload={"hairCount": 1, "confidence": 1})
    status_board = StatusBoard()
    publisher = ResultPublisher(store=store, status_board=status_board)

    record = asyncio.run(
        publisher.publish(
            {
                "hairCount": 45000,
                "confidence": 82,
                "category": "low",
                "imageQuality": "Fair",
            }
        )
    )

    assert store.payload == {
        "hairCount": 45000,
        "confidence": 82,
        "category": "low",
        "imageQuality": "Fair",
    }
    assert parse_result_record(store.payload) == record
    assert status_board.latest().message == "Results sent to user successfully"


def test_empty_input_gets_defaults() -> None:
    record = build_operator_record({})

    assert record.hair_count == 85000
    assert record.confidence == 87
    assert record.category is Tier.MEDIUM
    assert record.image_quality == "Good"


def test_invalid_numbers_get_defaults() -> None:
    record = build_operator_record(
        {"hairCount": "abc", "confidence": 150, "category": "great"}
    )

    assert record.hair_count == 85000
    assert record.confidence == 87
    assert record.category is Tier.MEDIUM


def test_form_strings_are_parsed() -> None:
    record = build_operator_record(
        {"hairCount": " 120000 hairs", "confidence": "91", "category": "good"}
    )

    assert record.hair_count == 120000
    assert record.confidence == 91
    assert record.category is Tier.GOOD


def test_non_positive_count_and_bool_values_get_defaults() -> None:
    record = build_operator_record(
        {"hairCount": -10, "confidence": True, "imageQuality": "   "}
    )

    assert record.hair_count == 85000
    assert record.confidence == 87
    assert record.image_quality == "Good"


def test_non_finite_numbers_get_defaults() -> None:
    record = build_operator_record(
        {"hairCount": float("inf"), "confidence": float("nan")}
    )

    assert record.hair_count == 85000
    assert record.confidence == 87


def test_overlong_digit_strings_get_defaults() -> None:
    record = build_operator_record(
        {"hairCount": "9" * 5000, "confidence": "8" * 5000}
    )

    assert record.hair_count == 85000
    assert record.confidence == 87


def test_unhashable_category_gets_default() -> None:
    record = build_operator_record({"category": ["good"]})

    assert record.category is Tier.MEDIUM


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        (4999, 85000),
        (5000, 5000),
        (200000, 200000),
        (200001, 85000),
        ("1000000", 85000),
    ],
)
def test_hair_count_outside_calibrator_range_gets_default(
    raw: object, expected: int
) -> None:
    assert build_operator_record({"hairCount": raw}).hair_count == expected


def test_last_publish_wins() -> None:
    store = InMemoryResultStore()
    publisher = ResultPublisher(store=store, status_board=StatusBoard())

    asyncio.run(publisher.publish({"hairCount": 40000}))
    asyncio.run(publisher.publish({"hairCount": 110000}))

    assert store.payload is not None
    assert store.payload["hairCount"] == 110000
    assert store.writes == 2
