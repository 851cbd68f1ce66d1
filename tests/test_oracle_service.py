"""Tests for the oracle wrapper and meal classification."""

import asyncio
from dataclasses import dataclass

import pytest

from fitness_tracker.domain.errors import OracleUnavailable
from fitness_tracker.services.healthiness import MealHealthClassifier
from fitness_tracker.services.oracle import (
    DisabledCompletionClient,
    OracleService,
)
from tests.conftest import FakeCompletionClient


@dataclass
class SlowCompletionClient:
    delay: float

    async def complete(self, prompt: str) -> str:
        await asyncio.sleep(self.delay)
        return "{}"


def test_complete_json_strips_code_fences() -> None:
    oracle = OracleService(FakeCompletionClient(reply='```json\n{"a": 1}\n```'))

    assert asyncio.run(oracle.complete_json("prompt")) == {"a": 1}


@pytest.mark.parametrize("reply", ["not json", "[1, 2]", "   "])
def test_bad_output_is_unavailable(reply: str) -> None:
    oracle = OracleService(FakeCompletionClient(reply=reply))

    with pytest.raises(OracleUnavailable):
        asyncio.run(oracle.complete_json("prompt"))


def test_client_errors_are_unavailable() -> None:
    oracle = OracleService(FakeCompletionClient(error=RuntimeError("boom")))

    with pytest.raises(OracleUnavailable, match="boom"):
        asyncio.run(oracle.complete("prompt"))


def test_timeout_is_unavailable() -> None:
    oracle = OracleService(SlowCompletionClient(delay=1.0), timeout_seconds=0.01)

    with pytest.raises(OracleUnavailable, match="timed out"):
        asyncio.run(oracle.complete("prompt"))


def test_disabled_client() -> None:
    oracle = OracleService(DisabledCompletionClient())

    with pytest.raises(OracleUnavailable):
        asyncio.run(oracle.complete("prompt"))


def test_classifier_keeps_requested_names_with_valid_labels() -> None:
    client = FakeCompletionClient(
        reply=(
            '{"Salad": "Healthy", "Fries": "Unhealthy", '
            '"Soup": "Maybe", "Cake": "Unhealthy"}'
        )
    )
    classifier = MealHealthClassifier(OracleService(client))

    labels = asyncio.run(classifier.classify(["Fries", "Salad", "Soup"]))

    assert labels == {"Salad": "Healthy", "Fries": "Unhealthy"}
    assert '["Fries", "Salad", "Soup"]' in client.prompts[0]


def test_classifier_skips_oracle_for_no_meals() -> None:
    client = FakeCompletionClient()

    assert asyncio.run(MealHealthClassifier(OracleService(client)).classify([])) == {}
    assert client.prompts == []
