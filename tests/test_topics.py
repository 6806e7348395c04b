"""Tests for the topic registry, dispatcher and result flattening."""

from __future__ import annotations

import json

import numpy as np
import pytest

from emlab.errors import EngineError, InvalidInputError, UnknownTopicError
from emlab.topics import (
    TOPIC_REGISTRY,
    Topic,
    evaluate,
    get_topic,
    list_topics,
    parse_assignments,
    parse_param,
    result_to_dict,
)
from emlab.transmission.line import LoadAnalysis


# -----------------------------------------------------------------------------
# Registry
# -----------------------------------------------------------------------------


class TestRegistry:
    def test_every_topic_registered(self) -> None:
        assert set(TOPIC_REGISTRY) == set(Topic)

    def test_lookup_by_name(self) -> None:
        key, entry = get_topic("smith_chart")
        assert key is Topic.SMITH_CHART
        assert entry.description

    def test_unknown_topic(self) -> None:
        with pytest.raises(UnknownTopicError) as exc:
            get_topic("maxwell_demon")
        assert "maxwell_demon" in str(exc.value)
        assert isinstance(exc.value, KeyError)
        assert isinstance(exc.value, EngineError)

    def test_list_topics(self) -> None:
        topics = list_topics()
        assert len(topics) == len(Topic)
        names = [t["name"] for t in topics]
        assert "friis" in names
        assert all(t["description"] for t in topics)


# -----------------------------------------------------------------------------
# Dispatch
# -----------------------------------------------------------------------------


class TestEvaluate:
    @pytest.mark.parametrize("topic", list(Topic), ids=lambda t: t.value)
    def test_defaults_evaluate_and_serialize(self, topic: Topic) -> None:
        """Every topic computes from its defaults and flattens to JSON."""
        result = evaluate(topic)
        flat = result_to_dict(result)
        json.dumps(flat)

    def test_override(self) -> None:
        result = evaluate("load_analysis", z_load=50.0)
        assert isinstance(result, LoadAnalysis)
        assert result.is_matched
        assert result.vswr == pytest.approx(1.0)

    def test_reactive_stub_load_serializes(self) -> None:
        result = evaluate("single_stub", z_load=-30j)
        assert result.solutions == []
        assert result_to_dict(result)["solutions"] == []

    def test_defaults_not_mutated(self) -> None:
        before = dict(TOPIC_REGISTRY[Topic.ARRAY].defaults)
        evaluate(Topic.ARRAY, num_elements=4)
        assert TOPIC_REGISTRY[Topic.ARRAY].defaults == before

    def test_unknown_parameter(self) -> None:
        with pytest.raises(InvalidInputError) as exc:
            evaluate("friis", antenna_height=10.0)
        assert exc.value.value == ["antenna_height"]

    def test_domain_error_propagates(self) -> None:
        with pytest.raises(InvalidInputError):
            evaluate("quarter_wave", r_load=-10.0)


# -----------------------------------------------------------------------------
# Parameter parsing
# -----------------------------------------------------------------------------


class TestParsing:
    @pytest.mark.parametrize("raw,expected", [
        ("75", 75),
        ("1e9", 1e9),
        ("100-50j", 100 - 50j),
        (" (1, 2, 0) ", (1, 2, 0)),
        ("short", "short"),
        ("half_wave", "half_wave"),
    ])
    def test_parse_param(self, raw: str, expected) -> None:
        assert parse_param(raw) == expected

    def test_assignments(self) -> None:
        params = parse_assignments(["z0=75", "stub_type = open", "z_load=30+40j"])
        assert params == {"z0": 75, "stub_type": "open", "z_load": 30 + 40j}

    @pytest.mark.parametrize("bad", ["z0", "=5"])
    def test_malformed_assignment(self, bad: str) -> None:
        with pytest.raises(InvalidInputError):
            parse_assignments([bad])


# -----------------------------------------------------------------------------
# Flattening
# -----------------------------------------------------------------------------


class TestResultToDict:
    def test_complex_values(self) -> None:
        flat = result_to_dict(evaluate("load_analysis"))
        assert flat["gamma"] == {"re": pytest.approx(1 / 3), "im": pytest.approx(0.0)}
        assert flat["vswr"] == pytest.approx(2.0)

    def test_enum_and_numpy_scalars(self) -> None:
        assert result_to_dict(Topic.DIPOLE) == "dipole"
        assert result_to_dict(np.float64(2.5)) == 2.5
        assert isinstance(result_to_dict(np.int64(3)), int)

    def test_complex_array(self) -> None:
        assert result_to_dict(np.array([1 + 2j])) == {"re": [1.0], "im": [2.0]}

    def test_nested_containers(self) -> None:
        flat = result_to_dict({1: (np.float64(1.0), [2j])})
        assert flat == {"1": [1.0, [{"re": 0.0, "im": 2.0}]]}
