"""Tests for the Dog/About records and their serialization."""

import dataclasses
import json
from pathlib import Path

import pytest

from pupfinder.models import About, Dog, dump_payload
from pupfinder.payload import parse_payload, parse_payload_text

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def dogs():
    return parse_payload_text((FIXTURES / "payload.json").read_text())


def test_records_are_immutable(dogs):
    with pytest.raises(dataclasses.FrozenInstanceError):
        dogs[0].name = "Max"
    with pytest.raises(dataclasses.FrozenInstanceError):
        dogs[0].about.house_trained = True


def test_about_always_present():
    dog = Dog(
        id=1, name="Rex", breed="Lab", location="X", age_range="Adult",
        sex="M", size="Large", meet="Hi", image_url="u", adoption_url="a",
    )
    assert dog.about == About()


def test_to_dict_uses_wire_keys(dogs):
    d = dogs[1].to_dict()
    assert d["url"] == "https://adopt.example.org/daisy"
    assert d["about"]["good_in_home"] == ["Children", "Other dogs"]
    assert d["about"]["home_without"] == ["Cats"]
    assert d["about"]["fee"] == 150
    assert "adoption_url" not in d


def test_round_trip_through_json(dogs):
    text = json.dumps(dump_payload(dogs))
    assert parse_payload(json.loads(text)) == dogs


def test_records_are_hashable(dogs):
    assert len({d for d in dogs}) == len(dogs)
