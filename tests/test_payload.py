"""Tests for the strict payload parser."""

import copy
import json

import pytest

from pupfinder.models import About, Dog
from pupfinder.payload import ParseError, parse_payload, parse_payload_text

REX = {
    "id": 1,
    "name": "Rex",
    "breed": "Lab",
    "location": "X",
    "age_range": "Adult",
    "sex": "M",
    "size": "Large",
    "meet": "Hi",
    "image_url": "u",
    "url": "a",
    "about": {"health": []},
}


def _payload(*dogs):
    return {"dogs": [copy.deepcopy(d) for d in dogs]}


def _with(id_, **changes):
    d = copy.deepcopy(REX)
    d["id"] = id_
    d.update(changes)
    return d


def test_parses_minimal_record_with_defaults():
    dogs = parse_payload(_payload(REX))

    assert dogs == (
        Dog(
            id=1,
            name="Rex",
            breed="Lab",
            location="X",
            age_range="Adult",
            sex="M",
            size="Large",
            color=None,
            meet="Hi",
            image_url="u",
            adoption_url="a",
            about=About(
                coat_length=None,
                house_trained=False,
                health=(),
                good_in_home_with=(),
                needs_home_without=(),
                adoption_fee=None,
            ),
        ),
    )


def test_maps_wire_keys_to_attributes():
    about = {
        "coat_length": "Long",
        "house_trained": True,
        "health": ["Vaccinated"],
        "good_in_home": ["Children"],
        "home_without": ["Cats"],
        "fee": 125,
    }
    (dog,) = parse_payload(_payload(_with(3, color="Black", about=about)))

    assert dog.adoption_url == "a"
    assert dog.color == "Black"
    assert dog.about.coat_length == "Long"
    assert dog.about.house_trained is True
    assert dog.about.health == ("Vaccinated",)
    assert dog.about.good_in_home_with == ("Children",)
    assert dog.about.needs_home_without == ("Cats",)
    assert dog.about.adoption_fee == 125


def test_preserves_payload_order():
    dogs = parse_payload(_payload(_with(5), _with(2), _with(9)))
    assert [d.id for d in dogs] == [5, 2, 9]


def test_null_optionals_treated_as_absent():
    about = {"health": [], "house_trained": None, "good_in_home": None, "fee": None}
    (dog,) = parse_payload(_payload(_with(1, color=None, about=about)))

    assert dog.color is None
    assert dog.about.house_trained is False
    assert dog.about.good_in_home_with == ()
    assert dog.about.adoption_fee is None


def test_empty_collection():
    assert parse_payload({"dogs": []}) == ()


class TestStrictFailures:
    @pytest.mark.parametrize(
        "key", ["id", "name", "breed", "location", "age_range", "sex", "size",
                "meet", "image_url", "url", "about"],
    )
    def test_missing_required_field(self, key):
        bad = copy.deepcopy(REX)
        del bad[key]

        with pytest.raises(ParseError) as info:
            parse_payload(_payload(REX | {"id": 0}, bad))

        assert info.value.record == 1
        assert info.value.field == key
        assert f"record 1, field '{key}'" in str(info.value)

    def test_missing_health(self):
        with pytest.raises(ParseError) as info:
            parse_payload(_payload(_with(1, about={"fee": 10})))
        assert info.value.field == "about.health"

    def test_wrong_shapes(self):
        cases = [
            (_with(1, id="1"), "id"),
            (_with(1, id=True), "id"),
            (_with(1, name=5), "name"),
            (_with(1, color=3), "color"),
            (_with(1, about=[]), "about"),
            (_with(1, about={"health": "none"}), "about.health"),
            (_with(1, about={"health": [1]}), "about.health"),
            (_with(1, about={"health": [], "house_trained": "yes"}), "about.house_trained"),
            (_with(1, about={"health": [], "fee": 9.5}), "about.fee"),
            (_with(1, about={"health": [], "home_without": "Cats"}), "about.home_without"),
        ]
        for record, field in cases:
            with pytest.raises(ParseError) as info:
                parse_payload(_payload(record))
            assert info.value.field == field, record

    def test_non_object_record(self):
        with pytest.raises(ParseError) as info:
            parse_payload({"dogs": [REX, "rex"]})
        assert info.value.record == 1
        assert info.value.field is None

    def test_duplicate_ids_rejected(self):
        with pytest.raises(ParseError) as info:
            parse_payload(_payload(_with(4), _with(4)))
        assert info.value.record == 1
        assert info.value.field == "id"

    def test_top_level_shape(self):
        with pytest.raises(ParseError):
            parse_payload([REX])
        with pytest.raises(ParseError) as info:
            parse_payload({"pets": []})
        assert info.value.field == "dogs"
        assert info.value.record is None
        with pytest.raises(ParseError):
            parse_payload({"dogs": {"1": REX}})


def test_parse_payload_text():
    dogs = parse_payload_text(json.dumps(_payload(REX)))
    assert len(dogs) == 1


def test_parse_payload_text_invalid_json():
    with pytest.raises(ParseError, match="invalid JSON"):
        parse_payload_text("{dogs: ")
