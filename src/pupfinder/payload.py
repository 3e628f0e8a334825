"""Strict parser turning a dogs payload into Dog/About records."""

from __future__ import annotations

import json
import logging
from typing import Any, Mapping

from pupfinder.models import About, Dog

logger = logging.getLogger(__name__)

_MISSING = object()


class ParseError(ValueError):
    """Raised when the payload is malformed or incomplete.

    ``record`` is the index of the offending dog in the payload (None for
    problems with the payload as a whole) and ``field`` the dotted wire key.
    """

    def __init__(self, message: str, record: int | None = None, field: str | None = None):
        self.record = record
        self.field = field
        where = []
        if record is not None:
            where.append(f"record {record}")
        if field is not None:
            where.append(f"field '{field}'")
        if where:
            message = f"{', '.join(where)}: {message}"
        super().__init__(message)


def parse_payload_text(text: str) -> tuple[Dog, ...]:
    """Parse JSON text holding a dogs payload."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ParseError(f"invalid JSON ({exc.msg} at line {exc.lineno})") from exc
    return parse_payload(data)


def parse_payload(data: Any) -> tuple[Dog, ...]:
    """Convert a ``{"dogs": [...]}`` mapping into dogs, in payload order.

    The whole parse fails on the first bad record; nothing is dropped.
    """
    if not isinstance(data, Mapping):
        raise ParseError(f"expected an object, got {_type_name(data)}")
    entries = data.get("dogs", _MISSING)
    if entries is _MISSING:
        raise ParseError("missing required field", field="dogs")
    if not isinstance(entries, list):
        raise ParseError(f"expected a list, got {_type_name(entries)}", field="dogs")

    dogs: list[Dog] = []
    seen: set[int] = set()
    for index, entry in enumerate(entries):
        dog = parse_dog(entry, index)
        if dog.id in seen:
            raise ParseError(f"duplicate id {dog.id}", record=index, field="id")
        seen.add(dog.id)
        dogs.append(dog)

    logger.debug("Parsed %d dogs from payload", len(dogs))
    return tuple(dogs)


def parse_dog(obj: Any, index: int) -> Dog:
    if not isinstance(obj, Mapping):
        raise ParseError(f"expected an object, got {_type_name(obj)}", record=index)
    return Dog(
        id=_int(obj, "id", index),
        name=_str(obj, "name", index),
        breed=_str(obj, "breed", index),
        location=_str(obj, "location", index),
        age_range=_str(obj, "age_range", index),
        sex=_str(obj, "sex", index),
        size=_str(obj, "size", index),
        color=_str(obj, "color", index, required=False),
        meet=_str(obj, "meet", index),
        image_url=_str(obj, "image_url", index),
        adoption_url=_str(obj, "url", index),
        about=parse_about(_required(obj, "about", index), index),
    )


def parse_about(obj: Any, index: int) -> About:
    if not isinstance(obj, Mapping):
        raise ParseError(
            f"expected an object, got {_type_name(obj)}", record=index, field="about"
        )
    house_trained = obj.get("house_trained")
    if house_trained is None:
        house_trained = False
    elif not isinstance(house_trained, bool):
        raise ParseError(
            f"expected a boolean, got {_type_name(house_trained)}",
            record=index,
            field="about.house_trained",
        )
    return About(
        coat_length=_str(obj, "coat_length", index, prefix="about.", required=False),
        house_trained=house_trained,
        health=_str_list(obj, "health", index, required=True),
        good_in_home_with=_str_list(obj, "good_in_home", index),
        needs_home_without=_str_list(obj, "home_without", index),
        adoption_fee=_int(obj, "fee", index, prefix="about.", required=False),
    )


# ---------------------------------------------------------------------- #
# Field helpers
# ---------------------------------------------------------------------- #


def _required(obj: Mapping, key: str, index: int, prefix: str = "") -> Any:
    value = obj.get(key)
    if value is None:
        raise ParseError("missing required field", record=index, field=prefix + key)
    return value


def _str(
    obj: Mapping, key: str, index: int, prefix: str = "", required: bool = True
) -> str | None:
    value = obj.get(key)
    if value is None:
        if required:
            raise ParseError("missing required field", record=index, field=prefix + key)
        return None
    if not isinstance(value, str):
        raise ParseError(
            f"expected a string, got {_type_name(value)}",
            record=index,
            field=prefix + key,
        )
    return value


def _int(
    obj: Mapping, key: str, index: int, prefix: str = "", required: bool = True
) -> int | None:
    value = obj.get(key)
    if value is None:
        if required:
            raise ParseError("missing required field", record=index, field=prefix + key)
        return None
    # bool is a subclass of int
    if isinstance(value, bool) or not isinstance(value, int):
        raise ParseError(
            f"expected an integer, got {_type_name(value)}",
            record=index,
            field=prefix + key,
        )
    return value


def _str_list(obj: Mapping, key: str, index: int, required: bool = False) -> tuple[str, ...]:
    path = f"about.{key}"
    value = obj.get(key)
    if value is None:
        if required:
            raise ParseError("missing required field", record=index, field=path)
        return ()
    if not isinstance(value, list):
        raise ParseError(
            f"expected a list, got {_type_name(value)}", record=index, field=path
        )
    for item in value:
        if not isinstance(item, str):
            raise ParseError(
                f"expected a list of strings, found {_type_name(item)}",
                record=index,
                field=path,
            )
    return tuple(value)


def _type_name(value: Any) -> str:
    if value is None:
        return "null"
    return type(value).__name__
