"""Shared data models used across the pupfinder package."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable


@dataclass(frozen=True)
class About:
    """Descriptive attributes of a dog.

    Sequences are tuples so a parsed record can't be changed after load.
    """

    coat_length: str | None = None
    house_trained: bool = False
    health: tuple[str, ...] = ()
    good_in_home_with: tuple[str, ...] = ()
    needs_home_without: tuple[str, ...] = ()
    adoption_fee: int | None = None

    def to_dict(self) -> dict:
        return {
            "coat_length": self.coat_length,
            "house_trained": self.house_trained,
            "health": list(self.health),
            "good_in_home": list(self.good_in_home_with),
            "home_without": list(self.needs_home_without),
            "fee": self.adoption_fee,
        }


@dataclass(frozen=True)
class Dog:
    """One adoptable animal."""

    id: int
    name: str
    breed: str
    location: str
    age_range: str
    sex: str
    size: str
    meet: str
    image_url: str
    adoption_url: str
    color: str | None = None
    about: About = field(default_factory=About)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "breed": self.breed,
            "location": self.location,
            "age_range": self.age_range,
            "sex": self.sex,
            "size": self.size,
            "color": self.color,
            "meet": self.meet,
            "image_url": self.image_url,
            "url": self.adoption_url,
            "about": self.about.to_dict(),
        }


def dump_payload(dogs: Iterable[Dog]) -> dict:
    """Serialize dogs back into the payload shape read by the parser."""
    return {"dogs": [d.to_dict() for d in dogs]}
