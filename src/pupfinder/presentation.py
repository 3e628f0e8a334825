"""Text formatting for the list and details screens."""

from __future__ import annotations

from pupfinder.models import Dog

BULLET = "•"
LEARN_MORE = "LEARN MORE"


def list_row(dog: Dog) -> tuple[str, str]:
    """Name and breed, the two lines of a list row."""
    return dog.name, dog.breed


def headline(dog: Dog) -> str:
    """Age range, sex and size, e.g. ``ADULT • MALE • LARGE``."""
    parts = (dog.age_range, dog.sex, dog.size)
    return f" {BULLET} ".join(p.upper() for p in parts)


def about_rows(dog: Dog) -> list[tuple[str, str]]:
    """(title, text) pairs for the About section.

    Absent values and empty lists are left out entirely; an empty string is
    still shown. The house-trained row only appears when the dog is house
    trained.
    """
    about = dog.about
    candidates: list[tuple[str, str | None]] = [
        ("Color", dog.color),
        ("Coat Length", about.coat_length),
        ("House trained", "Yes" if about.house_trained else None),
        ("Health", _join(about.health)),
        ("Good in a home with", _join(about.good_in_home_with)),
        ("Needs a home without", _join(about.needs_home_without)),
        ("Adoption Fee", f"${about.adoption_fee}" if about.adoption_fee is not None else None),
    ]
    return [(title, text) for title, text in candidates if text is not None]


def call_to_action(dog: Dog) -> str:
    return f"Interested in learning more about {dog.name}?"


def _join(items: tuple[str, ...]) -> str | None:
    return ", ".join(items) if items else None
