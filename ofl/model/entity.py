"""
Entities are the human-readable values used in capabilities, like "fast CW",
"50%" or "3s". They are parsed into a number, a unit and the keyword they were
given with (if any).
"""

import re
from dataclasses import dataclass

from ofl.model.exceptions import FixtureConfigurationError

entity_value = re.compile(r"^([-0-9.]+)(.*)$")

KEYWORDS: dict[str, float] = {
    "fast reverse": -100,
    "slow reverse": -1,
    "stop": 0,
    "slow": 1,
    "fast": 100,
    "fast CCW": -100,
    "slow CCW": -1,
    "slow CW": 1,
    "fast CW": 100,
    "instant": 0,
    "short": 1,
    "long": 100,
    "near": 1,
    "far": 100,
    "off": 0,
    "dark": 1,
    "bright": 100,
    "warm": -100,
    "CTO": -100,
    "default": 0,
    "cold": 100,
    "CTB": 100,
    "weak": 1,
    "strong": 100,
    "closed": 0,
    "narrow": 1,
    "wide": 100,
    "low": 1,
    "high": 100,
    "out": 0,
    "in": 100,
    "open": 100,
    "left": -100,
    "center": 0,
    "right": 100,
    "top": -100,
    "bottom": 100,
    "small": 1,
    "big": 100,
}


@dataclass(frozen=True)
class Entity:
    """
    Machine-readable version of an entity string. Units are kept opaque
    (`%`, `ms`, `Hz`, `deg`, `m^3/min`, ...); keywords always use `%`.
    """

    number: float
    unit: str
    keyword: str | None = None

    def __str__(self) -> str:
        if self.keyword is not None:
            return self.keyword
        number = int(self.number) if float(self.number).is_integer() else self.number
        return f"{number}{self.unit}"

    def __lt__(self, other: "Entity") -> bool:
        return self.number < other.number


def parse_entity(entity_string: str | int | float) -> Entity:
    """
    Parses an entity string from the fixture format.
    :param entity_string: The raw entity string (with unit, if present).
                          Plain numbers are accepted as unit-less values.
    :return: The parsed `Entity`.
    """
    if isinstance(entity_string, bool):
        raise FixtureConfigurationError(f"'{entity_string}' is not a valid entity string.")

    if isinstance(entity_string, (int, float)):
        return Entity(float(entity_string), "")

    if entity_string in KEYWORDS:
        return Entity(KEYWORDS[entity_string], "%", entity_string)

    match = entity_value.match(entity_string)
    if match is None:
        raise FixtureConfigurationError(f"'{entity_string}' is not a valid entity string.")

    number_string, unit = match.groups()
    try:
        number = float(number_string)
    except ValueError:
        raise FixtureConfigurationError(f"'{entity_string}' is not a valid entity string.") from None

    return Entity(number, unit)
