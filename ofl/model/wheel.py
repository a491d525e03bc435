"""
The wheel module contains all wheel related model classes.
https://github.com/OpenLightingProject/open-fixture-library/blob/master/docs/fixture-format.md#wheels

Slot class names are directly mapped to the slot types of the fixture format.
"""

# pylint: disable=too-few-public-methods

import sys
from functools import cached_property
from typing import Any

from ofl.model.entity import Entity, parse_entity
from ofl.model.exceptions import FixtureConfigurationError


class WheelSlot:
    """
    A wheel slot superclass, just to group all wheel slots together under one
    umbrella.
    """

    def __init__(self, json_object: dict[str, Any], wheel: "Wheel", nth_slot: int) -> None:
        self.json_object = json_object
        self.wheel = wheel
        self.nth_slot = nth_slot

    @property
    def type(self) -> str:
        return self.json_object["type"]

    @property
    def name(self) -> str:
        return self.json_object.get("name") or self.type

    def __repr__(self) -> str:
        return self.name


class Open(WheelSlot):
    """
    An Open wheel slot.
    """


class Closed(WheelSlot):
    """
    A Closed wheel slot.
    """


class Color(WheelSlot):
    """
    A Color wheel slot.
    """

    @property
    def colors(self) -> list[str]:
        return self.json_object.get("colors", [])

    @cached_property
    def color_temperature(self) -> Entity | None:
        if "colorTemperature" not in self.json_object:
            return None
        return parse_entity(self.json_object["colorTemperature"])

    @property
    def name(self) -> str:
        if "name" in self.json_object:
            return self.json_object["name"]
        if self.color_temperature:
            return str(self.color_temperature)
        return str(self.colors) if self.colors else "Color"


class Gobo(WheelSlot):
    """
    A Gobo wheel slot.
    """

    @property
    def resource(self) -> str | dict[str, Any] | None:
        return self.json_object.get("resource")


class Prism(WheelSlot):
    """
    A Prism wheel slot.
    """

    @property
    def facets(self) -> int | None:
        return self.json_object.get("facets")


class Iris(WheelSlot):
    """
    An Iris wheel slot.
    """

    @cached_property
    def open_percent(self) -> Entity | None:
        if "openPercent" not in self.json_object:
            return None
        return parse_entity(self.json_object["openPercent"])


class Frost(WheelSlot):
    """
    A Frost wheel slot.
    """

    @cached_property
    def frost_intensity(self) -> Entity | None:
        if "frostIntensity" not in self.json_object:
            return None
        return parse_entity(self.json_object["frostIntensity"])


class AnimationGoboStart(WheelSlot):
    """
    An AnimationGoboStart wheel slot.
    """


class AnimationGoboEnd(WheelSlot):
    """
    An AnimationGoboEnd wheel slot.
    """


def create_wheel_slot(json_object: dict[str, Any], wheel: "Wheel", nth_slot: int) -> WheelSlot:
    """
    :param json_object: The slot's JSON data.
    :param wheel: The wheel the slot belongs to.
    :param nth_slot: The 1-based slot number.
    :return: An instance of the slot class named like the slot type.
    """
    slot_class = getattr(sys.modules[__name__], json_object.get("type", ""), None)
    if not (isinstance(slot_class, type) and issubclass(slot_class, WheelSlot)):
        raise FixtureConfigurationError(f"Wheel {wheel.name} has a slot of unknown type: {json_object.get('type')}")
    return slot_class(json_object, wheel, nth_slot)


class Wheel:
    """
    The Wheel model class, containing all of its wheel slots.
    """

    def __init__(self, name: str, json_object: dict[str, Any]) -> None:
        self.name = name
        self.json_object = json_object

    @property
    def direction(self) -> str:
        return self.json_object.get("direction", "CW")

    @cached_property
    def slots(self) -> list[WheelSlot]:
        return [
            create_wheel_slot(slot_json, self, nth_slot)
            for nth_slot, slot_json in enumerate(self.json_object["slots"], start=1)
        ]

    def get_slot(self, slot_number: int) -> WheelSlot:
        """
        :param slot_number: The 1-based slot number, wrapping around.
        :return: The wheel slot.
        """
        return self.slots[(slot_number - 1) % len(self.slots)]

    def __repr__(self) -> str:
        return self.name

    def __str__(self) -> str:
        return f"{self.name}: {self.slots}"
