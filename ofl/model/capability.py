"""
All capability related classes.
https://github.com/OpenLightingProject/open-fixture-library/blob/master/docs/capability-types.md

A capability is one DMX sub-range of a channel. Its DMX range is declared at
the channel's `dmxValueResolution` and scaled up to the channel's finest
resolution on access.
"""

# pylint: disable=too-many-public-methods

from collections.abc import Callable
from enum import Enum, auto
from functools import cached_property
from typing import TYPE_CHECKING, Any

from ofl.model.cache import clear_cached_properties
from ofl.model.entity import Entity, parse_entity
from ofl.model.exceptions import FixtureConfigurationError, InvariantViolation
from ofl.model.range import Range

if TYPE_CHECKING:
    from ofl.model.channel import CoarseChannel


class DmxValueResolution(Enum):
    """
    Defines the bit depth of the configured DMX values in a channel;
    defaultValue, highlightValue and capability dmxRanges.
    """

    _8BIT = 1
    _16BIT = 2
    _24BIT = 3

    @property
    def fineness(self) -> int:
        """
        :return: The number of fine channels needed for this resolution.
        """
        return self.value - 1

    @classmethod
    def from_string(cls, resolution: str) -> "DmxValueResolution":
        """
        :param resolution: One of "8bit", "16bit" or "24bit".
        :return: The matching resolution.
        """
        try:
            return next(dvr for dvr in cls if dvr.name == f"_{resolution.upper()}")
        except StopIteration:
            raise FixtureConfigurationError(
                f"Invalid dmxValueResolution '{resolution}'. Must be one of: 8bit, 16bit, 24bit"
            ) from None


class MenuClick(Enum):
    """
    The menuClick property defines which DMX value to use if the whole
    capability is selected: start / center / end sets the channel's DMX value
    to the start / center / end of the range, respectively. hidden hides this
    capability from the trigger menu.

    Names match fixture format exactly.
    """

    # pylint: disable=invalid-name
    start = auto()
    center = auto()
    end = auto()
    hidden = auto()


MENU_CLICK_HIDDEN_VALUE = -1

ENTITY_PROPERTIES = (
    "speed",
    "duration",
    "time",
    "brightness",
    "angle",
    "horizontal_angle",
    "vertical_angle",
    "color_temperature",
    "effect_intensity",
    "sensitivity",
    "distance",
    "open_percent",
    "frost_intensity",
    "insertion",
    "fog_output",
    "parameter",
)


def _to_camel_case(snake: str) -> str:
    head, *tail = snake.split("_")
    return head + "".join(part.capitalize() for part in tail)


def _entity_pair(prop: str) -> cached_property:
    json_prop = _to_camel_case(prop)

    def getter(self: "Capability") -> list[Entity] | None:
        return self._get_start_end_pair(json_prop, parse_entity)

    getter.__name__ = prop
    getter.__doc__ = f"Start and end {json_prop} entities, or None if not defined."
    return cached_property(getter)


class Capability:
    """
    A channel can do different things depending on which range its DMX value
    currently is in. Those ranges that can be triggered manually in many
    programs are called capabilities.
    """

    def __init__(self, json_object: dict[str, Any], fineness: int, channel: "CoarseChannel"):
        """
        :param json_object: The capability data from the channel's json.
        :param fineness: How fine this capability is declared.
        :param channel: The channel this capability belongs to.
        """
        self._json_object = json_object
        self._fineness = fineness
        self._channel = channel

    @property
    def json_object(self) -> dict[str, Any]:
        return self._json_object

    @json_object.setter
    def json_object(self, json_object: dict[str, Any]) -> None:
        self._json_object = json_object
        clear_cached_properties(self)

    @property
    def channel(self) -> "CoarseChannel":
        return self._channel

    @property
    def fineness(self) -> int:
        """
        :return: The fineness the DMX range is declared in.
        """
        return self._fineness

    @cached_property
    def raw_dmx_range(self) -> Range:
        """
        :return: The DMX range exactly as declared. Capabilities without a
                 range span the whole channel.
        """
        raw = self._json_object.get("dmxRange", self._json_object.get("range"))
        if raw is None:
            return Range([0, 256 ** (self._fineness + 1) - 1])
        return Range(raw)

    @cached_property
    def dmx_range(self) -> Range:
        """
        :return: The DMX range scaled up to the channel's highest fineness.
                 A coarse range covers every fine sub-value underneath it.
        """
        raw = self.raw_dmx_range
        delta = self._channel.max_fineness - self._fineness
        if delta < 0:
            # declared finer than the channel can be, the validator reports it
            divisor = 256 ** -delta
            return Range([raw.start // divisor, raw.end // divisor])

        factor = 256**delta
        return Range([raw.start * factor, (raw.end + 1) * factor - 1])

    def get_dmx_range_with_fineness(self, fineness: int) -> Range:
        """
        :param fineness: The grade of fineness the DMX range should be scaled
                         (down) to.
        :return: The DMX range in the given fineness.
        """
        max_fineness = self._channel.max_fineness
        if isinstance(fineness, bool) or not isinstance(fineness, int) or not 0 <= fineness <= max_fineness:
            raise InvariantViolation(
                f"fineness must be a non-negative integer not greater than channel "
                f"{self._channel.key}'s maxFineness {max_fineness}, got {fineness!r}"
            )

        divisor = 256 ** (max_fineness - fineness)
        return Range([self.dmx_range.start // divisor, self.dmx_range.end // divisor])

    @property
    def type(self) -> str:
        """
        :return: Describes which feature is controlled by this capability.
        """
        return self._json_object.get("type", "Generic")

    @property
    def comment(self) -> str:
        return self._json_object.get("comment", "")

    @property
    def help_wanted(self) -> str | None:
        return self._json_object.get("helpWanted")

    @property
    def is_help_wanted(self) -> bool:
        return self.help_wanted is not None

    @cached_property
    def is_step(self) -> bool:
        """
        :return: Whether this capability has the same effect from start to end.
        """
        return not any("Start" in prop for prop in self._json_object)

    @cached_property
    def menu_click(self) -> MenuClick:
        menu_click = self._json_object.get("menuClick", MenuClick.start.name)
        try:
            return MenuClick[menu_click]
        except KeyError:
            raise FixtureConfigurationError(
                f"Unknown menuClick '{menu_click}' in channel '{self._channel.key}'."
            ) from None

    @property
    def menu_click_dmx_value(self) -> int:
        """
        :return: The DMX value to set when this capability is chosen in a
                 menu, or -1 for hidden capabilities.
        """
        if self.menu_click is MenuClick.start:
            return self.dmx_range.start
        if self.menu_click is MenuClick.center:
            return self.dmx_range.center
        if self.menu_click is MenuClick.end:
            return self.dmx_range.end
        return MENU_CLICK_HIDDEN_VALUE

    @property
    def switch_channels(self) -> dict[str, str]:
        """
        :return: Switching channel aliases mapped to the channel key they
                 switch to while this capability is active.
        """
        return self._json_object.get("switchChannels", {})

    # TYPE-SPECIFIC PROPERTIES

    @property
    def shutter_effect(self) -> str | None:
        return self._json_object.get("shutterEffect")

    @property
    def color(self) -> str | None:
        return self._json_object.get("color")

    @cached_property
    def colors(self) -> list[list[str]] | None:
        """
        Start and end color hex code lists.
        """
        return self._get_start_end_pair("colors", list)

    @property
    def blade(self) -> str | int | None:
        return self._json_object.get("blade")

    @property
    def fog_type(self) -> str | None:
        return self._json_object.get("fogType")

    @property
    def effect_name(self) -> str | None:
        return self._json_object.get("effectName")

    @property
    def effect_preset(self) -> str | None:
        return self._json_object.get("effectPreset")

    @property
    def sound_controlled(self) -> bool:
        return self._json_object.get("soundControlled", False)

    @property
    def random_timing(self) -> bool:
        return self._json_object.get("randomTiming", False)

    @property
    def wheels(self) -> list[str]:
        """
        :return: Names of the wheels this capability refers to. Wheel related
                 capabilities default to the channel's name.
        """
        wheel = self._json_object.get("wheel")
        if wheel is None:
            return [self._channel.name] if self.type.startswith("Wheel") else []
        return wheel if isinstance(wheel, list) else [wheel]

    @property
    def wheel(self) -> str | None:
        wheels = self.wheels
        return wheels[0] if wheels else None

    @cached_property
    def slot_number(self) -> list[float] | None:
        return self._get_start_end_pair("slotNumber", float)

    @cached_property
    def index(self) -> list[float] | None:
        return self._get_start_end_pair("index", float)

    speed = _entity_pair("speed")
    duration = _entity_pair("duration")
    time = _entity_pair("time")
    brightness = _entity_pair("brightness")
    angle = _entity_pair("angle")
    horizontal_angle = _entity_pair("horizontal_angle")
    vertical_angle = _entity_pair("vertical_angle")
    color_temperature = _entity_pair("color_temperature")
    effect_intensity = _entity_pair("effect_intensity")
    sensitivity = _entity_pair("sensitivity")
    distance = _entity_pair("distance")
    open_percent = _entity_pair("open_percent")
    frost_intensity = _entity_pair("frost_intensity")
    insertion = _entity_pair("insertion")
    fog_output = _entity_pair("fog_output")
    parameter = _entity_pair("parameter")

    @cached_property
    def hold(self) -> Entity | None:
        """
        :return: How long this capability should be selected to take effect.
        """
        if "hold" not in self._json_object:
            return None
        return parse_entity(self._json_object["hold"])

    @cached_property
    def entities(self) -> dict[str, list[Entity]]:
        """
        :return: All entity valued properties that are defined, parsed.
        """
        entities = {}
        for prop in ENTITY_PROPERTIES:
            pair = getattr(self, prop)
            if pair is not None:
                entities[prop] = pair
        return entities

    @cached_property
    def name(self) -> str:
        """
        :return: A short, human-readable description of this capability.
        """
        details = [self.type]
        for value in (self.color, self.shutter_effect, self.effect_name, self.effect_preset, self.fog_type):
            if value:
                details.append(str(value))

        for prop, (start, end) in self.entities.items():
            value = str(start) if start == end else f"{start}…{end}"
            details.append(f"{prop.replace('_', ' ')} {value}")

        name = " ".join(details)
        if self.comment:
            name = f"{name} ({self.comment})"
        return name

    def _get_start_end_pair(self, prop: str, callback: Callable[[Any], Any]) -> list[Any] | None:
        """
        Parses a property that has start and end variants.
        :param prop: The base property name in the fixture format. 'Start' and
                     'End' can be appended to get the start/end variants.
        :param callback: Applied to each of the two values.
        :return: Start and end value of the property (may be equal), or None if
                 it isn't defined.
        """
        if prop in self._json_object:
            value = self._json_object[prop]
            return [callback(value), callback(value)]
        if f"{prop}Start" in self._json_object:
            return [
                callback(self._json_object[f"{prop}Start"]),
                callback(self._json_object[f"{prop}End"]),
            ]
        return None

    def __str__(self) -> str:
        return f"{self.raw_dmx_range} {self.name}"

    def __repr__(self) -> str:
        return self.__str__()
