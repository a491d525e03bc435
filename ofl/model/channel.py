"""
Channels of a fixture. A coarse channel maps to one DMX channel and may be
extended by fine channels (less significant bytes). Switching channels are
aliases whose target depends on the current value of their trigger channel.
"""

from enum import Enum, auto
from functools import cached_property
from typing import TYPE_CHECKING, Any

from ofl.model.capability import Capability, DmxValueResolution
from ofl.model.range import Range

if TYPE_CHECKING:
    from ofl.model.fixture import Fixture
    from ofl.model.mode import Mode

# Single capability type -> channel type. Unlisted types are used as is.
CHANNEL_TYPE_BY_CAPABILITY_TYPE = {
    "ColorIntensity": "Single Color",
    "ColorPreset": "Multi-Color",
    "ShutterStrobe": "Strobe",
    "StrobeSpeed": "Strobe",
    "StrobeDuration": "Strobe",
    "PanContinuous": "Pan",
    "TiltContinuous": "Tilt",
    "WheelSlot": "Wheel",
    "WheelShake": "Wheel",
    "WheelSlotRotation": "Wheel",
    "WheelRotation": "Wheel",
}

COLOR_CAPABILITY_TYPES = {"ColorIntensity", "ColorPreset", "ColorTemperature", "WheelSlot"}

# Legacy channel-level types -> capability type of their implicit capability.
IMPLICIT_CAPABILITY_TYPES = {
    "Intensity": "Intensity",
    "Single Color": "ColorIntensity",
    "Pan": "Pan",
    "Tilt": "Tilt",
    "Nothing": "NoFunction",
}


class ChannelRole(Enum):
    """
    The closed set of roles a resolved channel can have.
    """

    COARSE = auto()
    FINE = auto()
    NULL = auto()
    SWITCHING = auto()


def max_dmx_value(fineness: int) -> int:
    """
    :param fineness: 0 for 8 bit, 1 for 16 bit, ...
    :return: The highest DMX value with that fineness.
    """
    return 256 ** (fineness + 1) - 1


def scale_dmx_value(value: int, from_fineness: int, to_fineness: int) -> int:
    """
    Converts a DMX value from one fineness to another one. Scaling up pads
    the new bytes with zeros, scaling down floors.
    """
    if to_fineness >= from_fineness:
        return value * 256 ** (to_fineness - from_fineness)
    return value // 256 ** (from_fineness - to_fineness)


def percent_to_dmx_value(value: str | int, fineness: int) -> int:
    """
    Converts a percent string (75%) into a DMX value of the given fineness.
    :param value: If a string, converts it. Otherwise pass through the number.
    :param fineness: The fineness the percentage relates to.
    :return: The converted DMX value.
    """
    if isinstance(value, str):
        assert value[-1] == "%"
        return int(float(value[:-1]) / 100 * max_dmx_value(fineness))
    return value


class AbstractChannel:
    """
    Base of every channel that can appear in a fixture's resolved channel
    table.
    """

    role: ChannelRole

    def __init__(self, key: str):
        self.key = key
        self._pixel_key: str | None = None

    @property
    def fixture(self) -> "Fixture":
        raise NotImplementedError

    @property
    def name(self) -> str:
        return self.key

    @property
    def pixel_key(self) -> str | None:
        """
        :return: The matrix pixel (group) key this channel belongs to, if it
                 was generated from or overrides a template channel.
        """
        return self._pixel_key

    @pixel_key.setter
    def pixel_key(self, pixel_key: str | None) -> None:
        self._pixel_key = pixel_key

    @property
    def unique_name(self) -> str:
        """
        :return: The channel name, made unique within the fixture.
        """
        return self.fixture.unique_channel_names.get(self.key, self.name)

    def __repr__(self) -> str:
        return self.key


class CoarseChannel(AbstractChannel):
    """
    A channel declared in `availableChannels` (or generated from a template
    channel). It owns the capabilities, fine and switching channel aliases.
    """

    # pylint: disable=too-many-public-methods

    role = ChannelRole.COARSE

    def __init__(self, key: str, json_object: dict[str, Any], fixture: "Fixture"):
        super().__init__(key)
        self.json_object = json_object
        self._fixture = fixture

    @property
    def fixture(self) -> "Fixture":
        return self._fixture

    @property
    def name(self) -> str:
        return self.json_object.get("name", self.key)

    @property
    def fine_channel_aliases(self) -> list[str]:
        return self.json_object.get("fineChannelAliases", [])

    @cached_property
    def fine_channels(self) -> list["FineChannel"]:
        """
        :return: Fine channels, index = fineness - 1.
        """
        return [
            FineChannel(alias, self, fineness)
            for fineness, alias in enumerate(self.fine_channel_aliases, start=1)
        ]

    @property
    def max_fineness(self) -> int:
        return len(self.fine_channel_aliases)

    @property
    def has_dmx_value_resolution(self) -> bool:
        return "dmxValueResolution" in self.json_object

    @cached_property
    def dmx_value_resolution(self) -> DmxValueResolution:
        """
        :return: The resolution defaultValue, highlightValue and capability
                 ranges are declared in. Without an explicit one, it's the
                 resolution the last capability range ends in, else 8 bit.
        """
        if self.has_dmx_value_resolution:
            return DmxValueResolution.from_string(self.json_object["dmxValueResolution"])

        last_range_end = self._last_declared_range_end
        return next(
            (
                resolution
                for resolution in DmxValueResolution
                if resolution.fineness <= self.max_fineness and max_dmx_value(resolution.fineness) == last_range_end
            ),
            DmxValueResolution._8BIT,  # pylint: disable=protected-access
        )

    @property
    def _last_declared_range_end(self) -> int | None:
        capabilities = self.json_object.get("capabilities")
        if not capabilities:
            return None
        dmx_range = capabilities[-1].get("dmxRange", capabilities[-1].get("range"))
        return dmx_range[1] if dmx_range else None

    @property
    def declared_fineness(self) -> int:
        return self.dmx_value_resolution.fineness

    @property
    def max_dmx_bound(self) -> int:
        """
        :return: The highest DMX value in the declared resolution.
        """
        return max_dmx_value(self.declared_fineness)

    @cached_property
    def capabilities(self) -> list[Capability]:
        """
        :return: The channel's capabilities. A channel without any behaves as
                 one implicit capability spanning its whole range.
        """
        fineness = self.declared_fineness
        if "capability" in self.json_object:
            return [Capability(self.json_object["capability"], fineness, self)]
        if "capabilities" in self.json_object:
            return [Capability(cap_json, fineness, self) for cap_json in self.json_object["capabilities"]]

        implicit = {
            "dmxRange": [0, max_dmx_value(fineness)],
            "type": IMPLICIT_CAPABILITY_TYPES.get(self.json_object.get("type"), "Generic"),
        }
        if "color" in self.json_object:
            implicit["color"] = self.json_object["color"]
        return [Capability(implicit, fineness, self)]

    @property
    def has_capabilities(self) -> bool:
        """
        :return: Whether capabilities are declared explicitly.
        """
        return "capability" in self.json_object or "capabilities" in self.json_object

    @cached_property
    def switching_channel_aliases(self) -> list[str]:
        aliases: list[str] = []
        for capability in self.capabilities:
            for alias in capability.switch_channels:
                if alias not in aliases:
                    aliases.append(alias)
        return aliases

    @cached_property
    def switching_channels(self) -> list["SwitchingChannel"]:
        return [SwitchingChannel(alias, self) for alias in self.switching_channel_aliases]

    @cached_property
    def type(self) -> str:
        """
        :return: The channel type, derived from its capabilities.
        """
        if "type" in self.json_object:
            return self.json_object["type"]

        capability_types = list(dict.fromkeys(cap.type for cap in self.capabilities))
        if len(capability_types) > 1 and "NoFunction" in capability_types:
            capability_types.remove("NoFunction")

        if len(capability_types) == 1:
            capability_type = capability_types[0]
            return CHANNEL_TYPE_BY_CAPABILITY_TYPE.get(capability_type, capability_type)

        if all(cap_type in COLOR_CAPABILITY_TYPES for cap_type in capability_types):
            return "Multi-Color"

        first = capability_types[0]
        return CHANNEL_TYPE_BY_CAPABILITY_TYPE.get(first, first)

    @cached_property
    def color(self) -> str | None:
        """
        :return: The color of a Single Color channel, None otherwise.
        """
        if "color" in self.json_object:
            return self.json_object["color"]

        colors = {cap.color for cap in self.capabilities if cap.type == "ColorIntensity"}
        if len(colors) == 1:
            return colors.pop()
        return None

    @property
    def has_default_value(self) -> bool:
        return "defaultValue" in self.json_object

    @property
    def default_value(self) -> int:
        """
        :return: The DMX value this channel should be set to initially, in the
                 declared resolution.
        """
        return percent_to_dmx_value(self.json_object.get("defaultValue", 0), self.declared_fineness)

    def get_default_value_with_fineness(self, fineness: int) -> int:
        return scale_dmx_value(self.default_value, self.declared_fineness, fineness)

    @property
    def has_highlight_value(self) -> bool:
        return "highlightValue" in self.json_object

    @property
    def highlight_value(self) -> int:
        """
        :return: The DMX value to highlight the channel, in the declared
                 resolution. Defaults to the highest value.
        """
        if not self.has_highlight_value:
            return self.max_dmx_bound
        return percent_to_dmx_value(self.json_object["highlightValue"], self.declared_fineness)

    def get_highlight_value_with_fineness(self, fineness: int) -> int:
        return scale_dmx_value(self.highlight_value, self.declared_fineness, fineness)

    @property
    def constant(self) -> bool:
        return self.json_object.get("constant", False)

    @property
    def crossfade(self) -> bool:
        return self.json_object.get("crossfade", False)

    @property
    def precedence(self) -> str:
        return self.json_object.get("precedence", "LTP")

    @property
    def is_help_wanted(self) -> bool:
        return any(cap.is_help_wanted for cap in self.capabilities)

    def get_fineness_in_mode(self, mode: "Mode") -> int:
        """
        :param mode: The mode in which to look for fine channels.
        :return: How many consecutive fine channels of this channel the mode
                 uses, or -1 if the coarse channel itself is not used.
        """
        if mode.get_channel_index(self.key) == -1:
            return -1

        fineness = 0
        for fine_channel in self.fine_channels:
            if mode.get_channel_index(fine_channel.key) == -1:
                break
            fineness += 1
        return fineness

    def __str__(self) -> str:
        return f"{self.key}: {self.capabilities}"


class FineChannel(AbstractChannel):
    """
    A less significant byte of a coarse channel. It has no capabilities of its
    own.
    """

    role = ChannelRole.FINE

    def __init__(self, key: str, coarse_channel: CoarseChannel, fineness: int):
        super().__init__(key)
        self.coarse_channel = coarse_channel
        self.fineness = fineness

    @property
    def fixture(self) -> "Fixture":
        return self.coarse_channel.fixture

    @property
    def name(self) -> str:
        if self.fineness == 1:
            return f"{self.coarse_channel.name} fine"
        return f"{self.coarse_channel.name} fine^{self.fineness}"

    @property
    def pixel_key(self) -> str | None:
        return self._pixel_key if self._pixel_key is not None else self.coarse_channel.pixel_key

    @pixel_key.setter
    def pixel_key(self, pixel_key: str | None) -> None:
        self._pixel_key = pixel_key

    @property
    def max_fineness(self) -> int:
        return self.coarse_channel.max_fineness

    @property
    def capabilities(self) -> list[Capability]:
        """
        :return: The coarse channel's capabilities, whose ranges are given in
                 the finest resolution.
        """
        return self.coarse_channel.capabilities

    @property
    def default_value(self) -> int:
        """
        :return: This channel's byte of the coarse channel's default value.
        """
        return self.coarse_channel.get_default_value_with_fineness(self.fineness) % 256


class NullChannel(CoarseChannel):
    """
    Placeholder for an unused DMX slot in a mode.
    """

    role = ChannelRole.NULL

    def __init__(self, fixture: "Fixture", number: int):
        super().__init__(
            f"null-{number}",
            {"name": "No function", "capability": {"type": "NoFunction"}},
            fixture,
        )


class SwitchingChannel(AbstractChannel):
    """
    A virtual channel whose target channel depends on the currently active
    capability of its trigger channel.
    """

    role = ChannelRole.SWITCHING

    def __init__(self, key: str, trigger_channel: CoarseChannel):
        super().__init__(key)
        self.trigger_channel = trigger_channel

    @property
    def fixture(self) -> "Fixture":
        return self.trigger_channel.fixture

    @property
    def pixel_key(self) -> str | None:
        return self._pixel_key if self._pixel_key is not None else self.trigger_channel.pixel_key

    @pixel_key.setter
    def pixel_key(self, pixel_key: str | None) -> None:
        self._pixel_key = pixel_key

    @cached_property
    def trigger_capabilities(self) -> list[Capability]:
        """
        :return: The trigger channel's capabilities that switch this channel.
        """
        return [cap for cap in self.trigger_channel.capabilities if self.key in cap.switch_channels]

    @cached_property
    def switch_to_channel_keys(self) -> list[str]:
        return list(dict.fromkeys(cap.switch_channels[self.key] for cap in self.trigger_capabilities))

    @property
    def switch_to_channels(self) -> list[AbstractChannel | None]:
        """
        :return: The channels this channel can be switched to; None for keys
                 that are not defined.
        """
        return [self.fixture.get_channel_by_key(key) for key in self.switch_to_channel_keys]

    @cached_property
    def trigger_ranges(self) -> dict[str, list[Range]]:
        """
        :return: Switched channel keys mapped to the trigger channel's DMX
                 ranges (finest resolution) which activate them.
        """
        return {
            key: Range.get_merged_ranges(
                cap.dmx_range for cap in self.trigger_capabilities if cap.switch_channels[self.key] == key
            )
            for key in self.switch_to_channel_keys
        }

    def get_switched_channel_key(self, trigger_value: int) -> str | None:
        """
        :param trigger_value: The trigger channel's current DMX value, in its
                              finest resolution.
        :return: The key of the channel this channel currently stands for.
        """
        for capability in self.trigger_channel.capabilities:
            if capability.dmx_range.contains(trigger_value):
                return capability.switch_channels.get(self.key)
        return None

    @property
    def default_channel_key(self) -> str | None:
        """
        :return: The channel key that is active with the trigger channel's
                 default value.
        """
        trigger = self.trigger_channel
        return self.get_switched_channel_key(trigger.get_default_value_with_fineness(trigger.max_fineness))

    @property
    def default_channel(self) -> AbstractChannel | None:
        key = self.default_channel_key
        return None if key is None else self.fixture.get_channel_by_key(key)

    def uses_channel_key(self, channel_key: str, switching_behavior: str = "all") -> bool:
        """
        :param channel_key: The key to look for.
        :param switching_behavior: "all" checks every switched channel,
                                   "default" only the default one, "none" none.
        :return: Whether this channel switches to the given channel key.
        """
        if switching_behavior == "all":
            return channel_key in self.switch_to_channel_keys
        if switching_behavior == "default":
            return channel_key == self.default_channel_key
        return False
