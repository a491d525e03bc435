"""
The fixture is the God class on which can be operated. It holds the raw
fixture data from the fixture format and lazily builds, caches and cross-links
every other model object from it.
"""

# pylint: disable=too-many-public-methods

from functools import cached_property
from typing import TYPE_CHECKING, Any

from ofl.const import OFL_URL
from ofl.model.cache import clear_cached_properties
from ofl.model.capability import Capability
from ofl.model.channel import AbstractChannel, CoarseChannel, ChannelRole, FineChannel, NullChannel, SwitchingChannel
from ofl.model.manufacturer import Manufacturer
from ofl.model.matrix import Matrix
from ofl.model.meta import Meta
from ofl.model.mode import Mode
from ofl.model.physical import Physical
from ofl.model.template_channel import TemplateChannel
from ofl.model.wheel import Wheel

if TYPE_CHECKING:
    from ofl.registry import ManufacturerRegistry


class Fixture:
    """
    A physical DMX device. Derived properties are computed on first access and
    cached until `json_object` is reassigned.
    """

    def __init__(
        self,
        manufacturer: Manufacturer | str,
        key: str,
        json_object: dict[str, Any],
        registry: "ManufacturerRegistry | None" = None,
    ):
        """
        :param manufacturer: A Manufacturer or a manufacturer key.
        :param key: The fixture's unique key. Equals the file name without
                    '.json'.
        :param json_object: The fixture's parsed JSON data.
        :param registry: Resolves a manufacturer key to a Manufacturer.
        """
        if isinstance(manufacturer, Manufacturer):
            self.manufacturer = manufacturer
        elif registry is not None:
            self.manufacturer = registry.get(manufacturer)
        else:
            self.manufacturer = Manufacturer(manufacturer)

        self.key = key
        self._json_object = json_object

    @property
    def json_object(self) -> dict[str, Any]:
        return self._json_object

    @json_object.setter
    def json_object(self, json_object: dict[str, Any]) -> None:
        self._json_object = json_object
        clear_cached_properties(self)

    @property
    def url(self) -> str:
        return f"{OFL_URL}/{self.manufacturer.key}/{self.key}"

    @property
    def name(self) -> str:
        return self._json_object["name"]

    @property
    def has_short_name(self) -> bool:
        return "shortName" in self._json_object

    @property
    def short_name(self) -> str:
        """
        :return: A globally unique and as short as possible product name,
                 defaults to name.
        """
        return self._json_object.get("shortName") or self.name

    @property
    def categories(self) -> list[str]:
        """
        :return: The fixture's categories with the most applicable one first.
        """
        return self._json_object["categories"]

    @property
    def main_category(self) -> str:
        return self.categories[0]

    @cached_property
    def meta(self) -> Meta:
        return Meta(self._json_object["meta"])

    @property
    def has_comment(self) -> bool:
        return "comment" in self._json_object

    @property
    def comment(self) -> str:
        return self._json_object.get("comment", "")

    @property
    def help_wanted(self) -> str | None:
        return self._json_object.get("helpWanted")

    @property
    def is_help_wanted(self) -> bool:
        """
        :return: True if help is needed in this fixture or one of its
                 capabilities.
        """
        return self.help_wanted is not None or self.is_capability_help_wanted

    @cached_property
    def is_capability_help_wanted(self) -> bool:
        return any(channel.is_help_wanted for channel in self.coarse_channels)

    @property
    def links(self) -> dict[str, list[str]] | None:
        return self._json_object.get("links")

    def get_links_of_type(self, link_type: str) -> list[str]:
        """
        :param link_type: The type of the links, e.g. "manual".
        :return: The URLs of that type (may be empty).
        """
        return (self.links or {}).get(link_type, [])

    @property
    def rdm(self) -> dict[str, Any] | None:
        """
        :return: `modelId` and `softwareVersion` of the fixture's RDM
                 implementation, if any.
        """
        return self._json_object.get("rdm")

    @cached_property
    def physical(self) -> Physical | None:
        """
        :return: The general physical information, may be overridden by modes.
        """
        if "physical" not in self._json_object:
            return None
        return Physical(self._json_object["physical"])

    @cached_property
    def matrix(self) -> Matrix | None:
        if "matrix" not in self._json_object:
            return None
        return Matrix(self._json_object["matrix"])

    @cached_property
    def wheels(self) -> list[Wheel]:
        return [Wheel(name, wheel_json) for name, wheel_json in self._json_object.get("wheels", {}).items()]

    @cached_property
    def _wheels_by_name(self) -> dict[str, Wheel]:
        return {wheel.name: wheel for wheel in self.wheels}

    def get_wheel_by_name(self, wheel_name: str) -> Wheel | None:
        return self._wheels_by_name.get(wheel_name)

    @cached_property
    def unique_channel_names(self) -> dict[str, str]:
        """
        :return: Channel keys mapped to their channel names, made unique by
                 appending ' 2', ' 3', ...
        """
        unique_names: dict[str, str] = {}
        used_names: set[str] = set()

        for channel in self.all_channels:
            name = channel.name
            duplicates = 1
            while name in used_names:
                duplicates += 1
                name = f"{channel.name} {duplicates}"

            used_names.add(name)
            unique_names[channel.key] = name

        return unique_names

    @property
    def available_channel_keys(self) -> list[str]:
        """
        :return: Keys of the `availableChannels` section, ordered by
                 appearance.
        """
        return list(self._json_object.get("availableChannels", {}))

    @cached_property
    def available_channels(self) -> list[CoarseChannel]:
        return [
            CoarseChannel(key, channel_json, self)
            for key, channel_json in self._json_object.get("availableChannels", {}).items()
        ]

    @cached_property
    def coarse_channels(self) -> list[CoarseChannel]:
        """
        :return: Coarse channels, including matrix channels. If possible,
                 ordered by appearance.
        """
        return [channel for channel in self.all_channels if channel.role is ChannelRole.COARSE]

    @property
    def coarse_channel_keys(self) -> list[str]:
        return [channel.key for channel in self.coarse_channels]

    @cached_property
    def fine_channels(self) -> list[FineChannel]:
        return [channel for channel in self.all_channels if channel.role is ChannelRole.FINE]

    @property
    def fine_channel_aliases(self) -> list[str]:
        return [channel.key for channel in self.fine_channels]

    @cached_property
    def switching_channels(self) -> list[SwitchingChannel]:
        return [channel for channel in self.all_channels if channel.role is ChannelRole.SWITCHING]

    @property
    def switching_channel_aliases(self) -> list[str]:
        return [channel.key for channel in self.switching_channels]

    @property
    def template_channel_keys(self) -> list[str]:
        return list(self._json_object.get("templateChannels", {}))

    @cached_property
    def template_channels(self) -> list[TemplateChannel]:
        """
        :return: Blueprints used to generate matrix channels.
        """
        return [
            TemplateChannel(key, channel_json, self)
            for key, channel_json in self._json_object.get("templateChannels", {}).items()
        ]

    @cached_property
    def _template_channels_by_key(self) -> dict[str, TemplateChannel]:
        return {channel.key: channel for channel in self.template_channels}

    def get_template_channel_by_key(self, key: str) -> TemplateChannel | None:
        """
        Fine and switching template channel aliases can't be found.
        """
        return self._template_channels_by_key.get(key)

    @cached_property
    def matrix_channels(self) -> list[AbstractChannel]:
        """
        :return: All resolved channels with pixel key information, including
                 fine and switching channels.
        """
        if self.matrix is None:
            return []
        return [channel for channel in self.all_channels if channel.pixel_key is not None]

    @property
    def matrix_channel_keys(self) -> list[str]:
        return [channel.key for channel in self.matrix_channels]

    @cached_property
    def null_channels(self) -> list[NullChannel]:
        """
        :return: Automatically generated null channels; as many as the mode
                 with the most unused slots needs.
        """
        max_null_per_mode = max((mode.null_channel_count for mode in self.modes), default=0)
        return [NullChannel(self, number) for number in range(1, max_null_per_mode + 1)]

    @property
    def null_channel_keys(self) -> list[str]:
        return [channel.key for channel in self.null_channels]

    @property
    def all_channel_keys(self) -> list[str]:
        return list(self.all_channels_by_key)

    @cached_property
    def all_channels(self) -> list[AbstractChannel]:
        return list(self.all_channels_by_key.values())

    @cached_property
    def all_channels_by_key(self) -> dict[str, AbstractChannel]:
        """
        :return: Every channel of this fixture by key: available channels with
                 their fine and switching channels, null channels and those
                 matrix channels that are used in a mode. If possible, ordered
                 by appearance.
        """
        all_channels_by_key: dict[str, AbstractChannel] = {}

        for channel in self.available_channels:
            for sub_channel in [channel, *channel.fine_channels, *channel.switching_channels]:
                all_channels_by_key[sub_channel.key] = sub_channel

        for channel in self.null_channels:
            all_channels_by_key[channel.key] = channel

        # a later expansion with the same key replaces an earlier one
        all_matrix_channels_by_key: dict[str, AbstractChannel] = {}
        for template_channel in self.template_channels:
            for channel in template_channel.create_matrix_channels():
                all_matrix_channels_by_key[channel.key] = channel

        mode_channel_keys = [mode.channel_keys for mode in self.modes]

        for matrix_channel in all_matrix_channels_by_key.values():
            if matrix_channel.key in all_channels_by_key:
                # matrix channel is overridden by an available channel, which
                # moves to where the matrix channel would have been inserted
                override_channel = all_channels_by_key.pop(matrix_channel.key)
                override_channel.pixel_key = matrix_channel.pixel_key
                matrix_channel = override_channel

            if self._is_matrix_channel_used(
                matrix_channel.key, mode_channel_keys, all_channels_by_key, all_matrix_channels_by_key
            ):
                all_channels_by_key[matrix_channel.key] = matrix_channel

        return all_channels_by_key

    @staticmethod
    def _is_matrix_channel_used(
        channel_key: str,
        mode_channel_keys: list[list[str]],
        channels_by_key: dict[str, AbstractChannel],
        matrix_channels_by_key: dict[str, AbstractChannel],
    ) -> bool:
        """
        :return: Whether a mode uses the channel, directly or as a switching
                 channel's possible target.
        """
        for channel_keys in mode_channel_keys:
            for key in channel_keys:
                if key == channel_key:
                    return True

                other = channels_by_key.get(key) or matrix_channels_by_key.get(key)
                if other is not None and other.role is ChannelRole.SWITCHING:
                    if channel_key in other.switch_to_channel_keys:
                        return True
        return False

    def get_channel_by_key(self, key: str) -> AbstractChannel | None:
        return self.all_channels_by_key.get(key)

    @cached_property
    def capabilities(self) -> list[Capability]:
        """
        :return: All available channels' and template channels' capabilities.
        """
        channels: list[CoarseChannel] = [*self.available_channels, *self.template_channels]
        return [capability for channel in channels for capability in channel.capabilities]

    @cached_property
    def modes(self) -> list[Mode]:
        return [Mode(mode_json, self) for mode_json in self._json_object["modes"]]

    def get_mode_by_short_name(self, short_name: str) -> Mode | None:
        return next((mode for mode in self.modes if mode.short_name == short_name), None)

    def __repr__(self) -> str:
        return f"{self.manufacturer.key}/{self.key}"

    def __str__(self) -> str:
        return f"{self.name} ({self.short_name})"
