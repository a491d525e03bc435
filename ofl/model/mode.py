"""
This module contains mode related functions and classes. A mode is an ordered
list of channel slots a fixture can be configured to use.
"""

import functools
import re
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum, auto, member
from functools import cached_property
from typing import TYPE_CHECKING, Any

from ofl.model.channel import AbstractChannel, ChannelRole
from ofl.model.exceptions import FixtureConfigurationError
from ofl.model.matrix import Matrix
from ofl.model.physical import Physical
from ofl.model.template_channel import resolve_template_string

if TYPE_CHECKING:
    from ofl.model.fixture import Fixture


class ChannelOrder(Enum):
    """
    ChannelOrder enum, defines how to loop through template channels and pixels.
    Names match fixture format exactly.
    """

    # pylint: disable=invalid-name
    perPixel = auto()  # noqa: N815
    perChannel = auto()  # noqa: N815


def matrix_pixel_order(first_axis: str, second_axis: str, third_axis: str) -> Callable[[Matrix], list[str]]:
    """
    Loops through all pixels, ordered by axis.
    :param first_axis: The axis that changes fastest.
    :param second_axis: The axis that changes second fastest.
    :param third_axis: The axis that changes slowest.
    :return: A lambda taking in a matrix and returning ordered pixel keys
    """
    return lambda matrix: matrix.get_pixel_keys_by_order(first_axis, second_axis, third_axis)


def alphanumeric_sort_key(pixel_key: str) -> list[int | str]:
    return [int(part) if part.isdecimal() else part.lower() for part in re.split(r"(\d+)", pixel_key)]


def alphanumeric_pixel_order(matrix: Matrix) -> list[str]:
    """
    Sorts pixel keys alphanumerically, with digit runs compared by their
    numeric value, so "2" comes before "10".
    """
    return sorted(matrix.pixel_keys, key=alphanumeric_sort_key)


class RepeatFor(Enum):
    """
    A repeatFor enum containing partial functions which can be called upon for
    repeating pixels of a matrix, as defined by the matrix format.
    Names match fixture format exactly.
    """

    # pylint: disable=invalid-name
    eachPixelABC = member(functools.partial(alphanumeric_pixel_order))  # noqa: N815
    eachPixelXYZ = member(functools.partial(matrix_pixel_order("X", "Y", "Z")))  # noqa: N815
    eachPixelXZY = member(functools.partial(matrix_pixel_order("X", "Z", "Y")))  # noqa: N815
    eachPixelYXZ = member(functools.partial(matrix_pixel_order("Y", "X", "Z")))  # noqa: N815
    eachPixelYZX = member(functools.partial(matrix_pixel_order("Y", "Z", "X")))  # noqa: N815
    eachPixelZXY = member(functools.partial(matrix_pixel_order("Z", "X", "Y")))  # noqa: N815
    eachPixelZYX = member(functools.partial(matrix_pixel_order("Z", "Y", "X")))  # noqa: N815
    eachPixelGroup = member(functools.partial(lambda matrix: matrix.pixel_group_keys))  # noqa: N815


@dataclass
class MatrixChannelInsertBlock:
    """
    Data class containing an insert block as defined by the matrix format.
    """

    repeat_for: RepeatFor | list[str]
    order: ChannelOrder
    template_channels: list[None | str]

    @classmethod
    def from_json(cls, json_object: dict[str, Any]) -> "MatrixChannelInsertBlock":
        insert = json_object.get("insert")
        if insert != "matrixChannels":
            raise FixtureConfigurationError(f"Unknown insert mode: {insert}")

        repeat_for_json = json_object["repeatFor"]
        try:
            # It's either a string enum or a list of strings
            repeat_for = RepeatFor[repeat_for_json] if isinstance(repeat_for_json, str) else list(repeat_for_json)
            order = ChannelOrder[json_object["channelOrder"]]
        except KeyError as e:
            raise FixtureConfigurationError(f"Unknown matrixChannels option {e}") from None

        return cls(repeat_for, order, list(json_object["templateChannels"]))

    def pixel_keys(self, matrix: Matrix) -> list[str]:
        if isinstance(self.repeat_for, list):
            return self.repeat_for
        return list(self.repeat_for.value(matrix))

    def resolve(self, matrix: Matrix | None) -> list[str | None]:
        """
        :param matrix: The fixture's matrix.
        :return: The resolved channel keys this block stands for. Without a
                 matrix, there are no matrix channels to insert.
        """
        if matrix is None:
            return []

        def resolve_key(template_key: str | None, pixel_key: str) -> str | None:
            return None if template_key is None else resolve_template_string(template_key, pixel_key)

        pixel_keys = self.pixel_keys(matrix)
        if self.order is ChannelOrder.perPixel:
            return [resolve_key(template, pixel) for pixel in pixel_keys for template in self.template_channels]
        return [resolve_key(template, pixel) for template in self.template_channels for pixel in pixel_keys]

    def __repr__(self) -> str:
        return "matrixChannels"


class Mode:
    """
    A DMX personality of a fixture.
    """

    def __init__(self, json_object: dict[str, Any], fixture: "Fixture"):
        self.json_object = json_object
        self.fixture = fixture

    @property
    def name(self) -> str:
        return self.json_object["name"]

    @property
    def has_short_name(self) -> bool:
        return "shortName" in self.json_object

    @property
    def short_name(self) -> str:
        return self.json_object.get("shortName") or self.name

    @property
    def rdm_personality_index(self) -> int | None:
        return self.json_object.get("rdmPersonalityIndex")

    @cached_property
    def physical_override(self) -> Physical | None:
        """
        :return: Physical data that only applies to this mode.
        """
        if "physical" not in self.json_object:
            return None
        return Physical(self.json_object["physical"])

    @cached_property
    def physical(self) -> Physical | None:
        """
        :return: The fixture's physical data with this mode's override applied.
        """
        fixture_physical = self.fixture.physical
        if self.physical_override is None:
            return fixture_physical
        if fixture_physical is None:
            return self.physical_override
        return fixture_physical.merged_with(self.physical_override)

    @cached_property
    def raw_channel_keys(self) -> list[str | None]:
        """
        :return: Channel keys with insert blocks resolved. None marks an
                 unused DMX slot.
        """
        keys: list[str | None] = []
        for reference in self.json_object["channels"]:
            if reference is None or isinstance(reference, str):
                keys.append(reference)
            else:
                keys.extend(MatrixChannelInsertBlock.from_json(reference).resolve(self.fixture.matrix))
        return keys

    @property
    def null_channel_count(self) -> int:
        return self.raw_channel_keys.count(None)

    @cached_property
    def channel_keys(self) -> list[str]:
        """
        :return: Channel keys used in this mode. Every unused slot gets its own
                 null channel key.
        """
        null_channel_keys = iter(self.fixture.null_channel_keys)
        return [next(null_channel_keys) if key is None else key for key in self.raw_channel_keys]

    @cached_property
    def channels(self) -> list[AbstractChannel | None]:
        return [self.fixture.get_channel_by_key(key) for key in self.channel_keys]

    def get_channel_index(self, channel: str | AbstractChannel, switching_behavior: str = "all") -> int:
        """
        :param channel: A channel key or channel.
        :param switching_behavior: How switching channels are treated; "all"
                                   also finds the channel if any switching
                                   channel in this mode can switch to it,
                                   "default" only if it's switched to by
                                   default, "none" never.
        :return: The index of the channel in this mode, -1 if not found.
        """
        channel_key = channel if isinstance(channel, str) else channel.key

        for index, key in enumerate(self.channel_keys):
            if key == channel_key:
                return index

            other = self.fixture.get_channel_by_key(key)
            if other is not None and other.role is ChannelRole.SWITCHING:
                if other.uses_channel_key(channel_key, switching_behavior):
                    return index

        return -1

    def __repr__(self) -> str:
        return self.short_name

    def __str__(self) -> str:
        return f"{self.name}: {self.channel_keys}"
