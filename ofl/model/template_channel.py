"""
Template channels are channel blueprints containing the `$pixelKey` variable.
They are expanded once for every pixel (group) key of the fixture's matrix.
"""

from copy import deepcopy
from functools import cached_property
from typing import TYPE_CHECKING, Any

from ofl.const import PIXEL_KEY
from ofl.model.channel import AbstractChannel, CoarseChannel

if TYPE_CHECKING:
    from ofl.model.fixture import Fixture


def resolve_template_string(template: str, pixel_key: str) -> str:
    """
    :param template: A string containing `$pixelKey`.
    :param pixel_key: The value to insert.
    :return: The resolved string.
    """
    return template.replace(PIXEL_KEY, pixel_key)


def resolve_template_object(template: Any, pixel_key: str) -> Any:
    """
    Replaces `$pixelKey` in every string of a JSON structure, dictionary keys
    included.
    :param template: The JSON data of a template channel (not modified).
    :param pixel_key: The value to insert.
    :return: A resolved deep copy.
    """
    if isinstance(template, str):
        return resolve_template_string(template, pixel_key)
    if isinstance(template, dict):
        return {
            resolve_template_string(key, pixel_key): resolve_template_object(value, pixel_key)
            for key, value in template.items()
        }
    if isinstance(template, list):
        return [resolve_template_object(item, pixel_key) for item in template]
    return deepcopy(template)


class TemplateChannel(CoarseChannel):
    """
    A channel from the `templateChannels` section. It is never part of the
    resolved channel table itself.
    """

    @cached_property
    def all_template_keys(self) -> list[str]:
        """
        :return: The template key plus all fine and switching aliases.
        """
        return [self.key, *self.fine_channel_aliases, *self.switching_channel_aliases]

    @cached_property
    def possible_matrix_channel_keys(self) -> dict[str, list[str]]:
        """
        :return: Resolved channel keys (coarse, fine and switching) that could be
                 generated from this template, by pixel (group) key.
        """
        matrix = self.fixture.matrix
        if matrix is None:
            return {}

        return {
            pixel_key: [resolve_template_string(key, pixel_key) for key in self.all_template_keys]
            for pixel_key in matrix.pixel_keys + matrix.pixel_group_keys
        }

    def create_matrix_channels(self) -> list[AbstractChannel]:
        """
        :return: Newly created channels for every pixel (group) key, i.e. the
                 coarse channel followed by its fine and switching channels.
        """
        matrix = self.fixture.matrix
        if matrix is None:
            return []

        channels: list[AbstractChannel] = []
        for pixel_key in matrix.pixel_keys + matrix.pixel_group_keys:
            channel = CoarseChannel(
                resolve_template_string(self.key, pixel_key),
                resolve_template_object(self.json_object, pixel_key),
                self.fixture,
            )
            channel.pixel_key = pixel_key
            channels.extend([channel, *channel.fine_channels, *channel.switching_channels])
        return channels
