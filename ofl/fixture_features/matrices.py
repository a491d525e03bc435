"""Features of fixtures with a matrix."""

from ofl.fixture_features.feature import FixtureFeature
from ofl.model.channel import ChannelRole
from ofl.model.fixture import Fixture
from ofl.model.matrix import flatten


def _pixel_groups_json(fixture: Fixture) -> dict:
    return fixture.matrix.json_object.get("pixelGroups", {}) if fixture.matrix is not None else {}


def _has_number_constraints(fixture: Fixture) -> bool:
    return any(
        isinstance(group, dict) and any(isinstance(group.get(axis), list) for axis in ("x", "y", "z"))
        for group in _pixel_groups_json(fixture).values()
    )


def _has_string_constraints(fixture: Fixture) -> bool:
    return any(
        isinstance(group, dict) and isinstance(group.get("name"), list)
        for group in _pixel_groups_json(fixture).values()
    )


def _has_custom_layout(fixture: Fixture) -> bool:
    return fixture.matrix is not None and None in flatten(fixture.matrix.pixel_key_structure)


def _is_matrix_channel_used_directly(fixture: Fixture) -> bool:
    """
    A mode contains a resolved matrix channel key in its raw channel list, or
    a non-matrix switching channel switches to a matrix channel.
    """
    matrix_channel_keys = set(fixture.matrix_channel_keys)

    in_raw_channel_list = any(
        isinstance(channel_key, str) and channel_key in matrix_channel_keys
        for mode in fixture.modes
        for channel_key in mode.json_object["channels"]
    )

    in_switching_channel = any(
        switching_channel.pixel_key is None
        and any(
            channel is not None and channel.pixel_key is not None for channel in switching_channel.switch_to_channels
        )
        for switching_channel in fixture.switching_channels
    )

    return in_raw_channel_list or in_switching_channel


FEATURES = [
    FixtureFeature(
        "matrix-pixelKeys",
        "Uses pixelKeys",
        "The fixture has a matrix and has set the pixelKeys individually.",
        lambda fixture: fixture.matrix is not None and "pixelKeys" in fixture.matrix.json_object,
    ),
    FixtureFeature(
        "matrix-pixelCount",
        "Uses pixelCount",
        "The fixture has a matrix and has set the pixelCount property.",
        lambda fixture: fixture.matrix is not None and "pixelCount" in fixture.matrix.json_object,
    ),
    FixtureFeature(
        "matrix-pixelGroups",
        "Uses pixelGroups",
        "The fixture has a matrix and has set pixelGroups.",
        lambda fixture: fixture.matrix is not None and len(fixture.matrix.pixel_group_keys) > 0,
    ),
    FixtureFeature(
        "matrix-pixelGroups-number-constraints",
        "Uses pixelGroup number constraints",
        "The fixture has a matrix and has set pixelGroups using number constraint syntax.",
        _has_number_constraints,
    ),
    FixtureFeature(
        "matrix-pixelGroups-string-constraints",
        "Uses pixelGroup string constraints",
        "The fixture has a matrix and has set pixelGroups using string constraint syntax.",
        _has_string_constraints,
    ),
    FixtureFeature(
        "matrix-custom-layout",
        "Custom matrix layout",
        "The fixture has a matrix and it uses null pixelKeys, so it is no line, rectangle or cube.",
        _has_custom_layout,
    ),
    FixtureFeature(
        "fine-matrix-channel",
        "Fine matrix channel",
        "The fixture repeats fine channels for matrix pixels.",
        lambda fixture: any(channel.role is ChannelRole.FINE for channel in fixture.matrix_channels),
    ),
    FixtureFeature(
        "switching-matrix-channel",
        "Switching matrix channel",
        "The fixture repeats switching channels for matrix pixels.",
        lambda fixture: any(channel.role is ChannelRole.SWITCHING for channel in fixture.matrix_channels),
    ),
    FixtureFeature(
        "matrix-channel-overridden",
        "Matrix channel overridden",
        "An available channel overrides a specific matrix channel (at a specific pixel).",
        lambda fixture: any(channel.key in fixture.matrix_channel_keys for channel in fixture.available_channels),
    ),
    FixtureFeature(
        "matrix-channel-used-directly",
        "Matrix channel used directly",
        "A mode contains a resolved matrix channel key in its raw channel list or a non-matrix switching channel "
        "switches to a matrix channel.",
        _is_matrix_channel_used_directly,
    ),
]
