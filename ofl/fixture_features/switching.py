"""Features of fixtures with switching channels."""

from ofl.fixture_features.feature import FixtureFeature
from ofl.model.channel import ChannelRole

FEATURES = [
    FixtureFeature(
        "switching-fine-channels",
        "Switches fine channels",
        "At least one switching channel switches fine channels.",
        lambda fixture: any(
            channel is not None and channel.role is ChannelRole.FINE
            for switching_channel in fixture.switching_channels
            for channel in switching_channel.switch_to_channels
        ),
    ),
]
