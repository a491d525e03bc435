import unittest

from ofl.model.channel import ChannelRole, FineChannel, scale_dmx_value
from ofl.model.range import Range
from tests.fixture_test_framework import fixture_json, make_fixture

AVAILABLE_CHANNELS = {
    "Strobe": {
        "fineChannelAliases": ["Strobe fine"],
        "defaultValue": "50%",
        "capabilities": [
            {"dmxRange": [0, 9], "type": "NoFunction"},
            {"dmxRange": [10, 255], "type": "StrobeSpeed", "speedStart": "slow", "speedEnd": "fast"},
        ],
    },
    "Pan": {
        "dmxValueResolution": "16bit",
        "fineChannelAliases": ["Pan fine"],
        "highlightValue": 32768,
        "capability": {"type": "Pan", "angleStart": "0deg", "angleEnd": "540deg"},
    },
    "Red": {
        "capability": {"type": "ColorIntensity", "color": "Red"},
    },
    "Color Macros": {
        "capabilities": [
            {"dmxRange": [0, 127], "type": "ColorIntensity", "color": "Red"},
            {"dmxRange": [128, 255], "type": "ColorPreset", "colors": ["#ff0000", "#00ff00"]},
        ],
    },
    "Function Select": {
        "defaultValue": 200,
        "capabilities": [
            {"dmxRange": [0, 99], "type": "Generic", "switchChannels": {"Function": "Strobe"}},
            {"dmxRange": [100, 127], "type": "Generic", "switchChannels": {"Function": "Strobe"}},
            {"dmxRange": [128, 255], "type": "Generic", "switchChannels": {"Function": "Pan"}},
        ],
    },
}

MODES = [
    {"name": "8-bit", "shortName": "8bit", "channels": ["Strobe", "Pan", "Red", "Color Macros"]},
    {"name": "16-bit", "shortName": "16bit", "channels": ["Strobe", "Strobe fine", "Pan", "Pan fine"]},
    {"name": "Switched", "shortName": "switched", "channels": ["Function Select", "Function"]},
]


class TestChannel(unittest.TestCase):

    def setUp(self):
        self.fixture = make_fixture(fixture_json(availableChannels=AVAILABLE_CHANNELS, modes=MODES))

    def test_roles(self):
        self.assertIs(ChannelRole.COARSE, self.fixture.get_channel_by_key("Strobe").role)
        self.assertIs(ChannelRole.FINE, self.fixture.get_channel_by_key("Strobe fine").role)
        self.assertIs(ChannelRole.SWITCHING, self.fixture.get_channel_by_key("Function").role)

    def test_type(self):
        self.assertEqual("Strobe", self.fixture.get_channel_by_key("Strobe").type)
        self.assertEqual("Pan", self.fixture.get_channel_by_key("Pan").type)
        self.assertEqual("Single Color", self.fixture.get_channel_by_key("Red").type)
        self.assertEqual("Multi-Color", self.fixture.get_channel_by_key("Color Macros").type)
        self.assertEqual("Generic", self.fixture.get_channel_by_key("Function Select").type)

    def test_color(self):
        self.assertEqual("Red", self.fixture.get_channel_by_key("Red").color)
        self.assertIsNone(self.fixture.get_channel_by_key("Strobe").color)

    def test_fine_channels(self):
        strobe = self.fixture.get_channel_by_key("Strobe")
        (fine_channel,) = strobe.fine_channels

        self.assertIsInstance(fine_channel, FineChannel)
        self.assertEqual("Strobe fine", fine_channel.key)
        self.assertEqual("Strobe fine", fine_channel.name)
        self.assertEqual(1, fine_channel.fineness)
        self.assertIs(strobe, fine_channel.coarse_channel)
        self.assertIs(fine_channel, self.fixture.get_channel_by_key("Strobe fine"))
        self.assertEqual(strobe.capabilities, fine_channel.capabilities)

    def test_resolution(self):
        strobe = self.fixture.get_channel_by_key("Strobe")
        self.assertEqual(1, strobe.max_fineness)
        self.assertEqual(0, strobe.declared_fineness)
        self.assertEqual(255, strobe.max_dmx_bound)

        pan = self.fixture.get_channel_by_key("Pan")
        self.assertEqual(1, pan.declared_fineness)
        self.assertEqual(65535, pan.max_dmx_bound)

    def test_resolution_from_last_range_end(self):
        fixture = make_fixture(
            fixture_json(
                availableChannels={
                    "Dimmer": {
                        "fineChannelAliases": ["Dimmer fine"],
                        "capabilities": [
                            {"dmxRange": [0, 32767], "type": "Intensity"},
                            {"dmxRange": [32768, 65535], "type": "Intensity"},
                        ],
                    },
                    "Shutter": {
                        "capabilities": [
                            {"dmxRange": [0, 127], "type": "Intensity"},
                            {"dmxRange": [128, 65535], "type": "Intensity"},
                        ],
                    },
                },
                modes=[{"name": "16-bit", "channels": ["Dimmer", "Dimmer fine", "Shutter"]}],
            )
        )

        dimmer = fixture.get_channel_by_key("Dimmer")
        self.assertFalse(dimmer.has_dmx_value_resolution)
        self.assertEqual(1, dimmer.declared_fineness)
        self.assertEqual(65535, dimmer.max_dmx_bound)
        self.assertEqual([Range([0, 32767]), Range([32768, 65535])], [cap.dmx_range for cap in dimmer.capabilities])
        self.assertEqual(Range([128, 255]), dimmer.capabilities[1].get_dmx_range_with_fineness(0))

        # without fine channels, the range can't be declared in 16 bit
        self.assertEqual(0, fixture.get_channel_by_key("Shutter").declared_fineness)

    def test_default_value(self):
        strobe = self.fixture.get_channel_by_key("Strobe")
        self.assertEqual(127, strobe.default_value)
        self.assertEqual(127 * 256, strobe.get_default_value_with_fineness(1))
        self.assertEqual(0, strobe.fine_channels[0].default_value)
        self.assertEqual(0, self.fixture.get_channel_by_key("Red").default_value)

    def test_highlight_value(self):
        self.assertEqual(255, self.fixture.get_channel_by_key("Strobe").highlight_value)
        pan = self.fixture.get_channel_by_key("Pan")
        self.assertEqual(32768, pan.highlight_value)
        self.assertEqual(128, pan.get_highlight_value_with_fineness(0))

    def test_scale_dmx_value(self):
        self.assertEqual(256, scale_dmx_value(1, 0, 1))
        self.assertEqual(1, scale_dmx_value(511, 1, 0))
        self.assertEqual(42, scale_dmx_value(42, 1, 1))

    def test_fineness_in_mode(self):
        strobe = self.fixture.get_channel_by_key("Strobe")
        eight_bit, sixteen_bit, switched = self.fixture.modes
        self.assertEqual(0, strobe.get_fineness_in_mode(eight_bit))
        self.assertEqual(1, strobe.get_fineness_in_mode(sixteen_bit))
        # reachable through the switching channel
        self.assertEqual(0, strobe.get_fineness_in_mode(switched))

        red = self.fixture.get_channel_by_key("Red")
        self.assertEqual(-1, red.get_fineness_in_mode(sixteen_bit))


class TestSwitchingChannel(unittest.TestCase):

    def setUp(self):
        self.fixture = make_fixture(fixture_json(availableChannels=AVAILABLE_CHANNELS, modes=MODES))
        self.channel = self.fixture.get_channel_by_key("Function")

    def test_trigger(self):
        self.assertIs(self.fixture.get_channel_by_key("Function Select"), self.channel.trigger_channel)
        self.assertEqual(["Function"], self.channel.trigger_channel.switching_channel_aliases)
        self.assertEqual(3, len(self.channel.trigger_capabilities))

    def test_switch_to_channels(self):
        self.assertEqual(["Strobe", "Pan"], self.channel.switch_to_channel_keys)
        self.assertEqual(
            [self.fixture.get_channel_by_key("Strobe"), self.fixture.get_channel_by_key("Pan")],
            self.channel.switch_to_channels,
        )

    def test_trigger_ranges_are_merged(self):
        self.assertEqual(
            {"Strobe": [Range([0, 127])], "Pan": [Range([128, 255])]},
            self.channel.trigger_ranges,
        )

    def test_switched_channel(self):
        self.assertEqual("Strobe", self.channel.get_switched_channel_key(50))
        self.assertEqual("Strobe", self.channel.get_switched_channel_key(127))
        self.assertEqual("Pan", self.channel.get_switched_channel_key(128))

    def test_default_channel(self):
        self.assertEqual("Pan", self.channel.default_channel_key)
        self.assertIs(self.fixture.get_channel_by_key("Pan"), self.channel.default_channel)

    def test_uses_channel_key(self):
        self.assertTrue(self.channel.uses_channel_key("Strobe"))
        self.assertFalse(self.channel.uses_channel_key("Strobe", "default"))
        self.assertTrue(self.channel.uses_channel_key("Pan", "default"))
        self.assertFalse(self.channel.uses_channel_key("Pan", "none"))


if __name__ == "__main__":
    unittest.main()
