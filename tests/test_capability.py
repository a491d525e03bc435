import unittest

from ofl.model.capability import DmxValueResolution, MenuClick
from ofl.model.entity import Entity
from ofl.model.exceptions import FixtureConfigurationError, InvariantViolation
from ofl.model.range import Range
from tests.fixture_test_framework import fixture_json, make_fixture

AVAILABLE_CHANNELS = {
    "Strobe": {
        "fineChannelAliases": ["Strobe fine"],
        "capabilities": [
            {"dmxRange": [0, 9], "type": "NoFunction"},
            {
                "dmxRange": [10, 255],
                "type": "StrobeSpeed",
                "speedStart": "slow",
                "speedEnd": "fast",
                "menuClick": "center",
            },
        ],
    },
    "Pan": {
        "dmxValueResolution": "16bit",
        "fineChannelAliases": ["Pan fine"],
        "capabilities": [
            {"dmxRange": [0, 32767], "type": "Pan", "angleStart": "0deg", "angleEnd": "270deg"},
            {
                "dmxRange": [32768, 65535],
                "type": "Pan",
                "angleStart": "270deg",
                "angleEnd": "540deg",
                "menuClick": "hidden",
            },
        ],
    },
    "Dimmer": {
        "fineChannelAliases": ["Dimmer fine", "Dimmer fine^2"],
        "capability": {"type": "Intensity", "helpWanted": "Is the dimmer curve linear?"},
    },
    "Gobo Wheel": {
        "capability": {"type": "WheelSlot", "slotNumber": 2},
    },
}


class TestCapability(unittest.TestCase):

    def setUp(self):
        self.fixture = make_fixture(
            fixture_json(
                availableChannels=AVAILABLE_CHANNELS,
                modes=[{"name": "Standard", "channels": ["Strobe", "Strobe fine", "Pan", "Pan fine", "Dimmer"]}],
            )
        )

    def _capabilities(self, channel_key):
        return self.fixture.get_channel_by_key(channel_key).capabilities

    def test_coarse_range_is_scaled_to_finest_resolution(self):
        no_function, strobe = self._capabilities("Strobe")
        self.assertEqual(Range([0, 9]), no_function.raw_dmx_range)
        self.assertEqual(Range([0, 2559]), no_function.dmx_range)
        self.assertEqual(Range([2560, 65535]), strobe.dmx_range)

    def test_scaled_down_to_declared_fineness(self):
        no_function, strobe = self._capabilities("Strobe")
        self.assertEqual(Range([0, 9]), no_function.get_dmx_range_with_fineness(0))
        self.assertEqual(Range([10, 255]), strobe.get_dmx_range_with_fineness(0))
        self.assertEqual(strobe.dmx_range, strobe.get_dmx_range_with_fineness(1))

    def test_fine_declared_range(self):
        first, second = self._capabilities("Pan")
        self.assertEqual(1, first.fineness)
        self.assertEqual(Range([0, 32767]), first.dmx_range)
        self.assertEqual(Range([0, 127]), first.get_dmx_range_with_fineness(0))
        self.assertEqual(Range([128, 255]), second.get_dmx_range_with_fineness(0))

    def test_invalid_fineness(self):
        capability = self._capabilities("Strobe")[0]
        for fineness in (2, -1, 0.5, True):
            with self.assertRaises(InvariantViolation):
                capability.get_dmx_range_with_fineness(fineness)

        with self.assertRaises(ValueError):
            capability.get_dmx_range_with_fineness(2)

    def test_range_defaults_to_whole_channel(self):
        (capability,) = self._capabilities("Dimmer")
        self.assertEqual(Range([0, 255]), capability.raw_dmx_range)
        self.assertEqual(Range([0, 256**3 - 1]), capability.dmx_range)

    def test_menu_click(self):
        no_function, strobe = self._capabilities("Strobe")
        self.assertIs(MenuClick.start, no_function.menu_click)
        self.assertEqual(0, no_function.menu_click_dmx_value)
        self.assertIs(MenuClick.center, strobe.menu_click)
        self.assertEqual((2560 + 65535) // 2, strobe.menu_click_dmx_value)
        self.assertEqual(-1, self._capabilities("Pan")[1].menu_click_dmx_value)

    def test_entities(self):
        no_function, strobe = self._capabilities("Strobe")
        self.assertEqual({}, no_function.entities)
        self.assertEqual([Entity(1, "%", "slow"), Entity(100, "%", "fast")], strobe.speed)
        self.assertEqual([Entity(0, "deg"), Entity(270, "deg")], self._capabilities("Pan")[0].angle)
        self.assertIsNone(strobe.duration)

    def test_step(self):
        no_function, strobe = self._capabilities("Strobe")
        self.assertTrue(no_function.is_step)
        self.assertFalse(strobe.is_step)

    def test_name(self):
        no_function, strobe = self._capabilities("Strobe")
        self.assertEqual("NoFunction", no_function.name)
        self.assertEqual("StrobeSpeed speed slow…fast", strobe.name)

    def test_help_wanted(self):
        (capability,) = self._capabilities("Dimmer")
        self.assertTrue(capability.is_help_wanted)
        self.assertTrue(self.fixture.is_capability_help_wanted)
        self.assertTrue(self.fixture.is_help_wanted)

    def test_wheel_defaults_to_channel_name(self):
        (capability,) = self._capabilities("Gobo Wheel")
        self.assertEqual(["Gobo Wheel"], capability.wheels)
        self.assertEqual([2.0, 2.0], capability.slot_number)
        self.assertEqual([], self._capabilities("Strobe")[0].wheels)

    def test_json_object_reassignment_resets_cache(self):
        capability = self._capabilities("Strobe")[1]
        self.assertFalse(capability.is_step)
        capability.json_object = {"dmxRange": [10, 255], "type": "StrobeSpeed", "speed": "fast"}
        self.assertTrue(capability.is_step)
        self.assertEqual([Entity(100, "%", "fast"), Entity(100, "%", "fast")], capability.speed)


class TestDmxValueResolution(unittest.TestCase):

    def test_from_string(self):
        self.assertEqual(0, DmxValueResolution.from_string("8bit").fineness)
        self.assertEqual(1, DmxValueResolution.from_string("16bit").fineness)
        self.assertEqual(2, DmxValueResolution.from_string("24bit").fineness)

    def test_invalid(self):
        with self.assertRaises(FixtureConfigurationError):
            DmxValueResolution.from_string("12bit")


if __name__ == "__main__":
    unittest.main()
