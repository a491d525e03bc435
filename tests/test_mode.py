import math
import unittest

from ofl.model.exceptions import FixtureConfigurationError
from ofl.model.matrix import Matrix
from ofl.model.mode import ChannelOrder, MatrixChannelInsertBlock, RepeatFor
from tests.fixture_test_framework import fixture_json, load_test_fixture, make_fixture


class TestMode(unittest.TestCase):

    def setUp(self):
        self.fixture = load_test_fixture("cameo", "pixel-bar")

    def test_names(self):
        per_pixel = self.fixture.modes[0]
        self.assertEqual("Per Pixel", per_pixel.name)
        self.assertEqual("pp", per_pixel.short_name)
        self.assertTrue(per_pixel.has_short_name)
        self.assertEqual(1, per_pixel.rdm_personality_index)
        self.assertIsNone(self.fixture.modes[1].rdm_personality_index)
        self.assertIs(per_pixel, self.fixture.get_mode_by_short_name("pp"))
        self.assertIsNone(self.fixture.get_mode_by_short_name("nope"))

    def test_per_pixel_insert_block(self):
        self.assertEqual(
            ["Dimmer", "Red 1", "Green 1", "Red 2", "Green 2", "Red 3", "Green 3"],
            self.fixture.get_mode_by_short_name("pp").channel_keys,
        )

    def test_per_channel_insert_block_and_null_channel(self):
        mode = self.fixture.get_mode_by_short_name("fine")
        self.assertEqual(
            ["Red 1", "Red 2", "Red 1 fine", "Red 2 fine", None, "Program", "Program Speed"],
            mode.raw_channel_keys,
        )
        self.assertEqual(
            ["Red 1", "Red 2", "Red 1 fine", "Red 2 fine", "null-1", "Program", "Program Speed"],
            mode.channel_keys,
        )
        self.assertEqual(1, mode.null_channel_count)

    def test_pixel_group_insert_block(self):
        mode = self.fixture.get_mode_by_short_name("groups")
        self.assertEqual(["Green Odd", "null-1", "null-2"], mode.channel_keys)
        self.assertEqual(2, mode.null_channel_count)

    def test_channels(self):
        mode = self.fixture.get_mode_by_short_name("pp")
        self.assertEqual(len(mode.channel_keys), len(mode.channels))
        self.assertIs(self.fixture.get_channel_by_key("Dimmer"), mode.channels[0])
        self.assertNotIn(None, mode.channels)

    def test_channel_index(self):
        mode = self.fixture.get_mode_by_short_name("fine")
        self.assertEqual(5, mode.get_channel_index("Program"))
        self.assertEqual(5, mode.get_channel_index(self.fixture.get_channel_by_key("Program")))
        self.assertEqual(-1, mode.get_channel_index("Green 1"))

    def test_channel_index_through_switching_channel(self):
        mode = self.fixture.get_mode_by_short_name("fine")
        self.assertEqual(6, mode.get_channel_index("Dimmer"))
        self.assertEqual(6, mode.get_channel_index("Dimmer", "default"))
        self.assertEqual(-1, mode.get_channel_index("Dimmer", "none"))
        self.assertEqual(6, mode.get_channel_index("Red Odd"))
        self.assertEqual(-1, mode.get_channel_index("Red Odd", "default"))

    def test_physical_override(self):
        fixture = make_fixture(
            fixture_json(
                physical={"bulb": {"type": "LED"}, "focus": {"panMax": 540, "tiltMax": 180}},
                modes=[
                    {"name": "Standard", "channels": ["Dimmer"]},
                    {"name": "Endless", "physical": {"focus": {"panMax": "infinite"}}, "channels": ["Dimmer"]},
                ],
            )
        )
        standard, endless = fixture.modes
        self.assertIsNone(standard.physical_override)
        self.assertIs(fixture.physical, standard.physical)
        self.assertEqual(540, standard.physical.focus_pan_max)

        self.assertEqual(math.inf, endless.physical.focus_pan_max)
        self.assertEqual(180, endless.physical.focus_tilt_max)
        self.assertEqual("LED", endless.physical.bulb_type)


class TestMatrixChannelInsertBlock(unittest.TestCase):

    def test_from_json(self):
        block = MatrixChannelInsertBlock.from_json(
            {
                "insert": "matrixChannels",
                "repeatFor": "eachPixelABC",
                "channelOrder": "perChannel",
                "templateChannels": ["R $pixelKey", "G $pixelKey"],
            }
        )
        self.assertIs(RepeatFor.eachPixelABC, block.repeat_for)
        self.assertIs(ChannelOrder.perChannel, block.order)
        self.assertEqual(
            ["R a", "R b", "G a", "G b"],
            block.resolve(Matrix({"pixelKeys": [[["b", "a"]]]})),
        )

    def test_alphanumeric_order_compares_numbers(self):
        matrix = Matrix({"pixelKeys": [[["Head 10", "Head 2", "head 1", "Beam"]]]})
        self.assertEqual(["Beam", "head 1", "Head 2", "Head 10"], RepeatFor.eachPixelABC.value(matrix))

        matrix = Matrix({"pixelCount": [12, 1, 1]})
        self.assertEqual([str(number) for number in range(1, 13)], RepeatFor.eachPixelABC.value(matrix))

    def test_explicit_pixel_keys(self):
        block = MatrixChannelInsertBlock.from_json(
            {
                "insert": "matrixChannels",
                "repeatFor": ["b"],
                "channelOrder": "perPixel",
                "templateChannels": ["R $pixelKey", None],
            }
        )
        self.assertEqual(["R b", None], block.resolve(Matrix({"pixelKeys": [[["b", "a"]]]})))

    def test_invalid(self):
        with self.assertRaises(FixtureConfigurationError):
            MatrixChannelInsertBlock.from_json({"insert": "somethingElse"})

        with self.assertRaises(FixtureConfigurationError):
            MatrixChannelInsertBlock.from_json(
                {
                    "insert": "matrixChannels",
                    "repeatFor": "eachPixelDiagonally",
                    "channelOrder": "perPixel",
                    "templateChannels": ["R $pixelKey"],
                }
            )

        block = MatrixChannelInsertBlock.from_json(
            {
                "insert": "matrixChannels",
                "repeatFor": "eachPixelXYZ",
                "channelOrder": "perPixel",
                "templateChannels": ["R $pixelKey"],
            }
        )
        self.assertEqual([], block.resolve(None))


if __name__ == "__main__":
    unittest.main()
