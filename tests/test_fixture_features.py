import unittest

from ofl.fixture_features import FIXTURE_FEATURES, get_fixture_features
from tests.fixture_test_framework import fixture_json, load_test_fixture, make_fixture


class TestFixtureFeatures(unittest.TestCase):

    def test_feature_ids_are_unique(self):
        ids = [feature.id for feature in FIXTURE_FEATURES]
        self.assertEqual(len(ids), len(set(ids)))

    def test_simple_fixture(self):
        self.assertEqual([], get_fixture_features(load_test_fixture("generic", "dimmer")))

    def test_pixel_count_matrix(self):
        self.assertEqual(
            [
                "matrix-pixelCount",
                "matrix-pixelGroups",
                "matrix-pixelGroups-number-constraints",
                "fine-matrix-channel",
                "matrix-channel-overridden",
                "matrix-channel-used-directly",
            ],
            get_fixture_features(load_test_fixture("cameo", "pixel-bar")),
        )

    def test_pixel_keys_matrix_with_switching_template(self):
        fixture = make_fixture(
            fixture_json(
                availableChannels=None,
                matrix={
                    "pixelKeys": [[["a", None, "b"]]],
                    "pixelGroups": {"AB": {"name": ["a|b"]}},
                },
                templateChannels={
                    "Dim $pixelKey": {"capability": {"type": "Intensity"}},
                    "Fn $pixelKey": {
                        "defaultValue": 0,
                        "capabilities": [
                            {
                                "dmxRange": [0, 127],
                                "type": "Generic",
                                "switchChannels": {"Sw $pixelKey": "Dim $pixelKey"},
                            },
                            {
                                "dmxRange": [128, 255],
                                "type": "Effect",
                                "switchChannels": {"Sw $pixelKey": "Dim $pixelKey"},
                            },
                        ],
                    },
                },
                modes=[
                    {
                        "name": "Pixels",
                        "channels": [
                            {
                                "insert": "matrixChannels",
                                "repeatFor": "eachPixelABC",
                                "channelOrder": "perPixel",
                                "templateChannels": ["Fn $pixelKey", "Sw $pixelKey"],
                            }
                        ],
                    }
                ],
            )
        )
        self.assertEqual(
            [
                "matrix-pixelKeys",
                "matrix-pixelGroups",
                "matrix-pixelGroups-string-constraints",
                "matrix-custom-layout",
                "switching-matrix-channel",
            ],
            get_fixture_features(fixture),
        )
        self.assertEqual(["Dim a", "Dim b", "Fn a", "Sw a", "Fn b", "Sw b"], fixture.all_channel_keys)

    def test_switching_fine_channels(self):
        fixture = make_fixture(
            fixture_json(
                availableChannels={
                    "Dimmer": {"fineChannelAliases": ["Dimmer fine"], "capability": {"type": "Intensity"}},
                    "Select": {
                        "defaultValue": 0,
                        "capabilities": [
                            {"dmxRange": [0, 127], "type": "Generic", "switchChannels": {"Switched": "Dimmer"}},
                            {"dmxRange": [128, 255], "type": "Generic", "switchChannels": {"Switched": "Dimmer fine"}},
                        ],
                    },
                },
                modes=[{"name": "Standard", "channels": ["Dimmer", "Select", "Switched"]}],
            )
        )
        self.assertEqual(["switching-fine-channels"], get_fixture_features(fixture))


if __name__ == "__main__":
    unittest.main()
