import unittest

from ofl.model.exceptions import FixtureConfigurationError
from ofl.model.matrix import Matrix


class TestMatrix(unittest.TestCase):

    def test_pixel_count_single_axis(self):
        matrix = Matrix({"pixelCount": [1, 3, 1]})
        self.assertEqual((1, 3, 1), matrix.pixel_count)
        self.assertEqual(["Y"], matrix.defined_axes)
        self.assertEqual(["1", "2", "3"], matrix.pixel_keys)

    def test_pixel_count_two_axes(self):
        matrix = Matrix({"pixelCount": [2, 2, 1]})
        self.assertEqual(["X", "Y"], matrix.defined_axes)
        self.assertEqual(["(1, 1)", "(2, 1)", "(1, 2)", "(2, 2)"], matrix.pixel_keys)

    def test_pixel_count_three_axes(self):
        matrix = Matrix({"pixelCount": [2, 1, 2]})
        self.assertEqual(["(1, 1)", "(2, 1)", "(1, 2)", "(2, 2)"], matrix.pixel_keys)

        matrix = Matrix({"pixelCount": [2, 2, 2]})
        self.assertEqual("(1, 1, 1)", matrix.pixel_keys[0])
        self.assertEqual("(2, 2, 2)", matrix.pixel_keys[-1])

    def test_pixel_keys_with_gaps(self):
        matrix = Matrix({"pixelKeys": [[["a", "b"], ["c", None]]]})
        self.assertEqual((2, 2, 1), matrix.pixel_count)
        self.assertEqual(["a", "b", "c"], matrix.pixel_keys)
        self.assertEqual({"a": (1, 1, 1), "b": (2, 1, 1), "c": (1, 2, 1)}, matrix.pixel_key_positions)

    def test_pixel_keys_by_order(self):
        matrix = Matrix({"pixelKeys": [[["a", "b"], ["c", None]]]})
        self.assertEqual(["a", "b", "c"], matrix.get_pixel_keys_by_order("X", "Y", "Z"))
        self.assertEqual(["a", "c", "b"], matrix.get_pixel_keys_by_order("Y", "X", "Z"))

    def test_pixel_groups(self):
        matrix = Matrix(
            {
                "pixelCount": [4, 1, 1],
                "pixelGroups": {
                    "All": "all",
                    "Outer": ["1", "4"],
                    "Even": {"x": ["even"]},
                    "FirstHalf": {"x": ["<=2"]},
                    "Third": {"x": ["3n"]},
                    "Named": {"name": ["^[12]$"]},
                },
            }
        )
        self.assertEqual(["All", "Outer", "Even", "FirstHalf", "Third", "Named"], matrix.pixel_group_keys)
        self.assertEqual(
            {
                "All": ["1", "2", "3", "4"],
                "Outer": ["1", "4"],
                "Even": ["2", "4"],
                "FirstHalf": ["1", "2"],
                "Third": ["3"],
                "Named": ["1", "2"],
            },
            matrix.pixel_groups,
        )

    def test_unknown_constraint(self):
        matrix = Matrix({"pixelCount": [4, 1, 1], "pixelGroups": {"Bad": {"x": ["sometimes"]}}})
        with self.assertRaises(FixtureConfigurationError):
            _ = matrix.pixel_groups

    def test_constraint_with_zero_step(self):
        matrix = Matrix({"pixelCount": [4, 1, 1], "pixelGroups": {"Bad": {"x": ["0n+1"]}}})
        with self.assertRaises(FixtureConfigurationError) as context:
            _ = matrix.pixel_groups
        self.assertEqual("Pixel group constraint 0n+1 needs a step of at least 1.", str(context.exception))

    def test_missing_pixels(self):
        with self.assertRaises(FixtureConfigurationError):
            _ = Matrix({}).pixel_keys

    def test_json_object_reassignment_resets_cache(self):
        matrix = Matrix({"pixelCount": [2, 1, 1]})
        self.assertEqual(["1", "2"], matrix.pixel_keys)
        matrix.json_object = {"pixelCount": [3, 1, 1]}
        self.assertEqual(["1", "2", "3"], matrix.pixel_keys)


if __name__ == "__main__":
    unittest.main()
