import unittest

from ofl.model.range import Range


class TestRange(unittest.TestCase):

    def test_properties(self):
        dmx_range = Range([10, 20])
        self.assertEqual(10, dmx_range.start)
        self.assertEqual(20, dmx_range.end)
        self.assertEqual(15, dmx_range.center)
        self.assertEqual(10, Range([10, 11]).center)

    def test_contains(self):
        dmx_range = Range([10, 20])
        self.assertTrue(dmx_range.contains(10))
        self.assertTrue(dmx_range.contains(20))
        self.assertFalse(dmx_range.contains(9))
        self.assertFalse(dmx_range.contains(21))

    def test_overlaps(self):
        self.assertTrue(Range([0, 10]).overlaps_with(Range([5, 20])))
        self.assertTrue(Range([5, 20]).overlaps_with(Range([0, 10])))
        self.assertFalse(Range([0, 10]).overlaps_with(Range([10, 20])))
        self.assertFalse(Range([0, 9]).overlaps_with(Range([10, 20])))
        self.assertTrue(Range([0, 9]).overlaps_with_one_of([Range([20, 30]), Range([5, 6])]))
        self.assertFalse(Range([0, 9]).overlaps_with_one_of([]))

    def test_adjacent(self):
        self.assertTrue(Range([0, 9]).is_adjacent_to(Range([10, 20])))
        self.assertTrue(Range([10, 20]).is_adjacent_to(Range([0, 9])))
        self.assertFalse(Range([0, 9]).is_adjacent_to(Range([11, 20])))

    def test_merge_chain(self):
        merged = Range.get_merged_ranges([Range([0, 9]), Range([10, 19]), Range([20, 29])])
        self.assertEqual([Range([0, 29])], merged)

    def test_merge_unordered(self):
        merged = Range.get_merged_ranges([Range([20, 29]), Range([0, 9]), Range([10, 19])])
        self.assertEqual([Range([0, 29])], merged)

    def test_merge_keeps_gaps(self):
        ranges = [Range([0, 9]), Range([20, 29])]
        self.assertEqual(ranges, Range.get_merged_ranges(ranges))

    def test_merge_is_idempotent(self):
        merged = Range.get_merged_ranges([Range([0, 9]), Range([10, 19]), Range([30, 39])])
        self.assertEqual([Range([0, 19]), Range([30, 39])], merged)
        self.assertEqual(merged, Range.get_merged_ranges(merged))

    def test_merge_does_not_modify_input(self):
        ranges = [Range([0, 9]), Range([10, 19])]
        Range.get_merged_ranges(ranges)
        self.assertEqual([Range([0, 9]), Range([10, 19])], ranges)

    def test_str(self):
        self.assertEqual("0…9", str(Range([0, 9])))
        self.assertEqual("5", str(Range([5, 5])))


if __name__ == "__main__":
    unittest.main()
