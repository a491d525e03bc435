"""
A range is the span from one integer to a higher or equal integer, used for
DMX value ranges of capabilities.
"""

from collections.abc import Iterable, Sequence


class Range:
    """
    Closed integer interval. Start should not be greater than end, which is
    up to the caller to ensure.
    """

    __slots__ = ("_start", "_end")

    def __init__(self, range_values: Sequence[int]):
        self._start = range_values[0]
        self._end = range_values[1]

    @property
    def start(self) -> int:
        """
        :return: The start number of the range. Lower or equal to end.
        """
        return self._start

    @property
    def end(self) -> int:
        """
        :return: The end number of the range. Higher or equal to start.
        """
        return self._end

    @property
    def center(self) -> int:
        """
        :return: The arithmetic mean of start and end, rounded down.
        """
        return (self._start + self._end) // 2

    def contains(self, value: int) -> bool:
        """
        :param value: The number to check.
        :return: Whether the number is not lower than start and not higher
                 than end.
        """
        return self._start <= value <= self._end

    def overlaps_with(self, other: "Range") -> bool:
        """
        :param other: Another range.
        :return: Whether this range overlaps with the other one.
        """
        return other.end > self._start and other.start < self._end

    def overlaps_with_one_of(self, ranges: Iterable["Range"]) -> bool:
        """
        :param ranges: Other ranges.
        :return: Whether this range overlaps with any of them.
        """
        return any(self.overlaps_with(other) for other in ranges)

    def is_adjacent_to(self, other: "Range") -> bool:
        """
        :param other: Another range.
        :return: Whether the lower range's end is exactly one below the higher
                 range's start.
        """
        return other.end + 1 == self._start or self._end + 1 == other.start

    def get_range_merged_with(self, other: "Range") -> "Range":
        """
        :param other: The other range to merge with.
        :return: A new range covering both ranges.
        """
        return Range([min(self._start, other.start), max(self._end, other.end)])

    @staticmethod
    def get_merged_ranges(ranges: Iterable["Range"]) -> list["Range"]:
        """
        Merges adjacent ranges into as few ranges as possible, in a single
        left-to-right pass. Every range is merged with the first adjacent range
        found, so long adjacency chains may need another call to collapse
        completely.
        :param ranges: Non-overlapping, valid ranges.
        :return: The merged ranges.
        """
        merged = [Range([r.start, r.end]) for r in ranges]

        for index in range(len(merged)):
            # entries removed during the pass are not visited
            if index >= len(merged):
                continue

            current = merged[index]
            mergeable_index = next(
                (i for i, other in enumerate(merged) if other.is_adjacent_to(current)),
                -1,
            )

            if mergeable_index != -1:
                merged[index] = merged[mergeable_index].get_range_merged_with(current)
                del merged[mergeable_index]

        return merged

    def __eq__(self, other) -> bool:
        if not isinstance(other, Range):
            return NotImplemented
        return self._start == other.start and self._end == other.end

    def __hash__(self) -> int:
        return hash((self._start, self._end))

    def __str__(self) -> str:
        if self._start == self._end:
            return str(self._start)
        return f"{self._start}…{self._end}"

    def __repr__(self) -> str:
        return f"Range([{self._start}, {self._end}])"
