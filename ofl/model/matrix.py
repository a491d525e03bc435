"""
The matrix holds the pixel keys of a fixture, which are used for templating
channels. Pixels are laid out in a 3D grid (Z -> rows (Y) -> columns (X)).
"""

import re
from functools import cached_property
from typing import Any

from ofl.model.cache import clear_cached_properties
from ofl.model.exceptions import FixtureConfigurationError

AXES = ("X", "Y", "Z")

PixelKeyStructure = list[list[list[str | None]]]


def flatten(structure: PixelKeyStructure) -> list[str | None]:
    """
    Flatten a 3D list into a 1D list, X changing fastest.
    :param structure: The 3D list.
    :return: The 1D list.
    """
    result: list[str | None] = []
    for z_plane in structure:
        for y_row in z_plane:
            result.extend(y_row)
    return result


def _matches_number_constraint(position: int, constraint: str) -> bool:
    """
    :param position: A 1-based pixel position on one axis.
    :param constraint: One of `=n`, `<=n`, `>=n`, `an+b`, `an`, `even`, `odd`.
    :return: Whether the position fulfills the constraint.
    """
    if constraint == "odd":
        constraint = "2n+1"
    elif constraint == "even":
        constraint = "2n"

    if constraint.startswith("<="):
        return position <= int(constraint[2:])
    if constraint.startswith(">="):
        return position >= int(constraint[2:])
    if constraint.startswith("="):
        return position == int(constraint[1:])

    match = re.fullmatch(r"(\d+)n(?:\+(\d+))?", constraint)
    if match is None:
        raise FixtureConfigurationError(f"Unknown pixel group constraint: {constraint}")

    step = int(match.group(1))
    if step == 0:
        raise FixtureConfigurationError(f"Pixel group constraint {constraint} needs a step of at least 1.")
    offset = int(match.group(2) or 0)
    return position % step == offset % step


class Matrix:
    """
    God class for matrix / pixel operations.
    """

    def __init__(self, json_object: dict[str, Any]) -> None:
        self._json_object = json_object

    @property
    def json_object(self) -> dict[str, Any]:
        return self._json_object

    @json_object.setter
    def json_object(self, json_object: dict[str, Any]) -> None:
        self._json_object = json_object
        clear_cached_properties(self)

    @cached_property
    def pixel_count(self) -> tuple[int, int, int]:
        """
        :return: x-size, y-size, z-size of the matrix.
        """
        if "pixelCount" in self._json_object:
            x_size, y_size, z_size = self._json_object["pixelCount"]
            return x_size, y_size, z_size

        if "pixelKeys" in self._json_object:
            pixel_keys = self._json_object["pixelKeys"]
            z_size = len(pixel_keys)
            y_size = len(pixel_keys[0]) if z_size else 0
            x_size = len(pixel_keys[0][0]) if y_size else 0
            return x_size, y_size, z_size

        raise FixtureConfigurationError("Matrix definition must have either `pixelCount` or `pixelKeys`.")

    @property
    def pixel_count_x(self) -> int:
        return self.pixel_count[0]

    @property
    def pixel_count_y(self) -> int:
        return self.pixel_count[1]

    @property
    def pixel_count_z(self) -> int:
        return self.pixel_count[2]

    @cached_property
    def defined_axes(self) -> list[str]:
        """
        :return: The axes with more than one pixel.
        """
        return [axis for axis, count in zip(AXES, self.pixel_count) if count > 1]

    @cached_property
    def pixel_key_structure(self) -> PixelKeyStructure:
        """
        :return: Pixel keys by Z, Y and X position; None marks unused
                 positions.
        """
        if "pixelCount" in self._json_object:
            x_size, y_size, z_size = self.pixel_count
            return [
                [[self._get_default_pixel_key(x, y, z) for x in range(1, x_size + 1)] for y in range(1, y_size + 1)]
                for z in range(1, z_size + 1)
            ]

        if "pixelKeys" in self._json_object:
            return self._json_object["pixelKeys"]

        raise FixtureConfigurationError("Matrix definition must have either `pixelCount` or `pixelKeys`.")

    def _get_default_pixel_key(self, x: int, y: int, z: int) -> str:
        axes = self.defined_axes
        if len(axes) <= 1:
            return str(max(x, y, z))
        if len(axes) == 2:
            if self.pixel_count_x == 1:
                return f"({y}, {z})"
            if self.pixel_count_y == 1:
                return f"({x}, {z})"
            return f"({x}, {y})"
        return f"({x}, {y}, {z})"

    @cached_property
    def pixel_keys(self) -> list[str]:
        """
        :return: All pixel keys (without gaps), X changing fastest.
        """
        return [key for key in flatten(self.pixel_key_structure) if key is not None]

    @cached_property
    def pixel_key_positions(self) -> dict[str, tuple[int, int, int]]:
        """
        :return: Pixel keys mapped to their 1-based X, Y and Z position.
        """
        positions = {}
        for z, z_plane in enumerate(self.pixel_key_structure, start=1):
            for y, y_row in enumerate(z_plane, start=1):
                for x, pixel_key in enumerate(y_row, start=1):
                    if pixel_key is not None:
                        positions[pixel_key] = (x, y, z)
        return positions

    def get_pixel_keys_by_order(self, first_axis: str, second_axis: str, third_axis: str) -> list[str]:
        """
        Sorts all pixel keys by their position.
        :param first_axis: The axis that changes fastest, one of X, Y, Z.
        :param second_axis: The axis that changes second fastest.
        :param third_axis: The axis that changes slowest.
        :return: The ordered pixel keys.
        """
        first, second, third = (AXES.index(axis) for axis in (first_axis, second_axis, third_axis))
        positions = self.pixel_key_positions
        return sorted(
            positions,
            key=lambda pixel_key: (
                positions[pixel_key][third],
                positions[pixel_key][second],
                positions[pixel_key][first],
            ),
        )

    @property
    def pixel_group_keys(self) -> list[str]:
        return list(self._json_object.get("pixelGroups", {}))

    @cached_property
    def pixel_groups(self) -> dict[str, list[str]]:
        """
        :return: Pixel group keys mapped to the pixel keys they contain,
                 following the matrix structure docs;
                 https://github.com/OpenLightingProject/open-fixture-library/blob/master/docs/fixture-format.md#matrix-structure
        """
        return {
            group_key: self._resolve_pixel_group(group_key, reference)
            for group_key, reference in self._json_object.get("pixelGroups", {}).items()
        }

    def _resolve_pixel_group(self, group_key: str, reference: str | list[str] | dict[str, Any]) -> list[str]:
        if reference == "all":
            return self.get_pixel_keys_by_order("X", "Y", "Z")

        if isinstance(reference, list):
            return list(reference)

        if isinstance(reference, dict):
            positions = self.pixel_key_positions
            patterns = reference.get("name", [])

            def matches(pixel_key: str) -> bool:
                for index, axis in enumerate(("x", "y", "z")):
                    constraints = reference.get(axis, [])
                    if not all(_matches_number_constraint(positions[pixel_key][index], c) for c in constraints):
                        return False
                return all(re.search(pattern, pixel_key) for pattern in patterns)

            return [pixel_key for pixel_key in self.get_pixel_keys_by_order("X", "Y", "Z") if matches(pixel_key)]

        raise FixtureConfigurationError(f"Pixel group {group_key} is ill defined: {reference}")

    def __str__(self) -> str:
        return str(self.pixel_key_structure)
