"""
Physical data of a fixture or mode: dimensions, bulb, lens, focus, ...
"""

import math
from typing import Any


class Physical:
    """
    A fixture's physical data. All properties default to None if not defined.
    """

    # pylint: disable=too-many-public-methods

    def __init__(self, json_object: dict[str, Any]):
        self.json_object = json_object

    def merged_with(self, override: "Physical") -> "Physical":
        """
        :param override: Physical data that takes precedence, e.g. from a mode.
        :return: New physical data with sections merged one level deep.
        """
        merged = dict(self.json_object)
        for section, value in override.json_object.items():
            if isinstance(value, dict) and isinstance(merged.get(section), dict):
                merged[section] = {**merged[section], **value}
            else:
                merged[section] = value
        return Physical(merged)

    def _get(self, section: str, prop: str) -> Any:
        return self.json_object.get(section, {}).get(prop)

    @property
    def dimensions(self) -> list[float] | None:
        return self.json_object.get("dimensions")

    @property
    def width(self) -> float | None:
        return self.dimensions[0] if self.dimensions else None

    @property
    def height(self) -> float | None:
        return self.dimensions[1] if self.dimensions else None

    @property
    def depth(self) -> float | None:
        return self.dimensions[2] if self.dimensions else None

    @property
    def weight(self) -> float | None:
        return self.json_object.get("weight")

    @property
    def power(self) -> float | None:
        return self.json_object.get("power")

    @property
    def dmx_connector(self) -> str | None:
        return self.json_object.get("DMXconnector")

    @property
    def bulb_type(self) -> str | None:
        return self._get("bulb", "type")

    @property
    def bulb_color_temperature(self) -> float | None:
        return self._get("bulb", "colorTemperature")

    @property
    def bulb_lumens(self) -> float | None:
        return self._get("bulb", "lumens")

    @property
    def lens_name(self) -> str | None:
        return self._get("lens", "name")

    @property
    def lens_degrees_min_max(self) -> list[float] | None:
        return self._get("lens", "degreesMinMax")

    @property
    def lens_degrees_min(self) -> float | None:
        degrees = self.lens_degrees_min_max
        return degrees[0] if degrees else None

    @property
    def lens_degrees_max(self) -> float | None:
        degrees = self.lens_degrees_min_max
        return degrees[1] if degrees else None

    @property
    def focus_type(self) -> str | None:
        return self._get("focus", "type")

    @property
    def focus_pan_max(self) -> float | None:
        """
        :return: Maximum pan in degrees, infinity for continuous pan.
        """
        return self._to_degrees(self._get("focus", "panMax"))

    @property
    def focus_tilt_max(self) -> float | None:
        """
        :return: Maximum tilt in degrees, infinity for continuous tilt.
        """
        return self._to_degrees(self._get("focus", "tiltMax"))

    @staticmethod
    def _to_degrees(value: float | str | None) -> float | None:
        if value == "infinite":
            return math.inf
        return value

    @property
    def has_matrix_pixels(self) -> bool:
        return "matrixPixels" in self.json_object

    @property
    def matrix_pixels_dimensions(self) -> list[float] | None:
        return self._get("matrixPixels", "dimensions")

    @property
    def matrix_pixels_spacing(self) -> list[float] | None:
        return self._get("matrixPixels", "spacing")
