"""
Manufacturers as listed in `manufacturers.json`.
"""

from typing import Any


class Manufacturer:
    """
    A fixture manufacturer.
    """

    def __init__(self, key: str, json_object: dict[str, Any] | None = None):
        self.key = key
        self.json_object = json_object or {}

    @property
    def name(self) -> str:
        return self.json_object.get("name", self.key)

    @property
    def website(self) -> str | None:
        return self.json_object.get("website")

    @property
    def comment(self) -> str:
        return self.json_object.get("comment", "")

    @property
    def rdm_id(self) -> int | None:
        return self.json_object.get("rdmId")

    def __repr__(self) -> str:
        return self.key

    def __str__(self) -> str:
        return self.name
