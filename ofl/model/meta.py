"""
Meta information of a fixture definition.
"""

from datetime import date
from typing import Any

from ofl.model.exceptions import FixtureConfigurationError


def _parse_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except (TypeError, ValueError):
        raise FixtureConfigurationError(f"'{value}' is not a valid date.") from None


class Meta:
    """
    Authors, creation and modification dates and the plugin a fixture was
    imported with.
    """

    def __init__(self, json_object: dict[str, Any]):
        self.json_object = json_object

    @property
    def authors(self) -> list[str]:
        return self.json_object["authors"]

    @property
    def create_date(self) -> date:
        return _parse_date(self.json_object["createDate"])

    @property
    def last_modify_date(self) -> date:
        return _parse_date(self.json_object["lastModifyDate"])

    @property
    def import_plugin(self) -> str | None:
        return self.json_object.get("importPlugin", {}).get("plugin")

    @property
    def import_date(self) -> date | None:
        import_date = self.json_object.get("importPlugin", {}).get("date")
        return None if import_date is None else _parse_date(import_date)

    @property
    def import_comment(self) -> str | None:
        return self.json_object.get("importPlugin", {}).get("comment")
