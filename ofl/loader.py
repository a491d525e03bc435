"""
The loader is responsible for reading fixture-format JSON files from disk and
creating the `Fixture` model class from them.

Fixture files live at `<fixtures dir>/<manufacturer key>/<fixture key>.json`,
so manufacturer and fixture key are taken from the path.
"""

import asyncio
import json
import logging
import os
from pathlib import Path
from typing import TYPE_CHECKING

from ofl.model.fixture import Fixture

if TYPE_CHECKING:
    from ofl.registry import ManufacturerRegistry

log = logging.getLogger(__name__)


def read_json_file(json_file: str | os.PathLike) -> dict:
    """Reads a JSON file synchronously."""
    with open(json_file, encoding="utf-8") as json_data:
        return json.load(json_data)


def keys_from_path(json_file: str | os.PathLike) -> tuple[str, str]:
    """
    :param json_file: Path to a fixture file.
    :return: Manufacturer key and fixture key.
    """
    path = Path(json_file)
    return path.parent.name, path.stem


def create_fixture(
    man_key: str, fix_key: str, data: dict, registry: "ManufacturerRegistry | None" = None
) -> Fixture:
    """
    Creates the fixture model from already parsed JSON data.
    :param man_key: The manufacturer key.
    :param fix_key: The fixture key.
    :param data: The parsed JSON data
    :param registry: Resolves the manufacturer key; a bare manufacturer is used
                     without one.
    :return: The `Fixture` model class.
    """
    fixture = Fixture(man_key, fix_key, data, registry)
    _log_help_wanted(fixture)
    return fixture


def _log_help_wanted(fixture: Fixture) -> None:
    if fixture.help_wanted:
        log.warning(
            "HELP WANTED: Looks like the fixture over at %s could use some love: %s",
            fixture.url,
            fixture.help_wanted,
        )

    for capability in fixture.capabilities:
        if capability.is_help_wanted:
            log.warning(
                "HELP WANTED: Channel '%s' of fixture over at %s could use some love: %s",
                capability.channel.name,
                fixture.url,
                capability.help_wanted,
            )


async def parse_async(json_file: str | os.PathLike, registry: "ManufacturerRegistry | None" = None) -> Fixture:
    """
    Parses the json fixture-format file asynchronously.
    :param json_file: The fixture-format json file
    :param registry: Resolves the manufacturer key.
    :return: The `Fixture` model class.
    """
    data = await asyncio.to_thread(read_json_file, json_file)
    return create_fixture(*keys_from_path(json_file), data, registry)


def parse(json_file: str | os.PathLike, registry: "ManufacturerRegistry | None" = None) -> Fixture:
    """
    Parses the json fixture-format file synchronously.
    :param json_file: The fixture-format json file
    :param registry: Resolves the manufacturer key.
    :return: The `Fixture` model class.
    """
    data = read_json_file(json_file)
    return create_fixture(*keys_from_path(json_file), data, registry)
