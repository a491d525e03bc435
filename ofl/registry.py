"""Manufacturer registry and the library of fixture files."""

import asyncio
import json
import logging
import os
from collections.abc import Iterator, Mapping
from pathlib import Path
from types import MappingProxyType
from typing import Any

from ofl.const import MANUFACTURERS_FILE
from ofl.loader import parse_async
from ofl.model.exceptions import FixtureConfigurationError, InvariantViolation
from ofl.model.fixture import Fixture
from ofl.model.manufacturer import Manufacturer

log = logging.getLogger(__name__)


class ManufacturerRegistry(Mapping[str, Manufacturer]):
    """
    Read-only mapping of manufacturer keys to manufacturers, built once from
    `manufacturers.json` and passed to whoever constructs fixtures.
    """

    def __init__(self, manufacturers_json: dict[str, Any]):
        self._manufacturers = MappingProxyType(
            {
                key: Manufacturer(key, manufacturer_json)
                for key, manufacturer_json in manufacturers_json.items()
                if not key.startswith("$")
            }
        )

    @classmethod
    def from_file(cls, path: str | os.PathLike) -> "ManufacturerRegistry":
        with open(path, encoding="utf-8") as json_data:
            return cls(json.load(json_data))

    def get(self, key: str, default: Manufacturer | None = None) -> Manufacturer:  # type: ignore[override]
        """
        :param key: The manufacturer key.
        :param default: Returned for unknown keys, if given.
        :return: The manufacturer.
        """
        manufacturer = self._manufacturers.get(key, default)
        if manufacturer is None:
            raise FixtureConfigurationError(f"Manufacturer '{key}' is not defined in {MANUFACTURERS_FILE}.")
        return manufacturer

    def __getitem__(self, key: str) -> Manufacturer:
        return self._manufacturers[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._manufacturers)

    def __len__(self) -> int:
        return len(self._manufacturers)


class FixtureLibrary:
    """
    All fixtures of a folder laid out as `<manufacturer>/<fixture>.json`.
    """

    def __init__(self, fixtures_dir: str | os.PathLike, registry: ManufacturerRegistry | None = None):
        self.fixtures_dir = Path(fixtures_dir)
        self.registry = registry

    def fixture_files(self) -> list[Path]:
        """
        :return: All fixture files of the library, sorted by path.
        """
        if not self.fixtures_dir.is_dir():
            log.warning("Fixture folder does not exist: %s", self.fixtures_dir)
            return []
        return sorted(self.fixtures_dir.glob("*/*.json"))

    async def load_fixtures(self) -> dict[str, Fixture]:
        """
        Loads all fixtures of the library concurrently, skipping files that
        can't be loaded.
        :return: Fixtures by `<manufacturer>/<fixture>` key, ordered by path.
        """
        file_list = await asyncio.to_thread(self.fixture_files)
        log.info("Found %d fixture files in %s", len(file_list), self.fixtures_dir)

        fixtures = await asyncio.gather(*(self.load_fixture(file_path) for file_path in file_list))
        fixture_map = {repr(fixture): fixture for fixture in fixtures if fixture is not None}

        log.info("Successfully loaded %d fixtures", len(fixture_map))
        return fixture_map

    async def load_fixture(self, file_path: str | os.PathLike) -> Fixture | None:
        """
        :param file_path: Path to a fixture file of this library.
        :return: The fixture, or None if the file can't be read or can't be
                 built into the model.
        """
        try:
            return await parse_async(file_path, self.registry)
        except json.JSONDecodeError as e:
            log.warning("Invalid JSON in file %s: %s", file_path, e)
        except OSError as e:
            log.warning("Fixture file %s could not be read: %s", file_path, e)
        except InvariantViolation:
            raise
        except Exception as e:  # pylint: disable=broad-except
            log.warning("Fixture %s could not be imported into model. %s: %s", file_path, type(e).__name__, e)

        return None
