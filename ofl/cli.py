"""
Validates all fixture files of a fixtures directory plus its manufacturers
file, prints a PASS / FAIL line per file and exits non-zero if any file has
errors.
"""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from ofl.const import FIXTURES_DIR_DEFAULT, MANUFACTURERS_FILE
from ofl.loader import keys_from_path, read_json_file
from ofl.registry import FixtureLibrary, ManufacturerRegistry
from ofl.validation import UniqueValues, ValidationResult, check_fixture, check_manufacturers, get_error_string

log = logging.getLogger(__name__)


async def _read_file(file_path: Path, result: ValidationResult) -> dict | None:
    try:
        return await asyncio.to_thread(read_json_file, file_path)
    except json.JSONDecodeError as e:
        result.errors.append(get_error_string("File could not be parsed as JSON.", e))
    except OSError as e:
        result.errors.append(get_error_string("File could not be read.", e))
    return None


async def check_fixture_file(
    file_path: Path, unique_values: UniqueValues, registry: ManufacturerRegistry | None
) -> ValidationResult:
    """
    Reads one fixture file in a worker thread, then checks it on the event
    loop so the shared unique values are only touched from there.
    """
    man_key, fix_key = keys_from_path(file_path)
    result = ValidationResult(f"{man_key}/{fix_key}.json")

    fixture_json = await _read_file(file_path, result)
    if fixture_json is None:
        return result

    checked = check_fixture(man_key, fix_key, fixture_json, unique_values, registry)
    result.errors.extend(checked.errors)
    result.warnings.extend(checked.warnings)
    return result


async def check_manufacturers_file(
    file_path: Path, unique_values: UniqueValues
) -> tuple[ValidationResult, ManufacturerRegistry | None]:
    """
    :return: The check result and, if the file is valid, the registry built
             from it.
    """
    result = ValidationResult(MANUFACTURERS_FILE)

    manufacturers_json = await _read_file(file_path, result)
    if manufacturers_json is None:
        return result, None

    checked = check_manufacturers(manufacturers_json, unique_values)
    result.errors.extend(checked.errors)
    result.warnings.extend(checked.warnings)

    if not result.passed:
        return result, None
    return result, ManufacturerRegistry(manufacturers_json)


async def validate_fixtures_dir(fixtures_dir: Path) -> list[ValidationResult]:
    """
    :param fixtures_dir: Directory containing `manufacturers.json` and one
                         folder of fixture files per manufacturer.
    :return: One result per checked file, manufacturers file last.
    """
    unique_values = UniqueValues()

    manufacturers_result, registry = await check_manufacturers_file(fixtures_dir / MANUFACTURERS_FILE, unique_values)

    library = FixtureLibrary(fixtures_dir, registry)
    fixture_files = await asyncio.to_thread(library.fixture_files)
    log.debug("Checking %d fixture files in %s", len(fixture_files), fixtures_dir)

    fixture_results = await asyncio.gather(
        *(check_fixture_file(file_path, unique_values, registry) for file_path in fixture_files)
    )

    return [*fixture_results, manufacturers_result]


def print_results(results: list[ValidationResult]) -> int:
    """
    :return: The number of failed files.
    """
    total_fails = 0
    total_warnings = 0

    for result in results:
        failed = not result.passed
        print("[FAIL]" if failed else "[PASS]", result.name)

        total_fails += 1 if failed else 0
        for error in result.errors:
            print("└", "Error:", error)

        total_warnings += len(result.warnings)
        for warning in result.warnings:
            print("└", "Warning:", warning)

    print()

    if total_warnings > 0:
        print("[INFO]", f"{total_warnings} unresolved warning(s)")

    if total_fails == 0:
        print("[PASS]", f"All {len(results)} tested files were valid.")
    else:
        print("[FAIL]", f"{total_fails} of {len(results)} tested files failed.", file=sys.stderr)

    return total_fails


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Validate Open Fixture Library fixture files")
    parser.add_argument(
        "fixtures_dir",
        nargs="?",
        default=FIXTURES_DIR_DEFAULT,
        help=f"Directory with {MANUFACTURERS_FILE} and <manufacturer>/<fixture>.json files",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    results = asyncio.run(validate_fixtures_dir(Path(args.fixtures_dir)))
    return 1 if print_results(results) > 0 else 0


if __name__ == "__main__":
    sys.exit(main())
