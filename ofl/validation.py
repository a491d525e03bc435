"""
Semantic validation of fixture files and the manufacturers file.

A fixture is first checked against the structural schema; if that passes it
is built into the model and every derived invariant is checked. Problems are
collected as errors (the fixture must not be accepted) and warnings
(advisory), so one broken fixture never stops a batch run.
"""

# pylint: disable=too-many-instance-attributes, too-many-branches

import logging
import re
from collections import Counter
from dataclasses import dataclass, field
from typing import Any

import voluptuous as vol
from voluptuous.humanize import humanize_error

from ofl.const import MANUFACTURERS_FILE, PIXEL_KEY
from ofl.model.channel import ChannelRole, CoarseChannel, FineChannel, SwitchingChannel, max_dmx_value
from ofl.model.exceptions import InvariantViolation
from ofl.model.fixture import Fixture
from ofl.model.matrix import Matrix
from ofl.model.mode import MatrixChannelInsertBlock, Mode
from ofl.model.physical import Physical
from ofl.registry import ManufacturerRegistry
from ofl.schema import FIXTURE_SCHEMA, MANUFACTURERS_SCHEMA

log = logging.getLogger(__name__)

# channel name contains the word "fine" or "16bit" / "8 bit" / "32-bit" / "24_bit"
FINE_CHANNEL_NAME_PATTERN = re.compile(r"\bfine\b|\d+(?:\s|-|_)*bit", re.IGNORECASE)
MODE_WORD_PATTERN = re.compile(r"\bmode\b", re.IGNORECASE)
TEMPLATE_VARIABLE_PATTERN = re.compile(r"\$\w+")


@dataclass
class ValidationResult:
    """Errors and warnings of one checked file."""

    name: str = ""
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return not self.errors


@dataclass
class UniqueValues:
    """
    Values that have to be unique across all checked files. All comparisons
    are case-insensitive, so lower-cased values are stored.
    """

    man_names: set[str] = field(default_factory=set)
    man_rdm_ids: set[str] = field(default_factory=set)
    fix_keys_in_man: dict[str, set[str]] = field(default_factory=dict)
    fix_names_in_man: dict[str, set[str]] = field(default_factory=dict)
    fix_rdm_ids_in_man: dict[str, set[str]] = field(default_factory=dict)
    fix_short_names: set[str] = field(default_factory=set)


def check_uniqueness(values: set[str], value: str, result: ValidationResult, message_if_not_unique: str) -> None:
    """
    Adds an error to the result if the value (case-insensitive) was already
    seen, then remembers it.
    """
    if value.lower() in values:
        result.errors.append(message_if_not_unique)
    values.add(value.lower())


def get_error_string(description: str, error: BaseException) -> str:
    return f"{description} {type(error).__name__}: {error}"


def get_possible_end_values(channel: CoarseChannel, min_used_fineness: int) -> list[int]:
    """
    :param channel: The channel whose last capability range is checked.
    :param min_used_fineness: The least fineness the channel is used with.
    :return: The values the last range may end at, ascending. E.g. fineness 2
             gives [255, 65535, 16777215]. An explicit dmxValueResolution
             allows only its own highest value.
    """
    if channel.has_dmx_value_resolution:
        return [channel.max_dmx_bound]
    return [max_dmx_value(fineness) for fineness in range(min_used_fineness + 1)]


def check_fixture(
    man_key: str,
    fix_key: str,
    fixture_json: dict[str, Any],
    unique_values: UniqueValues | None = None,
    registry: ManufacturerRegistry | None = None,
) -> ValidationResult:
    """
    Checks that a given fixture JSON object is valid.
    :param man_key: The manufacturer key.
    :param fix_key: The fixture key.
    :param fixture_json: The fixture JSON object.
    :param unique_values: Values that have to be unique are checked and all
                          new occurrences are added. None if only this single
                          fixture is checked.
    :param registry: Resolves the manufacturer key.
    :return: The result containing errors and warnings, if any.
    """
    return FixtureChecker(man_key, fix_key, fixture_json, unique_values, registry).check()


def check_manufacturers(
    manufacturers_json: dict[str, Any], unique_values: UniqueValues | None = None
) -> ValidationResult:
    """
    Checks the manufacturers file: schema, unique names and unique RDM ids.
    """
    result = ValidationResult(MANUFACTURERS_FILE)
    if unique_values is None:
        unique_values = UniqueValues()

    try:
        MANUFACTURERS_SCHEMA(manufacturers_json)
    except vol.Invalid as e:
        result.errors.append(f"File does not match schema. {humanize_error(manufacturers_json, e)}")
        return result

    for man_key, manufacturer_json in manufacturers_json.items():
        if man_key.startswith("$"):
            # JSON schema property
            continue

        name = manufacturer_json["name"]
        check_uniqueness(
            unique_values.man_names,
            name,
            result,
            f"Manufacturer name '{name}' is not unique (test is not case-sensitive).",
        )

        if "rdmId" in manufacturer_json:
            rdm_id = str(manufacturer_json["rdmId"])
            check_uniqueness(
                unique_values.man_rdm_ids, rdm_id, result, f"Manufacturer RDM ID '{rdm_id}' is not unique."
            )

    return result


class FixtureChecker:
    """
    Runs all checks on one fixture. Only lives for a single check.
    """

    def __init__(
        self,
        man_key: str,
        fix_key: str,
        fixture_json: dict[str, Any],
        unique_values: UniqueValues | None = None,
        registry: ManufacturerRegistry | None = None,
    ):
        self.man_key = man_key
        self.fix_key = fix_key
        self.fixture_json = fixture_json
        self.unique_values = unique_values
        self.registry = registry

        self.result = ValidationResult(f"{man_key}/{fix_key}.json")
        self.fixture: Fixture | None = None

        self.defined_channel_keys: set[str] = set()
        self.defined_template_channel_keys: set[str] = set()
        self.used_channel_keys: set[str] = set()
        self.mode_names: set[str] = set()
        self.mode_short_names: set[str] = set()

    def _error(self, message: str) -> None:
        self.result.errors.append(message)

    def _warning(self, message: str) -> None:
        self.result.warnings.append(message)

    def _check_uniqueness(self, values: set[str], value: str, message_if_not_unique: str) -> None:
        check_uniqueness(values, value, self.result, message_if_not_unique)

    def _is_not_empty(self, obj: dict | list | None, message_if_empty: str) -> bool:
        """
        :return: Whether the object contains data. Empty objects are reported.
        """
        if obj is None:
            return False
        if len(obj) == 0:
            self._error(message_if_empty)
            return False
        return True

    def check(self) -> ValidationResult:
        try:
            FIXTURE_SCHEMA(self.fixture_json)
        except vol.Invalid as e:
            self._error(f"File does not match schema. {humanize_error(self.fixture_json, e)}")
            return self.result

        try:
            self.fixture = Fixture(self.man_key, self.fix_key, self.fixture_json, self.registry)

            self._check_fix_identifier_uniqueness()
            self._check_meta()
            self._check_physical(self.fixture.physical)
            self._check_matrix(self.fixture.matrix)
            self._check_channels()

            for mode in self.fixture.modes:
                self._check_mode(mode)

            self._check_unused_channels()
        except InvariantViolation:
            raise
        except Exception as e:  # pylint: disable=broad-except
            log.debug("Fixture %s/%s could not be imported into model", self.man_key, self.fix_key, exc_info=True)
            self._error(get_error_string("File could not be imported into model.", e))

        return self.result

    def _check_fix_identifier_uniqueness(self) -> None:
        """
        Checks that fixture key, name, shortName and RDM model id are unique.
        """
        # check is called for a single fixture, e.g. when importing
        if self.unique_values is None:
            return

        unique_values = self.unique_values
        fixture = self.fixture
        man_key = fixture.manufacturer.key

        self._check_uniqueness(
            unique_values.fix_keys_in_man.setdefault(man_key, set()),
            fixture.key,
            f"Fixture key '{fixture.key}' is not unique in manufacturer {man_key} (test is not case-sensitive).",
        )
        self._check_uniqueness(
            unique_values.fix_names_in_man.setdefault(man_key, set()),
            fixture.name,
            f"Fixture name '{fixture.name}' is not unique in manufacturer {man_key} (test is not case-sensitive).",
        )
        self._check_uniqueness(
            unique_values.fix_short_names,
            fixture.short_name,
            f"Fixture shortName '{fixture.short_name}' is not unique (test is not case-sensitive).",
        )

        if fixture.rdm is not None:
            model_id = str(fixture.rdm["modelId"])
            self._check_uniqueness(
                unique_values.fix_rdm_ids_in_man.setdefault(man_key, set()),
                model_id,
                f"Fixture RDM model ID '{model_id}' is not unique in manufacturer {man_key}.",
            )

    def _check_meta(self) -> None:
        meta = self.fixture.meta
        if meta.last_modify_date < meta.create_date:
            self._error("meta.lastModifyDate is earlier than meta.createDate.")

    def _check_physical(self, physical: Physical | None, mode_description: str = "") -> None:
        """
        :param physical: A fixture's or a mode's physical data.
        :param mode_description: Information about the current mode for error
                                 messages.
        """
        if physical is None:
            return

        physical_json = physical.json_object
        if not self._is_not_empty(physical_json, f"physical{mode_description} is empty. Please remove it or add data."):
            return

        for prop in ("bulb", "lens", "focus"):
            self._is_not_empty(
                physical_json.get(prop),
                f"physical.{prop}{mode_description} is empty. Please remove it or add data.",
            )

        degrees_min, degrees_max = physical.lens_degrees_min, physical.lens_degrees_max
        if degrees_min is not None and degrees_max is not None and degrees_min > degrees_max:
            self._error(f"physical.lens.degreesMinMax{mode_description} is an invalid range.")

        if physical.has_matrix_pixels and self.fixture.matrix is None:
            self._error("physical.matrixPixels is set but fixture.matrix is missing.")

    def _check_matrix(self, matrix: Matrix | None) -> None:
        if matrix is None:
            return

        has_pixel_count = "pixelCount" in matrix.json_object
        has_pixel_keys = "pixelKeys" in matrix.json_object

        if not has_pixel_count and not has_pixel_keys:
            self._error("Matrix must either define 'pixelCount' or 'pixelKeys'.")
            return
        if has_pixel_count and has_pixel_keys:
            self._error("Matrix can't define both 'pixelCount' and 'pixelKeys'.")
            return

        if not matrix.defined_axes:
            self._error("Matrix may not consist of only a single pixel.")
            return

        varies_in_axis_length = any(
            len(rows) != matrix.pixel_count_y or any(len(columns) != matrix.pixel_count_x for columns in rows)
            for rows in matrix.pixel_key_structure
        )
        if varies_in_axis_length:
            self._error("Matrix must not vary in axis length.")

        pixel_key_counts = Counter(matrix.pixel_keys)
        for pixel_key, count in pixel_key_counts.items():
            if count > 1:
                self._error(f"pixelKey '{pixel_key}' is used more than once in the matrix.")

        self._check_pixel_groups(matrix)

    def _check_pixel_groups(self, matrix: Matrix) -> None:
        """
        Checks that the pixel keys referenced from pixel groups exist and are
        not referenced more than once.
        """
        for pixel_group_key in matrix.pixel_group_keys:
            used_pixel_keys: set[str] = set()

            if pixel_group_key in matrix.pixel_key_positions:
                self._error(
                    f"pixelGroupKey '{pixel_group_key}' is already used as pixelKey. Please choose a different name."
                )

            for pixel_key in matrix.pixel_groups[pixel_group_key]:
                if pixel_key not in matrix.pixel_key_positions:
                    self._error(f"pixelGroup '{pixel_group_key}' references unknown pixelKey '{pixel_key}'.")
                if pixel_key in used_pixel_keys:
                    self._error(
                        f"pixelGroup '{pixel_group_key}' can't reference pixelKey '{pixel_key}' more than once."
                    )
                used_pixel_keys.add(pixel_key)

    def _check_channels(self) -> None:
        """
        Checks that availableChannels and templateChannels are defined
        correctly.
        """
        fixture = self.fixture

        if self._is_not_empty(
            self.fixture_json.get("availableChannels"), "availableChannels are empty. Add a channel or remove it."
        ):
            for channel in fixture.available_channels:
                self._check_channel(channel)

        if self._is_not_empty(
            self.fixture_json.get("templateChannels"), "templateChannels are empty. Add a channel or remove it."
        ):
            if fixture.matrix is None:
                self._error("templateChannels are defined but matrix data is missing.")
            else:
                for template_channel in fixture.template_channels:
                    self._check_template_channel(template_channel)
        elif fixture.matrix is not None:
            self._error("Matrix is defined but templateChannels are missing.")

    def _check_channel(self, channel: CoarseChannel) -> None:
        self._check_template_variables(channel.key)
        self._check_uniqueness(
            self.defined_channel_keys,
            channel.key,
            f"Channel key '{channel.key}' is already defined in another letter case.",
        )

        if FINE_CHANNEL_NAME_PATTERN.search(channel.name):
            self._error(
                f"Channel '{channel.key}' should rather be a fine channel alias of its corresponding coarse channel."
            )
        self._check_template_variables(channel.name)

        for alias in channel.fine_channel_aliases:
            self._check_template_variables(alias)
            self._check_uniqueness(
                self.defined_channel_keys,
                alias,
                f"Fine channel alias '{alias}' in channel '{channel.key}' is already defined "
                "(maybe in another letter case).",
            )

        for alias in channel.switching_channel_aliases:
            self._check_template_variables(alias)
            self._check_uniqueness(
                self.defined_channel_keys,
                alias,
                f"Switching channel alias '{alias}' in channel '{channel.key}' is already defined "
                "(maybe in another letter case).",
            )

        if not channel.has_default_value and channel.switching_channel_aliases:
            self._error(f"defaultValue is missing in channel '{channel.key}' although it defines switching channels.")

        if channel.color is not None and channel.type != "Single Color":
            self._warning(f"color in channel '{channel.key}' defined but channel type is not 'Single Color'.")
        elif channel.color is None and channel.type == "Single Color":
            self._error(f"color in channel '{channel.key}' undefined but channel type is 'Single Color'.")

        if channel.has_default_value and channel.default_value > channel.max_dmx_bound:
            self._error(f"defaultValue must be less or equal to {channel.max_dmx_bound} in channel '{channel.key}'.")

        if channel.has_highlight_value and channel.highlight_value > channel.max_dmx_bound:
            self._error(f"highlightValue must be less or equal to {channel.max_dmx_bound} in channel '{channel.key}'.")

        self._check_capabilities(channel, self._get_min_used_fineness(channel))

    def _check_template_channel(self, channel: CoarseChannel) -> None:
        """
        Template channel keys and aliases must contain the pixel key variable
        so every expansion gets a distinct key.
        """
        for key in [channel.key, *channel.fine_channel_aliases, *channel.switching_channel_aliases]:
            self._check_template_variables(key, required=[PIXEL_KEY])
            self._check_uniqueness(
                self.defined_template_channel_keys,
                key,
                f"Template channel key '{key}' is already defined (maybe in another letter case).",
            )

        self._check_template_variables(channel.name, allowed=[PIXEL_KEY])
        self._check_capabilities(channel, channel.max_fineness, check_switch_targets=False)

    def _get_min_used_fineness(self, channel: CoarseChannel) -> int:
        """
        :return: The smallest fineness the channel is used with in a mode, the
                 channel's highest fineness if it's not used at all.
        """
        finenesses = [
            fineness for mode in self.fixture.modes if (fineness := channel.get_fineness_in_mode(mode)) != -1
        ]
        return min(finenesses, default=channel.max_fineness)

    def _check_template_variables(
        self, string: str, required: list[str] | None = None, allowed: list[str] | None = None
    ) -> None:
        """
        Checks that the string contains only allowed and all required
        variables.
        :param string: The string to be checked.
        :param required: Variables (with leading dollar sign) that must be
                         included in the string.
        :param allowed: Variables that may be included in the string; required
                        variables are automatically allowed.
        """
        required = required or []
        allowed = [*(allowed or []), *required]

        variables = TEMPLATE_VARIABLE_PATTERN.findall(string)
        for variable in variables:
            if variable not in allowed:
                self._error(f"Variable {variable} not allowed in '{string}'")
        for variable in required:
            if variable not in variables:
                self._error(f"Variable {variable} missing in '{string}'")

    def _check_capabilities(
        self, channel: CoarseChannel, min_used_fineness: int, check_switch_targets: bool = True
    ) -> None:
        """
        :param channel: The channel whose capabilities to check.
        :param min_used_fineness: The smallest fineness the channel is used
                                  with in a mode. Capabilities must still be
                                  distinguishable in that fineness.
        :param check_switch_targets: Whether the switched channel keys can be
                                     looked up in the fixture.
        """
        if channel.declared_fineness > channel.max_fineness:
            self._error(
                f"dmxValueResolution {channel.json_object['dmxValueResolution']} in channel '{channel.key}' "
                f"needs at least {channel.declared_fineness} fine channel alias(es)."
            )
            return

        if not channel.has_capabilities:
            return

        ranges_invalid = False

        for index, capability in enumerate(channel.capabilities):
            # if one of the previous capabilities had an invalid range,
            # it doesn't make sense to check later ranges
            if not ranges_invalid:
                ranges_invalid = not self._check_range(channel, index, min_used_fineness)

            self._check_wheel_references(channel, index)

            switching_channel_aliases = list(capability.switch_channels)
            if switching_channel_aliases != channel.switching_channel_aliases:
                self._error(
                    f"Capability '{capability.name}' (#{index + 1}) must define the same switching channel aliases "
                    f"as all other capabilities in channel '{channel.key}'."
                )
            elif check_switch_targets:
                for alias in switching_channel_aliases:
                    channel_key = capability.switch_channels[alias]
                    self.used_channel_keys.add(channel_key.lower())

                    if self.fixture.get_channel_by_key(channel_key) is None:
                        self._error(
                            f"Channel '{channel_key}' is referenced from capability '{capability.name}' "
                            f"(#{index + 1}) in channel '{channel.key}' but is not defined."
                        )

        if not ranges_invalid and min_used_fineness < channel.declared_fineness:
            self._check_ranges_distinguishable(channel, min_used_fineness)

    def _check_range(self, channel: CoarseChannel, index: int, min_used_fineness: int) -> bool:
        """
        Checks that a capability's range, as declared, is valid.
        :param channel: The channel the capability belongs to.
        :param index: The number of the capability in the channel, starting
                      with 0.
        :param min_used_fineness: The smallest fineness the channel is used
                                  with in a mode. The last range may end at
                                  the highest DMX value of any fineness up to
                                  this one.
        :return: Whether the range is valid.
        """
        capability = channel.capabilities[index]
        dmx_range = capability.raw_dmx_range

        if index == 0 and dmx_range.start != 0:
            self._error(
                f"The first range has to start at 0 in capability '{capability.name}' (#{index + 1}) "
                f"in channel '{channel.key}'."
            )
            return False

        if dmx_range.start > dmx_range.end:
            self._error(
                f"range invalid in capability '{capability.name}' (#{index + 1}) in channel '{channel.key}'."
            )
            return False

        if index > 0:
            previous = channel.capabilities[index - 1]
            if dmx_range.start != previous.raw_dmx_range.end + 1:
                self._error(
                    f"ranges must be adjacent in capabilities '{previous.name}' (#{index}) and "
                    f"'{capability.name}' (#{index + 1}) in channel '{channel.key}'."
                )
                return False

        if index == len(channel.capabilities) - 1:
            possible_end_values = get_possible_end_values(channel, min_used_fineness)
            if dmx_range.end not in possible_end_values:
                self._error(
                    f"The last range has to end at {' or '.join(map(str, possible_end_values))} in capability "
                    f"'{capability.name}' (#{index + 1}) in channel '{channel.key}'."
                )
                return False

        return True

    def _check_ranges_distinguishable(self, channel: CoarseChannel, fineness: int) -> None:
        """
        A channel declared in a finer resolution than it's used with in a mode
        must not have two capabilities that scale down to the same DMX value.
        """
        capabilities = channel.capabilities
        for index in range(1, len(capabilities)):
            previous = capabilities[index - 1].get_dmx_range_with_fineness(fineness)
            current = capabilities[index].get_dmx_range_with_fineness(fineness)
            if previous.end >= current.start:
                self._error(
                    f"Capabilities '{capabilities[index - 1].name}' (#{index}) and '{capabilities[index].name}' "
                    f"(#{index + 1}) in channel '{channel.key}' overlap when used with fineness {fineness} in a mode."
                )

    def _check_wheel_references(self, channel: CoarseChannel, index: int) -> None:
        capability = channel.capabilities[index]
        for wheel_name in capability.wheels:
            if self.fixture.get_wheel_by_name(wheel_name) is None:
                self._error(
                    f"Capability '{capability.name}' (#{index + 1}) in channel '{channel.key}' references "
                    f"wheel '{wheel_name}' which is not defined."
                )

    def _check_mode(self, mode: Mode) -> None:
        self._check_uniqueness(
            self.mode_names, mode.name, f"Mode name '{mode.short_name}' not unique (test is not case-sensitive)."
        )
        self._check_uniqueness(
            self.mode_short_names,
            mode.short_name,
            f"Mode shortName '{mode.short_name}' not unique (test is not case-sensitive).",
        )

        if MODE_WORD_PATTERN.search(mode.name) or MODE_WORD_PATTERN.search(mode.short_name):
            self._error(f"Mode name and shortName must not contain the word 'mode' in mode '{mode.short_name}'.")

        if mode.rdm_personality_index is not None and self.fixture.rdm is None:
            self._error(f"Mode '{mode.short_name}' has an rdmPersonalityIndex although the fixture has no rdm data.")

        self._check_physical(mode.physical_override, f" in mode '{mode.short_name}'")

        mode_channel_key_count: Counter[str] = Counter()
        for channel_reference in mode.json_object["channels"]:
            self._check_mode_channel_reference(channel_reference, mode, mode_channel_key_count)

        duplicate_channel_references = [key for key, count in mode_channel_key_count.items() if count > 1]
        if duplicate_channel_references:
            self._error(
                f"Channels {','.join(duplicate_channel_references)} are used more than once "
                f"in mode '{mode.short_name}'."
            )

    def _check_mode_channel_reference(
        self, channel_reference: str | dict | None, mode: Mode, mode_channel_key_count: Counter[str]
    ) -> None:
        # unused DMX slot
        if channel_reference is None:
            return

        if isinstance(channel_reference, dict):
            self._check_matrix_insert_block(channel_reference, mode, mode_channel_key_count)
            return

        self._check_mode_channel_key(channel_reference, mode, mode_channel_key_count)

    def _check_mode_channel_key(self, channel_key: str, mode: Mode, mode_channel_key_count: Counter[str]) -> None:
        channel = self.fixture.get_channel_by_key(channel_key)
        if channel is None:
            self._error(f"Channel '{channel_key}' is referenced from mode '{mode.short_name}' but is not defined.")
            return

        self.used_channel_keys.add(channel.key.lower())
        mode_channel_key_count[channel.key] += 1

        if channel.role is ChannelRole.SWITCHING:
            self._check_switching_channel_reference(channel, mode, mode_channel_key_count)
            return

        if channel.role is ChannelRole.FINE:
            self._check_coarser_channels_in_mode(channel, mode)
            return

        if channel.type in ("Pan", "Tilt"):
            self._check_pan_tilt_max_in_physical(channel, mode)

    def _check_matrix_insert_block(
        self, insert_block_json: dict[str, Any], mode: Mode, mode_channel_key_count: Counter[str]
    ) -> None:
        matrix = self.fixture.matrix
        if matrix is None:
            self._error(f"Mode '{mode.short_name}' inserts matrix channels but the fixture has no matrix.")
            return

        insert_block = MatrixChannelInsertBlock.from_json(insert_block_json)
        error_count = len(self.result.errors)

        if isinstance(insert_block.repeat_for, list):
            known_keys = set(matrix.pixel_keys) | set(matrix.pixel_group_keys)
            for pixel_key, count in Counter(insert_block.repeat_for).items():
                if pixel_key not in known_keys:
                    self._error(
                        f"Unknown pixelKey or pixelGroupKey '{pixel_key}' in repeatFor of mode '{mode.short_name}'."
                    )
                if count > 1:
                    self._error(
                        f"pixelKey or pixelGroupKey '{pixel_key}' is repeated more than once "
                        f"in mode '{mode.short_name}'."
                    )

        template_keys = {key for channel in self.fixture.template_channels for key in channel.all_template_keys}
        for template_key in insert_block.template_channels:
            if template_key is not None and template_key not in template_keys:
                self._error(
                    f"Template channel '{template_key}' is referenced from mode '{mode.short_name}' but is not defined."
                )

        if len(self.result.errors) > error_count:
            return

        for channel_key in insert_block.resolve(matrix):
            if channel_key is not None:
                self._check_mode_channel_key(channel_key, mode, mode_channel_key_count)

    def _check_switching_channel_reference(
        self, channel: SwitchingChannel, mode: Mode, mode_channel_key_count: Counter[str]
    ) -> None:
        # the mode must also contain the trigger channel
        if mode.get_channel_index(channel.trigger_channel) == -1:
            self._error(
                f"mode '{mode.short_name}' uses switching channel '{channel.key}' but is missing its trigger "
                f"channel '{channel.trigger_channel.key}'"
            )

        # if the channel can be switched to a fine channel, the mode must also contain coarser channels
        for switch_to_channel in channel.switch_to_channels:
            if switch_to_channel is None:
                # already reported where the switching channel is defined
                continue

            mode_channel_key_count[switch_to_channel.key] += 1

            if switch_to_channel.role is ChannelRole.FINE:
                self._check_coarser_channels_in_mode(switch_to_channel, mode)

    def _check_coarser_channels_in_mode(self, channel: FineChannel, mode: Mode) -> None:
        coarse_channel = channel.coarse_channel
        coarser_channel_keys = [*coarse_channel.fine_channel_aliases[: channel.fineness - 1], coarse_channel.key]

        not_in_mode = [key for key in coarser_channel_keys if mode.get_channel_index(key) == -1]
        if not_in_mode:
            self._error(
                f"Mode '{mode.short_name}' contains the fine channel '{channel.key}' but is missing its "
                f"coarser channels {','.join(not_in_mode)}."
            )

    def _check_pan_tilt_max_in_physical(self, channel: CoarseChannel, mode: Mode) -> None:
        is_pan = channel.type == "Pan"
        max_prop_display = "panMax" if is_pan else "tiltMax"

        physical = mode.physical
        max_value = None
        if physical is not None:
            max_value = physical.focus_pan_max if is_pan else physical.focus_tilt_max

        if max_value is None:
            self._warning(
                f"physical.{max_prop_display} is not defined although there's a {channel.type} channel "
                f"'{channel.key}' in mode '{mode.short_name}'."
            )
        elif max_value == 0:
            self._warning(
                f"physical.{max_prop_display} is 0 although there's a {channel.type} channel "
                f"'{channel.key}' in mode '{mode.short_name}'."
            )

    def _check_unused_channels(self) -> None:
        defined_channel_keys = dict.fromkeys(
            key
            for channel in self.fixture.available_channels
            for key in [channel.key, *channel.fine_channel_aliases, *channel.switching_channel_aliases]
        )
        unused = [key for key in defined_channel_keys if key.lower() not in self.used_channel_keys]

        if unused:
            self._warning(f"Unused channel(s): {', '.join(unused)}")
