"""
Structural schemas of the fixture format and the manufacturers file.

They only check the shape of the documents. Everything that needs the
resolved model (ranges, channel references, uniqueness) is left to the
validator.
"""

import voluptuous as vol

CATEGORIES = [
    "Barrel Scanner",
    "Blinder",
    "Color Changer",
    "Dimmer",
    "Effect",
    "Fan",
    "Flower",
    "Hazer",
    "Laser",
    "Matrix",
    "Moving Head",
    "Pixel Bar",
    "Scanner",
    "Smoke",
    "Stand",
    "Strobe",
    "Other",
]

CAPABILITY_TYPES = [
    "NoFunction",
    "ShutterStrobe",
    "StrobeSpeed",
    "StrobeDuration",
    "Intensity",
    "ColorIntensity",
    "ColorPreset",
    "ColorTemperature",
    "Pan",
    "PanContinuous",
    "Tilt",
    "TiltContinuous",
    "PanTiltSpeed",
    "WheelSlot",
    "WheelShake",
    "WheelSlotRotation",
    "WheelRotation",
    "Effect",
    "EffectSpeed",
    "EffectDuration",
    "EffectParameter",
    "SoundSensitivity",
    "BeamAngle",
    "BeamPosition",
    "Focus",
    "Zoom",
    "Iris",
    "IrisEffect",
    "Frost",
    "FrostEffect",
    "Prism",
    "PrismRotation",
    "BladeInsertion",
    "BladeRotation",
    "BladeSystemRotation",
    "Fog",
    "FogOutput",
    "FogType",
    "Rotation",
    "Speed",
    "Time",
    "Maintenance",
    "Generic",
]

WHEEL_SLOT_TYPES = [
    "Open",
    "Closed",
    "Color",
    "Gobo",
    "Prism",
    "Iris",
    "Frost",
    "AnimationGoboStart",
    "AnimationGoboEnd",
]

REPEAT_FOR = [
    "eachPixelABC",
    "eachPixelXYZ",
    "eachPixelXZY",
    "eachPixelYXZ",
    "eachPixelYZX",
    "eachPixelZXY",
    "eachPixelZYX",
    "eachPixelGroup",
]

ISO_DATE = vol.Match(r"^\d{4}-\d{2}-\d{2}$", msg="expected a date formatted as YYYY-MM-DD")
PERCENT = vol.Match(r"^-?\d+(\.\d+)?%$", msg="expected a percentage like '50%'")
DMX_VALUE = vol.Any(vol.All(int, vol.Range(min=0)), PERCENT)
NON_EMPTY_STRING = vol.All(str, vol.Length(min=1))


def dmx_range(value):
    """Validates a `[start, end]` pair of non-negative integers."""
    if not isinstance(value, list) or len(value) != 2:
        raise vol.Invalid(f"Not a DMX range: {value}")
    for number in value:
        if isinstance(number, bool) or not isinstance(number, int) or number < 0:
            raise vol.Invalid(f"DMX range values must be non-negative integers, got: {number}")
    return value


def exactly_one_of(*keys: str):
    """
    :param keys: Property names of which exactly one must be present.
    :return: A validator for dictionaries.
    """

    def validator(value):
        present = [key for key in keys if key in value]
        if len(present) != 1:
            raise vol.Invalid(f"Expected exactly one of {', '.join(keys)}, got: {present or 'none'}")
        return value

    return validator


META_SCHEMA = vol.Schema(
    {
        vol.Required("authors"): vol.All([NON_EMPTY_STRING], vol.Length(min=1)),
        vol.Required("createDate"): ISO_DATE,
        vol.Required("lastModifyDate"): ISO_DATE,
        vol.Optional("importPlugin"): vol.Schema(
            {
                vol.Required("plugin"): str,
                vol.Required("date"): ISO_DATE,
                vol.Optional("comment"): str,
            }
        ),
    }
)

PHYSICAL_SCHEMA = vol.Schema(
    {
        vol.Optional("dimensions"): vol.All([vol.All(vol.Any(int, float), vol.Range(min=0))], vol.Length(min=3, max=3)),
        vol.Optional("weight"): vol.All(vol.Any(int, float), vol.Range(min=0)),
        vol.Optional("power"): vol.All(vol.Any(int, float), vol.Range(min=0)),
        vol.Optional("DMXconnector"): str,
        vol.Optional("bulb"): vol.Schema(
            {
                vol.Optional("type"): str,
                vol.Optional("colorTemperature"): vol.Any(int, float),
                vol.Optional("lumens"): vol.Any(int, float),
            }
        ),
        vol.Optional("lens"): vol.Schema(
            {
                vol.Optional("name"): str,
                vol.Optional("degreesMinMax"): vol.All([vol.Any(int, float)], vol.Length(min=2, max=2)),
            }
        ),
        vol.Optional("focus"): vol.Schema(
            {
                vol.Optional("type"): str,
                vol.Optional("panMax"): vol.Any(int, float, "infinite"),
                vol.Optional("tiltMax"): vol.Any(int, float, "infinite"),
            }
        ),
        vol.Optional("matrixPixels"): vol.Schema(
            {
                vol.Optional("dimensions"): vol.All([vol.Any(int, float)], vol.Length(min=3, max=3)),
                vol.Optional("spacing"): vol.All([vol.Any(int, float)], vol.Length(min=3, max=3)),
            }
        ),
    }
)

PIXEL_GROUP_CONSTRAINTS_SCHEMA = vol.Schema(
    {
        vol.Optional("x"): [str],
        vol.Optional("y"): [str],
        vol.Optional("z"): [str],
        vol.Optional("name"): [str],
    }
)

MATRIX_SCHEMA = vol.Schema(
    {
        # defining both (or none) is reported by the validator
        vol.Optional("pixelCount"): vol.All([vol.All(int, vol.Range(min=1))], vol.Length(min=3, max=3)),
        vol.Optional("pixelKeys"): [[[vol.Any(None, NON_EMPTY_STRING)]]],
        vol.Optional("pixelGroups"): {
            str: vol.Any("all", [NON_EMPTY_STRING], PIXEL_GROUP_CONSTRAINTS_SCHEMA),
        },
    }
)

WHEEL_SCHEMA = vol.Schema(
    {
        vol.Optional("direction"): vol.In(["CW", "CCW"]),
        vol.Required("slots"): vol.All(
            [vol.Schema({vol.Required("type"): vol.In(WHEEL_SLOT_TYPES)}, extra=vol.ALLOW_EXTRA)],
            vol.Length(min=1),
        ),
    }
)

CAPABILITY_SCHEMA = vol.Schema(
    {
        vol.Optional("dmxRange"): dmx_range,
        vol.Required("type"): vol.In(CAPABILITY_TYPES),
        vol.Optional("comment"): str,
        vol.Optional("helpWanted"): str,
        vol.Optional("menuClick"): vol.In(["start", "center", "end", "hidden"]),
        vol.Optional("switchChannels"): {str: str},
    },
    extra=vol.ALLOW_EXTRA,
)

CAPABILITIES_ITEM_SCHEMA = vol.All(
    CAPABILITY_SCHEMA,
    vol.Schema({vol.Required("dmxRange"): object}, extra=vol.ALLOW_EXTRA),
)

CHANNEL_SCHEMA = vol.All(
    vol.Schema(
        {
            vol.Optional("name"): NON_EMPTY_STRING,
            vol.Optional("fineChannelAliases"): [NON_EMPTY_STRING],
            vol.Optional("dmxValueResolution"): vol.In(["8bit", "16bit", "24bit"]),
            vol.Optional("defaultValue"): DMX_VALUE,
            vol.Optional("highlightValue"): DMX_VALUE,
            vol.Optional("constant"): bool,
            vol.Optional("crossfade"): bool,
            vol.Optional("precedence"): vol.In(["LTP", "HTP"]),
            vol.Optional("capability"): CAPABILITY_SCHEMA,
            vol.Optional("capabilities"): vol.All([CAPABILITIES_ITEM_SCHEMA], vol.Length(min=1)),
        }
    ),
    exactly_one_of("capability", "capabilities"),
)

INSERT_BLOCK_SCHEMA = vol.Schema(
    {
        vol.Required("insert"): "matrixChannels",
        vol.Required("repeatFor"): vol.Any(vol.In(REPEAT_FOR), vol.All([NON_EMPTY_STRING], vol.Length(min=1))),
        vol.Required("channelOrder"): vol.In(["perPixel", "perChannel"]),
        vol.Required("templateChannels"): vol.All([vol.Any(None, NON_EMPTY_STRING)], vol.Length(min=1)),
    }
)

MODE_SCHEMA = vol.Schema(
    {
        vol.Required("name"): NON_EMPTY_STRING,
        vol.Optional("shortName"): NON_EMPTY_STRING,
        vol.Optional("rdmPersonalityIndex"): vol.All(int, vol.Range(min=1)),
        vol.Optional("physical"): PHYSICAL_SCHEMA,
        vol.Required("channels"): vol.All([vol.Any(None, NON_EMPTY_STRING, INSERT_BLOCK_SCHEMA)], vol.Length(min=1)),
    }
)

FIXTURE_SCHEMA = vol.Schema(
    {
        vol.Optional("$schema"): str,
        vol.Required("name"): NON_EMPTY_STRING,
        vol.Optional("shortName"): NON_EMPTY_STRING,
        vol.Required("categories"): vol.All([vol.In(CATEGORIES)], vol.Length(min=1)),
        vol.Required("meta"): META_SCHEMA,
        vol.Optional("comment"): NON_EMPTY_STRING,
        vol.Optional("links"): {str: [str]},
        vol.Optional("helpWanted"): NON_EMPTY_STRING,
        vol.Optional("rdm"): vol.Schema(
            {
                vol.Required("modelId"): vol.All(int, vol.Range(min=0)),
                vol.Optional("softwareVersion"): str,
            }
        ),
        vol.Optional("physical"): PHYSICAL_SCHEMA,
        vol.Optional("matrix"): MATRIX_SCHEMA,
        vol.Optional("wheels"): {str: WHEEL_SCHEMA},
        vol.Optional("availableChannels"): {str: CHANNEL_SCHEMA},
        vol.Optional("templateChannels"): {str: CHANNEL_SCHEMA},
        vol.Required("modes"): vol.All([MODE_SCHEMA], vol.Length(min=1)),
    }
)

MANUFACTURER_SCHEMA = vol.Schema(
    {
        vol.Required("name"): NON_EMPTY_STRING,
        vol.Optional("comment"): str,
        vol.Optional("website"): vol.Url(),
        vol.Optional("rdmId"): vol.All(int, vol.Range(min=0)),
    }
)

MANUFACTURERS_SCHEMA = vol.Schema(
    {
        vol.Optional("$schema"): str,
        vol.Match(r"^[a-z0-9\-]+$"): MANUFACTURER_SCHEMA,
    }
)
