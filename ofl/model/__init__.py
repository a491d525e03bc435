"""
Model classes of the fixture format. Everything is derived lazily from the
fixture's JSON data.
"""

from ofl.model.capability import Capability, DmxValueResolution, MenuClick
from ofl.model.channel import AbstractChannel, ChannelRole, CoarseChannel, FineChannel, NullChannel, SwitchingChannel
from ofl.model.entity import Entity, parse_entity
from ofl.model.exceptions import FixtureConfigurationError, FixtureError, InvariantViolation
from ofl.model.fixture import Fixture
from ofl.model.manufacturer import Manufacturer
from ofl.model.matrix import Matrix
from ofl.model.meta import Meta
from ofl.model.mode import ChannelOrder, MatrixChannelInsertBlock, Mode, RepeatFor
from ofl.model.physical import Physical
from ofl.model.range import Range
from ofl.model.template_channel import TemplateChannel
from ofl.model.wheel import Wheel, WheelSlot

__all__ = [
    "AbstractChannel",
    "Capability",
    "ChannelOrder",
    "ChannelRole",
    "CoarseChannel",
    "DmxValueResolution",
    "Entity",
    "FineChannel",
    "Fixture",
    "FixtureConfigurationError",
    "FixtureError",
    "InvariantViolation",
    "Manufacturer",
    "MatrixChannelInsertBlock",
    "Matrix",
    "MenuClick",
    "Meta",
    "Mode",
    "NullChannel",
    "Physical",
    "Range",
    "RepeatFor",
    "SwitchingChannel",
    "TemplateChannel",
    "Wheel",
    "WheelSlot",
    "parse_entity",
]
