"""The fixture feature type."""

from collections.abc import Callable
from dataclasses import dataclass

from ofl.model.fixture import Fixture


@dataclass(frozen=True)
class FixtureFeature:
    """
    A named check whether a fixture uses some part of the fixture format.
    """

    id: str  # pylint: disable=invalid-name
    name: str
    description: str
    has_feature: Callable[[Fixture], bool]
