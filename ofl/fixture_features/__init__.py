"""
Fixture features are predicates over a resolved fixture. They tell which parts
of the fixture format a fixture makes use of, e.g. to pick a small set of
fixtures that covers every feature.
"""

from ofl.fixture_features import matrices, switching
from ofl.fixture_features.feature import FixtureFeature
from ofl.model.fixture import Fixture

FIXTURE_FEATURES: list[FixtureFeature] = [*matrices.FEATURES, *switching.FEATURES]


def get_fixture_features(fixture: Fixture) -> list[str]:
    """
    :param fixture: The fixture to check.
    :return: The ids of all features the fixture uses.
    """
    return [feature.id for feature in FIXTURE_FEATURES if feature.has_feature(fixture)]


__all__ = ["FIXTURE_FEATURES", "FixtureFeature", "get_fixture_features"]
