"""
Open Fixture Library: a community-maintained collection of DMX fixture
definitions and the model that resolves them.
"""

from ofl.const import OFL_URL

__version__ = "0.1.0"

__all__ = ["OFL_URL", "__version__"]
