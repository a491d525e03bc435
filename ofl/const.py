"""Constants used across the library."""

OFL_URL = "https://open-fixture-library.org"

FIXTURES_DIR_DEFAULT = "fixtures"
MANUFACTURERS_FILE = "manufacturers.json"

PIXEL_KEY = "$pixelKey"
