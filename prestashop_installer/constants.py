"""
Constants for PrestaShop download endpoints and installer configuration
"""

# Download endpoints
PRESTASHOP_WEB = "http://www.prestashop.com"
PRESTASHOP_API = "https://api.prestashop.com"

# Version feed listing channels and their branches
CHANNEL_FEED_URL = f"{PRESTASHOP_API}/xml/channel.xml"

# Direct release download (no feed lookup needed)
RELEASE_URL_TEMPLATE = f"{PRESTASHOP_WEB}/download/releases/prestashop_{{version}}.zip"

# Feed channel that holds production releases
STABLE_CHANNEL = "stable"

# Every release archive contains exactly one top-level folder with this name
ARCHIVE_ROOT_DIR = "prestashop"

# Prefix for the temporary archive and extraction folder
TEMP_PREFIX = "prestashop_"

# Default values
DEFAULT_TIMEOUT = 60

# Fixture bundles shipped in prestashop_installer/fixtures/
FIXTURE_STARWARS = "starwars"
FIXTURE_GOT = "got"
FIXTURE_TECH = "tech"

FIXTURES = [FIXTURE_STARWARS, FIXTURE_GOT, FIXTURE_TECH]

# CLI installer script inside an extracted release
CLI_INSTALL_SCRIPT = "install/index_cli.php"

# User agent
USER_AGENT = "prestashop-installer/{version} (Python)"
