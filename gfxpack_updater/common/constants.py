"""
Constants for the graphic packs updater.
"""

import re

RELEASES_URL = 'https://github.com/slashiee/cemu_graphic_packs/releases'
LATEST_RELEASE_SUFFIX = '/latest'

EXTRACT_DIR = 'graphicPacks'
DOWNLOAD_DIR = '.'

# Packs matched by name against extracted paths. See SafeExtractor.should_extract.
DEFAULT_PACK_FILTER = (
    'BreathOfTheWild',
    'MarioKart8',
    'SuperMario3DWorld',
)

# First release asset link on the page; the newest release is listed first.
# Stops at quotes, whitespace and markup so anchor text is never included.
ASSET_PATH_PATTERN = re.compile(r'/download/[^/"\'\s<>]+/graphicPacks[^/"\'\s<>]*\.zip')

BANNER_TITLE = 'Graphic Packs Updater'
BANNER_RULE = '-' * 39
PROMPT_MESSAGE = "Press 'Enter' to finish..."

DOWNLOAD_CHUNK_SIZE = 64 * 1024
PARTIAL_SUFFIX = '.part'

DEFAULT_DIR_MODE = 0o777
DEFAULT_FILE_MODE = 0o666
READONLY_FILE_MODE = 0o444
