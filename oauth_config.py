"""
OAuth Configuration - Single Source of Truth

All credential locations and scopes defined here. Do not duplicate elsewhere.
The consent flow itself lives outside almanac; we only consume its token.
"""

import os
from pathlib import Path

# Package root (where this file lives)
_PACKAGE_ROOT = Path(__file__).parent

# Read-only is enough: almanac never mutates calendars
SCOPES = [
    'https://www.googleapis.com/auth/calendar.readonly',
]

# Raw bearer token (e.g. handed over by an MCP host that did the OAuth dance)
ACCESS_TOKEN_ENV = 'ALMANAC_ACCESS_TOKEN'

# Authorized-user token file. Absolute so it works regardless of cwd when MCP runs
TOKEN_FILE_ENV = 'ALMANAC_TOKEN_FILE'
TOKEN_FILE = Path(os.environ.get(TOKEN_FILE_ENV, _PACKAGE_ROOT / 'token.json'))
