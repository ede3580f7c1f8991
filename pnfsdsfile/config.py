"""Configuration settings for pnfsdsfile."""

import os

from pnfscommon.constants import DEFAULT_XATTR_NAME


XATTR_NAME = os.environ.get("PNFSDSFILE_XATTR_NAME", DEFAULT_XATTR_NAME)

LOG_LEVEL = os.environ.get("LOG_LEVEL", "WARNING")
