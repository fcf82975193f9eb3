"""program_constants.py

The `program_constants` module. The values in this file are all *at least*
constant during a single run of the program, though the directories will
vary between installations and operating systems.
"""

from dataclasses import dataclass
from importlib.metadata import PackageNotFoundError, version
from logging import WARNING

import platformdirs

# The name is needed both in PROGRAM_CONSTANTS and to look up the version
# in package metadata, so it is defined first.
_name = "pnf-router-cli"

try:
    _version = version(_name)
except PackageNotFoundError:
    # Running from a source checkout that was never installed.
    _version = "0.0.0"


@dataclass(frozen=True)
class PROGRAM_CONSTANTS:
    NAME: str = _name
    """The name of the program. This is used when creating directory
    structures using `platformdirs`"""

    AUTHOR: str = "PNF"
    """The author/publisher of the program."""

    VERSION: str = _version
    """The current version of the program, as read from package metadata."""

    DEFAULT_HOSTNAME: str = "Router"
    """Hostname used when no saved configuration exists."""

    DEFAULT_DOMAIN: str = "default_domain"
    """Domain used to name crypto keys when `ip domain-name` is unset."""


DEFAULT_LOG_DIR = platformdirs.user_log_path(appname="PNF", ensure_exists=True)
DEFAULT_DATA_DIR = platformdirs.user_data_path(appname="PNF", ensure_exists=True)

DEFAULT_LOG_FILE = DEFAULT_LOG_DIR / "router.log"
DEFAULT_LOG_LEVEL = WARNING

DEFAULT_CONFIG_FILE = DEFAULT_DATA_DIR / "startup-config.json"
DEFAULT_HISTORY_FILE = DEFAULT_DATA_DIR / "history.txt"
