from __future__ import annotations
import os
from pathlib import Path

# where imported dictionaries live (one snapshot per language pair)
APP_DIR_NAME = "dictcc-cli"
_xdg = os.environ.get("XDG_DATA_HOME") or os.path.join(os.path.expanduser("~"), ".local", "share")
DATA_DIR = Path(os.environ.get("DICTCC_DATA_DIR") or os.path.join(_xdg, APP_DIR_NAME))

# import file
ENCODING = "utf-8"
FIELD_LEN = 4          # source, target, word classes, subject labels
MIN_FIELD_LEN = 2
PROGRESS_EVERY_LINES = 50_000

# parser
MAX_NESTING = 64

# persisted snapshot format
SCHEMA_VERSION = 1
SNAPSHOT_SUFFIX = ".sqlite"

# search defaults
DEFAULT_DISTANCE = 0
DEFAULT_MIN_SIMILARITY = 0
MAX_SIMILARITY = 1000

# completion: "list" shows every candidate, "circular" steps through them
COMPLETION_TYPES = ("list", "circular")
DEFAULT_COMPLETION_TYPE = "list"

# Progress logging (set DICTCC_VERBOSE=1 to enable)
VERBOSE = os.environ.get("DICTCC_VERBOSE") == "1"
