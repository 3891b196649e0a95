"""Configuration defaults and .env loading.

WHY: Build scripts call the converter from different places and want
to change the output name or the failure policy without editing
command lines. Defaults live here as plain constants so they are easy
to find and override.

HOW: python-dotenv loads the .env file on import. Each default reads
an environment variable and falls back to a hard-coded value. CLI flags
override all of these.

RULES:
- TMX2C_OUTPUT: output header file name, created in the working directory
- TMX2C_LENIENT: keep going with an empty map on malformed XML
- TMX2C_FAIL_FAST: abort the batch at the first failed input
- TMX2C_LOG_LEVEL: logging level name (DEBUG, INFO, WARNING, ...)
- Boolean variables accept true/1/yes/on (case-insensitive)
"""

from __future__ import annotations

import os

from dotenv import load_dotenv

# Load .env from the project root (where the script is run from)
load_dotenv()

_TRUE_VALUES = frozenset({"true", "1", "yes", "on"})


def env_flag(name: str, default: bool = False) -> bool:
    """Read a boolean switch from the environment.

    RULES:
    - Unset or blank variables return ``default``
    - Any value outside the accepted truthy set is False
    """
    raw = os.getenv(name, "").strip().lower()
    if not raw:
        return default
    return raw in _TRUE_VALUES


DEFAULT_OUTPUT_FILENAME = os.getenv("TMX2C_OUTPUT", "out.h")
DEFAULT_LENIENT = env_flag("TMX2C_LENIENT")
DEFAULT_FAIL_FAST = env_flag("TMX2C_FAIL_FAST")
DEFAULT_LOG_LEVEL = os.getenv("TMX2C_LOG_LEVEL", "INFO").upper()

TMX_SUFFIXES: set[str] = {".tmx", ".xml"}
"""File extensions recognised as map documents. Others are still converted, with a debug note."""
