"""Local configuration for flagdoc."""

from __future__ import annotations

import os


DEFAULT_REQUIRE_FLAGS = "false"
DEFAULT_MAX_DEPTH = 64
DEFAULT_LOG_LEVEL = "WARNING"

# Placeholder substituted for a stripped flag prefix. Renderers match on it.
PLACEHOLDER = "<prefix>"
FLAG_SEPARATOR = "."

FLAGDOC_REQUIRE_FLAGS = os.getenv("FLAGDOC_REQUIRE_FLAGS", DEFAULT_REQUIRE_FLAGS).lower() in {"1", "true", "yes"}
FLAGDOC_MAX_DEPTH = int(os.getenv("FLAGDOC_MAX_DEPTH", str(DEFAULT_MAX_DEPTH)))
FLAGDOC_LOG_LEVEL = os.getenv("FLAGDOC_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()
