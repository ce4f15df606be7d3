"""Configuration for the part compatibility MCP server."""

import os

# Server settings
HTTP_PORT = int(os.getenv("HTTP_PORT", "8080"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Scoring defaults
ACCEPTANCE_THRESHOLD = float(os.getenv("ACCEPTANCE_THRESHOLD", "0.7"))
DEFAULT_PROFILE = os.getenv("DEFAULT_PROFILE")  # Overrides per-type defaults when set

# Request limits
MAX_SPECS_PER_PART = 100
MAX_SPEC_VALUE_LENGTH = 200
