"""
Runtime limits, overridable through the environment.
"""

import os

# Grids larger than this are aligned with Myers' linear-space diff instead
MAX_GRID_CELLS = int(os.environ.get("REVDIFF_MAX_GRID_CELLS", "4000000"))

# Seconds the Myers path may spend refining before it settles for a coarser diff.
# 0 disables the deadline and leaves large dissimilar inputs unbounded
DIFF_TIMEOUT = float(os.environ.get("REVDIFF_DIFF_TIMEOUT", "1.0"))

# Largest text accepted by the CLI and the MCP server, per side
MAX_INPUT_CHARS = int(os.environ.get("REVDIFF_MAX_INPUT_CHARS", "200000"))

SERVER_NAME = os.environ.get("REVDIFF_SERVER_NAME", "Revdiff Alignment Service")


class InputTooLargeError(ValueError):
    pass


def ensure_within_limit(text: str, label: str = "text") -> str:
    if len(text) > MAX_INPUT_CHARS:
        raise InputTooLargeError(f"{label} is {len(text)} characters; the limit is {MAX_INPUT_CHARS}.")
    return text
