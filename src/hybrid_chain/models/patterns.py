"""Shared regular expressions for chain files."""

from __future__ import annotations

import re

SECTION_HEADER_RE = re.compile(r"^(#{1,6})\s+(.+?)\s*$", re.MULTILINE)
STEP_ID_RE = re.compile(r"^[A-Za-z0-9_-]+$")
