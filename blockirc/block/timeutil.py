"""Wall-clock helpers."""

from __future__ import annotations

import time


def now() -> int:
    """Return the current time in whole seconds since the Unix epoch."""
    return int(time.time())