"""How command results are written to the terminal."""

from __future__ import annotations

import os
import sys
from collections.abc import Mapping
from enum import Enum
from typing import TextIO


class OutputMode(Enum):
    """Rendering style for command output."""

    RICH = "rich"
    PLAIN = "plain"
    JSON = "json"

    @classmethod
    def detect(
        cls,
        json: bool,
        environ: Mapping[str, str] | None = None,
        stream: TextIO | None = None,
    ) -> OutputMode:
        """Pick JSON when asked, plain when NO_COLOR is set or not on a terminal."""
        if json:
            return cls.JSON
        env = os.environ if environ is None else environ
        if "NO_COLOR" in env:
            return cls.PLAIN
        out = sys.stdout if stream is None else stream
        return cls.RICH if out.isatty() else cls.PLAIN

    def is_json(self) -> bool:
        """True when output is machine-readable JSON."""
        return self is OutputMode.JSON