"""Output filtering for terminal rendering.

Strips control characters that would confuse the browser terminal while
keeping line breaks and ANSI colour/cursor sequences.
"""

from __future__ import annotations

import re

# CSI sequence: ESC [ parameter bytes, intermediate bytes, final byte
_CSI_SEQUENCE = r"\x1b\[[\x30-\x3f]*[\x20-\x2f]*[\x40-\x7e]"

# C0 controls except LF/CR, DEL, and C1 controls
_CONTROL_CHAR = r"[\x00-\x09\x0b\x0c\x0e-\x1f\x7f-\x9f]"

_TOKEN = re.compile(f"({_CSI_SEQUENCE})|{_CONTROL_CHAR}")


def sanitize_output(text: str) -> str:
    """Remove unsafe control characters from ``text``.

    Printable ASCII, ``\\n``, ``\\r`` and non-ASCII text are kept. Complete
    CSI escape sequences survive; any other ESC is dropped along with the
    rest of the control characters.
    """
    return _TOKEN.sub(lambda m: m.group(1) or "", text)
