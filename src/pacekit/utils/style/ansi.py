"""ANSI color codes for console status lines.

Usage::

    from pacekit.utils.style import ansi
    print(f"{ansi.green}done{ansi.reset}")

Colors collapse to empty strings when ``NO_COLOR`` is set or stdout is not a
terminal, so piped output stays clean.
"""

import os
import sys


def _enabled() -> bool:
    if os.environ.get("NO_COLOR"):
        return False
    return hasattr(sys.stdout, "isatty") and sys.stdout.isatty()


def _code(seq: str) -> str:
    return f"\033[{seq}m" if _enabled() else ""


reset = _code("0")
bold = _code("1")
red = _code("31")
green = _code("32")
yellow = _code("33")
blue = _code("34")
magenta = _code("35")
cyan = _code("36")
grey = _code("90")
