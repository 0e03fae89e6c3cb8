"""Lenient JSON reading for hand-edited task files.

Accepts ``//`` line comments, ``/* */`` block comments and trailing commas
before a closing bracket or brace. String literals are left untouched.
"""

from __future__ import annotations

import json
import re
from typing import Any

# Strings are matched first so comment markers inside them are kept.
_STRING = r'"(?:\\.|[^"\\])*"'
_COMMENT_RE = re.compile(rf"({_STRING})|//[^\n]*|/\*.*?\*/", re.DOTALL)
_TRAILING_COMMA_RE = re.compile(rf"({_STRING})|,(\s*[\]}}])")


def strip_comments(text: str) -> str:
    """Remove line and block comments outside of string literals."""
    return _COMMENT_RE.sub(lambda m: m.group(1) or "", text)


def strip_trailing_commas(text: str) -> str:
    """Remove commas that directly precede ``]`` or ``}``."""
    return _TRAILING_COMMA_RE.sub(lambda m: m.group(1) or m.group(2), text)


def loads(text: str) -> Any:
    """Parse lenient JSON text.

    Raises:
        json.JSONDecodeError: If the text is not valid once comments and
            trailing commas are removed.
    """
    return json.loads(strip_trailing_commas(strip_comments(text)))
