"""
Frame extraction from raw interpreter trace text.

Traces arrive in the interpreter's fixed format, optionally prefixed by a line
holding the language version of the process that produced them:

    3.11
    Traceback (most recent call last):
      File "/srv/app/handler.py", line 42, in handle
        result = process(event)

Only the ``File "...", line N, in NAME`` triple is recognised; everything else
is ignored.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterator

from tracescope.invariants import boundary_normalization
from tracescope.language_version import LanguageVersion, try_parse_version

# File "/srv/app/handler.py", line 42, in handle
_PY_FRAME = re.compile(r'File "(.+)", line (\d+), in (\w+)')


@dataclass(frozen=True)
class RawFrame:
    file: str
    line: int
    function: str


@boundary_normalization
def split_version_tag(text: str) -> tuple[LanguageVersion | None, str]:
    """Strip a leading version line, if the first line is one.

    Text without a newline, or whose first line is not a dotted version, is
    returned untouched so frames on that line are still found.
    """
    head, newline, rest = text.partition("\n")
    if not newline:
        return None, text
    version = try_parse_version(head)
    if version is None:
        return None, text
    return version, rest


def iter_raw_frames(text: str) -> Iterator[RawFrame]:
    """Yield frames in the order they appear in ``text``."""
    for match in _PY_FRAME.finditer(text):
        try:
            # int() rejects digit runs longer than sys.get_int_max_str_digits().
            line = int(match.group(2))
        except ValueError:
            continue
        yield RawFrame(file=match.group(1), line=line, function=match.group(3))
