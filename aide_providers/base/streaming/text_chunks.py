"""Word-level chunking used to pace simulated text deltas."""

from __future__ import annotations

import re
from typing import List

_WORD_RE = re.compile(r"(\S+)(\s*)")
_LEADING_WS_RE = re.compile(r"^\s*")


def split_into_words(text: str) -> List[str]:
    """Split ``text`` into ``word + trailing whitespace`` chunks.

    Joining the result reproduces ``text`` exactly. Leading whitespace is
    folded into the first chunk; whitespace-only text yields a single chunk.
    """
    if not text:
        return []
    leading = _LEADING_WS_RE.match(text).group(0)
    chunks = [m.group(1) + m.group(2) for m in _WORD_RE.finditer(text)]
    if not chunks:
        return [text]
    if leading:
        chunks[0] = leading + chunks[0]
    return chunks


__all__ = ["split_into_words"]
