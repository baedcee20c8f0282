"""Lexical line reader.

Splits raw text into numbered logical lines, dropping blank ones, and
classifies each line as a section keyword, a ``KEY: value`` entry or data.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional, Tuple

from ..errors import MalformedFile
from ..model.types import Section

_SECTIONS = {s.value: s for s in Section}
_BOM = "\ufeff"


@dataclass(frozen=True)
class Line:
    number: int
    text: str

    @property
    def tokens(self) -> List[str]:
        return self.text.split()

    def split_entry(self) -> Optional[Tuple[str, str]]:
        """Return ``(KEY, value)`` for ``KEY : value`` / ``KEY: value`` lines."""
        if ":" not in self.text:
            return None
        key, value = self.text.split(":", 1)
        key = key.strip()
        if not key or " " in key:
            return None
        return key.upper(), value.strip()


def iter_lines(source: Iterable[str]) -> Iterator[Line]:
    """Yield stripped, non-blank lines with 1-based physical line numbers.

    ``source`` is any iterable of physical lines (an open text file, or
    ``str.splitlines()``), so large files are never buffered whole. A
    leading byte-order mark is dropped.
    """

    for number, raw in enumerate(source, start=1):
        if number == 1:
            raw = raw.lstrip(_BOM)
        text = raw.strip()
        if text:
            yield Line(number, text)


def section_keyword(line: Line) -> Optional[Section]:
    """Return the section started by ``line`` or ``None`` for other lines.

    A keyword may be followed by a stray ``:``. Unknown ``*_SECTION`` words
    raise :class:`MalformedFile` instead of being read as data.
    """

    head = line.text.split(None, 1)[0].rstrip(":").upper()
    section = _SECTIONS.get(head)
    if section is not None:
        rest = line.text[len(head):].strip().lstrip(":").strip()
        if rest and section is not Section.EOF:
            raise MalformedFile(
                f"unexpected content after {head}: {rest!r}", line=line.number
            )
        return section
    if head.endswith("_SECTION"):
        raise MalformedFile(f"unknown section keyword {head}", line=line.number)
    return None


__all__ = ["Line", "iter_lines", "section_keyword"]
