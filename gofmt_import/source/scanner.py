"""
Tokenizer for the prologue of a Go file (package clause and import declarations).

Only the tokens that can appear before the first top-level declaration are
recognised; anything else comes out as OTHER and ends the prologue.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterator

NEWLINE = "NEWLINE"
SPACE = "SPACE"
COMMENT = "COMMENT"
STRING = "STRING"
IDENT = "IDENT"
PUNCT = "PUNCT"
OTHER = "OTHER"

_TOKEN_RE = re.compile(
    r"""
    (?P<NEWLINE>\n)
    |(?P<SPACE>[ \t\r]+)
    |(?P<COMMENT>//[^\n]*|/\*.*?\*/)
    |(?P<STRING>"(?:[^"\\\n]|\\.)*"|`[^`]*`)
    |(?P<IDENT>[^\W\d]\w*)
    |(?P<PUNCT>[.();])
    |(?P<OTHER>.)
    """,
    re.VERBOSE | re.DOTALL,
)


@dataclass(frozen=True)
class Token:
    kind: str
    text: str
    start: int
    end: int

    def is_punct(self, ch: str) -> bool:
        return self.kind == PUNCT and self.text == ch

    def is_keyword(self, word: str) -> bool:
        return self.kind == IDENT and self.text == word

    @property
    def spans_lines(self) -> bool:
        return "\n" in self.text


def scan(source: str) -> Iterator[Token]:
    """Yield tokens lazily; callers stop reading once the prologue ends."""
    pos = 0
    size = len(source)
    while pos < size:
        m = _TOKEN_RE.match(source, pos)
        # OTHER matches any single character, so a match always exists
        kind = m.lastgroup
        yield Token(kind, m.group(), m.start(), m.end())
        pos = m.end()
