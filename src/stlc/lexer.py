import dataclasses
import re
from typing import Iterator

TOKEN = re.compile(
    r"""
    (?P<whitespace> \s+ )
  | (?P<string> "[^"]*" )
  | (?P<identifier> [A-Za-z_][A-Za-z0-9_']* )
  | (?P<number> [0-9]+ )
  | (?P<symbol> -> | [().:=,*{}\[\]] )
    """,
    re.VERBOSE,
)


@dataclasses.dataclass
class LexicalError(Exception):
    char: str
    pos: int

    def __str__(self):
        return f"unexpected character {self.char!r} at position {self.pos}"


def tokens(src: str) -> Iterator[str]:
    pos = 0
    while pos < len(src):
        m = TOKEN.match(src, pos)
        if m is None:
            raise LexicalError(src[pos], pos)
        if m.lastgroup != "whitespace":
            yield m.group()
        pos = m.end()


def check_characters(src: str):
    """Raise LexicalError at the first character no token can start with."""
    for _ in tokens(src):
        pass
