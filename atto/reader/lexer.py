"""
  atto Lexer

- Streaming: `lex` is a generator, tokens are produced on demand
- One forward pass, no backtracking, no recovery after an error

   Token kinds:

    - bare words    -> TokenKind.BARE     (a-word, 42, Schönen)
    - "..."         -> TokenKind.QUOTED   (backslash escapes decoded)
    - #"..."#       -> TokenKind.GUARDED  (raw, may contain literal ")
    - ( ) :         -> LPAREN, RPAREN, COLON
    - # to newline  -> TokenKind.COMMENT  (skipped by the parser)

   A '#' directly followed by '"' opens a guarded string; any other '#'
   opens a comment.
"""

from __future__ import annotations

import re
from bisect import bisect_right
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Union

from atto.errors import InvalidCharacter, UnterminatedGuardedString, UnterminatedString


class TokenKind(Enum):
    BARE = "bare"
    QUOTED = "quoted"
    GUARDED = "guarded"
    LPAREN = "("
    RPAREN = ")"
    COLON = ":"
    COMMENT = "comment"


@dataclass(frozen=True)
class Position:
    offset: int  # zero-based UTF-8 byte offset
    line: int
    column: int

    def __str__(self) -> str:
        return f"{self.line}:{self.column}"


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    text: str
    position: Position


TOKEN_RE = re.compile(
    r"(?P<whitespace>\s+)"
    r'|(?P<guarded>#")'  # guarded string start, checked before comments
    r"|(?P<comment>#[^\n]*)"  # single-line comment
    r"|(?P<lparen>\()"
    r"|(?P<rparen>\))"
    r"|(?P<colon>:)"
    r'|(?P<quoted>")'  # quoted string start
    r'|(?P<bare>[^\s():"#\\\x00-\x1f\x7f]+)'
)

STRING_PART_RE = re.compile(r'[^"\\]*')

ESCAPE_RE = re.compile(
    r"\\(?:"
    r'(?P<simple>[ "\\enrt0])'
    r"|x(?P<hex>[0-9a-fA-F]{2})"
    r"|u\{(?P<unicode>[0-9a-fA-F]{2,8})\}"
    r")"
)

SIMPLE_ESCAPES: dict[str, str] = {
    " ": " ",
    '"': '"',
    "\\": "\\",
    "e": "\x1b",
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "0": "\0",
}

GUARD_OPEN = '#"'
GUARD_CLOSE = '"#'


class Locator:
    """Maps character offsets in decoded text to Positions.

    The Position offset counts UTF-8 bytes from the start of the input; line
    and column are one-based and count characters.
    """

    def __init__(self, source: str):
        self.source = source
        self.line_starts = [0]
        self.line_starts.extend(m.end() for m in re.finditer("\n", source))
        self.line_bytes = None
        if not source.isascii():
            self.line_bytes = [0]
            for start, end in zip(self.line_starts, self.line_starts[1:]):
                self.line_bytes.append(self.line_bytes[-1] + _utf8_len(source[start:end]))

    def __call__(self, offset: int) -> Position:
        line = bisect_right(self.line_starts, offset)
        start = self.line_starts[line - 1]
        if self.line_bytes is None:
            byte_offset = offset
        else:
            byte_offset = self.line_bytes[line - 1] + _utf8_len(self.source[start:offset])
        return Position(byte_offset, line, offset - start + 1)


def _utf8_len(text: str) -> int:
    return len(text.encode("utf-8", "surrogatepass"))


def decode_source(source: Union[str, bytes]) -> str:
    """Return `source` as text, decoding bytes as UTF-8."""
    if isinstance(source, str):
        return source
    try:
        return bytes(source).decode("utf-8")
    except UnicodeDecodeError as err:
        prefix = bytes(source[: err.start]).decode("utf-8")
        locate = Locator(prefix)
        raise InvalidCharacter(
            f"Invalid UTF-8 byte {source[err.start]:#04x}", locate(len(prefix))
        ) from None


def read_escape(source: str, pos: int, locate: Locator) -> tuple[str, int]:
    """Decode the escape sequence starting at the backslash at `pos`."""
    m = ESCAPE_RE.match(source, pos)
    if m is None:
        raise InvalidCharacter(
            f"Invalid escape sequence {source[pos:pos + 2]!r}", locate(pos)
        )
    if m.group("simple") is not None:
        return SIMPLE_ESCAPES[m.group("simple")], m.end()
    code = int(m.group("hex") or m.group("unicode"), 16)
    if code > 0x10FFFF:
        raise InvalidCharacter(f"Escape {m.group()!r} is out of range", locate(pos))
    return chr(code), m.end()


def read_quoted(source: str, start: int, locate: Locator) -> tuple[str, int]:
    """Read a "..." string whose opening quote is at `start`.

    Returns the decoded text and the offset just past the closing quote.
    """
    n = len(source)
    pos = start + 1
    parts: list[str] = []
    while True:
        m = STRING_PART_RE.match(source, pos)
        parts.append(m.group())
        pos = m.end()
        if pos >= n:
            raise UnterminatedString("Unterminated string", locate(start))
        if source[pos] == '"':
            return "".join(parts), pos + 1
        if pos + 1 >= n:
            raise UnterminatedString("Unterminated string", locate(start))
        text, pos = read_escape(source, pos, locate)
        parts.append(text)


def read_guarded(source: str, start: int, locate: Locator) -> tuple[str, int]:
    """Read a #"..."# string whose opener is at `start`; content is verbatim."""
    content_start = start + len(GUARD_OPEN)
    end = source.find(GUARD_CLOSE, content_start)
    if end < 0:
        raise UnterminatedGuardedString("Unterminated guarded string", locate(start))
    return source[content_start:end], end + len(GUARD_CLOSE)


def lex(source: Union[str, bytes]) -> Iterator[Token]:
    """Token generator: yields Token values until the input is exhausted."""
    source = decode_source(source)
    locate = Locator(source)
    pos = 0
    n = len(source)

    while pos < n:
        m = TOKEN_RE.match(source, pos)
        if m is None:
            raise InvalidCharacter(f"Unexpected character {source[pos]!r}", locate(pos))

        kind = m.lastgroup
        if kind == "whitespace":
            pos = m.end()
            continue

        position = locate(pos)
        if kind == "guarded":
            text, pos = read_guarded(source, pos, locate)
            yield Token(TokenKind.GUARDED, text, position)
        elif kind == "quoted":
            text, pos = read_quoted(source, pos, locate)
            yield Token(TokenKind.QUOTED, text, position)
        elif kind == "comment":
            pos = m.end()
            yield Token(TokenKind.COMMENT, m.group()[1:].rstrip("\r"), position)
        elif kind == "bare":
            pos = m.end()
            yield Token(TokenKind.BARE, m.group(), position)
        else:
            pos = m.end()
            yield Token(TokenKind(m.group()), m.group(), position)
