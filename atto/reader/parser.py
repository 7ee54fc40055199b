"""
  atto Parser

Recursive-descent reader over the token stream produced by `lex`:

    Document := Body                      -- no enclosing parens at top level
    Item     := Atom | "(" Body ")"
    Body     := MapBody | ListBody
    MapBody  := (Item ":" Item)+
    ListBody := Item*

Each Body decides List or Map on its own, with one token of lookahead after
its first Item: a ':' commits to a Map, anything else commits to a List.
Once committed a body never changes kind; mixing the two shapes is an error.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Optional, Union

from atto import Document
from atto.config import get_max_depth
from atto.errors import (
    DepthExceeded,
    ExpectedColon,
    MixedListMapEntry,
    UnclosedParen,
    UnexpectedToken,
)
from atto.reader.lexer import Position, Token, TokenKind, lex
from atto.types.value import Atom, Form, List, Map, Value

logger = logging.getLogger(__name__)

ATOM_FORMS: dict[TokenKind, Form] = {
    TokenKind.BARE: Form.BARE,
    TokenKind.QUOTED: Form.QUOTED,
    TokenKind.GUARDED: Form.GUARDED,
}


class TokenStream:
    def __init__(self, token_iter: Iterable[Token], max_depth: Optional[int] = None):
        self.tokens = iter(token_iter)
        self.buffer: Optional[Token] = None
        self.max_depth = max_depth if max_depth is not None else get_max_depth()
        self.last_position = Position(0, 1, 1)

    def peek(self) -> Optional[Token]:
        """Next significant token without consuming it; None at end of input."""
        if self.buffer is None:
            for token in self.tokens:
                if token.kind is not TokenKind.COMMENT:
                    self.buffer = token
                    break
        return self.buffer

    def advance(self) -> Optional[Token]:
        token = self.peek()
        self.buffer = None
        if token is not None:
            self.last_position = token.position
        return token

    def peek_kind(self) -> Optional[TokenKind]:
        token = self.peek()
        return None if token is None else token.kind

    # ------------------------
    # Items
    # ------------------------
    def parse_item(self, depth: int, opener: Optional[Token] = None) -> Value:
        """Parse one Atom or parenthesized Body at nesting `depth`.

        `opener` is the '(' enclosing the current body, if any; it is
        reported when the input ends before that body is closed.
        """
        token = self.peek()
        if token is None:
            if opener is not None:
                raise UnclosedParen("Unclosed '('", opener.position)
            raise UnexpectedToken("Unexpected end of input", self.last_position)

        if token.kind in ATOM_FORMS:
            self.advance()
            return Atom(token.text, ATOM_FORMS[token.kind])

        if token.kind is TokenKind.LPAREN:
            if depth + 1 > self.max_depth:
                raise DepthExceeded(
                    f"Nesting deeper than {self.max_depth}", token.position
                )
            self.advance()
            body = self.parse_body(depth + 1, token)
            self.advance()  # consume ')'
            return body

        raise UnexpectedToken(f"Unexpected {token.text!r}", token.position)

    # ------------------------
    # Bodies
    # ------------------------
    def at_body_end(self, opener: Optional[Token]) -> bool:
        """True at the end of the current body.

        Inside parentheses the end is ')' and running out of input is an
        error. At top level the end is the end of input and a ')' is an error.
        """
        token = self.peek()
        if opener is None:
            if token is not None and token.kind is TokenKind.RPAREN:
                raise UnexpectedToken("Unexpected ')'", token.position)
            return token is None
        if token is None:
            raise UnclosedParen("Unclosed '('", opener.position)
        return token.kind is TokenKind.RPAREN

    def parse_body(self, depth: int, opener: Optional[Token] = None) -> Value:
        """Parse the contents of one body and return a List or a Map.

        The closing ')' (if any) is left in the stream for the caller.
        """
        if self.at_body_end(opener):
            return List()

        first = self.parse_item(depth, opener)
        if self.peek_kind() is TokenKind.COLON:
            logger.debug("body at depth %d committed to map", depth)
            return self.parse_map_body(first, depth, opener)
        logger.debug("body at depth %d committed to list", depth)
        return self.parse_list_body(first, depth, opener)

    def parse_list_body(self, first: Value, depth: int, opener: Optional[Token]) -> List:
        items = [first]
        while not self.at_body_end(opener):
            token = self.peek()
            if token.kind is TokenKind.COLON:
                raise MixedListMapEntry(
                    "':' inside a list; a body is either all items or all entries",
                    token.position,
                )
            items.append(self.parse_item(depth, opener))
        return List(items)

    def parse_map_body(self, first: Value, depth: int, opener: Optional[Token]) -> Map:
        entries = []
        key = first
        while True:
            self.advance()  # consume ':'
            if self.peek_kind() in (TokenKind.RPAREN, TokenKind.COLON):
                token = self.peek()
                raise UnexpectedToken(
                    f"Expected a value after ':', got {token.text!r}", token.position
                )
            entries.append((key, self.parse_item(depth, opener)))

            if self.at_body_end(opener):
                return Map(entries)
            key_token = self.peek()
            key = self.parse_item(depth, opener)
            kind = self.peek_kind()
            if kind is TokenKind.COLON:
                continue
            if kind is None or kind is TokenKind.RPAREN:
                raise ExpectedColon("Expected ':' after map key", key_token.position)
            raise MixedListMapEntry(
                "List item inside a map; a body is either all items or all entries",
                key_token.position,
            )

    def parse_document(self) -> Document:
        return self.parse_body(0)


def parse(text: Union[str, bytes], max_depth: Optional[int] = None) -> Document:
    """Parse a complete document into a List or a Map.

    Raises an AttoLexError or AttoParseError at the first problem.
    """
    return TokenStream(lex(text), max_depth=max_depth).parse_document()


def parse_file(path: Union[str, Path], encoding: str = "utf-8", max_depth: Optional[int] = None) -> Document:
    text = Path(path).read_text(encoding=encoding)
    return parse(text, max_depth=max_depth)

