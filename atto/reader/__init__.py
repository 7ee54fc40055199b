from atto.reader.lexer import Position, Token, TokenKind, lex
from atto.reader.parser import TokenStream, parse, parse_file
