"""Error taxonomy for atto.

Lexing and parsing errors carry the Position where scanning stopped;
evaluation errors carry the offending name or value. Every error is raised at
the first failure: there is no recovery and no partial tree.
"""

from __future__ import annotations

from typing import Any, Optional


class AttoError(Exception):
    """ Base class for all atto errors"""

    @property
    def kind(self) -> str:
        return type(self).__name__


class AttoSyntaxError(AttoError):
    """ Raised when text cannot be read; carries a Position"""

    def __init__(self, message: str, position=None):
        self.message = message
        self.position = position
        if position is None:
            super().__init__(message)
        else:
            super().__init__(
                f"{message} at line {position.line}, column {position.column}"
            )


# ---------------------------------
# Lexer
# ---------------------------------
class AttoLexError(AttoSyntaxError):
    """ Raised when the lexer cannot produce a token"""


class UnterminatedString(AttoLexError):
    """ Raised when the input ends inside a quoted string"""


class UnterminatedGuardedString(AttoLexError):
    """ Raised when the input ends before the closing '"#' of a guarded string"""


class InvalidCharacter(AttoLexError):
    """ Raised when a character cannot begin or continue any token"""


# ---------------------------------
# Parser
# ---------------------------------
class AttoParseError(AttoSyntaxError):
    """ Raised when a token stream does not match the grammar"""


class UnexpectedToken(AttoParseError):
    """ Raised when a token cannot start an item (a stray ':' or ')')"""


class UnclosedParen(AttoParseError):
    """ Raised when the input ends before a matching ')'"""


class ExpectedColon(AttoParseError):
    """ Raised when a map key is not followed by ':'"""


class MixedListMapEntry(AttoParseError):
    """ Raised when one body mixes bare list items and key: value entries"""


class DepthExceeded(AttoParseError):
    """ Raised when parentheses nest deeper than the configured limit"""


# ---------------------------------
# Evaluator
# ---------------------------------
class AttoEvalError(AttoError):
    """ Base class for evaluation errors"""


class UnboundSymbol(AttoEvalError):
    """ Raised when a symbol is not bound in any enclosing scope"""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Cannot lookup unbound symbol {name}")


class NotCallable(AttoEvalError):
    """ Raised when the head of an application is not a builtin or closure"""

    def __init__(self, value: Any, message: Optional[str] = None):
        self.value = value
        super().__init__(message or f"Cannot apply non-function {value!r}")


class ArityMismatch(AttoEvalError):
    """ Raised when the number of arguments passed to a function is incorrect"""

    def __init__(self, name: str, expected, received: int):
        self.name = name
        self.expected = expected
        self.received = received
        super().__init__(
            f"{name} expects {expected} argument(s), got {received}"
        )


class TypeMismatch(AttoEvalError):
    """ Raised when the types of arguments passed to a function are incorrect"""


class InvalidArithmetic(TypeMismatch):
    """ Raised when arithmetic has no finite numeral result (division by zero, overflow)"""


class StepBudgetExceeded(AttoEvalError):
    """ Raised when evaluation uses up its step budget"""

    def __init__(self, budget: int):
        self.budget = budget
        super().__init__(f"Step budget of {budget} exhausted")


class EvalDepthExceeded(AttoEvalError):
    """ Raised when nested evaluation goes deeper than the configured limit"""

    def __init__(self, limit: int):
        self.limit = limit
        super().__init__(f"Evaluation nested deeper than {limit}")
