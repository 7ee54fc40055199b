"""The value model shared by the parser and the evaluator.

A parsed document is a tree built from three node types:

    - Atom  -> terminal text plus the surface Form that produced it
    - List  -> ordered items, possibly empty
    - Map   -> ordered (key, value) entries, never empty, keys may repeat

Nodes are frozen dataclasses over tuples, so a tree cannot change once the
parser has built it. The evaluator produces new trees instead of editing
existing ones.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Iterator, Optional, Union

from atto.errors import InvalidArithmetic


class Form(Enum):
    """How an Atom was written. Only used to choose a faithful serialization."""

    BARE = "bare"
    QUOTED = "quoted"
    GUARDED = "guarded"


NUMERAL_RE = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?\Z")
INTEGER_RE = re.compile(r"[+-]?\d+\Z")


@dataclass(frozen=True)
class Atom:
    text: str
    form: Form = field(default=Form.BARE, compare=False)

    @property
    def is_numeral(self) -> bool:
        return self.form is Form.BARE and NUMERAL_RE.match(self.text) is not None

    @property
    def is_symbol(self) -> bool:
        """Bare words that are not numerals name bindings in an Environment."""
        return self.form is Form.BARE and not self.is_numeral

    @property
    def is_literal(self) -> bool:
        return not self.is_symbol

    def __str__(self) -> str:
        return self.text


@dataclass(frozen=True)
class List:
    items: tuple = ()

    def __init__(self, items: Iterable[Value] = ()):
        object.__setattr__(self, "items", tuple(items))

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[Value]:
        return iter(self.items)

    def __getitem__(self, index):
        return self.items[index]

    def first(self) -> Value:
        """First item, or the empty List when there is none."""
        return self.items[0] if self.items else List()

    def tail(self) -> List:
        return List(self.items[1:])


@dataclass(frozen=True)
class Map:
    entries: tuple = ()

    def __init__(self, entries: Iterable[tuple[Value, Value]]):
        entries = tuple((key, value) for key, value in entries)
        if not entries:
            raise ValueError("A Map needs at least one entry")
        object.__setattr__(self, "entries", entries)

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[tuple[Value, Value]]:
        return iter(self.entries)

    def keys(self) -> tuple:
        return tuple(key for key, _ in self.entries)

    def values(self) -> tuple:
        return tuple(value for _, value in self.entries)

    def get(self, key: Value, default=None):
        """Value of the first entry whose key is structurally equal to `key`.

        Duplicate keys are kept in order, so later duplicates are only
        reachable by iterating the entries.
        """
        if isinstance(key, str):
            key = Atom(key)
        for k, v in self.entries:
            if k == key:
                return v
        return default


Value = Union[Atom, List, Map]


def nil() -> List:
    return List()


def is_value(obj) -> bool:
    return isinstance(obj, (Atom, List, Map))


def as_number(atom: Atom) -> Optional[Union[int, float]]:
    """Numeric reading of a numeral Atom, or None for any other Atom.

    Raises InvalidArithmetic for numerals outside the representable range.
    """
    if not atom.is_numeral:
        return None
    try:
        if INTEGER_RE.match(atom.text):
            return int(atom.text)
        number = float(atom.text)
    except ValueError:
        raise InvalidArithmetic(f"Numeral of {len(atom.text)} characters is too large") from None
    if not math.isfinite(number):
        raise InvalidArithmetic(f"Numeral {atom.text} is out of range")
    return number


def from_number(number: Union[int, float]) -> Atom:
    if isinstance(number, float):
        if not math.isfinite(number):
            raise InvalidArithmetic("Arithmetic result is out of range")
        if number.is_integer() and abs(number) < 1e16:
            return Atom(str(int(number)))
        return Atom(repr(number))
    try:
        return Atom(str(number))
    except ValueError:
        raise InvalidArithmetic("Arithmetic result has too many digits") from None


TRUE = Atom("true")
FALSE = Atom("false")


def from_bool(flag: bool) -> Atom:
    return TRUE if flag else FALSE


def is_truthy(value) -> bool:
    """The empty List, the empty Atom and the bare atom `false` are false."""
    match value:
        case List(items=()):
            return False
        case Atom(text=""):
            return False
        case Atom(text="false", form=Form.BARE):
            return False
    return True
