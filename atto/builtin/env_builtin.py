"""Built-in functions for the atto default environment.

This module defines arithmetic over numeral atoms, comparison, structure
access for lists and maps, text helpers, and the registration used by
`default_environment`. Every builtin takes the calling Environment and the
list of already evaluated arguments.
"""
from __future__ import annotations

import functools
import operator
from typing import Callable, Optional

from atto import AttoValue
from atto.errors import ArityMismatch, InvalidArithmetic, TypeMismatch
from atto.printer import format_value, serialize
from atto.reader.parser import parse
from atto.types.callables import Builtin, is_callable
from atto.types.environment import Environment
from atto.types.value import (
    FALSE,
    TRUE,
    Atom,
    Form,
    List,
    Map,
    as_number,
    from_bool,
    from_number,
    is_truthy,
    is_value,
    nil,
)


def _numbers(name: str, args: list[AttoValue]) -> list[int | float]:
    numbers = []
    for arg in args:
        number = as_number(arg) if isinstance(arg, Atom) else None
        if number is None:
            raise TypeMismatch(f"All arguments to {name} must be numbers, got {format_value(arg, 20)}")
        numbers.append(number)
    return numbers


def _expect(name: str, arg: AttoValue, kind: type) -> AttoValue:
    if not isinstance(arg, kind):
        raise TypeMismatch(f"{name} expects a {kind.__name__.lower()}, got {format_value(arg, 20)}")
    return arg


def _at_least(name: str, count: int, args: list[AttoValue]) -> None:
    if len(args) < count:
        raise ArityMismatch(name, f"at least {count}", len(args))


# -------------------------------
# Arithmetic
# -------------------------------
def _arithmetic(fn: Callable) -> Callable:
    """Report float overflow inside `fn` as InvalidArithmetic."""

    @functools.wraps(fn)
    def checked(env: Environment, args: list[AttoValue]) -> Atom:
        try:
            return fn(env, args)
        except OverflowError as err:
            raise InvalidArithmetic(f"{fn.__name__}: {err}") from None

    return checked


@_arithmetic
def add(env: Environment, args: list[AttoValue]) -> Atom:
    """Return the numeric sum of all arguments; errors if any arg is non-numeric."""
    return from_number(sum(_numbers("+", args)))


@_arithmetic
def sub(env: Environment, args: list[AttoValue]) -> Atom:
    """Subtract all subsequent numbers from the first; unary negation for one arg."""
    _at_least("-", 1, args)
    numbers = _numbers("-", args)
    if len(numbers) == 1:
        return from_number(-numbers[0])
    result = numbers[0]
    for x in numbers[1:]:
        result -= x
    return from_number(result)


@_arithmetic
def mul(env: Environment, args: list[AttoValue]) -> Atom:
    result = 1
    for x in _numbers("*", args):
        result *= x
    return from_number(result)


@_arithmetic
def div(env: Environment, args: list[AttoValue]) -> Atom:
    """Divide left-to-right; with one arg returns the reciprocal."""
    _at_least("/", 1, args)
    numbers = _numbers("/", args)
    if len(numbers) == 1:
        numbers.insert(0, 1)
    result = numbers[0]
    try:
        for x in numbers[1:]:
            result /= x
    except ZeroDivisionError:
        raise InvalidArithmetic("Division by zero") from None
    return from_number(result)


@_arithmetic
def mod(env: Environment, args: list[AttoValue]) -> Atom:
    """(mod n d) => n % d. Exactly 2 integer arguments."""
    n, d = _numbers("mod", args)
    if not isinstance(n, int) or not isinstance(d, int):
        raise TypeMismatch("All arguments to mod must be integers")
    if d == 0:
        raise InvalidArithmetic("Modulo by zero")
    return from_number(n % d)


# -------------------------------
# Equality and comparison
# -------------------------------
def equals(env: Environment, args: list[AttoValue]) -> Atom:
    """true if all arguments are structurally equal (or zero/one arg), else false."""
    return from_bool(all(a == b for a, b in zip(args, args[1:])))


def not_equals(env: Environment, args: list[AttoValue]) -> Atom:
    return from_bool(not is_truthy(equals(env, args)))


def _chain(name: str, compare: Callable) -> Callable:
    def chained(env: Environment, args: list[AttoValue]) -> Atom:
        _at_least(name, 2, args)
        numbers = _numbers(name, args)
        return from_bool(all(compare(a, b) for a, b in zip(numbers, numbers[1:])))

    chained.__name__ = f"chained_{compare.__name__}"
    chained.__doc__ = f"Chainable {name}: true if the relation holds for every adjacent pair."
    return chained


lt = _chain("<", operator.lt)
lte = _chain("<=", operator.le)
gt = _chain(">", operator.gt)
gte = _chain(">=", operator.ge)


def logical_not(env: Environment, args: list[AttoValue]) -> Atom:
    return from_bool(not is_truthy(args[0]))


# -------------------------------
# Lists and maps
# -------------------------------
def list_builtin(env: Environment, args: list[AttoValue]) -> List:
    return List(args)


def first(env: Environment, args: list[AttoValue]) -> AttoValue:
    """First item of a list; nil for the empty list."""
    return _expect("first", args[0], List).first()


def tail(env: Environment, args: list[AttoValue]) -> List:
    """All but the first item of a list."""
    return _expect("tail", args[0], List).tail()


def cons(env: Environment, args: list[AttoValue]) -> List:
    """Prepend head to a list without changing it."""
    head, xs = args
    return List([head, *_expect("cons", xs, List).items])


def count(env: Environment, args: list[AttoValue]) -> Atom:
    """Number of items, entries, or characters."""
    value = args[0]
    match value:
        case Atom(text=text):
            return from_number(len(text))
        case List() | Map():
            return from_number(len(value))
    raise TypeMismatch(f"count expects a value, got {format_value(value, 20)}")


def get(env: Environment, args: list[AttoValue]) -> AttoValue:
    """(get map key [default]) => value of the first entry with an equal key."""
    if len(args) not in (2, 3):
        raise ArityMismatch("get", "2 or 3", len(args))
    mapping = _expect("get", args[0], Map)
    default = args[2] if len(args) == 3 else nil()
    return mapping.get(args[1], default)


def keys(env: Environment, args: list[AttoValue]) -> List:
    return List(_expect("keys", args[0], Map).keys())


def values(env: Environment, args: list[AttoValue]) -> List:
    return List(_expect("values", args[0], Map).values())


def _predicate(kind: type) -> Callable:
    def predicate(env: Environment, args: list[AttoValue]) -> Atom:
        return from_bool(isinstance(args[0], kind))

    predicate.__name__ = f"is_{kind.__name__.lower()}"
    return predicate


def is_fn(env: Environment, args: list[AttoValue]) -> Atom:
    return from_bool(is_callable(args[0]))


# -------------------------------
# Text
# -------------------------------
def concat(env: Environment, args: list[AttoValue]) -> Atom:
    """Join the text of atom arguments into one string atom."""
    return Atom("".join(_expect("concat", arg, Atom).text for arg in args), Form.QUOTED)


def to_text(env: Environment, args: list[AttoValue]) -> Atom:
    """Serialize a value to a string atom that `read` turns back into it."""
    if not is_value(args[0]):
        raise TypeMismatch(f"to-text cannot serialize {format_value(args[0])}")
    return Atom(serialize(args[0]), Form.QUOTED)


def read(env: Environment, args: list[AttoValue]) -> AttoValue:
    """Parse the text of a string atom as a document."""
    return parse(_expect("read", args[0], Atom).text)


def _display(value) -> str:
    if isinstance(value, Atom):
        return value.text
    return serialize(value) if is_value(value) else format_value(value)


def print_builtin(env: Environment, args: list[AttoValue]) -> List:
    """Write the arguments space-separated to stdout and return nil.

    Atoms are written as their plain text, other values as `to-text` would.
    """
    print(" ".join(_display(a) for a in args))
    return nil()


BUILTINS: dict[str, tuple[Callable, Optional[int]]] = {
    "+": (add, None),
    "-": (sub, None),
    "*": (mul, None),
    "/": (div, None),
    "mod": (mod, 2),
    "=": (equals, None),
    "!=": (not_equals, None),
    "<": (lt, None),
    "<=": (lte, None),
    ">": (gt, None),
    ">=": (gte, None),
    "not": (logical_not, 1),
    "list": (list_builtin, None),
    "first": (first, 1),
    "tail": (tail, 1),
    "cons": (cons, 2),
    "count": (count, 1),
    "get": (get, None),
    "keys": (keys, 1),
    "values": (values, 1),
    "atom?": (_predicate(Atom), 1),
    "list?": (_predicate(List), 1),
    "map?": (_predicate(Map), 1),
    "fn?": (is_fn, 1),
    "concat": (concat, None),
    "to-text": (to_text, 1),
    "read": (read, 1),
    "print": (print_builtin, None),
}


def register(bindings: dict) -> dict:
    """Add all builtin functions and constants to `bindings` and return it."""
    for name, (fn, arity) in BUILTINS.items():
        bindings[name] = Builtin(name, fn, arity)
    bindings["true"] = TRUE
    bindings["false"] = FALSE
    bindings["nil"] = nil()
    return bindings


def default_environment() -> Environment:
    """A fresh root Environment holding the builtins."""
    return Environment(register({}))
