"""Callable values: Python builtins and user-defined closures."""

from __future__ import annotations

from typing import Callable, Optional

from atto import AttoValue
from atto.types.environment import Environment
from atto.types.value import Value


class Builtin:
    """A Python function exposed to atto code.

    `fn` receives the calling Environment and the already evaluated argument
    list. `arity` is the exact argument count, or None for variadic builtins.
    """

    __slots__ = ("name", "fn", "arity")

    def __init__(
        self,
        name: str,
        fn: Callable[[Environment, list[AttoValue]], AttoValue],
        arity: Optional[int] = None,
    ):
        self.name = name
        self.fn = fn
        self.arity = arity

    def __call__(self, env: Environment, args: list[AttoValue]) -> AttoValue:
        return self.fn(env, args)

    def __repr__(self) -> str:
        return f"<builtin {self.name}>"


class Closure:
    """A first-class function with parameter names, body and captured env."""

    __slots__ = ("params", "body", "env", "name")

    def __init__(
        self,
        params: tuple[str, ...],
        body: Value,
        env: Environment,
        name: str = "lambda",
    ):
        self.params: tuple[str, ...] = tuple(params)
        self.body: Value = body
        self.env: Environment = env
        self.name = name

    @property
    def arity(self) -> int:
        return len(self.params)

    def bind(self, args: list[AttoValue]) -> Environment:
        """New frame over the captured env binding params to `args`."""
        return self.env.extend(dict(zip(self.params, args)))

    def __repr__(self) -> str:
        return f"<closure ({' '.join(self.params)})>"


def is_callable(value) -> bool:
    return isinstance(value, (Builtin, Closure))
