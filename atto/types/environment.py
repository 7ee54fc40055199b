"""Lexical environment for atto.

An Environment is one read-only frame of bindings plus a link to the frame
that encloses it. Frames are never edited after construction: binding new
names (a function call, a `let`) builds a child frame with `extend` and leaves
every enclosing frame as it was. Independent evaluations can therefore share
a root frame without locking.
"""

from __future__ import annotations

from io import StringIO
from types import MappingProxyType
from typing import Iterator, Mapping, Optional

from atto import AttoValue
from atto.errors import UnboundSymbol
from atto.types.value import Atom


def _name(key) -> str:
    if isinstance(key, Atom):
        return key.text
    if isinstance(key, str):
        return key
    raise TypeError(f"Cannot bind {key!r}: names are strings or Atoms")


class Environment:
    """Chain of immutable frames mapping symbol names to values."""

    __slots__ = ("vars", "outer", "depth")

    def __init__(
        self,
        bindings: Optional[Mapping] = None,
        outer: Optional[Environment] = None,
    ):
        frame = {_name(k): v for k, v in (bindings or {}).items()}
        self.vars: Mapping[str, AttoValue] = MappingProxyType(frame)
        self.outer: Environment | None = outer
        self.depth: int = 0 if outer is None else outer.depth + 1

    def extend(self, bindings: Mapping) -> Environment:
        """Return a child frame holding `bindings`; self is left untouched."""
        return Environment(bindings, outer=self)

    def find(self, name) -> Optional[Environment]:
        """Find the nearest frame in the chain that binds `name`."""
        key = _name(name)
        env: Optional[Environment] = self
        while env is not None:
            if key in env.vars:
                return env
            env = env.outer
        return None

    def lookup(self, name) -> AttoValue:
        """Look up the value bound to `name`, innermost frame first.

        Raises UnboundSymbol if no frame binds it.
        """
        env = self.find(name)
        if env is None:
            raise UnboundSymbol(_name(name))
        return env.vars[_name(name)]

    def __contains__(self, name) -> bool:
        return self.find(name) is not None

    def names(self) -> Iterator[str]:
        """Every visible name, innermost binding first, without shadowed repeats."""
        seen: set[str] = set()
        env: Optional[Environment] = self
        while env is not None:
            for key in env.vars:
                if key not in seen:
                    seen.add(key)
                    yield key
            env = env.outer

    def _write_vars(self, buffer: StringIO) -> None:
        """Write this frame's variables into the buffer in a compact form."""
        buffer.write("{")
        buffer.write(", ".join(f"{k}: {v!r}" for k, v in self.vars.items()))
        buffer.write("}")

    def __str__(self) -> str:
        """Human-readable single-frame view with an indicator for parent."""
        with StringIO() as buffer:
            self._write_vars(buffer)
            if self.outer is not None:
                buffer.write(" -> ...")
            return buffer.getvalue()

    def __repr__(self) -> str:
        return f"<Environment depth={self.depth} names={len(self.vars)}>"
