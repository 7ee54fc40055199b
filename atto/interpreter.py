from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

from atto import AttoValue, Document
from atto.builtin.env_builtin import default_environment
from atto.errors import TypeMismatch
from atto.evaluation.evaluator import evaluate
from atto.reader.parser import parse, parse_file
from atto.types.environment import Environment
from atto.types.value import Atom, Map


class Interpreter:
    """
    Parses documents and evaluates them against one environment.
    Binding a name replaces the interpreter's frame with a child frame, so
    values captured by earlier closures keep seeing the old frame.
    """
    def __init__(
        self,
        env: Optional[Environment] = None,
        step_budget: Optional[int] = None,
        max_depth: Optional[int] = None,
    ):
        self.env = env if env is not None else default_environment()
        self.step_budget = step_budget
        self.max_depth = max_depth

    def read(self, code: Union[str, bytes]) -> Document:
        """Parse `code` without evaluating it."""
        return parse(code)

    def eval_value(self, value) -> AttoValue:
        return evaluate(value, self.env, self.step_budget, self.max_depth)

    def eval(self, code: Union[str, bytes]) -> AttoValue:
        """Parse `code` and evaluate its document root as one expression."""
        return self.eval_value(parse(code))

    def load(self, path: Union[str, Path]) -> AttoValue:
        return self.eval_value(parse_file(path))

    def bind(self, name: str, value: AttoValue) -> Interpreter:
        """Bind `name` in a new frame over the current one; returns self."""
        self.env = self.env.extend({name: value})
        return self

    def define(self, code: Union[str, bytes]) -> Interpreter:
        """Evaluate a map document and bind each of its keys to its value.

            inc: (lambda (x) (+ x 1))  two: (inc 1)

        Values see the bindings made by earlier entries.
        """
        document = parse(code)
        if not isinstance(document, Map):
            raise TypeMismatch("define expects a map document of name: value entries")
        for key, expr in document:
            if not (isinstance(key, Atom) and key.is_symbol):
                raise TypeMismatch(f"define can only bind symbols, got {key!r}")
            self.bind(key.text, self.eval_value(expr))
        return self
