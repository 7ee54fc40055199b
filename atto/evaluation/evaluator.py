"""Core evaluator for atto.

Reads a parsed tree as code:
- bare atoms are symbols, numerals and strings are literals,
- a List is an application of its head to its eagerly evaluated tail,
  unless its head names a special form, which then controls evaluation,
- a Map evaluates its values and keeps its keys as written.

Each call to `evaluate` gets its own step counter and depth counter, so
evaluations never share mutable state.
"""

from __future__ import annotations

import logging
from typing import Optional

from atto import AttoValue
from atto.config import get_max_eval_depth, get_step_budget
from atto.errors import EvalDepthExceeded, NotCallable, StepBudgetExceeded
from atto.evaluation.apply import apply
from atto.evaluation.special_forms import SPECIAL_FORMS
from atto.printer import format_value
from atto.types.callables import is_callable
from atto.types.environment import Environment
from atto.types.value import Atom, List, Map

logger = logging.getLogger(__name__)


def is_literal_tree(value) -> bool:
    """True when `value` holds no symbols anywhere, keys included.

    Such a tree evaluates to an equal tree, so it can head a data list.
    """
    match value:
        case Atom():
            return value.is_literal
        case List(items=items):
            return all(is_literal_tree(item) for item in items)
        case Map(entries=entries):
            return all(is_literal_tree(k) and is_literal_tree(v) for k, v in entries)
    return False


class Evaluator:
    """One evaluation run: holds the step budget and the current depth."""

    def __init__(self, step_budget: Optional[int] = None, max_depth: Optional[int] = None):
        self.step_budget = step_budget if step_budget is not None else get_step_budget()
        self.max_depth = max_depth if max_depth is not None else get_max_eval_depth()
        self.steps = 0
        self.depth = 0

    def step(self) -> None:
        """Count one application against the budget."""
        self.steps += 1
        if self.step_budget is not None and self.steps > self.step_budget:
            logger.debug("step budget of %d exhausted", self.step_budget)
            raise StepBudgetExceeded(self.step_budget)

    def evaluate(self, expr, env: Environment) -> AttoValue:
        self.depth += 1
        try:
            if self.depth > self.max_depth:
                logger.debug("evaluation depth limit %d reached", self.max_depth)
                raise EvalDepthExceeded(self.max_depth)
            return self.evaluate0(expr, env)
        finally:
            self.depth -= 1

    def evaluate0(self, expr, env: Environment) -> AttoValue:
        match expr:
            case Atom():
                if expr.is_symbol:
                    return env.lookup(expr.text)
                return expr

            case Map(entries=entries):
                return Map((key, self.evaluate(value, env)) for key, value in entries)

            case List(items=()):
                return expr

            case List(items=(head, *tail_args)) if is_literal_tree(head):
                # A literal head makes the list data rather than a call.
                return List(self.evaluate(item, env) for item in expr.items)

            case List(items=(head, *tail_args)):
                self.step()
                if isinstance(head, Atom) and head.text in SPECIAL_FORMS:
                    logger.debug("special form %s", head.text)
                    return SPECIAL_FORMS[head.text](tail_args, env, self.evaluate)

                fn = self.evaluate(head, env)
                if not is_callable(fn):
                    raise NotCallable(
                        fn, f"Cannot apply non-function {format_value(fn, 40)}"
                    )
                args = [self.evaluate(arg, env) for arg in tail_args]
                return apply(fn, args, env, self.evaluate)

        # Builtins and closures evaluate to themselves.
        return expr


def evaluate(
    value,
    environment: Environment,
    step_budget: Optional[int] = None,
    max_depth: Optional[int] = None,
) -> AttoValue:
    """Evaluate `value` in `environment`.

    `step_budget` caps the number of applications and `max_depth` the
    nesting of evaluation; both default to the configured values.
    """
    return Evaluator(step_budget, max_depth).evaluate(value, environment)
