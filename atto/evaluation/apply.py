"""Application engine for atto.

Centralizes function application so the evaluator and the `apply` special
form share one arity check:
- Closures bind their parameters in a child of the captured frame and
  evaluate their body there.
- Builtins receive the calling environment and the evaluated arguments.
"""

from atto import AttoValue, EvaluatorFn
from atto.errors import ArityMismatch, NotCallable
from atto.types.callables import Builtin, Closure
from atto.types.environment import Environment


def check_arity(name: str, expected, received: int) -> None:
    if expected is not None and expected != received:
        raise ArityMismatch(name, expected, received)


def apply(
    head: Closure | Builtin | object,
    args: list[AttoValue],
    env: Environment,
    evaluate_fn: EvaluatorFn,
) -> AttoValue:
    """Apply either a Closure or a Builtin to already evaluated `args`.

    Raises ArityMismatch when the argument count is wrong and NotCallable
    for anything else in head position.
    """
    if isinstance(head, Closure):
        check_arity(head.name, head.arity, len(args))
        return evaluate_fn(head.body, head.bind(args))
    if isinstance(head, Builtin):
        check_arity(head.name, head.arity, len(args))
        return head(env, args)
    raise NotCallable(head)
