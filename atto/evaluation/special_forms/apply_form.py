from atto import EvaluatorFn, AttoValue
from atto.errors import ArityMismatch, NotCallable, TypeMismatch
from atto.evaluation.apply import apply
from atto.types.callables import is_callable
from atto.types.environment import Environment
from atto.types.value import List, Value


def apply_form(
    tail: list[Value], env: Environment, evaluate_fn: EvaluatorFn
) -> AttoValue:
    """(apply f args) calls f with the items of the evaluated list `args`."""
    if len(tail) != 2:
        raise ArityMismatch("apply", 2, len(tail))

    fn = evaluate_fn(tail[0], env)
    if not is_callable(fn):
        raise NotCallable(fn)
    args = evaluate_fn(tail[1], env)
    if not isinstance(args, List):
        raise TypeMismatch(f"apply expects a list of arguments, got {args!r}")
    return apply(fn, list(args.items), env, evaluate_fn)
