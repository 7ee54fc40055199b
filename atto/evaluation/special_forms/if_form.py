from atto import EvaluatorFn, AttoValue
from atto.errors import ArityMismatch
from atto.types.environment import Environment
from atto.types.value import Value, is_truthy, nil


def if_form(
    tail: list[Value], env: Environment, evaluate_fn: EvaluatorFn
) -> AttoValue:
    """(if cond then [else]); only the chosen branch is evaluated."""
    if len(tail) not in (2, 3):
        raise ArityMismatch("if", "2 or 3", len(tail))

    if is_truthy(evaluate_fn(tail[0], env)):
        return evaluate_fn(tail[1], env)
    elif len(tail) > 2:
        return evaluate_fn(tail[2], env)
    else:
        return nil()
