from atto import EvaluatorFn, AttoValue
from atto.errors import ArityMismatch
from atto.types.environment import Environment
from atto.types.value import Value


def eval_form(
    tail: list[Value], env: Environment, evaluate_fn: EvaluatorFn
) -> AttoValue:
    if len(tail) != 1:
        raise ArityMismatch("eval", 1, len(tail))
    expr_to_eval = evaluate_fn(tail[0], env)
    return evaluate_fn(expr_to_eval, env)
