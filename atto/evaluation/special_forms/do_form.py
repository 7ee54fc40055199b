from atto import EvaluatorFn, AttoValue
from atto.types.environment import Environment
from atto.types.value import Value, nil


def do_form(
    tail: list[Value], env: Environment, evaluate_fn: EvaluatorFn
) -> AttoValue:
    result: AttoValue = nil()
    for expr in tail:
        result = evaluate_fn(expr, env)
    return result
