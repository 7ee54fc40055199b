from atto import EvaluatorFn, AttoValue
from atto.types.environment import Environment
from atto.types.value import FALSE, TRUE, Value, is_truthy


def and_form(tail: list[Value], env: Environment, evaluate_fn: EvaluatorFn) -> AttoValue:
    """Short-circuiting logical AND special form.

    (and a b c ...) evaluates each operand left-to-right and stops at the
    first false one, which is returned. If all operands are true, returns
    the value of the last operand. With zero operands, returns true.
    """
    result: AttoValue = TRUE
    for expr in tail:
        result = evaluate_fn(expr, env)
        if not is_truthy(result):
            return result
    return result


def or_form(tail: list[Value], env: Environment, evaluate_fn: EvaluatorFn) -> AttoValue:
    """Short-circuiting logical OR special form.

    (or a b c ...) returns the first true operand, or false when there is none.
    """
    for expr in tail:
        val = evaluate_fn(expr, env)
        if is_truthy(val):
            return val
    return FALSE
