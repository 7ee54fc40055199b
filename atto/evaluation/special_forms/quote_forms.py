from atto import EvaluatorFn, AttoValue
from atto.errors import ArityMismatch
from atto.types.environment import Environment
from atto.types.value import Value


def quote_form(
    tail: list[Value], env: Environment, evaluate_fn: EvaluatorFn
) -> AttoValue:
    """(quote x) returns x exactly as written."""
    if len(tail) != 1:
        raise ArityMismatch("quote", 1, len(tail))
    return tail[0]
