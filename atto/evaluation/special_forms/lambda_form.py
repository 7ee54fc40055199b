from atto import EvaluatorFn, AttoValue
from atto.errors import ArityMismatch, TypeMismatch
from atto.types.callables import Closure
from atto.types.environment import Environment
from atto.types.value import Atom, List, Value, nil


def parameter_names(params: Value) -> tuple[str, ...]:
    if not isinstance(params, List):
        raise TypeMismatch(f"lambda parameters must be a list, got {params!r}")
    names = []
    for param in params:
        if not (isinstance(param, Atom) and param.is_symbol):
            raise TypeMismatch(f"lambda parameter must be a symbol, got {param!r}")
        names.append(param.text)
    if len(set(names)) != len(names):
        raise TypeMismatch(f"Duplicate lambda parameter in ({' '.join(names)})")
    return tuple(names)


def lambda_form(
    tail: list[Value], env: Environment, evaluate_fn: EvaluatorFn
) -> AttoValue:
    # (lambda (params) body...) allows zero or more body forms.
    # Several forms are an implicit `do`; no body returns nil.
    if not tail:
        raise ArityMismatch("lambda", "at least 1", 0)

    params = parameter_names(tail[0])
    body_forms = tail[1:]

    if not body_forms:
        body = List([Atom("quote"), nil()])
    elif len(body_forms) == 1:
        body = body_forms[0]
    else:
        body = List([Atom("do"), *body_forms])

    return Closure(params, body, env)
