from atto import EvaluatorFn, AttoValue
from atto.errors import ArityMismatch, TypeMismatch
from atto.evaluation.special_forms.do_form import do_form
from atto.types.environment import Environment
from atto.types.value import Atom, List, Map, Value


def let_form(
    tail: list[Value], env: Environment, evaluate_fn: EvaluatorFn
) -> AttoValue:
    """
    (let (name: expr name2: expr2) body...)
    Binding values are evaluated in the enclosing scope, then the body runs
    in a new frame holding all bindings. `()` binds nothing.
    """
    if not tail:
        raise ArityMismatch("let", "at least 1", 0)

    bindings, body = tail[0], tail[1:]
    match bindings:
        case List(items=()):
            entries = ()
        case Map(entries=entries):
            pass
        case _:
            raise TypeMismatch(f"let bindings must be a map, got {bindings!r}")

    frame = {}
    for name, expr in entries:
        if not (isinstance(name, Atom) and name.is_symbol):
            raise TypeMismatch(f"let can only bind symbols, got {name!r}")
        frame[name.text] = evaluate_fn(expr, env)

    return do_form(body, env.extend(frame), evaluate_fn)
