import pytest

from atto.errors import ArityMismatch, NotCallable, TypeMismatch, UnboundSymbol
from atto.evaluation.evaluator import evaluate
from atto.evaluation.special_forms import SPECIAL_FORMS
from atto.reader.parser import parse
from atto.types.callables import Closure
from atto.types.value import Atom, List, Map

# Documents below are evaluated from the root, so "if c a b" is the
# application itself and parenthesized forms are nested expressions.


def test_registry_names():
    assert set(SPECIAL_FORMS) == {"quote", "if", "let", "lambda", "eval", "do", "and", "or", "apply"}


# ------------------ quote ------------------

def test_quote_list(run):
    assert run("quote (a b (c))") == List([Atom("a"), Atom("b"), List([Atom("c")])])


def test_quote_map_and_atom(run):
    assert run("quote (x: (+ 1 2))") == Map([(Atom("x"), List([Atom("+"), Atom("1"), Atom("2")]))])
    assert run("quote undefined-symbol") == Atom("undefined-symbol")


def test_quote_arity(run):
    with pytest.raises(ArityMismatch):
        run("quote a b")


def test_quote_cannot_be_shadowed(env):
    shadowed = env.extend({"quote": Atom("1")})
    assert evaluate(parse("quote (a)"), shadowed) == List([Atom("a")])


# ------------------ if ------------------

@pytest.mark.parametrize(
    "source,expected",
    [
        ("if true a-branch b-branch", "yes"),
        ("if false a-branch b-branch", "no"),
        ("if nil a-branch b-branch", "no"),
        ('if "" a-branch b-branch', "no"),
        ("if 0 a-branch b-branch", "yes"),
        ("if (= 1 1) a-branch b-branch", "yes"),
    ],
)
def test_if(env, source, expected):
    scope = env.extend({"a-branch": Atom("yes"), "b-branch": Atom("no")})
    assert evaluate(parse(source), scope) == Atom(expected)


def test_if_without_else_is_nil(run):
    assert run("if false 1") == List()


def test_if_only_evaluates_chosen_branch(run):
    assert run("if true 1 (unbound-call)") == Atom("1")
    with pytest.raises(UnboundSymbol):
        run("if false 1 (unbound-call)")


def test_if_arity(run):
    with pytest.raises(ArityMismatch):
        run("if true")


# ------------------ let ------------------

def test_let_binds_from_a_map(run):
    assert run("let (x: 2 y: 3) (* x y)") == Atom("6")


def test_let_values_see_the_outer_scope(run):
    assert run("let (x: 1) (let (x: 10 y: x) y)") == Atom("1")


def test_let_inner_binding_shadows(run):
    assert run("let (x: 1) (let (x: 2) x)") == Atom("2")


def test_let_with_no_bindings_and_several_body_forms(run):
    assert run("let () 1 2 3") == Atom("3")
    assert run("let ()") == List()


@pytest.mark.parametrize("source", ["let (x y) x", "let x x", 'let ("x": 1) x', "let ((a b): 1) 1"])
def test_let_rejects_bad_bindings(run, source):
    with pytest.raises(TypeMismatch):
        run(source)


def test_let_scope_does_not_leak(run):
    with pytest.raises(UnboundSymbol):
        run("do (let (x: 1) x) x")


# ------------------ lambda ------------------

def test_lambda_builds_a_closure(run):
    closure = run("lambda (a b) (+ a b)")
    assert isinstance(closure, Closure)
    assert closure.params == ("a", "b")


def test_lambda_application(run):
    assert run("(lambda (a b) (+ a b)) 2 3") == Atom("5")


def test_lambda_without_params_or_body(run):
    assert run("(lambda () 42)") == Atom("42")
    assert run("(lambda ())") == List()


def test_lambda_multiple_body_forms(run):
    assert run("(lambda (x) (+ x 1) (* x 2)) 5") == Atom("10")


@pytest.mark.parametrize("source", ["lambda x x", "lambda (1) 1", 'lambda ("x") 1', "lambda (x x) x"])
def test_lambda_rejects_bad_parameters(run, source):
    with pytest.raises(TypeMismatch):
        run(source)


def test_lambda_arity(run):
    with pytest.raises(ArityMismatch):
        run("lambda")


def test_higher_order_functions(run):
    source = "let (twice: (lambda (f x) (f (f x)))) (twice (lambda (n) (* n 3)) 2)"
    assert run(source) == Atom("18")


# ------------------ eval / do / apply ------------------

def test_eval_evaluates_twice(run):
    assert run("eval (quote (+ 1 2))") == Atom("3")
    assert run('eval (read "+ 2 2")') == Atom("4")


def test_do_returns_last(run):
    assert run("do 1 2 (+ 1 2)") == Atom("3")
    assert run("do") == List()


def test_apply(run):
    assert run("apply + (quote (1 2 3))") == Atom("6")
    assert run("apply (lambda (a b) (- a b)) (list 10 4)") == Atom("6")


def test_apply_errors(run):
    with pytest.raises(NotCallable):
        run("apply true (list 1)")
    with pytest.raises(TypeMismatch):
        run("apply + 1")
    with pytest.raises(ArityMismatch):
        run("apply (lambda (a) a) (list 1 2)")


# ------------------ and / or ------------------

@pytest.mark.parametrize(
    "source,expected",
    [
        ("and", Atom("true")),
        ("and 1 2", Atom("2")),
        ("and 1 false (unbound)", Atom("false")),
        ("and nil 1", List()),
        ("or", Atom("false")),
        ("or false 2 (unbound)", Atom("2")),
        ("or false nil", Atom("false")),
    ],
)
def test_logic_forms(run, source, expected):
    assert run(source) == expected
