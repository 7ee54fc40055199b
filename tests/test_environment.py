from concurrent.futures import ThreadPoolExecutor

import pytest

from atto.builtin.env_builtin import default_environment
from atto.errors import UnboundSymbol
from atto.evaluation.evaluator import evaluate
from atto.reader.parser import parse
from atto.types.callables import Builtin
from atto.types.environment import Environment
from atto.types.value import Atom


def test_lookup_walks_outward():
    root = Environment({"x": Atom("1"), "y": Atom("2")})
    child = root.extend({"x": Atom("10")})
    assert child.lookup("x") == Atom("10")
    assert child.lookup("y") == Atom("2")
    assert root.lookup("x") == Atom("1")


def test_lookup_accepts_atoms():
    env = Environment({"x": Atom("1")})
    assert env.lookup(Atom("x")) == Atom("1")


def test_unbound_symbol():
    env = Environment().extend({"a": Atom("1")})
    with pytest.raises(UnboundSymbol) as excinfo:
        env.lookup("missing")
    assert excinfo.value.name == "missing"


def test_extend_never_changes_the_parent():
    root = Environment({"x": Atom("1")})
    root.extend({"y": Atom("2")})
    assert "y" not in root
    assert list(root.names()) == ["x"]


def test_frames_are_read_only():
    env = Environment({"x": Atom("1")})
    with pytest.raises(TypeError):
        env.vars["x"] = Atom("2")


def test_bindings_are_copied():
    bindings = {"x": Atom("1")}
    env = Environment(bindings)
    bindings["x"] = Atom("2")
    assert env.lookup("x") == Atom("1")


def test_find_and_depth():
    root = Environment({"x": Atom("1")})
    child = root.extend({"y": Atom("2")})
    assert child.find("x") is root
    assert child.find("y") is child
    assert child.find("z") is None
    assert child.depth == 1


def test_names_hide_shadowed_bindings():
    root = Environment({"x": Atom("1"), "y": Atom("2")})
    child = root.extend({"x": Atom("3"), "z": Atom("4")})
    assert sorted(child.names()) == ["x", "y", "z"]


def test_default_environment_has_builtins():
    env = default_environment()
    assert isinstance(env.lookup("+"), Builtin)
    assert env.lookup("true") == Atom("true")
    assert "quote" not in env  # special forms are not bindings
    assert default_environment() is not env


def test_root_frame_is_shared_across_threads():
    env = default_environment()
    before = dict(env.vars)

    def run(n):
        source = f"let (n: {n}) ((lambda (x) (* x x)) n)"
        return evaluate(parse(source), env)

    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(run, range(200)))

    assert results == [Atom(str(n * n)) for n in range(200)]
    assert dict(env.vars) == before
    assert "n" not in env
