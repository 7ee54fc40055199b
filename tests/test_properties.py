from hypothesis import given, settings, strategies as st

from atto.builtin.env_builtin import default_environment
from atto.evaluation.evaluator import evaluate
from atto.printer import pretty, serialize, serialize_atom
from atto.reader.lexer import TokenKind, lex
from atto.reader.parser import ATOM_FORMS, parse
from atto.types.value import Atom, Form, List, Map

atom_text = st.text(st.characters(exclude_categories=("Cs",)), max_size=12)
bare_text = st.text(
    st.characters(whitelist_categories=("Ll", "Lu", "Nd", "Pd")), min_size=1, max_size=8
)

atom_strat = st.one_of(
    st.builds(Atom, bare_text),
    st.builds(Atom, atom_text, st.sampled_from(list(Form))),
)


def _containers(children):
    return st.one_of(
        st.lists(children, max_size=4).map(List),
        st.lists(st.tuples(children, children), min_size=1, max_size=3).map(Map),
    )


value_strat = st.recursive(atom_strat, _containers, max_leaves=12)
document_strat = st.one_of(
    st.lists(value_strat, max_size=5).map(List),
    st.lists(st.tuples(value_strat, value_strat), min_size=1, max_size=4).map(Map),
)

separator_strat = st.sampled_from([" ", "\n", "\t", "  \r\n", " # note\n", " #\n  "])


def _token_source(token):
    if token.kind in ATOM_FORMS:
        return serialize_atom(Atom(token.text, ATOM_FORMS[token.kind]))
    return token.text


@given(document_strat)
def test_serialize_then_parse_is_identity(document):
    assert parse(serialize(document, document=True)) == document


@given(document_strat)
def test_pretty_then_parse_is_identity(document):
    assert parse(pretty(document, max_line_length=20, document=True)) == document


@given(document_strat, st.data())
def test_layout_does_not_change_the_tree(document, data):
    tokens = [t for t in lex(serialize(document, document=True)) if t.kind is not TokenKind.COMMENT]
    parts = []
    for token in tokens:
        parts.append(data.draw(separator_strat))
        parts.append(_token_source(token))
    parts.append(data.draw(separator_strat))
    assert parse("".join(parts)) == document


literal_atom_strat = st.one_of(
    st.builds(Atom, atom_text, st.sampled_from([Form.QUOTED, Form.GUARDED])),
    st.integers().map(lambda n: Atom(str(n))),
)
literal_tree_strat = st.recursive(literal_atom_strat, _containers, max_leaves=10)
literal_container_strat = _containers(literal_tree_strat)


@settings(max_examples=50)
@given(literal_tree_strat)
def test_literal_trees_evaluate_to_themselves(tree):
    assert evaluate(tree, default_environment()) == tree


@settings(max_examples=50)
@given(literal_container_strat, st.lists(literal_tree_strat, max_size=4))
def test_lists_headed_by_literal_containers_are_data(head, rest):
    tree = List([head, *rest])
    assert evaluate(tree, default_environment()) == tree
