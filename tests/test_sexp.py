import copy
import pickle

import pytest

from sexplug.errors import SexplugInvalidSymbol, SexplugTypeError
from sexplug.types.sexp import Atom, SList, sexp


def test_atoms_compare_by_name():
    assert Atom("x") == Atom("x")
    assert Atom("x") != Atom("y")
    assert hash(Atom("x")) == hash(Atom("x"))
    assert Atom("x") != SList([Atom("x")])


def test_lists_compare_structurally():
    a = SList([Atom("+"), SList([Atom("f"), Atom("x")])])
    b = sexp(["+", ["f", "x"]])
    assert a == b
    assert hash(a) == hash(b)
    assert SList([]) != Atom("nil")


def test_expressions_are_immutable():
    e = sexp(["+", "A"])
    with pytest.raises(AttributeError):
        e.items = ()
    with pytest.raises(AttributeError):
        Atom("x").id = "y"


@pytest.mark.parametrize(
    "obj, expected",
    [
        ("a", "a"),
        (0, "0"),
        (["+", 0, 1], "(+ 0 1)"),
        ([], "()"),
        (("f", ["g", "x"], "y"), "(f (g x) y)"),
    ]
)
def test_sexp_coercion_and_str(obj, expected):
    assert str(sexp(obj)) == expected


def test_repr_shows_constructors():
    assert repr(sexp(["+", "A"])) == "SList([Atom('+'), Atom('A')])"


@pytest.mark.parametrize("bad", ["", "a b", "(", "x)", "a;b"])
def test_invalid_atom_names(bad):
    with pytest.raises(SexplugInvalidSymbol):
        Atom(bad)


@pytest.mark.parametrize("bad", [1.5, None, True, {"a": 1}])
def test_sexp_rejects_non_expressions(bad):
    with pytest.raises(SexplugTypeError):
        sexp(bad)


def test_slist_rejects_raw_strings():
    with pytest.raises(SexplugTypeError):
        SList(["a"])


@pytest.mark.parametrize(
    "expr, symbol, path",
    [
        (["+", "A", "A"], "A", (1,)),
        (["f", ["g", "A"], "A"], "A", (1, 1)),
        ([["A"]], "A", (0, 0)),
        ("A", "A", ()),
        (["+", "B"], "A", None),
        ([], "A", None),
    ]
)
def test_locate_first_is_preorder_left_to_right(expr, symbol, path):
    assert sexp(expr).locate_first(symbol) == path


def test_replace_first_only_touches_leftmost_occurrence():
    e = sexp(["f", ["g", "A"], "A"])
    assert e.replace_first("A", Atom("0")) == sexp(["f", ["g", "0"], "A"])
    # the receiver is unchanged
    assert e == sexp(["f", ["g", "A"], "A"])


def test_replace_first_reports_no_occurrence_with_none():
    assert sexp(["+", "B", "C"]).replace_first("A", Atom("0")) is None


def test_replace_first_with_itself_is_not_no_occurrence():
    e = sexp(["+", "A"])
    result = e.replace_first("A", Atom("A"))
    assert result is not None
    assert result == e


def test_replace_first_with_subtree():
    e = sexp(["+", "A", "A"])
    assert e.replace_first(Atom("A"), sexp(["*", "x", "y"])) == sexp(["+", ["*", "x", "y"], "A"])


def test_replace_at_root_and_bad_path():
    e = sexp(["+", "A"])
    assert e.replace_at((), Atom("z")) == Atom("z")
    with pytest.raises(IndexError):
        e.replace_at((5,), Atom("z"))
    with pytest.raises(IndexError):
        e.replace_at((0, 0), Atom("z"))


def test_replace_all_and_count():
    e = sexp(["f", "A", ["g", "A", "B"], "A"])
    assert e.count("A") == 3
    assert e.count("C") == 0
    assert e.replace_all("A", Atom("0")) == sexp(["f", "0", ["g", "0", "B"], "0"])


def test_walk_yields_paths_in_preorder():
    e = sexp(["f", ["g", "x"], "y"])
    assert [(p, str(a)) for p, a in e.walk()] == [
        ((0,), "f"),
        ((1, 0), "g"),
        ((1, 1), "x"),
        ((2,), "y"),
    ]


@pytest.mark.parametrize("obj", ["A", ["+", "A", "A"], ["f", ["g", "x"], []]])
def test_copy_and_pickle_keep_structure(obj):
    e = sexp(obj)
    for clone in (copy.copy(e), copy.deepcopy(e), pickle.loads(pickle.dumps(e))):
        assert clone == e
        assert hash(clone) == hash(e)
        assert type(clone) is type(e)
    # copies stay immutable
    with pytest.raises(AttributeError):
        copy.deepcopy(e).id = "z"


def _nested(depth, leaf):
    e = sexp(leaf)
    for _ in range(depth):
        e = SList([e])
    return e


def test_deeply_nested_expressions_do_not_recurse():
    depth = 5000
    e = _nested(depth, "A")
    assert e.locate_first("A") == (0,) * depth
    filled = e.replace_first("A", Atom("0"))
    assert filled == _nested(depth, "0")
    assert filled != e
    assert hash(filled) == hash(_nested(depth, "0"))
    assert e.replace_all("A", Atom("1")) == _nested(depth, "1")
    assert str(filled) == "(" * depth + "0" + ")" * depth
    assert repr(_nested(2, "x")) == "SList([SList([Atom('x')])])"
