import copy
import pickle

import pytest

from sexplug.errors import SexplugInvalidSymbol, SexplugTypeError
from sexplug.types.sexp import Atom, sexp
from sexplug.types.workload import Plug, Set, Workload, as_workload


def test_set_enumerates_items_in_order():
    items = (sexp("b"), sexp("a"), sexp(["f", "x"]), sexp("a"))
    plan = Set(items)
    assert list(plan) == list(items)
    # restartable
    assert list(plan) == list(items)
    assert len(plan) == 4


def test_set_of_builds_from_plain_values():
    assert Set.of(0, "x", ["+", "A"]).items == (Atom("0"), Atom("x"), sexp(["+", "A"]))


def test_empty_set_enumerates_nothing():
    assert list(Set()) == []


def test_set_rejects_non_expressions():
    with pytest.raises(SexplugTypeError):
        Set(("a",))
    with pytest.raises(SexplugTypeError):
        Set("abc")


def test_plug_composes_and_lists_holes():
    plan = Set.of(["+", "A", "B"]).plug("A", Set.of(0, 1)).plug("B", ["x"])
    assert isinstance(plan, Plug)
    assert plan.hole == "B"
    assert plan.pegs == Set.of("x")
    assert plan.holes() == ["A", "B"]


def test_plans_are_values():
    a = Set.of(["+", "A"]).plug("A", Set.of(0, 1))
    b = Set.of(["+", "A"]).plug(Atom("A"), [0, 1])
    assert a == b
    assert hash(a) == hash(b)


def test_plug_validates_operands():
    with pytest.raises(SexplugTypeError):
        Plug("x", "A", Set())
    with pytest.raises(SexplugTypeError):
        Plug(Set(), "A", [sexp("x")])
    with pytest.raises(SexplugInvalidSymbol):
        Set().plug("", Set())


@pytest.mark.parametrize(
    "pegs, expected",
    [
        ("x", (Atom("x"),)),
        (sexp(["f", "x"]), (sexp(["f", "x"]),)),
        ([0, 1], (Atom("0"), Atom("1"))),
        (iter(["a", "b"]), (Atom("a"), Atom("b"))),
    ]
)
def test_as_workload_coerces_pegs(pegs, expected):
    assert as_workload(pegs).items == expected


def test_as_workload_rejects_scalars():
    with pytest.raises(SexplugTypeError):
        as_workload(5)


def test_plans_copy_and_pickle():
    plan = Set.of(["+", "A", "B"]).plug("A", Set.of(0, 1)).plug("B", ["x"])
    for clone in (copy.deepcopy(plan), pickle.loads(pickle.dumps(plan))):
        assert clone == plan
        assert list(clone) == list(plan)


def test_holes_of_unknown_plan_variant():
    class Other(Workload):
        pass

    with pytest.raises(SexplugTypeError):
        Other().holes()
