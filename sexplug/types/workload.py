from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Optional, Union

from sexplug.errors import SexplugTypeError
from sexplug.types.sexp import Atom, Sexp, check_symbol, sexp


class Workload:
    """
    Expansion plan. Either a literal Set of expressions or a Plug that fills
    a hole of one plan with the values of another.

    Plans hold no iteration state; every call to iter() starts a fresh
    enumeration that reproduces the same sequence.
    """

    def plug(self, hole: Union[str, Atom], pegs: Union[Workload, Iterable]) -> Plug:
        return Plug(self, hole, as_workload(pegs))

    def iter(self, policy: Optional[str] = None) -> Iterator[Sexp]:
        # Lazy import to avoid circular imports
        from sexplug.enumeration.enumerator import enumerate_workload
        return enumerate_workload(self, policy)

    def __iter__(self) -> Iterator[Sexp]:
        return self.iter()

    def holes(self) -> list[str]:
        raise SexplugTypeError(f"Cannot list the holes of {self!r}")


@dataclass(frozen=True)
class Set(Workload):
    items: tuple[Sexp, ...] = ()

    def __post_init__(self):
        if isinstance(self.items, (str, Sexp)):
            raise SexplugTypeError("Set expects a sequence of expressions")
        items = tuple(self.items)
        for item in items:
            if not isinstance(item, Sexp):
                raise SexplugTypeError(f"Set element {item!r} is not an expression")
        object.__setattr__(self, "items", items)

    @classmethod
    def of(cls, *objs) -> Set:
        """Set.of("0", "1", ["+", "A", "A"]) builds a Set from plain values."""
        return cls(tuple(sexp(o) for o in objs))

    def __len__(self) -> int:
        return len(self.items)

    def holes(self) -> list[str]:
        return []


@dataclass(frozen=True)
class Plug(Workload):
    source: Workload
    hole: str
    pegs: Workload

    def __post_init__(self):
        if not isinstance(self.source, Workload):
            raise SexplugTypeError(f"Plug source {self.source!r} is not a plan")
        if not isinstance(self.pegs, Workload):
            raise SexplugTypeError(f"Plug pegs {self.pegs!r} is not a plan")
        object.__setattr__(self, "hole", check_symbol(self.hole))

    def holes(self) -> list[str]:
        return self.source.holes() + [self.hole]


def as_workload(obj: Union[Workload, Iterable]) -> Workload:
    if isinstance(obj, Workload):
        return obj
    if isinstance(obj, (str, Sexp)):
        return Set((sexp(obj),))
    try:
        return Set(tuple(sexp(o) for o in obj))
    except TypeError:
        raise SexplugTypeError(f"Cannot use {obj!r} as pegs") from None
