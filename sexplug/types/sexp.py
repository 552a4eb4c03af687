"""
  Expressions: immutable trees of atoms and lists.

Two variants only, dispatched on with isinstance everywhere:

    - Atom  -> leaf carrying an interned symbol name
    - SList -> ordered tuple of child expressions

Positions inside a tree are paths: tuples of child indices from the root,
so () is the root itself and (2, 0) is the first child of the third child.
Every transformation returns a new tree; unchanged subtrees are shared,
which is safe because nodes never change after construction.
"""

from __future__ import annotations

import sys
from typing import Iterable, Iterator, Optional, Union

from sexplug.errors import SexplugInvalidSymbol, SexplugTypeError

Path = tuple[int, ...]

_RESERVED = frozenset("();")


def check_symbol(name: object) -> str:
    """Validate an atom or hole name and return it interned."""
    if isinstance(name, Atom):
        return name.id
    if not isinstance(name, str):
        raise SexplugTypeError(f"Symbol name must be a string, got {type(name).__name__}")
    if not name:
        raise SexplugInvalidSymbol("Symbol name must not be empty")
    if any(c.isspace() or c in _RESERVED for c in name):
        raise SexplugInvalidSymbol(f"Invalid symbol name {name!r}")
    return sys.intern(name)


class Sexp:
    """Common operations of Atom and SList. Not instantiated directly."""
    __slots__ = ()

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name):
        raise AttributeError(f"{type(self).__name__} is immutable")

    # ----------------- Traversal -----------------
    def walk(self) -> Iterator[tuple[Path, Atom]]:
        """Yield (path, atom) for every atom, pre-order, left to right."""
        stack: list[tuple[Path, Sexp]] = [((), self)]
        while stack:
            path, node = stack.pop()
            if isinstance(node, Atom):
                yield path, node
            else:
                # reversed so the leftmost child is popped first
                for i in range(len(node.items) - 1, -1, -1):
                    stack.append((path + (i,), node.items[i]))

    def locate_first(self, symbol: Union[str, Atom]) -> Optional[Path]:
        name = check_symbol(symbol)
        for path, atom in self.walk():
            if atom.id == name:
                return path
        return None

    def count(self, symbol: Union[str, Atom]) -> int:
        name = check_symbol(symbol)
        return sum(1 for _, atom in self.walk() if atom.id == name)

    # ----------------- Rebuilding -----------------
    def replace_at(self, path: Path, value: Sexp) -> Sexp:
        if not isinstance(value, Sexp):
            raise SexplugTypeError(f"Cannot place {value!r} in an expression")
        return _rebuild(self, path, value)

    def replace_first(self, symbol: Union[str, Atom], value: Sexp) -> Optional[Sexp]:
        """
        Copy of this expression with the first pre-order occurrence of
        `symbol` replaced by `value`, or None when `symbol` does not occur.

        None means "no occurrence"; replacing a symbol with itself still
        returns an expression.
        """
        path = self.locate_first(symbol)
        if path is None:
            return None
        return self.replace_at(path, value)

    def replace_all(self, symbol: Union[str, Atom], value: Sexp) -> Sexp:
        name = check_symbol(symbol)
        if not isinstance(value, Sexp):
            raise SexplugTypeError(f"Cannot place {value!r} in an expression")
        return _subst(self, name, value)


def _rebuild(node: Sexp, path: Path, value: Sexp) -> Sexp:
    # collect the lists along the path, then rebuild them bottom-up
    spine: list[SList] = []
    for i in path:
        if not isinstance(node, SList) or not 0 <= i < len(node.items):
            raise IndexError(f"Path {path} does not address a node")
        spine.append(node)
        node = node.items[i]
    for parent, i in zip(reversed(spine), reversed(path)):
        items = list(parent.items)
        items[i] = value
        value = SList(items)
    return value


def _fold(node: Sexp, leaf, branch):
    """Post-order fold without recursion: leaf(atom) and branch(list, child_results)."""
    out: list = []
    stack: list[tuple[Sexp, bool]] = [(node, False)]
    while stack:
        n, children_done = stack.pop()
        if isinstance(n, Atom):
            out.append(leaf(n))
        elif children_done:
            k = len(n.items)
            vals = out[len(out) - k:]
            del out[len(out) - k:]
            out.append(branch(n, vals))
        else:
            stack.append((n, True))
            for child in reversed(n.items):
                stack.append((child, False))
    return out[0]


def _subst(node: Sexp, name: str, value: Sexp) -> Sexp:
    return _fold(
        node,
        lambda atom: value if atom.id == name else atom,
        lambda lst, vals: SList(vals),
    )


class Atom(Sexp):
    __slots__ = ("id",)

    def __init__(self, name: str):
        # Intern to ensure fast equality/hash and reduce memory
        object.__setattr__(self, "id", check_symbol(name))

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Atom) and self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __reduce__(self):
        return (Atom, (self.id,))

    def __repr__(self):
        return f"Atom({self.id!r})"

    def __str__(self):
        return self.id


class SList(Sexp):
    __slots__ = ("items",)

    def __init__(self, items: Iterable[Sexp] = ()):
        items = tuple(items)
        for item in items:
            if not isinstance(item, Sexp):
                raise SexplugTypeError(f"List element {item!r} is not an expression")
        object.__setattr__(self, "items", items)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SList):
            return False
        # pairwise walk, so deeply nested lists compare without recursion
        stack: list[tuple[Sexp, Sexp]] = [(self, other)]
        while stack:
            a, b = stack.pop()
            if a is b:
                continue
            if isinstance(a, Atom) or isinstance(b, Atom):
                if a != b:
                    return False
                continue
            if len(a.items) != len(b.items):
                return False
            stack.extend(zip(a.items, b.items))
        return True

    def __hash__(self) -> int:
        return _fold(self, hash, lambda lst, vals: hash(("list", tuple(vals))))

    def __reduce__(self):
        return (SList, (self.items,))

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[Sexp]:
        return iter(self.items)

    def __getitem__(self, index: int) -> Sexp:
        return self.items[index]

    def __repr__(self):
        return _fold(self, repr, lambda lst, vals: f"SList([{', '.join(vals)}])")

    def __str__(self):
        return _fold(self, str, lambda lst, vals: "(" + " ".join(vals) + ")")


def sexp(obj: object) -> Sexp:
    """
    Coerce plain Python data into an expression.

    - Sexp        -> unchanged
    - str         -> Atom
    - int         -> Atom of its decimal text
    - list/tuple  -> SList, recursively
    """
    if isinstance(obj, Sexp):
        return obj
    if isinstance(obj, str):
        return Atom(obj)
    if isinstance(obj, int) and not isinstance(obj, bool):
        return Atom(str(obj))
    if isinstance(obj, (list, tuple)):
        return SList([sexp(x) for x in obj])
    raise SexplugTypeError(f"Cannot convert {obj!r} to an expression")
