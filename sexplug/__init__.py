# Public surface of sexplug.
#
# Expressions are Atom / SList trees (sexplug.types.sexp). Plans are Set / Plug
# workloads (sexplug.types.workload); iterating a plan runs the lazy
# substitution enumerator (sexplug.enumeration.enumerator).
#
# Naming guidance:
# - Sexp:     an expression, template or result.
# - Workload: an expansion plan; `pegs` is the plan whose values fill a hole.

from sexplug.errors import (
    SexplugError,
    SexplugConfigError,
    SexplugInvalidSymbol,
    SexplugSyntaxError,
    SexplugTypeError,
)
from sexplug.types.sexp import Atom, SList, Sexp, sexp
from sexplug.types.workload import Plug, Set, Workload
from sexplug.enumeration.enumerator import PlugEnumerator, count_leaves, enumerate_workload, expand
from sexplug.reader.parser import read, read_all

__all__ = [
    "Atom", "SList", "Sexp", "sexp",
    "Set", "Plug", "Workload",
    "PlugEnumerator", "enumerate_workload", "expand", "count_leaves",
    "read", "read_all",
    "SexplugError", "SexplugConfigError", "SexplugInvalidSymbol",
    "SexplugSyntaxError", "SexplugTypeError",
]
