from itertools import islice
from timeit import timeit

from sexplug.reader.parser import read
from sexplug.types.sexp import sexp
from sexplug.types.workload import Set


def bench_full_expansion(k: int = 6, m: int = 4, rounds: int = 5) -> float:
    """Enumerate all m ** k completions of a template with k holes."""
    plan = Set((sexp(["f"] + ["A"] * k),)).plug("A", Set.of(*range(m)))
    # Warmup
    sum(1 for _ in plan)
    # Timed
    return timeit(lambda: sum(1 for _ in plan), number=rounds)


def bench_first_results(k: int = 40, m: int = 10, n: int = 1000, rounds: int = 20) -> float:
    """Pull the first n results of a plan far too large to enumerate."""
    plan = Set((sexp(["f"] + ["A"] * k),)).plug("A", Set.of(*range(m)))
    return timeit(lambda: sum(1 for _ in islice(plan, n)), number=rounds)


def bench_chained_plugs(rounds: int = 20) -> float:
    """Three-hole chain over a few templates."""
    templates = Set(tuple(read(s) for s in ("(+ A (* B C))", "(- (f A) (g B C))", "(h A A B C)")))
    plan = (
        templates
        .plug("A", Set.of("x", "y", "z"))
        .plug("B", Set.of(0, 1, 2, 3))
        .plug("C", Set.of("p", ["q", "r"]))
    )
    return timeit(lambda: sum(1 for _ in plan), number=rounds)


def bench_replace_first(depth: int = 200, n: int = 10000) -> float:
    """replace_first on a deep left-nested expression with the hole at the bottom."""
    expr = sexp("A")
    for _ in range(depth):
        expr = sexp(["g", expr, "x"])
    peg = sexp("0")
    return timeit(lambda: expr.replace_first("A", peg), number=n)


if __name__ == "__main__":
    print("Benchmark: full expansion (4 ** 6 leaves)")
    print(f"  time: {bench_full_expansion():.6f}s")
    print("Benchmark: first 1000 of 10 ** 40 leaves")
    print(f"  time: {bench_first_results():.6f}s")
    print("Benchmark: chained plugs")
    print(f"  time: {bench_chained_plugs():.6f}s")
    print("Benchmark: replace_first on a deep expression")
    print(f"  time: {bench_replace_first():.6f}s")
