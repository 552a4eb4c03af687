"""
Command line front end: expand a template and print every completion.

    python -m sexplug "(+ A B)" --plug A=0,1,2 --plug B=a,b
    python -m sexplug                      # demo: (+ A A) with A <- {0, 1}

Pegs are read as expressions, so `--plug A="(f x),y"` is allowed.
"""

from __future__ import annotations

import argparse
import logging
import sys
from itertools import islice
from typing import Optional

from sexplug.config import POLICIES, get_log_level
from sexplug.debug_utils.pprint import pprint_expr
from sexplug.enumeration.enumerator import count_leaves
from sexplug.errors import SexplugError
from sexplug.reader.parser import read
from sexplug.types.workload import Plug, Set, Workload

logger = logging.getLogger("sexplug")

DEMO_TEMPLATE = "(+ A A)"
DEMO_PLUGS = ["A=0,1"]


def parse_plug(arg: str) -> tuple[str, Set]:
    hole, sep, pegs = arg.partition("=")
    if not sep or not hole.strip():
        raise argparse.ArgumentTypeError(f"expected HOLE=PEG[,PEG...], got {arg!r}")
    values = [p for p in pegs.split(",") if p.strip()]
    return hole.strip(), Set(tuple(read(p) for p in values))


def build_plan(template: str, plugs: list[str]) -> Workload:
    plan: Workload = Set((read(template),))
    for arg in plugs:
        hole, pegs = parse_plug(arg)
        plan = plan.plug(hole, pegs)
    return plan


def closed_form_count(plan: Workload, policy: Optional[str] = None) -> Optional[int]:
    """Result count of a single plug over literal sets, or None for deeper chains."""
    if isinstance(plan, Plug) and isinstance(plan.source, Set) and isinstance(plan.pegs, Set):
        return sum(count_leaves(e, plan.hole, len(plan.pegs), policy) for e in plan.source.items)
    if isinstance(plan, Set):
        return len(plan)
    return None


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="sexplug", description="Enumerate every completion of a template expression.")
    ap.add_argument("template", nargs="?", help="template expression, e.g. '(+ A B)'")
    ap.add_argument("--plug", action="append", default=[], metavar="HOLE=PEG[,PEG...]",
                    help="fill HOLE with each PEG; repeat to chain plugs (applied in order)")
    ap.add_argument("--limit", type=int, default=None, help="stop after N results")
    ap.add_argument("--count", action="store_true", help="print only the number of results")
    ap.add_argument("--pretty", action="store_true", help="wrap long results and highlight unfilled holes")
    ap.add_argument("--empty-pegs", choices=POLICIES, default=None,
                    help="policy for hole-free templates when a plug has no pegs")
    ap.add_argument("--log-level", default=None, help="logging level (default: $SEXPLUG_LOG_LEVEL or WARNING)")
    return ap


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        logging.basicConfig(level=get_log_level(args.log_level), format="%(levelname)s %(name)s: %(message)s")
        template = args.template
        plugs = args.plug
        if template is None:
            template, plugs = DEMO_TEMPLATE, plugs or DEMO_PLUGS
        plan = build_plan(template, plugs)
        results = plan.iter(args.empty_pegs)
    except (SexplugError, argparse.ArgumentTypeError) as ex:
        print(f"sexplug: {ex}", file=sys.stderr)
        return 2

    if args.limit is not None:
        results = islice(results, max(args.limit, 0))

    holes = plan.holes()
    logger.info("expanding %s over holes %s", template, ", ".join(holes) or "-")
    if args.count:
        total = closed_form_count(plan, args.empty_pegs)
        if total is None:
            total = sum(1 for _ in results)
        elif args.limit is not None:
            total = min(total, max(args.limit, 0))
        print(total)
        return 0

    for expr in results:
        print(pprint_expr(expr, holes=holes) if args.pretty else expr)
    return 0


if __name__ == "__main__":
    sys.exit(main())
