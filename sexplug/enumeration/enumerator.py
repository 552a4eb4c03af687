"""
  Lazy substitution enumerator

Resolving Plug(source, hole, pegs) for one source expression e0 walks a tree
whose layer i replaces the i-th remaining occurrence of `hole`, with one
child per peg. The tree is never built: its branching is discovered by
running a fresh enumeration of `pegs` at every node.

The walk is driven by an explicit work list of frames, each frame being
(partial expression, in-progress peg iterator). The top of the list is the
next frame to process:

    - peg iterator exhausted      -> pop the frame
    - peg fills an occurrence     -> keep the frame, push (filled, fresh pegs)
    - no occurrence left          -> pop the frame and yield its expression

so leaves come out depth-first, left to right, and only O(occurrences)
frames are ever alive. Nothing runs between pulls; a consumer that stops
pulling can simply drop the iterator.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from itertools import chain
from typing import Iterable, Iterator, Optional, Union

from sexplug.config import PASSTHROUGH, PRIME, get_empty_pegs_policy
from sexplug.errors import SexplugTypeError
from sexplug.types.sexp import Atom, Sexp, check_symbol, sexp
from sexplug.types.workload import Plug, Set, Workload, as_workload

logger = logging.getLogger(__name__)


@dataclass
class Frame:
    expr: Sexp
    # None marks a finished leaf that is waiting to be yielded
    pegs: Optional[Iterator[Sexp]]


class PlugEnumerator:
    """
    Iterator over every completion of `expr` obtained by filling each
    occurrence of `hole` with a value of `pegs`, in depth-first order.
    """

    def __init__(
        self,
        expr: Sexp,
        hole: Union[str, Atom],
        pegs: Workload,
        policy: Optional[str] = None,
    ):
        self.expr = expr
        self.hole = check_symbol(hole)
        self.pegs = pegs
        self.policy = get_empty_pegs_policy(policy)
        self.frames: list[Frame] = [self._frame(expr)]

    @property
    def depth(self) -> int:
        """Number of live frames."""
        return len(self.frames)

    def _frame(self, expr: Sexp) -> Frame:
        if self.policy == PASSTHROUGH and expr.locate_first(self.hole) is None:
            return Frame(expr, None)
        return Frame(expr, enumerate_workload(self.pegs, self.policy))

    def __iter__(self) -> PlugEnumerator:
        return self

    def __next__(self) -> Sexp:
        frames = self.frames
        while frames:
            frame = frames[-1]
            if frame.pegs is None:
                frames.pop()
                logger.debug("leaf %s", frame.expr)
                return frame.expr

            peg = next(frame.pegs, None)
            if peg is None:
                frames.pop()
                logger.debug("pegs exhausted for %s (depth %d)", frame.expr, len(frames))
                continue

            filled = frame.expr.replace_first(self.hole, peg)
            if filled is None:
                # Only reachable under PRIME: remaining pegs would give the same leaf
                frames.pop()
                logger.debug("leaf %s", frame.expr)
                return frame.expr

            frames.append(self._frame(filled))
            logger.debug("push %s (depth %d)", filled, len(frames))
        raise StopIteration


def enumerate_workload(plan: Workload, policy: Optional[str] = None) -> Iterator[Sexp]:
    """Fresh iterator over every expression the plan produces."""
    policy = get_empty_pegs_policy(policy)
    if isinstance(plan, Set):
        return iter(plan.items)
    if isinstance(plan, Plug):
        return chain.from_iterable(
            PlugEnumerator(expr, plan.hole, plan.pegs, policy)
            for expr in enumerate_workload(plan.source, policy)
        )
    raise SexplugTypeError(f"Cannot enumerate {plan!r}")


def expand(
    expr: object,
    hole: Union[str, Atom],
    pegs: Union[Workload, Iterable],
    policy: Optional[str] = None,
) -> PlugEnumerator:
    """Completions of a single expression; `expr` and `pegs` may be plain data."""
    return PlugEnumerator(sexp(expr), hole, as_workload(pegs), policy)


def count_leaves(expr: Sexp, hole: Union[str, Atom], pegs_size: int, policy: Optional[str] = None) -> int:
    """Number of completions of `expr` for `pegs_size` pegs, without enumerating."""
    k = expr.count(hole)
    if k == 0 and pegs_size == 0 and get_empty_pegs_policy(policy) == PRIME:
        return 0
    return pegs_size ** k
