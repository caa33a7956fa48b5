"""Generators and the ``combine`` replay engine.

``combine`` turns an ordinary function of a :class:`~bramble.witness.Witness`
into a :class:`Generator`.  Sampling runs the function once in record mode to
get the root value and the list of trees its ``of`` calls drew from.  Each
shrink candidate is then produced lazily by substituting one child tree at one
position of that list and running the function again in replay mode::

    dates = combine(lambda c: Date(
        year=c.of(integers(min_value=0, max_value=2999)),
        month=c.of(integers(min_value=0, max_value=11)),
        day=c.of(integers(min_value=0, max_value=31)),
    ))

The composing function must make the same sequence of ``of`` calls whenever
it sees the same values.  Re-running it is the only way children are built,
so it executes once per candidate every time the tree is walked.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Generic, Iterable, Iterator, Optional, Sequence, Tuple, TypeVar

from .rng import Random
from .tree import RoseTree
from .witness import Witness, call_with_witness

logger = logging.getLogger(__name__)

A = TypeVar("A")
B = TypeVar("B")


class Generator(Generic[A]):
    """Stateless sampler from a :class:`~bramble.rng.Random` to a rose tree."""

    def __init__(self, sampler: Callable[[Random], RoseTree[A]]) -> None:
        self._sampler = sampler

    def sample(self, rng: Random) -> RoseTree[A]:
        tree = self._sampler(rng)
        if not isinstance(tree, RoseTree):
            raise TypeError(f"generator sampler returned {type(tree).__name__}, expected RoseTree")
        return tree

    def map(self, transform: Callable[[A], B]) -> "Generator[B]":
        return Generator(lambda rng: self.sample(rng).map(transform))

    def example(self, seed: Optional[int] = None) -> A:
        return self.sample(Random(seed)).value

    @classmethod
    def from_shrinker(
        cls,
        draw: Callable[[Random], A],
        shrink: Callable[[A], Iterable[A]],
    ) -> "Generator[A]":
        """Leaf generator: *draw* a value, then unfold its tree with *shrink*."""

        return cls(lambda rng: RoseTree.unfold(draw(rng), shrink))


CallList = Tuple[RoseTree[Any], ...]


def _replay(f: Callable[[Witness], A], calls: CallList) -> RoseTree[A]:
    witness = Witness.replay(calls)
    value = call_with_witness(f, witness)
    used = witness.calls
    if len(used) < len(calls):
        logger.debug("replay consumed %d of %d calls; dropping the rest", len(used), len(calls))
    return RoseTree(value, lambda: _children(f, used))


def _children(f: Callable[[Witness], A], calls: CallList) -> Iterator[RoseTree[A]]:
    # Position-major: every shrink of call 0 comes before any shrink of call 1.
    for position, tree in enumerate(calls):
        for candidate in tree.iter_children():
            substituted = calls[:position] + (candidate,) + calls[position + 1:]
            yield _replay(f, substituted)


def combine(f: Callable[[Witness], A]) -> Generator[A]:
    """Build a generator from a composing function *f*."""

    def sample(rng: Random) -> RoseTree[A]:
        witness = Witness.record(rng)
        value = call_with_witness(f, witness)
        calls = witness.calls
        return RoseTree(value, lambda: _children(f, calls))

    return Generator(sample)


def replay(f: Callable[[Witness], A], calls: Sequence[RoseTree[Any]]) -> RoseTree[A]:
    """Run *f* once against *calls* and return the resulting shrink tree."""

    return _replay(f, tuple(calls))


__all__ = ["Generator", "combine", "replay"]
