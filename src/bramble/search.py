"""Depth-first search of a shrink tree for a minimal counterexample."""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field
from typing import Any, Callable, Generic, List, Optional, Tuple, Type, TypeVar

from . import config
from .gen import Generator
from .rng import Random
from .tree import RoseTree

logger = logging.getLogger(__name__)

A = TypeVar("A")


@dataclass
class ShrinkResult(Generic[A]):
    """Outcome of :func:`shrink`.

    ``path`` holds every value visited from the first counterexample down
    to ``value``; ``indices`` holds the child index taken at each step, so
    ``tree.at_path(result.indices)`` finds the minimal node again.
    """

    value: A
    path: List[A] = field(default_factory=list)
    indices: List[int] = field(default_factory=list)
    attempts: int = 0
    error: Optional[BaseException] = None
    exhausted: bool = False


def _failure_types() -> Tuple[Type[BaseException], ...]:
    # pytest.fail() raises a BaseException subclass; count it when pytest is loaded.
    pytest = sys.modules.get("pytest")
    if pytest is None:
        return (Exception,)
    return (Exception, pytest.fail.Exception)


def _fails(holds: Callable[[A], Any], value: A) -> Tuple[bool, Optional[BaseException]]:
    try:
        ok = holds(value)
    except _failure_types() as exc:
        return True, exc
    return ok is False, None


def _budget(max_shrinks: Optional[int]) -> int:
    if max_shrinks is None:
        return config.MAX_SHRINKS
    return max_shrinks


def shrink(
    tree: RoseTree[A],
    holds: Callable[[A], Any],
    *,
    max_shrinks: Optional[int] = None,
) -> ShrinkResult[A]:
    """Walk *tree* toward the simplest value for which *holds* fails.

    A value fails when *holds* returns ``False`` or raises an ``Exception``
    (or ``pytest.fail``'s exception, when pytest is loaded).  At each node
    the first failing child is taken, so earlier (simpler) candidates win.
    *max_shrinks* bounds the number of candidates evaluated; ``0`` means
    unbounded and ``None`` uses the configured default.
    """

    failed, error = _fails(holds, tree.value)
    if not failed:
        raise ValueError(f"root value {tree.value!r} is not a counterexample")
    return _shrink_from(tree, holds, error, max_shrinks)


def _shrink_from(
    tree: RoseTree[A],
    holds: Callable[[A], Any],
    error: Optional[BaseException],
    max_shrinks: Optional[int],
) -> ShrinkResult[A]:
    limit = _budget(max_shrinks)
    result = ShrinkResult(value=tree.value, path=[tree.value], error=error)

    def spent() -> bool:
        if limit and result.attempts >= limit:
            logger.debug("shrink budget of %d candidates spent", limit)
            result.exhausted = True
            return True
        return False

    here = tree
    while not spent():
        for ix, child in enumerate(here.iter_children()):
            result.attempts += 1
            failed, error = _fails(holds, child.value)
            if failed:
                logger.debug("shrunk to %r via child %d", child.value, ix)
                here = child
                result.value = child.value
                result.path.append(child.value)
                result.indices.append(ix)
                result.error = error
                break
            # Stop before the next child is built; building it replays f.
            if spent():
                return result
        else:
            return result
    return result


def find_counterexample(
    gen: Generator[A],
    holds: Callable[[A], Any],
    *,
    max_examples: Optional[int] = None,
    seed: Optional[int] = None,
    max_shrinks: Optional[int] = None,
) -> Optional[ShrinkResult[A]]:
    """Sample *gen* until *holds* fails, then shrink that failure.

    Returns ``None`` when every example passed.  *holds* runs once on the
    failing sample; its outcome there seeds the shrink.
    """

    if max_examples is None:
        max_examples = config.MAX_EXAMPLES
    if seed is None:
        seed = config.SEED
    rng = Random(seed)
    for n in range(max_examples):
        tree = gen.sample(rng.split())
        failed, error = _fails(holds, tree.value)
        if failed:
            logger.debug("example %d failed: %r", n, tree.value)
            return _shrink_from(tree, holds, error, max_shrinks)
    return None


__all__ = ["ShrinkResult", "find_counterexample", "shrink"]
