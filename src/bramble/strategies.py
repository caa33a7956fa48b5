"""Stock generators.

Leaf generators (:func:`integers`, :func:`booleans`, :func:`just`) build their
shrink trees directly.  Everything else is written with :func:`combine`, so
its shrinking comes for free from the leaves it draws.
"""

from __future__ import annotations

from typing import Any, Callable, Iterator, List, Optional, Sequence, Tuple, TypeVar

from .gen import Generator, combine
from .rng import Random
from .tree import RoseTree

T = TypeVar("T")


def _shrink_integer(low: int, value: int) -> Iterator[int]:
    distance = value - low
    if distance > 4:
        yield low + distance // 2
    if distance > 0:
        yield value - 1


def integers(*, min_value: int, max_value: int) -> Generator[int]:
    """Integers in ``[min_value, max_value]``, shrinking toward ``min_value``."""

    if min_value > max_value:
        raise ValueError("min_value must be <= max_value")

    def draw(rng: Random) -> int:
        return rng.randint(min_value, max_value)

    return Generator.from_shrinker(draw, lambda value: _shrink_integer(min_value, value))


def booleans() -> Generator[bool]:
    def draw(rng: Random) -> bool:
        return bool(rng.getrandbits(1))

    return Generator.from_shrinker(draw, lambda value: [False] if value else [])


def just(value: T) -> Generator[T]:
    return Generator(lambda rng: RoseTree.leaf(value))


def sampled_from(elements: Sequence[T]) -> Generator[T]:
    """Pick an element of *elements*; shrinks toward the first one."""

    choices = tuple(elements)
    if not choices:
        raise ValueError("sampled_from requires at least one element")
    index = integers(min_value=0, max_value=len(choices) - 1)
    return combine(lambda c: choices[c.of(index)])


def tuples(*generators: Generator[Any]) -> Generator[Tuple[Any, ...]]:
    generators = tuple(_ensure_generator(g) for g in generators)
    return combine(lambda c: tuple(c.of(g) for g in generators))


def builds(func: Callable[..., T], *generators: Generator[Any]) -> Generator[T]:
    generators = tuple(_ensure_generator(g) for g in generators)
    return combine(lambda c: func(*[c.of(g) for g in generators]))


def lists(
    elements: Generator[T],
    *,
    min_size: int = 0,
    max_size: Optional[int] = None,
) -> Generator[List[T]]:
    """Lists of *elements*; the length is drawn first, then each element."""

    elements = _ensure_generator(elements)
    if max_size is None:
        raise ValueError("max_size must be provided")
    if min_size < 0:
        raise ValueError("min_size must be >= 0")
    if min_size > max_size:
        raise ValueError("min_size must be <= max_size")
    length = integers(min_value=min_size, max_value=max_size)

    def build(c) -> List[T]:
        size = c.of(length)
        return [c.of(elements) for _ in range(size)]

    return combine(build)


def _ensure_generator(value: Any) -> Generator[Any]:
    if isinstance(value, Generator):
        return value
    raise TypeError("expected a Generator instance")


__all__ = [
    "booleans",
    "builds",
    "integers",
    "just",
    "lists",
    "sampled_from",
    "tuples",
]
