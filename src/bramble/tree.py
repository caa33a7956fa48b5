"""Lazy rose trees holding a generated value and its shrink candidates."""

from __future__ import annotations

from typing import Any, Callable, Generic, Iterable, Iterator, List, Sequence, TypeVar

A = TypeVar("A")
B = TypeVar("B")


def _no_children() -> List["RoseTree[Any]"]:
    return []


class RoseTree(Generic[A]):
    """A value paired with a thunk producing its shrink candidates.

    The thunk is re-evaluated on every access: nothing is cached, so walking
    the same node twice does the work twice.  Candidates are ordered simplest
    first and the sequence must be finite, otherwise a shrink search over the
    tree never terminates.
    """

    __slots__ = ("value", "_children")

    def __init__(
        self,
        value: A,
        children: Callable[[], Iterable["RoseTree[A]"]] = _no_children,
    ) -> None:
        self.value = value
        self._children = children

    def __repr__(self) -> str:
        return f"RoseTree({self.value!r})"

    def children(self) -> List["RoseTree[A]"]:
        return list(self._children())

    def iter_children(self) -> Iterator["RoseTree[A]"]:
        """Yield the shrink candidates one at a time, computing each on demand."""

        return iter(self._children())

    @classmethod
    def leaf(cls, value: A) -> "RoseTree[A]":
        return cls(value)

    @classmethod
    def unfold(cls, value: A, shrink: Callable[[A], Iterable[A]]) -> "RoseTree[A]":
        """Build the tree rooted at *value* whose children come from *shrink*."""

        def children() -> Iterator[RoseTree[A]]:
            return (cls.unfold(candidate, shrink) for candidate in shrink(value))

        return cls(value, children)

    def map(self, fn: Callable[[A], B]) -> "RoseTree[B]":
        def children() -> Iterator[RoseTree[B]]:
            return (child.map(fn) for child in self._children())

        return RoseTree(fn(self.value), children)

    def at_path(self, indices: Sequence[int]) -> "RoseTree[A]":
        """Follow child *indices* from this node.

        When an index runs past the children of the node reached so far, the
        deepest node that does exist is returned instead.
        """

        here = self
        for ix in indices:
            children = here.children()
            if ix >= len(children):
                return here
            here = children[ix]
        return here

    def count_nodes(self, max_depth: int) -> int:
        """Force the tree down to *max_depth* and return how many nodes it has."""

        count = 1
        if max_depth > 0:
            for child in self.iter_children():
                count += child.count_nodes(max_depth - 1)
        return count

    def render(self, max_depth: int) -> str:
        lines: List[str] = []
        self._render(lines, max_depth, 0)
        return "\n".join(lines)

    def _render(self, lines: List[str], max_depth: int, depth: int) -> None:
        indent = "  " * depth
        lines.append(f"{indent}{self.value!r}")
        children = self.children()
        if depth < max_depth:
            for child in children:
                child._render(lines, max_depth, depth + 1)
        elif children:
            lines.append(f"{indent}...{len(children)} shrinks not shown...")


__all__ = ["RoseTree"]
