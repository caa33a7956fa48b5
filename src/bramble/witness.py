"""The witness handed to composing functions, and the ``of`` unwrap.

A :class:`Witness` is the capability that lets a plain function pull values
out of generators.  It is only valid while the function it was handed to is
running: once that call returns the witness is poisoned, and any use of a
witness that is not the innermost live one on the current thread is refused.
Witnesses cannot be copied or pickled.
"""

from __future__ import annotations

import logging
import threading
from enum import Enum
from typing import Any, Callable, List, Optional, Sequence, Tuple, TypeVar

from .rng import Random
from .tree import RoseTree

logger = logging.getLogger(__name__)

A = TypeVar("A")

_live = threading.local()


class ShrinkReplayMismatch(RuntimeError):
    """A replayed composing function asked for more values than were recorded.

    This means the function is not deterministic with respect to the values
    it obtained through ``of``; the shrink tree built from it would be wrong.
    """

    def __init__(self, position: int, length: int) -> None:
        self.position = position
        self.length = length
        super().__init__(
            f"replay requested value #{position} but only {length} were recorded; "
            "the composing function must make the same of() calls for the same values"
        )


class WitnessExpired(RuntimeError):
    """A witness was used outside the call it was issued for."""


class Mode(Enum):
    RECORD = "record"
    REPLAY = "replay"


def _stack() -> List["Witness"]:
    stack = getattr(_live, "stack", None)
    if stack is None:
        stack = _live.stack = []
    return stack


class Witness:
    """Per-invocation bookkeeping for one run of a composing function.

    In ``RECORD`` mode every tree passed to :meth:`of` is appended to
    :attr:`calls`.  In ``REPLAY`` mode the argument is ignored and the value
    comes from the pre-supplied list at the current position instead.
    """

    __slots__ = ("mode", "position", "_rng", "_calls", "_alive")

    def __init__(
        self,
        mode: Mode,
        rng: Optional[Random] = None,
        calls: Sequence[RoseTree[Any]] = (),
    ) -> None:
        self.mode = mode
        self.position = 0
        self._rng = rng
        self._calls: List[RoseTree[Any]] = list(calls)
        self._alive = True

    @classmethod
    def record(cls, rng: Random) -> "Witness":
        return cls(Mode.RECORD, rng=rng)

    @classmethod
    def replay(cls, calls: Sequence[RoseTree[Any]]) -> "Witness":
        return cls(Mode.REPLAY, calls=calls)

    def __repr__(self) -> str:
        state = "live" if self._alive else "expired"
        return f"<Witness {self.mode.value} position={self.position} {state}>"

    def __copy__(self):
        raise TypeError("Witness objects cannot be copied")

    def __deepcopy__(self, memo):
        raise TypeError("Witness objects cannot be copied")

    def __reduce_ex__(self, protocol):
        raise TypeError("Witness objects cannot be pickled")

    @property
    def alive(self) -> bool:
        return self._alive

    @property
    def length(self) -> int:
        """Size of the call list: recorded so far, or supplied for replay."""

        return len(self._calls)

    @property
    def calls(self) -> Tuple[RoseTree[Any], ...]:
        """Trees this run actually consumed, in call order."""

        if self.mode is Mode.RECORD:
            return tuple(self._calls)
        return tuple(self._calls[: self.position])

    def of(self, source: Any) -> Any:
        """Unwrap a value from *source*, a :class:`RoseTree` or a generator."""

        self._check_live()
        position = self.position
        if self.mode is Mode.RECORD:
            tree = self._resolve(source)
            self._calls.append(tree)
        else:
            if position >= len(self._calls):
                logger.debug("replay overran %d recorded calls", len(self._calls))
                raise ShrinkReplayMismatch(position, len(self._calls))
            tree = self._calls[position]
        self.position = position + 1
        return tree.value

    def _resolve(self, source: Any) -> RoseTree[Any]:
        if isinstance(source, RoseTree):
            return source
        sample = getattr(source, "sample", None)
        if sample is None:
            raise TypeError(f"of() expects a RoseTree or a generator, got {type(source).__name__}")
        if self._rng is None:
            raise TypeError("this witness has no random source to sample generators with")
        return sample(self._rng.split())

    def _check_live(self) -> None:
        if not self._alive:
            raise WitnessExpired("witness used after its composing function returned")
        stack = _stack()
        if not stack or stack[-1] is not self:
            raise WitnessExpired("witness used outside the composing function it was issued to")

    def _expire(self) -> None:
        self._alive = False


def call_with_witness(f: Callable[[Witness], A], witness: Witness) -> A:
    """Run *f* with *witness* as the innermost live witness, then poison it."""

    stack = _stack()
    stack.append(witness)
    try:
        return f(witness)
    finally:
        stack.pop()
        witness._expire()


def of(witness: Witness, source: Any) -> Any:
    return witness.of(source)


__all__ = [
    "Mode",
    "ShrinkReplayMismatch",
    "Witness",
    "WitnessExpired",
    "call_with_witness",
    "of",
]
