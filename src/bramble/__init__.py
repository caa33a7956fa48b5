"""bramble: integrated shrinking for property-based tests.

Composite generators are ordinary functions of a :class:`Witness`; the rose
tree of shrink candidates is rebuilt by replaying them.
"""

from .gen import Generator, combine
from .rng import Random
from .runner import PropertyFailed, Settings, check, given, settings
from .search import ShrinkResult, find_counterexample, shrink
from .tree import RoseTree
from .witness import Mode, ShrinkReplayMismatch, Witness, WitnessExpired, of
from . import strategies

__all__ = [
    "Generator",
    "Mode",
    "PropertyFailed",
    "Random",
    "RoseTree",
    "Settings",
    "ShrinkReplayMismatch",
    "ShrinkResult",
    "Witness",
    "WitnessExpired",
    "check",
    "combine",
    "find_counterexample",
    "given",
    "of",
    "settings",
    "shrink",
    "strategies",
]
