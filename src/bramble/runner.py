"""Running properties: :func:`check`, and the :func:`given`/:func:`settings` decorators."""

from __future__ import annotations

import functools
import inspect
from dataclasses import dataclass
from typing import Any, Callable, Optional

from . import config
from .gen import Generator
from .search import find_counterexample
from .strategies import tuples


class PropertyFailed(AssertionError):
    """A property was falsified; carries the shrunk counterexample."""

    def __init__(self, value: Any, seed: int, shrinks: int) -> None:
        self.value = value
        self.seed = seed
        self.shrinks = shrinks
        super().__init__(
            f"falsifying example after {shrinks} shrinks (seed={seed:#x}): {value!r}"
        )


@dataclass
class Settings:
    """Container for configuration used by :func:`given` and :func:`check`.

    Options left as ``None`` fall back to :mod:`bramble.config` when the
    settings object is created.
    """

    max_examples: int = config.DEFAULT_MAX_EXAMPLES
    seed: int = config.DEFAULT_SEED
    max_shrinks: int = config.DEFAULT_MAX_SHRINKS

    def __init__(
        self,
        max_examples: Optional[int] = None,
        seed: Optional[int] = None,
        max_shrinks: Optional[int] = None,
    ) -> None:
        self.max_examples = config.MAX_EXAMPLES if max_examples is None else max_examples
        self.seed = config.SEED if seed is None else seed
        self.max_shrinks = config.MAX_SHRINKS if max_shrinks is None else max_shrinks
        if self.max_examples < 1:
            raise ValueError("max_examples must be >= 1")
        if self.max_shrinks < 0:
            raise ValueError("max_shrinks must be >= 0")


def settings(**kwargs: Any) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Decorator used to attach :class:`Settings` to a test function."""

    cfg = Settings(**kwargs)

    def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        setattr(func, "_bramble_settings", cfg)
        return func

    return decorator


def check(gen: Generator[Any], prop: Callable[[Any], Any], settings: Optional[Settings] = None) -> None:
    """Run *prop* against values from *gen*; raise :class:`PropertyFailed` on failure.

    *prop* fails by returning ``False`` or raising.  The exception raised by
    the property at the minimal counterexample is chained as the cause.
    """

    cfg = settings or Settings()
    result = find_counterexample(
        gen,
        prop,
        max_examples=cfg.max_examples,
        seed=cfg.seed,
        max_shrinks=cfg.max_shrinks,
    )
    if result is None:
        return
    raise PropertyFailed(result.value, cfg.seed, len(result.indices)) from result.error


def given(*generators: Generator[Any]) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Run the decorated test once per drawn example, shrinking on failure.

    Any exception, ``pytest.fail`` included, counts as a failure; the
    shrunk example is reported as :class:`PropertyFailed`.
    """

    combined = tuples(*generators)

    def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> None:
            cfg: Settings = getattr(wrapper, "_bramble_settings", None) or Settings()
            check(combined, lambda drawn: func(*args, *drawn, **kwargs), cfg)

        wrapper.__signature__ = inspect.Signature(parameters=[])
        return wrapper

    return decorator


__all__ = ["PropertyFailed", "Settings", "check", "given", "settings"]
