import os
import sys
import time
from dataclasses import dataclass

from tqdm import tqdm

sys.path.insert(0, os.path.join(os.path.dirname(os.path.dirname(__file__)), "src"))
from bramble import Random, combine
from bramble.strategies import integers, lists


@dataclass(frozen=True)
class Date:
    year: int
    month: int
    day: int


def dates():
    return combine(
        lambda c: Date(
            year=c.of(integers(min_value=0, max_value=2999)),
            month=c.of(integers(min_value=0, max_value=11)),
            day=c.of(integers(min_value=0, max_value=31)),
        )
    )


def many_dates():
    return lists(dates(), max_size=19)


def force_case(name, seed, depth):
    tree = many_dates().sample(Random(seed))
    start = time.perf_counter()
    count = tree.count_nodes(depth)
    duration = time.perf_counter() - start
    print(f"{name}: forced {count} nodes to depth {depth} in {duration:.4f}s")
    return count, duration


def generate_case(name, count):
    gen = many_dates()
    start = time.perf_counter()
    for seed in tqdm(range(count), desc=name, unit="value", ncols=80):
        gen.sample(Random(seed))
    duration = time.perf_counter() - start
    print(f"{name}: generated {count} values in {duration:.4f}s")
    return duration


def run():
    # Failing path: a shrink search forces part of the tree.
    for depth in (1, 2):
        force_case(f"shrink-depth-{depth}", seed=1, depth=depth)

    # Passing path: only the record pass runs.
    for count in (100, 1000):
        generate_case(f"generate-{count}", count)


if __name__ == "__main__":
    run()
