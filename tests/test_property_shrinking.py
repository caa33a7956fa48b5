import os
import sys

import hypothesis.strategies as st
from hypothesis import given, settings

sys.path.insert(0, os.path.join(os.path.dirname(os.path.dirname(__file__)), "src"))
from bramble import Random, combine, shrink
from bramble import strategies as bst

seeds = st.integers(min_value=0, max_value=2**32)


def vector(width, count):
    leaf = bst.integers(min_value=0, max_value=width - 1)
    return combine(lambda c: tuple(c.of(leaf) for _ in range(count)))


@given(seeds, st.integers(min_value=1, max_value=4))
@settings(max_examples=50, deadline=None)
def test_same_seed_gives_same_tree(seed, count):
    gen = vector(50, count)
    one = gen.sample(Random(seed))
    two = gen.sample(Random(seed))
    assert one.value == two.value
    assert [c.value for c in one.children()] == [c.value for c in two.children()]


@given(seeds, st.integers(min_value=1, max_value=20), st.integers(min_value=1, max_value=4))
@settings(max_examples=50, deadline=None)
def test_each_child_substitutes_exactly_one_position(seed, width, count):
    tree = vector(width, count).sample(Random(seed))
    for child in tree.children():
        changed = [i for i, (a, b) in enumerate(zip(child.value, tree.value)) if a != b]
        assert len(changed) == 1
        assert child.value[changed[0]] < tree.value[changed[0]]


@given(seeds, st.integers(min_value=1, max_value=4), st.integers(min_value=1, max_value=3))
@settings(max_examples=30, deadline=None)
def test_bounded_leaves_give_finite_trees(seed, width, count):
    tree = vector(width, count).sample(Random(seed))
    # Every edge lowers one coordinate, so no path is longer than width * count.
    depth = width * count
    assert tree.count_nodes(depth) == tree.count_nodes(depth + 5)


@given(seeds, st.integers(min_value=0, max_value=99))
@settings(max_examples=50, deadline=None)
def test_shrinking_reaches_threshold_exactly(seed, threshold):
    gen = bst.integers(min_value=0, max_value=99)
    tree = gen.sample(Random(seed))
    if tree.value < threshold:
        return
    result = shrink(tree, lambda x: x < threshold, max_shrinks=0)
    assert result.value == threshold
