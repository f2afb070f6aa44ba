"""
Shared test fixtures for the simtree test suite.
"""

import pytest

from tests.sample_tree import SampleTree, build_sample_tree


@pytest.fixture
def tree() -> SampleTree:
    """A fresh sample simulation tree for each test.

    The fixture object keeps the root alive for the duration of the test;
    nodes only hold weak references to their parents.
    """
    return build_sample_tree()
