"""Shared pytest fixtures for the curve_lib test suite.

Fixtures:
    square_ring: Closed 10 x 10 square ring starting at the origin
    square_region: The same square as a polygon (list of rings)
    donut_region: 20 x 20 square with a 4 x 4 hole in the middle
    fragments: Open curves that touch end to end in shuffled order
    nested_ring_set: BufferRingSet with a square and a diamond inside it
    rng: Seeded numpy Generator
    write_json: Helper writing an object to a JSON file under tmp_path

Markers:
    slow: Mark test as slow-running (skip with -m "not slow")
"""

import json
import sys
from pathlib import Path

import numpy as np
import pytest

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from curve_lib.domain.rings import BufferRingSet  # noqa: E402


# -----------------------------------------------------------------------------
# Pytest Markers
# -----------------------------------------------------------------------------

def pytest_configure(config):
    """Register custom pytest markers."""
    config.addinivalue_line(
        "markers", "slow: mark test as slow-running (deselect with '-m \"not slow\"')"
    )


# -----------------------------------------------------------------------------
# Geometry Fixtures
# -----------------------------------------------------------------------------

def make_square(x0: float, y0: float, side: float) -> list:
    """Closed, counter-clockwise square ring."""
    return [
        (x0, y0), (x0 + side, y0), (x0 + side, y0 + side), (x0, y0 + side), (x0, y0)
    ]


@pytest.fixture
def square_ring():
    """Return a closed 10 x 10 square ring.

    Returns:
        list[tuple]: 5 positions, first == last.
    """
    return make_square(0.0, 0.0, 10.0)


@pytest.fixture
def square_region(square_ring):
    """Return the 10 x 10 square as a polygon (list of rings)."""
    return [square_ring]


@pytest.fixture
def donut_region():
    """Return a 20 x 20 square with a centered 4 x 4 hole."""
    return [make_square(0.0, 0.0, 20.0), make_square(8.0, 8.0, 4.0)[::-1]]


@pytest.fixture
def fragments():
    """Return open curves that form one polyline when joined.

    The pieces are out of order and the middle one is reversed.
    """
    return [
        [(0.0, 0.0), (1.0, 0.0)],
        [(3.0, 1.0), (2.0, 1.0)],
        [(1.0, 0.0), (2.0, 1.0)],
    ]


@pytest.fixture
def nested_ring_set():
    """Return a ring set with a 10 x 10 square at depth 0 and a diamond of
    radius 3 at depth 1 inside it."""
    ring_set = BufferRingSet()
    ring_set.add(0, 0, make_square(0.0, 0.0, 10.0))
    ring_set.add(0, 1, [(5.0, 2.0), (8.0, 5.0), (5.0, 8.0), (2.0, 5.0), (5.0, 2.0)])
    return ring_set


@pytest.fixture
def rng():
    """Return a seeded numpy Generator."""
    return np.random.default_rng(1234)


# -----------------------------------------------------------------------------
# File Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture
def write_json(tmp_path):
    """Return a helper that writes an object to a JSON file in tmp_path.

    Example:
        def test_reads(write_json):
            path = write_json('curves.json', [[[0, 0], [1, 0]]])
    """
    def _write(name, obj):
        path = tmp_path / name
        path.write_text(json.dumps(obj))
        return str(path)
    return _write
