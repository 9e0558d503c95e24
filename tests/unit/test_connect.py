"""Unit tests for curve_lib.analysis.connect.

Tests the greedy endpoint connection:
    - EndpointConnector.find_match: closest pair, tolerance, tie-break
    - join_curves: orientation of joined curves
    - EndpointConnector.connect: merge counts, idempotence, cleanup
"""

import unittest
from collections import deque

from shapely.geometry import MultiLineString

from curve_lib.analysis.connect import EndpointConnector, connect_curves, join_curves
from curve_lib.domain.units import FEET


def make_line(start: tuple, end: tuple) -> list[tuple]:
    """Create a two-point curve."""
    return [start, end]


class TestFindMatch(unittest.TestCase):
    """Tests for EndpointConnector.find_match."""

    def test_single_curve_has_no_match(self):
        connector = EndpointConnector(1.0)
        self.assertIsNone(connector.find_match(deque([make_line((0, 0), (1, 0))])))

    def test_closest_pair_wins(self):
        connector = EndpointConnector(5.0)
        worklist = deque([
            make_line((0, 0), (10, 0)),
            make_line((13, 0), (20, 0)),
            make_line((11, 0), (11, 5)),
        ])
        match = connector.find_match(worklist)
        self.assertEqual(match.candidate, 2)
        self.assertEqual((match.anchor_side, match.candidate_side), ('end', 'start'))
        self.assertEqual(match.distance, 1.0)

    def test_tolerance_is_exclusive(self):
        connector = EndpointConnector(1.0)
        worklist = deque([make_line((0, 0), (1, 0)), make_line((2, 0), (3, 0))])
        self.assertIsNone(connector.find_match(worklist))

    def test_tie_prefers_first_candidate_and_combination(self):
        """Equal distances resolve to the earliest candidate, then to the
        combination order start/start, start/end, end/start, end/end."""
        connector = EndpointConnector(1.0)
        worklist = deque([
            make_line((0, 0), (10, 0)),
            make_line((10, 0), (20, 0)),
            make_line((0, 0), (-10, 0)),
        ])
        match = connector.find_match(worklist)
        self.assertEqual(match.candidate, 1)
        self.assertEqual((match.anchor_side, match.candidate_side), ('end', 'start'))

    def test_units_scale_distances(self):
        """1 foot apart is 0.3048 m, inside a 0.5 m tolerance."""
        connector = EndpointConnector(0.5, FEET)
        worklist = deque([make_line((0, 0), (10, 0)), make_line((11, 0), (20, 0))])
        self.assertIsNotNone(connector.find_match(worklist))


class TestJoinCurves(unittest.TestCase):
    """Tests for join_curves orientation."""

    def setUp(self):
        self.a = [(0, 0), (1, 0)]
        self.b = [(2, 0), (3, 0)]

    def test_end_start(self):
        self.assertEqual(join_curves(self.a, self.b, 'end', 'start'), [(0, 0), (1, 0), (2, 0), (3, 0)])

    def test_end_end(self):
        self.assertEqual(join_curves(self.a, self.b, 'end', 'end'), [(0, 0), (1, 0), (3, 0), (2, 0)])

    def test_start_start(self):
        self.assertEqual(join_curves(self.a, self.b, 'start', 'start'), [(1, 0), (0, 0), (2, 0), (3, 0)])

    def test_start_end(self):
        self.assertEqual(join_curves(self.a, self.b, 'start', 'end'), [(1, 0), (0, 0), (3, 0), (2, 0)])

    def test_inputs_not_mutated(self):
        join_curves(self.a, self.b, 'start', 'end')
        self.assertEqual(self.a, [(0, 0), (1, 0)])
        self.assertEqual(self.b, [(2, 0), (3, 0)])


class TestConnect(unittest.TestCase):
    """Tests for EndpointConnector.connect."""

    def test_negative_tolerance_rejected(self):
        with self.assertRaises(ValueError):
            EndpointConnector(-1.0)

    def test_near_endpoints_merge(self):
        curves = [[(0, 0), (1, 0)], [(1, 0.0000005), (2, 0)]]
        result = connect_curves(curves, 1.0)
        self.assertEqual(len(result), 1)
        self.assertEqual(len(result[0]), 4)

    def test_zero_tolerance_keeps_separate(self):
        curves = [[(0, 0), (1, 0)], [(1, 0.0000005), (2, 0)]]
        self.assertEqual(len(connect_curves(curves, 0.0)), 2)

    def test_merge_reduces_count_by_one(self):
        curves = [
            [(0, 0), (0, 5), (5, 5)],
            [(5, 5.2), (8, 9), (12, 9)],
            [(50, 50), (60, 50), (60, 60)],
        ]
        result = connect_curves(curves, 0.5)
        self.assertEqual(len(result), 2)
        self.assertEqual(sum(len(c) for c in result), 9)

    def test_chain_of_fragments(self):
        fragments = [
            [(0, 0), (1, 0)],
            [(3, 1), (2, 1)],
            [(1, 0), (2, 1)],
        ]
        result = connect_curves(fragments, 0.01)
        self.assertEqual(len(result), 1)
        self.assertEqual(set(result[0]), {(0.0, 0.0), (1.0, 0.0), (2.0, 1.0), (3.0, 1.0)})

    def test_idempotent(self):
        curves = [
            [(0, 0), (1, 0)], [(1, 0), (1, 1)], [(5, 5), (6, 6)],
            [(6, 6.1), (7, 5)], [(20, 20), (21, 20)],
        ]
        once = connect_curves(curves, 0.5)
        twice = connect_curves(once, 0.5)
        self.assertEqual(once, twice)

    def test_merged_spike_keeps_distinct_positions(self):
        """Two copies of one segment in opposite directions join into an out-and-back curve."""
        result = connect_curves([[(0, 0), (0, 5)], [(0, 5), (0, 0)]], 0.1)
        self.assertEqual(len(result), 1)
        self.assertEqual(len(result[0]), 3)
        self.assertEqual(set(result[0]), {(0.0, 0.0), (0.0, 5.0)})

    def test_degenerate_members_dropped(self):
        result = connect_curves([[(0, 0)], [(5, 5), (5, 5)], [(0, 0), (1, 1)]], 0.0)
        self.assertEqual(result, [[(0.0, 0.0), (1.0, 1.0)]])

    def test_accepts_shapely(self):
        multi = MultiLineString([[(0, 0), (1, 0)], [(1, 0), (1, 1)]])
        self.assertEqual(len(connect_curves(multi, 0.1)), 1)

    def test_input_not_mutated(self):
        curves = [[(0, 0), (1, 0)], [(1, 0), (1, 1)]]
        connect_curves(curves, 0.1)
        self.assertEqual(curves, [[(0, 0), (1, 0)], [(1, 0), (1, 1)]])


if __name__ == '__main__':
    unittest.main()
