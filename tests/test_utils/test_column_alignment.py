"""Tests for column alignment utilities."""
import math

from comps_extractor.utils.column_alignment import (
    is_aligned,
    find_aligned_column,
    find_nearest_column,
    assign_column_by_position,
)


POSITIONS = {'property_name': 90.0, 'major_tenant': 200.0, 'purchaser': 540.0, 'seller': 600.0}


class TestIsAligned:
    """Test the alignment band."""

    def test_inside(self):
        assert is_aligned(503.0, 498.5, 10)

    def test_boundary_excluded(self):
        """The band is open at the threshold."""
        assert not is_aligned(510.0, 500.0, 10)
        assert is_aligned(509.99, 500.0, 10)


class TestFindAlignedColumn:
    """Test finding a column whose band contains x."""

    def test_found(self):
        assert find_aligned_column(205.0, POSITIONS, 10) == 'major_tenant'

    def test_not_found(self):
        assert find_aligned_column(400.0, POSITIONS, 10) is None

    def test_restricted_columns(self):
        """Only the listed columns are considered."""
        assert find_aligned_column(205.0, POSITIONS, 10, ['seller']) is None
        assert find_aligned_column(605.0, POSITIONS, 10, ['missing', 'seller']) == 'seller'


class TestFindNearestColumn:
    """Test nearest column lookup."""

    def test_nearest(self):
        assert find_nearest_column(560.0, POSITIONS) == ('purchaser', 20.0)

    def test_tie_goes_to_first_column(self):
        """Equidistant columns resolve to the one inserted first."""
        assert find_nearest_column(570.0, POSITIONS) == ('purchaser', 30.0)

    def test_no_columns(self):
        column, distance = find_nearest_column(100.0, {})

        assert column is None
        assert math.isinf(distance)


class TestAssignColumnByPosition:
    """Test nearest-or-fallback assignment."""

    def test_within_distance(self):
        assert assign_column_by_position(215.0, POSITIONS, 20) == 'major_tenant'

    def test_distance_limit_inclusive(self):
        assert assign_column_by_position(220.0, POSITIONS, 20) == 'major_tenant'

    def test_too_far(self):
        assert assign_column_by_position(800.0, POSITIONS, 20) == 'notes'

    def test_custom_fallback(self):
        assert assign_column_by_position(800.0, {}, 20, fallback='remarks') == 'remarks'
