import pytest
from hypothesis import given, strategies as st, assume
from greatcircle.geometry import Position
from greatcircle.geodesy import (
    cross_track_distance_to,
    destination_point,
    distance_to,
    final_bearing_to,
    initial_bearing_to,
    midpoint_to,
)

# Strategy for valid GPS coordinates
valid_lat = st.floats(-80.0, 80.0)  # Keep clear of the poles
valid_lon = st.floats(-170.0, 170.0)  # Keep clear of the antimeridian
valid_position = st.builds(Position, latitude=valid_lat, longitude=valid_lon)

# Positions within one hemisphere are never close to antipodal
hemisphere_position = st.builds(
    Position, latitude=valid_lat, longitude=st.floats(-80.0, 80.0)
)

# Offsets of up to a degree keep the pairs well away from antipodal
small_offset = st.floats(-1.0, 1.0)


@st.composite
def nearby_positions(draw):
    """A position and a second position within a degree of it."""
    start = draw(valid_position)
    end = Position(
        latitude=start.latitude + draw(small_offset),
        longitude=start.longitude + draw(small_offset),
    )
    return start, end


class TestIdentityProperties:

    @given(valid_position)
    def test_distance_to_self_is_zero(self, pos):
        """Distance from a point to itself is always zero."""
        assert distance_to(pos, pos) == 0.0

    @given(valid_position)
    def test_bearings_to_self_are_zero(self, pos):
        assert initial_bearing_to(pos, pos) == 0.0
        assert final_bearing_to(pos, pos) == 0.0

    @given(valid_position)
    def test_midpoint_with_self_is_self(self, pos):
        assert midpoint_to(pos, pos) == pos


class TestDistanceProperties:

    @given(valid_position, valid_position)
    def test_distance_is_non_negative(self, pos1, pos2):
        """Distance between any two points is always non-negative."""
        assert distance_to(pos1, pos2) >= 0

    @given(valid_position, valid_position)
    def test_distance_is_symmetric(self, pos1, pos2):
        """Distance from A to B equals distance from B to A."""
        assert distance_to(pos1, pos2) == pytest.approx(
            distance_to(pos2, pos1), rel=1e-12, abs=1e-9
        )

    @given(hemisphere_position, hemisphere_position, hemisphere_position)
    def test_triangle_inequality(self, pos1, pos2, pos3):
        """For any triangle, sum of two sides >= third side."""
        d12 = distance_to(pos1, pos2)
        d23 = distance_to(pos2, pos3)
        d13 = distance_to(pos1, pos3)

        assert d12 + d23 >= d13 - 1e-6
        assert d12 + d13 >= d23 - 1e-6
        assert d23 + d13 >= d12 - 1e-6


class TestBearingProperties:

    @given(valid_position, valid_position)
    def test_bearing_range(self, pos1, pos2):
        """Bearings are always in range [0, 360)."""
        assert 0 <= initial_bearing_to(pos1, pos2) < 360
        assert 0 <= final_bearing_to(pos1, pos2) < 360

    @given(valid_position, valid_position)
    def test_final_bearing_is_reciprocal_bearing(self, pos1, pos2):
        """Final bearing A->B is the reverse of the initial bearing B->A."""
        assume(pos1 != pos2)

        expected = (initial_bearing_to(pos2, pos1) + 180.0) % 360.0
        assert final_bearing_to(pos1, pos2) == expected


class TestProjectionProperties:

    @given(nearby_positions())
    def test_destination_round_trip(self, positions):
        """Travelling the initial bearing for the distance arrives at the end point."""
        start, end = positions

        generated = destination_point(
            start, initial_bearing_to(start, end), distance_to(start, end)
        )

        assert generated.latitude == pytest.approx(end.latitude, abs=1e-8)
        assert generated.longitude == pytest.approx(end.longitude, abs=1e-8)

    @given(nearby_positions())
    def test_midpoint_is_halfway_along_the_path(self, positions):
        start, end = positions
        half_distance = distance_to(start, end) / 2.0

        midpoint = midpoint_to(start, end)
        projected = destination_point(start, initial_bearing_to(start, end), half_distance)

        assert midpoint.latitude == pytest.approx(projected.latitude, abs=1e-8)
        assert midpoint.longitude == pytest.approx(projected.longitude, abs=1e-8)
        assert distance_to(start, midpoint) == pytest.approx(half_distance, abs=1e-6)

    @given(nearby_positions())
    def test_midpoint_lies_on_the_path(self, positions):
        start, end = positions
        assume(distance_to(start, end) > 1.0)

        midpoint = midpoint_to(start, end)
        assert cross_track_distance_to(midpoint, start, end) == pytest.approx(0.0, abs=1e-6)

    @given(valid_position, st.floats(0.0, 360.0), st.floats(0.0, 100000.0))
    def test_destination_distance_matches(self, start, bearing, distance):
        """The destination lies at the requested distance from the start."""
        generated = destination_point(start, bearing, distance)
        assert distance_to(start, generated) == pytest.approx(distance, abs=1e-6)


# Run with: pytest -v --hypothesis-show-statistics
if __name__ == "__main__":
    pytest.main([__file__, "-v"])
