from hypothesis import given, settings, strategies as st

from gpxstats.geometry import Position, distance_between, path_length
from gpxstats.route import Route
from gpxstats.track import Track

from conftest import route_gpx, track_gpx

valid_lat = st.floats(-85.0, 85.0)
valid_lon = st.floats(-180.0, 180.0)
valid_ele = st.floats(-400.0, 9000.0)
valid_position = st.builds(
    Position, latitude=valid_lat, longitude=valid_lon, elevation=valid_ele
)

# Points clustered in a small area so that merging actually happens
local_point = st.tuples(
    st.floats(51.0, 51.001), st.floats(-1.0, -0.999), st.floats(0.0, 50.0)
)
local_points = st.lists(local_point, min_size=1, max_size=25)
granularities = st.floats(0.0, 40.0)


class TestDistanceProperties:
    @given(valid_position, valid_position)
    def test_distance_is_non_negative(self, pos1, pos2):
        assert distance_between(pos1, pos2) >= 0

    @given(valid_position)
    def test_distance_to_self_is_zero(self, pos):
        assert distance_between(pos, pos) == 0

    @given(valid_position, valid_position)
    def test_distance_is_symmetric(self, pos1, pos2):
        assert abs(distance_between(pos1, pos2) - distance_between(pos2, pos1)) < 1e-6

    @given(valid_position, valid_position)
    def test_path_length_at_least_surface_distance(self, pos1, pos2):
        assert path_length(pos1, pos2) >= distance_between(pos1, pos2) - 1e-6


class TestRouteProperties:
    @settings(max_examples=50, deadline=None)
    @given(local_points, granularities)
    def test_length_and_height_inequalities(self, points, granularity):
        route = Route(route_gpx(points), is_path=False, granularity=granularity)
        assert route.total_length() >= route.net_length() - 1e-6
        assert route.total_height_gain() >= route.net_height_gain() - 1e-9

    @settings(max_examples=50, deadline=None)
    @given(local_points, granularities)
    def test_no_adjacent_duplicates(self, points, granularity):
        route = Route(route_gpx(points), is_path=False, granularity=granularity)
        for pos1, pos2 in zip(route.positions, route.positions[1:]):
            assert not route.is_same_location(pos1, pos2)

    @settings(max_examples=50, deadline=None)
    @given(local_points, granularities)
    def test_merging_is_idempotent(self, points, granularity):
        route = Route(route_gpx(points), is_path=False, granularity=granularity)
        again = Route(
            route_gpx(route.positions), is_path=False, granularity=granularity
        )
        assert again.positions == route.positions

    @settings(max_examples=50, deadline=None)
    @given(local_points, granularities)
    def test_gradients_are_ordered(self, points, granularity):
        route = Route(route_gpx(points), is_path=False, granularity=granularity)
        assert -90.0 <= route.min_gradient() <= route.max_gradient() <= 90.0
        assert route.steepest_gradient() == max(
            abs(route.min_gradient()), abs(route.max_gradient())
        )

    @settings(max_examples=50, deadline=None)
    @given(st.text(alphabet="abcdefgh", min_size=1, max_size=8))
    def test_unknown_name_visited_zero_times(self, name):
        route = Route(
            route_gpx([(0.0, 0.0, 0.0, "KNOWN")]),
            is_path=False,
            granularity=1.0,
        )
        assert route.times_visited(name) == 0


class TestTrackProperties:
    @settings(max_examples=50, deadline=None)
    @given(
        st.lists(
            st.tuples(local_point, st.integers(0, 120)), min_size=1, max_size=25
        ),
        granularities,
    )
    def test_time_identity_and_ordering(self, samples, granularity):
        points = []
        seconds = 0
        for (lat, lon, ele), step in samples:
            seconds += step
            points.append((lat, lon, ele, seconds))
        track = Track(track_gpx([points]), is_path=False, granularity=granularity)

        assert track.total_time() == track.resting_time() + track.travelling_time()
        assert track.total_time() == seconds - samples[0][1]
        assert track.arrived[0] == 0
        for i in range(len(track)):
            assert track.arrived[i] <= track.departed[i]
            if i + 1 < len(track):
                assert track.departed[i] <= track.arrived[i + 1]
