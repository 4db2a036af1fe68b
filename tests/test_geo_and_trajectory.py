"""Tests for geo primitives and trajectory prediction."""

from __future__ import annotations

import pytest

from wildlife_alert.geo import great_circle_distance_km, project_point
from wildlife_alert.models import Location
from wildlife_alert.trajectory import bearing_for, predict_trajectory


def _loc(lat: float, lng: float) -> Location:
    return Location(latitude=lat, longitude=lng)


class TestGreatCircleDistance:
    def test_one_degree_of_latitude(self):
        assert great_circle_distance_km(_loc(0, 0), _loc(1, 0)) == pytest.approx(111.195, rel=1e-4)

    def test_symmetric(self):
        a, b = _loc(-3.39642, 37.676531), _loc(-3.434886, 37.783987)
        assert great_circle_distance_km(a, b) == great_circle_distance_km(b, a)

    def test_zero_for_same_point(self):
        a = _loc(-3.43, 37.78)
        assert great_circle_distance_km(a, Location(latitude=-3.43, longitude=37.78, address="x")) == 0.0

    def test_positive_for_distinct_points(self):
        assert great_circle_distance_km(_loc(0, 0), _loc(0, 0.0001)) > 0


class TestProjectPoint:
    def test_north_moves_latitude_only(self):
        p = project_point(_loc(0, 0), 0, 111)
        assert p.latitude == pytest.approx(1.0)
        assert p.longitude == pytest.approx(0.0)

    def test_east_moves_longitude_only(self):
        p = project_point(_loc(0, 0), 90, 55.5)
        assert p.latitude == pytest.approx(0.0, abs=1e-12)
        assert p.longitude == pytest.approx(0.5)

    def test_southwest(self):
        p = project_point(_loc(0, 0), 225, 111)
        assert p.latitude < 0 and p.longitude < 0


class TestPredictTrajectory:
    def test_shape_and_start(self):
        loc = _loc(-3.4349, 37.7840)
        traj = predict_trajectory(loc, "N")
        assert len(traj) == 4
        assert traj[0] == loc

    def test_distance_grows_along_sequence(self):
        loc = _loc(-3.4349, 37.7840)
        traj = predict_trajectory(loc, "NE")
        dists = [great_circle_distance_km(loc, p) for p in traj]
        assert dists[0] == 0
        assert dists[1] < dists[2] < dists[3]

    def test_default_speed_gives_six_km_per_half_hour(self):
        loc = _loc(0, 0)
        traj = predict_trajectory(loc, "N")
        assert traj[1].latitude == pytest.approx(6 / 111)
        assert traj[3].latitude == pytest.approx(18 / 111)
        assert all(p.longitude == 0 for p in traj)

    def test_custom_speed(self):
        traj = predict_trajectory(_loc(0, 0), "S", speed_kmh=4)
        assert traj[2].latitude == pytest.approx(-4 / 111)

    def test_unknown_direction_heads_north(self):
        loc = _loc(1, 1)
        assert predict_trajectory(loc, "sideways") == predict_trajectory(loc, "N")

    def test_predicted_points_are_labelled(self):
        traj = predict_trajectory(_loc(0, 0), "W")
        assert [p.address for p in traj[1:]] == [
            "Predicted position (30 min)",
            "Predicted position (60 min)",
            "Predicted position (90 min)",
        ]


class TestBearing:
    @pytest.mark.parametrize(
        "direction, bearing",
        [("N", 0), ("NE", 45), ("E", 90), ("SE", 135), ("S", 180), ("SW", 225), ("W", 270), ("NW", 315)],
    )
    def test_compass_points(self, direction, bearing):
        assert bearing_for(direction) == bearing

    def test_case_insensitive(self):
        assert bearing_for(" sw ") == 225

    def test_unknown_defaults_to_zero(self):
        assert bearing_for("NNE") == 0
