"""Tests for geo helpers."""

import pytest
from folio.shared.geo import distance_km, km_to_miles, parse_coordinates


def test_parse_coordinates():
    assert parse_coordinates("40.7128, -74.0060") == (40.7128, -74.006)
    assert parse_coordinates("12,34") == (12.0, 34.0)
    assert parse_coordinates("north, south") is None
    assert parse_coordinates(None) is None


def test_distance_same_point_is_zero():
    assert distance_km((51.5, -0.12), (51.5, -0.12)) == pytest.approx(0.0)


def test_distance_one_degree_of_longitude_at_equator():
    assert distance_km((0, 0), (0, 1)) == pytest.approx(111.19, abs=0.01)


def test_distance_london_to_paris():
    assert distance_km((51.5074, -0.1278), (48.8566, 2.3522)) == pytest.approx(343.5, abs=1.0)


def test_km_to_miles():
    assert km_to_miles(10) == pytest.approx(6.21371)
