"""Tests for the simulated elevation service.

Tests: ElevationService synthesis and async fetch
Focus: Sample count, distance ordering, sea-level floor, injected randomness
"""

import asyncio
import math
import random
import time

import pytest
from hypothesis import given, settings, strategies as st

from fakes import BrokenRandom, FailingElevationService, FixedRandom, SequenceRandom
from geoprofile.constants import ProfileConfig
from geoprofile.core.coordinate_formatter import CoordinateFormatter
from geoprofile.core.elevation_service import ElevationService, ElevationServiceError
from geoprofile.core.geo_calculator import GeoCalculator
from geoprofile.model.coordinate import Coordinate


class TestProfileShape:
    """Structural properties of every synthesized profile."""

    def test_point_count_is_samples_plus_one(self, elevation_service: ElevationService) -> None:
        points = elevation_service.synthesize(start=Coordinate(lat=0, lon=0), end=Coordinate(lat=0, lon=1))
        assert len(points) == ProfileConfig.NUM_SAMPLES + 1 == 51

    def test_distances_from_zero_to_segment_length(self, elevation_service: ElevationService) -> None:
        start, end = Coordinate(lat=0, lon=0), Coordinate(lat=0, lon=1)
        points = elevation_service.synthesize(start=start, end=end)

        assert points[0].distance_m == 0.0
        assert points[-1].distance_m == pytest.approx(111_195, abs=1.0)
        assert points[-1].distance_m == pytest.approx(GeoCalculator.distance_between(start=start, end=end), abs=0.1)

    def test_distances_non_decreasing(self, elevation_service: ElevationService) -> None:
        points = elevation_service.synthesize(start=Coordinate(lat=46.9, lon=10.2), end=Coordinate(lat=47.1, lon=10.5))
        distances = [p.distance_m for p in points]
        assert distances == sorted(distances)

    def test_locations_run_from_start_to_end(self, elevation_service: ElevationService) -> None:
        start, end = Coordinate(lat=10, lon=20), Coordinate(lat=12, lon=26)
        points = elevation_service.synthesize(start=start, end=end)
        assert points[0].location == start
        assert points[-1].location == end
        assert points[25].location.lat == pytest.approx(11.0)

    def test_values_rounded_to_one_decimal(self, elevation_service: ElevationService) -> None:
        points = elevation_service.synthesize(start=Coordinate(lat=0, lon=0), end=Coordinate(lat=0.3, lon=0.7))
        for p in points:
            assert p.distance_m == round(p.distance_m, 1)
            assert p.elevation_m == round(p.elevation_m, 1)

    def test_zero_length_segment(self, elevation_service: ElevationService) -> None:
        """Start == end gives 51 points at distance 0 and finite elevations."""
        here = Coordinate(lat=5, lon=5)
        points = elevation_service.synthesize(start=here, end=here)
        assert len(points) == 51
        assert all(p.distance_m == 0.0 for p in points)
        assert all(p.elevation_m >= 0 for p in points)


class TestSeaLevelFloor:
    """No emitted elevation is ever negative."""

    def test_seed_is_floored(self) -> None:
        """The seed formula bottoms out at sea level."""
        for lat in range(-90, 91, 7):
            for lon in range(-180, 181, 11):
                assert ElevationService.seed_elevation_m(Coordinate(lat=lat, lon=lon)) >= 0

    def test_always_falling_walk_stays_at_sea_level(self) -> None:
        """random() == 0 makes every step about -25 m and every noise -10 m.

        The start point is chosen so that sin(lat*10) == -1 and cos(lon*10) == -1,
        putting the seed at sea level; the walk can then never climb.
        """
        start = Coordinate(lat=-math.pi / 20, lon=math.pi / 10)
        end = Coordinate(lat=-math.pi / 20 + 0.5, lon=math.pi / 10 + 0.5)
        service = ElevationService(rng=FixedRandom(0.0), delay_s=0)
        points = service.synthesize(start=start, end=end)
        assert all(p.elevation_m == 0.0 for p in points)

    @pytest.mark.parametrize("value", [0.0, 0.1, 0.5, 0.9, 0.999])
    def test_never_negative_for_any_fixed_source(self, value: float) -> None:
        service = ElevationService(rng=FixedRandom(value), delay_s=0)
        points = service.synthesize(start=Coordinate(lat=-33.9, lon=18.4), end=Coordinate(lat=-34.2, lon=18.9))
        assert all(p.elevation_m >= 0 for p in points)


class TestRandomSource:
    """Injected randomness makes synthesis deterministic."""

    def test_same_source_same_profile(self) -> None:
        values = [0.1, 0.7, 0.3, 0.9, 0.5]
        a = ElevationService(rng=SequenceRandom(values), delay_s=0)
        b = ElevationService(rng=SequenceRandom(values), delay_s=0)
        start, end = Coordinate(lat=27.9, lon=86.9), Coordinate(lat=28.0, lon=87.0)
        assert a.synthesize(start=start, end=end) == b.synthesize(start=start, end=end)

    def test_two_draws_per_sample(self) -> None:
        rng = SequenceRandom([0.5])
        ElevationService(rng=rng, delay_s=0).synthesize(start=Coordinate(lat=0, lon=0), end=Coordinate(lat=0, lon=1))
        assert rng.calls == 2 * 51

    def test_neutral_source_first_sample_is_seed(self) -> None:
        """With random() == 0.5 and no trend at distance 0, sample 0 equals the seed."""
        start = Coordinate(lat=1.0, lon=2.0)
        service = ElevationService(rng=FixedRandom(0.5), delay_s=0)
        points = service.synthesize(start=start, end=Coordinate(lat=1.0, lon=3.0))
        assert points[0].elevation_m == CoordinateFormatter.round_half_up(ElevationService.seed_elevation_m(start), 1)

    def test_trend_is_zero_for_zero_length(self) -> None:
        assert ElevationService.trend_m(distance_m=0.0, total_distance_m=0.0) == 0.0


class TestValidation:
    def test_rejects_non_positive_samples(self) -> None:
        with pytest.raises(ValueError):
            ElevationService(num_samples=0)

    def test_rejects_negative_delay(self) -> None:
        with pytest.raises(ValueError):
            ElevationService(delay_s=-1)

    def test_custom_sample_count(self) -> None:
        service = ElevationService(rng=FixedRandom(0.5), delay_s=0, num_samples=10)
        points = service.synthesize(start=Coordinate(lat=0, lon=0), end=Coordinate(lat=0, lon=1))
        assert len(points) == 11


class TestFetchProfile:
    """Async entry point."""

    def test_fetch_matches_synthesize(self) -> None:
        start, end = Coordinate(lat=0, lon=0), Coordinate(lat=0, lon=1)
        fetched = asyncio.run(ElevationService(rng=FixedRandom(0.3), delay_s=0).fetch_profile(start=start, end=end))
        direct = ElevationService(rng=FixedRandom(0.3), delay_s=0).synthesize(start=start, end=end)
        assert fetched == direct

    def test_zero_delay_does_not_sleep(self) -> None:
        service = ElevationService(rng=FixedRandom(0.5), delay_s=0)
        t0 = time.perf_counter()
        asyncio.run(service.fetch_profile(start=Coordinate(lat=0, lon=0), end=Coordinate(lat=0, lon=1)))
        assert time.perf_counter() - t0 < 0.5

    def test_failure_is_wrapped(self) -> None:
        service = FailingElevationService(failures=1)
        with pytest.raises(ElevationServiceError, match="provider unavailable"):
            asyncio.run(service.fetch_profile(start=Coordinate(lat=0, lon=0), end=Coordinate(lat=0, lon=1)))

    def test_any_failure_is_wrapped(self) -> None:
        service = ElevationService(rng=BrokenRandom(), delay_s=0)
        with pytest.raises(ElevationServiceError, match="RuntimeError: entropy source offline"):
            asyncio.run(service.fetch_profile(start=Coordinate(lat=0, lon=0), end=Coordinate(lat=0, lon=1)))


coordinates = st.builds(
    Coordinate,
    lat=st.floats(min_value=-89, max_value=89, allow_nan=False),
    lon=st.floats(min_value=-180, max_value=180, allow_nan=False),
)


class TestProfileInvariants:
    """Shape guarantees over arbitrary segments and seeds."""

    @settings(max_examples=50, deadline=None)
    @given(start=coordinates, end=coordinates, seed=st.integers(min_value=0, max_value=2**32 - 1))
    def test_any_segment_any_seed(self, start: Coordinate, end: Coordinate, seed: int) -> None:
        service = ElevationService(rng=random.Random(seed), delay_s=0)
        points = service.synthesize(start=start, end=end)

        assert len(points) == 51
        assert points[0].distance_m == 0
        distances = [p.distance_m for p in points]
        assert distances == sorted(distances)
        assert all(p.elevation_m >= 0 for p in points)
        assert points[-1].distance_m == pytest.approx(GeoCalculator.distance_between(start=start, end=end), abs=0.05)
