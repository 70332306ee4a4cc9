"""Simulated elevation service for terrain profiles.

There is no real elevation data source. Profiles are synthesized from a
smoothed random walk seeded by the start coordinate:
- Running elevation seeded from sin/cos of the start coordinate
- Per-sample random step plus a large-scale sine trend ("hills")
- Running elevation floored at sea level
- Uniform per-sample noise on the emitted value (also floored at sea level)

The walk is sequential and order dependent. Output differs between calls
unless a seeded random source is injected.

The call is asynchronous and includes a configurable artificial delay that
models a round trip to a data provider, so a real provider can replace it
without changing callers.
"""

import asyncio
import logging
import random
from math import cos, sin
from typing import Protocol

from geoprofile.constants import ProfileConfig
from geoprofile.core.coordinate_formatter import CoordinateFormatter
from geoprofile.core.geo_calculator import GeoCalculator
from geoprofile.model.coordinate import Coordinate
from geoprofile.model.elevation_point import ElevationPoint

logger = logging.getLogger(__name__)


class RandomSource(Protocol):
    """Anything with a random() method returning floats in [0, 1)."""

    def random(self) -> float: ...


class ElevationServiceError(RuntimeError):
    """Raised when a profile cannot be produced."""


class ElevationService:
    """Synthesizes elevation profiles between two coordinates.

    Example:
        service = ElevationService(delay_s=0)
        points = asyncio.run(service.fetch_profile(start=a, end=b))
    """

    def __init__(
        self,
        rng: RandomSource | None = None,
        delay_s: float = ProfileConfig.SIMULATED_DELAY_S,
        num_samples: int = ProfileConfig.NUM_SAMPLES,
    ) -> None:
        """Initialize elevation service.

        Args:
            rng: Random source for the terrain walk (defaults to module random)
            delay_s: Simulated provider latency in seconds (0 in tests)
            num_samples: Intervals per segment, giving num_samples + 1 points
        """
        if num_samples <= 0:
            raise ValueError(f"num_samples must be positive, got {num_samples}")
        if delay_s < 0:
            raise ValueError(f"delay_s cannot be negative, got {delay_s}")
        self.rng: RandomSource = rng if rng is not None else random.Random()
        self.delay_s = delay_s
        self.num_samples = num_samples

    @staticmethod
    def seed_elevation_m(start: Coordinate) -> float:
        """Starting elevation of the random walk, never below sea level."""
        return max(
            ProfileConfig.SEA_LEVEL_M,
            sin(start.lat * ProfileConfig.SEED_FREQUENCY) * ProfileConfig.SEED_AMPLITUDE_M
            + cos(start.lon * ProfileConfig.SEED_FREQUENCY) * ProfileConfig.SEED_AMPLITUDE_M
            + ProfileConfig.SEED_BASE_M,
        )

    @staticmethod
    def trend_m(distance_m: float, total_distance_m: float) -> float:
        """Large-scale hill term at this distance.

        A zero-length segment has no trend.
        """
        if total_distance_m == 0:
            return 0.0
        return sin(distance_m / (total_distance_m / ProfileConfig.TREND_PERIODS)) * ProfileConfig.TREND_AMPLITUDE_M

    def synthesize(self, start: Coordinate, end: Coordinate) -> list[ElevationPoint]:
        """Build the profile synchronously (no simulated delay).

        Args:
            start: Segment start
            end: Segment end

        Returns:
            num_samples + 1 ElevationPoints from distance 0 to the segment length.
        """
        total_distance = GeoCalculator.distance_between(start=start, end=end)
        coords = GeoCalculator.sample_segment(start=start, end=end, samples=self.num_samples)

        current_elevation = self.seed_elevation_m(start=start)
        decimals = ProfileConfig.ROUND_DECIMALS
        points = []

        for index, coord in enumerate(coords):
            dist = (index / self.num_samples) * total_distance

            noise = self.rng.random() * 2 * ProfileConfig.NOISE_M - ProfileConfig.NOISE_M
            terrain_trend = self.trend_m(distance_m=dist, total_distance_m=total_distance)

            # Adjust elevation gradually to look connected
            current_elevation += (self.rng.random() - 0.5) * ProfileConfig.WALK_STEP_M + (
                terrain_trend * ProfileConfig.TREND_WEIGHT
            )
            if current_elevation < ProfileConfig.SEA_LEVEL_M:
                current_elevation = ProfileConfig.SEA_LEVEL_M

            # Noise may not push an emitted sample below sea level either
            elevation = max(current_elevation + noise, ProfileConfig.SEA_LEVEL_M)
            points.append(
                ElevationPoint(
                    distance_m=CoordinateFormatter.round_half_up(dist, decimals),
                    elevation_m=CoordinateFormatter.round_half_up(elevation, decimals),
                    location=coord,
                )
            )

        return points

    async def fetch_profile(self, start: Coordinate, end: Coordinate) -> list[ElevationPoint]:
        """Produce the elevation profile for a segment.

        Raises:
            ElevationServiceError: If the profile cannot be produced.
        """
        logger.info(f"[PROFILE] Fetching profile {start!r} -> {end!r}")
        if self.delay_s > 0:
            await asyncio.sleep(self.delay_s)
        try:
            points = self.synthesize(start=start, end=end)
        except Exception as e:
            raise ElevationServiceError(f"Profile synthesis failed: {type(e).__name__}: {e}") from e
        logger.info(f"[PROFILE] Generated {len(points)} points over {points[-1].distance_m:.1f}m")
        return points
