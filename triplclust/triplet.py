"""Triplets of nearly collinear points and their dissimilarity."""

from __future__ import annotations

import math
from dataclasses import dataclass
from itertools import combinations
from typing import Sequence

from .pointcloud import Point, nearest_neighbours

__all__ = ["Triplet", "ScaleTripletMetric", "generate_triplets"]


@dataclass
class Triplet:
    """Three point indices with their centre, direction and collinearity error."""

    point_index_a: int
    point_index_b: int
    point_index_c: int
    center: Point
    direction: Point
    error: float

    def __lt__(self, other: "Triplet") -> bool:
        return self.error < other.error


class ScaleTripletMetric:
    """Dissimilarity between triplets, with *scale* weighting the distance term."""

    def __init__(self, scale: float):
        self.scale = scale

    def __call__(self, lhs: Triplet, rhs: Triplet) -> float:
        perpendicular_a = (
            rhs.center - lhs.center + lhs.direction * (lhs.center - rhs.center) * lhs.direction
        ).squared_norm()
        perpendicular_b = (
            lhs.center - rhs.center + rhs.direction * (rhs.center - lhs.center) * rhs.direction
        ).squared_norm()

        anglecos = min(1.0, max(-1.0, lhs.direction * rhs.direction))
        if abs(anglecos) < 1.0e-8:
            return 1.0e8
        return math.sqrt(max(perpendicular_a, perpendicular_b)) / self.scale + abs(
            math.tan(math.acos(anglecos))
        )


def generate_triplets(cloud: Sequence[Point], k: int, n: int, a: float) -> list[Triplet]:
    """Build triplets around every point of *cloud*.

    For each point the *k* nearest neighbours (the point included) are
    searched, every pair of them forms a candidate whose error
    1 - cos(angle) must not exceed *a*, and the *n* best candidates are kept.
    """
    triplets: list[Triplet] = []
    for index_b, point_b in enumerate(cloud):
        neighbours = [
            (index, cloud[index])
            for index, distance in nearest_neighbours(cloud, point_b, k)[1:]
            if distance != 0
        ]

        candidates = []
        for (index_a, point_a), (index_c, point_c) in combinations(neighbours, 2):
            direction_ab = point_b - point_a
            direction_ab = direction_ab / direction_ab.norm()
            direction_bc = point_c - point_b
            direction_bc = direction_bc / direction_bc.norm()

            error = 1.0 - direction_ab * direction_bc
            if error <= a:
                candidates.append(
                    Triplet(
                        point_index_a=index_a,
                        point_index_b=index_b,
                        point_index_c=index_c,
                        center=(point_a + point_b + point_c) / 3.0,
                        direction=direction_bc,
                        error=error,
                    )
                )

        candidates.sort(key=lambda t: t.error)
        triplets.extend(candidates[:n])
    return triplets