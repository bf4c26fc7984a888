"""Points in three dimensions, clouds of them, and loading and smoothing."""

from __future__ import annotations

import heapq
import math
from dataclasses import dataclass, field
from numbers import Real
from typing import Iterable, Sequence

from .util import parse_number

__all__ = [
    "Point",
    "PointCloud",
    "split_line",
    "load_csv_file",
    "range_neighbours",
    "nearest_neighbours",
    "smoothen_cloud",
]


@dataclass(eq=False)
class Point:
    """A point (or vector) in 3D with optional cluster labels."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    id: int = -1
    cluster_ids: set[int] = field(default_factory=set)

    @classmethod
    def from_sequence(cls, values: Sequence[float], cluster_ids: Iterable[int] = ()) -> "Point":
        """Build a point from exactly three coordinates."""
        if len(values) != 3:
            raise ValueError("point must be of dimension 3")
        x, y, z = values
        return cls(float(x), float(y), float(z), cluster_ids=set(cluster_ids))

    def as_vector(self) -> list[float]:
        return [self.x, self.y, self.z]

    def norm(self) -> float:
        return math.sqrt(self.squared_norm())

    def squared_norm(self) -> float:
        return self.x * self.x + self.y * self.y + self.z * self.z

    def __add__(self, other: "Point") -> "Point":
        if not isinstance(other, Point):
            return NotImplemented
        return Point(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: "Point") -> "Point":
        if not isinstance(other, Point):
            return NotImplemented
        return Point(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, other):
        """Dot product with a point, or scaling by a number."""
        if isinstance(other, Point):
            return self.x * other.x + self.y * other.y + self.z * other.z
        if isinstance(other, Real):
            return Point(other * self.x, other * self.y, other * self.z)
        return NotImplemented

    def __rmul__(self, other):
        if isinstance(other, Real):
            return Point(other * self.x, other * self.y, other * self.z)
        return NotImplemented

    def __truediv__(self, c: float) -> "Point":
        return Point(self.x / c, self.y / c, self.z / c)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Point):
            return NotImplemented
        return self.x == other.x and self.y == other.y and self.z == other.z

    def __str__(self) -> str:
        return f"{self.x:g} {self.y:g} {self.z:g}"


class PointCloud(list):
    """A list of points that knows whether it was read as 2D data."""

    def __init__(self, points: Iterable[Point] = (), is2d: bool = False):
        super().__init__(points)
        self.is2d = is2d


def split_line(line: str, delimiter: str) -> list[str]:
    """Split *line* at *delimiter*; a single trailing empty field is dropped."""
    parts = line.split(delimiter)
    if parts and parts[-1] == "":
        parts.pop()
    return parts


def load_csv_file(path, delimiter: str = " ", skip: int = 0) -> PointCloud:
    """Read a point cloud from a delimited text file.

    Lines starting with '#' and blank lines are ignored, columns beyond
    the third are ignored, and two-column files produce a 2D cloud with
    z = 0. Raises ``ValueError`` on malformed content.
    """
    with open(path, encoding="utf-8", newline="") as handle:
        lines = handle.read().split("\n")

    cloud = PointCloud()
    count2d = 0
    for row, line in enumerate(lines[skip:], start=skip + 1):
        if not line or line.startswith("#") or not line.strip("\n\r\t "):
            continue
        items = split_line(line, delimiter)
        if len(items) < 2:
            raise ValueError(f"row {row}: To few columns!")
        if len(items) == 2:
            items.append("0")
            count2d += 1
        coords = []
        for column, item in enumerate(items[:3], start=1):
            try:
                coords.append(parse_number(item))
            except ValueError as exc:
                raise ValueError(f"row {row} column {column}: {exc}") from exc
        cloud.append(Point(*coords))

    if count2d and count2d != len(cloud):
        raise ValueError("Mixed 2d and 3d points.")
    cloud.is2d = bool(count2d)
    return cloud


def range_neighbours(points: Sequence[Point], centre: Point, radius: float) -> list[int]:
    """Indices of all points within *radius* of *centre* (inclusive)."""
    limit = radius * radius
    return [i for i, p in enumerate(points) if (p - centre).squared_norm() <= limit]


def nearest_neighbours(points: Sequence[Point], centre: Point, k: int) -> list[tuple[int, float]]:
    """The *k* points nearest to *centre* as (index, distance), nearest first."""
    if k <= 0:
        return []
    target = centre.as_vector()
    ranked = heapq.nsmallest(
        k, ((math.dist(p.as_vector(), target), i) for i, p in enumerate(points))
    )
    return [(i, d) for d, i in ranked]


def smoothen_cloud(cloud: Sequence[Point], radius: float) -> PointCloud:
    """Replace every point by the centroid of its neighbours within *radius*.

    The result has the same size and order as *cloud*. A radius of zero
    returns an unsmoothed copy.
    """
    if radius == 0:
        return PointCloud(
            (Point(p.x, p.y, p.z, p.id, set(p.cluster_ids)) for p in cloud),
            getattr(cloud, "is2d", False),
        )

    smoothed = PointCloud()
    for point in cloud:
        neighbours = [cloud[i] for i in range_neighbours(cloud, point, radius)]
        size = len(neighbours)
        smoothed.append(
            Point(
                sum(p.x for p in neighbours) / size,
                sum(p.y for p in neighbours) / size,
                sum(p.z for p in neighbours) / size,
            )
        )
    return smoothed