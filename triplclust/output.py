"""Writing clustering results and debug traces as CSV or gnuplot scripts."""

from __future__ import annotations

import sys
from typing import Optional, Sequence, TextIO

from .pointcloud import Point

__all__ = [
    "compute_cluster_colour",
    "find_min_max_point",
    "debug_gnuplot",
    "cloud_to_csv",
    "clusters_to_gnuplot",
    "clusters_to_csv",
]


def _fmt(value: float) -> str:
    return f"{value:.6f}"


def _is2d(cloud) -> bool:
    return bool(getattr(cloud, "is2d", False))


def _coords(point: Point, is2d: bool, sep: str = " ") -> str:
    parts = [_fmt(point.x), _fmt(point.y)]
    if not is2d:
        parts.append(_fmt(point.z))
    return sep.join(parts)


def _axis_range(axis: str, low: float, high: float) -> str:
    # a zero-width range cannot be plotted, so it is widened
    if high > low:
        return f"set {axis}range [{_fmt(low)}:{_fmt(high)}]"
    return f"set {axis}range [{_fmt(low - 1.0)}:{_fmt(high + 1.0)}]"


def _range_lines(cloud: Sequence[Point]) -> list[str]:
    low, high = find_min_max_point(cloud)
    return [
        _axis_range("x", low.x, high.x),
        _axis_range("y", low.y, high.y),
        _axis_range("z", low.z, high.z),
    ]


def compute_cluster_colour(cluster_index: int) -> int:
    """RGB colour for a cluster, derived from its index, as a 24-bit integer."""
    scaled = cluster_index * 23
    red = int((scaled % 19) / 18.0 * 255) & 0xFF
    green = int((scaled % 7) / 6.0 * 255) & 0xFF
    blue = int((scaled % 3) / 2.0 * 255) & 0xFF
    return (red << 16) | (green << 8) | blue


def find_min_max_point(cloud: Sequence[Point]) -> tuple[Point, Point]:
    """Component-wise minimum and maximum of all points in *cloud*."""
    if not cloud:
        raise ValueError("cannot find the extent of an empty cloud")
    first = cloud[0]
    low = Point(first.x, first.y, first.z)
    high = Point(first.x, first.y, first.z)
    for p in cloud:
        low.x, high.x = min(low.x, p.x), max(high.x, p.x)
        low.y, high.y = min(low.y, p.y), max(high.y, p.y)
        low.z, high.z = min(low.z, p.z), max(high.z, p.z)
    return low, high


def debug_gnuplot(
    cloud: Sequence[Point],
    cloud_smooth: Sequence[Point],
    path="debug_smoothed.gnuplot",
) -> None:
    """Write a gnuplot script showing *cloud* in black and *cloud_smooth* in red.

    Raises ``OSError`` when the file cannot be written.
    """
    is2d = _is2d(cloud)
    if is2d:
        header = "plot "
    else:
        x_line, y_line, z_line = _range_lines(cloud)
        header = f"{x_line}\n{y_line}\n{z_line}\n splot "

    lines = [
        header
        + "'-' with points lc 'black' title 'original', "
        "'-' with points lc 'red' title 'smoothed'"
    ]
    lines.extend(_coords(p, is2d) for p in cloud)
    lines.append("e")
    lines.extend(_coords(p, is2d) for p in cloud_smooth)
    lines.append("e")
    lines.append("pause mouse keypress")

    with open(path, "w", encoding="utf-8") as handle:
        handle.write("\n".join(lines) + "\n")


def cloud_to_csv(cloud: Sequence[Point], path="debug_smoothed.csv") -> None:
    """Write *cloud* as comma separated coordinates to *path*.

    Raises ``OSError`` when the file cannot be written.
    """
    is2d = _is2d(cloud)
    with open(path, "w", encoding="utf-8") as handle:
        handle.write("# x,y,z\n")
        for p in cloud:
            handle.write(f"{_fmt(p.x)},{_fmt(p.y)}")
            if not is2d:
                handle.write(f",{_fmt(p.z)}\n")


def clusters_to_gnuplot(
    cloud: Sequence[Point],
    clusters: Sequence[Sequence[int]],
    out: Optional[TextIO] = None,
) -> None:
    """Write a gnuplot script plotting every cluster in its own colour.

    *clusters* holds lists of point indices into *cloud*. Points that are
    in no cluster are plotted in red as noise.
    """
    if out is None:
        out = sys.stdout
    is2d = _is2d(cloud)
    remaining = list(cloud)

    if is2d:
        header = "plot"
    else:
        x_line, y_line, z_line = _range_lines(cloud)
        header = f"{x_line}\n{y_line}\n{z_line}\nsplot "

    titles = []
    point_blocks = []
    for cluster_index, point_indices in enumerate(clusters):
        # a cluster without points only lives inside an overlap cluster
        if not point_indices:
            continue
        colour = compute_cluster_colour(cluster_index)
        ids = sorted(cloud[point_indices[0]].cluster_ids)
        if len(ids) > 1:
            title = "overlap " + ";".join(f"{i:x}" for i in ids)
        else:
            title = f"curve {ids[0]:x}"
        titles.append(f" '-' with points lc '#{colour:x}' title '{title}',")

        block = []
        for index in point_indices:
            point = cloud[index]
            for pos, candidate in enumerate(remaining):
                if candidate == point:
                    del remaining[pos]
                    break
            block.append(_coords(point, is2d) + "\n")
        block.append("e\n")
        point_blocks.append("".join(block))

    noise_header = ""
    noise = ""
    if remaining:
        noise_header = " '-' with points lc 'red' title 'noise',"
        noise = "".join(_coords(p, is2d) + "\n" for p in remaining) + "e\n"

    out.write(
        header
        + noise_header
        + "".join(titles)
        + "\n"
        + noise
        + "".join(point_blocks)
        + "pause mouse keypress\n"
    )


def clusters_to_csv(cloud: Sequence[Point], out: Optional[TextIO] = None) -> None:
    """Write every point with its cluster ids (``-1`` for noise) as CSV."""
    if out is None:
        out = sys.stdout
    is2d = _is2d(cloud)
    out.write("# Comment: curveID -1 represents noise\n# x, y, z, curveID\n")
    for p in cloud:
        row = _coords(p, is2d, sep=",") + ","
        if p.cluster_ids:
            row += ";".join(str(i) for i in sorted(p.cluster_ids))
        else:
            row += "-1"
        out.write(row + "\n")