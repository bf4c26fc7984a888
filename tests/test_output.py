import io

import pytest

from triplclust.output import (
    cloud_to_csv,
    clusters_to_csv,
    clusters_to_gnuplot,
    compute_cluster_colour,
    debug_gnuplot,
    find_min_max_point,
)
from triplclust.pointcloud import Point, PointCloud


def _cloud3d():
    return PointCloud(
        [
            Point(0.0, 5.0, -1.0, cluster_ids={0}),
            Point(2.0, 1.0, 3.0, cluster_ids={0}),
            Point(1.0, 3.0, 7.0),
        ]
    )


def test_colour_of_index_zero_is_black():
    assert compute_cluster_colour(0) == 0


def test_colour_of_index_one():
    assert compute_cluster_colour(1) == 0x3855FF


@pytest.mark.parametrize("index", [0, 1, 5, 17, 100])
def test_colour_is_periodic_and_in_range(index):
    colour = compute_cluster_colour(index)
    assert 0 <= colour <= 0xFFFFFF
    assert compute_cluster_colour(index + 399) == colour


def test_find_min_max_point():
    low, high = find_min_max_point(_cloud3d())
    assert (low.x, low.y, low.z) == (0.0, 1.0, -1.0)
    assert (high.x, high.y, high.z) == (2.0, 5.0, 7.0)


def test_find_min_max_point_empty_raises():
    with pytest.raises(ValueError):
        find_min_max_point(PointCloud())


def test_clusters_to_csv_header_and_labels():
    cloud = _cloud3d()
    cloud[2].cluster_ids = {3, 1}
    buf = io.StringIO()
    clusters_to_csv(cloud, buf)
    lines = buf.getvalue().splitlines()
    assert lines[0] == "# Comment: curveID -1 represents noise"
    assert lines[1] == "# x, y, z, curveID"
    assert len(lines) == 5
    assert lines[4].endswith(",1;3")
    assert lines[2].endswith(",0")


def test_clusters_to_csv_round_trip_coordinates():
    cloud = _cloud3d()
    buf = io.StringIO()
    clusters_to_csv(cloud, buf)
    rows = buf.getvalue().splitlines()[2:]
    for point, row in zip(cloud, rows):
        x, y, z, label = row.split(",")
        assert (float(x), float(y), float(z)) == (point.x, point.y, point.z)
    assert rows[2].split(",")[3] == "-1"


def test_clusters_to_csv_2d_has_three_columns():
    cloud = PointCloud([Point(1.5, 2.5, 0.0)], is2d=True)
    buf = io.StringIO()
    clusters_to_csv(cloud, buf)
    row = buf.getvalue().splitlines()[2]
    assert row.split(",") == ["1.500000", "2.500000", "-1"]


def test_clusters_to_gnuplot_with_noise():
    cloud = _cloud3d()
    buf = io.StringIO()
    clusters_to_gnuplot(cloud, [[0, 1]], buf)
    text = buf.getvalue()
    assert text.startswith("set xrange [0.000000:2.000000]\n")
    assert "splot  '-' with points lc 'red' title 'noise',"  in text
    assert "title 'curve 0'," in text
    assert text.endswith("pause mouse keypress\n")
    assert text.count("\ne\n") == 2


def test_clusters_to_gnuplot_without_noise():
    cloud = _cloud3d()
    cloud[2].cluster_ids = {0}
    buf = io.StringIO()
    clusters_to_gnuplot(cloud, [[0, 1, 2]], buf)
    text = buf.getvalue()
    assert "noise" not in text
    assert text.count("\ne\n") == 1


def test_clusters_to_gnuplot_overlap_ids_written_in_hex():
    cloud = PointCloud([Point(0.0, 0.0, 0.0, cluster_ids={10, 11})])
    buf = io.StringIO()
    clusters_to_gnuplot(cloud, [[], [0]], buf)
    text = buf.getvalue()
    assert "title 'overlap a;b'," in text
    assert f"lc '#{compute_cluster_colour(1):x}'" in text


def test_clusters_to_gnuplot_degenerate_range_is_widened():
    cloud = PointCloud([Point(1.0, 2.0, 3.0, cluster_ids={0})])
    buf = io.StringIO()
    clusters_to_gnuplot(cloud, [[0]], buf)
    first = buf.getvalue().splitlines()[0]
    low, high = first[len("set xrange ["):-1].split(":")
    assert float(low) == 0.0 and float(high) == 2.0


def test_clusters_to_gnuplot_2d_uses_plot():
    cloud = PointCloud([Point(1.0, 2.0, 0.0, cluster_ids={0})], is2d=True)
    buf = io.StringIO()
    clusters_to_gnuplot(cloud, [[0]], buf)
    text = buf.getvalue()
    assert text.startswith("plot '-'")
    assert "range" not in text
    assert "1.000000 2.000000\ne\n" in text


def test_debug_gnuplot_writes_both_clouds(tmp_path):
    cloud = _cloud3d()
    smooth = PointCloud([Point(p.x + 0.5, p.y, p.z) for p in cloud])
    path = tmp_path / "trace.gnuplot"
    debug_gnuplot(cloud, smooth, path)
    lines = path.read_text().splitlines()
    assert lines[-1] == "pause mouse keypress"
    assert lines.count("e") == 2
    assert " splot '-' with points lc 'black' title 'original'" in "\n".join(lines)
    data = [line for line in lines if line and line[0].isdigit() or line.startswith("-")]
    assert len(data) == 6


def test_debug_gnuplot_unwritable_path_raises(tmp_path):
    with pytest.raises(OSError):
        debug_gnuplot(_cloud3d(), _cloud3d(), tmp_path / "missing" / "x.gnuplot")


def test_cloud_to_csv_round_trip(tmp_path):
    cloud = _cloud3d()
    path = tmp_path / "smoothed.csv"
    cloud_to_csv(cloud, path)
    lines = path.read_text().splitlines()
    assert lines[0] == "# x,y,z"
    parsed = [tuple(float(v) for v in line.split(",")) for line in lines[1:]]
    assert parsed == [(p.x, p.y, p.z) for p in cloud]


def test_cloud_to_csv_unwritable_path_raises(tmp_path):
    with pytest.raises(OSError):
        cloud_to_csv(_cloud3d(), tmp_path / "missing" / "x.csv")