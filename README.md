# triplclust

Building blocks for finding curves in 2D and 3D point clouds from
triplets of nearly collinear points. The package covers reading the
points, smoothing them, forming triplets, comparing triplets, parsing
the run settings, and writing labelled points as CSV or gnuplot
scripts. It has no dependencies outside the standard library.

## Modules

- `triplclust.util`
  - `Linkage`: enum with `SINGLE`, `COMPLETE` and `AVERAGE`.
  - `parse_number(text)`: converts text to a float after stripping
    surrounding whitespace; anything that is not entirely a decimal
    number raises `ValueError("not a number")`.
- `triplclust.pointcloud`
  - `Point`: x, y, z, an `id` (default `-1`) and a set of
    `cluster_ids`. `+` and `-` work component-wise, `*` is the dot
    product with another point or scaling by a number, `/` divides by a
    number. Equality compares coordinates only. `Point.from_sequence`
    builds a point from exactly three values and raises `ValueError`
    otherwise. `norm()`, `squared_norm()` and `as_vector()` are
    provided.
  - `PointCloud`: a list of points with an `is2d` flag.
  - `load_csv_file(path, delimiter=" ", skip=0)`: reads one point per
    line, skipping the first `skip` lines, lines starting with `#` and
    blank lines. Columns beyond the third are ignored. If every row has
    two columns the cloud is 2D with z = 0; a file mixing 2D and 3D rows
    raises `ValueError`, as do rows with too few columns or a value that
    is not a number (the message names the row and column).
  - `split_line(line, delimiter)`: splits a line, dropping one trailing
    empty field.
  - `range_neighbours(points, centre, radius)`: indices of points within
    `radius` of `centre`, the boundary included.
  - `nearest_neighbours(points, centre, k)`: the `k` nearest points as
    `(index, distance)` pairs, nearest first.
  - `smoothen_cloud(cloud, radius)`: replaces every point by the
    centroid of its neighbours within `radius`, keeping size and order.
    A radius of zero returns an unsmoothed copy.
- `triplclust.triplet`
  - `Triplet`: point indices a, b, c, a `center`, a unit `direction`
    and an `error`; triplets order by error.
  - `generate_triplets(cloud, k, n, a)`: for every point b, pairs of its
    `k` nearest neighbours (b itself counted among them, neighbours at
    distance zero skipped) form candidates (a, b, c) whose error
    `1 - cos(angle)` between the branches is at most `a`; the `n`
    candidates with the smallest error are kept.
  - `ScaleTripletMetric(scale)`: a callable giving the dissimilarity of
    two triplets, the larger perpendicular distance divided by `scale`
    plus the absolute tangent of the angle between their directions.
    Nearly perpendicular triplets get `1e8`.
- `triplclust.option`
  - `parse_args(argv=None)`: parses command-line style arguments
    (`sys.argv[1:]` by default) into an `Options` dataclass. Invalid
    arguments raise `UsageError`.
  - `parse_argument(text)`: parses a value such as `2`, `2dNN` or
    `0.33dnn` into `(value, relative_to_dnn)`.
  - `Options.needs_dnn()` and `Options.set_dnn(dnn)`: report and resolve
    settings given as multiples of dNN.
  - `usage_text()`: the usage message.
  - `load_input(options)`: loads the named input file. A missing file
    name raises `UsageError`; unreadable, malformed or empty input
    raises `InputError` with `exit_code` 2.
  - `prepare_cloud(options, cloud, dnn=None)`: resolves dNN-relative
    settings with the given `dnn` and returns the smoothed cloud. If a
    dNN value is needed but not given it raises `ValueError`; a `dnn` of
    zero raises `InputError` with `exit_code` 3.
- `triplclust.output`
  - `compute_cluster_colour(cluster_index)`: a 24-bit RGB integer.
  - `find_min_max_point(cloud)`: component-wise minimum and maximum.
  - `clusters_to_csv(cloud, out=None)` and
    `clusters_to_gnuplot(cloud, clusters, out=None)`: write to `out`
    (standard output by default).
  - `cloud_to_csv(cloud, path)` and `debug_gnuplot(cloud, cloud_smooth,
    path)`: write debug files, by default `debug_smoothed.csv` and
    `debug_smoothed.gnuplot`; they raise `OSError` if the file cannot
    be written.

## Example

```python
import sys

from triplclust.pointcloud import load_csv_file, smoothen_cloud
from triplclust.triplet import ScaleTripletMetric, generate_triplets
from triplclust.output import clusters_to_csv

cloud = load_csv_file("hits.csv", ",", 0)
smoothed = smoothen_cloud(cloud, 2.0)

# up to 19 neighbours per point, keep the 2 best triplets,
# accept at most 0.03 for 1 - cos(angle between the branches)
triplets = generate_triplets(smoothed, 19, 2, 0.03)

metric = ScaleTripletMetric(0.3)
if len(triplets) >= 2:
    print(metric(triplets[0], triplets[1]))

clusters_to_csv(cloud, sys.stdout)
```

## Options

`parse_args` accepts these options:

| option | meaning | default |
|---|---|---|
| `-r` | smoothing radius, number or multiple of dNN | `2dNN` |
| `-k` | neighbours used when building triplets | `19` |
| `-n` | best triplets kept per point | `2` |
| `-a` | maximum 1 − cos of the angle between the branches | `0.03` |
| `-s` | distance scale in the metric, number or multiple of dNN | `0.3dNN` |
| `-t` | cluster distance threshold, number or `auto` | `4.0` |
| `-m` | minimum number of triplets per cluster | `15` |
| `-dmax` | maximum gap within a cluster, number, multiple of dNN or `none` | `none` |
| `-link` | `single`, `complete` or `average` | `single` |
| `-oprefix` | output file prefix | none |
| `-gnuplot` | request gnuplot output | off |
| `-delim` | single-character input delimiter | space |
| `-skip` | header lines to skip | `0` |
| `-v`, `-vv` | verbosity | `0` |

A negative `-skip` is reported on standard error and ignored.

## CSV output

```
# Comment: curveID -1 represents noise
# x, y, z, curveID
1.000000,2.000000,3.000000,0
4.000000,5.000000,6.000000,-1
```

The ids come from each point's `cluster_ids`; a point with several ids
lists them in ascending order separated by `;`. For 2D data the z
column is omitted. In gnuplot output, each non-empty cluster is plotted
in its own colour and titled with its ids written in hexadecimal;
points in no cluster are plotted in red as noise.

## What the package does not do

- It does not cluster triplets into curves. `-t`, `-m`, `-dmax` and
  `-link` are parsed and stored in `Options`, but nothing in the
  package uses them; assigning `cluster_ids` to points is left to the
  caller.
- It does not compute the characteristic length dNN. The value must be
  passed to `prepare_cloud` or `Options.set_dnn`.
- It installs no command. `parse_args` and the input helpers can be
  used from your own script, and the output writers take any text
  stream or path, so `-oprefix` and `-gnuplot` take effect only if your
  code acts on them.

## Running the tests

```
pip install -e ".[test]"
pytest
```