"""Command line options and the input stages of a clustering run."""

from __future__ import annotations

import re
import sys
from dataclasses import dataclass
from typing import Iterator, Optional, Sequence

from .pointcloud import PointCloud, load_csv_file, smoothen_cloud
from .util import Linkage, parse_number

__all__ = [
    "UsageError",
    "InputError",
    "Options",
    "parse_argument",
    "parse_args",
    "usage_text",
    "load_input",
    "prepare_cloud",
]

_USAGE = """Usage:
\ttriplclust [options] <infile>
Options (defaults in brackets):
\t-r <radius>    radius for point smoothing [2dNN]
\t               (can be numeric or multiple of dNN)
\t-k <n>         number of neighbours in triplet creation [19]
\t-n <n>         number of the best triplets to use [2]
\t-a <alpha>     maximum value for the angle between the
\t               triplet branches [0.03]
\t-s <scale>     scalingfactor for clustering [0.33dNN]
\t               (can be numeric or multiple of dNN)
\t-t <dist>      best cluster distance [auto]
\t               (can be numeric or 'auto')
\t-m <n>         minimum number of triplets for a cluster [5]
\t-dmax <n>      max gapwidth within a triplet [none]
\t               (can be numeric, multiple of dNN or 'none')
\t-link <method> linkage method for clustering [single]
\t               (can be 'single', 'complete', 'average')
\t-oprefix <prefix>
\t               write result not to stdout, but to <prefix>.csv
\t               and (if -gnuplot is set) to <prefix>.gnuplot
\t-gnuplot       print result as a gnuplot command
\t-delim <char>  single char delimiter for csv input [' ']
\t-skip <n>      number of lines skipped at head of infile [0]
\t-v             be verbose
\t-vv            be more verbose and write debug trace files
Version:
\t1.3 from 2019-04-02"""

_SCANF_NUMBER = re.compile(
    r"\s*([+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf(?:inity)?|nan))",
    re.IGNORECASE,
)
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")
_LINKAGES = {"single": Linkage.SINGLE, "complete": Linkage.COMPLETE, "average": Linkage.AVERAGE}


class UsageError(Exception):
    """The command line could not be understood."""


class InputError(Exception):
    """The input data cannot be processed; *exit_code* is the status to exit with."""

    def __init__(self, message: str, exit_code: int = 2):
        super().__init__(message)
        self.exit_code = exit_code


@dataclass
class Options:
    """All settings of a clustering run, with their defaults."""

    infile_name: Optional[str] = None
    outfile_prefix: Optional[str] = None
    gnuplot: bool = False
    delimiter: str = " "
    skip: int = 0
    verbosity: int = 0

    # neighbourhood smoothing
    r: float = 2.0
    r_dnn: bool = True

    # triplet building
    k: int = 19
    n: int = 2
    a: float = 0.03

    # triplet clustering
    s: float = 0.3
    s_dnn: bool = True
    t: float = 4.0
    t_auto: bool = False
    dmax: float = 0.0
    has_dmax: bool = False
    dmax_dnn: bool = False
    linkage: Linkage = Linkage.SINGLE

    m: int = 15

    def needs_dnn(self) -> bool:
        """True when some setting is given as a multiple of dNN."""
        return self.r_dnn or self.s_dnn or self.dmax_dnn

    def set_dnn(self, dnn: float) -> None:
        """Scale every setting that is relative to dNN by *dnn*."""
        if self.r_dnn:
            self.r *= dnn
            if self.verbosity > 0:
                print(f"[Info] computed smoothed radius: {self.r:g}")
        if self.s_dnn:
            self.s *= dnn
            if self.verbosity > 0:
                print(f"[Info] computed distance scale: {self.s:g}")
        if self.dmax_dnn:
            self.dmax *= dnn
            if self.verbosity > 0:
                print(f"[Info] computed max gap: {self.dmax:g}")


def parse_argument(text: str) -> tuple[float, bool]:
    """Parse a value that is either a number or a multiple of dNN.

    Returns ``(value, relative_to_dnn)``. A string holding nothing but
    whitespace yields ``(0.0, False)``. Raises ``ValueError`` otherwise
    when *text* does not start with a number or carries a suffix other
    than 'dnn' or 'dNN'.
    """
    if not text.strip():
        return 0.0, False
    match = _SCANF_NUMBER.match(text)
    if match is None:
        raise ValueError("not a number")
    value = float(match.group(1))
    rest = text[match.end():].lstrip()
    if not rest:
        return value, False
    suffix = rest.split(None, 1)[0][:3]
    if suffix not in ("dnn", "dNN"):
        raise ValueError("not a number")
    return value, True


def _leading_int(text: str) -> int:
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


def _value(args: Iterator[str]) -> str:
    value = next(args, None)
    if value is None:
        raise UsageError("missing option value")
    return value


def parse_args(argv: Optional[Sequence[str]] = None) -> Options:
    """Parse command line arguments (without the program name) into Options."""
    if argv is None:
        argv = sys.argv[1:]
    opts = Options()
    args = iter(argv)
    try:
        for arg in args:
            if arg == "-v":
                opts.verbosity = max(opts.verbosity, 1)
            elif arg == "-vv":
                opts.verbosity = max(opts.verbosity, 2)
            elif arg == "-s":
                opts.s, opts.s_dnn = parse_argument(_value(args))
            elif arg == "-r":
                opts.r, opts.r_dnn = parse_argument(_value(args))
            elif arg == "-k":
                opts.k = int(parse_number(_value(args)))
            elif arg == "-n":
                opts.n = int(parse_number(_value(args)))
            elif arg == "-a":
                opts.a = parse_number(_value(args))
            elif arg == "-t":
                value = _value(args)
                if value in ("auto", "automatic"):
                    opts.t_auto = True
                else:
                    opts.t = parse_number(value)
                    opts.t_auto = False
            elif arg == "-m":
                opts.m = int(parse_number(_value(args)))
            elif arg == "-delim":
                value = _value(args)
                if len(value) > 1:
                    raise UsageError("only a character as delimiter is allowed")
                opts.delimiter = value or "\0"
            elif arg == "-dmax":
                value = _value(args)
                if value == "none":
                    opts.has_dmax = False
                else:
                    opts.dmax, opts.dmax_dnn = parse_argument(value)
                    opts.has_dmax = True
            elif arg == "-link":
                value = _value(args)
                try:
                    opts.linkage = _LINKAGES[value]
                except KeyError:
                    raise UsageError(f"{value} is not a valid option!") from None
            elif arg == "-skip":
                skip = _leading_int(_value(args))
                if skip < 0:
                    print(
                        "[Error] skip takes only positive integers. parameter is ignored!",
                        file=sys.stderr,
                    )
                else:
                    opts.skip = skip
            elif arg == "-oprefix":
                value = next(args, None)
                if value is None:
                    raise UsageError("not enough parameters")
                if value.startswith("-"):
                    raise UsageError("please enter outfile name")
                opts.outfile_prefix = value
            elif arg == "-gnuplot":
                opts.gnuplot = True
            elif arg.startswith("-"):
                raise UsageError(f"unknown option {arg}")
            else:
                opts.infile_name = arg
    except ValueError as exc:
        raise UsageError(str(exc)) from exc
    return opts


def usage_text() -> str:
    """The usage message of the command."""
    return _USAGE


def load_input(options: Options) -> PointCloud:
    """Load the point cloud named by *options*, raising on any problem."""
    name = options.infile_name
    if not name:
        raise UsageError("no infile given!")
    try:
        cloud = load_csv_file(name, options.delimiter, options.skip)
    except ValueError as exc:
        raise InputError(f"in file'{name}': {exc}") from exc
    except OSError as exc:
        raise InputError(f"cannot read infile '{name}'! {exc}") from exc
    if not cloud:
        raise InputError(
            f"empty cloud in file '{name}'\nmaybe you used the wrong delimiter"
        )
    return cloud


def prepare_cloud(options: Options, cloud: PointCloud, dnn: Optional[float] = None) -> PointCloud:
    """Resolve dNN-relative settings with *dnn* and return the smoothed cloud."""
    if options.needs_dnn():
        if dnn is None:
            raise ValueError("dnn is required by the current options")
        if options.verbosity > 0:
            print(f"[Info] computed dnn: {dnn:g}")
        options.set_dnn(dnn)
        if dnn == 0.0:
            raise InputError(
                "dnn computed as zero. Suggestion: remove doublets, e.g. with 'sort -u'",
                exit_code=3,
            )
    return smoothen_cloud(cloud, options.r)