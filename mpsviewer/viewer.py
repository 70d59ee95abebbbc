# -*- coding: utf-8 -*-

# -----------------------------------------------------------------------
# Copyright © 2016 Martin de la Gorce <martin[dot]delagorce[hat]gmail[dot]com>

# Permission is hereby granted, free of charge, to any person obtaining
# a copy of this software and associated documentation files (the
# "Software"), to deal in the Software without restriction, including
# without limitation the rights to use, copy, modify, merge, publish,
# distribute, sublicense, and/or sell copies of the Software, and to
# permit persons to whom the Software is furnished to do so, subject to
# the following conditions:
#
# The above copyright notice and this permission notice shall be
# included in all copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND,
# EXPRESS OR IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF
# MERCHANTABILITY, FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT
# IN NO EVENT SHALL THE AUTHORS BE LIABLE FOR ANY CLAIM, DAMAGES OR
# OTHER LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE,
# ARISING FROM, OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR
# OTHER DEALINGS IN THE SOFTWARE.
# -----------------------------------------------------------------------
"""Command line viewer printing what a MPS file contains."""

import argparse
import logging
import os
import sys

from .MPSparser import MPSFormatError, mps_parser
from .analysis import (
    MAX_KERNEL_HEIGHT,
    MAX_KERNEL_WIDTH,
    NB_BUCKETS,
    column_density_histogram,
    magnitude_histogram,
    problem_summary,
    row_density_histogram,
    sparsity_kernel,
)
from .tools import Chrono, format_count

logger = logging.getLogger(__name__)


def load_problem(filename):
    """Parse filename, logging the duration or the reason of the failure."""
    logger.info("loading '%s'", filename)
    ch = Chrono()
    ch.tic()
    try:
        problem = mps_parser(filename)
    except (MPSFormatError, OSError) as e:
        logger.error("failed to load '%s': %s", filename, e)
        raise
    logger.info("loaded '%s' in %f seconds", filename, ch.toc())
    return problem


def format_summary(problem, filename):
    summary = problem_summary(problem)
    lines = [
        f"file     : {os.path.basename(filename)}",
        f"problem  : {summary['name']}",
        f"rows     : {format_count(summary['nb_rows'])}",
        f"columns  : {format_count(summary['nb_columns'])}",
        f"elements : {format_count(summary['nb_elements'])}",
        f"rhs      : {format_count(summary['nb_rhs'])}",
        f"ranges   : {format_count(summary['nb_ranges'])}",
        f"bounds   : {format_count(summary['nb_bounds'])}",
    ]
    return "\n".join(lines)


def format_histogram(title, counts, bin_edges):
    lines = [title]
    for k, c in enumerate(counts):
        lines.append(f"  [{bin_edges[k]:10.3f}, {bin_edges[k + 1]:10.3f}] {c}")
    return "\n".join(lines)


def build_parser():
    parser = argparse.ArgumentParser(
        prog="mpsviewer", description="Print the content of a MPS file."
    )
    parser.add_argument("filename", help="MPS file to read")
    parser.add_argument(
        "--histograms",
        action="store_true",
        help="print the element magnitude and row/column density histograms",
    )
    parser.add_argument("--buckets", type=int, default=NB_BUCKETS)
    parser.add_argument(
        "--kernel", action="store_true", help="print the size of the sparsity image"
    )
    parser.add_argument("--max-width", type=int, default=MAX_KERNEL_WIDTH)
    parser.add_argument("--max-height", type=int, default=MAX_KERNEL_HEIGHT)
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    try:
        problem = load_problem(args.filename)
    except MPSFormatError as e:
        print(f"Failed to load '{args.filename}': {e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Cannot read '{args.filename}': {e}", file=sys.stderr)
        return 2

    print(format_summary(problem, args.filename))

    if args.histograms:
        print(
            format_histogram(
                "log10(absolute value) of elements",
                *magnitude_histogram(problem, args.buckets),
            )
        )
        print(
            format_histogram(
                "elements per row", *row_density_histogram(problem, args.buckets)
            )
        )
        print(
            format_histogram(
                "elements per column", *column_density_histogram(problem, args.buckets)
            )
        )

    if args.kernel:
        image, width_factor, height_factor = sparsity_kernel(
            problem, args.max_width, args.max_height
        )
        print(
            f"kernel   : {image.shape[1]}x{image.shape[0]} pixels "
            f"(scale {width_factor:g}, {height_factor:g}), "
            f"{int((image > 0).sum())} pixels set"
        )
    return 0


if __name__ == "__main__":
    sys.exit(main())
