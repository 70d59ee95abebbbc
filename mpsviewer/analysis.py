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
"""Module that computes the data shown by the viewer for a parsed MPS problem.

Nothing is drawn here: the functions return numpy arrays that a plotting
layer can display (bar charts for the histograms, an image for the kernel).
"""

import numpy as np

import scipy.sparse

NB_BUCKETS = 11
MAX_KERNEL_WIDTH = 800
MAX_KERNEL_HEIGHT = 600


def problem_summary(problem):
    """Return the sizes of the different parts of the problem."""

    def count(d):
        return 0 if d is None else len(d)

    return {
        "name": problem.name,
        "nb_rows": len(problem.rows),
        "nb_columns": len(problem.columns),
        "nb_elements": len(problem.elements),
        "nb_rhs": count(problem.rhs),
        "nb_ranges": count(problem.ranges),
        "nb_bounds": count(problem.bounds),
    }


def _element_arrays(problem):
    nb_elements = len(problem.elements)
    rows = np.empty(nb_elements, dtype=np.int64)
    cols = np.empty(nb_elements, dtype=np.int64)
    vals = np.empty(nb_elements, dtype=np.float64)
    for k, ((i, j), v) in enumerate(problem.elements.items()):
        rows[k] = i
        cols[k] = j
        vals[k] = v
    return rows, cols, vals


def element_magnitudes(problem):
    """Return log10 of the absolute value of each element."""
    _, _, vals = _element_arrays(problem)
    return np.log10(np.abs(vals))


def row_element_counts(problem):
    rows, _, _ = _element_arrays(problem)
    return np.bincount(rows, minlength=len(problem.rows))


def column_element_counts(problem):
    _, cols, _ = _element_arrays(problem)
    return np.bincount(cols, minlength=len(problem.columns))


def histogram(data, nb_buckets=NB_BUCKETS):
    """Count the values of data falling in nb_buckets bins spanning [0, max].

    Values below zero are not counted. Returns (counts, bin_edges).
    """
    data = np.asarray(data, dtype=np.float64)
    max_value = max(0.0, float(data.max())) if data.size > 0 else 0.0
    return np.histogram(data, bins=nb_buckets, range=(0.0, max_value))


def magnitude_histogram(problem, nb_buckets=NB_BUCKETS):
    return histogram(element_magnitudes(problem), nb_buckets)


def row_density_histogram(problem, nb_buckets=NB_BUCKETS):
    return histogram(row_element_counts(problem), nb_buckets)


def column_density_histogram(problem, nb_buckets=NB_BUCKETS):
    return histogram(column_element_counts(problem), nb_buckets)


def to_sparse_matrix(problem):
    """Return the constraint matrix (objective rows included) in csr format."""
    rows, cols, vals = _element_arrays(problem)
    shape = (len(problem.rows), len(problem.columns))
    return scipy.sparse.coo_matrix((vals, (rows, cols)), shape=shape).tocsr()


def sparsity_kernel(problem, max_width=MAX_KERNEL_WIDTH, max_height=MAX_KERNEL_HEIGHT):
    """Rasterize the non zero pattern of the matrix.

    The matrix is shrunk, keeping its aspect ratio, until it fits in
    max_width x max_height. Returns (image, width_factor, height_factor) where
    image is a uint8 array set to 255 where at least one element lands.
    """
    width = float(len(problem.columns))
    height = float(len(problem.rows))
    width_factor = 1.0
    height_factor = 1.0
    if width > max_width:
        reduction = max_width / width
        width_factor = reduction
        height_factor = reduction
        width = max_width
        height *= reduction
    if height > max_height:
        reduction = max_height / height
        width_factor *= reduction
        height_factor *= reduction
        width *= reduction
        height = max_height

    image = np.zeros((int(height) + 1, int(width) + 1), dtype=np.uint8)
    rows, cols, _ = _element_arrays(problem)
    y = (rows * height_factor).astype(np.int64)
    x = (cols * width_factor).astype(np.int64)
    image[y, x] = 255
    return image, width_factor, height_factor
