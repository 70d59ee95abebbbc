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
"""Function to load MPS files.

The file format is described here
https://en.wikipedia.org/wiki/MPS_(format)
Both the fixed and the free (whitespace separated) layouts are read, as long
as names do not contain spaces. The parser only stores what the file says:
nothing is done with the bounds or ranges beyond keeping them.
"""

import logging
import re
import sys
import types

logger = logging.getLogger(__name__)

ROW_TYPES = ("E", "G", "L", "N")
BOUNDS_TYPES = ("FR", "FX", "LO", "MI", "PL", "UP")

_NUMBER = r"([0-9eE.+-]+)"

_re_name_section = re.compile(r"^\s*NAME(?:\s+(.*?))?\s*$")
_re_rows_section = re.compile(r"^\s*ROWS\s*$")
_re_columns_section = re.compile(r"^\s*COLUMNS\s*$")
_re_rhs_section = re.compile(r"^\s*RHS\s*$")
_re_ranges_section = re.compile(r"^\s*RANGES\s*$")
_re_bounds_section = re.compile(r"^\s*BOUNDS\s*$")
_re_endata_section = re.compile(r"^\s*ENDATA\s*$")

_re_rows_data = re.compile(r"^\s*(\S+)\s+(\S+)\s*$")
_re_two_pairs = re.compile(
    r"^\s*(\S+)\s+(\S+)\s+" + _NUMBER + r"\s+(\S+)\s+" + _NUMBER + r"\s*$"
)
_re_one_pair = re.compile(r"^\s*(\S+)\s+(\S+)\s+" + _NUMBER + r"\s*$")
_re_two_pairs_no_name = re.compile(
    r"^\s*(\S+)\s+" + _NUMBER + r"\s+(\S+)\s+" + _NUMBER + r"\s*$"
)
_re_one_pair_no_name = re.compile(r"^\s*(\S+)\s+" + _NUMBER + r"\s*$")
_re_bounds_data = re.compile(r"^\s*(\S+)\s+(\S*)\s+(\S+)\s+" + _NUMBER + r"\s*$")


class MPSFormatError(Exception):
    """Raised for all errors found while validating an MPS file."""

    def __init__(self, message, filename=None, section=None, line=None):
        self.filename = filename
        self.section = section
        self.line = line
        if filename is not None:
            message = f"{message} in file '{filename}'"
        super().__init__(message + " !")


class MissingSectionError(MPSFormatError):
    pass


class EmptySectionError(MPSFormatError):
    pass


class UnparseableLineError(MPSFormatError):
    pass


class UnknownReferenceError(MPSFormatError):
    pass


class UnknownRowError(UnknownReferenceError):
    pass


class UnknownColumnError(UnknownReferenceError):
    pass


class DuplicateRowError(MPSFormatError):
    pass


class UnknownTypeError(MPSFormatError):
    pass


class UnknownRowTypeError(UnknownTypeError):
    pass


class UnknownBoundsTypeError(UnknownTypeError):
    pass


def _is_comment(line):
    return line.strip() == "" or line.startswith("*") or line.startswith("&")


def match_rows(line):
    """Return (row_type, row_name) or None."""
    m = _re_rows_data.match(line)
    if m is None:
        return None
    return m.group(1), m.group(2)


def match_two_pairs(line):
    """Return (name, [(key, value), (key, value)]) or None."""
    m = _re_two_pairs.match(line)
    if m is None:
        return None
    return m.group(1), [(m.group(2), m.group(3)), (m.group(4), m.group(5))]


def match_one_pair(line):
    m = _re_one_pair.match(line)
    if m is None:
        return None
    return m.group(1), [(m.group(2), m.group(3))]


def match_two_pairs_no_name(line):
    m = _re_two_pairs_no_name.match(line)
    if m is None:
        return None
    return None, [(m.group(1), m.group(2)), (m.group(3), m.group(4))]


def match_one_pair_no_name(line):
    m = _re_one_pair_no_name.match(line)
    if m is None:
        return None
    return None, [(m.group(1), m.group(2))]


def match_bounds(line):
    """Return (bound_type, vector_name, column_name, value) or None.

    The vector name may be the empty string.
    """
    m = _re_bounds_data.match(line)
    if m is None:
        return None
    return m.group(1), m.group(2), m.group(3), m.group(4)


# line shapes tried in this order, first match wins
columns_matchers = (match_two_pairs, match_one_pair)
vector_matchers = (
    match_two_pairs,
    match_one_pair,
    match_two_pairs_no_name,
    match_one_pair_no_name,
)


def _first_match(matchers, line):
    for matcher in matchers:
        matched = matcher(line)
        if matched is not None:
            return matched
    return None


def _parse_value(value, line, section, filename):
    try:
        return float(value)
    except ValueError:
        raise UnparseableLineError(
            f"Cannot parse value '{value}' in '{line}' in MPS {section} section",
            filename,
            section,
            line,
        ) from None


def split_sections(lines, filename=None):
    """Bucket the data lines of an MPS file by section.

    lines is any iterable of text lines, typically an opened file, consumed in
    a single pass. Returns the NAME line and the data lines of the ROWS,
    COLUMNS, RHS, RANGES and BOUNDS sections.
    """
    lines = iter(lines)
    name_line = None
    rows_lines = []
    columns_lines = []
    rhs_lines = []
    ranges_lines = []
    bounds_lines = []

    for line in lines:
        line = line.rstrip("\r\n")
        if _re_name_section.match(line):
            name_line = line
            break
    if name_line is None:
        raise MissingSectionError("No NAME section", filename, "NAME")

    has_rows = False
    for line in lines:
        if _re_rows_section.match(line):
            has_rows = True
            break
    if not has_rows:
        raise MissingSectionError("No ROWS section", filename, "ROWS")

    def collect(active, stop_regex):
        for line in lines:
            line = line.rstrip("\r\n")
            if _is_comment(line):
                continue
            if stop_regex.match(line):
                return True
            active.append(line)
        return False

    if not collect(rows_lines, _re_columns_section):
        raise MissingSectionError("No COLUMNS section", filename, "COLUMNS")
    if len(rows_lines) == 0:
        raise EmptySectionError("No ROWS data", filename, "ROWS")

    if not collect(columns_lines, _re_rhs_section):
        raise MissingSectionError("No RHS section", filename, "RHS")
    if len(columns_lines) == 0:
        raise EmptySectionError("No COLUMNS data", filename, "COLUMNS")

    active = rhs_lines
    has_endata = False
    for line in lines:
        line = line.rstrip("\r\n")
        if _is_comment(line):
            continue
        if _re_ranges_section.match(line):
            active = ranges_lines
            continue
        if _re_bounds_section.match(line):
            active = bounds_lines
            continue
        if _re_endata_section.match(line):
            has_endata = True
            break
        active.append(line)
    if not has_endata:
        raise MissingSectionError("No ENDATA section", filename, "ENDATA")

    logger.debug(
        "sections: %d rows, %d columns, %d rhs, %d ranges, %d bounds lines",
        len(rows_lines),
        len(columns_lines),
        len(rhs_lines),
        len(ranges_lines),
        len(bounds_lines),
    )
    return name_line, rows_lines, columns_lines, rhs_lines, ranges_lines, bounds_lines


def extract_name(name_line):
    name = _re_name_section.match(name_line).group(1)
    return "" if name is None else name


def extract_rows(lines, filename=None):
    """Map each row name to (row_id, row_type), ids in order of appearance."""
    rows = dict()
    for line in lines:
        matched = match_rows(line)
        if matched is None:
            raise UnparseableLineError(
                f"Cannot parse '{line}' in MPS ROWS section", filename, "ROWS", line
            )
        row_type, row_name = matched
        if row_type not in ROW_TYPES:
            raise UnknownRowTypeError(
                f"Unknown row type '{row_type}' in '{line}' in MPS ROWS section",
                filename,
                "ROWS",
                line,
            )
        if row_name in rows:
            raise DuplicateRowError(
                f"Duplicate '{row_name}' (type='{rows[row_name][1]}') "
                f"found in '{line}' in MPS ROWS section",
                filename,
                "ROWS",
                line,
            )
        rows[row_name] = (len(rows), row_type)
    return rows


def extract_columns(lines, rows, filename=None):
    """Collect the column ids and the non zero elements of the matrix.

    Column ids are given in order of first appearance. An element given
    twice keeps the last value read.
    """
    columns = dict()
    elements = dict()
    for line in lines:
        matched = _first_match(columns_matchers, line)
        if matched is None:
            raise UnparseableLineError(
                f"Cannot parse '{line}' in MPS COLUMNS section",
                filename,
                "COLUMNS",
                line,
            )
        column_name, pairs = matched
        row_ids = []
        for row_name, _ in pairs:
            if row_name not in rows:
                raise UnknownRowError(
                    f"Unknown row '{row_name}' in '{line}' in MPS COLUMNS section",
                    filename,
                    "COLUMNS",
                    line,
                )
            row_ids.append(rows[row_name][0])
        if column_name not in columns:
            columns[column_name] = len(columns)
        j = columns[column_name]
        for i, (_, value) in zip(row_ids, pairs):
            v = _parse_value(value, line, "COLUMNS", filename)
            if v != 0.0:
                elements[(i, j)] = v
    return columns, elements


def extract_vector(lines, rows, section, filename=None):
    """Read a RHS or RANGES section into a row name to value dict.

    Only the first named vector is read: the section stops without error at
    the first line naming another vector.
    """
    values = dict()
    vector_name = None
    for line in lines:
        matched = _first_match(vector_matchers, line)
        if matched is None:
            raise UnparseableLineError(
                f"Cannot parse '{line}' in MPS {section} section",
                filename,
                section,
                line,
            )
        name, pairs = matched
        if name is not None:
            if vector_name is None:
                vector_name = name
            elif name != vector_name:
                logger.debug(
                    "%s vector '%s' ignored, only '%s' is read", section, name, vector_name
                )
                break
        for row_name, _ in pairs:
            if row_name not in rows:
                raise UnknownRowError(
                    f"Unknown row '{row_name}' in '{line}' in MPS {section} section",
                    filename,
                    section,
                    line,
                )
        for row_name, value in pairs:
            values[row_name] = _parse_value(value, line, section, filename)
    return values


def extract_rhs(lines, rows, filename=None):
    return extract_vector(lines, rows, "RHS", filename)


def extract_ranges(lines, rows, filename=None):
    return extract_vector(lines, rows, "RANGES", filename)


def extract_bounds(lines, columns, filename=None):
    """Map each bounded column to its list of (bound_type, value) in file order."""
    bounds = dict()
    bounds_name = None
    for line in lines:
        matched = match_bounds(line)
        if matched is None:
            raise UnparseableLineError(
                f"Cannot parse '{line}' in MPS BOUNDS section", filename, "BOUNDS", line
            )
        bound_type, name, column_name, value = matched
        if bound_type not in BOUNDS_TYPES:
            raise UnknownBoundsTypeError(
                f"Unknown bounds type '{bound_type}' in '{line}' in MPS BOUNDS section",
                filename,
                "BOUNDS",
                line,
            )
        if bounds_name is None:
            bounds_name = name
        elif name != bounds_name:
            logger.debug("BOUNDS vector '%s' ignored, only '%s' is read", name, bounds_name)
            break
        if column_name not in columns:
            raise UnknownColumnError(
                f"Unknown column '{column_name}' in '{line}' in MPS BOUNDS section",
                filename,
                "BOUNDS",
                line,
            )
        v = _parse_value(value, line, "BOUNDS", filename)
        bounds.setdefault(column_name, []).append((bound_type, v))
    return bounds


def _read_only(d):
    return None if d is None else types.MappingProxyType(d)


class ParsedProblem:
    """Data extracted from a MPS file.

    All the fields are read only. rhs, ranges and bounds are None when the
    file has no data for them.
    """

    def __init__(self, name, rows, columns, elements, rhs=None, ranges=None, bounds=None):
        self._name = name
        self._rows = _read_only(dict(rows))
        self._columns = _read_only(dict(columns))
        self._elements = _read_only(dict(elements))
        self._rhs = _read_only(None if rhs is None else dict(rhs))
        self._ranges = _read_only(None if ranges is None else dict(ranges))
        if bounds is not None:
            bounds = {k: tuple(v) for k, v in bounds.items()}
        self._bounds = _read_only(bounds)

    @classmethod
    def from_lines(cls, lines, filename=None):
        (
            name_line,
            rows_lines,
            columns_lines,
            rhs_lines,
            ranges_lines,
            bounds_lines,
        ) = split_sections(lines, filename)
        rows = extract_rows(rows_lines, filename)
        columns, elements = extract_columns(columns_lines, rows, filename)
        rhs = extract_rhs(rhs_lines, rows, filename) if rhs_lines else None
        ranges = extract_ranges(ranges_lines, rows, filename) if ranges_lines else None
        bounds = extract_bounds(bounds_lines, columns, filename) if bounds_lines else None
        return cls(extract_name(name_line), rows, columns, elements, rhs, ranges, bounds)

    @property
    def name(self):
        return self._name

    @property
    def rows(self):
        return self._rows

    @property
    def columns(self):
        return self._columns

    @property
    def elements(self):
        return self._elements

    @property
    def rhs(self):
        return self._rhs

    @property
    def ranges(self):
        return self._ranges

    @property
    def bounds(self):
        return self._bounds

    def _as_tuple(self):
        def plain(d):
            return None if d is None else dict(d)

        return (
            self._name,
            plain(self._rows),
            plain(self._columns),
            plain(self._elements),
            plain(self._rhs),
            plain(self._ranges),
            plain(self._bounds),
        )

    def __eq__(self, other):
        if not isinstance(other, ParsedProblem):
            return NotImplemented
        return self._as_tuple() == other._as_tuple()

    __hash__ = None

    def __repr__(self):
        return (
            f"<ParsedProblem: name='{self._name}', "
            f"rows={len(self._rows)}, "
            f"columns={len(self._columns)}, "
            f"elements={len(self._elements)}, "
            f"rhs={None if self._rhs is None else len(self._rhs)}, "
            f"ranges={None if self._ranges is None else len(self._ranges)}, "
            f"bounds={None if self._bounds is None else len(self._bounds)}>"
        )


def mps_parser(filename):
    """Parse a linear program stored in the MPS format.

    Returns a ParsedProblem. Raises MPSFormatError (or one of its subclasses)
    when the file is not valid MPS, and OSError when it cannot be read.
    """
    with open(filename, "r", encoding="utf-8-sig", errors="replace") as f:
        return ParsedProblem.from_lines(f, filename)


if __name__ == "__main__":

    lp = mps_parser(sys.argv[1])
    print(lp)
