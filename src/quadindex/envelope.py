# Copyright (C) 2018 DataStorm
#
# This file is part of QuadIndex.
#
# QuadIndex is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# QuadIndex is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# A copy of the GNU General Public License is available in the LICENSE
# file or at <http://www.gnu.org/licenses/>.
"""
Points and axis-aligned extents.

Points are length-2 float arrays; an extent is the axis-aligned box spanned
by a min corner and a max corner. All comparisons are inclusive so that
points lying on a boundary belong to every box sharing that boundary.
"""
import numpy

from .errors import InvalidExtentError


def as_point(obj):
    """
    Convert obj to a float array of shape (2,).

    Raises:
        ValueError: if obj does not hold exactly two coordinates.
    """
    point = numpy.asarray(obj, dtype=float)
    if point.shape != (2,):
        raise ValueError(
            "A point must have exactly 2 coordinates, got shape {}."
            .format(point.shape)
        )
    return point


def freeze(point):
    """Hashable (x, y) tuple of floats."""
    x, y = as_point(point).tolist()
    return (x, y)


class Extent():
    """
    Axis-aligned bounding box.

    Args:
        mins: min corner (x, y).
        maxs: max corner (x, y).

    Attributes:
        mins (array): min corner, shape (2,).
        maxs (array): max corner, shape (2,).

    Raises:
        InvalidExtentError: if mins exceeds maxs on any axis.
    """
    __slots__ = ("mins", "maxs")

    def __init__(self, mins, maxs):
        mins = as_point(mins)
        maxs = as_point(maxs)
        # Written as a negation so that NaN corners are rejected too.
        if not (mins <= maxs).all():
            raise InvalidExtentError(
                "Invalid extent: min corner {} exceeds max corner {}."
                .format(tuple(mins), tuple(maxs))
            )
        self.mins = mins
        self.maxs = maxs

    @classmethod
    def from_bounds(cls, bounds):
        """Extent from a flat (minx, miny, maxx, maxy) tuple."""
        minx, miny, maxx, maxy = bounds
        return cls((minx, miny), (maxx, maxy))

    @classmethod
    def of_points(cls, points):
        """Smallest extent containing every row of an (N, 2) array."""
        points = numpy.asarray(points, dtype=float)
        if points.ndim != 2 or points.shape[1] != 2:
            raise ValueError(
                "Points must be an (N, 2) array, got shape {}."
                .format(points.shape)
            )
        if len(points) == 0:
            raise ValueError("Cannot bound an empty set of points.")
        return cls(points.min(axis=0), points.max(axis=0))

    @property
    def bounds(self):
        return tuple(self.mins.tolist() + self.maxs.tolist())

    @property
    def center(self):
        return 0.5 * (self.mins + self.maxs)

    def contains(self, point):
        point = as_point(point)
        return bool(((self.mins <= point) & (point <= self.maxs)).all())

    def intersects(self, other):
        return bool(
            ((self.mins <= other.maxs) & (other.mins <= self.maxs)).all())

    def covers(self, other):
        return bool(
            ((self.mins <= other.mins) & (other.maxs <= self.maxs)).all())

    def quadrants(self):
        """
        Bisect the extent at its center.

        Returns:
            tuple: the (nw, ne, sw, se) quadrant extents. Their union is self
            and they only overlap on the two bisecting lines.
        """
        (minx, miny), (midx, midy), (maxx, maxy) = (
            self.mins, self.center, self.maxs)
        return (
            Extent((minx, midy), (midx, maxy)),
            Extent((midx, midy), (maxx, maxy)),
            Extent((minx, miny), (midx, midy)),
            Extent((midx, miny), (maxx, midy)),
        )

    def __eq__(self, other):
        if not isinstance(other, Extent):
            return NotImplemented
        return (numpy.array_equal(self.mins, other.mins)
                and numpy.array_equal(self.maxs, other.maxs))

    def __hash__(self):
        return hash(self.bounds)

    def __repr__(self):
        return "{}(mins={}, maxs={})".format(
            self.__class__.__name__, tuple(self.mins.tolist()),
            tuple(self.maxs.tolist()))
