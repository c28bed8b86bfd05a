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
Building a quadtree from arrays of points.
"""
import numpy

from . import envelope
from . import tree


def from_points(points, payloads=None, extent=None,
                capacity=tree.DEFAULT_CAPACITY):
    """
    Build a quadtree holding every row of an (N, 2) array.

    Parameters:
        points (array): points to index.
        payloads (iterable, optional): one payload per point. Defaults to the
            row indices.
        extent (Extent, optional): root extent. Defaults to the smallest
            extent containing the points.
        capacity (int, optional): max number of entries per leaf.

    Returns:
        QuadTree: the filled index.
    """
    points = numpy.asarray(points, dtype=float)
    if extent is None:
        extent = envelope.Extent.of_points(points)
    qtree = tree.QuadTree(extent, capacity=capacity)
    qtree.insert_many(points, payloads)
    return qtree
