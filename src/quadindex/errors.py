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
'''
Exceptions raised by the quadtree index.
'''


class QuadIndexError(Exception):
    """Base class of all errors raised by quadindex."""


class InvalidExtentError(QuadIndexError, ValueError):
    """An extent whose min corner exceeds its max corner on some axis."""


class OutOfBoundsError(QuadIndexError, ValueError):
    """A point lying outside the root extent of an index."""


class TreeInvariantError(QuadIndexError, RuntimeError):
    """
    The tree structure is inconsistent.

    Raised when a point cannot be routed to any child of an internal node,
    or when :meth:`QuadTree.check` finds a leaf over capacity or children
    not partitioning their parent.
    """


class CapacityError(QuadIndexError):
    """
    A full leaf that cannot be split.

    Splitting cannot separate more than `capacity` entries sharing a single
    point, nor subdivide an extent below floating point resolution.
    """
