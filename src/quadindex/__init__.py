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
Point quadtree spatial index.

A :class:`QuadTree` covers a fixed axis-aligned extent. Points with arbitrary
payloads are inserted one at a time; a leaf that is full when a new point
arrives is split into its four quadrants.

Nodes are kept in a flat buffer and refer to their children by index, the
same way R-tree siblings are replaced by arrays elsewhere. This keeps the
structure easy to inspect and extend, e.g. with a different split policy.
"""
from .envelope import Extent  # noqa: F401
from .errors import (  # noqa: F401
    CapacityError, InvalidExtentError, OutOfBoundsError, QuadIndexError,
    TreeInvariantError,
)
from .build import from_points  # noqa: F401
from .tree import DEFAULT_CAPACITY, Entry, Node, QuadTree  # noqa: F401

__version__ = "0.1.0"
