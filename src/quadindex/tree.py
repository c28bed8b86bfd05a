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
Quadtree spatial index over 2D points.

The base data structure is the class :class:`QuadTree`.
'''
import collections
import logging
import numbers

import numpy
import toolz

from .envelope import Extent, as_point, freeze
from .errors import CapacityError, OutOfBoundsError, TreeInvariantError

logger = logging.getLogger(__name__)

DEFAULT_CAPACITY = 8


# ====================  QuadTree Data Structure  ==============================

# The data model for the tree is given by the following specifications:
#   1. Nodes are stored in a 1d-buffer indexed by non-negative integers.
#   1. The root node has index 0.
#   1. There are 2 types of nodes:
#          a. leaf nodes holding a list of entries.
#          a. internal nodes holding the indices of exactly 4 children.
#   1. Every node carries its extent. The extents of the children of an
#      internal node are the quadrants of its own extent, in the order
#      nw, ne, sw, se.
#   1. Nodes are never removed from the buffer: a split overwrites the leaf
#      with an internal node and appends its 4 new leaves.
#   1. A leaf never holds more than `capacity` entries once an insert
#      returns.

Entry = collections.namedtuple('Entry', 'point payload')
Node = collections.namedtuple('Node', 'isleaf extent entries children')


def _leaf(extent):
    return Node(isleaf=True, extent=extent, entries=[], children=None)


class QuadTree():
    """
    Point quadtree with a fixed root extent.

    A leaf that is full when a new point arrives is split into four quadrant
    leaves, and its entries are redistributed among them.

    Args:
        extent (Extent or pair of points): area covered by the index.
        capacity (int, optional): max number of entries per leaf.
            Defaults to 8.

    Attributes:
        extent (Extent): root extent.
        capacity (int): max number of entries per leaf.
        nodes (list of Node): node buffer; the root has index 0.

    Raises:
        InvalidExtentError: if the extent's min corner exceeds its max corner.
        ValueError: if capacity is not a positive integer.
    """
    def __init__(self, extent, capacity=DEFAULT_CAPACITY):
        if not isinstance(extent, Extent):
            extent = Extent(*extent)
        if (isinstance(capacity, bool)
                or not isinstance(capacity, numbers.Integral)
                or capacity < 1):
            raise ValueError(
                "Capacity must be a positive integer, got {!r}."
                .format(capacity)
            )
        self.extent = extent
        self.capacity = int(capacity)
        self.nodes = [_leaf(extent)]
        self._size = 0

    def __len__(self):
        """Number of stored entries."""
        return self._size

    def __iter__(self):
        return self.entries()

    def __repr__(self):
        return "{}(extent={!r}, capacity={}, size={})".format(
            self.__class__.__name__, self.extent, self.capacity, len(self))

    # ------------------------------  Inserts  --------------------------------

    def insert(self, point, payload=None):
        """
        Insert a point with an arbitrary payload.

        Identical points are kept as distinct entries.

        Raises:
            OutOfBoundsError: if point lies outside the root extent. The tree
                is left untouched.
            CapacityError: if a full leaf cannot be subdivided any further,
                e.g. more than `capacity` entries share a single point.
        """
        point = as_point(point)
        if not self.extent.contains(point):
            raise OutOfBoundsError(
                "Point {} lies outside the index extent {}."
                .format(tuple(point.tolist()), self.extent.bounds)
            )
        self._insert(0, Entry(freeze(point), payload))
        self._size += 1

    def insert_many(self, points, payloads=None):
        """
        Insert the rows of an (N, 2) array in order.

        Args:
            points (array): points to insert.
            payloads (iterable, optional): one payload per point. Defaults to
                the row indices.

        Raises:
            ValueError: if points is not an (N, 2) array, or if the number of
                payloads differs from the number of points.
            OutOfBoundsError: if any point lies outside the root extent. No
                point is inserted in that case.
            CapacityError: as raised by :meth:`insert`. The rows before the
                failing one stay inserted.
        """
        points = numpy.asarray(points, dtype=float)
        if points.size == 0:
            points = points.reshape(0, 2)
        if points.ndim != 2 or points.shape[1] != 2:
            raise ValueError(
                "Points must be an (N, 2) array, got shape {}."
                .format(points.shape)
            )
        inside = ((self.extent.mins <= points)
                  & (points <= self.extent.maxs)).all(axis=1)
        if not inside.all():
            outside = numpy.flatnonzero(~inside)
            raise OutOfBoundsError(
                "{} point(s) lie outside the index extent {}, first at row {}."
                .format(len(outside), self.extent.bounds, outside[0])
            )
        if payloads is None:
            payloads = range(len(points))
        payloads = list(payloads)
        if len(payloads) != len(points):
            raise ValueError(
                "Got {} payloads for {} points."
                .format(len(payloads), len(points))
            )
        logger.debug("Inserting %d points", len(points))
        for point, payload in zip(points, payloads):
            self.insert(point, payload)

    def _insert(self, idx, entry):
        # Iterative descent: a split turns the current leaf into an internal
        # node and the loop then routes the entry through it.
        while True:
            node = self.nodes[idx]
            if not node.isleaf:
                idx = self._route(idx, entry.point)
            elif len(node.entries) < self.capacity:
                node.entries.append(entry)
                return
            elif all(e.point == entry.point for e in node.entries):
                raise CapacityError(
                    "Cannot store more than {} entries at point {}."
                    .format(self.capacity, entry.point)
                )
            else:
                self._split(idx, entry)

    def _route(self, idx, point):
        # First match wins for points lying on a bisecting line.
        for child in self.nodes[idx].children:
            if self.nodes[child].extent.contains(point):
                return child
        raise TreeInvariantError(
            "Point {} is contained by no child of node {} with extent {}."
            .format(point, idx, self.nodes[idx].extent.bounds)
        )

    def _split(self, idx, incoming):
        node = self.nodes[idx]
        quadrants = node.extent.quadrants()

        def target(point):
            matches = [i for i, quad in enumerate(quadrants)
                       if quad.contains(point)]
            if not matches:
                raise TreeInvariantError(
                    "Point {} is contained by no quadrant of leaf {} with "
                    "extent {}.".format(point, idx, node.extent.bounds)
                )
            return toolz.first(matches)

        # Below float resolution the midpoint can round onto a corner, and a
        # quadrant can then equal the whole extent. Splitting only loops if
        # every point is routed to that quadrant.
        targets = {target(e.point) for e in node.entries}
        targets.add(target(incoming.point))
        if len(targets) == 1 and quadrants[targets.pop()] == node.extent:
            raise CapacityError(
                "Leaf {} with extent {} is full and too small to be "
                "subdivided.".format(idx, node.extent.bounds)
            )
        first = len(self.nodes)
        self.nodes.extend(_leaf(quad) for quad in quadrants)
        self.nodes[idx] = Node(
            isleaf=False,
            extent=node.extent,
            entries=None,
            children=tuple(range(first, first + 4)),
        )
        logger.debug("Split leaf %d into nodes %d-%d, redistributing %d "
                     "entries", idx, first, first + 3, len(node.entries))
        # At most `capacity` entries over 4 empty leaves: no cascading split.
        for entry in node.entries:
            self._insert(idx, entry)

    # -----------------------------  Traversal  -------------------------------

    def children(self, idx=0):
        """Indices of the children of node idx, empty for a leaf."""
        node = self.nodes[idx]
        if node.isleaf:
            return ()
        return node.children

    def entries(self, idx=0):
        """Iterator over all entries under node idx, depth first."""
        return toolz.concat(self.nodes[leaf].entries
                            for leaf in self.leaves(idx))

    def leaves(self, idx=0):
        """Iterator over the indices of all leaves under node idx."""
        return (leaf for leaf, _ in self._walk(idx)
                if self.nodes[leaf].isleaf)

    @property
    def depth(self):
        """Number of levels of the tree, 1 for a lone root leaf."""
        return max(level for _, level in self._walk())

    def locate(self, point):
        """
        Index of the leaf an insert of point would be routed to.

        Raises:
            OutOfBoundsError: if point lies outside the root extent.
        """
        point = freeze(point)
        if not self.extent.contains(point):
            raise OutOfBoundsError(
                "Point {} lies outside the index extent {}."
                .format(point, self.extent.bounds)
            )
        idx = 0
        while not self.nodes[idx].isleaf:
            idx = self._route(idx, point)
        return idx

    def query(self, extent):
        """
        Entries whose point lies in extent, bounds included.

        Subtrees whose extent does not intersect the query are pruned.

        Args:
            extent (Extent or pair of points): query window.

        Returns:
            list of Entry.
        """
        if not isinstance(extent, Extent):
            extent = Extent(*extent)
        found = []
        stack = [0]
        while stack:
            node = self.nodes[stack.pop()]
            if not extent.intersects(node.extent):
                continue
            if not node.isleaf:
                # Reversed so that children are visited in nw, ne, sw, se order
                stack.extend(reversed(node.children))
            elif extent.covers(node.extent):
                found.extend(node.entries)
            else:
                found.extend(entry for entry in node.entries
                             if extent.contains(entry.point))
        return found

    def check(self):
        """
        Verify the structure of the whole tree.

        Raises:
            TreeInvariantError: if a leaf holds more than `capacity` entries,
                if the children of an internal node are not the quadrants of
                its extent, or if the entry count is off.
        """
        for idx, _ in self._walk():
            node = self.nodes[idx]
            if node.isleaf:
                if len(node.entries) > self.capacity:
                    raise TreeInvariantError(
                        "Leaf {} holds {} entries, capacity is {}."
                        .format(idx, len(node.entries), self.capacity)
                    )
                outside = [e.point for e in node.entries
                           if not node.extent.contains(e.point)]
                if outside:
                    raise TreeInvariantError(
                        "Leaf {} stores points {} outside its extent {}."
                        .format(idx, outside, node.extent.bounds)
                    )
            else:
                extents = tuple(self.nodes[child].extent
                                for child in node.children)
                if len(extents) != 4 or extents != node.extent.quadrants():
                    raise TreeInvariantError(
                        "Children of node {} do not partition its extent {}."
                        .format(idx, node.extent.bounds)
                    )
        count = toolz.count(self.entries())
        if count != len(self):
            raise TreeInvariantError(
                "Tree holds {} entries, {} were inserted."
                .format(count, len(self))
            )

    def _walk(self, idx=0):
        # Pre-order (index, level) pairs with an explicit stack: the tree has
        # no depth limit and can outgrow the interpreter's recursion limit.
        stack = [(idx, 1)]
        while stack:
            idx, level = stack.pop()
            yield idx, level
            stack.extend((child, level + 1)
                         for child in reversed(self.children(idx)))
