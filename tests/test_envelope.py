import numpy
import pytest

from quadindex.envelope import Extent, as_point, freeze
from quadindex.errors import InvalidExtentError


@pytest.fixture
def square():
    return Extent((0, 0), (4, 4))


def test_invalid_extent():
    with pytest.raises(InvalidExtentError):
        Extent((1, 1), (0, 0))
    with pytest.raises(InvalidExtentError):
        Extent((0, 1), (1, 0))
    with pytest.raises(InvalidExtentError):
        Extent((0, float("nan")), (1, 1))


def test_invalid_extent_is_a_value_error():
    with pytest.raises(ValueError):
        Extent((1, 1), (0, 0))


def test_degenerate_extent_is_valid():
    ext = Extent((1, 1), (1, 1))
    assert ext.contains((1, 1))
    assert not ext.contains((1, 1.5))


def test_point_shape():
    assert as_point([1, 2]).shape == (2,)
    assert freeze(numpy.array([1, 2])) == (1.0, 2.0)
    with pytest.raises(ValueError):
        as_point((1, 2, 3))


def test_contains_inclusive(square):
    assert square.contains((0, 0))
    assert square.contains((4, 4))
    assert square.contains((0, 4))
    assert square.contains((2, 3))
    assert not square.contains((4.000001, 2))
    assert not square.contains((-1, 2))
    assert not square.contains((5, 5))


def test_quadrants_partition(square):
    nw, ne, sw, se = square.quadrants()
    assert nw == Extent((0, 2), (2, 4))
    assert ne == Extent((2, 2), (4, 4))
    assert sw == Extent((0, 0), (2, 2))
    assert se == Extent((2, 0), (4, 2))
    # The center lies on every quadrant.
    assert all(quad.contains(square.center) for quad in square.quadrants())
    assert all(square.covers(quad) for quad in square.quadrants())


def test_intersects_and_covers(square):
    assert square.intersects(Extent((4, 4), (5, 5)))
    assert square.intersects(Extent((1, 1), (2, 2)))
    assert not square.intersects(Extent((4.5, 0), (5, 5)))
    assert square.covers(Extent((1, 1), (2, 2)))
    assert not square.covers(Extent((1, 1), (5, 2)))


def test_constructors():
    assert Extent.from_bounds((0, 1, 2, 3)) == Extent((0, 1), (2, 3))
    assert Extent((0, 1), (2, 3)).bounds == (0.0, 1.0, 2.0, 3.0)
    points = numpy.array([[1, 5], [-2, 3], [0, 7]])
    assert Extent.of_points(points) == Extent((-2, 3), (1, 7))
    with pytest.raises(ValueError):
        Extent.of_points(numpy.empty((0, 2)))
