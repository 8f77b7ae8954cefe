import typing as tp  # NOQA

from textarray import types  # NOQA


def coordinates(shape):
    # type: (types.ShapeSpec) -> tp.Iterator[types.Index]
    """Iterates over the coordinates of an array of the given shape.

    Coordinates are visited in row-major order: the last dimension varies
    fastest, like the digits of an odometer. A dimension of length zero
    yields no coordinates at all.

    Args:
        shape (tuple of ints): Extents of the dimensions. At least one
            dimension is required.

    Returns:
        Iterator over index tuples, one element per dimension.

    .. admonition:: Example

       >>> list(coordinates((2, 3)))
       [(0, 0), (0, 1), (0, 2), (1, 0), (1, 1), (1, 2)]

    """
    if isinstance(shape, int):
        shape = shape,
    shape = tuple(shape)
    if not shape:
        raise ValueError('shape must have at least one dimension')
    if len(shape) == 1:
        # Linear scan; no recursion for vectors.
        return ((i,) for i in range(shape[0]))
    return _coordinates(shape, ())


def _coordinates(shape, prefix):
    # type: (types.Shape, types.Index) -> tp.Iterator[types.Index]
    extent = shape[len(prefix)]
    if len(prefix) == len(shape) - 1:
        for i in range(extent):
            yield prefix + (i,)
    else:
        for i in range(extent):
            yield from _coordinates(shape, prefix + (i,))


def walk(shape, visit):
    # type: (types.ShapeSpec, types.Visit) -> None
    """Calls ``visit`` once for every coordinate of ``shape``.

    This is the traversal driver shared by saving and loading; see
    :func:`coordinates` for the visiting order.

    Args:
        shape (tuple of ints): Extents of the dimensions.
        visit (callable): Function called with each index tuple.

    """
    for index in coordinates(shape):
        visit(index)
