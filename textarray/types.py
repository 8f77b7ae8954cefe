import typing as tp  # NOQA
import typing_extensions as tpe  # NOQA

try:
    from typing import TYPE_CHECKING  # NOQA
except ImportError:
    TYPE_CHECKING = False

# import textarray modules only for type checkers to avoid circular import
if TYPE_CHECKING:
    import numpy  # NOQA

    from textarray import element  # NOQA
    from textarray import records  # NOQA


Shape = tp.Tuple[int, ...]


Index = tp.Tuple[int, ...]
"""Coordinate of one array cell, one index per dimension."""


ShapeSpec = tp.Union[int, tp.Sequence[int]]


ElementTypeSpec = tp.Union[
    'element.ElementType',
    tp.Type[tp.Any],
    'numpy.dtype',
    str,
    None,
]
"""Values accepted as the ``element_type`` argument of the serializers."""


class TextStream(tpe.Protocol):
    """Protocol class for a writable text stream.

    This is only for PEP 544 compliant static type checkers.
    """

    def write(self, s):
        # type: (str) -> tp.Any
        ...


class RecordFactory(tpe.Protocol):
    """Protocol class for a callable building a default record instance.

    This is only for PEP 544 compliant static type checkers.
    """

    def __call__(self):
        # type: () -> tp.Any
        ...


Emit = tp.Callable[[str], None]
Visit = tp.Callable[[Index], None]
