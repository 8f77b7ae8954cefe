"""Element type descriptors and the line codec of single array elements.

An array element is written as one line (:class:`Primitive` and
:class:`Text` elements) or as one line per field (:class:`Record`
elements). Absent values are written as the null token :data:`NULL`.

"""
import numbers
import typing as tp  # NOQA
import warnings

import numpy

from textarray import errors
from textarray import records
from textarray import types  # NOQA
from textarray import warnings as textarray_warnings


NULL = 'null'
"""Line that represents an absent value."""


_PRIMITIVE_KINDS = 'biufc'

_COMPLEX_ITEMSIZE = numpy.dtype(numpy.complex128).itemsize

_SCALAR_CLASSES = (bool, int, float, complex, numpy.generic)

_ACCEPTED_TYPES = {
    'b': (bool, numpy.bool_),
    'i': (numbers.Integral,),
    'u': (numbers.Integral,),
    'f': (numbers.Real,),
    'c': (numbers.Complex,),
}


class ElementType(object):

    """Base class of element type descriptors.

    Attributes:
        ~ElementType.nullable (bool): If ``True``, ``None`` is a valid value
            of the element.
        ~ElementType.line_count (int): Number of lines one element occupies.

    """

    nullable = False
    line_count = 1

    def format(self, value):
        """Converts a value to its line representation."""
        raise NotImplementedError

    def parse(self, line):
        """Converts a line back to a value."""
        raise NotImplementedError

    def _parse_null(self):
        if not self.nullable:
            raise errors.ConversionError(
                'null cannot be stored as a non-nullable {}'.format(self))
        return None


class Primitive(ElementType):

    """Boolean or numeric element of a fixed numpy dtype.

    Args:
        dtype: Anything accepted by :class:`numpy.dtype` that denotes a
            boolean, integer, unsigned integer, floating point or complex
            type.
        nullable (bool): Whether ``None`` is accepted.

    """

    def __init__(self, dtype, nullable=False):
        dtype = numpy.dtype(dtype)
        if dtype.kind not in _PRIMITIVE_KINDS:
            raise TypeError('{} is not a primitive dtype'.format(dtype))
        self.dtype = dtype
        self.nullable = nullable

    def __repr__(self):
        return 'Primitive({}, nullable={})'.format(self.dtype, self.nullable)

    def __str__(self):
        return str(self.dtype)

    def __eq__(self, other):
        return (isinstance(other, Primitive) and self.dtype == other.dtype
                and self.nullable == other.nullable)

    def __hash__(self):
        return hash((Primitive, self.dtype, self.nullable))

    def format(self, value):
        if value is None:
            return NULL
        kind = self.dtype.kind
        if not isinstance(value, _ACCEPTED_TYPES[kind]):
            raise errors.ConversionError(
                'cannot save {!r} as {}'.format(value, self))
        if kind == 'b':
            return 'true' if value else 'false'
        if kind in 'iu':
            return str(self._check_range(int(value)))
        return str(self.dtype.type(value))

    def parse(self, line):
        if line == NULL:
            return self._parse_null()
        kind = self.dtype.kind
        if kind == 'b':
            token = line.strip().lower()
            if token == 'true':
                return True
            if token == 'false':
                return False
            raise errors.ConversionError(
                'cannot convert {!r} to bool'.format(line))
        try:
            if kind in 'iu':
                return self._check_range(int(line))
            if kind == 'f':
                float(line)
                return self.dtype.type(line.strip()).item()
            return self._parse_complex(line)
        except ValueError:
            raise errors.ConversionError(
                'cannot convert {!r} to {}'.format(line, self))

    def _parse_complex(self, line):
        value = complex(line)
        if self.dtype.itemsize <= _COMPLEX_ITEMSIZE:
            return self.dtype.type(value).item()
        # Python complex would truncate extended precision parts.
        real, imag = _split_complex(line)
        part = numpy.finfo(self.dtype).dtype.type
        out = numpy.zeros((), self.dtype)
        out.real = part(real)
        out.imag = part(imag)
        return out[()]

    def _check_range(self, value):
        info = numpy.iinfo(self.dtype)
        if not info.min <= value <= info.max:
            raise errors.ConversionError(
                '{} is out of the range of {}'.format(value, self))
        return value


class Text(ElementType):

    """String element.

    Args:
        nullable (bool): Whether ``None`` is accepted.
        width (int): Capacity of a fixed-width :class:`numpy.str_` array, or
            ``None`` for unbounded strings.

    """

    def __init__(self, nullable=False, width=None):
        self.nullable = nullable
        self.width = width

    def __repr__(self):
        return 'Text(nullable={}, width={})'.format(self.nullable, self.width)

    def __str__(self):
        if self.width is None:
            return 'str'
        return 'str of width {}'.format(self.width)

    def __eq__(self, other):
        return (isinstance(other, Text) and self.nullable == other.nullable
                and self.width == other.width)

    def __hash__(self):
        return hash((Text, self.nullable, self.width))

    def format(self, value):
        if value is None:
            return NULL
        if not isinstance(value, str):
            raise errors.ConversionError(
                'cannot save {!r} as {}'.format(value, self))
        if '\n' in value or '\r' in value:
            raise errors.ConversionError(
                'cannot save {!r}: text must not contain line breaks'.format(
                    value))
        if value == NULL:
            warnings.warn(
                'the text {!r} is saved as is and will be loaded as '
                'None'.format(value),
                textarray_warnings.AmbiguousNullWarning)
        return str(value)

    def parse(self, line):
        if line == NULL:
            return self._parse_null()
        if self.width is not None and len(line) > self.width:
            raise errors.ConversionError(
                '{!r} does not fit in {}'.format(line, self))
        return line


class Record(ElementType):

    """Flat record element, written as one line per field.

    Args:
        record_type (~textarray.records.RecordType): Fields of the record.

    """

    nullable = True

    def __init__(self, record_type):
        self.record_type = record_type

    def __repr__(self):
        return 'Record({!r})'.format(self.record_type)

    def __str__(self):
        return self.record_type.name

    @property
    def line_count(self):
        return self.record_type.line_count


def _split_complex(line):
    token = line.strip()
    if token.startswith('(') and token.endswith(')'):
        token = token[1:-1]
    if not token.endswith('j'):
        return token, '0'
    token = token[:-1]
    split = 0
    for i in range(1, len(token)):
        if token[i] in '+-' and token[i - 1] not in 'eE':
            split = i
    real, imag = token[:split] or '0', token[split:]
    if imag in ('', '+', '-'):
        imag += '1'
    return real, imag


def scalar_type(kind, nullable=False, width=None):
    """Returns the descriptor of a single-line value of the given kind.

    Args:
        kind: ``str`` for text, otherwise a boolean or numeric type or
            dtype.
        nullable (bool): Whether ``None`` is accepted.
        width (int): Capacity of fixed-width text.

    """
    if kind is str:
        return Text(nullable=nullable, width=width)
    if isinstance(kind, type) and not issubclass(kind, _SCALAR_CLASSES):
        raise TypeError('{!r} is not a scalar type'.format(kind))
    try:
        dtype = numpy.dtype(kind)
    except TypeError:
        raise TypeError('{!r} is not a scalar type'.format(kind))
    if dtype.kind == 'U':
        return Text(nullable=nullable, width=_width(dtype) or None)
    if dtype.kind not in _PRIMITIVE_KINDS or dtype.shape:
        raise TypeError('{!r} is not a scalar type'.format(kind))
    return Primitive(dtype, nullable=nullable)


def element_type_of(array, element_type=None):
    # type: (numpy.ndarray, types.ElementTypeSpec) -> ElementType
    """Resolves the element type descriptor of an array.

    Args:
        array (numpy.ndarray): Array to be saved or loaded.
        element_type: Explicit element type. It can be an
            :class:`ElementType`, ``str``, a boolean or numeric type, or a
            registered record class. If ``None``, the type is inferred from
            ``array.dtype``. Object arrays always need an explicit type.

    Returns:
        ElementType: The descriptor. :class:`Primitive` and :class:`Text`
        descriptors are nullable exactly when ``array`` is an object array.

    """
    dtype = array.dtype
    nullable = dtype.kind == 'O'

    if element_type is None:
        if dtype.kind in _PRIMITIVE_KINDS:
            return Primitive(dtype)
        if dtype.kind == 'U':
            return Text(width=_width(dtype))
        if dtype.names is not None:
            try:
                return Record(records.structured_record_type(dtype))
            except TypeError as e:
                raise errors.ArgumentError(str(e))
        if nullable:
            raise errors.ArgumentError(
                'element_type is required for an object array')
        raise errors.ArgumentError('unsupported dtype: {}'.format(dtype))

    if isinstance(element_type, ElementType):
        return element_type

    if records.is_record(element_type):
        if not nullable:
            raise errors.ArgumentError(
                'records of {} require an object array, not {}'.format(
                    element_type.__name__, dtype))
        return Record(records.get_record_type(element_type))

    if not nullable and dtype.kind not in _PRIMITIVE_KINDS + 'U':
        raise errors.ArgumentError(
            'an array of {} cannot hold {!r} elements'.format(
                dtype, element_type))
    try:
        scalar = scalar_type(element_type, nullable=nullable)
    except TypeError as e:
        raise errors.ArgumentError(
            'unsupported element type: {}'.format(e))
    if not nullable and isinstance(scalar, Text) != (dtype.kind == 'U'):
        raise errors.ArgumentError(
            'an array of {} cannot hold {} elements'.format(dtype, scalar))
    if dtype.kind == 'U':
        scalar.width = _width(dtype)
    return scalar


def _width(dtype):
    return dtype.itemsize // numpy.dtype('U1').itemsize


class LineCursor(object):

    """Read position over an ordered list of lines.

    The position only moves forward, one line per :meth:`next` call.

    Args:
        lines (list of str): Lines to read.
        position (int): Index of the first line to read.

    """

    def __init__(self, lines, position=0):
        self.lines = lines
        self.position = position

    @property
    def remaining(self):
        """Number of lines not read yet."""
        return len(self.lines) - self.position

    def next(self):
        line = self.lines[self.position]
        self.position += 1
        return line


def encode(value, element_type, emit):
    # type: (tp.Any, ElementType, types.Emit) -> None
    """Writes one element as lines.

    An absent record is replaced by a default-constructed instance of its
    record type, so that a record always takes ``line_count`` lines.

    Args:
        value: Element to write, or ``None``.
        element_type (ElementType): Descriptor of the element.
        emit (callable): Function called with each line.

    """
    if isinstance(element_type, Record):
        record_type = element_type.record_type
        if value is None:
            value = record_type.new()
        for field in record_type.fields:
            try:
                line = field.scalar.format(field.get(value))
            except errors.ConversionError as e:
                raise errors.ConversionError(
                    'field {!r}: {}'.format(field.name, e))
            emit(line)
    else:
        emit(element_type.format(value))


def decode(cursor, element_type):
    """Reads one element from lines.

    Args:
        cursor (LineCursor): Lines to read from.
        element_type (ElementType): Descriptor of the element.

    Returns:
        The decoded element. A scalar element read past the end of the lines
        is ``None``, while a record raises
        :class:`~textarray.errors.UnderrunError` in the same situation.

    """
    if isinstance(element_type, Record):
        return _decode_record(cursor, element_type.record_type)
    if cursor.remaining <= 0:
        return None
    return element_type.parse(cursor.next())


def _decode_record(cursor, record_type):
    obj = record_type.new()
    for field in record_type.fields:
        if cursor.remaining <= 0:
            raise errors.UnderrunError(
                'Not enough lines to deserialize all fields of {}: '
                'field {!r} is missing.'.format(record_type.name, field.name))
        try:
            value = field.scalar.parse(cursor.next())
        except errors.ConversionError as e:
            raise errors.ConversionError(
                'field {!r}: {}'.format(field.name, e))
        field.set(obj, value)
    return obj
