import os
import typing as tp  # NOQA
import warnings

import numpy

from textarray import element
from textarray import errors
from textarray import serializer
from textarray import types  # NOQA
from textarray import warnings as textarray_warnings


DEFAULT_ENCODING = 'utf-8'
"""Text encoding of files opened by path when none is given."""


class TextSerializer(serializer.Serializer):

    """Serializer for the line-oriented text format.

    Each primitive or text element is written as one line, and each record
    element as one line per field. Absent values are written as
    :data:`textarray.NULL`, except absent records, which are written as a
    default-constructed record.

    .. note::
       Absent records do not round-trip: they are loaded back as default
       records. A :class:`~textarray.warnings.DefaultRecordWarning` is issued
       by :meth:`save` when this happens; it can be silenced with the
       standard :mod:`warnings` filters.

    Args:
        target (list or file-like): Destination of the lines. A list gets the
            lines appended; otherwise ``target.write`` is called with each
            line followed by ``'\\n'``.
        element_type (~textarray.element.ElementType): Descriptor of the
            array elements.

    Attributes:
        ~TextSerializer.target: The destination of the lines.
        ~TextSerializer.default_records (int): Number of absent records
            written as default records so far.

    """

    def __init__(self, target, element_type):
        # type: (tp.Union[tp.List[str], types.TextStream], element.ElementType) -> None # NOQA
        self.target = target
        self.element_type = element_type
        self.default_records = 0
        if isinstance(target, list):
            self._emit = target.append
        else:
            self._emit = self._write_line

    def _write_line(self, line):
        self.target.write(line)
        self.target.write('\n')

    def __call__(self, index, value):
        if value is None and isinstance(self.element_type, element.Record):
            self.default_records += 1
        try:
            element.encode(value, self.element_type, self._emit)
        except errors.ConversionError as e:
            raise errors.ConversionError(
                'element {}: {}'.format(index, e))
        return value

    def save(self, array):
        super(TextSerializer, self).save(array)
        if self.default_records:
            warnings.warn(
                '{} absent {} element(s) were saved as default-constructed '
                'records'.format(self.default_records, self.element_type),
                textarray_warnings.DefaultRecordWarning)


class TextDeserializer(serializer.Deserializer):

    """Deserializer for the line-oriented text format.

    This deserializer reads the lines written by :class:`TextSerializer`.
    Lines are consumed in order and never skipped.

    .. note::
       Past the end of the lines, a primitive or text element decodes as
       ``None`` and the cell is left unchanged, whereas a record raises
       :class:`~textarray.errors.UnderrunError`. :func:`load_text` and
       :func:`deserialize` check the number of lines beforehand, so this
       only matters when the deserializer is used directly.

    Args:
        lines (list of str): Lines without line terminators.
        element_type (~textarray.element.ElementType): Descriptor of the
            array elements.
        position (int): Index of the first line to read.

    """

    def __init__(self, lines, element_type, position=0):
        self.cursor = element.LineCursor(lines, position)
        self.element_type = element_type

    @property
    def lines(self):
        return self.cursor.lines

    @property
    def position(self):
        """Index of the next line to read."""
        return self.cursor.position

    @property
    def remaining(self):
        """Number of lines not read yet."""
        return self.cursor.remaining

    def __call__(self, index, value):
        line_number = self.cursor.position + 1
        exhausted = self.cursor.remaining <= 0
        try:
            loaded = element.decode(self.cursor, self.element_type)
        except errors.ConversionError as e:
            raise errors.ConversionError(
                'element {} at line {}: {}'.format(index, line_number, e))
        if loaded is None and exhausted:
            # Nothing left to read; the cell keeps its value.
            return value
        return loaded


def check_length(element_count, line_count, element_type):
    """Checks that a number of lines fits an array.

    Args:
        element_count (int): Number of elements of the array.
        line_count (int): Number of lines available.
        element_type (~textarray.element.ElementType): Descriptor of the
            array elements.

    Raises:
        ~textarray.errors.LengthMismatchError: If ``line_count`` differs from
            ``element_count`` times the number of lines per element.

    """
    expected = element_count * element_type.line_count
    if line_count != expected:
        raise errors.LengthMismatchError(
            'The number of lines in the file ({}) does not match the '
            'expected number of lines ({}) for the array.'.format(
                line_count, expected))


def serialize(array, element_type=None):
    """Serializes an array to a list of lines.

    Args:
        array (array_like): Array of rank 1 or more.
        element_type: Element type; see
            :func:`~textarray.element.element_type_of`.

    Returns:
        list of str: The lines, without line terminators.

    """
    array, etype = _prepare_save(array, element_type)
    lines = []
    try:
        TextSerializer(lines, etype).save(array)
    except Exception as e:
        raise errors.ArgumentError(
            'An error occurred while serializing: {}'.format(e)) from e
    return lines


def deserialize(lines, array, element_type=None):
    """Deserializes a list of lines into an array.

    The number of lines is checked against the shape of ``array`` before
    any element is loaded.

    Args:
        lines (list of str): Lines without line terminators.
        array (numpy.ndarray): Array to load to. It is updated in place.
        element_type: Element type; see
            :func:`~textarray.element.element_type_of`.

    """
    etype = _prepare_load(array, element_type)
    try:
        _load_lines(list(lines), array, etype)
    except Exception as e:
        raise errors.ArgumentError(
            'An error occurred while deserializing: {}'.format(e)) from e


def save_text(file, array, element_type=None, encoding=None):
    """Saves an array to a text file, one value per line.

    Elements are written in row-major order: the last dimension varies
    fastest. The file holds no shape information, so an array of the same
    shape and element type must be passed to :func:`load_text`.

    .. note::
       Elements of record arrays should be initialized before saving. An
       absent record is written with the default values of its fields.

    Args:
        file (str, path-like or file-like): Target file. A path is opened for
            writing and truncated. A text stream is written to as is and left
            open.
        array (array_like): Array of rank 1 or more.
        element_type: Element type; see
            :func:`~textarray.element.element_type_of`.
        encoding (str): Text encoding of the file. Defaults to
            :data:`DEFAULT_ENCODING`.

    Raises:
        ~textarray.errors.ArgumentError: If the arguments are invalid or
            anything fails while saving. A failure in the middle leaves a
            truncated file.

    .. seealso::
        :func:`textarray.load_text`

    """
    _check_file(file)
    array, etype = _prepare_save(array, element_type)
    try:
        if _is_path(file):
            if encoding is None:
                encoding = DEFAULT_ENCODING
            with open(file, 'w', encoding=encoding) as f:
                TextSerializer(f, etype).save(array)
        else:
            TextSerializer(file, etype).save(array)
    except Exception as e:
        raise errors.ArgumentError(
            'An error occurred while saving to file: {}'.format(e)) from e


def load_text(file, array, element_type=None, encoding=None):
    """Loads an array from a text file written by :func:`save_text`.

    The whole file is read first, and its number of lines is checked against
    the shape and element type of ``array`` before any element is loaded.

    Args:
        file (str, path-like or file-like): Source file. A text stream is
            read to its end and left open.
        array (numpy.ndarray): Array to load to. It is updated in place.
        element_type: Element type; see
            :func:`~textarray.element.element_type_of`.
        encoding (str): Text encoding of the file. Defaults to
            :data:`DEFAULT_ENCODING`.

    Raises:
        ~textarray.errors.ArgumentError: If the arguments are invalid or
            anything fails while loading. If a line fails to convert, the
            elements before it have already been loaded.

    .. seealso::
        :func:`textarray.save_text`

    """
    _check_file(file)
    etype = _prepare_load(array, element_type)
    try:
        if _is_path(file):
            if encoding is None:
                encoding = DEFAULT_ENCODING
            with open(file, 'r', encoding=encoding) as f:
                lines = _read_lines(f)
        else:
            lines = _read_lines(file)
        _load_lines(lines, array, etype)
    except Exception as e:
        raise errors.ArgumentError(
            'An error occurred while loading from file: {}'.format(e)) from e


def _load_lines(lines, array, element_type):
    check_length(array.size, len(lines), element_type)
    TextDeserializer(lines, element_type).load(array)


def _read_lines(f):
    lines = []
    for line in f:
        if line.endswith('\r\n'):
            line = line[:-2]
        elif line.endswith('\n'):
            line = line[:-1]
        lines.append(line)
    return lines


def _is_path(file):
    return isinstance(file, (str, os.PathLike))


def _check_file(file):
    if file is None:
        raise errors.ArgumentError('File path cannot be None.')
    if isinstance(file, os.PathLike):
        file = os.fspath(file)
    if isinstance(file, str) and not file.strip():
        raise errors.ArgumentError('File path cannot be empty or whitespace.')


def _check_array(array):
    if array is None:
        raise errors.ArgumentError('Array cannot be None.')


def _prepare_save(array, element_type):
    _check_array(array)
    array = numpy.asarray(array)
    if array.ndim == 0:
        raise errors.ArgumentError('Array must have at least one dimension.')
    return array, element.element_type_of(array, element_type)


def _prepare_load(array, element_type):
    _check_array(array)
    if not isinstance(array, numpy.ndarray):
        raise errors.ArgumentError(
            'Array must be a numpy.ndarray, not {}.'.format(type(array)))
    if array.ndim == 0:
        raise errors.ArgumentError('Array must have at least one dimension.')
    if not array.flags.writeable:
        raise errors.ArgumentError('Array is read-only.')
    return element.element_type_of(array, element_type)
