"""Registry of flat record types.

A record is written as one line per field, in the order the fields are
registered. Fields are looked up once at registration time; saving and
loading never inspect the attributes of the record objects.

.. admonition:: Example

   >>> @textarray.record(
   ...         textarray.Field('name', str, optional=True),
   ...         textarray.Field('age', int, optional=True))
   ... class Person(object):
   ...     def __init__(self, name=None, age=None):
   ...         self.name = name
   ...         self.age = age

"""
import typing as tp  # NOQA

import numpy

from textarray import element
from textarray import types  # NOQA


class Field(object):

    """Field of a flat record.

    Args:
        name (str): Name of the field. It is only used to access the
            attribute and in error messages; it is not written.
        kind: ``str`` for text, otherwise a boolean or numeric type or dtype.
            Records, arrays and collections are not allowed.
        optional (bool): If ``True``, the field may be ``None``.
        getter (callable): Function that takes a record and returns the field
            value. Defaults to reading the attribute ``name``.
        setter (callable): Function that takes a record and a value and
            stores the value. Defaults to setting the attribute ``name``.

    """

    def __init__(self, name, kind, optional=False, getter=None, setter=None):
        if is_record(kind):
            raise TypeError(
                'field {!r} is a record; records must be flat'.format(name))
        self.name = name
        self.kind = kind
        self.optional = optional
        self.scalar = element.scalar_type(kind, nullable=optional)
        self._getter = getter
        self._setter = setter

    def __repr__(self):
        return 'Field({!r}, {}, optional={})'.format(
            self.name, self.scalar, self.optional)

    def get(self, obj):
        if self._getter is not None:
            return self._getter(obj)
        return getattr(obj, self.name)

    def set(self, obj, value):
        if self._setter is not None:
            self._setter(obj, value)
        else:
            setattr(obj, self.name, value)


class RecordType(object):

    """Ordered fields of a record class.

    Args:
        cls (type): The record class. ``None`` for records that are not
            backed by a class, such as the elements of structured arrays.
        fields (list of Field): Fields in the order they are written.
        factory (callable): Function that returns a default instance.
            Defaults to calling ``cls`` without arguments.
        name (str): Name used in messages. Defaults to the class name.

    """

    def __init__(self, cls, fields, factory=None, name=None):
        # type: (tp.Optional[type], tp.Iterable[Field], tp.Optional[types.RecordFactory], tp.Optional[str]) -> None # NOQA
        fields = tuple(fields)
        if not fields:
            raise ValueError('a record needs at least one field')
        names = [field.name for field in fields]
        if len(set(names)) != len(names):
            raise ValueError('duplicate field names: {}'.format(names))
        if factory is None:
            if cls is None:
                raise ValueError('factory is required without a class')
            factory = cls
        if name is None:
            name = cls.__name__
        self.cls = cls
        self.fields = fields
        self.factory = factory
        self.name = name

    def __repr__(self):
        return 'RecordType({}, {!r})'.format(self.name, list(self.fields))

    @property
    def line_count(self):
        """Number of lines a record takes."""
        return len(self.fields)

    def new(self):
        """Returns a default-constructed record."""
        return self.factory()


_registry = {}


def register(cls, *fields, factory=None):
    """Registers a class as a flat record type.

    Args:
        cls (type): Record class.
        fields (Field): Fields in the order they are written.
        factory (callable): Function that returns a default instance.
            Defaults to ``cls``.

    Returns:
        RecordType: The registered record type. Registering the same class
        again replaces its fields.

    """
    record_type = RecordType(cls, fields, factory=factory)
    _registry[cls] = record_type
    return record_type


def record(*fields, factory=None):
    """Class decorator version of :func:`register`."""
    def decorator(cls):
        register(cls, *fields, factory=factory)
        return cls
    return decorator


def unregister(cls):
    del _registry[cls]


def is_record(cls):
    try:
        return cls in _registry
    except TypeError:
        # unhashable
        return False


def get_record_type(cls):
    """Returns the :class:`RecordType` registered for ``cls``."""
    try:
        return _registry[cls]
    except KeyError:
        raise KeyError('{} is not a registered record type'.format(cls))


def structured_record_type(dtype):
    """Returns the record type of the elements of a structured array.

    Every named field of ``dtype`` becomes a non-optional field, in the
    order of ``dtype.names``. The default instance is a zero-filled
    structured scalar of ``dtype``.

    Args:
        dtype (numpy.dtype): Structured dtype with scalar fields only.

    """
    dtype = numpy.dtype(dtype)
    if dtype.names is None:
        raise TypeError('{} is not a structured dtype'.format(dtype))
    fields = [Field(name, dtype.fields[name][0],
                    getter=_item_getter(name), setter=_item_setter(name))
              for name in dtype.names]
    return RecordType(
        None, fields, factory=lambda: numpy.zeros((), dtype=dtype)[()],
        name=str(dtype))


def _item_getter(name):
    def get(obj):
        return obj[name]
    return get


def _item_setter(name):
    def set(obj, value):
        obj[name] = value
    return set
