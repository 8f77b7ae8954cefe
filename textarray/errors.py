"""Exceptions raised by textarray.

Only :class:`ArgumentError` crosses the public save/load helpers. The other
kinds are raised by the codec and the serializer objects, and the helpers
re-raise them as :class:`ArgumentError` keeping their message.

"""


class ArgumentError(ValueError):

    """Error raised by :func:`~textarray.save_text` and friends.

    Invalid arguments raise it directly. Any other failure while saving or
    loading (I/O, conversion, shape) is re-raised as this error, and the
    original exception is kept as ``__cause__``.

    """


class TextArrayError(Exception):

    """Base class of the errors raised while encoding or decoding lines."""


class ConversionError(TextArrayError):

    """A value cannot be converted to or from its line representation."""


class LengthMismatchError(TextArrayError):

    """The number of lines does not match the shape of the target array."""


class UnderrunError(TextArrayError):

    """Lines ran out in the middle of a record."""
