"""Line-oriented text serialization of fixed-shape arrays."""
from textarray import _version
from textarray import element  # NOQA
from textarray import errors  # NOQA
from textarray import records  # NOQA
from textarray import serializer  # NOQA
from textarray import serializers  # NOQA
from textarray import walker  # NOQA
from textarray import warnings  # NOQA


# import class and function
from textarray.element import element_type_of  # NOQA
from textarray.element import NULL  # NOQA
from textarray.element import Primitive  # NOQA
from textarray.element import Record  # NOQA
from textarray.element import Text  # NOQA
from textarray.errors import ArgumentError  # NOQA
from textarray.records import Field  # NOQA
from textarray.records import get_record_type  # NOQA
from textarray.records import record  # NOQA
from textarray.records import RecordType  # NOQA
from textarray.records import register  # NOQA
from textarray.serializers import DEFAULT_ENCODING  # NOQA
from textarray.serializers import deserialize  # NOQA
from textarray.serializers import load_text  # NOQA
from textarray.serializers import save_text  # NOQA
from textarray.serializers import serialize  # NOQA
from textarray.walker import coordinates  # NOQA
from textarray.walker import walk  # NOQA


__version__ = _version.__version__

