import unittest
import warnings

import numpy
import pytest

import textarray
from textarray import element
from textarray import errors
from textarray import records
from textarray import testing


class Point(object):

    def __init__(self, x=0, y=0, label=None):
        self.x = x
        self.y = y
        self.label = label


records.register(
    Point,
    records.Field('x', int),
    records.Field('y', float),
    records.Field('label', str, optional=True))


@pytest.mark.parametrize('dtype', [
    numpy.int8, numpy.int32, numpy.int64, numpy.uint16])
class TestPrimitiveInteger(object):

    def test_format(self, dtype):
        assert element.Primitive(dtype).format(dtype(12)) == '12'

    def test_format_python_int(self, dtype):
        assert element.Primitive(dtype).format(7) == '7'

    def test_parse(self, dtype):
        assert element.Primitive(dtype).parse('12') == 12

    def test_parse_with_spaces(self, dtype):
        assert element.Primitive(dtype).parse(' 12 ') == 12

    def test_parse_out_of_range(self, dtype):
        info = numpy.iinfo(dtype)
        with pytest.raises(errors.ConversionError):
            element.Primitive(dtype).parse(str(int(info.max) + 1))

    def test_parse_invalid(self, dtype):
        with pytest.raises(errors.ConversionError):
            element.Primitive(dtype).parse('1.5')

    def test_parse_null(self, dtype):
        with pytest.raises(errors.ConversionError):
            element.Primitive(dtype).parse('null')


class TestPrimitiveBool(unittest.TestCase):

    def setUp(self):
        self.type = element.Primitive(bool)

    def test_format(self):
        self.assertEqual(self.type.format(True), 'true')
        self.assertEqual(self.type.format(numpy.bool_(False)), 'false')

    def test_parse(self):
        self.assertIs(self.type.parse('true'), True)
        self.assertIs(self.type.parse('false'), False)

    def test_parse_ignores_case(self):
        self.assertIs(self.type.parse('True'), True)
        self.assertIs(self.type.parse('FALSE'), False)

    def test_parse_invalid(self):
        with self.assertRaises(errors.ConversionError):
            self.type.parse('1')

    def test_format_non_bool(self):
        with self.assertRaises(errors.ConversionError):
            self.type.format('yes')


@pytest.mark.parametrize('dtype', [
    numpy.float16, numpy.float32, numpy.float64, numpy.longdouble])
class TestPrimitiveFloat(object):

    def test_round_trip(self, dtype):
        t = element.Primitive(dtype)
        values = numpy.random.uniform(-10, 10, 20).astype(dtype)
        for value in values:
            assert dtype(t.parse(t.format(value))) == value

    def test_round_trip_full_precision(self, dtype):
        t = element.Primitive(dtype)
        value = dtype(1) / dtype(3)
        assert dtype(t.parse(t.format(value))) == value

    def test_format_short(self, dtype):
        assert element.Primitive(dtype).format(dtype(0.5)) == '0.5'

    def test_special_values(self, dtype):
        t = element.Primitive(dtype)
        assert t.parse('inf') == float('inf')
        assert numpy.isnan(t.parse('nan'))

    def test_parse_invalid(self, dtype):
        with pytest.raises(errors.ConversionError):
            element.Primitive(dtype).parse('abc')


@pytest.mark.parametrize('dtype', [
    numpy.complex64, numpy.complex128, numpy.clongdouble])
class TestPrimitiveComplex(object):

    def test_round_trip(self, dtype):
        t = element.Primitive(dtype)
        value = dtype(1.5 - 2j)
        assert t.parse(t.format(value)) == value

    def test_round_trip_full_precision(self, dtype):
        t = element.Primitive(dtype)
        value = numpy.zeros((), dtype)
        value.real = 1
        value.imag = -2
        value = value[()] / 3
        assert dtype(t.parse(t.format(value))) == value

    def test_parse_imaginary_only(self, dtype):
        assert element.Primitive(dtype).parse('-2.5j') == -2.5j

    def test_parse_real_only(self, dtype):
        assert element.Primitive(dtype).parse('4') == 4

    def test_parse_exponent(self, dtype):
        assert element.Primitive(dtype).parse('(2.5e-1+2e+2j)') == 0.25 + 200j

    def test_parse_invalid(self, dtype):
        with pytest.raises(errors.ConversionError):
            element.Primitive(dtype).parse('1+')


class TestPrimitiveNullable(unittest.TestCase):

    def setUp(self):
        self.type = element.Primitive(int, nullable=True)

    def test_format_none(self):
        self.assertEqual(self.type.format(None), 'null')

    def test_parse_null(self):
        self.assertIsNone(self.type.parse('null'))

    def test_null_is_case_sensitive(self):
        with self.assertRaises(errors.ConversionError):
            self.type.parse('NULL')

    def test_format_wrong_type(self):
        with self.assertRaises(errors.ConversionError):
            self.type.format('12')


class TestPrimitiveInvalidDtype(unittest.TestCase):

    def test_text_dtype(self):
        with self.assertRaises(TypeError):
            element.Primitive('U3')


class TestText(unittest.TestCase):

    def test_format(self):
        self.assertEqual(element.Text().format('John'), 'John')

    def test_format_empty(self):
        self.assertEqual(element.Text().format(''), '')

    def test_format_none(self):
        self.assertEqual(element.Text(nullable=True).format(None), 'null')

    def test_format_line_break(self):
        with self.assertRaises(errors.ConversionError):
            element.Text().format('a\nb')
        with self.assertRaises(errors.ConversionError):
            element.Text().format('a\rb')

    def test_format_non_str(self):
        with self.assertRaises(errors.ConversionError):
            element.Text().format(12)

    def test_format_null_text_warns(self):
        with warnings.catch_warnings(record=True) as w:
            warnings.simplefilter('always')
            self.assertEqual(element.Text().format('null'), 'null')
        self.assertEqual(len(w), 1)
        self.assertIs(
            w[0].category, textarray.warnings.AmbiguousNullWarning)

    def test_parse(self):
        self.assertEqual(element.Text().parse('Doe'), 'Doe')

    def test_parse_null(self):
        self.assertIsNone(element.Text(nullable=True).parse('null'))

    def test_parse_null_not_nullable(self):
        with self.assertRaises(errors.ConversionError):
            element.Text().parse('null')

    def test_parse_too_wide(self):
        t = element.Text(width=3)
        self.assertEqual(t.parse('abc'), 'abc')
        with self.assertRaises(errors.ConversionError):
            t.parse('abcd')


class TestScalarType(unittest.TestCase):

    def test_str(self):
        self.assertEqual(element.scalar_type(str), element.Text())

    def test_fixed_width_str(self):
        self.assertEqual(
            element.scalar_type(numpy.dtype('U4'), nullable=True),
            element.Text(nullable=True, width=4))

    def test_primitive(self):
        self.assertEqual(
            element.scalar_type(int, nullable=True),
            element.Primitive(numpy.dtype(int), nullable=True))

    def test_not_scalar(self):
        for kind in (list, dict, object, Point, 'V8'):
            with self.assertRaises(TypeError):
                element.scalar_type(kind)


class TestElementTypeOf(unittest.TestCase):

    def test_numeric(self):
        t = element.element_type_of(numpy.zeros((2, 2), numpy.float32))
        self.assertEqual(t, element.Primitive(numpy.float32))

    def test_fixed_width_text(self):
        t = element.element_type_of(numpy.array(['ab', 'cde']))
        self.assertEqual(t, element.Text(width=3))

    def test_object_text(self):
        t = element.element_type_of(numpy.empty(2, dtype=object), str)
        self.assertEqual(t, element.Text(nullable=True))

    def test_object_primitive(self):
        t = element.element_type_of(numpy.empty(2, dtype=object), bool)
        self.assertEqual(t, element.Primitive(bool, nullable=True))

    def test_explicit_primitive_on_numeric(self):
        t = element.element_type_of(numpy.zeros(2, numpy.int32), numpy.int16)
        self.assertEqual(t, element.Primitive(numpy.int16))

    def test_record(self):
        t = element.element_type_of(numpy.empty(2, dtype=object), Point)
        self.assertIsInstance(t, element.Record)
        self.assertIs(t.record_type, records.get_record_type(Point))
        self.assertEqual(t.line_count, 3)

    def test_structured(self):
        dtype = numpy.dtype([('a', numpy.int32), ('b', 'U2')])
        t = element.element_type_of(numpy.zeros(2, dtype))
        self.assertIsInstance(t, element.Record)
        self.assertEqual(
            [f.name for f in t.record_type.fields], ['a', 'b'])

    def test_descriptor(self):
        t = element.Text(nullable=True)
        self.assertIs(
            element.element_type_of(numpy.empty(1, dtype=object), t), t)

    def test_object_without_element_type(self):
        with self.assertRaises(errors.ArgumentError):
            element.element_type_of(numpy.empty(2, dtype=object))

    def test_bytes(self):
        with self.assertRaises(errors.ArgumentError):
            element.element_type_of(numpy.array([b'ab']))

    def test_record_needs_object_array(self):
        with self.assertRaises(errors.ArgumentError):
            element.element_type_of(numpy.zeros(2), Point)

    def test_text_on_numeric(self):
        with self.assertRaises(errors.ArgumentError):
            element.element_type_of(numpy.zeros(2), str)

    def test_primitive_on_text(self):
        with self.assertRaises(errors.ArgumentError):
            element.element_type_of(numpy.array(['a']), int)

    def test_nested_structured(self):
        dtype = numpy.dtype([('a', [('b', numpy.int32)])])
        with self.assertRaises(errors.ArgumentError):
            element.element_type_of(numpy.zeros(2, dtype))


class TestEncode(unittest.TestCase):

    def setUp(self):
        self.lines = []
        self.record = element.Record(records.get_record_type(Point))

    def test_scalar(self):
        element.encode(3, element.Primitive(int), self.lines.append)
        self.assertEqual(self.lines, ['3'])

    def test_absent_scalar(self):
        element.encode(None, element.Text(nullable=True), self.lines.append)
        self.assertEqual(self.lines, ['null'])

    def test_record(self):
        element.encode(Point(1, 2.5, 'a'), self.record, self.lines.append)
        self.assertEqual(self.lines, ['1', '2.5', 'a'])

    def test_record_with_absent_field(self):
        element.encode(Point(1, 2.5), self.record, self.lines.append)
        self.assertEqual(self.lines, ['1', '2.5', 'null'])

    def test_absent_record_is_default(self):
        element.encode(None, self.record, self.lines.append)
        self.assertEqual(self.lines, ['0', '0.0', 'null'])

    def test_record_bad_field(self):
        with self.assertRaises(errors.ConversionError) as cm:
            element.encode(Point('a'), self.record, self.lines.append)
        self.assertIn("'x'", str(cm.exception))


class TestDecode(unittest.TestCase):

    def setUp(self):
        self.record = element.Record(records.get_record_type(Point))

    def test_scalar(self):
        cursor = element.LineCursor(['3', '4'])
        self.assertEqual(element.decode(cursor, element.Primitive(int)), 3)
        self.assertEqual(cursor.position, 1)
        self.assertEqual(cursor.remaining, 1)

    def test_null_scalar_advances(self):
        cursor = element.LineCursor(['null', 'a'])
        self.assertIsNone(
            element.decode(cursor, element.Text(nullable=True)))
        self.assertEqual(cursor.position, 1)

    def test_scalar_past_end_is_absent(self):
        cursor = element.LineCursor(['3'], position=1)
        self.assertIsNone(element.decode(cursor, element.Primitive(int)))
        self.assertEqual(cursor.position, 1)

    def test_record(self):
        cursor = element.LineCursor(['1', '2.5', 'null'])
        p = element.decode(cursor, self.record)
        self.assertIsInstance(p, Point)
        self.assertEqual((p.x, p.y, p.label), (1, 2.5, None))
        self.assertEqual(cursor.remaining, 0)

    def test_record_underrun(self):
        cursor = element.LineCursor(['1', '2.5'])
        with self.assertRaises(errors.UnderrunError):
            element.decode(cursor, self.record)

    def test_record_null_in_required_field(self):
        cursor = element.LineCursor(['null', '2.5', 'a'])
        with self.assertRaises(errors.ConversionError) as cm:
            element.decode(cursor, self.record)
        self.assertIn("'x'", str(cm.exception))


testing.run_module(__name__, __file__)
