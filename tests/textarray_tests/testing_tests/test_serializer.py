import unittest

import numpy

from textarray import serializers
from textarray import testing


class TestSaveAndLoad(unittest.TestCase):

    def setUp(self):
        self.src = numpy.array([[1, 2], [3, 4]], dtype=numpy.int32)
        self.dst = numpy.zeros((2, 2), dtype=numpy.int32)

    def test_save_and_load_text(self):
        lines = testing.save_and_load_text(self.src, self.dst)
        self.assertEqual(lines, ['1', '2', '3', '4'])
        numpy.testing.assert_array_equal(self.dst, self.src)

    def test_save_and_load(self):
        lines = testing.save_and_load(
            self.src, self.dst, 'values.txt',
            serializers.save_text, serializers.load_text)
        self.assertEqual(lines, ['1', '2', '3', '4'])
        numpy.testing.assert_array_equal(self.dst, self.src)


testing.run_module(__name__, __file__)
