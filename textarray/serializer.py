from textarray import walker


class AbstractSerializer(object):

    """Abstract base class of line serializers and deserializers.

    One serializer object handles the elements of one array. The array is
    traversed by :func:`textarray.walker.walk`, and the serializer is called
    once per element with the element index.

    """

    @property
    def reader(self):
        """True if this is an input serializer (i.e. deserializer)."""
        return not self.writer

    @property
    def writer(self):
        """True if this is an output serializer."""
        raise NotImplementedError

    def __call__(self, index, value):
        """Saves or loads one element.

        Args:
            index (tuple of ints): Coordinate of the element.
            value: Current value of the element.

        Returns:
            The saved value, or the loaded value that should be stored at
            ``index``.

        """
        raise NotImplementedError


class Serializer(AbstractSerializer):

    """Base class of all serializers."""

    @property
    def writer(self):
        return True

    def save(self, array):
        """Saves all elements of an array in row-major order.

        Args:
            array (numpy.ndarray): Array to save. Its rank must be at least 1.

        """
        def visit(index):
            self(index, array[index])

        walker.walk(array.shape, visit)


class Deserializer(AbstractSerializer):

    """Base class of all deserializers."""

    @property
    def writer(self):
        return False

    def load(self, array):
        """Loads all elements of an array in row-major order.

        The array is updated in place.

        Args:
            array (numpy.ndarray): Array to load to. Its rank must be at least
                1.

        """
        def visit(index):
            array[index] = self(index, array[index])

        walker.walk(array.shape, visit)
