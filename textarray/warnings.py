class TextArrayWarning(UserWarning):
    """Base class of the warnings issued by textarray."""


class DefaultRecordWarning(TextArrayWarning):
    """Absent record elements were saved as default-constructed records.

    The saved file then holds the default field values, and loading it back
    yields default records where the source array had ``None``.
    """


class AmbiguousNullWarning(TextArrayWarning):
    """A text value equal to the null token was saved.

    It is written as is, and reads back as ``None``.
    """
