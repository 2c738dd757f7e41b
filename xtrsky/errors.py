"""Exceptions and warning categories raised while processing XTR reports."""


class FormatError(ValueError):
    """A line violates the fixed-column layout or holds a non-numeric core field."""


class AlignmentError(ValueError):
    """ELE and AZI blocks of a system disagree in epoch count or timestamps."""


class MissingCombinationWarning(UserWarning):
    """The requested multipath combination is absent for a system."""
