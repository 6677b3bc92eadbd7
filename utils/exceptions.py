"""
Custom exceptions for the Thumbnail Layout Engine

Only programmer-error inputs raise. A layout that cannot be made perfect is
reported through warnings and validation results instead.
"""


class LayoutInputError(ValueError):
    """
    Raised for malformed geometry or options that no layout can work with.

    Examples: a zero-size sampling grid, an unknown anchor name.
    """

    def __init__(self, field: str, value, message: str = None):
        self.field = field
        self.value = value
        self.message = message or f"Invalid {field}: {value!r}"
        super().__init__(self.message)


class DiscouragedPositionError(Exception):
    """
    Raised when a discouraged logo position is selected without acknowledging it.

    Callers pass ``allow_discouraged=True`` once they have surfaced the reason.
    """

    def __init__(self, position_key: str, reason: str):
        self.position_key = position_key
        self.reason = reason
        self.message = f"Position '{position_key}' is discouraged: {reason}"
        super().__init__(self.message)
