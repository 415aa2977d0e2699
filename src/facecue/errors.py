"""Exceptions raised by facecue pipeline stages."""


class FrameShapeError(ValueError):
    """Raised when a pixel buffer does not match its declared dimensions.

    This is a precondition violation: the frame source must hand over a
    buffer of exactly ``width * height * 4`` bytes. The scheduler catches it
    and drops the frame.

    Attributes:
        expected: Number of elements the dimensions imply.
        actual: Number of elements actually received.
    """

    def __init__(self, expected: int, actual: int, message: str = ""):
        self.expected = expected
        self.actual = actual
        super().__init__(
            message or f"RGBA buffer has {actual} bytes, expected {expected}"
        )


__all__ = ["FrameShapeError"]
