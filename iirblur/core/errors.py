"""Exceptions raised by the blur engine."""


class BlurError(ValueError):
    """Base class for rejected blur requests."""


class InvalidImageError(BlurError):
    """Image has zero area or an unsupported shape/dtype."""


class InvalidSigmaError(BlurError):
    """Sigma is negative or not finite."""


class InvalidStepsError(BlurError):
    """Steps is not a positive integer."""


class BlurCancelled(RuntimeError):
    """Raised when a cancellation flag is set between channels."""
