"""Exception hierarchy for the optimizer pipeline."""

from typing_extensions import override


class OptimizerError(Exception):
    """Base class for every failure that aborts an optimization run."""

    def __init__(self, message: str = "Image optimization failed."):
        self.message: str = message
        super().__init__(self.message)

    @override
    def __str__(self):
        return self.message


class InvalidInputError(OptimizerError):
    """No input was supplied, or the input file could not be read."""


class DecodeError(OptimizerError):
    """Input bytes are not a decodable image."""


class InvalidImageError(OptimizerError):
    """Decoded image has a zero width or height."""


class UnresolvedFormatError(OptimizerError):
    """No encodable output format could be determined."""


class EncodeError(OptimizerError):
    """Resizing or encoding the image failed."""


class WriteError(OptimizerError):
    """The output sink rejected a write."""
