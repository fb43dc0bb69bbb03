"""
Exceptions raised by the tiny encoder.
"""


class TinyEncodingError(ValueError):
    """Base class for every failure of the tiny encoder."""


class InvalidRootError(TinyEncodingError):
    """Root JSON value is neither an array nor an object."""

    def __init__(self, value_type: str):
        self.value_type = value_type
        super().__init__(
            f"Root JSON must be either an array of objects or an object "
            f"containing arrays of objects (got {value_type})."
        )


class EmptyInputError(TinyEncodingError):
    """A targeted array has zero elements."""

    def __init__(self, block_name: str):
        self.block_name = block_name
        super().__init__(
            f'Cannot build tiny block for key "{block_name}": array is empty.'
        )


class InvalidElementError(TinyEncodingError):
    """A targeted array's first element is not a plain object."""

    def __init__(self, block_name: str, element_type: str):
        self.block_name = block_name
        self.element_type = element_type
        super().__init__(
            f'Array for key "{block_name}" must contain objects '
            f"(first element is {element_type})."
        )


class NoBlocksFoundError(TinyEncodingError):
    """Root object has no key holding an array of objects."""

    def __init__(self, keys=None):
        self.keys = list(keys or [])
        super().__init__("No suitable arrays of objects found to convert.")
