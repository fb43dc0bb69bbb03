"""
JSON to tiny encoder.
"""
from encoder.errors import (
    EmptyInputError,
    InvalidElementError,
    InvalidRootError,
    NoBlocksFoundError,
    TinyEncodingError,
)
from encoder.tiny_encoder import (
    ArrayShape,
    build_block,
    classify_array,
    encode,
    format_cell,
)

__all__ = [
    "ArrayShape",
    "EmptyInputError",
    "InvalidElementError",
    "InvalidRootError",
    "NoBlocksFoundError",
    "TinyEncodingError",
    "build_block",
    "classify_array",
    "encode",
    "format_cell",
]
