"""
Encoder for the tiny format.

tiny is a compact, line-oriented text encoding for arrays of uniform objects,
meant to keep the token count of LLM prompts low:

    users(id name bio
    |1 Ann Loves cats and dogs
    |2 Bo

- One block per array of objects, opened by `name(` and the field names
- One `|` line per record, values separated by single spaces
- Fields come from the first record only; missing or null values are empty
- Blocks are never closed with `)`; the next header or end of input ends them

There is no decoder. Values containing spaces or `|` are not escaped.
"""
import json
import logging
import math
import re
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, List

from encoder.errors import (
    EmptyInputError,
    InvalidElementError,
    InvalidRootError,
    NoBlocksFoundError,
)

logger = logging.getLogger(__name__)

ROOT_BLOCK_NAME = "records"

# JavaScript's \s set. Python's own \s also matches \x1c-\x1f and \x85 and
# misses the byte order mark (U+FEFF).
_WHITESPACE_RUN = re.compile(
    "[\t\n\v\f\r \xa0"
    "\N{OGHAM SPACE MARK}"
    "\N{EN QUAD}-\N{HAIR SPACE}"
    "\N{LINE SEPARATOR}\N{PARAGRAPH SEPARATOR}"
    "\N{NARROW NO-BREAK SPACE}\N{MEDIUM MATHEMATICAL SPACE}"
    "\N{IDEOGRAPHIC SPACE}\N{ZERO WIDTH NO-BREAK SPACE}]+"
)


class ArrayShape(Enum):
    """Shape of a candidate value, decided once before building a block."""

    UNIFORM_OBJECT_ARRAY = "uniform_object_array"
    EMPTY_ARRAY = "empty_array"
    NON_OBJECT_ELEMENTS = "non_object_elements"
    NOT_AN_ARRAY = "not_an_array"


def _type_name(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__


def classify_array(value: Any) -> ArrayShape:
    """Classify a value as a uniform object array or one of the other shapes."""
    if not isinstance(value, list):
        return ArrayShape.NOT_AN_ARRAY
    if not value:
        return ArrayShape.EMPTY_ARRAY
    if not isinstance(value[0], dict):
        return ArrayShape.NON_OBJECT_ELEMENTS
    return ArrayShape.UNIFORM_OBJECT_ARRAY


def _format_number(value: float) -> str:
    """Render a float the way JavaScript's String(number) does."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        return "0"

    # repr gives the shortest round-tripping digits
    sign, digit_tuple, exponent = Decimal(repr(value)).as_tuple()
    digits = "".join(str(d) for d in digit_tuple)
    # value == 0.digits * 10**point
    point = len(digits) + exponent
    digits = digits.rstrip("0")
    k = len(digits)
    prefix = "-" if sign else ""

    if k <= point <= 21:
        text = digits + "0" * (point - k)
    elif 0 < point <= 21:
        text = digits[:point] + "." + digits[point:]
    elif -6 < point <= 0:
        text = "0." + "0" * -point + digits
    else:
        e = point - 1
        mantissa = digits if k == 1 else digits[0] + "." + digits[1:]
        text = f"{mantissa}e{'+' if e >= 0 else '-'}{abs(e)}"
    return prefix + text


def collapse_whitespace(text: str) -> str:
    """Collapse every run of whitespace (newlines and tabs too) to one space."""
    return _WHITESPACE_RUN.sub(" ", text)


def format_cell(value: Any) -> str:
    """
    Render one record value as tiny cell text.

    Args:
        value: Value of the field, or None when the field is absent

    Returns:
        Cell text without raw newlines; empty string for null/absent
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        text = "true" if value else "false"
    elif isinstance(value, int):
        text = str(value)
    elif isinstance(value, float):
        text = _format_number(value)
    elif isinstance(value, str):
        text = value
    elif isinstance(value, (dict, list)):
        # Nested structures are written as compact JSON
        text = json.dumps(value, ensure_ascii=False, separators=(",", ":"))
    else:
        text = str(value)
    return collapse_whitespace(text)


def _check_records(array: Any, name: str):
    shape = classify_array(array)
    if shape is ArrayShape.EMPTY_ARRAY:
        raise EmptyInputError(name)
    if shape is ArrayShape.NON_OBJECT_ELEMENTS:
        raise InvalidElementError(name, _type_name(array[0]))
    if shape is ArrayShape.NOT_AN_ARRAY:
        raise InvalidElementError(name, _type_name(array))


def build_block(array: List[Dict[str, Any]], name: str) -> str:
    """
    Encode an array of objects as a single tiny block.

    Args:
        array: Records; the first one defines the field set
        name: Block name written before the opening paren

    Returns:
        Header line and one `|` line per record, without a trailing newline
    """
    _check_records(array, name)

    keys = list(array[0].keys())

    # No closing ")" is ever written. Names are not escaped, but whitespace in
    # them is collapsed so the header stays on one line.
    header = " ".join(collapse_whitespace(str(key)) for key in keys)
    lines = [collapse_whitespace(name) + "(" + header]
    for record in array:
        if not isinstance(record, dict):
            record = {}
        cells = [format_cell(record.get(key)) for key in keys]
        lines.append("|" + " ".join(cells))

    return "\n".join(lines)


def encode(value: Any, root_name: str = ROOT_BLOCK_NAME) -> str:
    """
    Encode a parsed JSON value as a tiny document.

    A root array becomes one block named `root_name`. A root object
    contributes one block per key holding a non-empty array of objects, in
    key order; other keys are skipped.

    Raises:
        InvalidRootError: Root is a scalar or null
        EmptyInputError: Root array is empty
        InvalidElementError: Root array's first element is not an object
        NoBlocksFoundError: Root object has no qualifying key
    """
    blocks: List[str] = []

    if isinstance(value, list):
        blocks.append(build_block(value, root_name))
    elif isinstance(value, dict):
        for key, item in value.items():
            if classify_array(item) is ArrayShape.UNIFORM_OBJECT_ARRAY:
                blocks.append(build_block(item, str(key)))
            else:
                logger.debug(f"Skipping key {key!r}: not an array of objects")
        if not blocks:
            raise NoBlocksFoundError(value.keys())
    else:
        raise InvalidRootError(_type_name(value))

    logger.debug(f"Encoded {len(blocks)} tiny block(s)")
    return "\n".join(blocks) + "\n"
