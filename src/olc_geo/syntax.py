"""
Textual grammar checks for Open Location Codes.

A valid code is a string of alphabet characters with a single separator at
an even digit boundary, optionally padded with '0' up to the separator.
Valid codes are further split into:

- full codes, which locate a cell anywhere on Earth on their own
- short codes, which have had leading digits removed and need a reference
  location to be recovered (see shorten.py)

None of these functions raise; malformed input simply fails the check.
"""

from .codec import (
    alphabet_index,
    SEPARATOR,
    PADDING_CHARACTER,
    SEPARATOR_POSITION,
    ENCODING_BASE,
)
from .quantize import LATITUDE_MAX, LONGITUDE_MAX


def is_valid(code: str) -> bool:
    """
    Check whether a string is a valid Open Location Code.

    Rules:
    - surrounding spaces are ignored; at least two characters must remain
    - exactly one separator, at 1-based position 1, 3, 5, 7 or 9
    - every other character is in the alphabet (any case) or is padding
    - padding is never first, forms a single run that ends at the
      separator, starts on a pair boundary, and must be followed only by
      the separator
    - a single character after the separator is not allowed

    Args:
        code: The string to check

    Returns:
        True if the string is a valid code
    """
    code = code.strip(" ")
    if len(code) < 2:
        return False

    separator_index = -1
    padding_index = -1

    for i, char in enumerate(code):
        if char == SEPARATOR:
            if separator_index >= 0:
                return False  # more than one separator
            separator_index = i
        elif char == PADDING_CHARACTER:
            if padding_index < 0:
                padding_index = i
        elif alphabet_index(char) < 0:
            return False
        elif padding_index >= 0 and separator_index < 0:
            return False  # digit inside or after the padding run

    if separator_index < 0 or separator_index > SEPARATOR_POSITION or separator_index % 2 == 1:
        return False

    if padding_index >= 0:
        if padding_index == 0 or padding_index > separator_index:
            return False
        if padding_index % 2 == 1:
            return False
        if separator_index < len(code) - 1:
            return False

    # Exactly one character after the separator
    if len(code) - separator_index - 1 == 1:
        return False

    return True


def is_short(code: str) -> bool:
    """
    Check whether a string is a valid short code.

    A short code is a valid code whose separator comes before the eighth
    digit, i.e. it was produced by removing leading digits from a full code.
    """
    code = code.strip(" ")
    if not is_valid(code):
        return False
    return code.find(SEPARATOR) < SEPARATOR_POSITION


def is_full(code: str) -> bool:
    """
    Check whether a string is a valid full code.

    Besides being valid and not short, the first latitude digit must not
    place the cell above 90 degrees, and the first longitude digit must not
    place it beyond 180 degrees.
    """
    code = code.strip(" ")
    if not is_valid(code) or is_short(code):
        return False

    if code.find(SEPARATOR) < 1:
        return False

    first_lat = alphabet_index(code[0]) * ENCODING_BASE
    if first_lat >= LATITUDE_MAX * 2:
        return False

    first_lon = alphabet_index(code[1]) * ENCODING_BASE
    if first_lon >= LONGITUDE_MAX * 2:
        return False

    return True


def code_length(code: str) -> int:
    """
    Count the significant digits of a code.

    Args:
        code: The code to measure

    Returns:
        Digits before any padding (or before the separator) plus the digits
        after the separator, or 0 if the code is invalid
    """
    if not is_valid(code):
        return 0

    code = code.strip(" ")
    separator_index = code.find(SEPARATOR)
    padding_index = code.find(PADDING_CHARACTER, 0, separator_index)

    if padding_index >= 0:
        length = padding_index
    else:
        length = separator_index

    return length + len(code) - separator_index - 1
