"""Seat type tables: display names, table indices and order submission codes."""

import re

SEAT_TYPE_COUNT = 14

# Names used when turning user-selected seat names into table indices.
_SELECTION_NAMES = (
    "Unknown",
    "高级软卧",
    "其他",
    "软卧",
    "软座",
    "Unknown",
    "无座",
    "动卧",
    "硬卧",
    "硬座",
    "二等座",
    "一等座",
    "商务特等座",
    "Unknown",
)

# Names used when describing an index and when mapping a name to a code.
_DESCRIPTION_NAMES = (
    "Unknown",
    "高级软卧",
    "其他",
    "软卧",
    "软座",
    "Unknown",
    "无座",
    "Unknown",
    "硬卧",
    "硬座",
    "二等座",
    "一等座",
    "商务特等座",
    "动卧",
)

_SUBMIT_CODES = "0A0400W031OM9F"

_PLENTY = 100
_INT_PATTERN = re.compile(r"\s*[+-]?\d+\s*")
_INT_MIN = -(2**31)
_INT_MAX = 2**31 - 1


def seat_type_indices(names):
    """Return the table indices matching each name, in order of the names.

    A name that matches several slots contributes every matching index.
    """
    return [
        index
        for name in names
        for index, candidate in enumerate(_SELECTION_NAMES)
        if candidate == name
    ]


def seat_type_description(index):
    """Return the display name of a seat type index, or "Unknown"."""
    if 0 <= index < len(_DESCRIPTION_NAMES):
        return _DESCRIPTION_NAMES[index]
    return "Unknown"


def submit_code(index):
    """Return the single-character code used to submit the given seat type."""
    if not 0 <= index < len(_SUBMIT_CODES):
        raise IndexError(f"seat type index out of range: {index}")
    return _SUBMIT_CODES[index]


def description_to_submit_code(description):
    """Return the submit code for a seat type display name, or "0"."""
    for name, code in zip(_DESCRIPTION_NAMES, _SUBMIT_CODES):
        if name == description:
            return code
    return "0"


def _to_int(text):
    if not _INT_PATTERN.fullmatch(text):
        return 0
    value = int(text)
    if value < _INT_MIN or value > _INT_MAX:
        return 0
    return value


def parse_ticket_count(text):
    """Turn a remaining-ticket cell into a count.

    "有" means plenty (100), "无" means none (0); an empty cell or "*" means the
    seat type is not offered (-1); anything else is read as a number, 0 if it
    is not one.
    """
    if text == "有":
        return _PLENTY
    if text == "" or text == "*":
        return -1
    if text == "无":
        return 0
    return _to_int(text)