"""Station data parsing and prefix completion of station names and pinyin."""

import re
from dataclasses import dataclass

_SEPARATORS = re.compile(r"([|@])")

# Field positions inside one station record.
_NAME = 1
_CODE = 2
_FULL_PINYIN = 3
_SIMPLE_PINYIN = 4

_CAPTCHA_HEADER = 45
_CAPTCHA_FOOTER = 42
_CAPTCHA_COLUMNS = 4
_CAPTCHA_ROWS = 2


@dataclass(frozen=True)
class Station:
    """One station: display name, telegraph code and its two pinyin spellings."""

    name: str
    code: str
    full_pinyin: str
    simple_pinyin: str

    @property
    def display(self):
        """Text shown in the completion list: "NAME fullpinyin"."""
        return f"{self.name} {self.full_pinyin}"


def _as_text(text):
    if isinstance(text, (bytes, bytearray)):
        return bytes(text).decode("utf-8", errors="replace")
    return text


def parse_station_data(text):
    """Parse station data of the form ``...@abbr|name|code|full|simple|...@...``.

    Everything before the first "@" is ignored. A record is kept only when its
    name, code and both pinyin fields are present; a record with an empty code
    field inherits the code of the record before it. The last field of the
    text is dropped unless a separator follows it.
    """
    text = _as_text(text)
    start = text.find("@")
    if start < 0:
        return []

    parts = _SEPARATORS.split(text[start + 1:])
    stations = []
    section = 0
    name = code = full = simple = ""

    def complete():
        return bool(name and code and full and simple)

    for value, separator in zip(parts[0::2], parts[1::2]):
        if value:
            if section == _NAME:
                name = value
            elif section == _CODE:
                code = value
            elif section == _FULL_PINYIN:
                full = value
            elif section == _SIMPLE_PINYIN:
                simple = value
        section += 1
        if separator == "@":
            if complete():
                stations.append(Station(name, code, full, simple))
            section = 0
            name = full = simple = ""

    if complete():
        stations.append(Station(name, code, full, simple))
    return stations


class _ByteIndex:
    """Entries bucketed by the first two bytes of their key."""

    def __init__(self):
        self.first_bytes = set()
        self.second_bytes = set()
        self.buckets = {}

    def add(self, key, display):
        first = key[0]
        second = key[1] if len(key) > 1 else 0
        self.first_bytes.add(first)
        self.second_bytes.add(second)
        self.buckets.setdefault((first, second), []).append((key, display))

    def lookup(self, word):
        """Return the non-empty buckets matching the first one or two bytes of ``word``."""
        first = word[0]
        if first not in self.first_bytes:
            return []
        if len(word) > 1 and word[1] in self.second_bytes:
            bucket = self.buckets.get((first, word[1]))
            return [list(bucket)] if bucket else []
        found = []
        for second in range(256):
            bucket = self.buckets.get((first, second))
            if bucket:
                found.append(list(bucket))
        return found


class StationCompleter:
    """Incremental completion over station names, full pinyin and simple pinyin.

    Keys are compared as UTF-8 bytes. The first two typed bytes select
    buckets from the indexes; further typing filters the most recent bucket;
    deleting characters steps back through earlier results.
    """

    def __init__(self, stations=()):
        self._names = _ByteIndex()
        self._full = _ByteIndex()
        self._simple = _ByteIndex()
        self.station_codes = {}
        self.completions = []
        self._stack = []
        self._word = b""
        self._appending = False
        for station in stations:
            self.add_station(station)

    def add_station(self, station):
        """Index a station and record its code."""
        if not (station.name and station.full_pinyin and station.simple_pinyin):
            raise ValueError("station needs a name and both pinyin spellings")
        display = station.display
        self._names.add(station.name.encode("utf-8"), display)
        self._full.add(station.full_pinyin.encode("utf-8"), display)
        self._simple.add(station.simple_pinyin.encode("utf-8"), display)
        self.station_codes[station.name] = station.code

    def load(self, text):
        """Parse station data and index every station in it; return the stations."""
        stations = parse_station_data(text)
        for station in stations:
            self.add_station(station)
        return stations

    def _step_back(self, count):
        if self._appending:
            count -= 1
        self._appending = False
        current = []
        while count < 0:
            count += 1
            if self._stack:
                current = self._stack.pop()
        return [display for _key, display in current]

    def update(self, word):
        """Take the current text of the input and return the completion list.

        When nothing matches, the previous list is kept.
        """
        if isinstance(word, str):
            word = word.encode("utf-8")
        word = bytes(word)
        count = len(word) - len(self._word)
        result = []

        if len(word) > 2:
            if count > 0:
                self._appending = True
                if self._stack:
                    current = [entry for entry in self._stack[-1] if entry[0].startswith(word)]
                    result = [display for _key, display in current]
                    self._stack.append(current)
            else:
                result = self._step_back(count)
        elif word:
            if count > 0:
                self._appending = True
                for index in (self._simple, self._full, self._names):
                    for bucket in index.lookup(word):
                        self._stack.append(bucket)
                        result.extend(display for _key, display in bucket)
            else:
                result = self._step_back(count)

        if result:
            self.completions = result
        self._word = word
        return list(self.completions)


def _trunc_div(a, b):
    quotient = abs(a) // abs(b)
    return quotient if (a >= 0) == (b > 0) else -quotient


def captcha_area(x, y, width, height):
    """Return which of the 8 captcha tiles (1-8, row by row) holds the point, or 0."""
    xstep = _trunc_div(width, _CAPTCHA_COLUMNS)
    ystep = _trunc_div(height - _CAPTCHA_HEADER, _CAPTCHA_ROWS)
    for row in range(_CAPTCHA_ROWS):
        for column in range(_CAPTCHA_COLUMNS):
            if (
                xstep * column <= x < xstep * (column + 1)
                and ystep * row + _CAPTCHA_HEADER <= y < ystep * (row + 1) + _CAPTCHA_FOOTER
            ):
                return row * _CAPTCHA_COLUMNS + column + 1
    return 0