"""Railway ticket client logic: seat types, train and seat choice, order strings, station completion, CDN rotation, charts data and login checks."""

__version__ = "0.1.0"