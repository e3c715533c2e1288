"""KU-KEY core: timetables, point economy and anonymous community identities."""

__version__ = "0.1.0"
