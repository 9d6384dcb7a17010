#!/usr/bin/env python3

"""
Data extensions carried in the comment of a position report.

Each extractor takes the comment and returns the decoded value (None if
absent) together with the comment with that extension removed.  Running
an extractor over its own output finds nothing further.
"""

import re

from .weather import is_weather_comment, decode_weather


class APRSDAOExtension(object):
    """
    Datum and extra position precision (``!DAO!``), or a bare datum marker
    (``&!D``).
    """
    def __init__(self, datum, lat_dao=None, lon_dao=None):
        self.datum = datum
        self.lat_dao = lat_dao
        self.lon_dao = lon_dao

    def fields(self):
        return dict(
                datum=self.datum, lat_dao=self.lat_dao, lon_dao=self.lon_dao
        )

    def __eq__(self, other):
        if not isinstance(other, APRSDAOExtension):
            return NotImplemented
        return self.fields() == other.fields()

    def __repr__(self): # pragma: no cover
        return '%s(datum=%r, lat_dao=%r, lon_dao=%r)' % (
                self.__class__.__name__,
                self.datum, self.lat_dao, self.lon_dao
        )


DAO_RE = re.compile(r'!([A-Za-z])([A-Za-z])([A-Za-z])!')
DAO_DATUM_RE = re.compile(r'&!([A-Za-z])')
DAO_DEFAULT_DATUM = 'WGS84'

ALTITUDE_RE = re.compile(r'/A=(-\d{5}|\d{6})')
PHG_RE = re.compile(r'PHG(\d{4})')
RANGE_RE = re.compile(r'RNG(\d{4})')
COURSE_SPEED_RE = re.compile(r'^[/\[]?(\d{3})/(\d{3})')

COURSE_MAX = 360
SPEED_LIMIT = 300


def _strip(comment, match):
    return (comment[:match.start()] + comment[match.end():]).strip()


def extract_dao(comment):
    """
    Extract the DAO extension.  The three letter form takes precedence
    over the datum marker; its first two letters are read as the latitude
    and longitude digits and the third is ignored.
    """
    match = DAO_RE.search(comment)
    if match is not None:
        return (
                APRSDAOExtension(
                    DAO_DEFAULT_DATUM, match.group(1), match.group(2)
                ),
                _strip(comment, match)
        )

    match = DAO_DATUM_RE.search(comment)
    if match is not None:
        return (APRSDAOExtension(match.group(1)), _strip(comment, match))

    return (None, comment)


def extract_altitude(comment):
    """
    Extract ``/A=nnnnnn``, altitude in feet.
    """
    match = ALTITUDE_RE.search(comment)
    if match is None:
        return (None, comment)
    return (float(match.group(1)), _strip(comment, match))


def extract_phg(comment):
    """
    Find the PHG code.  The comment is returned as-is.
    """
    match = PHG_RE.search(comment)
    if match is None:
        return (None, comment)
    return (match.group(1), comment)


def extract_range(comment):
    """
    Extract the ``RNGnnnn`` pre-calculated radio range (miles).
    """
    match = RANGE_RE.search(comment)
    if match is None:
        return (None, comment)
    return (match.group(1), _strip(comment, match))


def extract_weather(comment):
    """
    Extract weather observations, if the comment looks like a weather
    report.
    """
    if not is_weather_comment(comment):
        return (None, comment)
    (weather, remainder) = decode_weather(comment)
    return (weather, remainder.strip())


def extract_course_speed(comment):
    """
    Extract a leading ``ccc/sss`` course (degrees) and speed (knots).
    Returns a ``(course, speed)`` tuple or None.  Only the first field is
    taken: a second ``ccc/sss`` that follows it becomes the leading field
    of the returned comment.
    """
    if comment.startswith('PHG'):
        return (None, comment)

    match = COURSE_SPEED_RE.match(comment)
    if match is None:
        return (None, comment)

    course = int(match.group(1))
    speed = float(match.group(2))
    if (course > COURSE_MAX) or (speed >= SPEED_LIMIT):
        return (None, comment)

    return ((course, speed), _strip(comment, match))
