#!/usr/bin/env python3

"""
APRS position report decoding.

A position is either uncompressed::

    0123456789012345678
    DDMM.MMsTDDDMM.MMsC

(D = degrees, M = minutes, s = hemisphere, T = symbol table, C = symbol
code) or compressed (see `compressed`).  The two overlap in length, so an
uncompressed decode is attempted first and must validate before the
compressed shapes are considered.
"""

import re

from .compressed import decode_compressed
from .datatype import APRSDataType
from .datetime import decode as decode_datetime, DHMBaseTimestamp
from .extension import extract_dao, extract_altitude, extract_phg, \
        extract_range, extract_weather, extract_course_speed
from .report import APRSPosition
from .weather import decode_weather


class APRSUncompressedCoordinate(object):
    """
    One axis of an uncompressed position: degrees, minutes and hundredths
    of minutes followed by the hemisphere.  Trailing digits may be replaced
    by spaces to reduce precision (position ambiguity).
    """
    @classmethod
    def decode(cls, posstr):
        """
        Decode to (decimal degrees, ambiguity).  Raises ValueError if the
        string is not a valid co-ordinate.
        """
        match = cls.COORDINATE_RE.match(posstr)
        if match is None:
            raise ValueError("Not a valid co-ordinate: %r" % posstr)

        # Spaces may only replace the least significant digits
        digits = ''.join(reversed(posstr[-6:-4] + posstr[-3:-1]))
        ambiguity = len(digits) - len(digits.lstrip(' '))
        if ' ' in digits[ambiguity:]:
            raise ValueError("Misplaced ambiguity in %r" % posstr)

        degrees = int(posstr[0:-6])
        minutes = float(posstr[-6:-1].replace(" ", "0"))
        if (degrees > cls.MAX_DEGREES) or (minutes >= 60):
            raise ValueError("Co-ordinate out of range: %r" % posstr)

        value = degrees + (minutes / 60.0)
        if posstr[-1] == cls.NEG_SUFFIX:
            value = -value
        return (value, ambiguity)


class APRSUncompressedLatitude(APRSUncompressedCoordinate):
    COORDINATE_RE = re.compile(r'^\d{2}[\d ]{2}\.[\d ]{2}[NS]$')
    NEG_SUFFIX = "S"
    MAX_DEGREES = 90
    LENGTH = 8


class APRSUncompressedLongitude(APRSUncompressedCoordinate):
    COORDINATE_RE = re.compile(r'^\d{3}[\d ]{2}\.[\d ]{2}[EW]$')
    NEG_SUFFIX = "W"
    MAX_DEGREES = 180
    LENGTH = 9


# Latitude + table + longitude + symbol
UNCOMPRESSED_LENGTH = APRSUncompressedLatitude.LENGTH \
        + APRSUncompressedLongitude.LENGTH + 2
# Latitude + table + longitude, symbol omitted
UNCOMPRESSED_SHORT_LENGTH = UNCOMPRESSED_LENGTH - 1
DEFAULT_SYMBOL_CODE = '_'

WEATHER_SYMBOL = '/_'

# Position ambiguity to resolution in metres
POSITION_RESOLUTION = {
        0: 18.52,
        1: 185.2,
        2: 1852.0,
        3: 18520.0,
        4: 111120.0,
}


def _decode_axes(data):
    lat_end = APRSUncompressedLatitude.LENGTH
    lon_end = lat_end + 1 + APRSUncompressedLongitude.LENGTH
    (latitude, lat_ambiguity) = \
            APRSUncompressedLatitude.decode(data[0:lat_end])
    (longitude, lon_ambiguity) = \
            APRSUncompressedLongitude.decode(data[lat_end+1:lon_end])

    if lat_ambiguity == lon_ambiguity:
        ambiguity = lat_ambiguity
    else:
        ambiguity = 0

    return (latitude, longitude, data[lat_end], ambiguity)


def decode_uncompressed(data, data_type, log, aprs_messaging=False):
    """
    Decode an uncompressed position, returning None if `data` is not one.
    """
    try:
        if len(data) >= UNCOMPRESSED_LENGTH:
            (latitude, longitude, table, ambiguity) = _decode_axes(data)
            code = data[UNCOMPRESSED_LENGTH - 1]
            comment = data[UNCOMPRESSED_LENGTH:]
            short = False
        elif len(data) == UNCOMPRESSED_SHORT_LENGTH:
            (latitude, longitude, table, ambiguity) = _decode_axes(data)
            code = DEFAULT_SYMBOL_CODE
            comment = ''
            short = True
        else:
            return None
    except ValueError as e:
        log.debug('Not an uncompressed position: %s', e)
        return None

    raw_comment = comment
    (dao, comment) = extract_dao(comment)
    (altitude, comment) = extract_altitude(comment)
    (phg, comment) = extract_phg(comment)
    (radiorange, comment) = extract_range(comment)
    (weather, comment) = extract_weather(comment)
    (course_speed, comment) = extract_course_speed(comment)
    (course, speed) = course_speed or (None, None)

    if (weather is None) and (not short) \
            and ((table + code) == WEATHER_SYMBOL):
        # Weather station symbol, with or without observations; a leading
        # ddd/sss is then wind rather than course and speed.  The short
        # form only has the symbol by default.
        (weather, _) = decode_weather(raw_comment)
        (course, speed) = (None, None)

    if weather is not None:
        log.debug('Position report carries weather: %r', weather)
        data_type = APRSDataType.WEATHER

    return APRSPosition(
            data_type=data_type,
            latitude=latitude,
            longitude=longitude,
            symbol_table_id=table,
            symbol_code=code,
            comment=comment.strip(),
            compressed=False,
            position_ambiguity=ambiguity,
            course=course,
            speed=speed,
            altitude=altitude,
            dao=dao,
            phg=phg,
            radiorange=radiorange,
            aprs_messaging=aprs_messaging,
            weather=weather,
            posresolution=POSITION_RESOLUTION[ambiguity],
    )


def decode_position(data, data_type, log, aprs_messaging=False):
    """
    Decode a position in any of the uncompressed or compressed layouts.
    Never raises for bad data: a report that cannot be decoded comes back
    as MALFORMED_POSITION (or POSITION_ERROR if it looked compressed).
    """
    position = decode_uncompressed(data, data_type, log, aprs_messaging)
    if position is None:
        position = decode_compressed(data, data_type, log, aprs_messaging)
    if position is None:
        log.debug('Malformed position: %r', data)
        position = APRSPosition.failed(
                APRSDataType.MALFORMED_POSITION,
                comment=data.strip(),
                aprs_messaging=aprs_messaging
        )
    return position


# Data types that advertise messaging capability
MESSAGING_TYPES = (
        APRSDataType.POSITION_WITH_MESSAGE,
        APRSDataType.TIMESTAMPED_POSITION_WITH_MESSAGE,
)


def decode_position_report(data_type, data, log):
    """
    Decode the information field (less the data type indicator) of a
    ``!`` or ``=`` position report.
    """
    if data_type == APRSDataType.POSITION:
        # Some stations send the indicator twice
        data = data.lstrip('!')

    return decode_position(
            data, data_type, log,
            aprs_messaging=(data_type in MESSAGING_TYPES)
    )


def decode_timestamped_report(data_type, data, log):
    """
    Decode the information field (less the data type indicator) of a
    ``/`` or ``@`` position report, which starts with a timestamp.
    """
    aprs_messaging = (data_type in MESSAGING_TYPES)

    try:
        timestamp = decode_datetime(data[0:DHMBaseTimestamp.TS_LENGTH])
    except ValueError as e:
        log.debug('Invalid position timestamp: %s', e)
        return APRSPosition.failed(
                APRSDataType.TIMESTAMPED_POSITION_ERROR,
                comment=data.strip(),
                error_message='Invalid timestamp',
                aprs_messaging=aprs_messaging
        )

    position = decode_position(
            data[DHMBaseTimestamp.TS_LENGTH:], data_type, log,
            aprs_messaging=aprs_messaging
    )
    position.timestamp = timestamp

    if position.data_type == APRSDataType.MALFORMED_POSITION:
        position.data_type = APRSDataType.TIMESTAMPED_POSITION_ERROR
        position.error_message = 'Invalid timestamped position format'
    return position
