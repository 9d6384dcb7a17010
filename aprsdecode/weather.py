#!/usr/bin/env python3

"""
APRS weather reports, either stand-alone (``_`` data type) or carried in
the comment of a position report using the weather station symbol.

Each weather value is a fixed-width token: a one letter tag followed by
digits.  A station without a given sensor fills the digits with ``.`` or
spaces, which decodes to None (not zero).
"""

import re

from .datatype import APRSDataType
from .datetime import decode as decode_datetime, MDHMTimestamp
from .payload import APRSPayload


class APRSWeatherReport(object):
    """
    A set of weather observations.  Every field is optional.
    """
    FIELDS = (
            'wind_direction', 'wind_speed', 'wind_gust', 'temperature',
            'rain_1h', 'rain_24h', 'rain_since_midnight', 'humidity',
            'pressure', 'luminosity', 'snow', 'timestamp',
    )

    # Units of measure, per APRS 1.0.1 chapter 12
    WIND_SPEED_UNITS = "mile / hour"
    TEMPERATURE_UNITS = "degF"
    RAIN_UNITS = "inch"
    PRESSURE_UNITS = "millibar"

    def __init__(self, **kwargs):
        for name in self.FIELDS:
            setattr(self, name, kwargs.pop(name, None))
        if kwargs:
            raise TypeError("Unknown weather fields: %s" % ', '.join(kwargs))

    def fields(self, include_timestamp=True):
        """
        Return the observations that are present.
        """
        return dict(
                (name, getattr(self, name))
                for name in self.FIELDS
                if (getattr(self, name) is not None)
                and (include_timestamp or name != 'timestamp')
        )

    def __eq__(self, other):
        if not isinstance(other, APRSWeatherReport):
            return NotImplemented
        return self.fields() == other.fields()

    def __repr__(self): # pragma: no cover
        return '%s(%s)' % (
                self.__class__.__name__,
                ', '.join(
                    '%s=%r' % item for item in sorted(self.fields().items())
                )
        )


def _filler(width):
    return r'\.{%d}| {%d}' % (width, width)


def _number(value):
    """
    Decode a token's digits, None for filler.
    """
    if (not value.strip()) or (set(value) == {'.'}):
        return None
    return int(value)


def _scaled(scale):
    def _convert(value):
        value = _number(value)
        if value is None:
            return None
        return value / scale
    return _convert


def _humidity(value):
    value = _number(value)
    if value == 0:
        # "00" means 100%
        return 100
    return value


# Wind direction and speed as found at the start of a weather comment
WIND_RE = re.compile(r'(\d{3}|%s)/(\d{3}|%s)' % (_filler(3), _filler(3)))
# Wind direction and speed of a positionless report
POSITIONLESS_WIND_RE = re.compile(
        r'c(\d{3}|%s)s(\d{3}|%s)' % (_filler(3), _filler(3))
)

# The remaining observations, scanned independently
WEATHER_FIELDS = (
        ('wind_gust',
            re.compile(r'g(\d{3}|%s)' % _filler(3)), _number),
        ('temperature',
            re.compile(r't(-\d{1,2}|\d{3}|%s)' % _filler(3)), _number),
        ('rain_1h',
            re.compile(r'r(\d{3}|%s)' % _filler(3)), _scaled(100.0)),
        ('rain_24h',
            re.compile(r'p(\d{3}|%s)' % _filler(3)), _scaled(100.0)),
        ('rain_since_midnight',
            re.compile(r'P(\d{3}|%s)' % _filler(3)), _scaled(100.0)),
        ('humidity',
            re.compile(r'h(\d{2}|%s)' % _filler(2)), _humidity),
        ('pressure',
            re.compile(r'b(\d{5}|%s)' % _filler(5)), _scaled(10.0)),
        ('luminosity',
            re.compile(r'[lL](\d{3}|%s)' % _filler(3)), _number),
        ('snow',
            re.compile(r's(\d{3}|%s)' % _filler(3)), _scaled(10.0)),
)

# Tokens that mark a comment as a weather report.  A bare ddd/sss is left
# out: on its own it is read as course/speed.
WEATHER_DETECT_RE = (
        re.compile(r't(-\d{1,2}|\d{3})'),
        re.compile(r'h\d{2}'),
        re.compile(r'b\d{5}'),
        re.compile(r'r\d{3}'),
        re.compile(r'g\d{3}'),
        re.compile(r'p\d{3}'),
        re.compile(r'P\d{3}'),
)

# Weather report timestamp embedded in a comment: DDHHMM + suffix
COMMENT_TIMESTAMP_RE = re.compile(r'\d{6}[hzc/]')


def is_weather_comment(comment):
    """
    Return True if the comment carries weather observations.
    """
    return any(pattern.search(comment) for pattern in WEATHER_DETECT_RE)


def _remove(text, match):
    return text[:match.start()] + text[match.end():]


def decode_weather(text, positionless=False):
    """
    Decode the weather tokens in `text`.  Returns the report and the text
    that was not consumed by any token.
    """
    values = {}

    if positionless:
        match = POSITIONLESS_WIND_RE.search(text)
    else:
        match = None

    if match is None:
        match = WIND_RE.search(text)

    if match is not None:
        values['wind_direction'] = _number(match.group(1))
        values['wind_speed'] = _number(match.group(2))
        text = _remove(text, match)

    if not positionless:
        match = COMMENT_TIMESTAMP_RE.search(text)
        if match is not None:
            try:
                values['timestamp'] = decode_datetime(match.group(0))
            except ValueError:
                pass
            else:
                text = _remove(text, match)

    for (name, pattern, convert) in WEATHER_FIELDS:
        match = pattern.search(text)
        if match is None:
            continue
        values[name] = convert(match.group(1))
        text = _remove(text, match)

    return (APRSWeatherReport(**values), text)


class APRSWeatherPayload(APRSPayload):
    """
    A positionless weather report.
    """
    FIELDS = APRSPayload.FIELDS + ('weather', 'timestamp', 'comment')

    @classmethod
    def decode(cls, data, log):
        timestamp = None
        if len(data) >= MDHMTimestamp.TS_LENGTH:
            try:
                timestamp = decode_datetime(data[0:MDHMTimestamp.TS_LENGTH])
                data = data[MDHMTimestamp.TS_LENGTH:]
            except ValueError:
                log.debug('Weather report has no timestamp: %r', data)

        (weather, remainder) = decode_weather(data, positionless=True)
        weather.timestamp = timestamp
        return cls(weather, timestamp, remainder.strip())

    def __init__(self, weather, timestamp=None, comment=''):
        super(APRSWeatherPayload, self).__init__(APRSDataType.WEATHER)
        self.weather = weather
        self.timestamp = timestamp
        self.comment = comment
